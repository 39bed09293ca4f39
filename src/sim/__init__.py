"""
Synthetic league simulation.
"""

from sim.league import LeagueResult, MatchRecord, simulate_league

__all__ = ["LeagueResult", "MatchRecord", "simulate_league"]
