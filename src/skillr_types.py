"""
Shared type aliases for array code and simulation bookkeeping.
"""

from __future__ import annotations

from typing import NewType, TypeAlias

import jax

# Canonical array type used by the vectorized engine.
Array: TypeAlias = jax.Array
# PRNGKey is a JAX uint32[2] array by convention.
PRNGKey: TypeAlias = jax.Array

# Strongly-typed integer wrappers for simulation counters/IDs.
Round = NewType("Round", int)
PlayerId = NewType("PlayerId", int)
