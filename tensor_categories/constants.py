# tensor_categories/constants.py
"""
Tensor Categories Constants

This module defines the tunables used throughout the package:

LAYER 1: Exact Arithmetic
- ZERO_TEST_SIMPLIFY: run sympy.simplify when expansion alone cannot
  decide whether an entry vanishes

LAYER 2: Centralizer Computations
- PARALLEL: distribute S-matrix entries and Hom candidates over threads
- MAX_WORKERS: thread count (None = CPU count)
- DECOMPOSITION_ATTEMPTS: random endomorphisms tried before giving up on
  splitting an object

LAYER 3: Symbolic Solving
- WITNESS_SET_BOUND: random slices tried before witness_set fails
- RANDOM_COEFFICIENT_RANGE: range of random integer coefficients
"""
from dataclasses import dataclass
from typing import Optional, Tuple


# =============================================================================
# LAYER 1: Exact Arithmetic
# =============================================================================

ZERO_TEST_SIMPLIFY = True


# =============================================================================
# LAYER 2: Centralizer Computations
# =============================================================================

PARALLEL = True
MAX_WORKERS = None            # None = os.cpu_count()
DECOMPOSITION_ATTEMPTS = 20


# =============================================================================
# LAYER 3: Symbolic Solving
# =============================================================================

WITNESS_SET_BOUND = 100
RANDOM_COEFFICIENT_RANGE = (-5, 5)

assert RANDOM_COEFFICIENT_RANGE[0] < RANDOM_COEFFICIENT_RANGE[1], \
    "random coefficient range must be non-empty"


@dataclass(frozen=True)
class ComputationConfig:
    """Configuration for centralizer and solver computations."""
    # Parallel processing
    parallel: bool = PARALLEL
    max_workers: Optional[int] = MAX_WORKERS

    # Randomized steps
    decomposition_attempts: int = DECOMPOSITION_ATTEMPTS
    witness_set_bound: int = WITNESS_SET_BOUND
    random_coefficient_range: Tuple[int, int] = RANDOM_COEFFICIENT_RANGE


DEFAULT_CONFIG = ComputationConfig()
