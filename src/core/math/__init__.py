"""
Core math modules

Точная рациональная арифметика и алгоритмы линейной алгебры без потери точности.
"""

# Exact Fraction
from src.core.math.exact_fraction import (
    ONE,
    ZERO,
    DivisionByZero,
    ExactFraction,
    gcd_abs,
    int_to_decimal,
)

# Linear System
from src.core.math.linear_system import (
    AugmentedMatrix,
    CandidateSolution,
    SingularSubset,
    build_vandermonde_system,
    interpolate,
    solve_gauss_jordan,
)

# Combinations
from src.core.math.combinations import (
    IndexCombination,
    combination_count,
    iter_combinations,
)

__all__ = [
    # Exact Fraction — Constants
    "ONE",
    "ZERO",
    # Exact Fraction — Exceptions
    "DivisionByZero",
    # Exact Fraction — Types
    "ExactFraction",
    # Exact Fraction — Functions
    "gcd_abs",
    "int_to_decimal",
    # Linear System — Types
    "AugmentedMatrix",
    "CandidateSolution",
    # Linear System — Exceptions
    "SingularSubset",
    # Linear System — Functions
    "build_vandermonde_system",
    "interpolate",
    "solve_gauss_jordan",
    # Combinations
    "IndexCombination",
    "combination_count",
    "iter_combinations",
]
