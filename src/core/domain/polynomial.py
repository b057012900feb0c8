"""
Polynomial — вычисление полинома в точке (схема Горнера)

Используется для проверки оставшихся shares против принятого полинома
и для построения тестовых наборов shares.
"""

from typing import Sequence

from src.core.math.exact_fraction import ExactFraction


def evaluate_polynomial(coefficients: Sequence[int], x: int) -> int:
    """
    Значение полинома с целыми коэффициентами в точке x.

    Args:
        coefficients: Коэффициенты по возрастанию степени (индекс 0 — свободный член)
        x: Точка вычисления

    Examples:
        >>> evaluate_polynomial([1, 1, 1], 2)
        7
    """
    result = 0
    for c in reversed(coefficients):
        result = result * x + c
    return result


def evaluate_exact(coefficients: Sequence[ExactFraction], x: int) -> ExactFraction:
    """Значение полинома с коэффициентами ExactFraction в целой точке x."""
    result = ExactFraction.from_int(0)
    for c in reversed(coefficients):
        result = result * x + c
    return result
