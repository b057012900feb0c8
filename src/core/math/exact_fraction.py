"""
Exact Fraction — Точная рациональная арифметика произвольной точности

Модуль обеспечивает точные вычисления над рациональными числами:
- Числитель и знаменатель — Python int (неограниченная точность)
- Автоматическое сокращение после каждой операции
- Знак всегда хранится в числителе, знаменатель строго положительный
- Деление на ноль → DivisionByZero (восстановимая ошибка, не crash)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. gcd(|numerator|, denominator) == 1 для любого экземпляра
2. denominator > 0 для любого экземпляра
3. Никакой float-арифметики: потеря точности невозможна
4. Экземпляры immutable, каждая операция создаёт новый экземпляр
"""

from dataclasses import dataclass
from math import gcd
from typing import Final, Union

# =============================================================================
# EXCEPTIONS
# =============================================================================


class DivisionByZero(ZeroDivisionError):
    """
    Нулевой знаменатель при создании дроби или деление на дробь-ноль.

    Нарушение внутреннего инварианта движка. Наследуется от ZeroDivisionError,
    поэтому перехватывается как обычная ArithmeticError и не портит состояние.
    """

    pass


# =============================================================================
# HELPERS
# =============================================================================


def gcd_abs(a: int, b: int) -> int:
    """
    НОД по абсолютным значениям.

    gcd(0, d) = |d|, поэтому нулевой числитель сокращает знаменатель до 1.

    Examples:
        >>> gcd_abs(-6, 4)
        2
        >>> gcd_abs(0, 7)
        7
    """
    return gcd(abs(a), abs(b))


# Порог прямого str(int): заметно ниже лимита интерпретатора (4300 цифр)
_DIRECT_DECIMAL_LIMIT: Final[int] = 10**1000


def int_to_decimal(value: int) -> str:
    """
    Десятичная запись целого любой длины.

    str(int) отказывается работать с числами длиннее sys.get_int_max_str_digits()
    цифр, поэтому длинные числа делятся пополам по степени 10 и
    переводятся по частям.

    Examples:
        >>> int_to_decimal(-1205)
        '-1205'
        >>> len(int_to_decimal(10**5000))
        5001
    """
    if value < 0:
        return "-" + int_to_decimal(-value)
    if value < _DIRECT_DECIMAL_LIMIT:
        return str(value)

    # bit_length * 0.3 не превышает числа десятичных цифр
    half = value.bit_length() * 3 // 20
    high, low = divmod(value, 10**half)
    return int_to_decimal(high) + int_to_decimal(low).zfill(half)


# =============================================================================
# EXACT FRACTION
# =============================================================================

Operand = Union["ExactFraction", int]


@dataclass(frozen=True, init=False)
class ExactFraction:
    """
    Несократимая дробь numerator / denominator.

    Конструктор нормализует знак и сокращает дробь, поэтому два равных
    рациональных числа всегда имеют одинаковое представление (и одинаковый hash).

    Examples:
        >>> ExactFraction(6, -4)
        ExactFraction(-3, 2)
        >>> ExactFraction(0, 5).denominator
        1
    """

    numerator: int
    denominator: int

    def __init__(self, numerator: int = 0, denominator: int = 1):
        if denominator == 0:
            raise DivisionByZero(f"zero denominator for numerator {int_to_decimal(numerator)}")

        if denominator < 0:
            numerator = -numerator
            denominator = -denominator

        divisor = gcd_abs(numerator, denominator)
        object.__setattr__(self, "numerator", numerator // divisor)
        object.__setattr__(self, "denominator", denominator // divisor)

    @classmethod
    def from_int(cls, value: int) -> "ExactFraction":
        """Целое число как дробь value / 1."""
        return cls(value, 1)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, other: "ExactFraction") -> "ExactFraction":
        return ExactFraction(
            self.numerator * other.denominator + other.numerator * self.denominator,
            self.denominator * other.denominator,
        )

    def subtract(self, other: "ExactFraction") -> "ExactFraction":
        return ExactFraction(
            self.numerator * other.denominator - other.numerator * self.denominator,
            self.denominator * other.denominator,
        )

    def multiply(self, other: "ExactFraction") -> "ExactFraction":
        return ExactFraction(
            self.numerator * other.numerator,
            self.denominator * other.denominator,
        )

    def divide(self, other: "ExactFraction") -> "ExactFraction":
        """
        Точное деление.

        Raises:
            DivisionByZero: Если other равен нулю
        """
        if other.numerator == 0:
            raise DivisionByZero(f"division of {self} by zero fraction")
        return ExactFraction(
            self.numerator * other.denominator,
            self.denominator * other.numerator,
        )

    def negate(self) -> "ExactFraction":
        return ExactFraction(-self.numerator, self.denominator)

    # -------------------------------------------------------------------------
    # Предикаты
    # -------------------------------------------------------------------------

    def is_integer(self) -> bool:
        """True если дробь — целое число (знаменатель равен 1 после сокращения)."""
        return self.denominator == 1

    def is_zero(self) -> bool:
        return self.numerator == 0

    def is_positive(self) -> bool:
        return self.numerator > 0

    def as_integer(self) -> int:
        """
        Целое значение дроби.

        Raises:
            ValueError: Если дробь не целая
        """
        if not self.is_integer():
            raise ValueError(f"{self} is not an integer")
        return self.numerator

    # -------------------------------------------------------------------------
    # Python operator protocol
    # -------------------------------------------------------------------------

    @staticmethod
    def _coerce(value: Operand) -> "ExactFraction":
        if isinstance(value, ExactFraction):
            return value
        # bool — подкласс int, но как операнд дроби не имеет смысла
        if isinstance(value, int) and not isinstance(value, bool):
            return ExactFraction(value, 1)
        raise TypeError(f"unsupported operand type: {type(value).__name__}")

    def __add__(self, other: Operand) -> "ExactFraction":
        return self.add(self._coerce(other))

    def __radd__(self, other: Operand) -> "ExactFraction":
        return self._coerce(other).add(self)

    def __sub__(self, other: Operand) -> "ExactFraction":
        return self.subtract(self._coerce(other))

    def __rsub__(self, other: Operand) -> "ExactFraction":
        return self._coerce(other).subtract(self)

    def __mul__(self, other: Operand) -> "ExactFraction":
        return self.multiply(self._coerce(other))

    def __rmul__(self, other: Operand) -> "ExactFraction":
        return self._coerce(other).multiply(self)

    def __truediv__(self, other: Operand) -> "ExactFraction":
        return self.divide(self._coerce(other))

    def __rtruediv__(self, other: Operand) -> "ExactFraction":
        return self._coerce(other).divide(self)

    def __neg__(self) -> "ExactFraction":
        return self.negate()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ExactFraction):
            return (
                self.numerator == other.numerator
                and self.denominator == other.denominator
            )
        if isinstance(other, int) and not isinstance(other, bool):
            return self.denominator == 1 and self.numerator == other
        return NotImplemented

    def __hash__(self) -> int:
        # Целая дробь равна int, значит и hash должен совпадать
        if self.denominator == 1:
            return hash(self.numerator)
        return hash((self.numerator, self.denominator))

    def __str__(self) -> str:
        if self.denominator == 1:
            return int_to_decimal(self.numerator)
        return f"{int_to_decimal(self.numerator)}/{int_to_decimal(self.denominator)}"

    def __repr__(self) -> str:
        return f"ExactFraction({int_to_decimal(self.numerator)}, {int_to_decimal(self.denominator)})"


ZERO = ExactFraction(0, 1)
ONE = ExactFraction(1, 1)
