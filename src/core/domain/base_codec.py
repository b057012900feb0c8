"""
Base Codec — декодирование строк цифр в произвольной системе счисления

Алфавит цифр: 0-9, затем a-z (регистр не важен) → значения 0..35.
Допустимые основания: 2..36. Пробельные символы внутри строки игнорируются.

Любой символ вне алфавита или со значением >= base → InvalidDigit.
"""

from typing import Final

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

MIN_BASE: Final[int] = 2
MAX_BASE: Final[int] = 36


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidDigit(ValueError):
    """Символ не является цифрой заданного основания."""

    def __init__(self, digits: str, base: int, position: int | None = None):
        if position is None:
            message = f"no digits to decode in base {base}: {digits!r}"
        else:
            message = (
                f"invalid digit {digits[position]!r} at position {position} "
                f"for base {base} in {digits!r}"
            )
        super().__init__(message)
        self.digits = digits
        self.base = base
        self.position = position


# =============================================================================
# DECODING
# =============================================================================


def digit_value(ch: str) -> int:
    """
    Значение одной цифры в алфавите 0-9a-z.

    Returns:
        0..35, либо -1 если символ вне алфавита
    """
    if "0" <= ch <= "9":
        return ord(ch) - ord("0")
    if "a" <= ch <= "z":
        return ord(ch) - ord("a") + 10
    if "A" <= ch <= "Z":
        return ord(ch) - ord("A") + 10
    return -1


def validate_base(base: int) -> None:
    """
    Raises:
        ValueError: Если base вне диапазона [MIN_BASE, MAX_BASE]
    """
    if not MIN_BASE <= base <= MAX_BASE:
        raise ValueError(f"base must be in [{MIN_BASE}, {MAX_BASE}], got {base}")


def decode_digits(digits: str, base: int) -> int:
    """
    Декодирование строки цифр в целое произвольной точности.

    Args:
        digits: Строка цифр (например, 'ff' или '1 0 1')
        base: Основание системы счисления (2..36)

    Returns:
        Неотрицательное целое

    Raises:
        ValueError: Если base вне диапазона
        InvalidDigit: Если символ вне алфавита, цифра >= base или строка пустая

    Examples:
        >>> decode_digits("111", 2)
        7
        >>> decode_digits("FF", 16)
        255
    """
    validate_base(base)

    value = 0
    seen_digit = False
    for position, ch in enumerate(digits):
        if ch.isspace():
            continue
        d = digit_value(ch)
        if d < 0 or d >= base:
            raise InvalidDigit(digits, base, position)
        value = value * base + d
        seen_digit = True

    if not seen_digit:
        raise InvalidDigit(digits, base)
    return value
