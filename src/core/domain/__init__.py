"""
Domain models and value objects.

Contains share records, decoded share points, verification requests,
base decoding and polynomial evaluation.
"""

from src.core.domain.base_codec import (
    MAX_BASE,
    MIN_BASE,
    InvalidDigit,
    decode_digits,
    digit_value,
    validate_base,
)
from src.core.domain.polynomial import evaluate_exact, evaluate_polynomial
from src.core.domain.share import SharePoint, ShareRecord, ShareRequest

__all__ = [
    # Base codec
    "MIN_BASE",
    "MAX_BASE",
    "InvalidDigit",
    "decode_digits",
    "digit_value",
    "validate_base",
    # Polynomial
    "evaluate_polynomial",
    "evaluate_exact",
    # Share models
    "SharePoint",
    "ShareRecord",
    "ShareRequest",
]
