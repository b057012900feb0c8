"""
Contract Validation Module

Модуль для валидации входных JSON контрактов.
"""

from .validators import (
    ContractValidator,
    SchemaLoader,
    ShareRecordValidator,
    ShareRequestValidator,
    describe_validation_error,
    validate_share_record,
    validate_share_request,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ShareRequestValidator",
    "ShareRecordValidator",
    # Functions
    "validate_share_request",
    "validate_share_record",
    "describe_validation_error",
]
