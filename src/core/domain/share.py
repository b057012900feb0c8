"""
Share — Модели shares и запроса на верификацию

Immutable Pydantic модели:
- ShareRecord: сырая запись (индекс, основание, строка цифр) до декодирования
- SharePoint: декодированная точка (x = индекс, y = значение) на полиноме
- ShareRequest: один запрос на верификацию (n, k, записи)

Соответствует контракту share_request (src/core/contracts/schema).
"""

from typing import List, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.domain.base_codec import MAX_BASE, MIN_BASE, decode_digits


# =============================================================================
# SHARE POINT
# =============================================================================


class SharePoint(BaseModel):
    """
    Точка (index, value) одного участника на полиноме секрета.

    value — целое произвольной точности, уже декодированное из исходного основания.
    """

    index: int = Field(..., ge=1, description="x-координата (номер share)")
    value: int = Field(..., description="y-координата (значение share)")

    model_config = {"frozen": True}


# =============================================================================
# SHARE RECORD
# =============================================================================


class ShareRecord(BaseModel):
    """
    Сырая запись share из входного документа.

    base принимается как int или как строка цифр ("10"), что соответствует
    обоим вариантам входного формата.
    """

    index: int = Field(..., ge=1, description="Номер share")
    base: int = Field(..., ge=MIN_BASE, le=MAX_BASE, description="Основание системы счисления")
    digits: str = Field(..., min_length=1, description="Значение в системе base")

    model_config = {"frozen": True}

    @field_validator("base", mode="before")
    @classmethod
    def parse_base(cls, v):
        """Строковое основание: пробелы по краям отбрасываются"""
        if isinstance(v, str):
            return v.strip()
        return v

    def decode(self) -> SharePoint:
        """
        Декодирование записи в точку.

        Raises:
            InvalidDigit: Если digits содержит символ вне основания base
        """
        return SharePoint(index=self.index, value=decode_digits(self.digits, self.base))


# =============================================================================
# SHARE REQUEST
# =============================================================================


class ShareRequest(BaseModel):
    """
    Запрос на восстановление секрета.

    n ограничивает разбор (учитываются только записи с индексами 1..n),
    k — порог (степень полинома k-1). Записи упорядочены по индексу,
    отсутствующие индексы допустимы.
    """

    n: int = Field(..., ge=1, description="Ожидаемое количество shares")
    k: int = Field(..., ge=1, description="Порог восстановления")
    records: Tuple[ShareRecord, ...] = Field(default=(), description="Записи shares")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_record_indices(self) -> "ShareRequest":
        """Индексы записей строго возрастают и не превышают n"""
        previous = 0
        for record in self.records:
            if record.index <= previous:
                raise ValueError(
                    f"record indices must be strictly increasing, got {record.index} after {previous}"
                )
            if record.index > self.n:
                raise ValueError(f"record index {record.index} exceeds n={self.n}")
            previous = record.index
        return self

    def decode_points(self) -> List[SharePoint]:
        """
        Декодирование всех записей в порядке индексов.

        Raises:
            InvalidDigit: На первой записи с некорректной цифрой
        """
        return [record.decode() for record in self.records]
