"""Search configuration — политика коэффициентов и ограничения перебора."""

from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional


class CoefficientPolicy(str, Enum):
    """Какие целые коэффициенты считаются признаком подлинного подмножества.

    ANY_INTEGER: все коэффициенты — целые числа (любого знака)
    STRICTLY_POSITIVE: все коэффициенты — целые и строго положительные
    """
    ANY_INTEGER = "any-integer"
    STRICTLY_POSITIVE = "strictly-positive"


DEFAULT_COEFFICIENT_POLICY: Final[CoefficientPolicy] = CoefficientPolicy.ANY_INTEGER


@dataclass(frozen=True)
class SearchConfig:
    """Конфигурация поиска подмножества shares.

    - coefficient_policy: правило валидации коэффициентов
    - max_workers: None или 1 — последовательный перебор; >1 — ProcessPoolExecutor
    - chunk_size: размер пакета подмножеств, передаваемого одному worker
    - max_combinations: верхняя граница C(n, k); превышение → отказ до перебора
    """
    coefficient_policy: CoefficientPolicy = DEFAULT_COEFFICIENT_POLICY
    max_workers: Optional[int] = None
    chunk_size: int = 16
    max_combinations: Optional[int] = None

    def __post_init__(self):
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")
        if self.max_combinations is not None and self.max_combinations < 1:
            raise ValueError(f"max_combinations must be >= 1, got {self.max_combinations}")

    @property
    def is_parallel(self) -> bool:
        return self.max_workers is not None and self.max_workers > 1
