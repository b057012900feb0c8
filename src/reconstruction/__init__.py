"""Reconstruction — восстановление секрета по надмножеству shares.

- Перебор подмножеств размера k в лексикографическом порядке
- Точная интерполяция (Vandermonde + Gauss-Jordan над ExactFraction)
- Политика коэффициентов как параметр конфигурации
- Пакетная обработка документов с запросами
"""

from .batch import MalformedRequest, process_batch, process_request, split_request_documents
from .config import CoefficientPolicy, SearchConfig
from .search import (
    ReconstructionOutcome,
    ReconstructionResult,
    SubsetAttempt,
    SubsetSearchEngine,
    evaluate_subset,
    find_secret,
)

__all__ = [
    "CoefficientPolicy",
    "SearchConfig",
    "ReconstructionOutcome",
    "ReconstructionResult",
    "SubsetAttempt",
    "SubsetSearchEngine",
    "evaluate_subset",
    "find_secret",
    "MalformedRequest",
    "process_batch",
    "process_request",
    "split_request_documents",
]
