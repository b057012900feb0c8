"""Formatting — представление результатов для вывода.

Текстовый режим: одна строка на запрос — десятичный секрет или ERROR.
JSON Lines режим: один JSON объект на запрос с диагностикой.
"""

import json
from enum import Enum
from typing import Any, Dict, Iterable, List

from src.core.math.exact_fraction import int_to_decimal
from src.reconstruction.search import ReconstructionResult

ERROR_MARKER = "ERROR"


class OutputFormat(str, Enum):
    TEXT = "text"
    JSONL = "jsonl"


def format_text(result: ReconstructionResult) -> str:
    if result.found:
        return int_to_decimal(result.secret)
    return ERROR_MARKER


def result_to_dict(result: ReconstructionResult) -> Dict[str, Any]:
    """Сериализуемое представление результата.

    Секрет и коэффициенты — десятичные строки: значения произвольной
    точности не должны теряться в JSON-потребителях с float-числами
    (и не упираться в лимит длины str(int)).
    """
    return {
        "outcome": result.outcome.value,
        "secret": int_to_decimal(result.secret) if result.found else None,
        "coefficients": [int_to_decimal(c) for c in result.coefficients],
        "selected_indices": list(result.selected_indices),
        "subsets_tried": result.subsets_tried,
        "consistent_indices": list(result.consistent_indices),
        "inconsistent_indices": list(result.inconsistent_indices),
        "error": None if result.found else result.details,
    }


def format_jsonl(result: ReconstructionResult) -> str:
    return json.dumps(result_to_dict(result), sort_keys=True)


def format_results(results: Iterable[ReconstructionResult], output_format: OutputFormat) -> List[str]:
    formatter = format_text if output_format == OutputFormat.TEXT else format_jsonl
    return [formatter(r) for r in results]
