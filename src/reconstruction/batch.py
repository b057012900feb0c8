"""Batch processing — документ с запросами → независимые результаты.

Входной документ (JSON):
- один объект-запрос
- массив объектов-запросов
- несколько объектов-запросов подряд в одном потоке

Каждый запрос обрабатывается независимо: ошибка одного запроса
(нарушение контракта, некорректная цифра) не прерывает обработку остальных.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Union

from jsonschema.exceptions import best_match
from pydantic import ValidationError as ModelValidationError

from src.core.contracts import ShareRecordValidator, ShareRequestValidator, describe_validation_error
from src.core.domain.base_codec import InvalidDigit
from src.core.domain.share import ShareRecord, ShareRequest
from src.reconstruction.search import (
    ReconstructionOutcome,
    ReconstructionResult,
    SubsetSearchEngine,
)

logger = logging.getLogger(__name__)


class MalformedRequest(ValueError):
    """Запрос (или весь документ) не соответствует контракту share_request."""
    pass


# =============================================================================
# РАЗБОР ДОКУМЕНТА
# =============================================================================


def split_request_documents(text: str) -> List[Union[Any, MalformedRequest]]:
    """Разбиение текста на JSON значения верхнего уровня.

    Массив верхнего уровня раскрывается в элементы. Синтаксическая ошибка
    JSON завершает разбор: уже прочитанные запросы сохраняются, в конец
    списка добавляется MalformedRequest.
    """
    decoder = json.JSONDecoder()
    items: List[Union[Any, MalformedRequest]] = []
    position = 0
    length = len(text)

    while True:
        while position < length and text[position].isspace():
            position += 1
        if position >= length:
            return items
        try:
            value, position = decoder.raw_decode(text, position)
        except ValueError as e:
            # JSONDecodeError, а также числа длиннее лимита int интерпретатора
            items.append(MalformedRequest(f"invalid JSON: {e}"))
            return items
        if isinstance(value, list):
            items.extend(value)
        else:
            items.append(value)


def _share_index(key: str, n: int) -> Optional[int]:
    """Индекс share для канонического десятичного ключа в пределах 1..n, иначе None."""
    # "01" не считается ключом "1"; длина проверяется до int(), чтобы не разбирать огромные ключи
    if not (key.isascii() and key.isdigit()) or key.startswith("0") or len(key) > len(str(n)):
        return None
    index = int(key)
    return index if index <= n else None


def parse_share_request(
    document: Any,
    validator: Optional[ShareRequestValidator] = None,
    record_validator: Optional[ShareRecordValidator] = None,
) -> ShareRequest:
    """Преобразование JSON объекта в ShareRequest.

    Учитываются только записи с ключами "1".."n" (n из keys); пропущенные
    индексы допустимы, остальные ключи не проверяются и игнорируются.

    Raises:
        MalformedRequest: нарушение JSON Schema или ограничений модели
    """
    if not isinstance(document, dict):
        raise MalformedRequest(f"request must be a JSON object, got {type(document).__name__}")

    validator = validator or ShareRequestValidator()
    error = best_match(validator.iter_errors(document))
    if error is not None:
        raise MalformedRequest(describe_validation_error(error))

    keys: Dict[str, Any] = document["keys"]
    n, k = keys["n"], keys["k"]

    indexed = []
    for key in document:
        index = _share_index(key, n)
        if index is not None:
            indexed.append((index, key))
    indexed.sort()

    record_validator = record_validator or ShareRecordValidator()
    for _, key in indexed:
        error = best_match(record_validator.iter_errors(document[key]))
        if error is not None:
            raise MalformedRequest(describe_validation_error(error, root=key))

    try:
        records = tuple(
            ShareRecord(index=index, base=document[key]["base"], digits=document[key]["value"])
            for index, key in indexed
        )
        return ShareRequest(n=n, k=k, records=records)
    except ModelValidationError as e:
        raise MalformedRequest(str(e)) from e


# =============================================================================
# ОБРАБОТКА
# =============================================================================


def process_request(
    document: Any,
    engine: SubsetSearchEngine,
    validator: Optional[ShareRequestValidator] = None,
    record_validator: Optional[ShareRecordValidator] = None,
) -> ReconstructionResult:
    """Полный цикл одного запроса: контракт → декодирование → поиск."""
    if isinstance(document, MalformedRequest):
        return ReconstructionResult.failure(ReconstructionOutcome.MALFORMED_REQUEST, str(document))

    try:
        request = parse_share_request(document, validator, record_validator)
    except MalformedRequest as e:
        return ReconstructionResult.failure(ReconstructionOutcome.MALFORMED_REQUEST, str(e))

    try:
        points = request.decode_points()
    except InvalidDigit as e:
        return ReconstructionResult.failure(ReconstructionOutcome.INVALID_DIGIT, str(e))

    return engine.find_secret(points, request.k)


def process_batch(
    text: str,
    engine: Optional[SubsetSearchEngine] = None,
) -> List[ReconstructionResult]:
    """Обработка всех запросов документа в порядке следования."""
    engine = engine or SubsetSearchEngine()
    validator = ShareRequestValidator()
    record_validator = ShareRecordValidator()

    results = []
    for position, document in enumerate(split_request_documents(text)):
        result = process_request(document, engine, validator, record_validator)
        if not result.found:
            logger.warning("Request #%d failed: %s (%s)", position, result.outcome.value, result.details)
        results.append(result)
    return results
