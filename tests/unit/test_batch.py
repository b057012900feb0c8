"""Тесты для пакетной обработки и форматирования

Покрытие:
- Разбиение документа: объект, массив, поток объектов, битый JSON
- Разбор запроса: ключи 1..n, пропуски, нарушения контракта
- Независимость запросов в пакете
- INVALID_DIGIT / MALFORMED_REQUEST / INSUFFICIENT_POINTS исходы
- Текстовый и JSON Lines вывод
"""

import json

import pytest

from src.core.math.exact_fraction import int_to_decimal
from src.reconstruction.batch import (
    MalformedRequest,
    parse_share_request,
    process_batch,
    process_request,
    split_request_documents,
)
from src.reconstruction.config import CoefficientPolicy, SearchConfig
from src.reconstruction.formatting import (
    ERROR_MARKER,
    OutputFormat,
    format_results,
    result_to_dict,
)
from src.reconstruction.search import ReconstructionOutcome, SubsetSearchEngine


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def quadratic_request():
    """p(x) = x^2 + x + 1 (share 4 подделан: 21 → 22), значения в разных основаниях."""
    return {
        "keys": {"n": 4, "k": 3},
        "1": {"base": "10", "value": "3"},
        "2": {"base": "2", "value": "111"},
        "3": {"base": "16", "value": "d"},
        "4": {"base": 10, "value": "22"},
    }


@pytest.fixture
def forged_request():
    """p(x) = 7 + 3x + 2x^2, share 1 подделан."""
    return {
        "keys": {"n": 5, "k": 3},
        "1": {"base": "10", "value": "13"},
        "2": {"base": "10", "value": "21"},
        "3": {"base": "10", "value": "34"},
        "4": {"base": "10", "value": "51"},
        "5": {"base": "10", "value": "72"},
    }


@pytest.fixture
def engine():
    return SubsetSearchEngine()


# =============================================================================
# РАЗБИЕНИЕ ДОКУМЕНТА
# =============================================================================


class TestSplitRequestDocuments:
    """Тесты для split_request_documents"""

    def test_single_object(self) -> None:
        assert split_request_documents('{"a": 1}') == [{"a": 1}]

    def test_array(self) -> None:
        assert split_request_documents('[{"a": 1}, {"b": 2}]') == [{"a": 1}, {"b": 2}]

    def test_concatenated_objects(self) -> None:
        text = '{"a": 1}\n{"b": 2}  {"c": 3}\n'
        assert split_request_documents(text) == [{"a": 1}, {"b": 2}, {"c": 3}]

    def test_empty(self) -> None:
        assert split_request_documents("  \n ") == []

    def test_broken_tail_keeps_prefix(self) -> None:
        items = split_request_documents('{"a": 1} {"b": ')
        assert items[0] == {"a": 1}
        assert isinstance(items[1], MalformedRequest)
        assert len(items) == 2


# =============================================================================
# РАЗБОР ЗАПРОСА
# =============================================================================


class TestParseShareRequest:
    """Тесты для parse_share_request"""

    def test_records_decoded_in_index_order(self, quadratic_request) -> None:
        request = parse_share_request(quadratic_request)
        assert (request.n, request.k) == (4, 3)
        assert [(p.index, p.value) for p in request.decode_points()] == [
            (1, 3), (2, 7), (3, 13), (4, 22),
        ]

    def test_keys_beyond_n_ignored(self, quadratic_request) -> None:
        quadratic_request["9"] = {"base": "10", "value": "1"}
        request = parse_share_request(quadratic_request)
        assert [r.index for r in request.records] == [1, 2, 3, 4]

    def test_missing_index_skipped(self, quadratic_request) -> None:
        del quadratic_request["2"]
        assert [r.index for r in parse_share_request(quadratic_request).records] == [1, 3, 4]

    def test_non_canonical_key_ignored(self, quadratic_request) -> None:
        quadratic_request["01"] = {"base": "10", "value": "999"}
        assert parse_share_request(quadratic_request).records[0].digits == "3"

    def test_keys_beyond_n_not_validated(self, quadratic_request) -> None:
        """Запись вне 1..n может иметь любую форму"""
        quadratic_request["9"] = {"note": "not a share"}
        request = parse_share_request(quadratic_request)
        assert [r.index for r in request.records] == [1, 2, 3, 4]

    def test_huge_numeric_key_ignored(self, quadratic_request) -> None:
        quadratic_request["1" * 5000] = "x"
        assert len(parse_share_request(quadratic_request).records) == 4

    def test_record_violation_reports_key(self, quadratic_request) -> None:
        del quadratic_request["2"]["value"]
        with pytest.raises(MalformedRequest, match="^2: 'value' is a required property"):
            parse_share_request(quadratic_request)

    def test_record_base_out_of_range(self, quadratic_request) -> None:
        quadratic_request["3"]["base"] = 99
        with pytest.raises(MalformedRequest, match="^3/base:"):
            parse_share_request(quadratic_request)

    def test_not_an_object(self) -> None:
        with pytest.raises(MalformedRequest, match="must be a JSON object"):
            parse_share_request([1, 2])

    def test_schema_violation(self) -> None:
        with pytest.raises(MalformedRequest, match="keys"):
            parse_share_request({"1": {"base": "10", "value": "3"}})

    def test_model_violation(self, quadratic_request) -> None:
        """Строковое основание "40" проходит схему, но не модель"""
        quadratic_request["1"]["base"] = "40"
        with pytest.raises(MalformedRequest):
            parse_share_request(quadratic_request)


# =============================================================================
# ОБРАБОТКА ЗАПРОСОВ
# =============================================================================


class TestProcessRequest:
    """Тесты для process_request"""

    def test_secret_found(self, engine, quadratic_request) -> None:
        result = process_request(quadratic_request, engine)
        assert result.secret == 1
        assert result.inconsistent_indices == (4,)

    def test_forged_share(self, engine, forged_request) -> None:
        result = process_request(forged_request, engine)
        assert result.secret == 7
        assert result.inconsistent_indices == (1,)

    def test_invalid_digit(self, engine, quadratic_request) -> None:
        quadratic_request["2"]["value"] = "121"
        result = process_request(quadratic_request, engine)
        assert result.outcome == ReconstructionOutcome.INVALID_DIGIT
        assert "invalid digit '2'" in result.details

    def test_insufficient_points(self, engine) -> None:
        document = {"keys": {"n": 4, "k": 4}, "1": {"base": "10", "value": "1"}, "3": {"base": "10", "value": "2"}}
        result = process_request(document, engine)
        assert result.outcome == ReconstructionOutcome.INSUFFICIENT_POINTS
        assert result.subsets_tried == 0

    def test_malformed_marker(self, engine) -> None:
        result = process_request(MalformedRequest("invalid JSON: x"), engine)
        assert result.outcome == ReconstructionOutcome.MALFORMED_REQUEST
        assert result.details == "invalid JSON: x"


class TestProcessBatch:
    """Тесты для process_batch"""

    def test_failures_do_not_abort_batch(self, quadratic_request, forged_request) -> None:
        bad_digit = json.loads(json.dumps(quadratic_request))
        bad_digit["3"]["value"] = "zz"
        documents = [quadratic_request, {"keys": {"n": 0}}, bad_digit, "text", forged_request]

        results = process_batch(json.dumps(documents))
        assert [r.outcome for r in results] == [
            ReconstructionOutcome.SECRET_FOUND,
            ReconstructionOutcome.MALFORMED_REQUEST,
            ReconstructionOutcome.INVALID_DIGIT,
            ReconstructionOutcome.MALFORMED_REQUEST,
            ReconstructionOutcome.SECRET_FOUND,
        ]
        assert [r.secret for r in results] == [1, None, None, None, 7]

    def test_engine_config_applied(self) -> None:
        document = {
            "keys": {"n": 3, "k": 2},
            "1": {"base": "10", "value": "5"},
            "2": {"base": "10", "value": "3"},
            "3": {"base": "10", "value": "7"},
        }
        strict = SubsetSearchEngine(SearchConfig(coefficient_policy=CoefficientPolicy.STRICTLY_POSITIVE))
        assert process_batch(json.dumps(document))[0].secret == 7
        assert process_batch(json.dumps(document), strict)[0].secret == 4

    def test_huge_share_does_not_abort_batch(self, quadratic_request) -> None:
        """Подмножество с огромным дробным коэффициентом отклоняется, следующий запрос обрабатывается"""
        huge = {
            "keys": {"n": 3, "k": 2},
            "1": {"base": "16", "value": "1" + "0" * 4000},
            "3": {"base": "16", "value": "1" + "0" * 3999 + "1"},
        }
        results = process_batch(json.dumps([huge, quadratic_request]))
        assert [r.outcome for r in results] == [
            ReconstructionOutcome.NO_CONSISTENT_SUBSET,
            ReconstructionOutcome.SECRET_FOUND,
        ]
        assert results[1].secret == 1

    def test_keys_beyond_n_ignored_in_batch(self) -> None:
        document = {
            "keys": {"n": 3, "k": 3},
            "1": {"base": "10", "value": "3"},
            "2": {"base": "10", "value": "7"},
            "3": {"base": "10", "value": "13"},
            "9": {"note": "not a share"},
        }
        (result,) = process_batch(json.dumps(document))
        assert result.secret == 1

    def test_oversized_json_number(self) -> None:
        """Число длиннее лимита int интерпретатора не прерывает обработку"""
        results = process_batch('{"keys": {"n": ' + "9" * 5000 + ', "k": 1}}')
        assert len(results) == 1
        assert not results[0].found

    def test_invalid_json_document(self) -> None:
        results = process_batch("not json")
        assert len(results) == 1
        assert results[0].outcome == ReconstructionOutcome.MALFORMED_REQUEST


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


class TestFormatting:
    """Текстовый и JSON Lines вывод"""

    def test_text_lines(self, quadratic_request) -> None:
        results = process_batch(json.dumps([quadratic_request, {"keys": {"n": 1, "k": 2}}]))
        assert format_results(results, OutputFormat.TEXT) == ["1", ERROR_MARKER]

    def test_big_secret_printed_exactly(self) -> None:
        secret = 2**200 + 1
        document = {"keys": {"n": 1, "k": 1}, "1": {"base": "16", "value": format(secret, "x")}}
        assert format_results(process_batch(json.dumps(document)), OutputFormat.TEXT) == [str(secret)]

    def test_secret_longer_than_str_limit(self) -> None:
        """16^4000 - 1 имеет 4817 десятичных цифр"""
        document = {
            "keys": {"n": 2, "k": 2},
            "1": {"base": "16", "value": "1" + "0" * 4000},
            "2": {"base": "16", "value": "1" + "0" * 3999 + "1"},
        }
        results = process_batch(json.dumps(document))
        expected = int_to_decimal(16**4000 - 1)
        assert len(expected) == 4817

        assert format_results(results, OutputFormat.TEXT) == [expected]
        (line,) = format_results(results, OutputFormat.JSONL)
        payload = json.loads(line)
        assert payload["secret"] == expected
        assert payload["coefficients"] == [expected, "1"]

    def test_jsonl_success(self, forged_request) -> None:
        (line,) = format_results(process_batch(json.dumps(forged_request)), OutputFormat.JSONL)
        payload = json.loads(line)
        assert payload["outcome"] == "SECRET_FOUND"
        assert payload["secret"] == "7"
        assert payload["coefficients"] == ["7", "3", "2"]
        assert payload["selected_indices"] == [2, 3, 4]
        assert payload["inconsistent_indices"] == [1]
        assert payload["error"] is None

    def test_jsonl_failure(self) -> None:
        (result,) = process_batch('{"keys": {"n": 2, "k": 3}, "1": {"base": "10", "value": "1"}}')
        payload = result_to_dict(result)
        assert payload["outcome"] == "INSUFFICIENT_POINTS"
        assert payload["secret"] is None
        assert payload["error"] == "1 points supplied, threshold is 3"
