"""Interpolation-and-Search Engine — поиск подлинного подмножества shares.

Для каждого подмножества из k точек (в лексикографическом порядке сочетаний):
1. Строится и точно решается система Вандермонда (Gauss-Jordan над ExactFraction)
2. Вырожденная система → подмножество пропускается
3. Коэффициенты проверяются политикой (все целые / все целые и > 0)
4. Первое принятое подмножество → свободный член полинома = секрет, перебор останавливается

Детерминизм: при параллельном переборе результаты читаются в порядке перечисления,
поэтому ответ всегда совпадает с последовательным перебором.
"""

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from enum import Enum
from functools import partial
from itertools import islice
from typing import Iterator, List, Optional, Sequence, Tuple

from src.core.domain.polynomial import evaluate_polynomial
from src.core.domain.share import SharePoint
from src.core.math.combinations import combination_count, iter_combinations
from src.core.math.exact_fraction import DivisionByZero, int_to_decimal
from src.core.math.linear_system import CandidateSolution, SingularSubset, interpolate
from src.reconstruction.config import CoefficientPolicy, SearchConfig

logger = logging.getLogger(__name__)


class ReconstructionOutcome(str, Enum):
    """Итог одного запроса на восстановление."""
    SECRET_FOUND = "SECRET_FOUND"
    NO_CONSISTENT_SUBSET = "NO_CONSISTENT_SUBSET"
    INSUFFICIENT_POINTS = "INSUFFICIENT_POINTS"
    SEARCH_SPACE_EXCEEDED = "SEARCH_SPACE_EXCEEDED"
    INVALID_DIGIT = "INVALID_DIGIT"
    MALFORMED_REQUEST = "MALFORMED_REQUEST"
    ARITHMETIC_FAULT = "ARITHMETIC_FAULT"


@dataclass(frozen=True)
class SubsetAttempt:
    """Результат проверки одного подмножества."""

    indices: Tuple[int, ...]
    coefficients: Optional[CandidateSolution]
    rejection_reason: str

    @property
    def accepted(self) -> bool:
        return not self.rejection_reason


@dataclass(frozen=True)
class ReconstructionResult:
    """Результат поиска секрета."""

    outcome: ReconstructionOutcome
    secret: Optional[int]

    # Принятый полином (пустые кортежи, если секрет не найден)
    coefficients: Tuple[int, ...]
    selected_indices: Tuple[int, ...]

    # Диагностика
    subsets_tried: int
    consistent_indices: Tuple[int, ...]
    inconsistent_indices: Tuple[int, ...]
    details: str

    @property
    def found(self) -> bool:
        return self.outcome == ReconstructionOutcome.SECRET_FOUND

    @classmethod
    def failure(
        cls,
        outcome: ReconstructionOutcome,
        details: str,
        subsets_tried: int = 0,
    ) -> "ReconstructionResult":
        return cls(
            outcome=outcome,
            secret=None,
            coefficients=(),
            selected_indices=(),
            subsets_tried=subsets_tried,
            consistent_indices=(),
            inconsistent_indices=(),
            details=details,
        )


# =============================================================================
# ПРОВЕРКА ПОДМНОЖЕСТВА
# =============================================================================


def coefficient_rejection_reason(
    coefficients: CandidateSolution,
    policy: CoefficientPolicy,
) -> str:
    """Причина отказа для набора коэффициентов ("" если набор принят)."""
    for degree, c in enumerate(coefficients):
        if not c.is_integer():
            return f"coefficient of x^{degree} is not an integer"
        if policy == CoefficientPolicy.STRICTLY_POSITIVE and not c.is_positive():
            return f"coefficient of x^{degree} is not strictly positive"
    return ""


def evaluate_subset(
    points: Sequence[SharePoint],
    policy: CoefficientPolicy = CoefficientPolicy.ANY_INTEGER,
) -> SubsetAttempt:
    """Интерполяция и валидация одного подмножества из k точек.

    Вырожденная система не является ошибкой: подмножество просто отклоняется.

    Raises:
        DivisionByZero: Нарушение внутреннего инварианта арифметики
    """
    indices = tuple(p.index for p in points)
    try:
        coefficients = interpolate(indices, [p.value for p in points])
    except SingularSubset as e:
        return SubsetAttempt(indices=indices, coefficients=None, rejection_reason=f"singular: {e}")

    return SubsetAttempt(
        indices=indices,
        coefficients=coefficients,
        rejection_reason=coefficient_rejection_reason(coefficients, policy),
    )


# =============================================================================
# SEARCH ENGINE
# =============================================================================


class SubsetSearchEngine:
    """Перебор подмножеств shares и восстановление секрета.

    Контракт: побеждает первое принятое подмножество в порядке перечисления,
    а не "лучшее" и не "все".
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        """
        Args:
            config: конфигурация поиска (default: SearchConfig())
        """
        self.config = config or SearchConfig()

    def find_secret(self, points: Sequence[SharePoint], threshold: int) -> ReconstructionResult:
        """Поиск секрета среди points с порогом threshold.

        Args:
            points: упорядоченный список shares (индексы попарно различны)
            threshold: k — размер подмножества (степень полинома k-1)

        Returns:
            ReconstructionResult с outcome SECRET_FOUND, NO_CONSISTENT_SUBSET,
            INSUFFICIENT_POINTS, SEARCH_SPACE_EXCEEDED или ARITHMETIC_FAULT

        Raises:
            ValueError: threshold < 1 или повторяющиеся индексы shares
        """
        if threshold < 1:
            raise ValueError(f"threshold must be >= 1, got {threshold}")

        seen = set()
        for p in points:
            if p.index in seen:
                raise ValueError(f"duplicate share index {p.index}")
            seen.add(p.index)

        n = len(points)
        if n < threshold:
            return ReconstructionResult.failure(
                ReconstructionOutcome.INSUFFICIENT_POINTS,
                f"{n} points supplied, threshold is {threshold}",
            )

        total = combination_count(n, threshold)
        limit = self.config.max_combinations
        if limit is not None and total > limit:
            return ReconstructionResult.failure(
                ReconstructionOutcome.SEARCH_SPACE_EXCEEDED,
                f"C({n}, {threshold}) = {int_to_decimal(total)} exceeds max_combinations={limit}",
            )

        logger.debug("Searching %d subsets of size %d among %d points", total, threshold, n)

        try:
            if self.config.is_parallel:
                accepted, tried = self._search_parallel(points, threshold)
            else:
                accepted, tried = self._search_sequential(points, threshold)
        except DivisionByZero as e:
            logger.error("Arithmetic invariant violated during search: %s", e)
            return ReconstructionResult.failure(ReconstructionOutcome.ARITHMETIC_FAULT, str(e))

        if accepted is None:
            return ReconstructionResult.failure(
                ReconstructionOutcome.NO_CONSISTENT_SUBSET,
                f"none of {tried} subsets of size {threshold} passed "
                f"{self.config.coefficient_policy.value} validation",
                subsets_tried=tried,
            )

        return self._accept(points, accepted, tried)

    # -------------------------------------------------------------------------

    def _iter_subsets(
        self, points: Sequence[SharePoint], threshold: int
    ) -> Iterator[Tuple[SharePoint, ...]]:
        for combo in iter_combinations(len(points), threshold):
            yield tuple(points[i] for i in combo)

    def _search_sequential(
        self, points: Sequence[SharePoint], threshold: int
    ) -> Tuple[Optional[SubsetAttempt], int]:
        tried = 0
        for subset in self._iter_subsets(points, threshold):
            attempt = evaluate_subset(subset, self.config.coefficient_policy)
            tried += 1
            if attempt.accepted:
                return attempt, tried
            logger.debug("Subset %s rejected: %s", attempt.indices, attempt.rejection_reason)
        return None, tried

    def _search_parallel(
        self, points: Sequence[SharePoint], threshold: int
    ) -> Tuple[Optional[SubsetAttempt], int]:
        """Параллельный перебор окнами фиксированного размера.

        Executor.map возвращает результаты в порядке входа, поэтому первое
        принятое подмножество окна — первое и в общем порядке перечисления.
        """
        evaluate = partial(evaluate_subset, policy=self.config.coefficient_policy)
        window_size = self.config.max_workers * self.config.chunk_size
        subsets = self._iter_subsets(points, threshold)
        tried = 0

        executor = ProcessPoolExecutor(max_workers=self.config.max_workers)
        try:
            while True:
                window: List[Tuple[SharePoint, ...]] = list(islice(subsets, window_size))
                if not window:
                    return None, tried
                for attempt in executor.map(evaluate, window, chunksize=self.config.chunk_size):
                    tried += 1
                    if attempt.accepted:
                        return attempt, tried
                    logger.debug("Subset %s rejected: %s", attempt.indices, attempt.rejection_reason)
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

    def _accept(
        self,
        points: Sequence[SharePoint],
        attempt: SubsetAttempt,
        tried: int,
    ) -> ReconstructionResult:
        coefficients = tuple(c.as_integer() for c in attempt.coefficients)
        selected = set(attempt.indices)

        consistent: List[int] = []
        inconsistent: List[int] = []
        for p in points:
            if p.index in selected:
                continue
            if evaluate_polynomial(coefficients, p.index) == p.value:
                consistent.append(p.index)
            else:
                inconsistent.append(p.index)

        logger.info(
            "Accepted subset %s after %d attempts; inconsistent shares: %s",
            attempt.indices,
            tried,
            inconsistent,
        )
        return ReconstructionResult(
            outcome=ReconstructionOutcome.SECRET_FOUND,
            secret=coefficients[0],
            coefficients=coefficients,
            selected_indices=attempt.indices,
            subsets_tried=tried,
            consistent_indices=tuple(consistent),
            inconsistent_indices=tuple(inconsistent),
            details=f"polynomial of degree {len(coefficients) - 1} through shares {attempt.indices}",
        )


def find_secret(
    points: Sequence[SharePoint],
    threshold: int,
    config: Optional[SearchConfig] = None,
) -> ReconstructionResult:
    """Поиск секрета с конфигурацией по умолчанию (или заданной)."""
    return SubsetSearchEngine(config).find_secret(points, threshold)
