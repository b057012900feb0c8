"""
Combinations — ленивый генератор сочетаний "k из n"

Перебор индексов подмножеств в лексикографическом порядке:
    (0, 1, ..., k-1) → ... → (n-k, ..., n-1)

Порядок фиксирован и детерминирован: "первое принятое подмножество" зависит
только от входных данных. Генератор можно перезапустить с любого сочетания
через параметр start.
"""

from math import comb
from typing import Iterator, Optional, Sequence, Tuple

IndexCombination = Tuple[int, ...]


def combination_count(n: int, k: int) -> int:
    """
    Количество сочетаний C(n, k).

    Returns:
        0 если k > n или k < 0
    """
    if k < 0 or k > n:
        return 0
    return comb(n, k)


def iter_combinations(
    n: int,
    k: int,
    start: Optional[Sequence[int]] = None,
) -> Iterator[IndexCombination]:
    """
    Лексикографический перебор сочетаний индексов 0..n-1 по k.

    Args:
        n: Количество элементов
        k: Размер сочетания
        start: Сочетание, с которого начать перебор (включительно).
            По умолчанию (0, 1, ..., k-1)

    Yields:
        Кортежи строго возрастающих индексов

    Raises:
        ValueError: Если n/k отрицательны или start некорректен

    Examples:
        >>> list(iter_combinations(4, 2))
        [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]
        >>> list(iter_combinations(4, 2, start=(1, 3)))
        [(1, 3), (2, 3)]
    """
    if n < 0 or k < 0:
        raise ValueError(f"n and k must be non-negative, got n={n}, k={k}")
    if k > n:
        return

    if start is None:
        current = list(range(k))
    else:
        current = list(start)
        if len(current) != k:
            raise ValueError(f"start must have {k} indices, got {len(current)}")
        if any(b <= a for a, b in zip(current, current[1:])):
            raise ValueError(f"start must be strictly increasing, got {tuple(current)}")
        if current and (current[0] < 0 or current[-1] >= n):
            raise ValueError(f"start indices must lie in [0, {n}), got {tuple(current)}")

    while True:
        yield tuple(current)

        # Самая правая позиция, которую ещё можно увеличить
        i = k - 1
        while i >= 0 and current[i] == n - k + i:
            i -= 1
        if i < 0:
            return

        current[i] += 1
        for j in range(i + 1, k):
            current[j] = current[j - 1] + 1
