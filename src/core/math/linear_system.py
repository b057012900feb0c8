"""
Linear System — Vandermonde system и точный Gauss-Jordan

Модуль строит и решает систему полиномиальной интерполяции:
    Σ_j coeff_j · x_i^j = y_i   для каждой выбранной точки (x_i, y_i)

Все элементы матрицы — ExactFraction, поэтому решение точное.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Матрица k × (k+1): столбцы 0..k-1 — степени x_i, столбец k — y_i
2. Pivot — первая строка (сверху вниз) с ненулевым элементом в столбце
3. Нет pivot → SingularSubset (подмножество пропускается вызывающим кодом)
4. Полная редукция: после обработки всех столбцов в столбце k лежат коэффициенты
"""

from typing import List, Sequence, Tuple

from src.core.math.exact_fraction import ExactFraction

AugmentedMatrix = List[List[ExactFraction]]
CandidateSolution = Tuple[ExactFraction, ...]


# =============================================================================
# EXCEPTIONS
# =============================================================================


class SingularSubset(ArithmeticError):
    """
    Система вырождена для данного подмножества точек.

    Внутренняя ошибка уровня одного подмножества: вызывающий код
    перехватывает её и переходит к следующему подмножеству.
    """

    def __init__(self, column: int):
        super().__init__(f"no non-zero pivot in column {column}")
        self.column = column


# =============================================================================
# ПОСТРОЕНИЕ СИСТЕМЫ
# =============================================================================


def build_vandermonde_system(xs: Sequence[int], ys: Sequence[int]) -> AugmentedMatrix:
    """
    Построение расширенной матрицы Вандермонда.

    Args:
        xs: x-координаты (индексы shares), попарно различные
        ys: y-координаты (значения shares)

    Returns:
        Матрица k × (k+1): A[i][j] = x_i^j для j < k, A[i][k] = y_i

    Raises:
        ValueError: Если длины xs и ys различаются
    """
    if len(xs) != len(ys):
        raise ValueError(f"xs and ys length mismatch: {len(xs)} != {len(ys)}")

    k = len(xs)
    matrix: AugmentedMatrix = []
    for x, y in zip(xs, ys):
        row = []
        power = 1
        for _ in range(k):
            row.append(ExactFraction.from_int(power))
            power *= x
        row.append(ExactFraction.from_int(y))
        matrix.append(row)
    return matrix


# =============================================================================
# GAUSS-JORDAN
# =============================================================================


def solve_gauss_jordan(matrix: AugmentedMatrix) -> CandidateSolution:
    """
    Точное решение расширенной системы методом Гаусса-Жордана.

    Матрица модифицируется in-place (строки переставляются и перезаписываются),
    поэтому вызывающий код передаёт локальную копию.

    Порядок для каждого столбца col (строка row = col):
    1. Поиск pivot: первая строка r >= row с A[r][col] != 0
    2. Перестановка строк pivot ↔ row
    3. Нормализация строки row делением на pivot (pivot становится 1)
    4. Исключение столбца col из всех остальных строк

    Args:
        matrix: Расширенная матрица k × (k+1)

    Returns:
        Коэффициенты полинома по возрастанию степени (индекс 0 — свободный член)

    Raises:
        SingularSubset: Если для какого-либо столбца нет ненулевого pivot
    """
    k = len(matrix)

    for col in range(k):
        row = col

        pivot_row = None
        for r in range(row, k):
            if not matrix[r][col].is_zero():
                pivot_row = r
                break
        if pivot_row is None:
            raise SingularSubset(col)

        if pivot_row != row:
            matrix[row], matrix[pivot_row] = matrix[pivot_row], matrix[row]

        pivot = matrix[row][col]
        for c in range(col, k + 1):
            matrix[row][c] = matrix[row][c] / pivot

        for r in range(k):
            if r == row:
                continue
            factor = matrix[r][col]
            if factor.is_zero():
                continue
            for c in range(col, k + 1):
                matrix[r][c] = matrix[r][c] - factor * matrix[row][c]

    return tuple(matrix[i][k] for i in range(k))


def interpolate(xs: Sequence[int], ys: Sequence[int]) -> CandidateSolution:
    """
    Коэффициенты единственного полинома степени k-1 через k точек.

    Raises:
        SingularSubset: Если система вырождена
    """
    return solve_gauss_jordan(build_vandermonde_system(xs, ys))
