from __future__ import annotations

from typing import List, Sequence

from ..errors import DimensionMismatch, SingularMatrix

Matrix = List[List[float]]
Vector = List[float]

PIVOT_EPSILON = 1e-12


def _shape(matrix: Sequence[Sequence[float]]) -> tuple[int, int]:
    rows = len(matrix)
    if rows == 0:
        return 0, 0
    cols = len(matrix[0])
    for row in matrix:
        if len(row) != cols:
            raise DimensionMismatch(f"ragged matrix: expected rows of length {cols}, got {len(row)}")
    return rows, cols


def identity(n: int) -> Matrix:
    return [[1.0 if i == j else 0.0 for j in range(n)] for i in range(n)]


def transpose(matrix: Sequence[Sequence[float]]) -> Matrix:
    rows, cols = _shape(matrix)
    return [[float(matrix[r][c]) for r in range(rows)] for c in range(cols)]


def multiply(a: Sequence[Sequence[float]], b: Sequence[Sequence[float]]) -> Matrix:
    """Return ``a @ b``; raises DimensionMismatch when inner dimensions differ."""
    a_rows, a_cols = _shape(a)
    b_rows, b_cols = _shape(b)
    if a_cols != b_rows:
        raise DimensionMismatch(f"cannot multiply {a_rows}x{a_cols} by {b_rows}x{b_cols}")

    result: Matrix = [[0.0] * b_cols for _ in range(a_rows)]
    for i in range(a_rows):
        row = a[i]
        out = result[i]
        for k in range(a_cols):
            aik = row[k]
            if aik == 0:
                continue
            b_row = b[k]
            for j in range(b_cols):
                out[j] += aik * b_row[j]
    return result


def multiply_vector(matrix: Sequence[Sequence[float]], vector: Sequence[float]) -> Vector:
    rows, cols = _shape(matrix)
    if rows and cols != len(vector):
        raise DimensionMismatch(f"cannot multiply {rows}x{cols} matrix by vector of length {len(vector)}")
    return [sum(float(v) * float(x) for v, x in zip(row, vector)) for row in matrix]


def inverse(matrix: Sequence[Sequence[float]], epsilon: float = PIVOT_EPSILON) -> Matrix:
    """
    Invert a square matrix by Gauss-Jordan elimination with partial pivoting.

    For each column the row (at or below the diagonal) with the largest
    absolute value in that column is swapped into the pivot position, the
    pivot row is normalised, and the column is eliminated from every other
    row. A pivot magnitude below ``epsilon`` raises SingularMatrix.
    """
    n, cols = _shape(matrix)
    if n != cols:
        raise DimensionMismatch(f"cannot invert non-square {n}x{cols} matrix")

    # Augmented [M | I]
    aug: Matrix = [
        [float(v) for v in matrix[i]] + [1.0 if i == j else 0.0 for j in range(n)]
        for i in range(n)
    ]

    for col in range(n):
        pivot_row = max(range(col, n), key=lambda r: abs(aug[r][col]))
        pivot = aug[pivot_row][col]
        if abs(pivot) < epsilon:
            raise SingularMatrix(f"pivot {pivot:.3e} in column {col} is below {epsilon:.0e}")

        if pivot_row != col:
            aug[col], aug[pivot_row] = aug[pivot_row], aug[col]

        pivot_vals = aug[col]
        aug[col] = [v / pivot for v in pivot_vals]

        for r in range(n):
            if r == col:
                continue
            factor = aug[r][col]
            if factor == 0:
                continue
            aug[r] = [rv - factor * pv for rv, pv in zip(aug[r], aug[col])]

    return [row[n:] for row in aug]
