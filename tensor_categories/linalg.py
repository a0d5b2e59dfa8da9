"""
Exact Linear Algebra

Thin helpers over sympy matrices. Every zero test in the package goes through
is_zero so that radicals and roots of unity are compared consistently.
Matrices that handle zero rows or columns are assembled by hand because the
categorical code routinely produces empty blocks.
"""

from typing import Any, Iterable, List, Optional, Sequence, Tuple

import sympy
from sympy import ImmutableMatrix

from .constants import ZERO_TEST_SIMPLIFY


def normalize(x: Any) -> sympy.Expr:
    """Expand an entry so that equal algebraic numbers look alike."""
    x = sympy.sympify(x)
    if x.is_Rational:
        return x
    return sympy.expand(x)


def is_zero(x: Any) -> bool:
    x = sympy.sympify(x)
    if x.is_Number:
        return x == 0
    y = sympy.expand(x)
    if y == 0:
        return True
    if y.is_Number or not ZERO_TEST_SIMPLIFY:
        return False
    if sympy.simplify(y) == 0:
        return True
    return sympy.simplify(sympy.expand_complex(y)) == 0


def matrix(rows: Sequence[Sequence[Any]]) -> ImmutableMatrix:
    return ImmutableMatrix([[normalize(x) for x in row] for row in rows])


def zero_matrix(rows: int, cols: int) -> ImmutableMatrix:
    return ImmutableMatrix.zeros(rows, cols)


def identity_matrix(n: int) -> ImmutableMatrix:
    return ImmutableMatrix.eye(n)


def diagonal_matrix(value: Any, rows: int, cols: int) -> ImmutableMatrix:
    """rows x cols matrix with value on the main diagonal."""
    M = sympy.zeros(rows, cols)
    for i in range(min(rows, cols)):
        M[i, i] = value
    return ImmutableMatrix(M)


def apply_normalize(M) -> ImmutableMatrix:
    return ImmutableMatrix(M.applyfunc(normalize))


def kron(A, B) -> ImmutableMatrix:
    """Kronecker product, A outer and B inner."""
    M = sympy.zeros(A.rows * B.rows, A.cols * B.cols)
    for i in range(A.rows):
        for j in range(A.cols):
            a = A[i, j]
            if a == 0:
                continue
            for k in range(B.rows):
                for l in range(B.cols):
                    M[i * B.rows + k, j * B.cols + l] = a * B[k, l]
    return apply_normalize(M)


def block_diagonal(blocks: Iterable) -> ImmutableMatrix:
    blocks = list(blocks)
    rows = sum(b.rows for b in blocks)
    cols = sum(b.cols for b in blocks)
    M = sympy.zeros(rows, cols)
    r = c = 0
    for b in blocks:
        for i in range(b.rows):
            for j in range(b.cols):
                M[r + i, c + j] = b[i, j]
        r += b.rows
        c += b.cols
    return ImmutableMatrix(M)


def hstack(blocks: Sequence, rows: int) -> ImmutableMatrix:
    """Join matrices left to right; rows is needed when blocks is empty."""
    cols = sum(b.cols for b in blocks)
    M = sympy.zeros(rows, cols)
    c = 0
    for b in blocks:
        if b.rows != rows:
            raise ValueError(f"Cannot join a {b.rows}-row block into {rows} rows")
        for i in range(b.rows):
            for j in range(b.cols):
                M[i, c + j] = b[i, j]
        c += b.cols
    return ImmutableMatrix(M)


def vstack(blocks: Sequence, cols: int) -> ImmutableMatrix:
    """Join matrices top to bottom; cols is needed when blocks is empty."""
    rows = sum(b.rows for b in blocks)
    M = sympy.zeros(rows, cols)
    r = 0
    for b in blocks:
        if b.cols != cols:
            raise ValueError(f"Cannot join a {b.cols}-column block into {cols} columns")
        for i in range(b.rows):
            for j in range(b.cols):
                M[r + i, j] = b[i, j]
        r += b.rows
    return ImmutableMatrix(M)


def matrices_equal(A, B) -> bool:
    if A.shape != B.shape:
        return False
    return all(is_zero(a - b) for a, b in zip(A, B))


def is_zero_matrix(A) -> bool:
    return all(is_zero(a) for a in A)


def rref(M) -> Tuple[ImmutableMatrix, Tuple[int, ...]]:
    if M.rows == 0 or M.cols == 0:
        return ImmutableMatrix(M), ()
    R, pivots = sympy.Matrix(M).rref(iszerofunc=is_zero, simplify=normalize)
    return ImmutableMatrix(R), tuple(pivots)


def rank(M) -> int:
    return len(rref(M)[1])


def independent_columns(M) -> List[int]:
    """Indices of a maximal linearly independent set of columns."""
    return list(rref(M)[1])


def right_kernel(M) -> ImmutableMatrix:
    """Matrix whose columns form a basis of {v : M v = 0}."""
    if M.rows == 0:
        return identity_matrix(M.cols)
    if M.cols == 0:
        return zero_matrix(0, 0)
    vectors = sympy.Matrix(M).nullspace(simplify=normalize, iszerofunc=is_zero)
    if not vectors:
        return zero_matrix(M.cols, 0)
    return apply_normalize(hstack([ImmutableMatrix(v) for v in vectors], M.cols))


def left_kernel(M) -> ImmutableMatrix:
    """Matrix whose rows form a basis of {w : w M = 0}."""
    return ImmutableMatrix(right_kernel(M.T).T)


def solve_linear(A, b) -> ImmutableMatrix:
    """
    One solution x of A x = b.

    Free variables are set to zero.

    Raises:
        ValueError: If the system is inconsistent
    """
    n = A.cols
    if A.rows == 0:
        return zero_matrix(n, 1)
    augmented = sympy.Matrix(A).row_join(sympy.Matrix(b))
    R, pivots = rref(augmented)
    if n in pivots:
        raise ValueError("Linear system has no solution")
    x = sympy.zeros(n, 1)
    for row, p in enumerate(pivots):
        x[p, 0] = R[row, n]
    return apply_normalize(x)


def inverse(M) -> ImmutableMatrix:
    if M.rows != M.cols:
        raise ValueError(f"Cannot invert a {M.rows}x{M.cols} matrix")
    if M.rows == 0:
        return ImmutableMatrix(M)
    return apply_normalize(sympy.Matrix(M).inv(method="GE", iszerofunc=is_zero))


def left_inverse(M) -> ImmutableMatrix:
    """
    L with M * L = I for M of full row rank.

    Built from an invertible square of pivot columns, which avoids the
    transpose-based pseudo inverse that fails over non-real fields.
    """
    pivots = independent_columns(M)
    if len(pivots) != M.rows:
        raise ValueError("Matrix has no left inverse")
    square = M.extract(list(range(M.rows)), pivots)
    L = sympy.zeros(M.cols, M.rows)
    inv = inverse(square)
    for r, p in enumerate(pivots):
        L[p, :] = inv[r, :]
    return ImmutableMatrix(L)


def right_inverse(M) -> ImmutableMatrix:
    """R with R * M = I for M of full column rank."""
    return ImmutableMatrix(left_inverse(M.T).T)


def eigenvalues(M) -> List[sympy.Expr]:
    """Distinct eigenvalues of a square matrix."""
    if M.rows == 0:
        return []
    values = sympy.Matrix(M).eigenvals(error_when_incomplete=False)
    if sum(values.values()) < M.rows:
        x = sympy.Dummy("x")
        roots = sympy.Poly(sympy.Matrix(M).charpoly(x).as_expr(), x).all_roots()
        values = {r: 1 for r in roots}
    distinct: List[sympy.Expr] = []
    for value in values:
        value = normalize(value)
        if not any(is_zero(value - d) for d in distinct):
            distinct.append(value)
    return distinct


def scalar_ratio(A, B) -> Optional[sympy.Expr]:
    """The scalar k with A == k * B, or None if there is none."""
    if A.shape != B.shape:
        return None
    k = None
    for a, b in zip(A, B):
        if not is_zero(b):
            k = normalize(a / b)
            break
    if k is None:
        return sympy.Integer(0) if is_zero_matrix(A) else None
    if matrices_equal(A, B * k):
        return k
    return None
