"""
Example Categories

Concrete structure-constant categories: vector spaces, G-graded vector
spaces twisted by a 3-cocycle, Tambara-Yamagami categories and the Ising
category with its optional braiding.
"""

import logging
from typing import Any, Dict, Optional, Tuple

import numpy as np
import sympy

from .fields import QQBar, Field
from .groups import (
    BilinearForm,
    Cocycle,
    FiniteAbelianGroup,
    cyclic_group,
    nondegenerate_bilinear_form,
)
from .exceptions import FieldError
from .linalg import matrix, zero_matrix
from .ring_category import RingCategory

logger = logging.getLogger(__name__)


def vector_spaces(K: Field = QQBar) -> RingCategory:
    """The category of finite dimensional vector spaces over K."""
    C = graded_vector_spaces(K, FiniteAbelianGroup(()))
    C.set_simples_name(["k"])
    C.set_name(f"Category of finite dimensional vector spaces over {K}")
    return C


def graded_vector_spaces(K: Field, G: FiniteAbelianGroup,
                         cocycle: Optional[Cocycle] = None) -> RingCategory:
    """
    Vec_G^ω: G-graded vector spaces with associator twisted by ω.

    Args:
        K: Base field
        G: Grading group
        cocycle: Normalized 3-cocycle, trivial if omitted

    Returns:
        A fusion category with one simple per group element
    """
    els = G.elements()
    n = len(els)
    C = RingCategory(K, [_element_name(g) for g in els])

    N = np.zeros((n, n, n), dtype=int)
    for i, g in enumerate(els):
        for j, h in enumerate(els):
            N[i, j, els.index(G.multiply(g, h))] = 1
    C.set_tensor_product(N)

    if cocycle is not None:
        for i, g in enumerate(els):
            for j, h in enumerate(els):
                for k, l in enumerate(els):
                    target = els.index(G.multiply(G.multiply(g, h), l))
                    blocks = [zero_matrix(0, 0)] * n
                    blocks[target] = matrix([[cocycle(g, h, l)]])
                    C.set_associator(i, j, k, blocks)

    C.set_one([1 if g == G.identity else 0 for g in els])
    C.set_spherical([1] * n)
    C.set_name(f"Category of G-graded vector spaces over {K} where G is {_group_name(G)}")
    return C


def _element_name(g: Tuple[int, ...]) -> str:
    if not g:
        return "e"
    return "g" + "".join(str(a) for a in g)


def _group_name(G: FiniteAbelianGroup) -> str:
    if not G.invariants:
        return "trivial group"
    return " × ".join(f"Z/{m}" for m in G.invariants)


# ============================================================================
# Tambara-Yamagami
# ============================================================================

def tambara_yamagami(K: Field, A: FiniteAbelianGroup, tau: Optional[Any] = None,
                     chi: Optional[BilinearForm] = None) -> RingCategory:
    """
    The category TY(A, τ, χ).

    Simples are the group elements a0, ..., a(n-1) (a0 the identity) and
    the non-invertible object m with m⊗m = ⊕ a_i.

    Args:
        K: Base field containing √|A| and the exponent-th roots of unity
        A: Finite abelian group
        tau: Square root of |A|, computed in K if omitted
        chi: Symmetric nondegenerate bicharacter, a generic one if omitted

    Raises:
        FieldError: If K has no square root of |A|
    """
    n = A.order()
    if tau is None:
        tau = K.try_sqrt(n)
        if tau is None:
            raise FieldError("Base field needs to contain a square root of ord(A)")
    tau = sympy.sympify(tau)
    if chi is None:
        chi = nondegenerate_bilinear_form(A, K)

    els = A.elements()
    N = np.zeros((n + 1, n + 1, n + 1), dtype=int)
    for i, g in enumerate(els):
        for j, h in enumerate(els):
            N[i, j, els.index(A.multiply(g, h))] = 1
        N[i, n, n] = 1
        N[n, i, n] = 1
    N[n, n, :n] = 1

    TY = RingCategory(K, [f"a{i}" for i in range(n)] + ["m"])
    TY.set_tensor_product(N)

    empty = zero_matrix(0, 0)
    for i, g in enumerate(els):
        TY.set_associator(n, i, n, [matrix([[chi(g, h)]]) for h in els] + [empty])
        for j, h in enumerate(els):
            TY.set_associator(i, n, j, [empty] * n + [matrix([[chi(g, h)]])])
    mmm = matrix([[1 / (tau * chi(g, h)) for h in els] for g in els])
    TY.set_associator(n, n, n, [empty] * n + [mmm])

    TY.set_one([1] + [0] * n)
    TY.set_spherical([1] * (n + 1))
    TY.set_name(f"Tambara-Yamagami fusion category over {_group_name(A)}")
    return TY


# ============================================================================
# Ising
# ============================================================================

def ising_category(K: Field = QQBar, sqrt2: Optional[Any] = None, q: int = 1) -> RingCategory:
    """
    The Ising fusion category with simples 𝟙, χ, X.

    Args:
        K: Base field containing √2
        sqrt2: The square root of 2 to use, computed in K if omitted
        q: ±1, selects the braiding given by ±i

    Returns:
        The Ising category, braided whenever K contains the needed roots
    """
    a = K.sqrt(2) if sqrt2 is None else sympy.sympify(sqrt2)
    C = RingCategory(K, ["𝟙", "χ", "X"])
    N = np.zeros((3, 3, 3), dtype=int)
    N[0, 0, :] = [1, 0, 0]
    N[0, 1, :] = [0, 1, 0]
    N[0, 2, :] = [0, 0, 1]
    N[1, 0, :] = [0, 1, 0]
    N[1, 1, :] = [1, 0, 0]
    N[1, 2, :] = [0, 0, 1]
    N[2, 0, :] = [0, 0, 1]
    N[2, 1, :] = [0, 0, 1]
    N[2, 2, :] = [1, 1, 0]
    C.set_tensor_product(N)

    C.set_associator(1, 2, 1, (-C.id(C[2])).m)
    C.set_associator(2, 1, 2, C.direct_sum_morphisms(C.id(C[0]), -C.id(C[1])).m)
    z = zero_matrix(0, 0)
    C.set_associator(2, 2, 2, [z, z, matrix([[1, 1], [1, -1]]) / a])

    C.set_one([1, 0, 0])
    C.set_spherical([1, 1, 1])
    C.set_name("Ising fusion category")

    braid = _ising_braiding(C, K, a, q)
    if braid is None:
        logger.info("No braiding for the Ising category over %s", K)
    else:
        for (i, j), blocks in braid.items():
            C.set_braiding(i, j, blocks)
    return C


def _ising_braiding(C: RingCategory, K: Field, a, q: int) -> Optional[Dict[Tuple[int, int], list]]:
    """One of the braidings of the Ising category, or None if K lacks the roots."""
    i4 = K.try_root_of_unity(4)
    if i4 is None:
        return None
    xi = q * i4
    alpha = K.try_sqrt((1 + xi) / a)
    if alpha is None:
        return None
    G = cyclic_group(2)
    chi = nondegenerate_bilinear_form(G, K, sympy.Integer(-1))
    e, b = G.elements()

    def scaled(k, X):
        return [M * k for M in C.id(X).m]

    braid = {
        (0, 0): scaled(chi(e, e), C[0]),
        (0, 1): scaled(chi(e, b), C[1]),
        (1, 0): scaled(chi(e, b), C[1]),
        (1, 1): scaled(chi(b, b), C[0]),
        (0, 2): scaled(1, C[2]),
        (2, 0): scaled(1, C[2]),
        (1, 2): scaled(xi, C[2]),
        (2, 1): scaled(xi, C[2]),
        (2, 2): [M * alpha for M in C.direct_sum_morphisms(C.id(C[0]), C.scale(1 / xi, C.id(C[1]))).m],
    }
    return braid
