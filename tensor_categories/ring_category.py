"""
Structure-Constant Category Engine

A multi-fusion category given by an integer fusion tensor N[i,j,k], one
associator matrix per simple summand of every triple of simples, spherical
scalars and the multiplicity vector of the unit.

Objects are multiplicity vectors over the simples. A morphism holds one
matrix per simple k of shape (domain[k], codomain[k]) and acts on row
vectors, so compose(f, g) multiplies f.m[k] * g.m[k].

Copies of a simple k inside X⊗Y are ordered by the pair (i, j) of simples
of X and Y, then by fusion channel, then by the copy of i in X, then by the
copy of j in Y. Every structure morphism below (associators, distribution
isomorphisms, (co)evaluations) is built against this ordering.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import sympy
from sympy import ImmutableMatrix

from . import linalg
from .category import (
    Category,
    HomSpace,
    Morphism,
    Object,
    compose,
    direct_sum_morphisms,
    distribute_left,
    distribute_right,
    horizontal_direct_sum,
    sum_morphisms,
    vertical_direct_sum,
)
from .exceptions import NotRigidError, ParentMismatchError, check_parents
from .fields import Field

logger = logging.getLogger(__name__)


@dataclass(frozen=True, repr=False)
class RingCategoryObject(Object):
    """An object given by its multiplicities over the simple objects."""
    parent: "RingCategory"
    components: Tuple[int, ...]

    def __getitem__(self, k: int) -> int:
        return self.components[k]

    def __repr__(self):
        terms = []
        for name, c in zip(self.parent.simples_names, self.components):
            if c == 1:
                terms.append(name)
            elif c > 1:
                terms.append(f"{c}⋅{name}")
        return " ⊕ ".join(terms) if terms else "0"


@dataclass(eq=False, repr=False)
class RingCategoryMorphism(Morphism):
    """A morphism given by one matrix per simple block."""
    domain: RingCategoryObject
    codomain: RingCategoryObject
    m: Tuple[ImmutableMatrix, ...] = field(default_factory=tuple)

    def __post_init__(self):
        for k, M in enumerate(self.m):
            if M.shape != (self.domain[k], self.codomain[k]):
                raise ValueError(
                    f"Block {k} has shape {M.shape}, expected "
                    f"{(self.domain[k], self.codomain[k])}"
                )

    def __repr__(self):
        return f"Morphism {self.domain} → {self.codomain}"


class RingCategory(Category):
    """
    A multi-ring category defined by structure constants.

    Attributes:
        base_ring: Field of the scalars
        simples_names: Display names of the simples
        tensor_product_table: Integer array N[i,j,k]
        ass: ass[i][j][k] is a list with one matrix per simple l
        braid: Optional braid[i][j], a list with one matrix per simple l
        spherical_values: Scalar of the spherical structure on each simple
        one_components: Multiplicity vector of the unit
    """

    def __init__(self, base_ring: Field, simples_names: Sequence[str], name: Optional[str] = None):
        self.base_ring = base_ring
        self.simples_names = list(simples_names)
        self.n = len(self.simples_names)
        self.name = name or f"Fusion category with {self.n} simple objects"
        self.tensor_product_table = np.zeros((self.n, self.n, self.n), dtype=int)
        self.ass: List = []
        self.braid: Optional[List] = None
        self.spherical_values = [sympy.Integer(1)] * self.n
        self.one_components: Tuple[int, ...] = tuple(0 for _ in range(self.n))
        self._associator_cache: Dict[Tuple, RingCategoryMorphism] = {}
        self._inv_associator_cache: Dict[Tuple, RingCategoryMorphism] = {}
        self._ev_cache: Dict[int, RingCategoryMorphism] = {}

    def __repr__(self):
        return f"{self.name} over {self.base_ring}"

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def set_name(self, name: str) -> None:
        self.name = name

    def set_simples_name(self, names: Sequence[str]) -> None:
        if len(names) != self.n:
            raise ValueError(f"Expected {self.n} names, got {len(names)}")
        self.simples_names = list(names)

    def set_tensor_product(self, N) -> None:
        """Set the fusion tensor and reset every associator to the identity."""
        N = np.asarray(N, dtype=int)
        if N.shape != (self.n, self.n, self.n):
            raise ValueError(f"Fusion tensor must have shape {(self.n,) * 3}, got {N.shape}")
        self.tensor_product_table = N
        self._clear_caches()
        S = self.simples()
        self.ass = [[[list(self.id(self.tensor_product(self.tensor_product(X, Y), Z)).m)
                      for Z in S] for Y in S] for X in S]

    def set_associator(self, i: int, j: int, k: int, *args) -> None:
        """
        Set associator data of the simples (i, j, k).

        Called either with the full list of blocks, one per simple l, or
        with an index l and a single matrix.
        """
        if len(args) == 1:
            blocks = [ImmutableMatrix(M) for M in args[0]]
        elif len(args) == 2:
            l, M = args
            blocks = list(self.ass[i][j][k])
            blocks[l] = ImmutableMatrix(M)
        else:
            raise TypeError("set_associator expects blocks or an index and a matrix")
        S = self.simples()
        sizes = self.tensor_product(self.tensor_product(S[i], S[j]), S[k]).components
        for l, (M, size) in enumerate(zip(blocks, sizes)):
            if M.shape != (size, size):
                raise ValueError(
                    f"Associator block ({i},{j},{k};{l}) must be {size}x{size}, got {M.shape}"
                )
        self.ass[i][j][k] = [linalg.apply_normalize(M) for M in blocks]
        self._clear_caches()

    def set_braiding(self, i: int, j: int, blocks: Sequence) -> None:
        if self.braid is None:
            self.braid = [[None] * self.n for _ in range(self.n)]
        self.braid[i][j] = [linalg.apply_normalize(ImmutableMatrix(M)) for M in blocks]

    def set_one(self, components: Sequence[int]) -> None:
        self.one_components = tuple(int(c) for c in components)
        self._clear_caches()

    def set_spherical(self, values: Sequence[Any]) -> None:
        self.spherical_values = [sympy.sympify(v) for v in values]

    def set_canonical_spherical(self) -> None:
        """Rescale the spherical structure so that dim(s) = fpdim(s) for every simple."""
        values = []
        for s, sp in zip(self.simples(), self.spherical_values):
            values.append(linalg.normalize(self.fpdim(s) * sp / self.dim(s)))
        self.set_spherical(values)

    def _clear_caches(self) -> None:
        self._associator_cache.clear()
        self._inv_associator_cache.clear()
        self._ev_cache.clear()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def simples(self) -> List[RingCategoryObject]:
        return [self[i] for i in range(self.n)]

    def __getitem__(self, i: int) -> RingCategoryObject:
        return RingCategoryObject(self, tuple(1 if j == i else 0 for j in range(self.n)))

    def one(self) -> RingCategoryObject:
        return RingCategoryObject(self, self.one_components)

    def zero(self) -> RingCategoryObject:
        return RingCategoryObject(self, tuple(0 for _ in range(self.n)))

    def is_multiring(self) -> bool:
        return True

    def is_multifusion(self) -> bool:
        try:
            for i in range(self.n):
                self._dual_index(i)
        except NotRigidError:
            return False
        return True

    def is_fusion(self) -> bool:
        return self.is_multifusion() and sum(self.one_components) == 1

    def is_braided(self) -> bool:
        return self.braid is not None and all(b is not None for row in self.braid for b in row)

    def dim_category(self):
        return linalg.normalize(sum(self.dim(s) ** 2 for s in self.simples()))

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def _object(self, components) -> RingCategoryObject:
        return RingCategoryObject(self, tuple(int(c) for c in components))

    def tensor_product(self, X: RingCategoryObject, Y: RingCategoryObject) -> RingCategoryObject:
        if X.parent is not self or Y.parent is not self:
            raise ParentMismatchError("Mismatching parents")
        T = np.einsum("i,j,ijk->k", np.array(X.components, dtype=int),
                      np.array(Y.components, dtype=int), self.tensor_product_table)
        return self._object(T)

    def direct_sum(self, *objects: RingCategoryObject):
        if not objects:
            return self.zero(), [], []
        check_parents(*objects)
        S = self._object(np.sum([X.components for X in objects], axis=0))
        offsets = [0] * self.n
        inclusions, projections = [], []
        for X in objects:
            blocks = []
            for k in range(self.n):
                M = sympy.zeros(X[k], S[k])
                for a in range(X[k]):
                    M[a, offsets[k] + a] = 1
                blocks.append(ImmutableMatrix(M))
                offsets[k] += X[k]
            inclusions.append(RingCategoryMorphism(X, S, tuple(blocks)))
            projections.append(RingCategoryMorphism(S, X, tuple(ImmutableMatrix(B.T) for B in blocks)))
        return S, inclusions, projections

    def direct_sum_pair(self, X, Y):
        return self.direct_sum(X, Y)

    def summands(self, X: RingCategoryObject) -> List[RingCategoryObject]:
        """Simple summands of X with repetition, in the order of the simples."""
        S = self.simples()
        return [S[k] for k in range(self.n) for _ in range(X[k])]

    def decompose(self, X: RingCategoryObject) -> List[Tuple[RingCategoryObject, int]]:
        return [(self[k], c) for k, c in enumerate(X.components) if c > 0]

    def direct_sum_decomposition(self, X: RingCategoryObject):
        """
        Split X into simples.

        Returns:
            (S, iso, inclusions, projections) with iso: X → S and the
            structure morphisms of S as a direct sum of simples
        """
        S, inclusions, projections = self.direct_sum(*self.summands(X))
        return S, self.id(X), inclusions, projections

    def is_simple(self, X: RingCategoryObject) -> bool:
        return sum(X.components) == 1

    def is_isomorphic(self, X, Y):
        if X.components != Y.components:
            return False, None
        return True, self.id(X)

    def is_isomorphism(self, f: RingCategoryMorphism) -> bool:
        return all(A.rows == A.cols and linalg.rank(A) == A.rows for A in f.m)

    def fpdim(self, X: RingCategoryObject):
        """Frobenius-Perron dimension: the largest eigenvalue of left multiplication by X."""
        if X == self.zero():
            return sympy.Integer(0)
        L = sympy.zeros(self.n, self.n)
        for i in range(self.n):
            for k in range(self.n):
                L[i, k] = int(sum(X[j] * self.tensor_product_table[j, i, k] for j in range(self.n)))
        values = linalg.eigenvalues(L)
        return max(values, key=lambda v: sympy.re(sympy.N(v)))

    # ------------------------------------------------------------------
    # Duality
    # ------------------------------------------------------------------

    def _dual_index(self, i: int) -> int:
        support = [k for k, c in enumerate(self.one_components) if c == 1]
        candidates = sorted({e for k in support for e in range(self.n)
                             if self.tensor_product_table[i, e, k] >= 1})
        if len(candidates) != 1:
            raise NotRigidError(f"Simple object {self.simples_names[i]} is not rigid")
        return candidates[0]

    def dual(self, X: RingCategoryObject) -> RingCategoryObject:
        components = [0] * self.n
        for i, c in enumerate(X.components):
            if c > 0:
                components[self._dual_index(i)] += c
        return self._object(components)

    def coev(self, X: RingCategoryObject) -> RingCategoryMorphism:
        one = self.one()
        dX = self.dual(X)
        if X == self.zero():
            return self.zero_morphism(one, self.zero())
        if self.is_simple(X):
            cod = self.tensor_product(X, dX)
            blocks = tuple(linalg.diagonal_matrix(1, one[k], cod[k]) for k in range(self.n))
            return RingCategoryMorphism(one, cod, blocks)

        summands = self.summands(X)
        dual_summands = [self.dual(s) for s in summands]
        c = vertical_direct_sum([
            self.coev(x) if a == b else self.zero_morphism(one, self.tensor_product(x, y))
            for a, x in enumerate(summands) for b, y in enumerate(dual_summands)
        ])
        distr = compose(distribute_left(summands, dX),
                        direct_sum_morphisms(*[distribute_right(x, dual_summands) for x in summands]))
        return compose(c, self.inv(distr))

    def ev(self, X: RingCategoryObject) -> RingCategoryMorphism:
        one = self.one()
        dX = self.dual(X)
        if X == self.zero():
            return self.zero_morphism(self.zero(), one)
        if self.is_simple(X):
            i = X.components.index(1)
            if i not in self._ev_cache:
                self._ev_cache[i] = self._simple_ev(X, dX)
            return self._ev_cache[i]

        summands = self.summands(X)
        dual_summands = [self.dual(s) for s in summands]
        e = horizontal_direct_sum([
            self.ev(x) if a == b else self.zero_morphism(self.tensor_product(y, x), one)
            for a, y in enumerate(dual_summands) for b, x in enumerate(summands)
        ])
        distr = compose(distribute_left(dual_summands, X),
                        direct_sum_morphisms(*[distribute_right(y, summands) for y in dual_summands]))
        return compose(distr, e)

    def _simple_ev(self, X: RingCategoryObject, dX: RingCategoryObject) -> RingCategoryMorphism:
        one = self.one()
        dom = self.tensor_product(dX, X)
        unscaled = RingCategoryMorphism(
            dom, one, tuple(linalg.diagonal_matrix(1, dom[k], one[k]) for k in range(self.n))
        )
        idX = self.id(X)
        snake = compose(
            self.tensor_product_morphisms(self.coev(X), idX),
            self.associator(X, dX, X),
            self.tensor_product_morphisms(idX, unscaled),
        )
        factor = self.scalar(snake)
        if linalg.is_zero(factor):
            raise NotRigidError(f"Evaluation of {X} is degenerate")
        return self.scale(1 / factor, unscaled)

    def spherical(self, X: RingCategoryObject) -> RingCategoryMorphism:
        blocks = tuple(linalg.diagonal_matrix(self.spherical_values[k], X[k], X[k]) for k in range(self.n))
        return RingCategoryMorphism(X, self.dual(self.dual(X)), blocks)

    # ------------------------------------------------------------------
    # Morphisms
    # ------------------------------------------------------------------

    def morphism(self, X: RingCategoryObject, Y: RingCategoryObject, blocks: Sequence) -> RingCategoryMorphism:
        return RingCategoryMorphism(X, Y, tuple(linalg.apply_normalize(ImmutableMatrix(M)) for M in blocks))

    def id(self, X: RingCategoryObject) -> RingCategoryMorphism:
        return RingCategoryMorphism(X, X, tuple(linalg.identity_matrix(c) for c in X.components))

    def zero_morphism(self, X: RingCategoryObject, Y: RingCategoryObject) -> RingCategoryMorphism:
        return RingCategoryMorphism(X, Y, tuple(linalg.zero_matrix(X[k], Y[k]) for k in range(self.n)))

    def compose(self, f: RingCategoryMorphism, g: RingCategoryMorphism) -> RingCategoryMorphism:
        if f.codomain != g.domain:
            raise ValueError(f"Morphisms not compatible: {f.codomain} ≠ {g.domain}")
        return RingCategoryMorphism(
            f.domain, g.codomain,
            tuple(linalg.apply_normalize(A * B) for A, B in zip(f.m, g.m)),
        )

    def add(self, f: RingCategoryMorphism, g: RingCategoryMorphism) -> RingCategoryMorphism:
        if f.domain != g.domain or f.codomain != g.codomain:
            raise ValueError("Cannot add morphisms with different domain or codomain")
        return RingCategoryMorphism(
            f.domain, f.codomain,
            tuple(linalg.apply_normalize(A + B) for A, B in zip(f.m, g.m)),
        )

    def scale(self, k, f: RingCategoryMorphism) -> RingCategoryMorphism:
        k = sympy.sympify(k)
        return RingCategoryMorphism(f.domain, f.codomain, tuple(linalg.apply_normalize(A * k) for A in f.m))

    def tensor_product_morphisms(self, f: RingCategoryMorphism, g: RingCategoryMorphism) -> RingCategoryMorphism:
        if f.parent is not self or g.parent is not self:
            raise ParentMismatchError("Mismatching parents")
        dom = self.tensor_product(f.domain, g.domain)
        cod = self.tensor_product(f.codomain, g.codomain)
        blocks: List[List[ImmutableMatrix]] = [[] for _ in range(self.n)]
        N = self.tensor_product_table
        for i in range(self.n):
            A = f.m[i]
            if A.rows == 0 and A.cols == 0:
                continue
            for j in range(self.n):
                B = g.m[j]
                if B.rows == 0 and B.cols == 0:
                    continue
                AB = linalg.kron(A, B)
                for k in range(self.n):
                    blocks[k].extend([AB] * int(N[i, j, k]))
        return RingCategoryMorphism(dom, cod, tuple(linalg.block_diagonal(b) for b in blocks))

    def direct_sum_morphisms_pair(self, f: RingCategoryMorphism, g: RingCategoryMorphism) -> RingCategoryMorphism:
        dom = self.direct_sum(f.domain, g.domain)[0]
        cod = self.direct_sum(f.codomain, g.codomain)[0]
        return RingCategoryMorphism(dom, cod, tuple(linalg.block_diagonal([A, B]) for A, B in zip(f.m, g.m)))

    def inv(self, f: RingCategoryMorphism) -> RingCategoryMorphism:
        return RingCategoryMorphism(f.codomain, f.domain, tuple(linalg.inverse(A) for A in f.m))

    def left_inverse(self, f: RingCategoryMorphism) -> RingCategoryMorphism:
        """g: codomain → domain with compose(f, g) = id for a monomorphism f."""
        return RingCategoryMorphism(f.codomain, f.domain, tuple(linalg.left_inverse(A) for A in f.m))

    def right_inverse(self, f: RingCategoryMorphism) -> RingCategoryMorphism:
        """g: codomain → domain with compose(g, f) = id for an epimorphism f."""
        return RingCategoryMorphism(f.codomain, f.domain, tuple(linalg.right_inverse(A) for A in f.m))

    def kernel(self, f: RingCategoryMorphism):
        blocks = [linalg.left_kernel(A) for A in f.m]
        K = self._object([B.rows for B in blocks])
        return K, RingCategoryMorphism(K, f.domain, tuple(blocks))

    def cokernel(self, f: RingCategoryMorphism):
        blocks = [linalg.right_kernel(A) for A in f.m]
        C = self._object([B.cols for B in blocks])
        return C, RingCategoryMorphism(f.codomain, C, tuple(blocks))

    def hom(self, X: RingCategoryObject, Y: RingCategoryObject) -> HomSpace:
        check_parents(X, Y)
        basis = []
        for k in range(self.n):
            for a in range(X[k]):
                for b in range(Y[k]):
                    blocks = list(self.zero_morphism(X, Y).m)
                    E = sympy.zeros(X[k], Y[k])
                    E[a, b] = 1
                    blocks[k] = ImmutableMatrix(E)
                    basis.append(RingCategoryMorphism(X, Y, tuple(blocks)))
        return HomSpace(X, Y, basis)

    def entries(self, f: RingCategoryMorphism) -> list:
        return [x for A in f.m for x in A]

    def morphism_equal(self, f: RingCategoryMorphism, g: RingCategoryMorphism) -> bool:
        if f.domain != g.domain or f.codomain != g.codomain:
            return False
        return all(linalg.matrices_equal(A, B) for A, B in zip(f.m, g.m))

    def endomorphism_matrix(self, f: RingCategoryMorphism):
        return linalg.block_diagonal(f.m)

    # ------------------------------------------------------------------
    # Associators and braiding
    # ------------------------------------------------------------------

    def _all_simple(self, *objects: RingCategoryObject) -> bool:
        return all(self.is_simple(X) for X in objects)

    def _distribution_before(self, X, Y, Z, Xs, Ys, Zs) -> RingCategoryMorphism:
        """(X⊗Y)⊗Z → ⊕_{x,y,z} (x⊗y)⊗z."""
        idZ = self.id(Z)
        XY = [self.tensor_product(x, y) for x in Xs for y in Ys]
        return compose(
            self.tensor_product_morphisms(distribute_left(Xs, Y), idZ),
            self.tensor_product_morphisms(
                direct_sum_morphisms(*[distribute_right(x, Ys) for x in Xs]), idZ),
            distribute_left(XY, Z),
            direct_sum_morphisms(*[distribute_right(xy, Zs) for xy in XY]),
        )

    def _distribution_after(self, X, Y, Z, Xs, Ys, Zs) -> RingCategoryMorphism:
        """X⊗(Y⊗Z) → ⊕_{x,y,z} x⊗(y⊗z)."""
        idX = self.id(X)
        YZ = [self.tensor_product(y, z) for y in Ys for z in Zs]
        return compose(
            self.tensor_product_morphisms(idX, distribute_left(Ys, Z)),
            self.tensor_product_morphisms(
                idX, direct_sum_morphisms(*[distribute_right(y, Zs) for y in Ys])),
            distribute_left(Xs, self.tensor_product(Y, Z)),
            direct_sum_morphisms(*[distribute_right(x, YZ) for x in Xs]),
        )

    def associator(self, X: RingCategoryObject, Y: RingCategoryObject, Z: RingCategoryObject) -> RingCategoryMorphism:
        """(X⊗Y)⊗Z → X⊗(Y⊗Z)."""
        check_parents(X, Y, Z)
        key = (X.components, Y.components, Z.components)
        if key not in self._associator_cache:
            logger.debug("Computing associator for %s", key)
            self._associator_cache[key] = self._compute_associator(X, Y, Z, inverse=False)
        return self._associator_cache[key]

    def inv_associator(self, X: RingCategoryObject, Y: RingCategoryObject, Z: RingCategoryObject) -> RingCategoryMorphism:
        """X⊗(Y⊗Z) → (X⊗Y)⊗Z."""
        check_parents(X, Y, Z)
        key = (X.components, Y.components, Z.components)
        if key not in self._inv_associator_cache:
            self._inv_associator_cache[key] = self._compute_associator(X, Y, Z, inverse=True)
        return self._inv_associator_cache[key]

    def _compute_associator(self, X, Y, Z, inverse: bool) -> RingCategoryMorphism:
        dom = self.tensor_product(self.tensor_product(X, Y), Z)
        cod = self.tensor_product(X, self.tensor_product(Y, Z))
        if dom == self.zero():
            return self.zero_morphism(cod, dom) if inverse else self.zero_morphism(dom, cod)
        if self._all_simple(X, Y, Z):
            i, j, k = (W.components.index(1) for W in (X, Y, Z))
            f = RingCategoryMorphism(dom, cod, tuple(self.ass[i][j][k]))
            return self.inv(f) if inverse else f

        Xs, Ys, Zs = self.summands(X), self.summands(Y), self.summands(Z)
        before = self._distribution_before(X, Y, Z, Xs, Ys, Zs)
        after = self._distribution_after(X, Y, Z, Xs, Ys, Zs)
        if inverse:
            m = direct_sum_morphisms(*[self.inv_associator(x, y, z) for x in Xs for y in Ys for z in Zs])
            return compose(after, m, self.inv(before))
        m = direct_sum_morphisms(*[self.associator(x, y, z) for x in Xs for y in Ys for z in Zs])
        return compose(before, m, self.inv(after))

    def braiding(self, X: RingCategoryObject, Y: RingCategoryObject) -> RingCategoryMorphism:
        """X⊗Y → Y⊗X from the braiding data on simples."""
        if not self.is_braided():
            raise ValueError(f"{self.name} has no braiding")
        dom = self.tensor_product(X, Y)
        cod = self.tensor_product(Y, X)
        if dom == self.zero():
            return self.zero_morphism(dom, cod)
        if self._all_simple(X, Y):
            i, j = X.components.index(1), Y.components.index(1)
            return RingCategoryMorphism(dom, cod, tuple(self.braid[i][j]))

        Xs, Ys = self.summands(X), self.summands(Y)
        before = compose(distribute_left(Xs, Y),
                         direct_sum_morphisms(*[distribute_right(x, Ys) for x in Xs]))
        after = compose(distribute_left(Ys, X),
                        direct_sum_morphisms(*[distribute_right(y, Xs) for y in Ys]))
        S, _, projections = self.direct_sum(*[self.tensor_product(x, y) for x in Xs for y in Ys])
        T, inclusions, _ = self.direct_sum(*[self.tensor_product(y, x) for y in Ys for x in Xs])
        terms = []
        for a, x in enumerate(Xs):
            for b, y in enumerate(Ys):
                terms.append(compose(projections[a * len(Ys) + b],
                                     self.braiding(x, y),
                                     inclusions[b * len(Xs) + a]))
        return compose(before, sum_morphisms(terms, S, T), self.inv(after))

    def dim(self, X: RingCategoryObject):
        return linalg.normalize(super().dim(X))
