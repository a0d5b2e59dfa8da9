"""
Arrow Categories

Mor(C) for an abelian category C: objects are morphisms f: X → Y of C and a
morphism from f: X → Y to g: A → B is a commuting square (φ: X → A, ψ: Y → B)
with compose(f, ψ) == compose(φ, g).

Mor(C) is abelian whenever C is, with kernels and cokernels taken on both
sides. If C is monoidal the pushout product makes Mor(C) monoidal.
"""

from dataclasses import dataclass
from typing import Any, List

from . import linalg
from .category import (
    Category,
    HomSpace,
    Morphism,
    Object,
    compose,
    horizontal_direct_sum,
    sum_morphisms,
)
from .exceptions import check_parents


@dataclass(eq=False, repr=False)
class ArrowObject(Object):
    parent: "ArrowCategory"
    morphism: Morphism

    @property
    def source(self) -> Object:
        return self.morphism.domain

    @property
    def target(self) -> Object:
        return self.morphism.codomain

    def __eq__(self, other):
        if not isinstance(other, ArrowObject):
            return NotImplemented
        return self.parent is other.parent and self.morphism == other.morphism

    __hash__ = None

    def __repr__(self):
        return f"Arrow object: {self.source} → {self.target}"


@dataclass(eq=False, repr=False)
class ArrowMorphism(Morphism):
    """A commuting square given by its left and right components."""
    domain: ArrowObject
    codomain: ArrowObject
    left: Morphism
    right: Morphism

    def __repr__(self):
        return f"Morphism in arrow category defined by {self.left} and {self.right}"


class ArrowCategory(Category):
    """The category of morphisms of an abelian category."""

    def __init__(self, C: Category):
        self.category = C
        self.base_ring = C.base_ring

    def __repr__(self):
        return f"Category of morphisms in {self.category}"

    def __call__(self, f: Morphism) -> ArrowObject:
        return ArrowObject(self, f)

    def morphism(self, X: ArrowObject, Y: ArrowObject, left: Morphism, right: Morphism) -> ArrowMorphism:
        return ArrowMorphism(X, Y, left, right)

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def zero(self) -> ArrowObject:
        Z = self.category.zero()
        return ArrowObject(self, self.category.zero_morphism(Z, Z))

    def one(self) -> ArrowObject:
        C = self.category
        return ArrowObject(self, C.zero_morphism(C.zero(), C.one()))

    def simples(self) -> List[ArrowObject]:
        """The arrows 0 → s and s → 0 for every simple s."""
        C = self.category
        Z = C.zero()
        result = []
        for s in C.simples():
            result.append(ArrowObject(self, C.zero_morphism(Z, s)))
            result.append(ArrowObject(self, C.zero_morphism(s, Z)))
        return result

    def indecomposables(self) -> List[ArrowObject]:
        """The simples together with every basis morphism between simples."""
        C = self.category
        Z = C.zero()
        S = C.simples()
        result = []
        for s in S:
            result.append(ArrowObject(self, C.zero_morphism(Z, s)))
            result.append(ArrowObject(self, C.zero_morphism(s, Z)))
            for t in S:
                result.extend(ArrowObject(self, f) for f in C.hom(s, t))
        return result

    def is_semisimple(self) -> bool:
        return False

    def direct_sum(self, *objects: ArrowObject):
        if not objects:
            return self.zero(), [], []
        check_parents(*objects)
        C = self.category
        _, source_incl, source_proj = C.direct_sum(*[X.source for X in objects])
        _, target_incl, target_proj = C.direct_sum(*[X.target for X in objects])
        S = ArrowObject(self, C.direct_sum_morphisms(*[X.morphism for X in objects]))
        incl = [ArrowMorphism(X, S, i, j) for X, i, j in zip(objects, source_incl, target_incl)]
        proj = [ArrowMorphism(S, X, p, q) for X, p, q in zip(objects, source_proj, target_proj)]
        return S, incl, proj

    def direct_sum_pair(self, X, Y):
        return self.direct_sum(X, Y)

    # ------------------------------------------------------------------
    # Morphisms
    # ------------------------------------------------------------------

    def id(self, X: ArrowObject) -> ArrowMorphism:
        C = self.category
        return ArrowMorphism(X, X, C.id(X.source), C.id(X.target))

    def zero_morphism(self, X: ArrowObject, Y: ArrowObject) -> ArrowMorphism:
        C = self.category
        return ArrowMorphism(X, Y, C.zero_morphism(X.source, Y.source), C.zero_morphism(X.target, Y.target))

    def compose(self, f: ArrowMorphism, g: ArrowMorphism) -> ArrowMorphism:
        C = self.category
        return ArrowMorphism(f.domain, g.codomain, C.compose(f.left, g.left), C.compose(f.right, g.right))

    def add(self, f: ArrowMorphism, g: ArrowMorphism) -> ArrowMorphism:
        C = self.category
        return ArrowMorphism(f.domain, f.codomain, C.add(f.left, g.left), C.add(f.right, g.right))

    def scale(self, k: Any, f: ArrowMorphism) -> ArrowMorphism:
        C = self.category
        return ArrowMorphism(f.domain, f.codomain, C.scale(k, f.left), C.scale(k, f.right))

    def direct_sum_morphisms_pair(self, f: ArrowMorphism, g: ArrowMorphism) -> ArrowMorphism:
        C = self.category
        dom = self.direct_sum(f.domain, g.domain)[0]
        cod = self.direct_sum(f.codomain, g.codomain)[0]
        return ArrowMorphism(dom, cod, C.direct_sum_morphisms_pair(f.left, g.left),
                             C.direct_sum_morphisms_pair(f.right, g.right))

    def entries(self, f: ArrowMorphism) -> list:
        return self.category.entries(f.left) + self.category.entries(f.right)

    def morphism_equal(self, f: ArrowMorphism, g: ArrowMorphism) -> bool:
        C = self.category
        return C.morphism_equal(f.left, g.left) and C.morphism_equal(f.right, g.right)

    def endomorphism_matrix(self, f: ArrowMorphism):
        C = self.category
        return linalg.block_diagonal([C.endomorphism_matrix(f.left), C.endomorphism_matrix(f.right)])

    def is_commuting(self, f: ArrowMorphism) -> bool:
        C = self.category
        return C.morphism_equal(C.compose(f.domain.morphism, f.right), C.compose(f.left, f.codomain.morphism))

    def kernel(self, f: ArrowMorphism):
        C = self.category
        _, k_left = C.kernel(f.left)
        _, k_right = C.kernel(f.right)
        K = ArrowObject(self, compose(k_left, f.domain.morphism, C.left_inverse(k_right)))
        return K, ArrowMorphism(K, f.domain, k_left, k_right)

    def cokernel(self, f: ArrowMorphism):
        C = self.category
        _, c_left = C.cokernel(f.left)
        _, c_right = C.cokernel(f.right)
        Q = ArrowObject(self, compose(C.right_inverse(c_left), f.codomain.morphism, c_right))
        return Q, ArrowMorphism(f.codomain, Q, c_left, c_right)

    def hom(self, X: ArrowObject, Y: ArrowObject) -> HomSpace:
        """
        Commuting squares from X to Y.

        Solves compose(X, ψ) - compose(φ, Y) = 0 for φ and ψ in the bases of
        Hom(source X, source Y) and Hom(target X, target Y).
        """
        C = self.category
        left_basis = C.hom(X.source, Y.source).basis
        right_basis = C.hom(X.target, Y.target).basis
        n, m = len(left_basis), len(right_basis)
        if n + m == 0:
            return HomSpace(X, Y, [])

        columns = [C.entries(C.compose(phi, Y.morphism)) for phi in left_basis]
        columns += [[-x for x in C.entries(C.compose(X.morphism, psi))] for psi in right_basis]
        rows = [list(r) for r in zip(*columns)]
        M = linalg.matrix(rows) if rows else linalg.zero_matrix(0, n + m)
        N = linalg.right_kernel(M)

        basis = []
        for c in range(N.cols):
            left = sum_morphisms([C.scale(N[i, c], phi) for i, phi in enumerate(left_basis)],
                                 X.source, Y.source)
            right = sum_morphisms([C.scale(N[n + j, c], psi) for j, psi in enumerate(right_basis)],
                                  X.target, Y.target)
            basis.append(ArrowMorphism(X, Y, left, right))
        return HomSpace(X, Y, basis)

    # ------------------------------------------------------------------
    # Pushout product
    # ------------------------------------------------------------------

    def _pushout_square(self, f: Morphism, g: Morphism):
        """
        The pushout P of A⊗D ← A⊗C → B⊗C for f: A → B and g: C → D.

        Returns:
            (q, s) with q: (A⊗D)⊕(B⊗C) → P the quotient and s a section of q
        """
        C = self.category
        A, B = f.domain, f.codomain
        c, D = g.domain, g.codomain
        S, inclusions, _ = C.direct_sum(C.tensor_product(A, D), C.tensor_product(B, c))
        relation = sum_morphisms([
            C.compose(C.tensor_product_morphisms(C.id(A), g), inclusions[0]),
            C.compose(C.scale(-1, C.tensor_product_morphisms(f, C.id(c))), inclusions[1]),
        ], C.tensor_product(A, c), S)
        _, q = C.cokernel(relation)
        return q, C.right_inverse(q)

    def pushout_product(self, f: Morphism, g: Morphism) -> Morphism:
        """f □ g: (A⊗D) ⊔_{A⊗C} (B⊗C) → B⊗D."""
        C = self.category
        q, s = self._pushout_square(f, g)
        B, D = f.codomain, g.codomain
        h = horizontal_direct_sum([C.tensor_product_morphisms(f, C.id(D)),
                                   C.tensor_product_morphisms(C.id(B), g)])
        return C.compose(s, h)

    def tensor_product(self, X: ArrowObject, Y: ArrowObject) -> ArrowObject:
        check_parents(X, Y)
        return ArrowObject(self, self.pushout_product(X.morphism, Y.morphism))

    def tensor_product_morphisms(self, f: ArrowMorphism, g: ArrowMorphism) -> ArrowMorphism:
        C = self.category
        _, s = self._pushout_square(f.domain.morphism, g.domain.morphism)
        q, _ = self._pushout_square(f.codomain.morphism, g.codomain.morphism)
        middle = C.direct_sum_morphisms(C.tensor_product_morphisms(f.left, g.right),
                                        C.tensor_product_morphisms(f.right, g.left))
        left = compose(s, middle, q)
        right = C.tensor_product_morphisms(f.right, g.right)
        return ArrowMorphism(self.tensor_product(f.domain, g.domain),
                             self.tensor_product(f.codomain, g.codomain), left, right)
