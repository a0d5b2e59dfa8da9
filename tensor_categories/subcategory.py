"""
Ring Subcategories

For a multi-ring category C with unit 𝟙 = ⊕ 𝟙ᵢ, the component 𝟙ᵢ C 𝟙ᵢ is a
ring category with unit 𝟙ᵢ. Objects and morphisms wrap ambient ones; only
the unit, the simples and the (co)evaluations differ from the ambient
structure.
"""

from dataclasses import dataclass
from typing import Any, List, Tuple

from .category import Category, HomSpace, Morphism, Object, compose
from .exceptions import NotRigidError, check_parents


@dataclass(frozen=True, repr=False)
class SubcategoryObject(Object):
    parent: "RingSubcategory"
    object: Object

    def __repr__(self):
        return f"(Subcategory) {self.object}"


@dataclass(eq=False, repr=False)
class SubcategoryMorphism(Morphism):
    domain: SubcategoryObject
    codomain: SubcategoryObject
    m: Morphism

    def __repr__(self):
        return f"(Subcategory) {self.m}"


class RingSubcategory(Category):
    """
    The i-th component category 𝟙ᵢ C 𝟙ᵢ.

    Attributes:
        category: Ambient multi-ring category
        index: Position of 𝟙ᵢ among the simple summands of the unit
        projector: The unit summand 𝟙ᵢ
        simples_list: Nonzero objects 𝟙ᵢ⊗s⊗𝟙ᵢ for the ambient simples s
    """

    def __init__(self, C: Category, i: int):
        if not C.is_multifusion():
            raise NotRigidError(f"{C} is not multifusion")
        self.category = C
        self.base_ring = C.base_ring
        self.index = i
        self.projector = C.decompose(C.one())[i][0]
        T = C.tensor_product
        components = [T(T(self.projector, s), self.projector) for s in C.simples()]
        self.simples_list = [s for s in components if s != C.zero()]

    def __repr__(self):
        return f"{self.index}-th component fusion category of {self.category}"

    def _wrap(self, X: Object) -> SubcategoryObject:
        return SubcategoryObject(self, X)

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def one(self) -> SubcategoryObject:
        return self._wrap(self.projector)

    def zero(self) -> SubcategoryObject:
        return self._wrap(self.category.zero())

    def simples(self) -> List[SubcategoryObject]:
        return [self._wrap(s) for s in self.simples_list]

    def is_semisimple(self) -> bool:
        return self.category.is_semisimple()

    def is_multifusion(self) -> bool:
        return self.category.is_multifusion()

    def is_fusion(self) -> bool:
        return self.category.is_multifusion()

    def tensor_product(self, X: SubcategoryObject, Y: SubcategoryObject) -> SubcategoryObject:
        check_parents(X, Y)
        return self._wrap(self.category.tensor_product(X.object, Y.object))

    def direct_sum(self, *objects: SubcategoryObject):
        if not objects:
            return self.zero(), [], []
        check_parents(*objects)
        S, inclusions, projections = self.category.direct_sum(*[X.object for X in objects])
        sub = self._wrap(S)
        incl = [SubcategoryMorphism(X, sub, i) for X, i in zip(objects, inclusions)]
        proj = [SubcategoryMorphism(sub, X, p) for X, p in zip(objects, projections)]
        return sub, incl, proj

    def direct_sum_pair(self, X, Y):
        return self.direct_sum(X, Y)

    def direct_sum_decomposition(self, X: SubcategoryObject):
        S, iso, inclusions, projections = self.category.direct_sum_decomposition(X.object)
        sub = self._wrap(S)
        incl = [SubcategoryMorphism(self._wrap(i.domain), sub, i) for i in inclusions]
        proj = [SubcategoryMorphism(sub, self._wrap(p.codomain), p) for p in projections]
        return sub, SubcategoryMorphism(X, sub, iso), incl, proj

    def dual(self, X: SubcategoryObject) -> SubcategoryObject:
        return self._wrap(self.category.dual(X.object))

    def is_simple(self, X: SubcategoryObject) -> bool:
        return self.category.is_simple(X.object)

    def is_isomorphic(self, X: SubcategoryObject, Y: SubcategoryObject):
        found, iso = self.category.is_isomorphic(X.object, Y.object)
        if not found:
            return False, None
        return True, SubcategoryMorphism(X, Y, iso)

    def decompose(self, X: SubcategoryObject) -> List[Tuple[SubcategoryObject, int]]:
        return [(self._wrap(s), k) for s, k in self.category.decompose(X.object)]

    def fpdim(self, X: SubcategoryObject):
        return self.category.fpdim(X.object)

    def dim_category(self):
        return sum(self.dim(s) ** 2 for s in self.simples())

    # ------------------------------------------------------------------
    # Morphisms
    # ------------------------------------------------------------------

    def id(self, X: SubcategoryObject) -> SubcategoryMorphism:
        return SubcategoryMorphism(X, X, self.category.id(X.object))

    def zero_morphism(self, X: SubcategoryObject, Y: SubcategoryObject) -> SubcategoryMorphism:
        return SubcategoryMorphism(X, Y, self.category.zero_morphism(X.object, Y.object))

    def compose(self, f: SubcategoryMorphism, g: SubcategoryMorphism) -> SubcategoryMorphism:
        return SubcategoryMorphism(f.domain, g.codomain, self.category.compose(f.m, g.m))

    def add(self, f: SubcategoryMorphism, g: SubcategoryMorphism) -> SubcategoryMorphism:
        return SubcategoryMorphism(f.domain, f.codomain, self.category.add(f.m, g.m))

    def scale(self, k: Any, f: SubcategoryMorphism) -> SubcategoryMorphism:
        return SubcategoryMorphism(f.domain, f.codomain, self.category.scale(k, f.m))

    def tensor_product_morphisms(self, f: SubcategoryMorphism, g: SubcategoryMorphism) -> SubcategoryMorphism:
        dom = self.tensor_product(f.domain, g.domain)
        cod = self.tensor_product(f.codomain, g.codomain)
        return SubcategoryMorphism(dom, cod, self.category.tensor_product_morphisms(f.m, g.m))

    def direct_sum_morphisms_pair(self, f: SubcategoryMorphism, g: SubcategoryMorphism) -> SubcategoryMorphism:
        dom = self.direct_sum(f.domain, g.domain)[0]
        cod = self.direct_sum(f.codomain, g.codomain)[0]
        return SubcategoryMorphism(dom, cod, self.category.direct_sum_morphisms_pair(f.m, g.m))

    def inv(self, f: SubcategoryMorphism) -> SubcategoryMorphism:
        return SubcategoryMorphism(f.codomain, f.domain, self.category.inv(f.m))

    def left_inverse(self, f: SubcategoryMorphism) -> SubcategoryMorphism:
        return SubcategoryMorphism(f.codomain, f.domain, self.category.left_inverse(f.m))

    def right_inverse(self, f: SubcategoryMorphism) -> SubcategoryMorphism:
        return SubcategoryMorphism(f.codomain, f.domain, self.category.right_inverse(f.m))

    def is_isomorphism(self, f: SubcategoryMorphism) -> bool:
        return self.category.is_isomorphism(f.m)

    def kernel(self, f: SubcategoryMorphism):
        K, incl = self.category.kernel(f.m)
        sub = self._wrap(K)
        return sub, SubcategoryMorphism(sub, f.domain, incl)

    def cokernel(self, f: SubcategoryMorphism):
        Q, proj = self.category.cokernel(f.m)
        sub = self._wrap(Q)
        return sub, SubcategoryMorphism(f.codomain, sub, proj)

    def hom(self, X: SubcategoryObject, Y: SubcategoryObject) -> HomSpace:
        return HomSpace(X, Y, [SubcategoryMorphism(X, Y, f) for f in self.category.hom(X.object, Y.object)])

    def entries(self, f: SubcategoryMorphism) -> list:
        return self.category.entries(f.m)

    def morphism_equal(self, f: SubcategoryMorphism, g: SubcategoryMorphism) -> bool:
        return self.category.morphism_equal(f.m, g.m)

    def endomorphism_matrix(self, f: SubcategoryMorphism):
        return self.category.endomorphism_matrix(f.m)

    # ------------------------------------------------------------------
    # Structure morphisms
    # ------------------------------------------------------------------

    def associator(self, X, Y, Z) -> SubcategoryMorphism:
        dom = self.tensor_product(self.tensor_product(X, Y), Z)
        cod = self.tensor_product(X, self.tensor_product(Y, Z))
        return SubcategoryMorphism(dom, cod, self.category.associator(X.object, Y.object, Z.object))

    def inv_associator(self, X, Y, Z) -> SubcategoryMorphism:
        dom = self.tensor_product(X, self.tensor_product(Y, Z))
        cod = self.tensor_product(self.tensor_product(X, Y), Z)
        return SubcategoryMorphism(dom, cod, self.category.inv_associator(X.object, Y.object, Z.object))

    def _unit_projection(self) -> Morphism:
        C = self.category
        return C.hom(C.one(), self.projector).basis[0]

    def _unit_inclusion(self) -> Morphism:
        C = self.category
        return C.hom(self.projector, C.one()).basis[0]

    def ev(self, X: SubcategoryObject) -> SubcategoryMorphism:
        """Ambient evaluation followed by the projection 𝟙 → 𝟙ᵢ."""
        dom = self.tensor_product(self.dual(X), X)
        return SubcategoryMorphism(dom, self.one(), compose(self.category.ev(X.object), self._unit_projection()))

    def coev(self, X: SubcategoryObject) -> SubcategoryMorphism:
        """The inclusion 𝟙ᵢ → 𝟙 followed by the ambient coevaluation."""
        cod = self.tensor_product(X, self.dual(X))
        return SubcategoryMorphism(self.one(), cod, compose(self._unit_inclusion(), self.category.coev(X.object)))

    def spherical(self, X: SubcategoryObject) -> SubcategoryMorphism:
        return SubcategoryMorphism(X, self.dual(self.dual(X)), self.category.spherical(X.object))


def ring_subcategories(C: Category) -> List[RingSubcategory]:
    """All component categories 𝟙ᵢ C 𝟙ᵢ of a multi-ring category."""
    return [RingSubcategory(C, i) for i in range(len(C.decompose(C.one())))]
