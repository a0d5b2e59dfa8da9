"""
Centralizer Categories

The Müger centralizer of a tensor category C relative to a topologizing set
of simples S. Objects are objects X of C together with a half-braiding
γ_s: X⊗s → s⊗X for every s ∈ S. With S all simples of C this is the Drinfeld
center.

Simple objects are not given but discovered: every simple of C is induced,
the induced objects are grouped by their underlying objects, and the
endomorphism ring of each representative induction is split into simple
summands. Hom spaces are computed through the induction adjunction and the
central projection, so only linear algebra over C is needed.

Morphisms act in the same row-vector convention as the ambient category:
compose(f, g) is "f then g".
"""

import logging
import os
import random
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import networkx as nx
import sympy
from sympy import ImmutableMatrix

from . import linalg
from .category import (
    Category,
    HomSpace,
    Morphism,
    Object,
    _splitting_candidates,
    compose,
    decompose_by_endomorphism_ring,
    decompose_by_simples,
    is_simple,
    linearly_independent,
    sum_morphisms,
    unique_simples,
)
from .constants import DEFAULT_CONFIG, ComputationConfig
from .exceptions import CategoryError, NotSemisimpleError, check_parents

logger = logging.getLogger(__name__)


# ============================================================================
# Objects and morphisms
# ============================================================================

@dataclass(eq=False, repr=False)
class CentralizerObject(Object):
    """
    An object of C with a half-braiding.

    Attributes:
        parent: The centralizer category
        object: Underlying object of the ambient category
        half_braidings: γ_s: object⊗s → s⊗object, one per subcategory simple
    """
    parent: "CentralizerCategory"
    object: Object
    half_braidings: Tuple[Morphism, ...]

    def __eq__(self, other):
        if not isinstance(other, CentralizerObject):
            return NotImplemented
        return self.parent is other.parent and self.equal_without_parent(other)

    __hash__ = None

    def equal_without_parent(self, other: "CentralizerObject") -> bool:
        """Same underlying object and the same half-braiding family."""
        if self.object != other.object:
            return False
        return all(a == b for a, b in zip(self.half_braidings, other.half_braidings))

    def __repr__(self):
        return f"Central object: {self.object}"


@dataclass(eq=False, repr=False)
class CentralizerMorphism(Morphism):
    """A morphism of underlying objects intertwining the half-braidings."""
    domain: CentralizerObject
    codomain: CentralizerObject
    m: Morphism

    def __repr__(self):
        return f"Morphism in {self.domain.parent}"


# ============================================================================
# Category
# ============================================================================

def topologize(C: Category, S: Sequence[Object]) -> List[Object]:
    """
    Close a list of simples under tensor products, duals and simple summands.

    The unit's simple summands are added first; the given order is kept.
    """
    closure: List[Object] = []

    def add(X: Object) -> bool:
        for s, _ in C.decompose(X):
            if not any(s == t for t in closure):
                closure.append(s)
                return True
        return False

    add(C.one())
    for s in S:
        add(s)
    changed = True
    while changed:
        changed = False
        for a in list(closure):
            changed |= add(C.dual(a))
            for b in list(closure):
                changed |= add(C.tensor_product(a, b))
    return closure


class CentralizerCategory(Category):
    """
    The centralizer of a topologizing subcategory inside a fusion category.

    Attributes:
        category: Ambient category
        subcategory_simples: The simples S indexing every half-braiding family
        config: Parallelism and retry settings
    """

    def __init__(self, C: Category, S: Sequence[Object], config: ComputationConfig = DEFAULT_CONFIG,
                 check: bool = True):
        if not C.is_semisimple():
            raise NotSemisimpleError(f"Centralizer requires a semisimple category, got {C}")
        if not C.is_simple(C.one()):
            raise ValueError(f"Centralizer requires a simple unit, {C} has unit {C.one()}")
        self.category = C
        self.base_ring = C.base_ring
        self.config = config
        self.subcategory_simples = topologize(C, S) if check else list(S)
        self._simples: Optional[List[CentralizerObject]] = None
        self._induction_generators: Optional[List[Object]] = None
        self._inductions: Dict[Object, CentralizerObject] = {}
        self._subcategory_dim = None
        self._unit_index = self._subcategory_index(C.one())
        if self._unit_index is None:
            raise ValueError(f"Subcategory simples {self.subcategory_simples} do not contain the unit {C.one()}")

    def __repr__(self):
        return f"Drinfeld centralizer of {self.category}"

    def _map(self, fn: Callable, items: Sequence) -> list:
        if self.config.parallel and len(items) > 1:
            max_workers = self.config.max_workers or os.cpu_count()
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                return list(executor.map(fn, items))
        return [fn(x) for x in items]

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    def _object(self, X: Object, half_braidings: Sequence[Morphism]) -> CentralizerObject:
        return CentralizerObject(self, X, tuple(half_braidings))

    def morphism(self, X: CentralizerObject, Y: CentralizerObject, f: Morphism) -> CentralizerMorphism:
        return CentralizerMorphism(X, Y, f)

    def _subcategory_index(self, Y: Object) -> Optional[int]:
        for k, s in enumerate(self.subcategory_simples):
            if s == Y:
                return k
        return None

    def subcategory_dim(self):
        """Σ dim(s)² over the subcategory simples."""
        if self._subcategory_dim is None:
            C = self.category
            self._subcategory_dim = linalg.normalize(sum(C.dim(s) ** 2 for s in self.subcategory_simples))
        return self._subcategory_dim

    # ------------------------------------------------------------------
    # Basic structure
    # ------------------------------------------------------------------

    def one(self) -> CentralizerObject:
        C = self.category
        return self._object(C.one(), [C.id(s) for s in self.subcategory_simples])

    def zero(self) -> CentralizerObject:
        C = self.category
        Z = C.zero()
        return self._object(Z, [C.zero_morphism(C.tensor_product(Z, s), C.tensor_product(s, Z))
                                for s in self.subcategory_simples])

    def is_semisimple(self) -> bool:
        return True

    def id(self, X: CentralizerObject) -> CentralizerMorphism:
        return CentralizerMorphism(X, X, self.category.id(X.object))

    def zero_morphism(self, X: CentralizerObject, Y: CentralizerObject) -> CentralizerMorphism:
        return CentralizerMorphism(X, Y, self.category.zero_morphism(X.object, Y.object))

    def compose(self, f: CentralizerMorphism, g: CentralizerMorphism) -> CentralizerMorphism:
        return CentralizerMorphism(f.domain, g.codomain, self.category.compose(f.m, g.m))

    def add(self, f: CentralizerMorphism, g: CentralizerMorphism) -> CentralizerMorphism:
        return CentralizerMorphism(f.domain, f.codomain, self.category.add(f.m, g.m))

    def scale(self, k: Any, f: CentralizerMorphism) -> CentralizerMorphism:
        return CentralizerMorphism(f.domain, f.codomain, self.category.scale(k, f.m))

    def inv(self, f: CentralizerMorphism) -> CentralizerMorphism:
        return CentralizerMorphism(f.codomain, f.domain, self.category.inv(f.m))

    def entries(self, f: CentralizerMorphism) -> list:
        return self.category.entries(f.m)

    def morphism_equal(self, f: CentralizerMorphism, g: CentralizerMorphism) -> bool:
        return self.category.morphism_equal(f.m, g.m)

    def endomorphism_matrix(self, f: CentralizerMorphism):
        return self.category.endomorphism_matrix(f.m)

    # ------------------------------------------------------------------
    # Half-braidings
    # ------------------------------------------------------------------

    def half_braiding(self, X: CentralizerObject, Y: Object) -> Morphism:
        """
        The half-braiding γ_X(Y): X⊗Y → Y⊗X for any object Y of the subcategory.

        Y is split into simples and the stored half-braidings of the
        summands are reassembled along inclusions and projections.

        Raises:
            ValueError: If a simple summand of Y is not in the subcategory
        """
        C = self.category
        x = X.object
        k = self._subcategory_index(Y)
        if k is not None:
            return X.half_braidings[k]
        if C.is_simple(Y):
            for k, s in enumerate(self.subcategory_simples):
                found, iso = C.is_isomorphic(Y, s)
                if found:
                    return compose(C.tensor_product_morphisms(C.id(x), iso),
                                   X.half_braidings[k],
                                   C.tensor_product_morphisms(C.inv(iso), C.id(x)))
            raise ValueError(f"{Y} is not in the subcategory")

        S, iso, inclusions, projections = C.direct_sum_decomposition(Y)
        idx = C.id(x)
        terms = []
        for i, p in zip(inclusions, projections):
            k = self._subcategory_index(i.domain)
            if k is None:
                raise ValueError(f"Summand {i.domain} of {Y} is not in the subcategory")
            terms.append(compose(C.tensor_product_morphisms(idx, p),
                                 X.half_braidings[k],
                                 C.tensor_product_morphisms(i, idx)))
        braid = sum_morphisms(terms, C.tensor_product(x, S), C.tensor_product(S, x))
        return compose(C.tensor_product_morphisms(idx, iso), braid,
                       C.tensor_product_morphisms(C.inv(iso), idx))

    def is_central(self, f: Morphism, X: CentralizerObject, Y: CentralizerObject) -> bool:
        """Whether an ambient morphism f: X → Y intertwines the half-braidings."""
        C = self.category
        for s, gx, gy in zip(self.subcategory_simples, X.half_braidings, Y.half_braidings):
            lhs = compose(gx, C.tensor_product_morphisms(C.id(s), f))
            rhs = compose(C.tensor_product_morphisms(f, C.id(s)), gy)
            if not C.morphism_equal(lhs, rhs):
                return False
        return True

    # ------------------------------------------------------------------
    # Monoidal structure
    # ------------------------------------------------------------------

    def direct_sum(self, *objects: CentralizerObject):
        if not objects:
            return self.zero(), [], []
        check_parents(*objects)
        C = self.category
        Z, inclusions, projections = C.direct_sum(*[X.object for X in objects])
        braidings = []
        for k, s in enumerate(self.subcategory_simples):
            ids = C.id(s)
            terms = [compose(C.tensor_product_morphisms(p, ids), X.half_braidings[k],
                             C.tensor_product_morphisms(ids, i))
                     for X, i, p in zip(objects, inclusions, projections)]
            braidings.append(sum_morphisms(terms, C.tensor_product(Z, s), C.tensor_product(s, Z)))
        CZ = self._object(Z, braidings)
        incl = [CentralizerMorphism(X, CZ, i) for X, i in zip(objects, inclusions)]
        proj = [CentralizerMorphism(CZ, X, p) for X, p in zip(objects, projections)]
        return CZ, incl, proj

    def direct_sum_pair(self, X, Y):
        return self.direct_sum(X, Y)

    def direct_sum_morphisms_pair(self, f: CentralizerMorphism, g: CentralizerMorphism) -> CentralizerMorphism:
        dom = self.direct_sum(f.domain, g.domain)[0]
        cod = self.direct_sum(f.codomain, g.codomain)[0]
        return CentralizerMorphism(dom, cod, self.category.direct_sum_morphisms_pair(f.m, g.m))

    def tensor_product(self, X: CentralizerObject, Y: CentralizerObject) -> CentralizerObject:
        check_parents(X, Y)
        C = self.category
        x, y = X.object, Y.object
        a, inv_a = C.associator, C.inv_associator
        braidings = []
        for s, gx, gy in zip(self.subcategory_simples, X.half_braidings, Y.half_braidings):
            braidings.append(compose(
                a(x, y, s),
                C.tensor_product_morphisms(C.id(x), gy),
                inv_a(x, s, y),
                C.tensor_product_morphisms(gx, C.id(y)),
                a(s, x, y),
            ))
        return self._object(C.tensor_product(x, y), braidings)

    def tensor_product_morphisms(self, f: CentralizerMorphism, g: CentralizerMorphism) -> CentralizerMorphism:
        dom = self.tensor_product(f.domain, g.domain)
        cod = self.tensor_product(f.codomain, g.codomain)
        return CentralizerMorphism(dom, cod, self.category.tensor_product_morphisms(f.m, g.m))

    def associator(self, X, Y, Z) -> CentralizerMorphism:
        dom = self.tensor_product(self.tensor_product(X, Y), Z)
        cod = self.tensor_product(X, self.tensor_product(Y, Z))
        return CentralizerMorphism(dom, cod, self.category.associator(X.object, Y.object, Z.object))

    def inv_associator(self, X, Y, Z) -> CentralizerMorphism:
        dom = self.tensor_product(X, self.tensor_product(Y, Z))
        cod = self.tensor_product(self.tensor_product(X, Y), Z)
        return CentralizerMorphism(dom, cod, self.category.inv_associator(X.object, Y.object, Z.object))

    # ------------------------------------------------------------------
    # Duality and traces
    # ------------------------------------------------------------------

    def dual(self, X: CentralizerObject) -> CentralizerObject:
        """The dual X* with the half-braiding transported through ev and coev."""
        C = self.category
        x = X.object
        dx = C.dual(x)
        a, inv_a = C.associator, C.inv_associator
        e, c = C.ev(x), C.coev(x)
        idd = C.id(dx)
        braidings = []
        for s, gx in zip(self.subcategory_simples, X.half_braidings):
            ds = C.id(s)
            braidings.append(compose(
                C.tensor_product_morphisms(C.id(C.tensor_product(dx, s)), c),
                a(dx, s, C.tensor_product(x, dx)),
                C.tensor_product_morphisms(idd, inv_a(s, x, dx)),
                C.tensor_product_morphisms(idd, C.tensor_product_morphisms(C.inv(gx), idd)),
                C.tensor_product_morphisms(idd, a(x, s, dx)),
                inv_a(dx, x, C.tensor_product(s, dx)),
                C.tensor_product_morphisms(e, C.tensor_product_morphisms(ds, idd)),
            ))
        return self._object(dx, braidings)

    def ev(self, X: CentralizerObject) -> CentralizerMorphism:
        return CentralizerMorphism(self.tensor_product(self.dual(X), X), self.one(), self.category.ev(X.object))

    def coev(self, X: CentralizerObject) -> CentralizerMorphism:
        return CentralizerMorphism(self.one(), self.tensor_product(X, self.dual(X)), self.category.coev(X.object))

    def spherical(self, X: CentralizerObject) -> CentralizerMorphism:
        return CentralizerMorphism(X, self.dual(self.dual(X)), self.category.spherical(X.object))

    def tr(self, f: CentralizerMorphism) -> CentralizerMorphism:
        one = self.one()
        return CentralizerMorphism(one, one, self.category.tr(f.m))

    def dim(self, X: CentralizerObject):
        return self.category.dim(X.object)

    def fpdim(self, X: CentralizerObject):
        return self.category.fpdim(X.object)

    # ------------------------------------------------------------------
    # Kernels and images
    # ------------------------------------------------------------------

    def kernel(self, f: CentralizerMorphism):
        C = self.category
        K, incl = C.kernel(f.m)
        if K == C.zero():
            Z = self.zero()
            return Z, self.zero_morphism(Z, f.domain)
        back = C.left_inverse(incl)
        braidings = [compose(C.tensor_product_morphisms(incl, C.id(s)), g,
                             C.tensor_product_morphisms(C.id(s), back))
                     for s, g in zip(self.subcategory_simples, f.domain.half_braidings)]
        Z = self._object(K, braidings)
        return Z, CentralizerMorphism(Z, f.domain, incl)

    def cokernel(self, f: CentralizerMorphism):
        C = self.category
        Q, proj = C.cokernel(f.m)
        if Q == C.zero():
            Z = self.zero()
            return Z, self.zero_morphism(f.codomain, Z)
        section = C.right_inverse(proj)
        braidings = [compose(C.tensor_product_morphisms(section, C.id(s)), g,
                             C.tensor_product_morphisms(C.id(s), proj))
                     for s, g in zip(self.subcategory_simples, f.codomain.half_braidings)]
        Z = self._object(Q, braidings)
        return Z, CentralizerMorphism(f.codomain, Z, proj)

    def image(self, f: CentralizerMorphism):
        """The image of f with its inclusion into the codomain."""
        _, proj = self.cokernel(f)
        return self.kernel(proj)

    # ------------------------------------------------------------------
    # Central projection
    # ------------------------------------------------------------------

    def central_projection(self, dom: CentralizerObject, cod: CentralizerObject, f: Morphism,
                           simples: Optional[Sequence[Object]] = None) -> CentralizerMorphism:
        """
        Average an ambient morphism f: F(dom) → F(cod) into a central morphism.

        Each subcategory simple s contributes dim(s) times the conjugate of f
        by the half-braidings of dom and cod; the sum is divided by
        Σ dim(s)². The result is an idempotent operation on Hom(F dom, F cod).

        Args:
            dom: Domain in the centralizer
            cod: Codomain in the centralizer
            f: Ambient morphism between the underlying objects
            simples: Subcategory simples to average over, all by default

        Returns:
            A morphism dom → cod
        """
        C = self.category
        X, Y = f.domain, f.codomain
        a, inv_a = C.associator, C.inv_associator
        idX, idY = C.id(X), C.id(Y)
        S = self.subcategory_simples if simples is None else simples
        proj = C.zero_morphism(X, Y)
        for s in S:
            k = self._subcategory_index(s)
            ds = C.dual(s)
            phi = compose(
                C.tensor_product_morphisms(idX, C.coev(s)),
                inv_a(X, s, ds),
                C.tensor_product_morphisms(dom.half_braidings[k], C.id(ds)),
                C.tensor_product_morphisms(C.tensor_product_morphisms(C.id(s), f), C.id(ds)),
                a(s, Y, ds),
                C.tensor_product_morphisms(C.spherical(s), self.half_braiding(cod, ds)),
                inv_a(C.dual(ds), ds, Y),
                C.tensor_product_morphisms(C.ev(ds), idY),
            )
            proj = C.add(proj, C.scale(C.dim(s), phi))
        return CentralizerMorphism(dom, cod, C.scale(1 / self.subcategory_dim(), proj))

    # ------------------------------------------------------------------
    # Induction
    # ------------------------------------------------------------------

    def induction_restriction(self, X: Object) -> Object:
        """The underlying object ⊕_s (s⊗X)⊗s* of the induction of X."""
        C = self.category
        parts = [C.tensor_product(C.tensor_product(s, X), C.dual(s)) for s in self.subcategory_simples]
        return C.direct_sum(*parts)[0]

    def _dual_basis(self, fs: Sequence[Morphism], Y: Object, t: Object) -> List[Morphism]:
        """The basis g_a of Hom(Y, t) with compose(f_b, g_a) = δ_ab id for f_a ∈ Hom(t, Y)."""
        C = self.category
        others = C.hom(Y, t).basis
        P = ImmutableMatrix([[C.scalar(C.compose(f, g)) for g in others] for f in fs])
        Q = linalg.inverse(P.T)
        return [sum_morphisms([C.scale(Q[a, b], g) for b, g in enumerate(others)], Y, t)
                for a in range(len(fs))]

    def _induction_block(self, X: Object, Y: Object, si: Object, sj: Object) -> Optional[Morphism]:
        """
        The block ((si⊗X)⊗si*)⊗Y → Y⊗((sj⊗X)⊗sj*) of the induced half-braiding.

        None if si is not a summand of Y⊗sj.
        """
        C = self.category
        a, inv_a = C.associator, C.inv_associator
        T = C.tensor_product
        tm = C.tensor_product_morphisms
        fs = C.hom(si, T(Y, sj)).basis
        if not fs:
            return None
        gs = self._dual_basis(fs, T(Y, sj), si)
        di, dj = C.dual(si), C.dual(sj)
        idX, idY, iddj = C.id(X), C.id(Y), C.id(dj)
        terms = []
        for f, g in zip(fs, gs):
            mate = compose(
                tm(C.id(di), tm(idY, C.coev(sj))),
                tm(C.id(di), inv_a(Y, sj, dj)),
                tm(C.id(di), tm(g, iddj)),
                inv_a(di, si, dj),
                tm(C.ev(si), iddj),
            )
            terms.append(compose(
                a(T(si, X), di, Y),
                tm(C.id(T(si, X)), mate),
                tm(tm(f, idX), iddj),
                tm(a(Y, sj, X), iddj),
                a(Y, T(sj, X), dj),
            ))
        return sum_morphisms(terms, terms[0].domain, terms[0].codomain)

    def relative_induction(self, X: Object) -> CentralizerObject:
        """
        The induced object I(X) = ⊕_s (s⊗X)⊗s* with its canonical half-braiding.

        The half-braiding with a subcategory simple t maps the summand of si
        to the summand of sj through a basis of Hom(si, t⊗sj) and its dual
        basis, using the associators of the ambient category.
        """
        C = self.category
        S = self.subcategory_simples
        parts = [C.tensor_product(C.tensor_product(s, X), C.dual(s)) for s in S]
        IX, inclusions, projections = C.direct_sum(*parts)
        braidings = []
        for t in S:
            idt = C.id(t)
            terms = []
            for si, p in zip(S, projections):
                for sj, i in zip(S, inclusions):
                    block = self._induction_block(X, t, si, sj)
                    if block is None:
                        continue
                    terms.append(compose(C.tensor_product_morphisms(p, idt), block,
                                         C.tensor_product_morphisms(idt, i)))
            braidings.append(sum_morphisms(terms, C.tensor_product(IX, t), C.tensor_product(t, IX)))
        return self._object(IX, braidings)

    def induction(self, X: Object) -> CentralizerObject:
        """Cached relative induction of X."""
        if X not in self._inductions:
            logger.debug("Computing induction of %s", X)
            self._inductions[X] = self.relative_induction(X)
        return self._inductions[X]

    def _unit_inclusion(self, X: Object, IX: CentralizerObject) -> Morphism:
        C = self.category
        parts = [C.tensor_product(C.tensor_product(s, X), C.dual(s)) for s in self.subcategory_simples]
        _, inclusions, _ = C.direct_sum(*parts)
        return inclusions[self._unit_index]

    def _unit_projection(self, X: Object, IX: CentralizerObject) -> Morphism:
        C = self.category
        parts = [C.tensor_product(C.tensor_product(s, X), C.dual(s)) for s in self.subcategory_simples]
        _, _, projections = C.direct_sum(*parts)
        return projections[self._unit_index]

    def induction_right_adjunction(self, b: Morphism, X: CentralizerObject,
                                   IS: CentralizerObject) -> CentralizerMorphism:
        """The central morphism X → I(s) corresponding to b: F(X) → s."""
        s = b.codomain
        return self.central_projection(X, IS, self.category.compose(b, self._unit_inclusion(s, IS)))

    def induction_adjunction(self, h: Morphism, Y: CentralizerObject,
                             IS: CentralizerObject) -> CentralizerMorphism:
        """The central morphism I(s) → Y corresponding to h: s → F(Y)."""
        s = h.domain
        return self.central_projection(IS, Y, self.category.compose(self._unit_projection(s, IS), h))

    def end_of_induction(self, s: Object, IS: Optional[CentralizerObject] = None) -> List[CentralizerMorphism]:
        """A basis of End(I(s)) obtained from Hom(s, F I(s))."""
        IS = self.induction(s) if IS is None else IS
        C = self.category
        pi = self._unit_projection(s, IS)
        candidates = [self.central_projection(IS, IS, C.compose(pi, h))
                      for h in C.hom(s, IS.object).basis]
        return linearly_independent(candidates)

    def induction_generators(self) -> List[Object]:
        """
        One ambient simple per class of simples with equal induced objects.

        Computed once.
        """
        if self._induction_generators is None:
            simples = self.category.simples()
            restrictions = [self.induction_restriction(s) for s in simples]
            graph = nx.Graph()
            graph.add_nodes_from(range(len(simples)))
            for i, r in enumerate(restrictions):
                for j in range(i + 1, len(simples)):
                    if self.category.is_isomorphic(r, restrictions[j])[0]:
                        graph.add_edge(i, j)
            groups = sorted(sorted(g) for g in nx.connected_components(graph))
            logger.debug("Grouped %d simples into %d induction classes", len(simples), len(groups))
            self._induction_generators = [simples[g[0]] for g in groups]
        return self._induction_generators

    # ------------------------------------------------------------------
    # Simples
    # ------------------------------------------------------------------

    def simples_by_induction(self, check_dimension: bool = False) -> List[CentralizerObject]:
        """
        Discover the simple objects by splitting induced objects.

        Args:
            check_dimension: Stop as soon as Σ dim² reaches dim(C)·dim(S)

        Returns:
            The simple objects, grouped by the generator that produced them
        """
        C = self.category
        generators = self.induction_generators()
        target = linalg.normalize(C.dim_category() * self.subcategory_dim()) if check_dimension else None
        found: List[CentralizerObject] = []
        total = sympy.Integer(0)
        for k, s in enumerate(generators):
            Z = self.induction(s)
            H = self.end_of_induction(s, Z)
            pieces = [x for x, _ in decompose_by_endomorphism_ring(
                Z, H, attempts=self.config.decomposition_attempts,
                coefficient_range=self.config.random_coefficient_range)]
            new = [x for x in pieces if all(C.hom(t, x.object).dim == 0 for t in generators[:k])]
            for x in new:
                logger.info("Found simple %s", x)
            found.extend(new)
            if target is not None:
                total = linalg.normalize(total + sum(self.dim(x) ** 2 for x in new))
                if linalg.is_zero(total - target):
                    break
        return found

    def simples(self) -> List[CentralizerObject]:
        if self._simples is None:
            self._simples = self.simples_by_induction()
        return self._simples

    def add_simple(self, S: CentralizerObject) -> None:
        if not is_simple(S):
            raise ValueError(f"{S} is not simple")
        current = [] if self._simples is None else self._simples
        self._simples = unique_simples(current + [S])

    def sort_simples_by_dimension(self) -> None:
        self._simples = sorted(self.simples(), key=lambda s: abs(sympy.N(self.fpdim(s))))

    # ------------------------------------------------------------------
    # Hom spaces
    # ------------------------------------------------------------------

    def hom(self, X: CentralizerObject, Y: CentralizerObject) -> HomSpace:
        return self.hom_by_adjunction(X, Y)

    def hom_by_adjunction(self, X: CentralizerObject, Y: CentralizerObject) -> HomSpace:
        """
        Hom(X, Y) spanned by composites X → I(s) → Y over induction generators s.

        Generators s with Hom(F X, s) and Hom(s, F Y) both nonzero contribute
        every composite of adjunction-transported basis elements; a maximal
        independent subset of all candidates is the basis.
        """
        C = self.category
        generators = self.induction_generators()
        X_homs = [C.hom(X.object, s) for s in generators]
        Y_homs = [C.hom(s, Y.object) for s in generators]
        indices = [k for k in range(len(generators)) if X_homs[k].dim > 0 and Y_homs[k].dim > 0]
        if not indices:
            return HomSpace(X, Y, [])

        def candidates(k: int) -> List[CentralizerMorphism]:
            IS = self.induction(generators[k])
            left = [self.induction_right_adjunction(b, X, IS) for b in X_homs[k]]
            right = [self.induction_adjunction(h, Y, IS) for h in Y_homs[k]]
            return [self.compose(l, r) for l in left for r in right]

        for k in indices:
            self.induction(generators[k])
        morphisms = [f for batch in self._map(candidates, indices) for f in batch]
        return HomSpace(X, Y, linearly_independent(morphisms))

    def hom_by_linear_equations(self, X: CentralizerObject, Y: CentralizerObject) -> HomSpace:
        """Hom(X, Y) as the nullspace of the naturality equations on Hom(F X, F Y)."""
        C = self.category
        B = C.hom(X.object, Y.object).basis
        if not B:
            return HomSpace(X, Y, [])
        blocks = []
        for s, gx, gy in zip(self.subcategory_simples, X.half_braidings, Y.half_braidings):
            ids = C.id(s)
            columns = []
            for f in B:
                lhs = compose(gx, C.tensor_product_morphisms(ids, f))
                rhs = compose(C.tensor_product_morphisms(f, ids), gy)
                columns.append(C.entries(C.add(lhs, C.scale(-1, rhs))))
            rows = [list(r) for r in zip(*columns)]
            if rows:
                blocks.append(linalg.matrix(rows))
        N = linalg.right_kernel(linalg.vstack(blocks, len(B)))
        basis = [CentralizerMorphism(X, Y, sum_morphisms([C.scale(N[i, c], f) for i, f in enumerate(B)],
                                                         X.object, Y.object))
                 for c in range(N.cols)]
        return HomSpace(X, Y, basis)

    def hom_by_projection(self, X: CentralizerObject, Y: CentralizerObject) -> HomSpace:
        """Hom(X, Y) as the row space of the central projections of an ambient basis."""
        C = self.category
        B = C.hom(X.object, Y.object).basis
        if not B:
            return HomSpace(X, Y, [])
        projections = [self.central_projection(X, Y, f) for f in B]
        M = linalg.matrix([C.entries(p.m) for p in projections])
        R, pivots = linalg.rref(M)
        basis = []
        for r in range(len(pivots)):
            coordinates = list(R.row(r))
            m = sum_morphisms([C.scale(c, B[i]) for i, c in enumerate(coordinates)], X.object, Y.object)
            basis.append(CentralizerMorphism(X, Y, m))
        return HomSpace(X, Y, basis)

    # ------------------------------------------------------------------
    # Isomorphism and decomposition
    # ------------------------------------------------------------------

    def is_isomorphic(self, X: CentralizerObject, Y: CentralizerObject):
        if is_simple(X) and is_simple(Y):
            H = self.hom(X, Y)
            if H.dim > 0:
                return True, H[0]
            return False, None
        if not self.category.is_isomorphic(X.object, Y.object)[0]:
            return False, None
        S = self.simples()
        if [self.hom(X, s).dim for s in S] != [self.hom(Y, s).dim for s in S]:
            return False, None
        basis = self.hom(X, Y).basis
        rng = random.Random(0)
        for f in _splitting_candidates(basis, self.config.decomposition_attempts, rng,
                                       self.config.random_coefficient_range):
            if self.category.is_isomorphism(f.m):
                return True, f
        raise CategoryError(f"No isomorphism found between isomorphic objects {X} and {Y}")

    def decompose(self, X: CentralizerObject) -> List[Tuple[CentralizerObject, int]]:
        """
        Multiplicities of simples in X.

        Uses the discovered simples when available and otherwise splits the
        endomorphism ring of X, which raises DecompositionError on failure.
        """
        if self._simples is not None:
            return decompose_by_simples(X, self._simples)
        return decompose_by_endomorphism_ring(X, attempts=self.config.decomposition_attempts,
                                              coefficient_range=self.config.random_coefficient_range)

    # ------------------------------------------------------------------
    # Modular data
    # ------------------------------------------------------------------

    def smatrix(self) -> ImmutableMatrix:
        """
        S[i, j] = tr(γ_i ∘ γ_j) on the simples.

        The upper triangle is computed in parallel; each task fills one
        symmetric pair of entries.
        """
        C = self.category
        simples = self.simples()
        n = len(simples)
        pairs = [(i, j) for i in range(n) for j in range(i, n)]

        def entry(pair: Tuple[int, int]):
            i, j = pair
            X, Y = simples[i], simples[j]
            loop = compose(self.half_braiding(Y, X.object), self.half_braiding(X, Y.object))
            return C.scalar(C.tr(loop))

        values = self._map(entry, pairs)
        S = sympy.zeros(n, n)
        for (i, j), v in zip(pairs, values):
            S[i, j] = S[j, i] = v
        return linalg.apply_normalize(S)

    def drinfeld_morphism(self, X: CentralizerObject) -> CentralizerMorphism:
        """u_X: X → X** built from the half-braiding with X*."""
        C = self.category
        x = X.object
        dx = C.dual(x)
        ddx = C.dual(dx)
        u = compose(
            C.tensor_product_morphisms(C.id(x), C.coev(dx)),
            C.inv_associator(x, dx, ddx),
            C.tensor_product_morphisms(self.half_braiding(X, dx), C.id(ddx)),
            C.tensor_product_morphisms(C.ev(x), C.id(ddx)),
        )
        return CentralizerMorphism(X, self.dual(self.dual(X)), u)

    def twist(self, X: CentralizerObject):
        """
        The scalar θ with u_X = θ · spherical(X) for a simple X.

        Raises:
            ValueError: If the Drinfeld morphism is not a multiple of the spherical structure
        """
        C = self.category
        u = self.drinfeld_morphism(X).m
        k = linalg.scalar_ratio(linalg.block_diagonal(u.m), linalg.block_diagonal(C.spherical(X.object).m))
        if k is None:
            raise ValueError(f"Drinfeld morphism of {X} is not a multiple of the spherical structure")
        return k

    def twists(self) -> List:
        return [self.twist(s) for s in self.simples()]


# ============================================================================
# Constructors
# ============================================================================

def centralizer(C: Category, S, config: ComputationConfig = DEFAULT_CONFIG) -> CentralizerCategory:
    """
    The Müger centralizer of C relative to the subcategory generated by S.

    Args:
        C: Semisimple category with simple unit
        S: A simple object or a list of simple objects
        config: Parallelism and retry settings
    """
    if isinstance(S, Object):
        S = [S]
    return CentralizerCategory(C, S, config=config)


def drinfeld_center(C: Category, config: ComputationConfig = DEFAULT_CONFIG) -> CentralizerCategory:
    return CentralizerCategory(C, C.simples(), config=config)
