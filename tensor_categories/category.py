"""
Categorical Framework Module

Abstract categories, objects and morphisms together with the generic
operations every concrete category inherits: n-ary direct sums, the
distribution isomorphisms between (⊕Xi)⊗Y and ⊕(Xi⊗Y), coordinates of a
morphism in a Hom basis, and decomposition of an object into simples by
splitting its endomorphism ring.

Composition follows two notations. ``compose(f, g)`` applies f first and
then g. The operator ``g @ f`` is the mathematical g ∘ f. ``X * Y`` and
``f * g`` are tensor products, ``X + Y`` is the direct sum object.
"""

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import reduce
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from .constants import DECOMPOSITION_ATTEMPTS, RANDOM_COEFFICIENT_RANGE
from .exceptions import DecompositionError, check_parents
from .linalg import eigenvalues, hstack, independent_columns, is_zero, matrix, solve_linear

logger = logging.getLogger(__name__)


class Object(ABC):
    """An object of a category. Subclasses carry a ``parent`` attribute."""

    parent: "Category"

    def __mul__(self, other: "Object") -> "Object":
        return tensor_product(self, other)

    def __add__(self, other: "Object") -> "Object":
        return direct_sum(self, other)[0]

    def __pow__(self, n: int) -> "Object":
        if n == 0:
            return self.parent.zero()
        return direct_sum(*([self] * n))[0]

    def dual(self) -> "Object":
        return self.parent.dual(self)

    def id(self) -> "Morphism":
        return self.parent.id(self)


class Morphism(ABC):
    """
    A morphism of a category.

    Subclasses provide ``domain`` and ``codomain``. Equality is decided by
    the parent category, so morphisms are not hashable.
    """

    domain: Object
    codomain: Object

    @property
    def parent(self) -> "Category":
        return self.domain.parent

    def __matmul__(self, other: "Morphism") -> "Morphism":
        return compose(other, self)

    def __mul__(self, other):
        if isinstance(other, Morphism):
            return tensor_product(self, other)
        return self.parent.scale(other, self)

    def __rmul__(self, k):
        return self.parent.scale(k, self)

    def __add__(self, other: "Morphism") -> "Morphism":
        check_parents(self, other)
        return self.parent.add(self, other)

    def __neg__(self) -> "Morphism":
        return self.parent.scale(-1, self)

    def __sub__(self, other: "Morphism") -> "Morphism":
        return self + (-other)

    def __eq__(self, other):
        if not isinstance(other, Morphism):
            return NotImplemented
        if self.parent is not other.parent:
            return False
        return self.parent.morphism_equal(self, other)

    __hash__ = None

    def inv(self) -> "Morphism":
        return self.parent.inv(self)

    def entries(self) -> list:
        return self.parent.entries(self)


@dataclass
class HomSpace:
    """
    A morphism space with an explicit basis.

    Attributes:
        domain: Source object
        codomain: Target object
        basis: Linearly independent morphisms spanning the space
    """
    domain: Object
    codomain: Object
    basis: List[Morphism] = field(default_factory=list)

    @property
    def dim(self) -> int:
        return len(self.basis)

    def __len__(self):
        return len(self.basis)

    def __iter__(self) -> Iterator[Morphism]:
        return iter(self.basis)

    def __getitem__(self, i: int) -> Morphism:
        return self.basis[i]

    def zero(self) -> Morphism:
        return self.domain.parent.zero_morphism(self.domain, self.codomain)


class Category(ABC):
    """
    A linear category with the structure the engines need.

    Concrete categories implement the abstract primitives; the remaining
    operations have generic implementations in terms of them.
    """

    base_ring: Any

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    @abstractmethod
    def one(self) -> Object: ...

    @abstractmethod
    def zero(self) -> Object: ...

    @abstractmethod
    def simples(self) -> List[Object]: ...

    def is_semisimple(self) -> bool:
        return True

    @abstractmethod
    def id(self, X: Object) -> Morphism: ...

    @abstractmethod
    def zero_morphism(self, X: Object, Y: Object) -> Morphism: ...

    @abstractmethod
    def compose(self, f: Morphism, g: Morphism) -> Morphism:
        """f then g."""

    @abstractmethod
    def add(self, f: Morphism, g: Morphism) -> Morphism: ...

    @abstractmethod
    def scale(self, k: Any, f: Morphism) -> Morphism: ...

    @abstractmethod
    def tensor_product(self, X: Object, Y: Object) -> Object: ...

    @abstractmethod
    def tensor_product_morphisms(self, f: Morphism, g: Morphism) -> Morphism: ...

    @abstractmethod
    def direct_sum_pair(self, X: Object, Y: Object) -> Tuple[Object, List[Morphism], List[Morphism]]:
        """X ⊕ Y with inclusions [iX, iY] and projections [pX, pY]."""

    @abstractmethod
    def direct_sum_morphisms_pair(self, f: Morphism, g: Morphism) -> Morphism: ...

    @abstractmethod
    def hom(self, X: Object, Y: Object) -> HomSpace: ...

    @abstractmethod
    def entries(self, f: Morphism) -> list:
        """Flat coordinate vector of f, used for linear algebra on Hom spaces."""

    @abstractmethod
    def morphism_equal(self, f: Morphism, g: Morphism) -> bool: ...

    # ------------------------------------------------------------------
    # Operations with generic defaults
    # ------------------------------------------------------------------

    def direct_sum(self, *objects: Object) -> Tuple[Object, List[Morphism], List[Morphism]]:
        if not objects:
            return self.zero(), [], []
        S = objects[0]
        inclusions = [self.id(S)]
        projections = [self.id(S)]
        for X in objects[1:]:
            S, (i_S, i_X), (p_S, p_X) = self.direct_sum_pair(S, X)
            inclusions = [self.compose(i, i_S) for i in inclusions] + [i_X]
            projections = [self.compose(p_S, p) for p in projections] + [p_X]
        return S, inclusions, projections

    def direct_sum_morphisms(self, *morphisms: Morphism) -> Morphism:
        if not morphisms:
            return self.zero_morphism(self.zero(), self.zero())
        return reduce(self.direct_sum_morphisms_pair, morphisms)

    def associator(self, X: Object, Y: Object, Z: Object) -> Morphism:
        raise NotImplementedError(f"{type(self).__name__} has no associator")

    def inv_associator(self, X: Object, Y: Object, Z: Object) -> Morphism:
        return self.inv(self.associator(X, Y, Z))

    def dual(self, X: Object) -> Object:
        raise NotImplementedError(f"{type(self).__name__} is not rigid")

    def ev(self, X: Object) -> Morphism:
        raise NotImplementedError(f"{type(self).__name__} is not rigid")

    def coev(self, X: Object) -> Morphism:
        raise NotImplementedError(f"{type(self).__name__} is not rigid")

    def spherical(self, X: Object) -> Morphism:
        raise NotImplementedError(f"{type(self).__name__} is not spherical")

    def inv(self, f: Morphism) -> Morphism:
        raise NotImplementedError

    def kernel(self, f: Morphism) -> Tuple[Object, Morphism]:
        raise NotImplementedError

    def cokernel(self, f: Morphism) -> Tuple[Object, Morphism]:
        raise NotImplementedError

    def left_inverse(self, f: Morphism) -> Morphism:
        raise NotImplementedError

    def right_inverse(self, f: Morphism) -> Morphism:
        raise NotImplementedError

    def endomorphism_matrix(self, f: Morphism):
        """Square matrix of an endomorphism, used for eigenvalues."""
        raise NotImplementedError

    def scalar(self, f: Morphism):
        """The scalar of an endomorphism of a simple object."""
        values = [x for x in self.entries(f)]
        if len(values) != 1:
            raise ValueError("Morphism is not a scalar")
        return values[0]

    def is_simple(self, X: Object) -> bool:
        return self.hom(X, X).dim == 1

    def is_isomorphic(self, X: Object, Y: Object) -> Tuple[bool, Optional[Morphism]]:
        raise NotImplementedError

    def is_isomorphism(self, f: Morphism) -> bool:
        raise NotImplementedError

    def decompose(self, X: Object) -> List[Tuple[Object, int]]:
        return decompose_by_simples(X, self.simples())

    def tr(self, f: Morphism) -> Morphism:
        """Left trace 1 → V⊗V* → V**⊗V* → 1 of an endomorphism f of V."""
        V = f.domain
        W = f.codomain
        if V == self.zero() or W == self.zero():
            return self.zero_morphism(self.one(), self.one())
        dV = self.dual(V)
        if V == W:
            g = self.compose(f, self.spherical(V))
        else:
            g = f
        return compose(self.coev(V), tensor_product(g, self.id(dV)), self.ev(dV))

    def dim(self, X: Object):
        return self.scalar(self.tr(self.id(X)))


# ============================================================================
# Generic operations
# ============================================================================

def compose(*morphisms: Morphism) -> Morphism:
    """Compose left to right: compose(f, g, h) = h ∘ g ∘ f."""
    if len(morphisms) == 1:
        return morphisms[0]
    check_parents(*morphisms)
    C = morphisms[0].parent
    return reduce(C.compose, morphisms)


def tensor_product(*items):
    """Left-bracketed tensor product of objects or of morphisms."""
    check_parents(*items)
    C = items[0].parent
    if isinstance(items[0], Morphism):
        return reduce(C.tensor_product_morphisms, items)
    return reduce(C.tensor_product, items)


def direct_sum(*objects: Object) -> Tuple[Object, List[Morphism], List[Morphism]]:
    check_parents(*objects)
    return objects[0].parent.direct_sum(*objects)


def direct_sum_morphisms(*morphisms: Morphism) -> Morphism:
    check_parents(*morphisms)
    return morphisms[0].parent.direct_sum_morphisms(*morphisms)


def sum_morphisms(morphisms: Sequence[Morphism], domain: Object, codomain: Object) -> Morphism:
    C = domain.parent
    total = C.zero_morphism(domain, codomain)
    for f in morphisms:
        total = C.add(total, f)
    return total


def horizontal_direct_sum(morphisms: Sequence[Morphism]) -> Morphism:
    """[f_1 ... f_n]: ⊕ X_i → Y for f_i: X_i → Y."""
    C = morphisms[0].parent
    S, _, projections = C.direct_sum(*[f.domain for f in morphisms])
    Y = morphisms[0].codomain
    return sum_morphisms([C.compose(p, f) for p, f in zip(projections, morphisms)], S, Y)


def vertical_direct_sum(morphisms: Sequence[Morphism]) -> Morphism:
    """[f_1; ...; f_n]: X → ⊕ Y_i for f_i: X → Y_i."""
    C = morphisms[0].parent
    S, inclusions, _ = C.direct_sum(*[f.codomain for f in morphisms])
    X = morphisms[0].domain
    return sum_morphisms([C.compose(f, i) for i, f in zip(inclusions, morphisms)], X, S)


def distribute_left(summands: Sequence[Object], Y: Object) -> Morphism:
    """The isomorphism (⊕ X_i) ⊗ Y → ⊕ (X_i ⊗ Y)."""
    C = Y.parent
    S, _, projections = C.direct_sum(*summands)
    T, inclusions, _ = C.direct_sum(*[C.tensor_product(X, Y) for X in summands])
    idY = C.id(Y)
    terms = [C.compose(C.tensor_product_morphisms(p, idY), i)
             for p, i in zip(projections, inclusions)]
    return sum_morphisms(terms, C.tensor_product(S, Y), T)


def distribute_right(X: Object, summands: Sequence[Object]) -> Morphism:
    """The isomorphism X ⊗ (⊕ Y_j) → ⊕ (X ⊗ Y_j)."""
    C = X.parent
    S, _, projections = C.direct_sum(*summands)
    T, inclusions, _ = C.direct_sum(*[C.tensor_product(X, Y) for Y in summands])
    idX = C.id(X)
    terms = [C.compose(C.tensor_product_morphisms(idX, p), i)
             for p, i in zip(projections, inclusions)]
    return sum_morphisms(terms, C.tensor_product(X, S), T)


def Hom(X: Object, Y: Object) -> HomSpace:
    check_parents(X, Y)
    return X.parent.hom(X, Y)


def End(X: Object) -> HomSpace:
    return X.parent.hom(X, X)


def express_in_basis(f: Morphism, basis: Sequence[Morphism]) -> list:
    """
    Coordinates of f with respect to a basis of its Hom space.

    Raises:
        ValueError: If f is not in the span of the basis
    """
    C = f.parent
    target = matrix([[x] for x in C.entries(f)])
    if not basis:
        if not all(is_zero(x) for x in target):
            raise ValueError("Morphism is not in the span of an empty basis")
        return []
    columns = [matrix([[x] for x in C.entries(b)]) for b in basis]
    A = hstack(columns, target.rows)
    return list(solve_linear(A, target))


def linearly_independent(morphisms: Sequence[Morphism]) -> List[Morphism]:
    """A maximal linearly independent subset, in the given order."""
    if not morphisms:
        return []
    C = morphisms[0].parent
    columns = [matrix([[x] for x in C.entries(f)]) for f in morphisms]
    rows = columns[0].rows
    if rows == 0:
        return []
    return [morphisms[i] for i in independent_columns(hstack(columns, rows))]


def is_simple(X: Object) -> bool:
    return End(X).dim == 1


def unique_simples(simples: Sequence[Object]) -> List[Object]:
    """Drop simples isomorphic to an earlier entry of the list."""
    unique: List[Object] = []
    for s in simples:
        if not any(s.parent.is_isomorphic(s, t)[0] for t in unique):
            unique.append(s)
    return unique


def decompose_by_simples(X: Object, simples: Sequence[Object]) -> List[Tuple[Object, int]]:
    """Multiplicities of the given simples in X, zero multiplicities dropped."""
    result = []
    for s in simples:
        m = Hom(s, X).dim // End(s).dim
        if m > 0:
            result.append((s, m))
    return result


def _splitting_candidates(basis: Sequence[Morphism], attempts: int, rng: random.Random,
                          coefficient_range: Tuple[int, int] = RANDOM_COEFFICIENT_RANGE
                          ) -> Iterator[Morphism]:
    yield from basis
    low, high = coefficient_range
    C = basis[0].parent
    for _ in range(attempts):
        coefficients = [rng.randint(low, high) for _ in basis]
        yield sum_morphisms([C.scale(c, f) for c, f in zip(coefficients, basis)],
                            basis[0].domain, basis[0].codomain)


def indecomposable_subobjects(X: Object, endomorphisms: Optional[Sequence[Morphism]] = None,
                              attempts: int = DECOMPOSITION_ATTEMPTS,
                              rng: Optional[random.Random] = None,
                              coefficient_range: Tuple[int, int] = RANDOM_COEFFICIENT_RANGE) -> List[Object]:
    """
    Pairwise non-isomorphic simple subobjects of X, one per isotypic component.

    Splits X by eigenspaces of endomorphisms until every piece has a one
    dimensional endomorphism ring.

    Args:
        X: Object of a semisimple category over an algebraically closed field
        endomorphisms: Basis of End(X) if already known
        attempts: Number of random endomorphisms tried after the basis
        rng: Random source for the random endomorphisms
        coefficient_range: Bounds of the random integer coefficients

    Returns:
        List of simple subobjects

    Raises:
        DecompositionError: If no endomorphism with two eigenvalues is found
    """
    C = X.parent
    rng = rng or random.Random(0)
    basis = list(End(X).basis if endomorphisms is None else endomorphisms)
    if not basis:
        return []
    if len(basis) == 1:
        return [X]
    for f in _splitting_candidates(basis, attempts, rng, coefficient_range):
        values = eigenvalues(C.endomorphism_matrix(f))
        if len(values) < 2:
            continue
        pieces: List[Object] = []
        for value in values:
            K, _ = C.kernel(C.add(f, C.scale(-value, C.id(X))))
            pieces.extend(indecomposable_subobjects(K, attempts=attempts, rng=rng,
                                                    coefficient_range=coefficient_range))
        return unique_simples(pieces)
    raise DecompositionError(
        f"No splitting endomorphism found for an object with {len(basis)}-dimensional endomorphisms"
    )


def decompose_by_endomorphism_ring(X: Object, endomorphisms: Optional[Sequence[Morphism]] = None,
                                   attempts: int = DECOMPOSITION_ATTEMPTS,
                                   coefficient_range: Tuple[int, int] = RANDOM_COEFFICIENT_RANGE
                                   ) -> List[Tuple[Object, int]]:
    simples = indecomposable_subobjects(X, endomorphisms, attempts=attempts,
                                        coefficient_range=coefficient_range)
    return [(s, Hom(s, X).dim) for s in simples]


# ============================================================================
# Axiom checks
# ============================================================================

def pentagon_holds(C: Category, objects: Optional[Sequence[Object]] = None) -> bool:
    """
    Check the pentagon axiom on all quadruples of the given objects.

    Defaults to the simple objects of C.
    """
    objects = list(C.simples() if objects is None else objects)
    a = C.associator
    for W in objects:
        for X in objects:
            for Y in objects:
                for Z in objects:
                    lhs = compose(a(W * X, Y, Z), a(W, X, Y * Z))
                    rhs = compose(a(W, X, Y) * Z.id(), a(W, X * Y, Z), W.id() * a(X, Y, Z))
                    if not C.morphism_equal(lhs, rhs):
                        logger.debug("Pentagon fails for %s, %s, %s, %s", W, X, Y, Z)
                        return False
    return True


def snake_holds(X: Object) -> bool:
    """Both zig-zag identities for the chosen ev and coev of X."""
    C = X.parent
    dX = C.dual(X)
    first = compose(C.coev(X) * X.id(), C.associator(X, dX, X), X.id() * C.ev(X))
    second = compose(dX.id() * C.coev(X), C.inv_associator(dX, X, dX), C.ev(X) * dX.id())
    return C.morphism_equal(first, C.id(X)) and C.morphism_equal(second, C.id(dX))
