"""
Algebra Objects

Algebra structures (m: X⊗X → X, u: 𝟙 → X) on an object of a tensor
category, found by solving the associativity and unit axioms as polynomial
equations in the coordinates of m with respect to a basis of Hom(X⊗X, X).
The commutativity axiom m ∘ c = m adds linear equations in braided
categories. Separability is tested on the solutions through the
nondegeneracy of the trace pairing.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

import sympy

from . import linalg
from .category import Category, Hom, Morphism, Object, compose, express_in_basis, sum_morphisms
from .solving import (
    SolutionSet,
    guess_real_solutions_over_base_field,
    real_solutions_over_base_field,
)

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class AlgebraObject:
    """
    An object together with a multiplication and a unit.

    Attributes:
        parent: Category containing the object
        object: Underlying object A
        multiplication: m: A⊗A → A
        unit: u: 𝟙 → A
    """
    parent: Category
    object: Object
    multiplication: Morphism
    unit: Morphism

    def __repr__(self):
        return f"Algebra object {self.object}"

    def is_associative(self) -> bool:
        return is_algebra(self)

    def is_separable(self) -> bool:
        return is_separable(self)

    def is_commutative(self) -> bool:
        return is_commutative(self)


# ============================================================================
# Equations
# ============================================================================

def _linear_combination(coefficients: Sequence[Any], basis: Sequence[Morphism],
                        X: Object, Y: Object) -> Morphism:
    C = X.parent
    return sum_morphisms([C.scale(c, f) for c, f in zip(coefficients, basis)], X, Y)


def _coordinates(f: Morphism, basis: Sequence[Morphism]) -> List[sympy.Expr]:
    return [sympy.sympify(c) for c in express_in_basis(f, basis)]


def _associativity_equations(X: Object, basis: Sequence[Morphism],
                             variables: Sequence[sympy.Symbol]) -> List[sympy.Expr]:
    """Coordinates of m∘(m⊗id) - m∘(id⊗m)∘a as quadratic polynomials."""
    C = X.parent
    idX = C.id(X)
    XX = C.tensor_product(X, X)
    target = Hom(C.tensor_product(XX, X), X).basis
    a = C.associator(X, X, X)
    equations = [sympy.Integer(0)] * len(target)
    for fa, xa in zip(basis, variables):
        left_a = C.tensor_product_morphisms(fa, idX)
        right_a = compose(a, C.tensor_product_morphisms(idX, fa))
        for fb, xb in zip(basis, variables):
            difference = C.add(C.compose(left_a, fb), C.scale(-1, C.compose(right_a, fb)))
            for k, c in enumerate(_coordinates(difference, target)):
                equations[k] += xa * xb * c
    return [sympy.expand(e) for e in equations]


def _unit_equations(X: Object, unit: Morphism, basis: Sequence[Morphism],
                    variables: Sequence[sympy.Symbol]) -> List[sympy.Expr]:
    C = X.parent
    idX = C.id(X)
    end = Hom(X, X).basis
    identity = _coordinates(idX, end)
    equations = []
    for side in (C.tensor_product_morphisms(unit, idX), C.tensor_product_morphisms(idX, unit)):
        combination = [sympy.Integer(0)] * len(end)
        for fa, xa in zip(basis, variables):
            for k, c in enumerate(_coordinates(C.compose(side, fa), end)):
                combination[k] += xa * c
        equations.extend(sympy.expand(c - i) for c, i in zip(combination, identity))
    return equations


def _commutativity_equations(X: Object, basis: Sequence[Morphism],
                             variables: Sequence[sympy.Symbol]) -> List[sympy.Expr]:
    C = X.parent
    c = C.braiding(X, X)
    equations = [sympy.Integer(0)] * len(basis)
    for fa, xa in zip(basis, variables):
        difference = C.add(C.compose(c, fa), C.scale(-1, fa))
        for k, v in enumerate(_coordinates(difference, basis)):
            equations[k] += xa * v
    return [sympy.expand(e) for e in equations]


# ============================================================================
# Solving
# ============================================================================

def fix_unit(X: Object, unit: Morphism) -> Tuple[Morphism, List[Morphism]]:
    """
    The endomorphisms φ of X with u∘φ = u, as an affine family.

    Returns:
        (fixed, free) with u∘fixed = u and u∘f = 0 for every f in free, so
        that fixed + Σ aᵢ·freeᵢ runs over all such φ
    """
    C = X.parent
    B = Hom(X, X).basis
    unit_basis = Hom(unit.domain, X).basis
    columns = [linalg.matrix([[c] for c in express_in_basis(C.compose(unit, f), unit_basis)]) for f in B]
    M = linalg.hstack(columns, len(unit_basis))
    target = linalg.matrix([[c] for c in express_in_basis(unit, unit_basis)])
    fixed = _linear_combination(list(linalg.solve_linear(M, target)), B, X, X)
    N = linalg.right_kernel(M)
    free = [_linear_combination(list(N.col(c)), B, X, X) for c in range(N.cols)]
    return fixed, free


def _normalization_equations(X: Object, unit: Morphism, basis: Sequence[Morphism],
                             variables: Sequence[sympy.Symbol]) -> List[sympy.Expr]:
    """
    Equations choosing one representative per isomorphism class.

    Transports a generic multiplication along φ = fixed + Σ aᵢ·freeᵢ and, for
    every aᵢ, sets to 1 one coordinate of the result whose numerator is
    linear in aᵢ.
    """
    C = X.parent
    fixed, free = fix_unit(X, unit)
    if not free:
        return []
    iso_variables = sympy.symbols(f"a0:{len(free)}")
    phi = C.add(fixed, _linear_combination(iso_variables, free, X, X))
    XX = C.tensor_product(X, X)
    m = _linear_combination(variables, basis, XX, X)
    image = compose(C.tensor_product_morphisms(phi, phi), m, C.inv(phi))
    numerators = [sympy.fraction(sympy.together(c))[0] for c in _coordinates(image, basis)]
    chosen: List[int] = []
    for a in iso_variables:
        for k, p in enumerate(numerators):
            if k not in chosen and not linalg.is_zero(p) and sympy.degree(p, a) == 1:
                chosen.append(k)
                break
    return [variables[k] - 1 for k in chosen]


def _solve(X: Object, unit: Optional[Morphism], commutative: bool) -> List[AlgebraObject]:
    C = X.parent
    if unit is None:
        units = Hom(C.one(), X).basis
        if not units:
            logger.info("No unit morphism 𝟙 → %s", X)
            return []
        unit = units[0]

    basis = Hom(C.tensor_product(X, X), X).basis
    if not basis:
        return []
    variables = sympy.symbols(f"x0:{len(basis)}")

    equations = _associativity_equations(X, basis, variables)
    equations += _unit_equations(X, unit, basis, variables)
    if commutative:
        equations += _commutativity_equations(X, basis, variables)

    system = SolutionSet(equations, variables, C.base_ring)
    d = system.dimension()
    if d < 0:
        solutions = []
    elif d == 0:
        solutions = real_solutions_over_base_field(system)
    else:
        logger.debug("Algebra structures on %s form a %d-dimensional family", X, d)
        system = system.with_equations(_normalization_equations(X, unit, basis, variables))
        solutions = guess_real_solutions_over_base_field(system)

    if not solutions:
        logger.info("No algebra structures found on %s", X)
        return []

    XX = C.tensor_product(X, X)
    return [AlgebraObject(C, X, _linear_combination(s, basis, XX, X), unit) for s in solutions]


def algebra_structures(X: Object, unit: Optional[Morphism] = None) -> List[AlgebraObject]:
    """
    Algebra structures on X with the given unit.

    Args:
        X: Object of a semisimple tensor category
        unit: Unit morphism 𝟙 → X, the first basis element of Hom(𝟙, X) if omitted

    Returns:
        One algebra per solution found over the base field. Positive
        dimensional families are reduced by guessing free coordinates.
    """
    return _solve(X, unit, commutative=False)


def separable_algebra_structures(X: Object, unit: Optional[Morphism] = None) -> List[AlgebraObject]:
    return [A for A in algebra_structures(X, unit) if is_separable(A)]


def commutative_algebra_structures(X: Object, unit: Optional[Morphism] = None) -> List[AlgebraObject]:
    """
    Commutative algebra structures on X.

    Raises:
        ValueError: If the category has no braiding
    """
    if not X.parent.is_braided():
        raise ValueError(f"{X.parent} is not braided")
    return _solve(X, unit, commutative=True)


def etale_algebra_structures(X: Object, unit: Optional[Morphism] = None) -> List[AlgebraObject]:
    """Commutative separable algebra structures on X."""
    return [A for A in commutative_algebra_structures(X, unit) if is_separable(A)]


# ============================================================================
# Predicates
# ============================================================================

def is_algebra(A: AlgebraObject) -> bool:
    """Whether m is associative and u is a two-sided unit."""
    C = A.parent
    X, m, u = A.object, A.multiplication, A.unit
    idX = C.id(X)
    left = compose(C.tensor_product_morphisms(m, idX), m)
    right = compose(C.associator(X, X, X), C.tensor_product_morphisms(idX, m), m)
    if not C.morphism_equal(left, right):
        return False
    left_unit = C.compose(C.tensor_product_morphisms(u, idX), m)
    right_unit = C.compose(C.tensor_product_morphisms(idX, u), m)
    identity = C.entries(idX)
    return all(all(linalg.is_zero(a - b) for a, b in zip(C.entries(f), identity))
               for f in (left_unit, right_unit))


def is_commutative(A: AlgebraObject) -> bool:
    C = A.parent
    if not C.is_braided():
        raise ValueError(f"{C} is not braided")
    m = A.multiplication
    return C.morphism_equal(C.compose(C.braiding(A.object, A.object), m), m)


def trace_pairing(A: AlgebraObject) -> Morphism:
    """
    The pairing A⊗A → 𝟙 sending a⊗b to the trace of right multiplication by ab.
    """
    C = A.parent
    X, m = A.object, A.multiplication
    dX = C.dual(X)
    idX = C.id(X)
    right_multiplication = compose(
        C.tensor_product_morphisms(idX, C.coev(X)),
        C.inv_associator(X, X, dX),
        C.tensor_product_morphisms(m, C.id(dX)),
        C.tensor_product_morphisms(C.spherical(X), C.id(dX)),
        C.ev(dX),
    )
    return C.compose(m, right_multiplication)


def is_separable(A: AlgebraObject) -> bool:
    """
    Whether the trace pairing of A is nondegenerate.

    The pairing is turned into A → A* with the coevaluation of A; A is
    separable exactly when that morphism is invertible.
    """
    C = A.parent
    X = A.object
    dX = C.dual(X)
    form = compose(
        C.tensor_product_morphisms(C.id(X), C.coev(X)),
        C.inv_associator(X, X, dX),
        C.tensor_product_morphisms(trace_pairing(A), C.id(dX)),
    )
    return C.is_isomorphism(form)
