"""
Symbolic Solving

Solution sets of polynomial systems over the base field, computed from
sympy Gröbner bases. Zero dimensional systems are solved by back
substitution in a lexicographic basis; positive dimensional ones are cut
down either by guessing values in {0, 1, -1} for free variables or by random
linear slices (witness sets).

Solutions whose coordinates need a field extension of the base field are
dropped and reported with an INFO record.
"""

import logging
import random
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, List, Optional, Sequence, Tuple

import sympy

from . import linalg
from .constants import DEFAULT_CONFIG, ComputationConfig
from .exceptions import WitnessSetError
from .fields import Field, QQBar

logger = logging.getLogger(__name__)


@dataclass
class SolutionSet:
    """
    The variety of a polynomial system.

    Attributes:
        equations: Polynomials that vanish on the set
        variables: Coordinates, in the order solutions are reported
        base_ring: Field the solutions are required to lie in
    """
    equations: List[sympy.Expr]
    variables: Tuple[sympy.Symbol, ...]
    base_ring: Field = QQBar

    def __post_init__(self):
        self.equations = [sympy.expand(e) for e in self.equations if not linalg.is_zero(e)]
        self.variables = tuple(self.variables)

    def groebner(self, order: str = "grevlex"):
        return sympy.groebner(self.equations, *self.variables, order=order)

    def dimension(self) -> int:
        return dimension(self.equations, self.variables)

    def with_equations(self, extra: Sequence[sympy.Expr]) -> "SolutionSet":
        return SolutionSet(list(self.equations) + list(extra), self.variables, self.base_ring)

    def solutions(self) -> List[Tuple]:
        return real_solutions_over_base_field(self)


def _is_unit_ideal(G) -> bool:
    return any(sympy.sympify(g).is_number and not linalg.is_zero(g) for g in G.exprs)


def dimension(equations: Sequence[sympy.Expr], variables: Sequence[sympy.Symbol]) -> int:
    """
    Krull dimension of the ideal generated by the equations.

    The size of a largest set of variables U such that no leading monomial
    of a grevlex Gröbner basis lies in k[U]. Returns -1 for the unit ideal.
    """
    variables = tuple(variables)
    equations = [e for e in equations if not linalg.is_zero(e)]
    if not equations:
        return len(variables)
    G = sympy.groebner(equations, *variables, order="grevlex")
    if _is_unit_ideal(G):
        return -1
    supports = []
    for g in G.exprs:
        leading = sympy.Poly(g, *variables).monoms(order="grevlex")[0]
        supports.append({i for i, e in enumerate(leading) if e > 0})
    n = len(variables)
    for size in range(n, -1, -1):
        for U in combinations(range(n), size):
            U = set(U)
            if all(not s <= U for s in supports):
                return size
    return 0


def _roots_in_field(p: sympy.Expr, x: sympy.Symbol, K: Field, splitting_info: bool) -> List[sympy.Expr]:
    poly = sympy.Poly(p, x)
    found: Dict[sympy.Expr, int] = sympy.roots(poly)
    roots = [linalg.normalize(r) for r in found]
    if splitting_info and sum(found.values()) < poly.degree():
        logger.info("More solutions over splitting field of %s", p)
    in_field = [r for r in roots if K.contains(r)]
    if splitting_info and len(in_field) < len(roots):
        logger.info("Dropped %d roots of %s outside %s", len(roots) - len(in_field), p, K)
    return in_field


def recover_solutions(system: SolutionSet, splitting_info: bool = True) -> List[Tuple]:
    """
    All points of a zero dimensional system with coordinates in the base field.

    Back substitution through a lexicographic Gröbner basis: after fixing the
    later variables, the basis elements in the remaining variable are
    univariate and their common roots extend the partial solution.
    """
    variables = system.variables
    if not system.equations:
        return [()] if not variables else []
    G = system.groebner(order="lex")
    if _is_unit_ideal(G):
        return []
    partial: List[Dict[sympy.Symbol, sympy.Expr]] = [{}]
    for k in range(len(variables) - 1, -1, -1):
        x = variables[k]
        later = set(variables[k:])
        extended = []
        for values in partial:
            polys = []
            for g in G.exprs:
                if not sympy.sympify(g).free_symbols <= later:
                    continue
                q = sympy.expand(sympy.sympify(g).subs(values))
                if not linalg.is_zero(q):
                    polys.append(q)
            if not polys:
                raise ValueError(f"Variable {x} is free, the system is not zero dimensional")
            if any(not q.has(x) for q in polys):
                continue
            p = min(polys, key=lambda q: sympy.degree(q, x))
            for r in _roots_in_field(p, x, system.base_ring, splitting_info):
                if all(linalg.is_zero(q.subs(x, r)) for q in polys):
                    extended.append({**values, x: r})
        partial = extended
    return [tuple(values[x] for x in variables) for values in partial]


def _unique(solutions: Sequence[Tuple]) -> List[Tuple]:
    result: List[Tuple] = []
    for s in solutions:
        if not any(all(linalg.is_zero(a - b) for a, b in zip(s, t)) for t in result):
            result.append(s)
    return result


def real_solutions_over_base_field(system: SolutionSet, splitting_info: bool = True) -> List[Tuple]:
    """
    Real points of a zero dimensional system with coordinates in the base field.

    Raises:
        ValueError: If the system is not zero dimensional
    """
    d = system.dimension()
    if d > 0:
        raise ValueError(f"Solution set has dimension {d}, expected a finite set")
    if d < 0:
        return []
    solutions = recover_solutions(system, splitting_info=splitting_info)
    real = [s for s in solutions if all(linalg.is_zero(sympy.im(v)) for v in s)]
    return _unique(real)


def guess_real_solutions_over_base_field(system: SolutionSet) -> List[Tuple]:
    """
    Cut a positive dimensional system down by guessing free coordinates.

    Variables that occur in no univariate basis element are constrained to
    {0, 1, -1} through z(z² - 1) = 0, starting from the variable of lowest
    total degree, as long as each constraint lowers the dimension without
    emptying the set.
    """
    d = system.dimension()
    G = system.groebner()
    univariate = [g for g in G.exprs if len(sympy.sympify(g).free_symbols) == 1]
    bound = set().union(*[sympy.sympify(g).free_symbols for g in univariate]) if univariate else set()
    free = [x for x in system.variables if x not in bound]

    def total_degree(x):
        return sum(sympy.degree(g, x) for g in G.exprs)

    free.sort(key=total_degree)
    J = system
    while d > 0 and free:
        z = free.pop()
        candidate = J.with_equations([z * (z ** 2 - 1)])
        d2 = candidate.dimension()
        if 0 <= d2 < d:
            J, d = candidate, d2
    if d > 0:
        logger.info("Guessing left a solution set of dimension %d", d)
        return []
    return real_solutions_over_base_field(J)


def witness_set(system: SolutionSet, bound: Optional[int] = None,
                rng: Optional[random.Random] = None,
                config: ComputationConfig = DEFAULT_CONFIG) -> List[Tuple]:
    """
    Points of a positive dimensional system cut out by random linear slices.

    Args:
        system: Polynomial system
        bound: Number of random slices tried, config.witness_set_bound if omitted
        rng: Random source for the slice coefficients
        config: Computation settings supplying the default bound

    Returns:
        The base field points on the first slice that meets the set in a
        finite nonempty set

    Raises:
        WitnessSetError: If no slice succeeds within the bound
    """
    rng = rng or random.Random(0)
    bound = config.witness_set_bound if bound is None else bound
    d = system.dimension()
    x = list(system.variables)
    n = len(x)
    for _ in range(bound):
        c = sympy.Matrix(n + 1, max(d, 0), lambda i, j: rng.choice((-1, 0, 1)))
        if d > 0 and c.rank() < d:
            continue
        slices = [sum(c[i, j] * v for i, v in enumerate(x + [sympy.Integer(1)])) for j in range(c.cols)]
        J = system.with_equations(slices)
        if J.dimension() != 0:
            continue
        solutions = real_solutions_over_base_field(J, splitting_info=False)
        if solutions:
            return solutions
    raise WitnessSetError(f"Too many attempts: no witness set found in {bound} slices")
