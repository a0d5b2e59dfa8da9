"""
Finite Abelian Groups and Coefficient Data

Elements of a finite abelian group are tuples of exponents with respect to a
fixed set of independent generators of orders given by the abelian
invariants. BilinearForm and Cocycle are the scalar data fed into the
associator and braiding tables of the example categories.
"""

from dataclasses import dataclass, field
from functools import reduce
from itertools import product
from math import gcd
from typing import Any, Callable, List, Optional, Tuple

import sympy

from .fields import Field

Element = Tuple[int, ...]


def _lcm(a: int, b: int) -> int:
    return a * b // gcd(a, b)


@dataclass(frozen=True)
class FiniteAbelianGroup:
    """
    The group Z/m_1 × ... × Z/m_r.

    Attributes:
        invariants: The orders m_i of the independent generators
    """
    invariants: Tuple[int, ...] = ()

    def __post_init__(self):
        if any(m < 2 for m in self.invariants):
            raise ValueError(f"Invariants must be at least 2, got {self.invariants}")

    @property
    def identity(self) -> Element:
        return tuple(0 for _ in self.invariants)

    def elements(self) -> List[Element]:
        """All elements, identity first, in lexicographic order of exponents."""
        return [tuple(e) for e in product(*(range(m) for m in self.invariants))]

    def order(self) -> int:
        return reduce(lambda a, b: a * b, self.invariants, 1)

    def exponent(self) -> int:
        return reduce(_lcm, self.invariants, 1)

    def abelian_invariants(self) -> Tuple[int, ...]:
        return self.invariants

    def independent_generator_exponents(self, g: Element) -> Element:
        return tuple(g)

    def multiply(self, g: Element, h: Element) -> Element:
        return tuple((a + b) % m for a, b, m in zip(g, h, self.invariants))

    def inverse(self, g: Element) -> Element:
        return tuple((-a) % m for a, m in zip(g, self.invariants))

    def index(self, g: Element) -> int:
        return self.elements().index(tuple(g))


def cyclic_group(n: int) -> FiniteAbelianGroup:
    if n == 1:
        return FiniteAbelianGroup(())
    return FiniteAbelianGroup((n,))


@dataclass
class BilinearForm:
    """A bicharacter χ: G × G → K^×."""
    group: FiniteAbelianGroup
    base_ring: Field
    root: Any
    pairing: Callable[[Element, Element], Any]

    def __call__(self, g: Element, h: Element):
        return self.pairing(g, h)


def nondegenerate_bilinear_form(G: FiniteAbelianGroup, K: Field,
                                root: Optional[Any] = None) -> BilinearForm:
    """
    A symmetric nondegenerate bicharacter on G.

    On a component Z/m the pairing is ζ_m^(c·a·b) with c = 2 for odd m and
    c = 1 otherwise, where ζ_m = ξ^(e/m) for a primitive e-th root of
    unity ξ and e the exponent of G.

    Args:
        G: Finite abelian group
        K: Base field, must contain the e-th roots of unity
        root: Optional primitive e-th root of unity to use as ξ
    """
    if G.order() == 1:
        return BilinearForm(G, K, sympy.Integer(1), lambda g, h: sympy.Integer(1))

    e = G.exponent()
    xi = K.root_of_unity(e) if root is None else root
    invariants = G.abelian_invariants()

    def pairing(g: Element, h: Element):
        a = G.independent_generator_exponents(g)
        b = G.independent_generator_exponents(h)
        power = 0
        for m, x, y in zip(invariants, a, b):
            c = 2 if m % 2 == 1 else 1
            power += (e // m) * ((c * x * y) % m)
        return sympy.expand(xi ** power)

    return BilinearForm(G, K, xi, pairing)


@dataclass
class Cocycle:
    """A normalized 3-cocycle ω: G × G × G → K^×."""
    group: FiniteAbelianGroup
    base_ring: Field
    function: Callable[[Element, Element, Element], Any] = field(repr=False)

    def __call__(self, g: Element, h: Element, k: Element):
        return self.function(g, h, k)


def trivial_3_cocycle(G: FiniteAbelianGroup, K: Field) -> Cocycle:
    return Cocycle(G, K, lambda g, h, k: sympy.Integer(1))


def cyclic_3_cocycle(n: int, K: Field, p: int = 1) -> Cocycle:
    """
    The cocycle ω_p(a, b, c) = ζ^(p·a·(b + c - [b + c mod n])/n) on Z/n.

    Representatives of H^3(Z/n, K^×) ≅ Z/n for p = 0, ..., n-1.
    """
    G = cyclic_group(n)
    zeta = K.root_of_unity(n)

    def omega(g: Element, h: Element, k: Element):
        a, b, c = g[0], h[0], k[0]
        carry = (b + c - (b + c) % n) // n
        return sympy.expand(zeta ** (p * a * carry))

    return Cocycle(G, K, omega)
