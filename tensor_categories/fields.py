"""
Base Fields

Exact scalars are sympy expressions. A Field only decides membership and
produces distinguished elements (square roots, roots of unity); arithmetic is
plain sympy arithmetic.
"""

from dataclasses import dataclass
from typing import Any, Optional

import sympy

from .exceptions import FieldError


@dataclass(frozen=True)
class Field:
    """
    An exact base field.

    Attributes:
        name: Display name ("QQ", "QQBar")
        algebraically_closed: Whether every algebraic number is a member
    """
    name: str
    algebraically_closed: bool = False

    def __call__(self, x: Any) -> sympy.Expr:
        value = sympy.sympify(x)
        if not self.contains(value):
            raise FieldError(f"{value} is not an element of {self.name}")
        return value

    def __repr__(self):
        return self.name

    def contains(self, x: Any) -> bool:
        value = sympy.expand(sympy.sympify(x))
        if self.algebraically_closed:
            return value.is_algebraic is not False
        return bool(value.is_rational)

    def zero(self) -> sympy.Expr:
        return sympy.Integer(0)

    def one(self) -> sympy.Expr:
        return sympy.Integer(1)

    def try_sqrt(self, x: Any) -> Optional[sympy.Expr]:
        """Square root of x in this field, or None if it does not exist."""
        root = sympy.sqrt(sympy.sympify(x))
        if self.contains(root):
            return root
        return None

    def sqrt(self, x: Any) -> sympy.Expr:
        root = self.try_sqrt(x)
        if root is None:
            raise FieldError(f"{self.name} does not contain a square root of {x}")
        return root

    def try_root_of_unity(self, n: int) -> Optional[sympy.Expr]:
        """
        A primitive n-th root of unity, or None if the field has none.

        Radical expressions are preferred over exp(2πi/n) whenever sympy can
        produce them, so that zero tests reduce to arithmetic on radicals.
        """
        if n < 1:
            raise ValueError(f"Order of a root of unity must be positive, got {n}")
        if not self.algebraically_closed:
            return {1: sympy.Integer(1), 2: sympy.Integer(-1)}.get(n)
        z = sympy.exp(2 * sympy.pi * sympy.I / n)
        radical = sympy.expand_complex(z)
        if radical.has(sympy.cos, sympy.sin):
            return z
        return radical

    def root_of_unity(self, n: int) -> sympy.Expr:
        root = self.try_root_of_unity(n)
        if root is None:
            raise FieldError(f"{self.name} has no primitive {n}-th root of unity")
        return root


QQ = Field("QQ")
QQBar = Field("QQBar", algebraically_closed=True)
