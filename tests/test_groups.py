"""
Tests for Fields, Groups and Coefficient Data
"""

import pytest
import sympy

from tensor_categories import QQ, QQBar
from tensor_categories.exceptions import FieldError
from tensor_categories.groups import (
    FiniteAbelianGroup,
    cyclic_3_cocycle,
    cyclic_group,
    nondegenerate_bilinear_form,
    trivial_3_cocycle,
)


class TestField:
    def test_rational_membership(self):
        assert QQ.contains(sympy.Rational(1, 3))
        assert not QQ.contains(sympy.sqrt(2))
        assert QQBar.contains(sympy.sqrt(2))

    def test_try_sqrt(self):
        assert QQ.try_sqrt(4) == 2
        assert QQ.try_sqrt(2) is None
        assert QQBar.try_sqrt(2) == sympy.sqrt(2)

    def test_sqrt_raises_outside_field(self):
        with pytest.raises(FieldError):
            QQ.sqrt(2)

    def test_coercion(self):
        assert QQ(sympy.Rational(2, 4)) == sympy.Rational(1, 2)
        with pytest.raises(FieldError):
            QQ(sympy.sqrt(3))

    def test_roots_of_unity(self):
        assert QQ.try_root_of_unity(2) == -1
        assert QQ.try_root_of_unity(4) is None
        assert QQBar.root_of_unity(4) == sympy.I
        with pytest.raises(FieldError):
            QQ.root_of_unity(3)


class TestFiniteAbelianGroup:
    def test_cyclic_group(self):
        G = cyclic_group(4)
        assert G.order() == 4
        assert G.exponent() == 4
        assert G.elements()[0] == G.identity
        assert G.multiply((3,), (2,)) == (1,)
        assert G.inverse((1,)) == (3,)

    def test_trivial_group(self):
        G = cyclic_group(1)
        assert G.order() == 1
        assert G.elements() == [()]

    def test_product_group(self):
        G = FiniteAbelianGroup((2, 3))
        assert G.order() == 6
        assert G.exponent() == 6
        assert len(set(G.elements())) == 6

    def test_invalid_invariants(self):
        with pytest.raises(ValueError):
            FiniteAbelianGroup((1, 2))


class TestBilinearForm:
    def test_trivial_group_form_is_one(self):
        chi = nondegenerate_bilinear_form(cyclic_group(1), QQ)
        assert chi((), ()) == 1

    def test_z2_form(self):
        chi = nondegenerate_bilinear_form(cyclic_group(2), QQ)
        assert chi((0,), (1,)) == 1
        assert chi((1,), (1,)) == -1

    def test_form_is_symmetric_and_multiplicative(self):
        G = cyclic_group(3)
        chi = nondegenerate_bilinear_form(G, QQBar)
        for g in G.elements():
            for h in G.elements():
                assert sympy.simplify(chi(g, h) - chi(h, g)) == 0
                for k in G.elements():
                    lhs = chi(G.multiply(g, h), k)
                    rhs = chi(g, k) * chi(h, k)
                    assert sympy.simplify(lhs - rhs) == 0

    def test_form_is_nondegenerate(self):
        G = cyclic_group(3)
        chi = nondegenerate_bilinear_form(G, QQBar)
        g = (1,)
        assert any(sympy.simplify(chi(g, h) - 1) != 0 for h in G.elements())


class TestCocycle:
    def test_trivial_cocycle(self):
        G = cyclic_group(2)
        omega = trivial_3_cocycle(G, QQ)
        assert omega((1,), (1,), (1,)) == 1

    def test_semion_cocycle(self):
        omega = cyclic_3_cocycle(2, QQ)
        assert omega((1,), (1,), (1,)) == -1
        assert omega((1,), (0,), (1,)) == 1
        assert omega((0,), (1,), (1,)) == 1
