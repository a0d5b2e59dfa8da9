"""
Tests for the Example Categories
"""

import pytest
import sympy

from tensor_categories import QQ, QQBar
from tensor_categories.category import Hom, compose, pentagon_holds, snake_holds
from tensor_categories.examples import (
    graded_vector_spaces,
    ising_category,
    tambara_yamagami,
    vector_spaces,
)
from tensor_categories.exceptions import FieldError
from tensor_categories.groups import cyclic_3_cocycle, cyclic_group
from tensor_categories.linalg import is_zero


class TestVectorSpaces:
    def test_single_simple(self):
        C = vector_spaces(QQ)
        assert len(C.simples()) == 1
        assert C.simples_names == ["k"]
        assert C.one() == C[0]
        assert C.dim(C[0]) == 1

    def test_name(self):
        C = vector_spaces(QQ)
        assert "vector spaces" in C.name


class TestGradedVectorSpaces:
    def test_simples_are_group_elements(self):
        C = graded_vector_spaces(QQBar, cyclic_group(3))
        assert len(C.simples()) == 3
        assert C[1] * C[2] == C.one()
        assert C[2] * C[2] == C[1]

    def test_pentagon_with_cocycle(self):
        C = graded_vector_spaces(QQ, cyclic_group(2), cyclic_3_cocycle(2, QQ))
        assert pentagon_holds(C)
        g = C[1]
        assert C.associator(g, g, g).m[1][0, 0] == -1

    def test_pentagon_with_cocycle_z3(self):
        C = graded_vector_spaces(QQBar, cyclic_group(3), cyclic_3_cocycle(3, QQBar))
        assert pentagon_holds(C)

    def test_snake_with_cocycle(self):
        C = graded_vector_spaces(QQ, cyclic_group(2), cyclic_3_cocycle(2, QQ))
        for X in C.simples():
            assert snake_holds(X)


class TestTambaraYamagami:
    def test_fusion_rules(self):
        C = tambara_yamagami(QQBar, cyclic_group(2))
        a0, a1, m = C.simples()
        assert C.one() == a0
        assert m * m == a0 + a1
        assert a1 * m == m
        assert m * a1 == m
        assert a1 * a1 == a0

    def test_pentagon(self):
        C = tambara_yamagami(QQBar, cyclic_group(2))
        assert pentagon_holds(C)

    def test_needs_square_root(self):
        with pytest.raises(FieldError):
            tambara_yamagami(QQ, cyclic_group(2))

    def test_explicit_tau(self):
        C = tambara_yamagami(QQBar, cyclic_group(2), tau=-sympy.sqrt(2))
        assert pentagon_holds(C)

    def test_dimensions(self):
        C = tambara_yamagami(QQBar, cyclic_group(2))
        m = C[2]
        assert is_zero(C.dim(m) ** 2 - 2)
        assert is_zero(C.dim_category() - 4)

    def test_simple_names(self):
        C = tambara_yamagami(QQBar, cyclic_group(3))
        assert C.simples_names == ["a0", "a1", "a2", "m"]
        assert Hom(C[3] * C[3], C[0]).dim == 1


class TestIsing:
    def test_fusion_rules(self):
        C = ising_category()
        one, chi, X = C.simples()
        assert chi * chi == one
        assert chi * X == X
        assert X * X == one + chi

    def test_pentagon(self):
        assert pentagon_holds(ising_category())

    def test_associator_of_x_is_an_involution(self):
        C = ising_category()
        X = C[2]
        a = C.associator(X, X, X)
        assert a.domain == a.codomain
        assert C.morphism_equal(compose(a, a), C.id(a.domain))
        assert not C.morphism_equal(a, C.id(a.domain))

    def test_braided_over_algebraic_closure(self):
        C = ising_category(QQBar)
        assert C.is_braided()
        chi = C[1]
        assert C.braiding(chi, chi).m[0][0, 0] == -1

    def test_braiding_is_invertible(self):
        C = ising_category(QQBar, q=-1)
        X = C[2]
        c = C.braiding(X, X)
        assert C.is_isomorphism(c)

    def test_needs_square_root_of_two(self):
        with pytest.raises(FieldError):
            ising_category(QQ)
