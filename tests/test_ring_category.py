"""
Tests for the Structure-Constant Category Engine
"""

import numpy as np
import pytest
import sympy

from tensor_categories import QQ, QQBar, RingCategory
from tensor_categories.category import (
    End,
    Hom,
    compose,
    decompose_by_endomorphism_ring,
    express_in_basis,
    indecomposable_subobjects,
    linearly_independent,
    pentagon_holds,
    snake_holds,
)
from tensor_categories.examples import graded_vector_spaces, ising_category
from tensor_categories.exceptions import DecompositionError, NotRigidError, ParentMismatchError
from tensor_categories.groups import cyclic_group
from tensor_categories.linalg import is_zero, matrix


def vec_z2():
    return graded_vector_spaces(QQ, cyclic_group(2))


class TestSetters:
    def test_tensor_product_shape_is_checked(self):
        C = RingCategory(QQ, ["a", "b"])
        with pytest.raises(ValueError):
            C.set_tensor_product(np.zeros((2, 2), dtype=int))

    def test_associator_shape_is_checked(self):
        C = vec_z2()
        with pytest.raises(ValueError):
            C.set_associator(1, 1, 1, [matrix([[1, 0], [0, 1]]), matrix([[1]])])

    def test_set_associator_single_block(self):
        C = vec_z2()
        C.set_associator(1, 1, 1, 1, matrix([[-1]]))
        g = C[1]
        a = C.associator(g, g, g)
        assert a.m[1][0, 0] == -1

    def test_simples_names(self):
        C = vec_z2()
        with pytest.raises(ValueError):
            C.set_simples_name(["only one"])
        C.set_simples_name(["1", "g"])
        assert repr(C[1] + C[1]) == "2⋅g"


class TestObjects:
    def test_unit_and_zero(self):
        C = vec_z2()
        assert C.one() == C[0]
        assert C.zero().components == (0, 0)
        assert C.is_fusion()
        assert not C.is_braided()

    def test_tensor_product_follows_fusion_rules(self):
        C = vec_z2()
        g = C[1]
        assert g * g == C.one()
        assert (C[0] + g) * (C[0] + g) == C[0] + C[0] + g + g

    def test_mismatching_parents(self):
        C, D = vec_z2(), vec_z2()
        with pytest.raises(ParentMismatchError):
            C.tensor_product(C[0], D[0])

    def test_direct_sum_structure_morphisms(self):
        C = vec_z2()
        S, incl, proj = C.direct_sum(C[0], C[1], C[0])
        assert S.components == (2, 1)
        for i, p in zip(incl, proj):
            assert compose(i, p) == C.id(i.domain)
        total = C.add(C.add(compose(proj[0], incl[0]), compose(proj[1], incl[1])), compose(proj[2], incl[2]))
        assert total == C.id(S)

    def test_decompose(self):
        C = vec_z2()
        X = C[0] + C[1] + C[1]
        assert C.decompose(X) == [(C[0], 1), (C[1], 2)]
        assert C.is_simple(C[1])
        assert not C.is_simple(X)

    def test_dual_of_group_element(self):
        C = graded_vector_spaces(QQBar, cyclic_group(3))
        g, h = C[1], C[2]
        assert C.dual(g) == h
        assert C.dual(C.one()) == C.one()


class TestMorphisms:
    def test_hom_dimensions(self):
        C = vec_z2()
        X = C[0] + C[1]
        assert Hom(X * X, X).dim == 4
        assert Hom(C[0], C[1]).dim == 0
        assert End(X + X).dim == 8

    def test_express_in_basis(self):
        C = vec_z2()
        X = C[0] + C[1]
        basis = End(X).basis
        f = C.add(C.scale(3, basis[0]), C.scale(-2, basis[1]))
        assert express_in_basis(f, basis) == [3, -2]

    def test_express_outside_span_raises(self):
        C = vec_z2()
        X = C[0] + C[1]
        basis = End(X).basis[:1]
        with pytest.raises(ValueError):
            express_in_basis(C.id(X), basis)

    def test_linearly_independent(self):
        C = vec_z2()
        X = C[0] + C[1]
        b = End(X).basis
        assert len(linearly_independent([b[0], b[1], C.add(b[0], b[1])])) == 2

    def test_operator_sugar(self):
        C = vec_z2()
        X = C[0] + C[1]
        f = End(X)[0]
        assert (2 * f) - f == f
        assert C.id(X) @ f == f
        assert (f * C.id(C[1])).domain == X * C[1]

    def test_kernel_and_cokernel(self):
        C = vec_z2()
        X = C[0] + C[1]
        p = End(X)[0]
        K, k = C.kernel(p)
        Q, q = C.cokernel(p)
        assert K == C[1]
        assert Q == C[1]
        assert compose(k, p) == C.zero_morphism(K, X)
        assert compose(p, q) == C.zero_morphism(X, Q)

    def test_left_and_right_inverse(self):
        C = vec_z2()
        S, incl, proj = C.direct_sum(C[0], C[0])
        i = incl[0]
        assert compose(i, C.left_inverse(i)) == C.id(C[0])
        p = proj[1]
        assert compose(C.right_inverse(p), p) == C.id(C[0])

    def test_is_isomorphism(self):
        C = vec_z2()
        X = C[0] + C[1]
        assert C.is_isomorphism(C.id(X))
        assert not C.is_isomorphism(End(X)[0])

    def test_braiding_requires_data(self):
        C = vec_z2()
        with pytest.raises(ValueError):
            C.braiding(C[1], C[1])


class TestAssociators:
    def test_pentagon_vec_z2(self):
        assert pentagon_holds(vec_z2())

    def test_pentagon_composite_objects(self):
        C = vec_z2()
        X = C[0] + C[1]
        assert pentagon_holds(C, [X, C[1]])

    def test_associator_cache(self):
        C = vec_z2()
        X = C[0] + C[1]
        a = C.associator(X, X, X)
        assert C.associator(X, X, X) is a
        assert compose(a, C.inv_associator(X, X, X)) == C.id(a.domain)

    def test_changing_associator_clears_cache(self):
        C = vec_z2()
        g = C[1]
        before = C.associator(g, g, g)
        C.set_associator(1, 1, 1, [sympy.zeros(0, 0), matrix([[-1]])])
        after = C.associator(g, g, g)
        assert before != after

    def test_snake_identities(self):
        C = ising_category()
        for X in C.simples() + [C[1] + C[2]]:
            assert snake_holds(X)


class TestDimensions:
    def test_ising_dimensions(self):
        C = ising_category()
        X = C[2]
        assert is_zero(C.dim(X) ** 2 - 2)
        assert is_zero(C.fpdim(X) - sympy.sqrt(2))
        assert is_zero(C.dim_category() - 4)

    def test_dimension_is_multiplicative(self):
        C = ising_category()
        X, chi = C[2], C[1]
        assert is_zero(C.dim(X * X) - C.dim(X) ** 2)
        assert is_zero(C.dim(X * chi) - C.dim(X) * C.dim(chi))

    def test_trace_of_identity(self):
        C = vec_z2()
        X = C[0] + C[1] + C[1]
        assert C.dim(X) == 3


class TestDecomposition:
    def nilpotent_pair(self):
        C = vec_z2()
        X = C[0] + C[0]
        empty = sympy.zeros(0, 0)
        upper = C.morphism(X, X, [matrix([[0, 1], [0, 0]]), empty])
        lower = C.morphism(X, X, [matrix([[0, 0], [1, 0]]), empty])
        return C, X, [upper, lower]

    def test_no_splitting_endomorphism(self):
        C, X, nilpotents = self.nilpotent_pair()
        with pytest.raises(DecompositionError):
            indecomposable_subobjects(X, nilpotents, attempts=3, coefficient_range=(0, 0))

    def test_random_combination_splits(self):
        C, X, nilpotents = self.nilpotent_pair()
        simples = indecomposable_subobjects(X, nilpotents, attempts=1, coefficient_range=(1, 1))
        assert simples == [C[0]]

    def test_decompose_by_endomorphism_ring(self):
        C = vec_z2()
        X = C[0] + C[1] + C[1]
        decomposition = decompose_by_endomorphism_ring(X, attempts=5)
        assert sorted((s.components, m) for s, m in decomposition) == [((0, 1), 2), ((1, 0), 1)]


class TestRigidity:
    def test_dual_of_non_rigid_simple(self):
        C = RingCategory(QQ, ["a", "b"])
        N = np.zeros((2, 2, 2), dtype=int)
        N[0, 0, 0] = 1
        N[0, 1, 1] = 1
        N[1, 0, 1] = 1
        N[1, 1, 1] = 1
        C.set_tensor_product(N)
        C.set_one([1, 0])
        assert C.dual(C[0]) == C[0]
        with pytest.raises(NotRigidError):
            C.dual(C[1])
        assert not C.is_multifusion()
