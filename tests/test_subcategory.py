"""
Tests for Ring Subcategories of Multifusion Categories
"""

import numpy as np
import pytest

from tensor_categories import QQ, RingCategory
from tensor_categories.category import snake_holds
from tensor_categories.examples import graded_vector_spaces
from tensor_categories.exceptions import NotRigidError
from tensor_categories.groups import cyclic_group
from tensor_categories.subcategory import RingSubcategory, ring_subcategories


def matrix_category():
    """The multifusion category of 2x2 matrices of vector spaces, simples E_ij."""
    names = ["E00", "E01", "E10", "E11"]
    index = {(i, j): 2 * i + j for i in range(2) for j in range(2)}
    N = np.zeros((4, 4, 4), dtype=int)
    for (i, j), a in index.items():
        for (k, l), b in index.items():
            if j == k:
                N[a, b, index[(i, l)]] = 1
    C = RingCategory(QQ, names)
    C.set_tensor_product(N)
    C.set_one([1, 0, 0, 1])
    return C


class TestMatrixCategory:
    def test_is_multifusion_not_fusion(self):
        C = matrix_category()
        assert C.is_multifusion()
        assert not C.is_fusion()

    def test_components(self):
        C = matrix_category()
        subs = ring_subcategories(C)
        assert len(subs) == 2
        assert subs[0].projector == C[0]
        assert subs[1].projector == C[3]

    def test_component_simples(self):
        C = matrix_category()
        D = RingSubcategory(C, 1)
        assert [s.object for s in D.simples()] == [C[3]]
        assert D.one().object == C[3]
        assert D.tensor_product(D.one(), D.one()) == D.one()

    def test_component_is_vec(self):
        C = matrix_category()
        D = RingSubcategory(C, 0)
        one = D.one()
        assert D.hom(one, one).dim == 1
        assert D.is_simple(one)
        assert D.dim_category() == 1

    def test_evaluation_targets_component_unit(self):
        C = matrix_category()
        D = RingSubcategory(C, 0)
        X = D.simples()[0]
        assert D.ev(X).codomain == D.one()
        assert D.coev(X).domain == D.one()
        assert snake_holds(X)

    def test_repr(self):
        D = RingSubcategory(matrix_category(), 1)
        assert "component" in repr(D)


class TestFusionCategory:
    def test_single_component(self):
        C = graded_vector_spaces(QQ, cyclic_group(2))
        subs = ring_subcategories(C)
        assert len(subs) == 1
        D = subs[0]
        assert len(D.simples()) == 2
        g = D.simples()[1]
        assert D.tensor_product(g, g) == D.one()

    def test_morphisms_delegate(self):
        C = graded_vector_spaces(QQ, cyclic_group(2))
        D = RingSubcategory(C, 0)
        X = D.direct_sum(*D.simples())[0]
        assert D.hom(X, X).dim == 2
        f = D.hom(X, X)[0]
        K, k = D.kernel(f)
        assert K.object == C[1]
        assert D.is_isomorphism(D.id(X))

    def test_not_rigid(self):
        C = RingCategory(QQ, ["a", "b"])
        N = np.zeros((2, 2, 2), dtype=int)
        N[0, 0, 0] = 1
        N[0, 1, 1] = 1
        N[1, 0, 1] = 1
        N[1, 1, 1] = 1
        C.set_tensor_product(N)
        C.set_one([1, 0])
        with pytest.raises(NotRigidError):
            RingSubcategory(C, 0)
