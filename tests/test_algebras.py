"""
Tests for Algebra Objects
"""

import pytest

from tensor_categories import QQ
from tensor_categories.algebras import (
    AlgebraObject,
    algebra_structures,
    commutative_algebra_structures,
    etale_algebra_structures,
    fix_unit,
    is_algebra,
    is_commutative,
    is_separable,
    separable_algebra_structures,
)
from tensor_categories.category import Hom
from tensor_categories.examples import graded_vector_spaces
from tensor_categories.groups import cyclic_group


def vec_z2(braided=False):
    C = graded_vector_spaces(QQ, cyclic_group(2))
    if braided:
        for i, s in enumerate(C.simples()):
            for j, t in enumerate(C.simples()):
                C.set_braiding(i, j, C.id(C.tensor_product(s, t)).m)
    return C


class TestAlgebraStructures:
    def test_unit_object(self):
        C = vec_z2()
        algebras = algebra_structures(C.one())
        assert len(algebras) == 1
        assert is_algebra(algebras[0])
        assert is_separable(algebras[0])

    def test_group_algebra_family(self):
        C = vec_z2()
        X = C[0] + C[1]
        algebras = algebra_structures(X)
        assert len(algebras) == 3
        assert all(isinstance(A, AlgebraObject) for A in algebras)
        assert all(is_algebra(A) for A in algebras)

    def test_separable_structures(self):
        C = vec_z2()
        X = C[0] + C[1]
        assert len(separable_algebra_structures(X)) == 2

    def test_object_without_unit(self):
        C = vec_z2()
        assert algebra_structures(C[1]) == []

    def test_explicit_unit(self):
        C = vec_z2()
        X = C[0] + C[1]
        unit = Hom(C.one(), X)[0]
        algebras = algebra_structures(X, unit)
        assert all(C.morphism_equal(A.unit, unit) for A in algebras)

    def test_rescaled_multiplication_is_rejected(self):
        C = vec_z2()
        X = C[0] + C[1]
        A = algebra_structures(X)[0]
        broken = AlgebraObject(C, X, C.scale(2, A.multiplication), A.unit)
        assert not is_algebra(broken)


class TestCommutativeAlgebras:
    def test_requires_braiding(self):
        C = vec_z2()
        with pytest.raises(ValueError):
            commutative_algebra_structures(C[0] + C[1])

    def test_commutative_structures(self):
        C = vec_z2(braided=True)
        X = C[0] + C[1]
        algebras = commutative_algebra_structures(X)
        assert len(algebras) == 3
        assert all(is_commutative(A) for A in algebras)

    def test_etale_structures(self):
        C = vec_z2(braided=True)
        X = C[0] + C[1]
        algebras = etale_algebra_structures(X)
        assert len(algebras) == 2
        assert all(A.is_separable() and A.is_commutative() for A in algebras)


class TestUnitNormalization:
    def test_fix_unit(self):
        C = vec_z2()
        X = C.one() + C.one()
        unit = Hom(C.one(), X)[0]
        fixed, free = fix_unit(X, unit)
        assert C.morphism_equal(C.compose(unit, fixed), unit)
        assert len(free) == 2
        for f in free:
            assert C.morphism_equal(C.compose(unit, f), C.zero_morphism(C.one(), X))

    def test_unit_object_has_no_free_part(self):
        C = vec_z2()
        fixed, free = fix_unit(C.one(), C.id(C.one()))
        assert C.morphism_equal(fixed, C.id(C.one()))
        assert free == []

    def test_two_dimensional_unital_algebras(self):
        C = vec_z2()
        X = C.one() + C.one()
        algebras = algebra_structures(X)
        assert len(algebras) == 9
        assert all(is_algebra(A) for A in algebras)
