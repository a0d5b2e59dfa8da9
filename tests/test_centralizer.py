"""
Tests for Centralizers and Drinfeld Centers
"""

import pytest
import sympy

from tensor_categories import QQBar
from tensor_categories.category import compose, is_simple
from tensor_categories.centralizer import CentralizerCategory, centralizer, drinfeld_center, topologize
from tensor_categories.constants import ComputationConfig
from tensor_categories.examples import graded_vector_spaces, ising_category
from tensor_categories.groups import cyclic_3_cocycle, cyclic_group
from tensor_categories.linalg import identity_matrix, is_zero, matrices_equal


@pytest.fixture(scope="module")
def vec_z2():
    return graded_vector_spaces(QQBar, cyclic_group(2))


@pytest.fixture(scope="module")
def toric_code(vec_z2):
    Z = drinfeld_center(vec_z2)
    Z.simples()
    return Z


@pytest.fixture(scope="module")
def double_semion():
    C = graded_vector_spaces(QQBar, cyclic_group(2), cyclic_3_cocycle(2, QQBar))
    return drinfeld_center(C, ComputationConfig(parallel=False))


@pytest.fixture(scope="module")
def ising_relative():
    I = ising_category()
    return centralizer(I, I[1])


def assert_natural(Z, X):
    """(id_X ⊗ g) then γ_j equals γ_i then (g ⊗ id_X) for every g: s_i → s_j."""
    C = Z.category
    x = X.object
    S = Z.subcategory_simples
    for i, si in enumerate(S):
        for j, sj in enumerate(S):
            for g in C.hom(si, sj):
                lhs = compose(C.tensor_product_morphisms(C.id(x), g), X.half_braidings[j])
                rhs = compose(X.half_braidings[i], C.tensor_product_morphisms(g, C.id(x)))
                assert C.morphism_equal(lhs, rhs)


class TestHalfBraidingNaturality:
    def test_toric_code_simples(self, toric_code):
        for X in toric_code.simples():
            assert_natural(toric_code, X)

    def test_relative_ising_simples(self, ising_relative):
        for X in ising_relative.simples():
            assert_natural(ising_relative, X)

    def test_composite_subcategory_object(self, toric_code, vec_z2):
        C = vec_z2
        Y = C[0] + C[1]
        for X in toric_code.simples():
            x = X.object
            gamma = toric_code.half_braiding(X, Y)
            for g in C.hom(Y, Y):
                lhs = compose(C.tensor_product_morphisms(C.id(x), g), gamma)
                rhs = compose(gamma, C.tensor_product_morphisms(g, C.id(x)))
                assert C.morphism_equal(lhs, rhs)


class TestTopologize:
    def test_closure_of_generator(self):
        I = ising_category()
        assert topologize(I, [I[1]]) == [I[0], I[1]]
        assert topologize(I, [I[2]]) == [I[0], I[2], I[1]]

    def test_unit_first(self, vec_z2):
        assert topologize(vec_z2, [vec_z2[1]])[0] == vec_z2.one()


class TestToricCode:
    def test_number_of_simples(self, toric_code):
        assert len(toric_code.simples()) == 4
        assert all(is_simple(s) for s in toric_code.simples())

    def test_global_dimension(self, toric_code, vec_z2):
        total = sum(toric_code.dim(s) ** 2 for s in toric_code.simples())
        assert is_zero(total - vec_z2.dim_category() ** 2)

    def test_simples_are_pairwise_non_isomorphic(self, toric_code):
        S = toric_code.simples()
        for i, X in enumerate(S):
            for j, Y in enumerate(S):
                assert (toric_code.hom(X, Y).dim == 1) == (i == j)

    def test_smatrix(self, toric_code):
        S = toric_code.smatrix()
        assert S.shape == (4, 4)
        assert matrices_equal(S, S.T)
        assert matrices_equal(S * S, 4 * identity_matrix(4))

    def test_twists(self, toric_code):
        assert sorted(toric_code.twists()) == [-1, 1, 1, 1]

    def test_fusion_of_invertibles(self, toric_code):
        for s in toric_code.simples():
            decomposition = toric_code.decompose(toric_code.tensor_product(s, s))
            assert len(decomposition) == 1
            assert decomposition[0][1] == 1

    def test_unit_is_a_simple(self, toric_code):
        one = toric_code.one()
        assert any(toric_code.is_isomorphic(one, s)[0] for s in toric_code.simples())

    def test_duals_are_isomorphic(self, toric_code):
        for s in toric_code.simples():
            found, iso = toric_code.is_isomorphic(s, toric_code.dual(s))
            assert found
            assert toric_code.category.is_isomorphism(iso.m)


class TestHomSpaces:
    def test_hom_methods_agree(self, toric_code):
        S = toric_code.simples()
        for X in S:
            for Y in S:
                d = toric_code.hom(X, Y).dim
                assert toric_code.hom_by_linear_equations(X, Y).dim == d
                assert toric_code.hom_by_projection(X, Y).dim == d

    def test_morphisms_are_central(self, toric_code, vec_z2):
        IX = toric_code.induction(vec_z2[0])
        for f in toric_code.hom(IX, IX):
            assert toric_code.is_central(f.m, IX, IX)

    def test_induction_contains_generator(self, toric_code, vec_z2):
        for s in vec_z2.simples():
            assert vec_z2.hom(s, toric_code.induction(s).object).dim > 0

    def test_induction_is_cached(self, toric_code, vec_z2):
        assert toric_code.induction(vec_z2[1]) is toric_code.induction(vec_z2[1])

    def test_end_of_induction(self, toric_code, vec_z2):
        assert len(toric_code.end_of_induction(vec_z2[0])) == 2

    def test_central_projection_is_idempotent(self, toric_code, vec_z2):
        C = vec_z2
        IX = toric_code.induction(C[0])
        for f in C.hom(IX.object, IX.object):
            p = toric_code.central_projection(IX, IX, f)
            q = toric_code.central_projection(IX, IX, p.m)
            assert C.morphism_equal(p.m, q.m)
            assert toric_code.is_central(p.m, IX, IX)

    def test_half_braiding_on_composite_object(self, toric_code, vec_z2):
        C = vec_z2
        X = toric_code.induction(C[1])
        Y = toric_code.tensor_product(X, toric_code.simples()[0])
        g = C[1]
        gamma = toric_code.half_braiding(Y, g + g)
        assert C.is_isomorphism(gamma)

    def test_add_simple_rejects_non_simple(self, toric_code, vec_z2):
        with pytest.raises(ValueError):
            toric_code.add_simple(toric_code.induction(vec_z2[0]))


class TestKernelsAndImages:
    def test_kernel_of_projection(self, toric_code):
        S = toric_code.simples()
        X, incl, proj = toric_code.direct_sum(S[0], S[1])
        p = compose(proj[0], incl[0])
        K, k = toric_code.kernel(p)
        assert toric_code.is_isomorphic(K, S[1])[0]
        assert toric_code.is_central(k.m, K, X)

    def test_image(self, toric_code):
        S = toric_code.simples()
        X, incl, proj = toric_code.direct_sum(S[0], S[1])
        p = compose(proj[1], incl[1])
        image, _ = toric_code.image(p)
        assert toric_code.is_isomorphic(image, S[1])[0]


class TestDoubleSemion:
    def test_number_of_simples(self, double_semion):
        simples = double_semion.simples()
        assert len(simples) == 4
        total = sum(double_semion.dim(s) ** 2 for s in simples)
        assert is_zero(total - 4)

    def test_twists_of_semions(self, double_semion):
        twists = double_semion.twists()
        assert sum(1 for t in twists if is_zero(t - 1)) == 2
        assert any(is_zero(t - sympy.I) for t in twists)
        assert any(is_zero(t + sympy.I) for t in twists)


class TestRelativeCentralizer:
    def test_subcategory(self, ising_relative):
        I = ising_relative.category
        assert ising_relative.subcategory_simples == [I[0], I[1]]
        assert is_zero(ising_relative.subcategory_dim() - 2)

    def test_simples(self, ising_relative):
        simples = ising_relative.simples_by_induction(check_dimension=True)
        assert len(simples) == 6
        total = sum(ising_relative.dim(s) ** 2 for s in simples)
        assert is_zero(total - 8)

    def test_half_braiding_outside_subcategory(self, ising_relative):
        I = ising_relative.category
        X = ising_relative.induction(I[0])
        with pytest.raises(ValueError):
            ising_relative.half_braiding(X, I[2])


class TestConstruction:
    def test_constructor_accepts_single_object(self, vec_z2):
        Z = centralizer(vec_z2, vec_z2[1])
        assert isinstance(Z, CentralizerCategory)
        assert Z.subcategory_simples == vec_z2.simples()

    def test_unit_has_trivial_half_braidings(self, vec_z2):
        Z = drinfeld_center(vec_z2)
        one = Z.one()
        assert all(vec_z2.morphism_equal(g, vec_z2.id(s))
                   for g, s in zip(one.half_braidings, Z.subcategory_simples))

    def test_unchecked_generators_must_contain_unit(self, vec_z2):
        with pytest.raises(ValueError):
            CentralizerCategory(vec_z2, [vec_z2[1]], check=False)
