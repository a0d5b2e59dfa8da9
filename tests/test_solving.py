"""
Tests for the Symbolic Solving Utilities
"""

import logging
import random

import pytest
import sympy

from tensor_categories import QQ, QQBar
from tensor_categories.constants import ComputationConfig
from tensor_categories.exceptions import WitnessSetError
from tensor_categories.solving import (
    SolutionSet,
    dimension,
    guess_real_solutions_over_base_field,
    real_solutions_over_base_field,
    recover_solutions,
    witness_set,
)

x, y, z = sympy.symbols("x y z")


class TestDimension:
    def test_no_equations(self):
        assert dimension([], (x, y)) == 2

    def test_unit_ideal(self):
        assert dimension([x, x - 1], (x, y)) == -1

    def test_points(self):
        assert dimension([x ** 2 - 1, y - x], (x, y)) == 0

    def test_curve(self):
        assert dimension([x * y - 1], (x, y)) == 1

    def test_plane_in_space(self):
        assert dimension([x + y + z], (x, y, z)) == 2

    def test_solution_set_method(self):
        S = SolutionSet([x ** 2 - y], (x, y), QQ)
        assert S.dimension() == 1


class TestRealSolutions:
    def test_rational_points(self):
        S = SolutionSet([x ** 2 - 1, y - 2 * x], (x, y), QQ)
        solutions = real_solutions_over_base_field(S)
        assert sorted(solutions) == [(-1, -2), (1, 2)]

    def test_drops_points_outside_field(self, caplog):
        S = SolutionSet([x ** 2 - 2], (x,), QQ)
        with caplog.at_level(logging.INFO, logger="tensor_categories.solving"):
            assert real_solutions_over_base_field(S) == []
        assert any("outside" in r.getMessage() for r in caplog.records)

    def test_algebraic_points(self):
        S = SolutionSet([x ** 2 - 2], (x,), QQBar)
        solutions = real_solutions_over_base_field(S)
        assert len(solutions) == 2

    def test_complex_points_are_dropped(self):
        S = SolutionSet([x ** 2 + 1], (x,), QQBar)
        assert real_solutions_over_base_field(S) == []

    def test_empty_system(self):
        S = SolutionSet([x - 1, x - 2], (x,), QQ)
        assert real_solutions_over_base_field(S) == []

    def test_positive_dimension_raises(self):
        S = SolutionSet([x - y], (x, y), QQ)
        with pytest.raises(ValueError):
            real_solutions_over_base_field(S)

    def test_recover_solutions_back_substitution(self):
        S = SolutionSet([x - y ** 2, y ** 2 - 4], (x, y), QQ)
        assert sorted(recover_solutions(S)) == [(4, -2), (4, 2)]


class TestGuessing:
    def test_free_variable_is_guessed(self):
        S = SolutionSet([x - 1], (x, y), QQ)
        solutions = guess_real_solutions_over_base_field(S)
        assert sorted(solutions) == [(1, -1), (1, 0), (1, 1)]

    def test_zero_dimensional_system_is_solved(self):
        S = SolutionSet([x - 1, y + 1], (x, y), QQ)
        assert guess_real_solutions_over_base_field(S) == [(1, -1)]


class TestWitnessSet:
    def test_line(self):
        S = SolutionSet([x - y], (x, y), QQ)
        points = witness_set(S, rng=random.Random(1))
        assert len(points) >= 1
        for px, py in points:
            assert px == py

    def test_no_real_points(self):
        S = SolutionSet([x ** 2 + y ** 2 + 1], (x, y), QQ)
        with pytest.raises(WitnessSetError):
            witness_set(S, bound=5)

    def test_bound_from_config(self):
        S = SolutionSet([x ** 2 + y ** 2 + 1], (x, y), QQ)
        with pytest.raises(WitnessSetError, match="in 2 slices"):
            witness_set(S, config=ComputationConfig(witness_set_bound=2))
