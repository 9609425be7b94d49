"""Tests for harmonic analysis: coefficients, ranking, truncation, round trip."""

from __future__ import annotations

import cmath
import math

import numpy as np
import pytest

from epicycles.engine.harmonics import (
    HarmonicCoefficient,
    analyze,
    list_strategies,
    rank_order,
    synthesize,
    to_complex_samples,
)
from epicycles.errors import InputError
from tests.conftest import circle_points, heart_points, star_points


def _sample_times(n: int) -> np.ndarray:
    return 2 * np.pi * np.arange(n) / n


class TestUnitSquare:
    def test_four_coefficients(self, unit_square):
        coeffs = analyze(unit_square, 4)
        assert len(coeffs) == 4

    def test_reconstructs_vertices(self, unit_square):
        coeffs = analyze(unit_square, 4)
        for k, (x, y) in enumerate(unit_square):
            z = synthesize(coeffs, k * math.pi / 2)
            assert abs(z - complex(x, y)) < 1e-9

    def test_dominant_harmonic_is_one(self, unit_square):
        coeffs = analyze(unit_square, 4)
        assert coeffs[0].frequency == 1
        assert coeffs[0].amplitude == pytest.approx(1.0, abs=1e-12)

    def test_zero_amplitude_ties_ordered_by_frequency(self, unit_square):
        coeffs = analyze(unit_square, 4)
        assert [c.frequency for c in coeffs[1:]] == [-2, -1, 0]


class TestRoundTrip:
    @pytest.mark.parametrize("points", [heart_points(100), star_points(128), heart_points(37)])
    def test_full_set_reconstructs_samples(self, points):
        n = len(points)
        coeffs = analyze(points, n)
        assert len(coeffs) == n
        z = synthesize(coeffs, _sample_times(n))
        expected = points[:, 0] + 1j * points[:, 1]
        np.testing.assert_allclose(z, expected, atol=1e-9)

    def test_single_point(self):
        coeffs = analyze([(0.25, -0.5)], 0)
        assert len(coeffs) == 1
        assert coeffs[0].frequency == 0
        assert synthesize(coeffs, 1.234) == pytest.approx(complex(0.25, -0.5))


class TestCoefficientValues:
    def test_matches_definition(self):
        pts = heart_points(24)
        z = pts[:, 0] + 1j * pts[:, 1]
        n = len(z)
        for coef in analyze(pts, 0):
            expected = sum(z[k] * cmath.exp(-2j * math.pi * coef.frequency * k / n) for k in range(n)) / n
            assert coef.value == pytest.approx(expected, abs=1e-12)

    def test_amplitude_and_phase_are_polar_form(self, star):
        for coef in analyze(star, 0):
            assert coef.amplitude >= 0
            assert -math.pi < coef.phase <= math.pi
            assert abs(cmath.rect(coef.amplitude, coef.phase) - coef.value) < 1e-12

    def test_frequencies_unique_and_in_range(self):
        n = 50
        coeffs = analyze(heart_points(n), 0)
        freqs = [c.frequency for c in coeffs]
        assert len(set(freqs)) == n
        assert min(freqs) == -n // 2
        assert max(freqs) == n // 2 - 1

    def test_odd_count_is_symmetric(self):
        coeffs = analyze(heart_points(9), 0)
        assert sorted(c.frequency for c in coeffs) == list(range(-4, 5))

    def test_phase_minus_pi_is_folded(self):
        coef = HarmonicCoefficient.from_complex(3, complex(-2.0, -0.0))
        assert coef.phase == pytest.approx(math.pi)
        assert coef.amplitude == pytest.approx(2.0)


class TestRankingAndTruncation:
    def test_sorted_by_amplitude_descending(self, star):
        amps = [c.amplitude for c in analyze(star, 0)]
        assert all(a >= b - 1e-12 for a, b in zip(amps, amps[1:]))

    def test_circle_count_zero_keeps_all(self):
        assert len(analyze(heart_points(8), 0)) == 8

    def test_circle_count_larger_than_samples_is_capped(self):
        assert len(analyze(heart_points(8), 1000)) == 8

    def test_negative_circle_count_keeps_all(self):
        assert len(analyze(heart_points(8), -3)) == 8

    def test_truncation_keeps_largest(self, star):
        full = analyze(star, 0)
        top = analyze(star, 5)
        assert [c.frequency for c in top] == [c.frequency for c in full[:5]]

    def test_deterministic_order(self, heart):
        runs = [[(c.frequency, c.color) for c in analyze(heart, 30)] for _ in range(3)]
        assert runs[0] == runs[1] == runs[2]

    def test_rank_order_tie_break(self):
        freqs = np.array([3, -1, 2, 0])
        values = np.array([1.0, 1.0, 2.0, 1.0], dtype=complex)
        assert list(rank_order(freqs, values)) == [2, 1, 3, 0]

    def test_amplitudes_equal_to_twelve_places_rank_by_frequency(self):
        freqs = np.array([5, -2])
        values = np.array([0.5 + 4e-14, 0.5], dtype=complex)
        assert list(rank_order(freqs, values)) == [1, 0]

    def test_larger_differences_rank_by_amplitude(self):
        freqs = np.array([5, -2])
        values = np.array([0.5 + 1e-9, 0.5], dtype=complex)
        assert list(rank_order(freqs, values)) == [0, 1]

    def test_circle_contour_has_single_dominant_term(self):
        coeffs = analyze(circle_points(32), 3)
        assert coeffs[0].frequency == 1
        assert coeffs[0].amplitude == pytest.approx(1.0)
        assert coeffs[1].amplitude == pytest.approx(0.0, abs=1e-12)


class TestColors:
    def test_same_seed_same_colors(self, heart):
        a = {c.frequency: c.color for c in analyze(heart, 0, seed=7)}
        b = {c.frequency: c.color for c in analyze(heart, 0, seed=7)}
        assert a == b

    def test_color_independent_of_truncation(self, heart):
        full = {c.frequency: c.color for c in analyze(heart, 0, seed=3)}
        for c in analyze(heart, 10, seed=3):
            assert full[c.frequency] == c.color

    def test_color_is_hex(self, heart):
        for c in analyze(heart, 10):
            assert c.color.startswith("#") and len(c.color) == 7


class TestDegenerateInput:
    def test_empty_returns_empty(self):
        assert analyze([], 10) == []

    def test_nan_returns_empty(self):
        assert analyze([(0.0, 0.0), (float("nan"), 1.0)], 0) == []

    def test_bad_shape_returns_empty(self):
        assert analyze(np.zeros((4, 3)), 0) == []

    def test_unknown_strategy_raises(self, unit_square):
        with pytest.raises(ValueError):
            analyze(unit_square, 0, strategy="nope")

    def test_to_complex_samples_rejects_empty(self):
        with pytest.raises(InputError):
            to_complex_samples([])

    def test_complex_input_accepted(self):
        z = np.exp(2j * np.pi * np.arange(16) / 16)
        coeffs = analyze(z, 1)
        assert coeffs[0].frequency == 1


class TestHelpers:
    def test_strategies_registered(self):
        assert {"direct", "fft"} <= set(list_strategies())

    def test_synthesize_scalar_vs_array(self, heart_coefficients):
        ts = np.array([0.0, 0.5, 1.0])
        arr = synthesize(heart_coefficients, ts)
        for t, z in zip(ts, arr):
            assert synthesize(heart_coefficients, float(t)) == pytest.approx(z)
