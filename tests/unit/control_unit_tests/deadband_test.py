# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Unit Tests for DeadbandDetector

Tests cover:
1. Scalar and 3-vector reference sequences
2. Suppression rule ||P - V|| <= threshold * ||P|| (boundary included)
3. Zero-reference behaviour
4. Threshold validation and rejection without side effects
5. Reseeding via set_prev_vals
6. Configuration round-trip and precision
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from haptic_toolbox import DeadbandDetector

# ============================================================================
# Test Class 1: Reference Sequences
# ============================================================================


class TestReferenceSequences:
    """Known-answer sequences"""

    def test_scalar_sequence(self):
        """10% threshold from a zero reference"""
        detector = DeadbandDetector(0.1, 0.0)

        assert not detector.is_in_deadband(0.1)
        assert detector.is_in_deadband(0.11)
        assert not detector.is_in_deadband(0.12)

    def test_vector_sequence(self):
        """Same sequence on a 3-vector"""
        detector = DeadbandDetector(0.1, [0.0, 0.0, 0.0])

        assert not detector.is_in_deadband([0.1, 0.1, 0.1])
        assert detector.is_in_deadband([0.11, 0.11, 0.11])
        assert not detector.is_in_deadband([0.12, 0.12, 0.12])
        assert not detector.is_in_deadband([0.0, 0.0, 0.0])

    def test_suppressed_sample_does_not_move_reference(self):
        detector = DeadbandDetector(0.1, 0.0)
        detector.is_in_deadband(0.1)

        assert detector.is_in_deadband(0.105)
        assert_allclose(detector.prev_vals, [0.1])

    def test_retained_sample_becomes_reference(self):
        detector = DeadbandDetector(0.1, [1.0, 0.0])

        assert not detector.is_in_deadband([2.0, 0.0])
        assert_allclose(detector.prev_vals, [2.0, 0.0])
        assert detector.deadband == pytest.approx(0.2)

    def test_returns_python_bool(self):
        detector = DeadbandDetector(0.1, 1.0)
        assert detector.is_in_deadband(1.0) is True
        assert detector.is_in_deadband(5.0) is False


# ============================================================================
# Test Class 2: Suppression Rule
# ============================================================================


class TestSuppressionRule:
    """||P - V|| <= threshold * ||P||"""

    def test_deadband_invariant_after_each_call(self):
        rng = np.random.default_rng(0)
        detector = DeadbandDetector(0.2, rng.normal(size=3))

        for _ in range(200):
            detector.is_in_deadband(rng.normal(size=3))
            expected = detector.threshold * np.sqrt(detector.prev_vals @ detector.prev_vals)
            assert detector.deadband == pytest.approx(expected)

    @pytest.mark.parametrize("threshold", [0.0, 0.05, 0.1, 0.5, 1.0])
    def test_matches_formula_for_random_samples(self, threshold):
        rng = np.random.default_rng(42)

        for _ in range(100):
            reference = rng.normal(size=4)
            candidate = reference + rng.normal(scale=threshold + 1e-3, size=4)
            detector = DeadbandDetector(threshold, reference)

            diff = reference - candidate
            expected = np.sqrt(np.dot(diff, diff)) <= (
                threshold * np.sqrt(np.dot(reference, reference))
            )
            assert detector.is_in_deadband(candidate) == expected

    def test_boundary_is_suppressed(self):
        """Distance exactly equal to the radius counts as inside"""
        detector = DeadbandDetector(0.5, [4.0])
        # radius 2.0, distance exactly 2.0 (exact in binary)
        assert detector.is_in_deadband([6.0])
        assert detector.is_in_deadband([2.0])
        assert not detector.is_in_deadband([6.5])

    def test_zero_threshold_suppresses_only_identical_samples(self):
        detector = DeadbandDetector(0.0, [1.0, 2.0])
        assert detector.is_in_deadband([1.0, 2.0])
        assert not detector.is_in_deadband([1.0, 2.0 + 1e-12])


# ============================================================================
# Test Class 3: Zero Reference
# ============================================================================


class TestZeroReference:
    """A zero reference has a zero radius"""

    def test_zero_reference_has_zero_deadband(self):
        detector = DeadbandDetector(0.5, [0.0, 0.0, 0.0])
        assert detector.deadband == 0.0

    def test_any_nonzero_sample_leaves_zero_reference(self):
        detector = DeadbandDetector(0.9, [0.0, 0.0])
        assert not detector.is_in_deadband([1e-9, 0.0])

    def test_zero_sample_stays_in_zero_reference(self):
        detector = DeadbandDetector(0.9, [0.0, 0.0])
        assert detector.is_in_deadband([0.0, 0.0])


# ============================================================================
# Test Class 4: Configuration and Validation
# ============================================================================


class TestThreshold:
    """Threshold accessor and validation"""

    def test_threshold_accessor(self):
        assert DeadbandDetector(0.1, 0.0).threshold == pytest.approx(0.1)

    def test_negative_threshold_rejected_at_construction(self):
        with pytest.raises(ValueError, match="threshold must be non-negative"):
            DeadbandDetector(-0.1, 0.0)

    def test_set_negative_threshold_keeps_previous(self):
        detector = DeadbandDetector(0.1, [3.0, 4.0])

        with pytest.raises(ValueError, match="threshold must be non-negative"):
            detector.set_threshold(-0.5)

        assert detector.threshold == pytest.approx(0.1)
        assert detector.deadband == pytest.approx(0.5)

    def test_set_threshold_recomputes_deadband(self):
        detector = DeadbandDetector(0.1, [3.0, 4.0])
        detector.set_threshold(0.2)

        assert detector.threshold == pytest.approx(0.2)
        assert detector.deadband == pytest.approx(1.0)

    def test_threshold_above_one_accepted(self):
        detector = DeadbandDetector(2.0, [1.0])
        assert detector.is_in_deadband([2.5])

    def test_non_finite_threshold_rejected(self):
        with pytest.raises(ValueError, match="finite"):
            DeadbandDetector(np.nan, 0.0)


class TestSetPrevVals:
    """Reseeding the reference"""

    def test_set_prev_vals_bypasses_test(self):
        detector = DeadbandDetector(0.1, [1.0, 1.0])
        detector.set_prev_vals([1.01, 1.0])

        assert_allclose(detector.prev_vals, [1.01, 1.0])

    def test_set_prev_vals_recomputes_deadband(self):
        detector = DeadbandDetector(0.1, [0.0, 0.0])
        detector.set_prev_vals([3.0, 4.0])

        assert detector.deadband == pytest.approx(0.5)
        assert detector.is_in_deadband([3.0, 4.4])

    def test_set_prev_vals_shape_mismatch(self):
        detector = DeadbandDetector(0.1, [0.0, 0.0])
        with pytest.raises(ValueError, match=r"must have shape \(2,\)"):
            detector.set_prev_vals([1.0, 2.0, 3.0])
        assert_allclose(detector.prev_vals, [0.0, 0.0])


class TestDimension:
    """Dimension inferred from the initial sample"""

    def test_scalar_initial_gives_dim_one(self):
        assert DeadbandDetector(0.1, 0.0).dim == 1

    def test_vector_initial_sets_dim(self):
        assert DeadbandDetector(0.1, np.zeros(6)).dim == 6

    def test_wrong_dimension_rejected(self):
        detector = DeadbandDetector(0.1, [0.0, 0.0, 0.0])
        with pytest.raises(ValueError, match=r"vals must have shape \(3,\)"):
            detector.is_in_deadband([1.0, 2.0])

    def test_matrix_initial_rejected(self):
        with pytest.raises(ValueError, match="scalar or 1-D"):
            DeadbandDetector(0.1, np.zeros((2, 2)))

    def test_prev_vals_is_a_copy(self):
        initial = np.array([1.0, 2.0])
        detector = DeadbandDetector(0.1, initial)

        initial[0] = 100.0
        detector.prev_vals[1] = 100.0
        assert_allclose(detector.prev_vals, [1.0, 2.0])


class TestConfig:
    """Configuration round-trip"""

    def test_get_config(self):
        detector = DeadbandDetector(0.1, [1.0, 2.0], dtype="float32")
        config = detector.get_config()

        assert config["dim"] == 2
        assert config["dtype"] == "float32"
        assert config["threshold"] == pytest.approx(0.1)
        assert config["initial_vals"] == [1.0, 2.0]

    def test_from_config_round_trip(self):
        detector = DeadbandDetector(0.25, [1.0, 2.0, 2.0])
        rebuilt = DeadbandDetector.from_config(detector.get_config())

        assert rebuilt.threshold == detector.threshold
        assert rebuilt.deadband == detector.deadband
        assert_allclose(rebuilt.prev_vals, detector.prev_vals)

    def test_from_config_dim_mismatch(self):
        with pytest.raises(ValueError, match="does not match"):
            DeadbandDetector.from_config({"threshold": 0.1, "initial_vals": [0.0], "dim": 3})

    def test_float32_state(self):
        detector = DeadbandDetector(0.1, [1.0, 2.0], dtype=np.float32)
        assert detector.dtype == np.float32
        assert detector.prev_vals.dtype == np.float32

    def test_get_state(self):
        detector = DeadbandDetector(0.5, [3.0, 4.0])
        state = detector.get_state()

        assert_allclose(state["prev_vals"], [3.0, 4.0])
        assert state["deadband"] == pytest.approx(2.5)

    def test_repr(self):
        assert "DeadbandDetector(threshold=0.1" in repr(DeadbandDetector(0.1, 0.0))
