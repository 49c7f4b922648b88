"""
Tests for the Sobol Relaxation Audit
"""

import numpy as np
import pytest
from convex_sampling import (
    Box,
    SamplingPolicy,
    eval_sampling_relaxation,
    audit_relaxation,
)
from convex_sampling.audit import audit_points, MAX_CORNER_DIM
from convex_sampling.functions import build_sphere, build_exp_sum, build_abs_sum


class TestAuditPoints:
    """Test the audit point set."""

    def test_points_in_box(self):
        """Test that every point lies in the box."""
        box = Box([-2.0, 0.0, 1.0], [2.0, 0.5, 3.0])
        points = audit_points(box, n_points=64)
        assert points.shape == (64 + 8, 3)
        assert all(box.contains(x) for x in points)

    def test_rounds_up_to_power_of_two(self):
        """Test Sobol count rounding."""
        box = Box([0.0, 0.0], [1.0, 1.0])
        points = audit_points(box, n_points=100)
        assert len(points) == 128 + 4

    def test_corners_skipped_in_high_dimension(self):
        """Test that 2^n corners are not enumerated for large n."""
        n = MAX_CORNER_DIM + 2
        box = Box(-np.ones(n), np.ones(n))
        points = audit_points(box, n_points=32)
        assert len(points) == 32

    def test_deterministic(self):
        """Test that a seed reproduces the point set."""
        box = Box([0.0, 0.0], [1.0, 1.0])
        np.testing.assert_array_equal(audit_points(box, 16, seed=3), audit_points(box, 16, seed=3))


class TestAuditRelaxation:
    """Test audit reports on convex and non-convex functions."""

    @pytest.mark.parametrize("policy", [SamplingPolicy.COMPASS_STAR, SamplingPolicy.SIMPLEX_STAR])
    def test_convex_passes(self, policy):
        """Test a convex function yields no violation."""
        f = build_exp_sum(3, [0.2, -0.1, 0.4])
        relaxation = eval_sampling_relaxation(f, -np.ones(3), np.ones(3), policy=policy)
        report = audit_relaxation(f, relaxation, n_points=128)
        assert report.is_valid()
        assert report.bound_below_affine
        assert report.n_points == 128 + 8

    def test_nonsmooth_passes(self):
        """Test a nonsmooth convex function."""
        f = build_abs_sum(2, [0.3, -0.5])
        relaxation = eval_sampling_relaxation(f, [-1.0, -1.0], [1.0, 1.0])
        assert audit_relaxation(f, relaxation).is_valid()

    def test_concave_fails(self):
        """Test that a concave function is caught."""
        sphere = build_sphere(2)

        def f(x):
            return -sphere(x)

        relaxation = eval_sampling_relaxation(f, [-1.0, -1.0], [1.0, 1.0])
        report = audit_relaxation(f, relaxation, n_points=64)
        assert not report.is_valid()
        assert report.max_underestimator_violation == pytest.approx(2.2)

    def test_univariate(self):
        """Test auditing a scalar relaxation."""
        relaxation = eval_sampling_relaxation(np.exp, -1.0, 2.0)
        report = audit_relaxation(np.exp, relaxation, n_points=32)
        assert report.is_valid()
        assert report.n_points == 32 + 2

    def test_epsilon_slack(self):
        """Test that epsilon is carried into the report."""
        f = build_sphere(2)
        relaxation = eval_sampling_relaxation(f, [-1.0, -1.0], [1.0, 1.0], epsilon=1e-3)
        report = audit_relaxation(f, relaxation, n_points=16)
        assert report.epsilon == 1e-3
        assert report.is_valid()
        assert report.to_canonical()["epsilon"] == 1e-3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
