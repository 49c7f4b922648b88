"""
Tests for Relaxation Plots
"""

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest
from convex_sampling import PlotDomainError, SamplingPolicy
from convex_sampling.functions import build_sphere
from convex_sampling.plotting import plot_sampling_underestimator


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


class TestPlotDomain:
    """Test argument checks made before any evaluation."""

    def _never_called(self, x):
        raise AssertionError("f must not be evaluated")

    def test_degenerate_axis(self):
        """Test xU == xL on one axis."""
        with pytest.raises(PlotDomainError):
            plot_sampling_underestimator(self._never_called, [0.0, 1.0], [1.0, 1.0])

    def test_reversed_bounds(self):
        """Test xU < xL."""
        with pytest.raises(PlotDomainError):
            plot_sampling_underestimator(self._never_called, 1.0, 0.0)

    def test_three_dimensions(self):
        """Test that only 1-D and 2-D boxes can be drawn."""
        with pytest.raises(PlotDomainError):
            plot_sampling_underestimator(self._never_called, -np.ones(3), np.ones(3))

    def test_bad_resolution(self):
        """Test resolution below two."""
        with pytest.raises(ValueError):
            plot_sampling_underestimator(self._never_called, 0.0, 1.0, resolution=1)

    def test_bad_style(self):
        """Test unknown surface style."""
        with pytest.raises(ValueError):
            plot_sampling_underestimator(self._never_called, [0.0, 0.0], [1.0, 1.0],
                                         surface_styles=("surface", "mesh", "surface"))


class TestPlotOutput:
    """Test drawn artists."""

    def test_univariate(self):
        """Test a 1-D plot has three lines, the stencil and a legend."""
        ax = plot_sampling_underestimator(lambda x: x ** 2, -1.0, 2.0, resolution=20)
        assert len(ax.get_lines()) == 3
        assert len(ax.collections) == 1
        offsets = ax.collections[0].get_offsets()
        assert len(offsets) == 3
        assert ax.get_legend() is not None

    def test_bivariate(self):
        """Test a 2-D plot on 3-D axes."""
        ax = plot_sampling_underestimator(build_sphere(2), [-1.0, -1.0], [1.0, 1.0],
                                          policy=SamplingPolicy.SIMPLEX_STAR)
        assert ax.name == "3d"
        assert ax.get_zlabel() == "y axis"

    def test_existing_axes(self):
        """Test drawing on caller-supplied axes."""
        fig, ax = plt.subplots()
        out = plot_sampling_underestimator(np.exp, 0.0, 1.0, ax=ax)
        assert out is ax

    def test_wireframe_styles(self):
        """Test wireframe layers."""
        ax = plot_sampling_underestimator(build_sphere(2), [-1.0, -1.0], [1.0, 1.0],
                                          surface_styles=("wireframe", "wireframe", "surface"))
        assert ax.name == "3d"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
