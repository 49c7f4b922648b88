"""
Tests for the Command-Line Interface and Test Functions
"""

import json

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest
from convex_sampling.cli import main
from convex_sampling.functions import (
    FUNCTIONS,
    build_sphere,
    build_exp_sum,
    build_log_sum_exp,
    build_abs_sum,
)


class TestFunctions:
    """Test the built-in convex functions."""

    def test_values_at_shift(self):
        """Test minimum values at the shift point."""
        s = np.array([0.5, -1.0])
        assert build_sphere(2, s)(s) == 0.0
        assert build_abs_sum(2, s)(s) == 0.0
        assert build_exp_sum(2, s)(s) == pytest.approx(2.0)
        assert build_log_sum_exp(2, s)(s) == pytest.approx(np.log(2.0))

    def test_log_sum_exp_stable(self):
        """Test large arguments do not overflow."""
        assert build_log_sum_exp(2)(np.array([1000.0, 1000.0])) == pytest.approx(1000.0 + np.log(2.0))

    def test_shift_length(self):
        """Test shift of the wrong length."""
        with pytest.raises(ValueError):
            build_sphere(3, [0.0, 1.0])

    def test_registry(self):
        """Test registered names."""
        assert set(FUNCTIONS) == {'sphere', 'exp-sum', 'log-sum-exp', 'abs-sum'}


class TestBoundCommand:
    """Test the bound command."""

    def test_sphere(self, capsys):
        """Test default sphere run."""
        assert main(['bound', 'sphere']) == 0
        out = capsys.readouterr().out
        assert "Evaluations: 5" in out
        assert "Lower bound: -2.000000e-01" in out

    def test_simplex(self, capsys):
        """Test simplex policy prints slope half-widths."""
        assert main(['bound', 'sphere', '--policy', 'simplex', '--dim', '3']) == 0
        out = capsys.readouterr().out
        assert "Evaluations: 5" in out
        assert "sR:" in out

    def test_audit_and_output(self, tmp_path, capsys):
        """Test JSON output with an audit."""
        path = tmp_path / "result.json"
        code = main(['bound', 'exp-sum', '--dim', '2', '--shift', '0.1', '-0.2',
                     '--audit', '32', '--output', str(path)])
        assert code == 0
        assert "Audit [PASS]" in capsys.readouterr().out
        data = json.loads(path.read_text())
        assert data['function'] == 'exp-sum'
        assert data['sample']['n_evaluations'] == 5
        assert data['audit']['n_points'] == 32 + 4
        assert len(data['underestimator']['b']) == 2

    def test_invalid_alpha(self, capsys):
        """Test that parameter errors give exit code 1."""
        assert main(['bound', 'sphere', '--alpha', '1.5']) == 1
        assert "Error:" in capsys.readouterr().out

    def test_simplex_rejects_epsilon(self, capsys):
        """Test unsupported simplex configuration."""
        assert main(['bound', 'sphere', '--policy', 'simplex', '--epsilon', '0.01']) == 1
        assert "Error:" in capsys.readouterr().out

    def test_shift_mismatch(self, capsys):
        """Test shift of the wrong length."""
        assert main(['bound', 'sphere', '--dim', '3', '--shift', '0.1']) == 1
        assert "Error:" in capsys.readouterr().out


class TestOtherCommands:
    """Test plot, version and help."""

    def test_plot(self, tmp_path, capsys):
        """Test writing a 2-D plot."""
        path = tmp_path / "sphere.png"
        assert main(['plot', 'sphere', '--resolution', '5', '--output', str(path)]) == 0
        assert path.exists()
        assert "Plot saved to" in capsys.readouterr().out

    def test_plot_three_dimensions(self, tmp_path, capsys):
        """Test that plotting 3-D problems fails cleanly."""
        path = tmp_path / "cube.png"
        assert main(['plot', 'sphere', '--dim', '3', '--output', str(path)]) == 1
        assert not path.exists()

    def test_version(self, capsys):
        """Test version output."""
        assert main(['version']) == 0
        assert "convex-sampling 0.1.0" in capsys.readouterr().out

    def test_no_command(self, capsys):
        """Test help when no command is given."""
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
