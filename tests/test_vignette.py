"""Tests for the worked example and the launcher."""

import numpy as np
import pytest

from analysis import vignette
from analysis import run_all_analyses


class TestVignette:
    """Single-sample fit of the worked example."""

    def test_run_example(self):
        x, result, (lower, upper) = vignette.run_example()
        assert len(x) == 100
        assert result.covariance is not None
        assert lower < result.estimate.shape < upper
        assert upper - lower == pytest.approx(
            2 * 1.959964 * np.sqrt(result.covariance[0][0])
        )

    def test_main_prints_report(self, capsys):
        result = vignette.main(n=200, seed=3)
        out = capsys.readouterr().out
        assert "shape =" in out
        assert "95% interval for shape" in out
        assert result.n_observations == 200


class TestLauncher:
    """Step list of the full study."""

    def test_build_steps(self):
        steps = run_all_analyses.build_steps(n_jobs=4)
        modules = [module for _, module, _ in steps]
        assert modules == [
            "simulation.generate_samples",
            "analysis.mle.mle_analysis",
            "analysis.summarize_results",
        ]
        assert steps[1][2] == ["--n-jobs", "4"]

    def test_skip_simulation(self):
        steps = run_all_analyses.build_steps(skip_simulation=True)
        assert steps[0][1] == "analysis.mle.mle_analysis"

    def test_stops_after_failure(self, monkeypatch, capsys):
        calls = []

        def fake_run(module, args=()):
            calls.append(module)
            return False, "Exit code 1"

        monkeypatch.setattr(run_all_analyses, "run_analysis_module", fake_run)
        assert run_all_analyses.main() is False
        assert calls == ["simulation.generate_samples"]
        assert "[FAIL] Simulation failed" in capsys.readouterr().out
