"""Tests for analysis.summarize_results."""

import numpy as np
import pandas as pd
import pytest

from analysis import summarize_results


@pytest.fixture
def results_frame():
    """Two sizes; one failed fit at n=10."""
    return pd.DataFrame({
        'sample_idx': [0, 1, 2, 3, 4],
        'sample_size': [10, 10, 10, 20, 20],
        'true_shape': [5.0] * 5,
        'true_rate': [2.0] * 5,
        'shape': [4.0, 6.0, None, 5.5, 4.5],
        'rate': [1.5, 2.5, None, 2.2, 1.8],
        'shape_se': [1.0, 1.0, None, 0.5, 0.5],
        'rate_se': [0.5, 0.5, None, 0.3, 0.3],
        'shape_ci_lower': [3.5, 5.5, None, 5.1, 4.0],
        'shape_ci_upper': [4.5, 6.5, None, 6.0, 5.0],
        'rate_ci_lower': [1.0, 1.9, None, 1.7, 1.3],
        'rate_ci_upper': [2.1, 3.1, None, 2.7, 2.3],
    })


class TestSummarize:
    """Per-size accuracy and coverage."""

    def test_counts(self, results_frame):
        df = summarize_results.summarize(results_frame)
        n10 = df[df['sample_size'] == 10].iloc[0]
        assert n10['n_samples'] == 3
        assert n10['n_success'] == 2
        assert n10['n_failed'] == 1

    def test_bias_and_rmse(self, results_frame):
        df = summarize_results.summarize(results_frame).set_index('sample_size')
        assert df.loc[10, 'shape_mean'] == pytest.approx(5.0)
        assert df.loc[10, 'shape_bias'] == pytest.approx(0.0)
        assert df.loc[10, 'shape_rmse'] == pytest.approx(1.0)
        assert df.loc[10, 'shape_sd'] == pytest.approx(np.sqrt(2.0))
        assert df.loc[20, 'rate_bias'] == pytest.approx(0.0)
        assert df.loc[20, 'shape_se_mean'] == pytest.approx(0.5)

    def test_coverage(self, results_frame):
        df = summarize_results.summarize(results_frame).set_index('sample_size')
        # n=10: neither shape interval contains 5
        assert df.loc[10, 'shape_coverage'] == pytest.approx(0.0)
        # n=20: only the second interval [4.0, 5.0] contains 5
        assert df.loc[20, 'shape_coverage'] == pytest.approx(0.5)
        assert df.loc[20, 'rate_coverage'] == pytest.approx(1.0)

    def test_all_failed_without_estimate_columns(self):
        df_results = pd.DataFrame({
            'sample_idx': [0, 1],
            'sample_size': [10, 10],
            'true_shape': [5.0, 5.0],
            'true_rate': [2.0, 2.0],
            'error': ['boom', 'boom'],
        })
        df = summarize_results.summarize(df_results)
        assert df.iloc[0]['n_failed'] == 2
        assert 'shape_bias' not in df.columns


class TestMain:
    """Reading the combined CSV and writing the summary."""

    def test_writes_summary(self, results_frame, tmp_path, capsys):
        results_file = tmp_path / "all_mle_results.csv"
        results_frame.to_csv(results_file, index=False)
        out_dir = tmp_path / "summary"

        df = summarize_results.main(results_file, out_dir)

        assert (out_dir / "mle_summary.csv").exists()
        assert len(df) == 2
        assert "Loaded MLE results: 5 samples" in capsys.readouterr().out

    def test_missing_results(self, tmp_path):
        assert summarize_results.main(
            tmp_path / "nope.csv", tmp_path / "summary"
        ) is None
