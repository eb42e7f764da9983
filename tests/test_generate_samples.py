"""Tests for simulation.generate_samples."""

import numpy as np
import pandas as pd
import pytest

from simulation.generate_samples import (
    build_parameter_table,
    generate_sample,
    generate_samples,
    simulate_sample,
)


class TestSimulateSample:
    """Seeded Gamma draws."""

    def test_reproducible(self):
        a = simulate_sample(50, 5.0, 2.0, 1228)
        b = simulate_sample(50, 5.0, 2.0, 1228)
        np.testing.assert_array_equal(a, b)

    def test_positive_with_expected_mean(self):
        x = simulate_sample(20000, 5.0, 2.0, 7)
        assert np.all(x > 0)
        # mean of Gamma(shape, rate) is shape / rate
        assert np.mean(x) == pytest.approx(2.5, rel=0.02)


class TestParameterTable:
    """One row per simulated sample."""

    def test_rows_and_seeds(self):
        df = build_parameter_table([10, 20], samples_per_size=3,
                                   shape=2.0, rate=0.5, base_seed=100)
        assert list(df.columns) == ['idx', 'size', 'shape', 'rate', 'seed']
        assert len(df) == 6
        assert list(df['idx']) == list(range(6))
        assert list(df['seed']) == list(range(100, 106))
        assert (df['size'] == 10).sum() == 3
        assert set(df['shape']) == {2.0}


class TestGenerateSamples:
    """Sample files on disk."""

    def test_generate_sample_writes_csv(self, tmp_path):
        path = generate_sample(0, 15, 5.0, 2.0, 1, out_dir=tmp_path)
        df = pd.read_csv(path)
        assert list(df.columns) == ['x']
        assert len(df) == 15

    def test_existing_sample_is_skipped(self, tmp_path):
        generate_sample(0, 15, 5.0, 2.0, 1, out_dir=tmp_path)
        assert generate_sample(0, 15, 5.0, 2.0, 2, out_dir=tmp_path) is None
        assert generate_sample(
            0, 15, 5.0, 2.0, 2, out_dir=tmp_path, overwrite=True
        ) is not None

    def test_generate_samples(self, sample_study):
        samples_dir, params_file, df_params = sample_study
        assert params_file.exists()
        assert len(df_params) == 6
        for row in df_params.itertuples(index=False):
            x = pd.read_csv(samples_dir / f"sample_{row.idx}.csv")['x']
            assert len(x) == row.size
            np.testing.assert_allclose(
                x.to_numpy(),
                simulate_sample(row.size, row.shape, row.rate, row.seed),
            )
