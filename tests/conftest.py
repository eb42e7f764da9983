"""
Shared pytest fixtures for the Gamma MLE tests.
"""

import os
import sys

import pytest
import numpy as np

ROOT = os.path.join(os.path.dirname(__file__), "..")
for path in (ROOT, os.path.join(ROOT, "src")):
    if path not in sys.path:
        sys.path.insert(0, path)


def pytest_addoption(parser):
    """Add custom command line options for pytest."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run long simulation studies (slow)",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires --run-integration to run)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --run-integration is passed."""
    if config.getoption("--run-integration"):
        return

    skip_integration = pytest.mark.skip(reason="Need --run-integration option to run")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture
def random_seed():
    """Fixed random seed for reproducibility."""
    return 42


@pytest.fixture
def rng(random_seed):
    """NumPy random generator with fixed seed."""
    return np.random.default_rng(random_seed)


@pytest.fixture
def gamma_sample(rng):
    """200 draws from Gamma(shape=5, rate=2)."""
    return rng.gamma(5.0, 1.0 / 2.0, size=200)


@pytest.fixture
def sample_study(tmp_path):
    """A tiny simulated study on disk: sizes 30 and 60, 3 samples each."""
    from simulation.generate_samples import generate_samples

    samples_dir = tmp_path / "samples"
    params_file = samples_dir / "all_params.csv"
    df_params = generate_samples(
        sample_sizes=[30, 60],
        samples_per_size=3,
        out_dir=samples_dir,
        params_file=params_file,
        n_workers=2,
        show_progress=False,
    )
    return samples_dir, params_file, df_params
