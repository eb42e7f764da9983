"""
Project configuration file.

Defines device-independent paths and project settings.
All scripts should import from this module to ensure consistent paths.

Author: Santosh Desai <santoshdesai12@hotmail.com>
"""

from pathlib import Path

# Get the project root directory (parent of this file's directory)
# This file should be at the root of the project
PROJECT_ROOT = Path(__file__).parent.resolve()


def get_project_root():
    """
    Get the project root directory.

    Returns:
    --------
    Path : Path to the project root directory
    """
    return PROJECT_ROOT


# Data directories (input data)
DATA_DIR = PROJECT_ROOT / "data"
SAMPLES_DIR = DATA_DIR / "samples"
PARAMS_FILE = SAMPLES_DIR / "all_params.csv"

# Output directories (output data)
OUTPUT_DIR = PROJECT_ROOT / "output"
MLE_OUTPUT_DIR = OUTPUT_DIR / "mle_results"
SUMMARY_OUTPUT_DIR = OUTPUT_DIR / "summary_results"

# Default parameters
DEFAULT_START = (1.0, 1.0)  # (shape, rate)
DEFAULT_SEED = 1228
TRUE_SHAPE = 5.0
TRUE_RATE = 2.0
DEFAULT_SAMPLE_SIZE = 100
CONFIDENCE_Z = 1.959964  # two-sided 95% normal quantile
DEFAULT_METHOD = 'L-BFGS-B'
DEFAULT_MAXITER = 1000

# Simulation study
SAMPLE_SIZES = [25, 50, 100, 250, 1000]
SAMPLES_PER_SIZE = 200
MIN_SAMPLE_SIZE = 2


def ensure_output_dirs():
    """Create output directories if they don't exist."""
    for directory in (OUTPUT_DIR, MLE_OUTPUT_DIR, SUMMARY_OUTPUT_DIR):
        directory.mkdir(parents=True, exist_ok=True)


def get_sample_file(sample_idx, samples_dir=None):
    """
    Get the path to a sample file by index.

    Parameters:
    -----------
    sample_idx : int
        Sample index
    samples_dir : Path, optional
        Directory holding the samples (default: SAMPLES_DIR)

    Returns:
    --------
    Path : Path to the sample file
    """
    if samples_dir is None:
        samples_dir = SAMPLES_DIR
    return Path(samples_dir) / f"sample_{sample_idx}.csv"


def verify_paths():
    """
    Verify that required paths exist.

    Returns:
    --------
    dict : Dictionary with verification results
    """
    results = {
        "project_root": PROJECT_ROOT.exists(),
        "data_dir": DATA_DIR.exists(),
        "samples_dir": SAMPLES_DIR.exists(),
        "params_file": PARAMS_FILE.exists(),
    }

    if SAMPLES_DIR.exists():
        sample_files = list(SAMPLES_DIR.glob("sample_*.csv"))
        results["num_sample_files"] = len(sample_files)

    return results


if __name__ == "__main__":
    # Print configuration when run directly
    print("=" * 80)
    print("Project Configuration")
    print("=" * 80)
    print(f"\nPROJECT_ROOT: {PROJECT_ROOT}")
    print(f"\nInput Data Directories:")
    print(f"  DATA_DIR: {DATA_DIR}")
    print(f"  SAMPLES_DIR: {SAMPLES_DIR}")
    print(f"  PARAMS_FILE: {PARAMS_FILE}")
    print(f"\nOutput Data Directories:")
    print(f"  OUTPUT_DIR: {OUTPUT_DIR}")
    print(f"  MLE_OUTPUT_DIR: {MLE_OUTPUT_DIR}")
    print(f"  SUMMARY_OUTPUT_DIR: {SUMMARY_OUTPUT_DIR}")
    print(f"\nDefault Parameters:")
    print(f"  DEFAULT_START: {DEFAULT_START}")
    print(f"  DEFAULT_SEED: {DEFAULT_SEED}")
    print(f"  TRUE_SHAPE / TRUE_RATE: {TRUE_SHAPE} / {TRUE_RATE}")
    print(f"  SAMPLE_SIZES: {SAMPLE_SIZES}")
    print(f"  SAMPLES_PER_SIZE: {SAMPLES_PER_SIZE}")

    print(f"\n{'=' * 80}")
    print("Path Verification")
    print("=" * 80)
    verification = verify_paths()
    for key, value in verification.items():
        status = "[OK]" if value else "[FAIL]"
        print(f"  {status} {key}: {value}")
