"""
Sample generation script for Gamma-distributed data.

Draws independent samples from Gamma(shape, rate) for several sample sizes
and writes one CSV per sample (single column ``x``) plus a parameter index
file. Uses device-independent paths from config.py.
"""

import argparse
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

import numpy as np
import pandas as pd
from tqdm import tqdm

from config import (
    SAMPLES_DIR,
    PARAMS_FILE,
    SAMPLE_SIZES,
    SAMPLES_PER_SIZE,
    TRUE_SHAPE,
    TRUE_RATE,
    DEFAULT_SEED,
    get_sample_file,
)

max_workers = 8


def simulate_sample(size, shape, rate, seed):
    """Draw ``size`` values from Gamma(shape, rate) with a fixed seed."""
    rng = np.random.default_rng(seed)
    # numpy parameterizes by scale = 1 / rate
    return rng.gamma(shape, 1.0 / rate, size=size)


def generate_sample(i, size, shape, rate, seed, out_dir=None,
                    overwrite=False):
    if out_dir is None:
        out_dir = SAMPLES_DIR
    out_dir = Path(out_dir)
    out_dir.mkdir(exist_ok=True, parents=True)
    sample_path = get_sample_file(i, samples_dir=out_dir)

    if sample_path.exists() and not overwrite:
        return None

    x = simulate_sample(size, shape, rate, seed)
    pd.DataFrame({'x': x}).to_csv(str(sample_path), index=False)
    return sample_path


def build_parameter_table(sample_sizes=None, samples_per_size=SAMPLES_PER_SIZE,
                          shape=TRUE_SHAPE, rate=TRUE_RATE,
                          base_seed=DEFAULT_SEED):
    """
    Build the parameter index: one row per sample to simulate.

    Returns:
    --------
    pd.DataFrame : columns idx, size, shape, rate, seed
    """
    if sample_sizes is None:
        sample_sizes = SAMPLE_SIZES

    rows = []
    idx = 0
    for size in sample_sizes:
        for _ in range(samples_per_size):
            rows.append({
                'idx': idx,
                'size': int(size),
                'shape': float(shape),
                'rate': float(rate),
                'seed': int(base_seed + idx),
            })
            idx += 1
    return pd.DataFrame(rows, columns=['idx', 'size', 'shape', 'rate', 'seed'])


def generate_samples(sample_sizes=None, samples_per_size=SAMPLES_PER_SIZE,
                     shape=TRUE_SHAPE, rate=TRUE_RATE, base_seed=DEFAULT_SEED,
                     out_dir=None, params_file=None, overwrite=False,
                     n_workers=max_workers, show_progress=True):
    """
    Simulate every sample in the parameter table and write the index file.

    Returns:
    --------
    pd.DataFrame : the parameter table written to ``params_file``
    """
    if out_dir is None:
        out_dir = SAMPLES_DIR
    if params_file is None:
        params_file = Path(out_dir) / PARAMS_FILE.name
    Path(out_dir).mkdir(exist_ok=True, parents=True)

    df_params = build_parameter_table(
        sample_sizes, samples_per_size, shape, rate, base_seed
    )

    with ThreadPoolExecutor(max_workers=n_workers) as ex:
        futures = [
            ex.submit(
                generate_sample, row.idx, row.size, row.shape, row.rate,
                row.seed, out_dir=out_dir, overwrite=overwrite,
            )
            for row in df_params.itertuples(index=False)
        ]
        for fut in tqdm(
            as_completed(futures),
            total=len(futures),
            desc="Simulating Samples.",
            unit="samples",
            disable=not show_progress,
        ):
            fut.result()

    df_params.to_csv(str(params_file), index=False)
    return df_params


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Simulate Gamma samples for the MLE study"
    )
    parser.add_argument("--sizes", type=int, nargs="+", default=SAMPLE_SIZES)
    parser.add_argument("--per-size", type=int, default=SAMPLES_PER_SIZE)
    parser.add_argument("--shape", type=float, default=TRUE_SHAPE)
    parser.add_argument("--rate", type=float, default=TRUE_RATE)
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED)
    parser.add_argument(
        "--overwrite", action="store_true",
        help="Regenerate samples that already exist"
    )
    args = parser.parse_args()

    n_total = len(args.sizes) * args.per_size
    print(f"Generating {n_total} samples...")
    print(f"Output directory: {SAMPLES_DIR}")
    print(f"Gamma(shape={args.shape}, rate={args.rate}), seed={args.seed}")

    generate_samples(
        sample_sizes=args.sizes,
        samples_per_size=args.per_size,
        shape=args.shape,
        rate=args.rate,
        base_seed=args.seed,
        overwrite=args.overwrite,
    )
