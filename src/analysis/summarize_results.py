"""
Summarize Results: Evaluates MLE results from the simulation study.

This script:
- Loads results from output/mle_results/
- Computes bias, standard deviation, RMSE and mean reported standard error
  of the shape and rate estimates for each sample size
- Computes the empirical coverage of the Wald confidence intervals
- Saves the summary report to output/summary_results/
"""

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

from config import MLE_OUTPUT_DIR, SUMMARY_OUTPUT_DIR, ensure_output_dirs

PARAMETERS = ('shape', 'rate')


def load_results(results_file=None):
    """Load the combined MLE results CSV."""
    if results_file is None:
        results_file = MLE_OUTPUT_DIR / "all_mle_results.csv"
    return pd.read_csv(str(results_file))


def _parameter_stats(df_size, param):
    estimates = df_size[param].astype(float)
    truth = df_size[f'true_{param}'].astype(float)
    errors = estimates - truth

    stats = {
        f'{param}_mean': float(estimates.mean()),
        f'{param}_bias': float(errors.mean()),
        f'{param}_sd': float(estimates.std(ddof=1)) if len(estimates) > 1
        else np.nan,
        f'{param}_rmse': float(np.sqrt(np.mean(errors ** 2))),
    }

    se_col = f'{param}_se'
    if se_col in df_size.columns:
        stats[f'{param}_se_mean'] = float(df_size[se_col].astype(float).mean())

    lower_col, upper_col = f'{param}_ci_lower', f'{param}_ci_upper'
    if lower_col in df_size.columns and upper_col in df_size.columns:
        covered = (
            (df_size[lower_col].astype(float) <= truth)
            & (truth <= df_size[upper_col].astype(float))
        )
        stats[f'{param}_coverage'] = float(covered.mean())

    return stats


def summarize(df_results):
    """
    Per-sample-size accuracy and interval coverage of the estimates.

    Parameters:
    -----------
    df_results : pd.DataFrame
        Batch results with columns sample_size, true_shape, true_rate, shape,
        rate and optionally *_se and *_ci_lower / *_ci_upper

    Returns:
    --------
    pd.DataFrame : One row per sample size
    """
    # Rows that failed before estimation carry no estimate columns at all
    for param in PARAMETERS:
        if param not in df_results.columns:
            df_results = df_results.assign(**{param: np.nan})

    rows = []
    for sample_size, df_size in df_results.groupby('sample_size'):
        ok = df_size['shape'].notna() & df_size['rate'].notna()
        df_ok = df_size[ok]
        row = {
            'sample_size': int(sample_size),
            'n_samples': int(len(df_size)),
            'n_success': int(ok.sum()),
            'n_failed': int((~ok).sum()),
        }
        if len(df_ok) > 0:
            for param in PARAMETERS:
                row.update(_parameter_stats(df_ok, param))
        rows.append(row)

    return pd.DataFrame(rows)


def main(results_file=None, output_dir=None):
    print("=" * 80)
    print("Summarize Results: Gamma MLE simulation study")
    print("=" * 80)

    if output_dir is None:
        ensure_output_dirs()
        output_dir = SUMMARY_OUTPUT_DIR
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    print("\n[STEP 1] Loading MLE results...")
    print("-" * 80)
    if results_file is None:
        results_file = MLE_OUTPUT_DIR / "all_mle_results.csv"
    if not Path(results_file).exists():
        print(f"✗ MLE results not found: {results_file}")
        print("  Run mle_analysis.py first")
        return None
    df_results = load_results(results_file)
    print(f"✓ Loaded MLE results: {len(df_results)} samples")

    print("\n[STEP 2] Computing bias, variance and coverage...")
    print("-" * 80)
    df_summary = summarize(df_results)
    with pd.option_context('display.width', 120,
                           'display.max_columns', None):
        print(df_summary.to_string(index=False, float_format='%.4f'))

    summary_file = output_dir / "mle_summary.csv"
    df_summary.to_csv(str(summary_file), index=False)
    print(f"\nSaved summary to: {summary_file}")
    print("=" * 80)
    return df_summary


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Summarize Gamma MLE simulation results"
    )
    parser.add_argument("--results-file", type=Path, default=None)
    parser.add_argument("--output-dir", type=Path, default=None)
    args = parser.parse_args()

    if main(args.results_file, args.output_dir) is None:
        sys.exit(1)
