"""
Unified batch processing module for running parameter estimation on many
    simulated samples.

This module provides shared functionality for batch processing samples: it
reads the parameter index written by the simulation step, runs an estimator
function on every sample file (sequentially or in a process pool) and saves
per-size and combined CSV results.

Author: Santosh Desai <santoshdesai12@hotmail.com>
"""

import os
import time
import shutil
from concurrent.futures import ProcessPoolExecutor, TimeoutError, as_completed
from pathlib import Path
from typing import Callable, Dict, List, Optional, Any

import pandas as pd

from config import (
    SAMPLES_DIR,
    PARAMS_FILE,
    MIN_SAMPLE_SIZE,
    get_sample_file,
)
from .common import format_elapsed

# Seconds allowed per sample and worker round in parallel runs
TASK_TIMEOUT = 300


def load_sample_metadata(target_sample_sizes: Optional[List[int]] = None,
                         params_file: Optional[Path] = None):
    """
    Load sample metadata and determine which samples to analyze.

    Parameters:
    -----------
    target_sample_sizes : list of int, optional
        Specific sample sizes to analyze. If None, analyzes all samples >=
             MIN_SAMPLE_SIZE.
    params_file : Path, optional
        Parameter index file (default: PARAMS_FILE)

    Returns:
    --------
    df_params : pd.DataFrame
        Parameters dataframe
    target_sample_sizes : list
        List of sample sizes to process
    """
    if params_file is None:
        params_file = PARAMS_FILE
    df_params = pd.read_csv(str(params_file))

    if target_sample_sizes is None:
        df_filtered = df_params[df_params['size'] >= MIN_SAMPLE_SIZE]
        target_sample_sizes = sorted(int(s) for s in df_filtered['size'].unique())
    else:
        # Filter to only available sizes
        available_sizes = set(int(s) for s in df_params['size'].unique())
        target_sample_sizes = [
            s for s in target_sample_sizes if s in available_sizes
        ]

    return df_params, target_sample_sizes


def _error_row(task: tuple, error_msg: str) -> Dict[str, Any]:
    sample_idx, sample_size, _, true_shape, true_rate = task
    if len(error_msg) > 200:
        error_msg = error_msg[:200]
    return {
        'sample_idx': sample_idx,
        'sample_size': sample_size,
        'true_shape': true_shape,
        'true_rate': true_rate,
        'error': error_msg,
    }


def _process_single_sample(
    task: tuple,
    estimator_func: Callable[..., Dict[str, Any]],
    estimator_kwargs: dict
) -> Dict[str, Any]:
    """
    Process a single sample (also used for parallel execution).

    The estimator function must be importable at module level so it can be
    pickled into worker processes.
    """
    sample_idx, sample_size, sample_file_str, true_shape, true_rate = task
    result = {
        'sample_idx': sample_idx,
        'sample_size': sample_size,
        'true_shape': true_shape,
        'true_rate': true_rate,
    }
    try:
        estimate_result = estimator_func(sample_file_str, **estimator_kwargs)
        result.update(estimate_result or {})
    except Exception as e:
        return _error_row(task, f"{type(e).__name__}: {e}")
    return result


def _is_success(result: Dict[str, Any]) -> bool:
    return not result.get('error') and result.get('shape') is not None


def _run_parallel(
    tasks: List[tuple],
    estimator_func: Callable[..., Dict[str, Any]],
    estimator_kwargs: dict,
    n_jobs: int,
    task_timeout: float,
    progress_interval: int,
) -> List[Dict[str, Any]]:
    """
    Run tasks in a process pool.

    The pool gets ``task_timeout`` seconds per task per worker round
    (ceil(len(tasks) / n_jobs) rounds). Tasks still unfinished at that
    deadline become timeout error rows and the pool is abandoned without
    waiting for them.
    """
    n_rounds = -(-len(tasks) // n_jobs)
    deadline = task_timeout * n_rounds

    executor = ProcessPoolExecutor(max_workers=n_jobs)
    futures = {
        executor.submit(
            _process_single_sample,
            task,
            estimator_func,
            estimator_kwargs,
        ): task
        for task in tasks
    }

    def collect(future, task):
        try:
            return future.result()
        except Exception as e:
            print(f"    [WARN] Sample {task[0]} failed: {str(e)[:50]}")
            return _error_row(task, str(e))

    results = []
    collected = set()
    timed_out = False
    try:
        for future in as_completed(futures, timeout=deadline):
            collected.add(future)
            task = futures[future]

            if len(collected) % progress_interval == 0:
                print(
                    f"  Processed {len(collected)}/{len(tasks)} "
                    f"samples (idx={task[0]})..."
                )
            results.append(collect(future, task))
    except TimeoutError:
        timed_out = True
        for future, task in futures.items():
            if future in collected:
                continue
            if future.done():
                results.append(collect(future, task))
                continue
            future.cancel()
            print(
                f"    [WARN] Sample {task[0]} timed out after "
                f"{deadline:g} seconds"
            )
            results.append(
                _error_row(task, f"Timeout: exceeded {deadline:g}s limit")
            )
    finally:
        # A hung worker must not block the rest of the batch
        executor.shutdown(wait=not timed_out, cancel_futures=True)

    return results


def process_samples_batch(
    estimator_func: Callable[..., Dict[str, Any]],
    output_dir: Path,
    method_name: str,
    target_sample_sizes: Optional[List[int]] = None,
    samples_dir: Optional[Path] = None,
    params_file: Optional[Path] = None,
    progress_interval: int = 50,
    n_jobs: int = 1,
    task_timeout: float = TASK_TIMEOUT,
    **estimator_kwargs
):
    """
    Process samples in batch using the provided estimator function.

    Parameters:
    -----------
    estimator_func : callable
        Function that takes a sample file path and returns a result dict
    output_dir : Path
        Directory to save results
    method_name : str
        Name of the method (for output files and logging)
    target_sample_sizes : list of int, optional
        Specific sample sizes to analyze
    samples_dir : Path, optional
        Directory holding the sample files (default: SAMPLES_DIR)
    params_file : Path, optional
        Parameter index file (default: PARAMS_FILE)
    progress_interval : int
        Print progress every N samples
    n_jobs : int
        Number of parallel jobs to use (1 = sequential, -1 = all CPUs)
    task_timeout : float
        Seconds allowed per sample in parallel runs; samples that miss the
        deadline are recorded with a timeout error
    **estimator_kwargs
        Additional keyword arguments to pass to estimator_func

    Returns:
    --------
    df_all : pd.DataFrame
        Combined results from all samples
    """
    if samples_dir is None:
        samples_dir = SAMPLES_DIR
    output_dir = Path(output_dir)

    print("=" * 80)
    print(f"{method_name} Analysis")
    print("=" * 80)

    # Load metadata
    print("\n[STEP 1] Loading sample metadata...")
    print("-" * 80)
    df_params, target_sample_sizes = load_sample_metadata(
        target_sample_sizes, params_file
    )
    print(f"Loaded {len(df_params)} sample records")

    if not target_sample_sizes:
        print("\nNo samples found for analysis!")
        return pd.DataFrame()

    print(f"\nAnalyzing samples with sizes: {target_sample_sizes}")

    # Delete and recreate output directory for clean results
    if output_dir.exists():
        shutil.rmtree(output_dir)
        print(f"Cleaned existing output directory: {output_dir}")
    os.makedirs(output_dir, exist_ok=True)
    print(f"Created output directory: {output_dir}")

    print(f"\n[STEP 2] Running {method_name} on samples...")
    print("-" * 80)

    # Determine number of workers
    if n_jobs == -1:
        n_jobs = max(1, (os.cpu_count() or 1) - 1)  # Leave one CPU free
    use_parallel = n_jobs > 1

    if use_parallel:
        print(f"Using parallel processing with {n_jobs} workers")
    else:
        print("Using sequential processing")

    start_time = time.time()
    all_results = []

    for sample_size in target_sample_sizes:
        print(f"\n{'='*80}")
        print(f"Analyzing samples with n={sample_size}")
        print(f"{'='*80}")

        df_size = df_params[df_params['size'] == sample_size]
        num_samples = len(df_size)
        print(f"Found {num_samples} samples of size {sample_size}")

        # Prepare sample information for processing
        tasks = []
        for row in df_size.itertuples(index=False):
            sample_file = get_sample_file(row.idx, samples_dir=samples_dir)
            if not sample_file.exists():
                continue
            tasks.append((
                int(row.idx), int(sample_size), str(sample_file),
                float(row.shape), float(row.rate),
            ))

        results_for_size = []

        if use_parallel and len(tasks) > 1:
            results_for_size = _run_parallel(
                tasks, estimator_func, estimator_kwargs, n_jobs,
                task_timeout, progress_interval,
            )
        else:
            for i, task in enumerate(tasks):
                if (i + 1) % progress_interval == 0:
                    print(
                        f"  Processing sample {i+1}/{len(tasks)} "
                        f"(idx={task[0]})..."
                    )
                result = _process_single_sample(
                    task, estimator_func, estimator_kwargs
                )
                if result.get('error') and (i + 1) % progress_interval == 0:
                    print(f"    Error: {result['error'][:50]}")
                results_for_size.append(result)

        successful = sum(1 for r in results_for_size if _is_success(r))
        failed = num_samples - successful

        print(f"\nSummary for n={sample_size}:")
        print(f"  Successful: {successful}/{num_samples}")
        print(f"  Failed: {failed}/{num_samples}")

        # Save results for this sample size
        if results_for_size:
            df_results = pd.DataFrame(results_for_size).sort_values(
                'sample_idx'
            ).reset_index(drop=True)
            all_results.append(df_results)

            output_file = (
                output_dir
                / f"{method_name.lower()}_results_n{sample_size}.csv"
            )
            df_results.to_csv(str(output_file), index=False)
            print(f"  Saved results to: {output_file}")

    # Combine and save all results
    if all_results:
        print("\n" + "=" * 80)
        print("[STEP 3] Saving combined results...")
        print("=" * 80)

        df_all = pd.concat(all_results, ignore_index=True)
        combined_file = output_dir / f"all_{method_name.lower()}_results.csv"
        df_all.to_csv(str(combined_file), index=False)
        print(f"Saved combined results to: {combined_file}")
        print(f"Total samples analyzed: {len(df_all)}")

        if 'shape' in df_all.columns:
            successful_count = df_all['shape'].notna().sum()
            print(f"Successful estimates: {successful_count}")
    else:
        df_all = pd.DataFrame()

    elapsed_time = time.time() - start_time

    print("\n" + "=" * 80)
    print(f"{method_name.upper()} ANALYSIS COMPLETE")
    print("=" * 80)
    print(
        f"Total time: {format_elapsed(elapsed_time)} "
        f"({elapsed_time:.2f} seconds)"
    )
    print(f"Results saved in: {output_dir}/")
    print("=" * 80)

    return df_all
