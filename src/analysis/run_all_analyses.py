"""
Launcher script: Runs the full Gamma MLE simulation study.

Steps run in order, each as its own process:
1. simulation.generate_samples  - simulate Gamma samples
2. analysis.mle.mle_analysis    - fit every sample by MLE
3. analysis.summarize_results   - bias, variance and interval coverage

Author: Santosh Desai <santoshdesai12@hotmail.com>
"""

import argparse
import subprocess
import sys
import time

from analysis.utils.common import format_elapsed


def run_analysis_module(module: str, args=()):
    """Run a single step with ``python -m`` and return success status."""
    try:
        subprocess.run(
            [sys.executable, "-m", module, *args],
            check=True,
            capture_output=False
        )
        return True, None
    except subprocess.CalledProcessError as e:
        return False, f"Exit code {e.returncode}"
    except OSError as e:
        return False, str(e)


def build_steps(n_jobs: int = 1, skip_simulation: bool = False):
    steps = []
    if not skip_simulation:
        steps.append(("Simulation", "simulation.generate_samples", []))
    steps.append(
        ("MLE", "analysis.mle.mle_analysis", ["--n-jobs", str(n_jobs)])
    )
    steps.append(("Summary", "analysis.summarize_results", []))
    return steps


def main(n_jobs: int = 1, skip_simulation: bool = False):
    """Main function to run all steps."""
    print("=" * 80)
    print("Running Gamma MLE simulation study")
    print("=" * 80)

    start_time = time.time()
    results = {}

    steps = build_steps(n_jobs, skip_simulation)
    for i, (name, module, args) in enumerate(steps, 1):
        print("\n" + "=" * 80)
        print(f"STEP {i}: Running {name}")
        print("=" * 80)

        success, error = run_analysis_module(module, args)
        results[name] = (success, error)

        if success:
            print(f"\n[OK] {name} completed successfully")
        else:
            # Later steps depend on earlier output
            print(f"\n[FAIL] {name} failed: {error}")
            break

    elapsed_time = time.time() - start_time

    print("\n" + "=" * 80)
    print("ALL STEPS COMPLETE")
    print("=" * 80)
    print(
        f"Total time: {format_elapsed(elapsed_time)} "
        f"({elapsed_time:.2f} seconds)"
    )

    successful = sum(1 for success, _ in results.values() if success)
    print(f"\nSummary: {successful}/{len(steps)} steps completed successfully")
    print("=" * 80)
    return successful == len(steps)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Simulate samples, run MLE and summarize the results"
    )
    parser.add_argument(
        "--n-jobs",
        type=int,
        default=1,
        help="Number of parallel jobs for the MLE step"
    )
    parser.add_argument(
        "--skip-simulation",
        action="store_true",
        help="Reuse previously simulated samples"
    )
    args = parser.parse_args()

    ok = main(n_jobs=args.n_jobs, skip_simulation=args.skip_simulation)
    sys.exit(0 if ok else 1)
