"""
Simulation of Gamma-distributed samples.

Contains:
- generate_samples: Writes simulated samples and their parameter index
"""

from .generate_samples import (
    simulate_sample,
    generate_sample,
    generate_samples,
    build_parameter_table,
)

__all__ = [
    'simulate_sample',
    'generate_sample',
    'generate_samples',
    'build_parameter_table',
]
