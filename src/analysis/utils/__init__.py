"""
Utility functions for batch processing.

Contains:
- batch_processor: Unified batch processing for estimation runs
- common: Common utilities and environment setup
"""

from .batch_processor import process_samples_batch, load_sample_metadata
from .common import setup_analysis_environment, format_elapsed

__all__ = [
    'process_samples_batch',
    'load_sample_metadata',
    'setup_analysis_environment',
    'format_elapsed',
]
