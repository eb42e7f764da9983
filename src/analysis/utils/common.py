"""
Common utilities for analysis scripts.

Provides shared logging and warning setup to reduce redundancy across files.

Author: Santosh Desai <santoshdesai12@hotmail.com>
"""

import logging
import sys
import warnings


def setup_analysis_environment(level=logging.INFO, quiet_warnings=True):
    """
    Set up the analysis environment: logging and warnings.

    Parameters:
    -----------
    level : int
        Logging level for the root logger
    quiet_warnings : bool
        Silence RuntimeWarnings from numpy/scipy during optimization

    Returns:
    --------
    logging.Logger : Logger for the analysis scripts
    """
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    if quiet_warnings:
        warnings.filterwarnings('ignore', category=RuntimeWarning)
    return logging.getLogger("analysis")


def format_elapsed(elapsed_time):
    """Format seconds as HH:MM:SS."""
    hours = int(elapsed_time // 3600)
    minutes = int((elapsed_time % 3600) // 60)
    seconds = int(elapsed_time % 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
