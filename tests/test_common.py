"""Tests for analysis.utils.common."""

import logging
import warnings

from analysis.utils.common import format_elapsed, setup_analysis_environment


class TestFormatElapsed:

    def test_format(self):
        assert format_elapsed(0) == "00:00:00"
        assert format_elapsed(3725.9) == "01:02:05"


class TestSetupAnalysisEnvironment:

    def test_returns_logger(self):
        with warnings.catch_warnings():
            logger = setup_analysis_environment(level=logging.DEBUG)
        assert isinstance(logger, logging.Logger)
        assert logger.name == "analysis"
