"""
Exceptions raised by the Gamma MLE estimator.

Author: Santosh Desai <santoshdesai12@hotmail.com>
"""

import numpy as np


class GammaMLEError(Exception):
    """Base class for all estimator errors."""


class InvalidSampleError(GammaMLEError, ValueError):
    """The sample is empty or contains non-finite / non-positive values."""


class InvalidParameterError(GammaMLEError, ValueError):
    """A (shape, rate) pair is not strictly positive and finite."""


class ConvergenceError(GammaMLEError):
    """The optimizer reported that it did not converge."""

    def __init__(self, message, n_iterations=None):
        super().__init__(message)
        self.n_iterations = n_iterations


class SingularCovarianceError(GammaMLEError, np.linalg.LinAlgError):
    """The negative Hessian at the optimum could not be inverted."""
