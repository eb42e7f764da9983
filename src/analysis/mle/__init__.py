"""
MLE (Maximum Likelihood Estimation) module.

Contains:
- GammaMLE: Core MLE implementation class
- estimate: One-call Gamma fit
- mle_analysis: Batch processing script

Author: Santosh Desai <santoshdesai12@hotmail.com>
"""

from .exceptions import (
    GammaMLEError,
    ConvergenceError,
    SingularCovarianceError,
    InvalidSampleError,
    InvalidParameterError,
)
from .mle_gamma import (
    GammaMLE,
    EstimationResult,
    ParameterVector,
    estimate,
)

__all__ = [
    'GammaMLE',
    'EstimationResult',
    'ParameterVector',
    'estimate',
    'GammaMLEError',
    'ConvergenceError',
    'SingularCovarianceError',
    'InvalidSampleError',
    'InvalidParameterError',
]
