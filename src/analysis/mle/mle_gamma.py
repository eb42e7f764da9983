"""
This module implements MLE for the Gamma distribution in the shape/rate
parameterization:

    f(x | a, b) = b^a / Gamma(a) * x^(a-1) * exp(-b*x),   x > 0

The log-likelihood of an i.i.d. sample x_1..x_n only depends on the
sample through n, sum(x) and sum(log(x)):

    LL(a, b) = n*(a*log(b) - lgamma(a)) + (a-1)*sum(log(x)) - b*sum(x)

The estimate is found by numerical optimization (scipy.optimize.minimize on
-LL). The approximate covariance of the estimate is the inverse of the
observed information, i.e. the negative Hessian of LL at the optimum.

Author: Santosh Desai <santoshdesai12@hotmail.com>
"""

import logging
from collections import namedtuple
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
from scipy.optimize import minimize
from scipy.special import gammaln, digamma, polygamma

from .exceptions import (
    ConvergenceError,
    InvalidParameterError,
    InvalidSampleError,
    SingularCovarianceError,
)

logger = logging.getLogger(__name__)

ParameterVector = namedtuple("ParameterVector", ["shape", "rate"])

DEFAULT_START = ParameterVector(1.0, 1.0)

# Lower bound for both parameters in bounded optimizers
PARAM_LOWER_BOUND = 1e-8

GRADIENT_METHODS = {
    'CG', 'BFGS', 'L-BFGS-B', 'TNC', 'SLSQP', 'Newton-CG', 'trust-ncg',
    'dogleg', 'trust-exact', 'trust-krylov', 'trust-constr'
}
BOUNDED_METHODS = {
    'L-BFGS-B', 'TNC', 'SLSQP', 'Powell', 'Nelder-Mead', 'trust-constr'
}
HESSIAN_METHODS = {
    'Newton-CG', 'trust-ncg', 'dogleg', 'trust-exact', 'trust-krylov',
    'trust-constr'
}


@dataclass(frozen=True)
class EstimationResult:
    """Outcome of a single Gamma MLE fit."""

    estimate: ParameterVector
    covariance: Optional[np.ndarray] = field(default=None, compare=False)
    log_likelihood: float = float('nan')
    n_iterations: int = 0
    n_observations: int = 0
    message: str = ""

    def standard_errors(self):
        """
        Standard errors of (shape, rate) from the covariance diagonal.

        Returns:
        --------
        ParameterVector or None : None when covariance was not requested
        """
        if self.covariance is None:
            return None
        se = np.sqrt(np.diag(self.covariance))
        return ParameterVector(float(se[0]), float(se[1]))

    def confidence_interval(self, index=0, z=1.959964):
        """
        Wald interval estimate[index] +/- z * sqrt(covariance[index][index]).

        Parameters:
        -----------
        index : int
            0 for shape, 1 for rate
        z : float
            Normal quantile (default gives a 95% interval)

        Returns:
        --------
        tuple : (lower, upper)
        """
        if self.covariance is None:
            raise ValueError(
                "Covariance was not computed; estimate with "
                "want_covariance=True."
            )
        half_width = z * np.sqrt(self.covariance[index][index])
        center = self.estimate[index]
        return float(center - half_width), float(center + half_width)

    def to_dict(self):
        """Flatten the result into a single row (for pandas)."""
        row = {
            'shape': self.estimate.shape,
            'rate': self.estimate.rate,
            'log_likelihood': self.log_likelihood,
            'n_iterations': self.n_iterations,
            'n_observations': self.n_observations,
        }
        se = self.standard_errors()
        if se is not None:
            row.update({
                'shape_se': se.shape,
                'rate_se': se.rate,
                'shape_rate_cov': float(self.covariance[0][1]),
            })
        return row


def _as_parameters(params, name="params"):
    if np.ndim(params) != 1 or len(params) != 2:
        raise InvalidParameterError(
            f"{name} must be a (shape, rate) pair, got {params!r}"
        )
    a, b = (float(v) for v in params)
    if not (np.isfinite(a) and np.isfinite(b)) or a <= 0 or b <= 0:
        raise InvalidParameterError(
            f"{name} must be a strictly positive finite (shape, rate) pair, "
            f"got ({a}, {b})"
        )
    return ParameterVector(a, b)


class GammaMLE:
    def __init__(self, data):
        # Keep a private read-only copy of the sample
        x = np.array(data, dtype=float).ravel()
        if x.size == 0:
            raise InvalidSampleError("Sample is empty.")
        if not np.all(np.isfinite(x)):
            raise InvalidSampleError("Sample contains non-finite values.")
        if np.any(x <= 0):
            n_bad = int(np.sum(x <= 0))
            raise InvalidSampleError(
                f"Sample contains {n_bad} non-positive value(s); the Gamma "
                "log-density is only defined for x > 0."
            )
        x.setflags(write=False)
        self.data = x

        # Sufficient statistics, computed once
        self.n = int(x.size)
        self.sum_x = float(np.sum(x))
        self.sum_log_x = float(np.sum(np.log(x)))

    def log_likelihood(self, params):
        """
        Log-likelihood LL(a, b) of the sample.

        Returns -inf outside the parameter space (a <= 0 or b <= 0).
        """
        a, b = params
        if a <= 0 or b <= 0:
            return -np.inf
        return (
            self.n * (a * np.log(b) - gammaln(a))
            + (a - 1.0) * self.sum_log_x
            - b * self.sum_x
        )

    def gradient(self, params):
        """Gradient of LL with respect to (a, b)."""
        a, b = params
        if a <= 0 or b <= 0:
            return np.array([np.nan, np.nan])
        d_a = self.n * (np.log(b) - digamma(a)) + self.sum_log_x
        d_b = self.n * a / b - self.sum_x
        return np.array([d_a, d_b])

    def hessian(self, params):
        """
        Analytic Hessian of LL with respect to (a, b).

        d2/da2  = -n * trigamma(a)
        d2/dadb =  n / b
        d2/db2  = -n * a / b^2
        """
        a, b = params
        d_aa = -self.n * polygamma(1, a)
        d_ab = self.n / b
        d_bb = -self.n * a / b ** 2
        return np.array([[d_aa, d_ab], [d_ab, d_bb]], dtype=float)

    def numerical_hessian(self, params, eps=1e-5):
        """
        Hessian of LL by central differences of the analytic gradient.
        """
        p = np.asarray(params, dtype=float)
        k = p.size
        H = np.zeros((k, k))
        for j in range(k):
            h = eps * max(1.0, abs(p[j]))
            step = np.zeros(k)
            step[j] = h
            H[:, j] = (self.gradient(p + step) - self.gradient(p - step)) / (
                2.0 * h
            )
        return 0.5 * (H + H.T)

    def _neg_log_likelihood(self, params):
        # Minimizers only minimize: hand them -LL
        value = self.log_likelihood(params)
        return -value if np.isfinite(value) else np.inf

    def _neg_log_likelihood_gradient(self, params):
        return -self.gradient(params)

    def _neg_log_likelihood_hessian(self, params):
        a, b = params
        if a <= 0 or b <= 0:
            return np.full((2, 2), np.nan)
        return -self.hessian(params)

    def _covariance(self, params, hessian="analytic"):
        if hessian == "analytic":
            H = self.hessian(params)
        elif hessian == "numerical":
            H = self.numerical_hessian(params)
        else:
            raise ValueError(
                f"hessian must be 'analytic' or 'numerical', got {hessian!r}"
            )

        if not np.all(np.isfinite(H)):
            raise SingularCovarianceError(
                f"Hessian at {tuple(params)} is not finite."
            )
        try:
            cov = np.linalg.inv(-H)
        except np.linalg.LinAlgError as e:
            raise SingularCovarianceError(
                f"Negative Hessian at {tuple(params)} is singular: {e}"
            ) from e
        if not np.all(np.isfinite(cov)):
            raise SingularCovarianceError(
                f"Covariance at {tuple(params)} is not finite."
            )
        return 0.5 * (cov + cov.T)

    def estimate(self, start=DEFAULT_START, want_covariance=False,
                 method='L-BFGS-B', maxiter=1000, hessian="analytic"):
        """
        Estimate Gamma (shape, rate) by maximizing the log-likelihood.

        Parameters:
        -----------
        start : pair of float
            Initial (shape, rate) guess, both > 0. Default (1, 1).
        want_covariance : bool
            Also compute inverse(-Hessian) at the optimum.
        method : str
            scipy.optimize.minimize method (default: 'L-BFGS-B' with
            positive lower bounds)
        maxiter : int
            Maximum number of optimizer iterations
        hessian : str
            'analytic' or 'numerical' (finite differences)

        Returns:
        --------
        EstimationResult

        Raises:
        -------
        ConvergenceError : the optimizer did not converge
        SingularCovarianceError : the negative Hessian cannot be inverted

        Notes:
        ------
        Methods in HESSIAN_METHODS also receive the analytic Hessian of -LL.

        A sample whose values are all equal (including a single value) has
        no finite maximizer: LL keeps increasing along shape/rate = mean as
        shape grows. The optimizer still reports convergence somewhere far
        out on that ridge, so the estimate has a huge shape and covariance.
        """
        start = _as_parameters(start, name="start")

        kwargs = {'method': method, 'options': {'maxiter': maxiter}}
        if method in GRADIENT_METHODS:
            kwargs['jac'] = self._neg_log_likelihood_gradient
        if method in HESSIAN_METHODS:
            kwargs['hess'] = self._neg_log_likelihood_hessian
        if method in BOUNDED_METHODS:
            kwargs['bounds'] = ((PARAM_LOWER_BOUND, None),
                                (PARAM_LOWER_BOUND, None))

        logger.debug(
            "Fitting Gamma to n=%d values from start=%s (method=%s)",
            self.n, tuple(start), method,
        )
        result = minimize(self._neg_log_likelihood, np.array(start), **kwargs)
        n_iterations = int(result.get('nit', 0) or 0)

        if not result.success or not np.all(np.isfinite(result.x)):
            logger.warning(
                "Gamma MLE did not converge after %d iterations: %s",
                n_iterations, result.message,
            )
            raise ConvergenceError(
                f"Optimization did not converge after {n_iterations} "
                f"iterations: {result.message}",
                n_iterations=n_iterations,
            )

        estimate = ParameterVector(float(result.x[0]), float(result.x[1]))
        covariance = (
            self._covariance(estimate, hessian=hessian)
            if want_covariance else None
        )

        return EstimationResult(
            estimate=estimate,
            covariance=covariance,
            log_likelihood=float(-result.fun),
            n_iterations=n_iterations,
            n_observations=self.n,
            message=(
                f"MLE optimization succeeded after {n_iterations} "
                "iterations."
            ),
        )


def estimate(data, start=DEFAULT_START, want_covariance=False, **kwargs):
    """Fit a Gamma distribution to ``data``; see GammaMLE.estimate."""
    return GammaMLE(data).estimate(
        start=start, want_covariance=want_covariance, **kwargs
    )
