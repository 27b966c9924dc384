"""
OLS -- Ordinary Least Squares

Point estimates, residuals and the classical (i.i.d.) covariance
matrix of the coefficients, computed from scratch.
"""

import warnings

import numpy as np

from .exceptions import DimensionMismatchError, SmallSampleWarning
from .utils import ols_fit, as_vector


def classical_variance(residuals, ddof=0):
    """
    Residual variance used by the classical covariance estimator.

    s2 = sum((e - mean(e))^2) / (T - ddof)

    The default ``ddof=0`` is the population-style variance over T.
    Pass ``ddof=k`` for the unbiased textbook estimator e'e / (T - k).
    """
    e = as_vector(residuals, "residuals")
    if ddof < 0:
        raise ValueError(f"ddof must be non-negative, got {ddof}")
    if ddof >= len(e):
        raise DimensionMismatchError(
            f"ddof={ddof} leaves no degrees of freedom for {len(e)} residuals"
        )
    return float(np.var(e, ddof=ddof))


def r_squared(y, residuals, k):
    """
    R-squared and adjusted R-squared.

    R2     = 1 - SSR / SST
    R2_adj = 1 - (SSR / (T - k)) / (SST / (T - 1))

    Returns ``(nan, nan)`` with a SmallSampleWarning when either is
    undefined (constant y, or T <= k for the adjusted version).
    """
    T = len(y)
    ssr = float(residuals @ residuals)
    sst = float(np.sum((y - y.mean()) ** 2))
    if sst == 0:
        warnings.warn("y is constant; R-squared is undefined",
                      SmallSampleWarning, stacklevel=3)
        return np.nan, np.nan
    r2 = 1 - ssr / sst
    if T <= k:
        warnings.warn(f"adjusted R-squared is undefined for T={T}, k={k}",
                      SmallSampleWarning, stacklevel=3)
        return r2, np.nan
    r2_adj = 1 - (ssr / (T - k)) / (sst / (T - 1))
    return r2, r2_adj


def estimate(X, y, ddof=0):
    """
    OLS estimation: b = (X'X)^{-1} X'y.

    Parameters
    ----------
    X : ndarray, shape (T, k)
        Design matrix (include a constant column for intercept).
    y : ndarray, shape (T,)
        Outcome vector.
    ddof : int
        Delta degrees of freedom for the residual variance (0 -> divide by T).

    Returns
    -------
    dict with keys:
        beta      : coefficient vector
        residuals : OLS residuals
        fitted    : fitted values X @ beta
        XtX_inv   : (X'X)^{-1}
        cov       : classical covariance (X'X)^{-1} * s2
        se        : classical standard errors
        s2        : estimated error variance
        r2, r2_adj: (adjusted) R-squared
        nobs, k   : sample size and number of regressors
    """
    b, e, XtX_inv = ols_fit(X, y)
    y = as_vector(y, "y")
    T, k = len(y), len(b)
    s2 = classical_variance(e, ddof=ddof)
    cov = XtX_inv * s2
    r2, r2_adj = r_squared(y, e, k)
    return dict(
        beta=b,
        residuals=e,
        fitted=y - e,
        XtX_inv=XtX_inv,
        cov=cov,
        se=np.sqrt(np.diag(cov)),
        s2=s2,
        r2=r2,
        r2_adj=r2_adj,
        nobs=T,
        k=k,
    )
