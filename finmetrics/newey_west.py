"""
Newey-West -- Long-Run Covariance of a Moment Series

Estimates Cov(sqrt(T) * mean(g)) for a T x q series g_t as a
Bartlett-weighted sum of sample autocovariance matrices:

    S = Gamma_0 + sum_{s=1}^{m} (1 - s/(m+1)) * (Gamma_s + Gamma_s')

    Gamma_s = sum_{t>s} g_t g_{t-s}' / T

Every Gamma_s is divided by T, not T - s. Together with the tent
weights this keeps S positive semi-definite for any m.

Reference: Newey, W. K. and West, K. D. (1987), "A simple, positive
semi-definite, heteroskedasticity and autocorrelation consistent
covariance matrix", Econometrica 55(3).
"""

import numpy as np

from .exceptions import InvalidLagCountError
from .utils import as_matrix


def check_lags(lags):
    """
    Validate a lag count and return it as a Python int.

    Raises
    ------
    InvalidLagCountError
        If ``lags`` is not an integer or is negative.
    """
    if isinstance(lags, (bool, np.bool_)) or not isinstance(lags, (int, np.integer)):
        raise InvalidLagCountError(
            f"lags must be a non-negative integer, got {lags!r}"
        )
    if lags < 0:
        raise InvalidLagCountError(f"lags must be non-negative, got {lags}")
    return int(lags)


def bartlett_weights(lags):
    """
    Bartlett (tent) kernel weights for lags s = 1..m.

    w_s = 1 - s / (m + 1); the implicit weight at lag 0 is 1.

    Returns
    -------
    ndarray, shape (m,)
    """
    m = check_lags(lags)
    return 1.0 - np.arange(1, m + 1) / (m + 1)


def autocov(g, s):
    """
    Lag-s sample autocovariance of an already demeaned series.

    Gamma_s = g[s:]' g[:T-s] / T

    The (i, j) element pairs g_{t,i} with g_{t-s,j}.
    """
    g = as_matrix(g, "g")
    T = g.shape[0]
    s = check_lags(s)
    if s > T - 1:
        raise InvalidLagCountError(f"lag {s} needs more than {T} observations")
    return g[s:].T @ g[:T - s] / T


def long_run_cov(g, lags=0, demean=True):
    """
    Newey-West estimate of the covariance of sqrt(T) * mean(g).

    Parameters
    ----------
    g : ndarray, shape (T, q) or (T,)
        Per-period moment vectors; a 1-d series is treated as q = 1.
    lags : int
        Number of lags m. Clamped to T - 1.
    demean : bool
        Subtract the column means before forming the autocovariances.

    Returns
    -------
    S : ndarray, shape (q, q)
        Symmetric long-run covariance. Multiply by T for the covariance of
        the sum of g, divide by T for the covariance of its mean.
    """
    m = check_lags(lags)
    g = as_matrix(g, "g")
    T = g.shape[0]
    m = min(m, T - 1)
    if demean:
        g = g - g.mean(axis=0)

    S = autocov(g, 0)
    for s, w in enumerate(bartlett_weights(m), start=1):
        gamma_s = autocov(g, s)
        S = S + w * (gamma_s + gamma_s.T)
    return S
