"""
Wald Test of Linear Restrictions

Tests H0: R b = q with

    W = (R b - q)' (R V R')^{-1} (R b - q)  ~  chi2(J)  under H0,

where J is the number of restrictions (rows of R).
"""

import numpy as np
from scipy import stats

from .exceptions import DimensionMismatchError, InvalidRestrictionError
from .utils import as_vector, check_finite, inv_sym


def _restriction(R, q, k):
    R = np.asarray(R, dtype=np.float64)
    check_finite(R, "R")
    if R.ndim == 1:
        R = R[None, :]
    if R.ndim != 2 or R.shape[1] != k:
        raise DimensionMismatchError(
            f"R must have {k} columns, got shape {R.shape}"
        )
    J = R.shape[0]
    if J == 0 or J > k:
        raise InvalidRestrictionError(
            f"number of restrictions must be between 1 and k={k}, got {J}"
        )
    if np.linalg.matrix_rank(R) < J:
        raise InvalidRestrictionError("R does not have full row rank")

    if q is None:
        q = np.zeros(J)
    q = as_vector(q, "q")
    if len(q) != J:
        raise DimensionMismatchError(
            f"q has length {len(q)} but R has {J} rows"
        )
    return R, q


def wald_test(beta, cov, R, q=None):
    """
    Chi-square Wald test of the linear restriction R b = q.

    Parameters
    ----------
    beta : ndarray, shape (k,)
        Estimated coefficients.
    cov : ndarray, shape (k, k)
        Covariance matrix of beta (classical, White or Newey-West).
    R : ndarray, shape (J, k) or (k,)
        Restriction matrix with full row rank.
    q : ndarray, shape (J,), optional
        Restricted values (zeros by default).

    Returns
    -------
    dict with keys:
        stat    : test statistic
        df      : degrees of freedom J
        p_value : upper-tail chi2(J) probability
        diff    : R b - q
    """
    b = as_vector(beta, "beta")
    k = len(b)
    V = np.asarray(cov, dtype=np.float64)
    if V.shape != (k, k):
        raise DimensionMismatchError(
            f"cov must be {k} x {k}, got shape {V.shape}"
        )
    check_finite(V, "cov")
    R, q = _restriction(R, q, k)

    Lambda = R @ V @ R.T
    Lambda_inv = inv_sym(Lambda, "R V R'")
    diff = R @ b - q
    stat = float(diff @ Lambda_inv @ diff)
    J = R.shape[0]
    return dict(stat=stat, df=J, p_value=float(stats.chi2.sf(stat, J)), diff=diff)


def chi2_critical(df, level=0.10):
    """Upper-tail critical value of chi2(df) at significance ``level``."""
    return float(stats.chi2.ppf(1 - level, df))


def zero_restriction(k, idx):
    """
    Build (R, q) for H0: beta[idx] = 0 jointly.

    Parameters
    ----------
    k : int
        Number of coefficients.
    idx : int or sequence of int
        Positions of the coefficients restricted to zero.
    """
    idx = np.atleast_1d(idx)
    R = np.eye(k)[idx]
    return R, np.zeros(len(idx))
