"""
Sandwich Covariance -- Classical, White and Newey-West Standard Errors

All three estimators share the form

    V = (X'X)^{-1} * S * (X'X)^{-1}

and differ only in the "meat" S:

    classical  : S = X'X * var(e)
    White/HC0  : S = Z'Z,              Z_t = x_t * e_t
    HC1        : S = Z'Z * T/(T-k)
    Newey-West : S = T * NW(Z, m)      (see newey_west.long_run_cov)
"""

import numpy as np

from .exceptions import InvalidCovTypeError
from .newey_west import check_lags, long_run_cov
from .ols import classical_variance, estimate
from .utils import as_matrix, as_vector, bread, check_rows

_METHOD_ALIASES = {
    "classical": "classical",
    "iid": "classical",
    "white": "white",
    "hc0": "white",
    "hc1": "hc1",
    "newey-west": "newey-west",
    "neweywest": "newey-west",
    "nw": "newey-west",
    "hac": "newey-west",
}


def _normalize_method(method):
    key = str(method).strip().lower().replace("_", "-")
    if key not in _METHOD_ALIASES:
        raise InvalidCovTypeError(
            f"unknown covariance method {method!r}; expected one of "
            "'classical', 'white', 'hc1', 'newey-west'"
        )
    return _METHOD_ALIASES[key]


def _prepare(X, residuals):
    X = as_matrix(X, "X")
    e = as_vector(residuals, "residuals")
    check_rows(X, e, v_name="residuals")
    return X, e


def scores(X, residuals):
    """
    Per-observation moment contributions Z_t = x_t * e_t.

    Returns
    -------
    ndarray, shape (T, k)
    """
    X, e = _prepare(X, residuals)
    return X * e[:, None]


def classical_meat(X, residuals, ddof=0):
    """S = X'X * var(e), with var over T - ddof."""
    X, e = _prepare(X, residuals)
    return (X.T @ X) * classical_variance(e, ddof=ddof)


def white_meat(X, residuals):
    """
    White (HC0) meat: S = sum_t e_t^2 x_t x_t' = Z'Z.
    """
    Z = scores(X, residuals)
    return Z.T @ Z


def hc1_meat(X, residuals):
    """White meat with the degrees-of-freedom factor T/(T-k)."""
    X, e = _prepare(X, residuals)
    T, k = X.shape
    if T <= k:
        raise ValueError(f"HC1 needs T > k, got T={T}, k={k}")
    return white_meat(X, e) * (T / (T - k))


def newey_west_meat(X, residuals, lags):
    """
    Newey-West meat: S = T * long_run_cov(Z, lags).

    long_run_cov estimates Cov(sqrt(T) * mean(Z)); scaling by T puts it on
    the same raw cross-product footing as the White meat Z'Z.
    """
    m = check_lags(lags)
    Z = scores(X, residuals)
    return long_run_cov(Z, m) * Z.shape[0]


def sandwich(XtX_inv, meat):
    """V = XtX_inv @ meat @ XtX_inv, symmetrised."""
    V = XtX_inv @ meat @ XtX_inv
    return (V + V.T) / 2


def cov_matrix(X, residuals, method="classical", lags=0, ddof=0):
    """
    Coefficient covariance matrix from OLS residuals.

    Parameters
    ----------
    X : ndarray, shape (T, k)
        Design matrix.
    residuals : ndarray, shape (T,)
        OLS residuals.
    method : str
        'classical', 'white' (or 'hc0'), 'hc1', or 'newey-west'
        (or 'nw' / 'hac').
    lags : int
        Newey-West lag count; validated for every method.
    ddof : int
        Residual-variance degrees-of-freedom correction for 'classical'.

    Returns
    -------
    V : ndarray, shape (k, k)
    """
    method = _normalize_method(method)
    m = check_lags(lags)
    X, e = _prepare(X, residuals)
    XtX_inv = bread(X)

    if method == "classical":
        meat = classical_meat(X, e, ddof=ddof)
    elif method == "white":
        meat = white_meat(X, e)
    elif method == "hc1":
        meat = hc1_meat(X, e)
    else:
        meat = newey_west_meat(X, e, m)
    return sandwich(XtX_inv, meat)


def robust_se(X, residuals, method="white", lags=0, ddof=0):
    """
    Standard errors sqrt(diag(V)) for the chosen covariance method.

    Returns
    -------
    se : ndarray, shape (k,)
    """
    V = cov_matrix(X, residuals, method=method, lags=lags, ddof=ddof)
    return np.sqrt(np.diag(V))


def estimate_with_robust_se(X, y, lags=2, ddof=0):
    """
    OLS estimation with classical, White and Newey-West standard errors.

    Parameters
    ----------
    X : ndarray, shape (T, k)
    y : ndarray, shape (T,)
    lags : int
        Newey-West lag count.
    ddof : int
        Degrees-of-freedom correction for the classical residual variance.

    Returns
    -------
    dict with keys:
        beta            : coefficient vector
        residuals       : OLS residuals
        cov_classical   : classical covariance matrix
        cov_white       : White covariance matrix
        cov_newey_west  : Newey-West covariance matrix
        se_classical, se_white, se_newey_west : standard errors
        lags            : lag count actually used (after clamping to T-1)
    """
    m = check_lags(lags)
    res = estimate(X, y, ddof=ddof)
    X = as_matrix(X, "X")
    e = res["residuals"]

    cov_classical = cov_matrix(X, e, "classical", ddof=ddof)
    cov_white = cov_matrix(X, e, "white")
    cov_nw = cov_matrix(X, e, "newey-west", lags=m)

    return dict(
        beta=res["beta"],
        residuals=e,
        cov_classical=cov_classical,
        cov_white=cov_white,
        cov_newey_west=cov_nw,
        se_classical=np.sqrt(np.diag(cov_classical)),
        se_white=np.sqrt(np.diag(cov_white)),
        se_newey_west=np.sqrt(np.diag(cov_nw)),
        lags=min(m, len(e) - 1),
    )
