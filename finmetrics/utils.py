"""
Shared utility functions used across all finmetrics modules.

Input coercion and shape checks live here so that every public entry
point validates its arguments the same way before any algebra runs.
"""

import warnings

import numpy as np

from .exceptions import (
    DimensionMismatchError,
    IllConditionedWarning,
    NonFiniteInputError,
    SingularMatrixError,
)

# Condition number above which an inversion emits IllConditionedWarning.
COND_WARN = 1e10
# Condition number above which a matrix is treated as singular.
COND_SINGULAR = 1.0 / np.finfo(np.float64).eps


def check_finite(a, name):
    if not np.all(np.isfinite(a)):
        raise NonFiniteInputError(f"{name} contains NaN or Inf values")


def as_matrix(x, name="X"):
    """
    Coerce input to a 2-d float64 array.

    A 1-d input of length T becomes a T x 1 column.

    Parameters
    ----------
    x : array_like
        Input data.
    name : str
        Name used in error messages.

    Returns
    -------
    ndarray, shape (T, k)
    """
    a = np.asarray(x, dtype=np.float64)
    if a.ndim == 1:
        a = a[:, None]
    if a.ndim != 2:
        raise DimensionMismatchError(
            f"{name} must be 1-d or 2-d, got {a.ndim} dimensions"
        )
    if a.shape[0] == 0:
        raise DimensionMismatchError(f"{name} has no rows")
    check_finite(a, name)
    return a


def as_vector(x, name="y"):
    """
    Coerce input to a 1-d float64 array.

    A T x 1 column is flattened; any other 2-d shape is rejected.
    """
    a = np.asarray(x, dtype=np.float64)
    if a.ndim == 2 and a.shape[1] == 1:
        a = a[:, 0]
    if a.ndim == 0:
        a = a.reshape(1)
    if a.ndim != 1:
        raise DimensionMismatchError(
            f"{name} must be a vector, got shape {a.shape}"
        )
    check_finite(a, name)
    return a


def check_rows(X, v, x_name="X", v_name="y"):
    """Raise DimensionMismatchError unless len(v) equals the row count of X."""
    if v.shape[0] != X.shape[0]:
        raise DimensionMismatchError(
            f"{v_name} has length {v.shape[0]} but {x_name} has "
            f"{X.shape[0]} rows"
        )


def inv_sym(A, name="matrix"):
    """
    Invert a symmetric positive semi-definite matrix.

    The conditioning check runs on the equilibrated matrix
    D^{-1/2} A D^{-1/2}, D = diag(A), so rescaling a regressor or a
    restriction row does not change the outcome.

    Parameters
    ----------
    A : ndarray, shape (k, k)
        Symmetric matrix, e.g. X'X or R V R'.
    name : str
        Name used in error and warning messages.

    Returns
    -------
    ndarray, shape (k, k)
        The inverse, symmetrised.

    Raises
    ------
    SingularMatrixError
        If a diagonal element is not positive, or the equilibrated
        condition number is non-finite or exceeds 1/eps.
    """
    diag = np.diag(A)
    if np.any(diag <= 0):
        raise SingularMatrixError(f"{name} is singular (non-positive diagonal)")
    d = 1.0 / np.sqrt(diag)
    A_eq = A * np.outer(d, d)

    cond = np.linalg.cond(A_eq)
    if not np.isfinite(cond) or cond > COND_SINGULAR:
        raise SingularMatrixError(
            f"{name} is singular (condition number {cond:.3g})"
        )
    if cond > COND_WARN:
        warnings.warn(
            f"{name} is ill-conditioned (condition number {cond:.3g}); "
            "standard errors may be inaccurate",
            IllConditionedWarning,
            stacklevel=3,
        )
    try:
        A_eq_inv = np.linalg.inv(A_eq)
    except np.linalg.LinAlgError as exc:
        raise SingularMatrixError(f"{name} is singular: {exc}") from exc
    A_inv = A_eq_inv * np.outer(d, d)
    return (A_inv + A_inv.T) / 2


def bread(X):
    """
    (X'X)^{-1} for a design matrix with full column rank.

    Raises
    ------
    SingularMatrixError
        If T < k or rank(X) < k.
    """
    T, k = X.shape
    if T < k:
        raise SingularMatrixError(
            f"X'X is singular: {T} observations for {k} regressors"
        )
    if np.linalg.matrix_rank(X) < k:
        raise SingularMatrixError("X'X is singular: X does not have full column rank")
    return inv_sym(X.T @ X, "X'X")


def ols_fit(X, y):
    """
    OLS estimation via the normal equations.

    Parameters
    ----------
    X : ndarray, shape (T, k)
        Design matrix (should include a constant column if an intercept is desired).
    y : ndarray, shape (T,)
        Outcome vector.

    Returns
    -------
    b : ndarray, shape (k,)
        Coefficient estimates  b = (X'X)^{-1} X'y.
    e : ndarray, shape (T,)
        Residuals  y - X @ b.
    XtX_inv : ndarray, shape (k, k)
        The "bread" (X'X)^{-1}.
    """
    X = as_matrix(X, "X")
    y = as_vector(y, "y")
    check_rows(X, y)
    XtX_inv = bread(X)
    b = np.linalg.lstsq(X, y, rcond=None)[0]
    e = y - X @ b
    return b, e, XtX_inv


def add_const(x):
    """
    Prepend a column of ones (intercept) to the design matrix.

    Parameters
    ----------
    x : ndarray
        1-d array or 2-d matrix of regressors.

    Returns
    -------
    X : ndarray, shape (T, k+1)
        Design matrix with leading ones column.
    """
    x = np.asarray(x, dtype=np.float64)
    x = np.atleast_2d(x).T if x.ndim == 1 else x
    return np.column_stack([np.ones(x.shape[0]), x])
