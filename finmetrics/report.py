"""
Coefficient tables for console output.
"""

import numpy as np
import pandas as pd

from .exceptions import DimensionMismatchError


def coef_table(beta, ses, row_labels, col_labels):
    """
    Collect coefficients and one or more standard-error vectors in a table.

    Parameters
    ----------
    beta : ndarray, shape (k,)
        Coefficient estimates.
    ses : sequence of ndarray, each shape (k,)
        Standard errors from different covariance estimators.
    row_labels : sequence of str, length k
        Coefficient names, e.g. ["c", "SMB", "HML"].
    col_labels : sequence of str, length 1 + len(ses)
        Column names, e.g. ["coef", "std (trad.)", "std (White)", "std (NW)"].

    Returns
    -------
    pandas.DataFrame
    """
    beta = np.asarray(beta, dtype=np.float64).ravel()
    k = len(beta)
    columns = [beta] + [np.asarray(se, dtype=np.float64).ravel() for se in ses]
    if any(len(c) != k for c in columns):
        raise DimensionMismatchError("all standard-error vectors must have length k")
    if len(row_labels) != k:
        raise DimensionMismatchError(
            f"{len(row_labels)} row labels for {k} coefficients"
        )
    if len(col_labels) != len(columns):
        raise DimensionMismatchError(
            f"{len(col_labels)} column labels for {len(columns)} columns"
        )
    return pd.DataFrame(np.column_stack(columns), index=list(row_labels),
                        columns=list(col_labels))


def format_table(beta, ses, row_labels, col_labels, decimals=3):
    """Render :func:`coef_table` as fixed-width text."""
    df = coef_table(beta, ses, row_labels, col_labels)
    return df.to_string(float_format=lambda v: f"{v:.{decimals}f}")
