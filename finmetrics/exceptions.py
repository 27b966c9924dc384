"""
Exception and warning classes for the finmetrics package.

Every error raised on bad input derives from :class:`FinMetricsError`, so a
caller can catch all of them at once:

    try:
        res = sandwich.estimate_with_robust_se(X, y, lags=2)
    except FinMetricsError as e:
        print(f"finmetrics error: {e}")

The concrete classes also inherit from the matching builtin (``ValueError``
or ``numpy.linalg.LinAlgError``), so existing ``except ValueError`` blocks
keep working.

Warnings go through the standard ``warnings`` module and can be silenced
per category:

>>> import warnings
>>> from finmetrics.exceptions import IllConditionedWarning
>>> warnings.filterwarnings('ignore', category=IllConditionedWarning)
"""

import numpy as np


class FinMetricsError(Exception):
    """Base exception class for all finmetrics errors."""
    pass


class DimensionMismatchError(FinMetricsError, ValueError):
    """
    Raised when matrix / vector shapes are incompatible.

    Typical triggers: len(y) != rows(X), residuals shorter than X,
    a restriction matrix with the wrong number of columns, or a
    covariance matrix that is not k x k.
    """
    pass


class SingularMatrixError(FinMetricsError, np.linalg.LinAlgError):
    """
    Raised when a required inverse does not exist.

    Covers X'X for a rank-deficient design (including T < k) and the
    J x J matrix R V R' in the Wald test. A matrix whose condition number
    exceeds 1/eps is treated as singular.
    """
    pass


class InvalidLagCountError(FinMetricsError, ValueError):
    """Raised when the Newey-West lag count is negative or not an integer."""
    pass


class InvalidRestrictionError(FinMetricsError, ValueError):
    """
    Raised when a restriction matrix R is unusable.

    R must have at most k rows and full row rank.
    """
    pass


class InvalidCovTypeError(FinMetricsError, ValueError):
    """
    Raised when the covariance method selector is not recognised.

    Valid methods: 'classical', 'white' ('hc0'), 'hc1',
    'newey-west' ('nw', 'hac').
    """
    pass


class NonFiniteInputError(FinMetricsError, ValueError):
    """Raised when an input array contains NaN or Inf."""
    pass


class FinMetricsWarning(UserWarning):
    """Base warning class for all finmetrics warnings."""
    pass


class IllConditionedWarning(FinMetricsWarning):
    """
    Warning raised when a matrix is invertible but badly conditioned.

    Standard errors computed from such a matrix may have lost several
    significant digits.
    """
    pass


class SmallSampleWarning(FinMetricsWarning):
    """Warning raised when a statistic is undefined for the given sample (e.g. T == k)."""
    pass
