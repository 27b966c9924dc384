"""
finmetrics -- from-scratch OLS with classical, White and Newey-West
standard errors, and Wald tests of linear restrictions.

Each sub-module implements one piece using only numpy / scipy,
with no black-box econometrics packages.
"""

__version__ = "0.1.0"

from .utils import ols_fit, add_const
from .exceptions import (
    FinMetricsError,
    DimensionMismatchError,
    SingularMatrixError,
    InvalidLagCountError,
    InvalidRestrictionError,
    InvalidCovTypeError,
    NonFiniteInputError,
    FinMetricsWarning,
    IllConditionedWarning,
    SmallSampleWarning,
)
from . import ols
from . import newey_west
from . import sandwich
from . import wald
from . import report
