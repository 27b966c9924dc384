import warnings

import numpy as np
import pytest

from finmetrics import ols
from finmetrics.exceptions import (
    DimensionMismatchError,
    IllConditionedWarning,
    NonFiniteInputError,
    SingularMatrixError,
    SmallSampleWarning,
)
from finmetrics.utils import add_const, ols_fit


def test_add_const():
    X = add_const(np.array([1.0, 2.0, 3.0]))
    assert X.shape == (3, 2)
    assert np.all(X[:, 0] == 1.0)
    assert np.allclose(X[:, 1], [1, 2, 3])

    X2 = add_const(np.ones((4, 2)) * 2)
    assert X2.shape == (4, 3)


def test_ols_fit_matches_lstsq(regression_data):
    X, y = regression_data
    b, e, XtX_inv = ols_fit(X, y)
    assert np.allclose(b, np.linalg.lstsq(X, y, rcond=None)[0])
    assert np.allclose(e, y - X @ b)
    assert np.allclose(XtX_inv, np.linalg.inv(X.T @ X))


def test_residuals_orthogonal_to_regressors(regression_data):
    X, y = regression_data
    res = ols.estimate(X, y)
    Xu = X.T @ res["residuals"]
    scale = np.abs(X).sum(axis=0) * np.abs(res["residuals"]).max()
    assert np.all(np.abs(Xu) <= 1e-8 * scale)


def test_classical_cov_uses_population_variance(regression_data):
    X, y = regression_data
    res = ols.estimate(X, y)
    e = res["residuals"]
    T = len(y)
    s2 = np.sum((e - e.mean()) ** 2) / T
    assert res["s2"] == pytest.approx(s2)
    assert np.allclose(res["cov"], np.linalg.inv(X.T @ X) * s2)
    assert np.allclose(res["se"], np.sqrt(np.diag(res["cov"])))


def test_classical_cov_unbiased_option(regression_data):
    X, y = regression_data
    T, k = X.shape
    res = ols.estimate(X, y, ddof=k)
    e = res["residuals"]
    # with an intercept mean(e) == 0, so var(e, ddof=k) == e'e / (T - k)
    assert res["s2"] == pytest.approx(e @ e / (T - k))


def test_r_squared(regression_data):
    X, y = regression_data
    res = ols.estimate(X, y)
    T, k = X.shape
    e = res["residuals"]
    sst = np.sum((y - y.mean()) ** 2)
    assert res["r2"] == pytest.approx(1 - e @ e / sst)
    assert res["r2_adj"] == pytest.approx(1 - (e @ e / (T - k)) / (sst / (T - 1)))
    assert res["r2_adj"] < res["r2"] < 1
    assert np.allclose(res["fitted"], X @ res["beta"])
    assert res["nobs"] == T and res["k"] == k


def test_exact_fit_recovers_coefficients(rng):
    X = add_const(rng.standard_normal((50, 2)))
    beta = np.array([1.0, -0.5, 2.0])
    res = ols.estimate(X, X @ beta + 1e-3 * rng.standard_normal(50))
    assert np.allclose(res["beta"], beta, atol=1e-2)


def test_accepts_column_vector_y(regression_data):
    X, y = regression_data
    res = ols.estimate(X, y[:, None])
    assert res["beta"].shape == (3,)


def test_dimension_mismatch(regression_data):
    X, y = regression_data
    with pytest.raises(DimensionMismatchError, match="rows"):
        ols.estimate(X, y[:-1])


def test_singular_design(rng):
    x = rng.standard_normal(40)
    X = np.column_stack([np.ones(40), x, 2 * x])
    with pytest.raises(SingularMatrixError):
        ols.estimate(X, rng.standard_normal(40))


def test_fewer_observations_than_regressors(rng):
    X = rng.standard_normal((2, 3))
    with pytest.raises(SingularMatrixError, match="observations"):
        ols.estimate(X, rng.standard_normal(2))


def test_non_finite_input(regression_data):
    X, y = regression_data
    y = y.copy()
    y[3] = np.nan
    with pytest.raises(NonFiniteInputError):
        ols.estimate(X, y)


def test_constant_y_warns(rng):
    X = add_const(rng.standard_normal(20))
    with pytest.warns(SmallSampleWarning):
        res = ols.estimate(X, np.ones(20))
    assert np.isnan(res["r2"])


def test_ddof_too_large():
    with pytest.raises(DimensionMismatchError):
        ols.classical_variance(np.array([1.0, -1.0]), ddof=2)


def test_large_unit_regressor_is_estimated(rng):
    T = 300
    vol = 1e8 * (1 + 0.1 * rng.standard_normal(T))
    X = np.column_stack([np.ones(T), vol])
    y = 0.5 + 2e-8 * vol + 0.1 * rng.standard_normal(T)
    with warnings.catch_warnings():
        warnings.simplefilter("error", IllConditionedWarning)
        res = ols.estimate(X, y)
    assert np.allclose(res["beta"], np.linalg.lstsq(X, y, rcond=None)[0])
    # simple regression: Var(slope) = s2 / sum((x - mean(x))^2)
    sxx = np.sum((vol - vol.mean()) ** 2)
    assert res["se"][1] == pytest.approx(np.sqrt(res["s2"] / sxx), rel=1e-6)


def test_nearly_collinear_design_warns(rng):
    T = 200
    x = rng.standard_normal(T)
    X = np.column_stack([np.ones(T), x, x + 1e-6 * rng.standard_normal(T)])
    with pytest.warns(IllConditionedWarning, match="ill-conditioned"):
        ols.estimate(X, rng.standard_normal(T))


def test_negative_ddof():
    with pytest.raises(ValueError, match="non-negative"):
        ols.classical_variance(np.array([1.0, -1.0, 0.5]), ddof=-1)
