import sys
from pathlib import Path

import numpy as np
import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
APP_DIR = REPO_ROOT / "applications" / "fama_french"


def pytest_configure():
    """Make the package and the application scripts importable without installing."""
    for p in (APP_DIR, REPO_ROOT):
        if str(p) not in sys.path:
            sys.path.insert(0, str(p))


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def regression_data(rng):
    """T=300 sample with heteroskedastic, MA(1) errors and an intercept."""
    T = 300
    x = rng.standard_normal((T, 2))
    z = rng.standard_normal(T + 1)
    e = (1 + np.abs(x[:, 0])) * (z[1:] + 0.5 * z[:-1])
    X = np.column_stack([np.ones(T), x])
    y = X @ np.array([0.5, 1.0, -2.0]) + e
    return X, y
