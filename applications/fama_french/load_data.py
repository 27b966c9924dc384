"""
Data loaders for the Fama-French three-factor application.
============================================================

1. **CSV file** -- monthly factor returns in percent, one row per month,
   with a header naming the columns (delimiter is sniffed, so comma-,
   semicolon- and whitespace-separated files all work). Place the file at
   ``data/FFmFactorsPs.csv`` or pass ``--data``.

2. **Simulation** -- a look-alike sample with heteroskedastic,
   MA(1)-autocorrelated errors, used when the file is unavailable.

Both return a dict compatible with the finmetrics package:
    {y, X, labels}
"""

from pathlib import Path

import numpy as np
import pandas as pd

from finmetrics.utils import add_const

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_CSV = DATA_DIR / "FFmFactorsPs.csv"

Y_COL = "Rme"
X_COLS = ("RSMB", "RHML")
LABELS = ["c", "SMB", "HML"]


def load_ff_csv(csv_path=DEFAULT_CSV, y_col=Y_COL, x_cols=X_COLS, scale=100.0,
                labels=None):
    """
    Read factor returns from a delimited text file.

    Parameters
    ----------
    csv_path : str or Path
        File with a header row.
    y_col : str
        Regressand column (excess market return).
    x_cols : sequence of str
        Factor columns; an intercept is prepended.
    scale : float
        Divisor applied to all returns (100 for data in percent).
    labels : sequence of str, optional
        Coefficient names, intercept first. Defaults to LABELS for the
        default columns and to ["c", *x_cols] otherwise.

    Returns
    -------
    dict with keys:
        y      : regressand, shape (T,)
        X      : [1, factors], shape (T, 1 + len(x_cols))
        labels : coefficient names
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(
            f"Factor data not found at {csv_path}. "
            "Pass --data or use --source simulate."
        )
    df = pd.read_csv(csv_path, sep=None, engine="python")
    df.columns = [str(c).strip() for c in df.columns]
    missing = [c for c in [y_col, *x_cols] if c not in df.columns]
    if missing:
        raise ValueError(
            f"Columns {missing} not in {csv_path}; available: {list(df.columns)}"
        )
    df = df[[y_col, *x_cols]].apply(pd.to_numeric, errors="coerce").dropna()
    if df.empty:
        raise ValueError(f"No numeric observations in {csv_path}")

    y = df[y_col].to_numpy() / scale
    X = add_const(df[list(x_cols)].to_numpy() / scale)
    if labels is None:
        labels = list(LABELS) if tuple(x_cols) == X_COLS else ["c", *x_cols]
    labels = list(labels)
    if len(labels) != 1 + len(x_cols):
        raise ValueError(
            f"{len(labels)} labels for {1 + len(x_cols)} coefficients"
        )
    return dict(y=y, X=X, labels=labels)


def simulate_ff_data(T=388, seed=42):
    """
    Simulate monthly factor data mimicking the three-factor sample.

    DGP (decimal returns):
        SMB, HML  ~ N(0, 0.03^2), HML mildly autocorrelated
        sigma_t   = 0.03 * (1 + 10 * |SMB_t|)
        eps_t     = sigma_t * (z_t + 0.5 * z_{t-1})
        Rme_t     = 0.006 + 0.25 * SMB_t - 0.35 * HML_t + eps_t

    Returns
    -------
    dict with keys: y, X, labels, beta_true
    """
    np.random.seed(seed)
    smb = np.random.normal(0, 0.03, T)
    hml = np.empty(T)
    hml[0] = np.random.normal(0, 0.03)
    for t in range(1, T):
        hml[t] = 0.2 * hml[t - 1] + np.random.normal(0, 0.03)

    z = np.random.normal(0, 1, T + 1)
    sigma = 0.03 * (1 + 10 * np.abs(smb))
    eps = sigma * (z[1:] + 0.5 * z[:-1])

    beta_true = np.array([0.006, 0.25, -0.35])
    X = add_const(np.column_stack([smb, hml]))
    y = X @ beta_true + eps
    return dict(y=y, X=X, labels=list(LABELS), beta_true=beta_true)
