import numpy as np
import pytest

from finmetrics.exceptions import DimensionMismatchError
from finmetrics.report import coef_table, format_table


def test_coef_table():
    df = coef_table([0.01, 0.2, -0.3], [[0.002, 0.07, 0.07], [0.002, 0.11, 0.09]],
                    ["c", "SMB", "HML"], ["coef", "std (trad.)", "std (White)"])
    assert list(df.index) == ["c", "SMB", "HML"]
    assert list(df.columns) == ["coef", "std (trad.)", "std (White)"]
    assert df.loc["SMB", "std (White)"] == pytest.approx(0.11)


def test_format_table():
    text = format_table(np.array([0.0123, 1.0]), [np.array([0.5, 0.25])],
                        ["c", "x"], ["coef", "std"], decimals=2)
    assert "coef" in text and "std" in text
    assert "0.01" in text and "0.25" in text


def test_label_mismatch():
    with pytest.raises(DimensionMismatchError):
        coef_table([1.0, 2.0], [[0.1, 0.2]], ["c"], ["coef", "std"])
    with pytest.raises(DimensionMismatchError):
        coef_table([1.0, 2.0], [[0.1, 0.2]], ["c", "x"], ["coef"])
    with pytest.raises(DimensionMismatchError):
        coef_table([1.0, 2.0], [[0.1]], ["c", "x"], ["coef", "std"])
