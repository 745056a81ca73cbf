from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

from dashboard.formatting import format_currency, format_frame, format_percentage, is_finite_number
from dashboard.schemas import FINANCIAL_PERFORMANCE


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, "$0.00"),
        (1234.5, "$1,234.50"),
        (1234567.891, "$1,234,567.89"),
        (-2500, "-$2,500.00"),
        (np.float64(2.5), "$2.50"),
        (np.int64(42), "$42.00"),
    ],
)
def test_format_currency_numbers(value, expected):
    assert format_currency(value) == expected


@pytest.mark.parametrize("value", [None, "", "1234", float("nan"), math.inf, -math.inf, True, pd.NA, object()])
def test_format_currency_non_numbers_fall_back(value):
    assert format_currency(value) == "$0"


@pytest.mark.parametrize(
    "value,expected",
    [
        (0.061, "6.1%"),
        (0, "0.0%"),
        (1, "100.0%"),
        (-0.04, "-4.0%"),
        (0.12345, "12.3%"),
    ],
)
def test_format_percentage_numbers(value, expected):
    assert format_percentage(value) == expected


@pytest.mark.parametrize("value", [float("nan"), None, "0.5", math.inf, False])
def test_format_percentage_non_numbers_fall_back(value):
    assert format_percentage(value) == "0%"


def test_is_finite_number_rejects_bool():
    assert is_finite_number(3)
    assert not is_finite_number(True)


def test_format_frame_applies_column_kinds():
    df = pd.DataFrame(
        [
            {"Category": "A", "Metric_Name": "Revenue", "Value_2024_Jan_July": 1000, "Growth_Rate_Decimal": 0.061},
            {"Category": "A", "Metric_Name": 7, "Value_2024_Jan_July": "", "Growth_Rate_Decimal": ""},
        ]
    )
    out = format_frame(df, FINANCIAL_PERFORMANCE)

    assert out["Value_2024_Jan_July"].tolist() == ["$1,000.00", "$0"]
    assert out["Growth_Rate_Decimal"].tolist() == ["6.1%", "0%"]
    assert out["Metric_Name"].tolist() == ["Revenue", "7"]
    # Source frame is untouched.
    assert df.loc[0, "Value_2024_Jan_July"] == 1000


@pytest.mark.parametrize(
    "value,expected",
    [
        (0.125, "$0.13"),
        (-0.125, "-$0.13"),
        (2.675, "$2.68"),
        (0.005, "$0.01"),
    ],
)
def test_format_currency_rounds_halves_away_from_zero(value, expected):
    assert format_currency(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        (0.0025, "0.3%"),
        (0.0125, "1.3%"),
        (-0.0125, "-1.3%"),
    ],
)
def test_format_percentage_rounds_halves_away_from_zero(value, expected):
    assert format_percentage(value) == expected
