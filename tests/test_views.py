from __future__ import annotations

import pandas as pd

from dashboard.settings import EFFICIENCY_ALERT_PRIORITY, YOY_CATEGORY
from dashboard.views import UNRANKED, count_by, filter_by_categories, filter_by_category, priority_rank, sort_by_priority


def test_sort_by_priority_scenario():
    df = pd.DataFrame(
        [
            {"Efficiency Alert": "Stable – No Action"},
            {"Efficiency Alert": "Investigate – Potential Risk"},
            {"Efficiency Alert": "Unknown Value"},
        ]
    )
    out = sort_by_priority(df, EFFICIENCY_ALERT_PRIORITY, "Efficiency Alert")
    assert out["Efficiency Alert"].tolist() == [
        "Investigate – Potential Risk",
        "Stable – No Action",
        "Unknown Value",
    ]


def test_sort_by_priority_is_stable_and_unranked_last():
    df = pd.DataFrame(
        {
            "Efficiency Alert": ["", "Below Threshold", "zzz", "Efficient Scaling", "Below Threshold", "Efficient Scaling"],
            "id": [1, 2, 3, 4, 5, 6],
        }
    )
    out = sort_by_priority(df, EFFICIENCY_ALERT_PRIORITY, "Efficiency Alert")
    assert out["id"].tolist() == [4, 6, 2, 5, 1, 3]


def test_sort_by_priority_does_not_mutate_input():
    df = pd.DataFrame({"Efficiency Alert": ["Below Threshold", "Efficient Scaling"]})
    before = df.copy()
    sort_by_priority(df, EFFICIENCY_ALERT_PRIORITY, "Efficiency Alert")
    pd.testing.assert_frame_equal(df, before)


def test_sort_by_priority_missing_key_column_keeps_order():
    df = pd.DataFrame({"id": [3, 1, 2]})
    out = sort_by_priority(df, EFFICIENCY_ALERT_PRIORITY, "Efficiency Alert")
    assert out["id"].tolist() == [3, 1, 2]


def test_priority_rank():
    assert priority_rank("Investigate – Potential Risk", EFFICIENCY_ALERT_PRIORITY) == 0
    assert priority_rank("nope", EFFICIENCY_ALERT_PRIORITY) == UNRANKED
    assert priority_rank(None, EFFICIENCY_ALERT_PRIORITY) == UNRANKED


def test_count_by_scenario():
    df = pd.DataFrame([{"Margin Risk Assessment": "High"}, {}, {"Margin Risk Assessment": "High"}])
    counts = count_by(df, "Margin Risk Assessment")
    assert counts == {"High": 2, "Unknown": 1}
    assert list(counts) == ["High", "Unknown"]


def test_count_by_first_seen_order_and_total():
    values = ["b", "", "a", "b", "c", "a", None, "b"]
    df = pd.DataFrame({"k": values})
    counts = count_by(df, "k")
    assert list(counts) == ["b", "Unknown", "a", "c"]
    assert counts == {"b": 3, "Unknown": 2, "a": 2, "c": 1}
    assert sum(counts.values()) == len(df)


def test_count_by_missing_column_and_empty():
    df = pd.DataFrame({"other": [1, 2]})
    assert count_by(df, "k") == {"Unknown": 2}
    assert count_by(pd.DataFrame(), "k") == {}


def test_filter_by_category_exact_match_in_order():
    df = pd.DataFrame(
        {
            "Category": [YOY_CATEGORY, "Cash Flow Projection", YOY_CATEGORY + " ", YOY_CATEGORY.lower(), YOY_CATEGORY],
            "id": [1, 2, 3, 4, 5],
        }
    )
    out = filter_by_category(df, YOY_CATEGORY)
    assert out["id"].tolist() == [1, 5]
    assert (out["Category"] == YOY_CATEGORY).all()


def test_filter_by_category_no_match_is_empty():
    df = pd.DataFrame({"Category": ["a"], "id": [1]})
    out = filter_by_category(df, "missing")
    assert out.empty
    assert list(out.columns) == ["Category", "id"]

    no_column = filter_by_category(pd.DataFrame({"id": [1]}), "a")
    assert no_column.empty


def test_filter_by_categories():
    df = pd.DataFrame({"Category": ["a", "b", "a"]})
    slices = filter_by_categories(df, ["a", "b", "c"])
    assert [len(slices[k]) for k in ["a", "b", "c"]] == [2, 1, 0]
