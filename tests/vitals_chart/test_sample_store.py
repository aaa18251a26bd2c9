"""Unit tests for SampleStore loading and filtering."""

import pandas as pd
import pytest

from nicevitals.vitals_chart.sample_store import REQUIRED_COLUMNS, SampleStore, filter_signal


def test_from_samples_builds_long_frame(scenario_store):
    assert len(scenario_store) == 3
    assert scenario_store.signals() == ["hr"]


def test_from_samples_empty():
    store = SampleStore.from_samples([])
    assert len(store) == 0
    assert store.signals() == []


def test_missing_column_raises(vitals_df):
    with pytest.raises(ValueError) as exc_info:
        SampleStore(vitals_df.drop(columns=["emop"]))
    assert "emop" in str(exc_info.value)


def test_filter_signal(vitals_df):
    store = SampleStore(vitals_df)
    df_f = filter_signal(store.df, "spo2")
    assert len(df_f) == 20
    assert set(df_f["signal"]) == {"spo2"}
    assert filter_signal(store.df, "etco2").empty


def test_from_csv_infers_types(tmp_path, vitals_df):
    path = tmp_path / "vitals.csv"
    vitals_df.to_csv(path, index=False)
    store = SampleStore.from_csv(path)
    assert store.df["value"].dtype.kind == "f"
    assert store.df["norm_time"].dtype.kind == "f"
    assert store.signals() == ["hr", "map", "spo2"]
    assert sorted(store.df["emop"].astype(str).unique()) == ["False", "True"]


def test_from_csv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        SampleStore.from_csv(tmp_path / "missing.csv")


def test_from_wide_melts_signal_columns():
    wide = pd.DataFrame({
        "caseid": [1, 1],
        "norm_time": [0.0, 0.5],
        "optype": ["A", "A"],
        "emop": [False, False],
        "map": [80.0, None],
        "hr": [70.0, 75.0],
    })
    store = SampleStore.from_wide(wide, ["map", "hr"])
    assert set(REQUIRED_COLUMNS) <= set(store.df.columns)
    assert len(store) == 3  # missing map reading dropped
    assert store.signals() == ["hr", "map"]
    hr = filter_signal(store.df, "hr")
    assert hr["value"].tolist() == [70.0, 75.0]


def test_from_wide_missing_signal_raises():
    wide = pd.DataFrame({"norm_time": [0.0], "optype": ["A"], "emop": [True], "hr": [70.0]})
    with pytest.raises(ValueError) as exc_info:
        SampleStore.from_wide(wide, ["hr", "spo2"])
    assert "spo2" in str(exc_info.value)


def test_filter_signal_coerces_and_drops_unparsable_rows():
    df = pd.DataFrame({
        "signal": ["hr", "hr", "hr", "map"],
        "norm_time": ["0.0", "0.5", "bad", 0.0],
        "value": ["70", "n/a", "80", 90.0],
        "optype": ["A"] * 4,
        "emop": [False] * 4,
    })
    df_f = filter_signal(df, "hr")
    assert df_f["norm_time"].tolist() == [0.0]
    assert df_f["value"].tolist() == [70.0]
    assert len(df) == 4  # input not modified


def test_filter_signal_is_idempotent(vitals_df):
    once = filter_signal(vitals_df, "map")
    twice = filter_signal(once, "map")
    pd.testing.assert_frame_equal(once, twice)
    assert filter_signal(once, "hr").empty
