"""Unit tests for group-and-bin aggregation."""

import numpy as np
import pandas as pd
import pytest

from nicevitals.vitals_chart.aggregator import Bin, Series, aggregate, bin_index


def test_aggregate_scenario(scenario_store):
    """Two readings share a bin in 'A'; lone reading in 'B' has no sd."""
    series = aggregate(scenario_store.df, "hr", "optype", 0.01)
    assert [s.key for s in series] == ["A", "B"]

    a, b = series
    assert len(a.bins) == 1
    assert a.bins[0].norm_time == 0.0
    assert a.bins[0].mean == pytest.approx(90.0)
    assert a.bins[0].sd == pytest.approx(14.1421356, rel=1e-6)
    assert a.bins[0].n == 2

    assert len(b.bins) == 1
    assert b.bins[0].norm_time == pytest.approx(0.5)
    assert b.bins[0].mean == pytest.approx(40.0)
    assert b.bins[0].sd is None


def test_aggregate_unknown_signal_returns_empty(scenario_store):
    assert aggregate(scenario_store.df, "spo2", "optype") == []


def test_aggregate_one_series_per_group(vitals_df):
    series = aggregate(vitals_df, "map", "optype")
    assert {s.key for s in series} == set(vitals_df["optype"].astype(str).unique())


def test_aggregate_bool_group_keys_are_strings(vitals_df):
    series = aggregate(vitals_df, "hr", "emop")
    assert [s.key for s in series] == ["False", "True"]


def test_aggregate_bins_sorted_numerically():
    """Insertion order is scrambled; 0.1 must sort before 0.09 lexically but not numerically."""
    df = pd.DataFrame({
        "signal": ["map"] * 4,
        "norm_time": [0.5, 0.1, 0.09, 1.0],
        "value": [1.0, 2.0, 3.0, 4.0],
        "optype": ["A"] * 4,
        "emop": ["N"] * 4,
    })
    (s,) = aggregate(df, "map", "optype")
    times = s.times()
    assert times == sorted(times)
    assert times == pytest.approx([0.09, 0.1, 0.5, 1.0])


def test_aggregate_nearby_times_share_bucket():
    df = pd.DataFrame({
        "signal": ["map"] * 3,
        "norm_time": [0.101, 0.099, 0.104],
        "value": [60.0, 70.0, 80.0],
        "optype": ["A"] * 3,
        "emop": ["N"] * 3,
    })
    (s,) = aggregate(df, "map", "optype")
    assert len(s.bins) == 1
    assert s.bins[0].norm_time == pytest.approx(0.1)
    assert s.bins[0].mean == pytest.approx(70.0)
    assert s.bins[0].sd == pytest.approx(10.0)


def test_bin_index_rounds_half_away_from_zero():
    idx = bin_index(np.array([0.5, 1.5, 2.5, -0.5, -1.5, 0.49]), 1.0)
    assert idx.tolist() == [1, 2, 3, -1, -2, 0]


def test_aggregate_is_idempotent(vitals_df):
    first = aggregate(vitals_df, "map", "optype")
    second = aggregate(vitals_df, "map", "optype")
    assert first == second


def test_aggregate_sd_non_negative(vitals_df):
    for s in aggregate(vitals_df, "map", "emop", bin_width=0.25):
        for b in s.bins:
            if b.n >= 2:
                assert b.sd is not None and b.sd >= 0
            else:
                assert b.sd is None


def test_aggregate_ignores_unparsable_values():
    df = pd.DataFrame({
        "signal": ["hr", "hr", "hr"],
        "norm_time": [0.0, 0.0, "x"],
        "value": [60.0, "bad", 70.0],
        "optype": ["A", "A", "A"],
        "emop": ["N", "N", "N"],
    })
    (s,) = aggregate(df, "hr", "optype")
    assert s.bins == (Bin(norm_time=0.0, mean=60.0, sd=None, n=1),)


def test_aggregate_bad_bin_width_raises(vitals_df):
    with pytest.raises(ValueError) as exc_info:
        aggregate(vitals_df, "map", "optype", bin_width=0)
    assert "bin_width" in str(exc_info.value)


def test_aggregate_unknown_group_column_raises(vitals_df):
    with pytest.raises(ValueError) as exc_info:
        aggregate(vitals_df, "map", "asa_class")
    assert "asa_class" in str(exc_info.value)


def test_series_times():
    s = Series(key="A", bins=(Bin(0.0, 1.0, None), Bin(0.01, 2.0, None)))
    assert s.times() == [0.0, 0.01]
