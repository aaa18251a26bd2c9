"""Shared fixtures for vitals_chart tests."""
from __future__ import annotations

import pandas as pd
import pytest

from nicevitals.vitals_chart.sample_store import Sample, SampleStore


@pytest.fixture
def scenario_samples():
    """Two 'A' readings at t=0 and one 'B' reading at t=0.5, all hr."""
    return [
        Sample(signal="hr", norm_time=0.0, value=80.0, optype="A", emop="N"),
        Sample(signal="hr", norm_time=0.0, value=100.0, optype="A", emop="N"),
        Sample(signal="hr", norm_time=0.5, value=40.0, optype="B", emop="Y"),
    ]


@pytest.fixture
def scenario_store(scenario_samples):
    return SampleStore.from_samples(scenario_samples)


@pytest.fixture
def vitals_df():
    """Long-format frame with map/hr/spo2 over a few times and groups."""
    rows = []
    for case_id, (optype, emop) in enumerate(
        [("Colorectal", False), ("Colorectal", True), ("Stomach", False), ("Stomach", False)]
    ):
        for i, t in enumerate([0.0, 0.25, 0.5, 0.75, 1.0]):
            rows.append({"caseid": case_id, "signal": "map", "norm_time": t,
                         "value": 70.0 + 5 * case_id + i, "optype": optype, "emop": emop})
            rows.append({"caseid": case_id, "signal": "hr", "norm_time": t,
                         "value": 45.0 + 10 * case_id + i, "optype": optype, "emop": emop})
            rows.append({"caseid": case_id, "signal": "spo2", "norm_time": t,
                         "value": 95.0 + (case_id % 2), "optype": optype, "emop": emop})
    return pd.DataFrame(rows)
