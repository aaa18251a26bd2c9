# Demo app for VitalsChartController
"""Demo application for the vitals comparison chart.

Loads a long-format vitals CSV from NICEVITALS_DEMO_CSV when set, otherwise
synthesizes a small dataset so the chart can be explored without data.
An optional JSON config is read from NICEVITALS_CONFIG.
"""

from __future__ import annotations

import os

import numpy as np
import pandas as pd
from nicegui import ui

from nicevitals.utils.gui_defaults import setUpGuiDefaults
from nicevitals.utils.logging import configure_logging, get_logger
from nicevitals.vitals_chart.chart_config import VitalsChartConfig
from nicevitals.vitals_chart.sample_store import SampleStore
from nicevitals.vitals_chart.vitals_chart_controller import VitalsChartController

logger = get_logger(__name__)


def synthesize_vitals(n_cases: int = 40, n_times: int = 200, seed: int = 0) -> pd.DataFrame:
    """Random wide-format vitals (map, hr, spo2 columns) for n_cases cases."""
    rng = np.random.default_rng(seed)
    optypes = ["Colorectal", "Stomach", "Hepatic", "Vascular"]
    rows = []
    for case_id in range(n_cases):
        optype = optypes[case_id % len(optypes)]
        emop = bool(rng.random() < 0.2)
        t = np.linspace(0.0, 1.0, n_times)
        dip = 12.0 * np.exp(-((t - 0.15) ** 2) / 0.004)
        map_ = 85.0 - dip + rng.normal(0, 6, n_times) - (5.0 if emop else 0.0)
        hr = 72.0 + 8.0 * t + rng.normal(0, 5, n_times) + (10.0 if emop else 0.0)
        spo2 = np.clip(98.0 + rng.normal(0, 1.2, n_times), 80.0, 100.0)
        for i in range(n_times):
            rows.append((case_id, t[i], optype, emop, map_[i], hr[i], spo2[i]))
    return pd.DataFrame(rows, columns=["caseid", "norm_time", "optype", "emop", "map", "hr", "spo2"])


def main() -> None:
    """Demo entrypoint."""
    configure_logging()

    path = os.environ.get("NICEVITALS_DEMO_CSV")
    if path:
        store = SampleStore.from_csv(path)
    else:
        logger.info("NICEVITALS_DEMO_CSV not set, using synthetic vitals")
        store = SampleStore.from_wide(synthesize_vitals(), ["map", "hr", "spo2"])

    config = VitalsChartConfig.load(os.environ.get("NICEVITALS_CONFIG"))

    setUpGuiDefaults()
    ui.page_title("Intraoperative Vitals by Group")

    with ui.column().classes("w-full gap-4 p-4"):
        ui.label("Intraoperative Vitals by Group").classes("text-2xl font-bold")
        ctrl = VitalsChartController(store, config=config)
        ctrl.build()

    ui.run(reload=False)


if __name__ in {"__main__", "__mp_main__"}:
    main()
