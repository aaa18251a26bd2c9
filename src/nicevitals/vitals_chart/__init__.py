"""Vitals comparison chart: aggregation pipeline and NiceGUI/Plotly front end.

The core modules (sample_store, aggregator, domain, clinical, selection_state,
query_engine, chart_state, chart_view) only need pandas and numpy. Import
VitalsChartController from vitals_chart_controller for the UI.
"""

from nicevitals.vitals_chart.aggregator import Bin, Series, aggregate
from nicevitals.vitals_chart.chart_state import ChartState
from nicevitals.vitals_chart.chart_view import ChartView, build_chart_view
from nicevitals.vitals_chart.clinical import Zone, summarize_thresholds, zones_for
from nicevitals.vitals_chart.domain import compute_domain
from nicevitals.vitals_chart.query_engine import nearest_bin
from nicevitals.vitals_chart.sample_store import Sample, SampleStore, filter_signal
from nicevitals.vitals_chart.selection_state import SelectionState

__all__ = [
    "Bin",
    "ChartState",
    "ChartView",
    "Sample",
    "SampleStore",
    "SelectionState",
    "Series",
    "Zone",
    "aggregate",
    "build_chart_view",
    "compute_domain",
    "filter_signal",
    "nearest_bin",
    "summarize_thresholds",
    "zones_for",
]
