"""
nicevitals: Intraoperative vital-sign trend comparison with NiceGUI and Plotly.

This package provides:
- SampleStore: long-format vital-sign samples backed by a pandas DataFrame
- aggregate / compute_domain / zones_for / summarize_thresholds: the
  aggregation pipeline behind the chart
- VitalsChartController: NiceGUI chart with vital/group selectors, legend
  toggles and tooltips

For logging configuration in standalone scripts/demos:
    ```python
    from nicevitals.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from nicevitals.utils.logging import configure_logging, get_logger

from nicevitals.vitals_chart.aggregator import Bin, Series, aggregate
from nicevitals.vitals_chart.sample_store import Sample, SampleStore
from nicevitals.vitals_chart.selection_state import SelectionState

# NullHandler keeps the "no handlers could be found" fallback from printing
# records when no application has configured logging.
_logger = logging.getLogger("nicevitals")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "Bin",
    "Sample",
    "SampleStore",
    "SelectionState",
    "Series",
    "aggregate",
    "configure_logging",
    "get_logger",
]

__version__ = "0.1.0"
