"""View model for the vitals chart.

build_chart_view() is the single recompute entry point: every trigger
(selector change, legend click) calls it with the raw samples and the current
ChartState and gets back an immutable ChartView holding everything the
rendering side needs. Nothing is cached between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd

from nicevitals.utils.logging import get_logger
from nicevitals.vitals_chart.aggregator import Bin, Series, aggregate
from nicevitals.vitals_chart.chart_state import ChartState
from nicevitals.vitals_chart.clinical import Zone, summarize_thresholds, zones_for
from nicevitals.vitals_chart.domain import compute_domain, resolve_domain
from nicevitals.vitals_chart.query_engine import format_tooltip, nearest_bin
from nicevitals.vitals_chart.sample_store import filter_signal

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChartView:
    """Render-input snapshot produced by one recomputation.

    Hashable: every field is a tuple or frozenset. The per-group threshold
    percentages are kept as sorted (key, pct) pairs; use threshold_pct() or
    the threshold_summary property for lookups.
    """
    signal: str
    group_col: str
    series: tuple[Series, ...]            # every group present for the signal
    visible_series: tuple[Series, ...]    # series passing the legend selection
    domain: tuple[float, float]
    zones: tuple[Zone, ...]
    threshold_items: tuple[tuple[str, str], ...]
    active_keys: frozenset[str]

    @property
    def keys(self) -> list[str]:
        return [s.key for s in self.series]

    @property
    def is_empty(self) -> bool:
        return not self.series

    @property
    def threshold_summary(self) -> dict[str, str]:
        """Group key -> formatted percent below threshold (a fresh dict)."""
        return dict(self.threshold_items)

    def threshold_pct(self, key: str) -> Optional[str]:
        for k, pct in self.threshold_items:
            if k == key:
                return pct
        return None

    def is_visible(self, key: str) -> bool:
        return any(s.key == key for s in self.visible_series)

    def series_by_key(self, key: str) -> Optional[Series]:
        for s in self.series:
            if s.key == key:
                return s
        return None

    def nearest(self, key: str, query_time: float) -> Optional[Bin]:
        s = self.series_by_key(key)
        if s is None:
            return None
        return nearest_bin(s, query_time)

    def tooltip_for(self, key: str, query_time: float, signal_label: Optional[str] = None) -> Optional[str]:
        """Tooltip text for the bin of `key` nearest to query_time, or None."""
        b = self.nearest(key, query_time)
        if b is None:
            return None
        return format_tooltip(
            signal_label or self.signal.upper(),
            key,
            b,
            self.threshold_pct(key),
        )


def build_chart_view(samples: pd.DataFrame, state: ChartState) -> ChartView:
    """Recompute the chart from raw samples and the current state.

    Zones are clipped to the domain of the visible series. When nothing is
    visible the axis keeps the fallback domain but no zone is drawn.

    Args:
        samples: Long-format sample DataFrame (see SampleStore.df).
        state: Current ChartState. Not modified; the caller stores
            view.domain back into state.last_domain if it wants the fallback.

    Returns:
        ChartView snapshot.
    """
    df_f = filter_signal(samples, state.signal)
    series = aggregate(df_f, state.signal, state.group_col, state.bin_width)
    visible = tuple(s for s in series if state.selection.is_visible(s.key))
    if series and not visible:
        logger.debug(
            f"No visible series for active={state.selection.to_list()}, keeping previous domain"
        )
    data_domain = compute_domain(visible)
    domain = resolve_domain(visible, state.last_domain)
    zones = zones_for(state.signal, data_domain) if data_domain is not None else []
    summary = summarize_thresholds(df_f, state.group_col, state.signal)

    logger.info(
        f"build_chart_view: signal={state.signal} group_col={state.group_col} "
        f"series={len(series)} visible={len(visible)} domain=({domain[0]:.2f}, {domain[1]:.2f}) "
        f"zones={len(zones)}"
    )
    return ChartView(
        signal=state.signal,
        group_col=state.group_col,
        series=tuple(series),
        visible_series=visible,
        domain=domain,
        zones=tuple(zones),
        threshold_items=tuple(sorted(summary.items())),
        active_keys=state.selection.active,
    )
