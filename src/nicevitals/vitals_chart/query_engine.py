"""Nearest-bin lookup and tooltip text for pointer hover."""

from __future__ import annotations

from bisect import bisect_left
from typing import Optional

from nicevitals.vitals_chart.aggregator import Bin, Series

NOT_AVAILABLE = "N/A"


def nearest_bin(series: Series, query_time: float) -> Optional[Bin]:
    """Bin whose norm_time is closest to query_time; the earlier bin wins ties.

    Bins are sorted ascending, so a binary search finds the two candidates.
    Returns None for a series without bins.
    """
    bins = series.bins
    if not bins:
        return None
    times = series.times()
    i = bisect_left(times, query_time)
    if i == 0:
        return bins[0]
    if i == len(bins):
        return bins[-1]
    before, after = bins[i - 1], bins[i]
    if abs(after.norm_time - query_time) < abs(query_time - before.norm_time):
        return after
    return before


def format_tooltip(
    signal_label: str,
    key: str,
    b: Bin,
    threshold_pct: Optional[str] = None,
) -> str:
    """Tooltip lines for one bin of one group."""
    sd_text = f"{b.sd:.1f}" if b.sd is not None else NOT_AVAILABLE
    pct_text = f"{threshold_pct}%" if threshold_pct is not None else NOT_AVAILABLE
    lines = [
        f"Vital: {signal_label}",
        f"Group: {key}",
        f"Time: {b.norm_time:.0%}",
        f"Mean: {b.mean:.1f}",
        f"SD: {sd_text}",
        f"% below threshold: {pct_text}",
    ]
    return "\n".join(lines)
