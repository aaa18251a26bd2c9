"""Value-axis domain for the visible series."""

from __future__ import annotations

from typing import Iterable, Optional

from nicevitals.vitals_chart.aggregator import Series

# Axis used when nothing has ever been visible
DEFAULT_DOMAIN: tuple[float, float] = (0.0, 1.0)


def compute_domain(visible_series: Iterable[Series]) -> Optional[tuple[float, float]]:
    """Return (min, max) spanning mean - sd .. mean + sd over every visible bin.

    A missing sd counts as 0, so a lone-sample bin contributes its mean only.
    Returns None when there are no bins to span; the caller picks a fallback.
    """
    lows: list[float] = []
    highs: list[float] = []
    for s in visible_series:
        for b in s.bins:
            sd = b.sd or 0.0
            lows.append(b.mean - sd)
            highs.append(b.mean + sd)
    if not lows:
        return None
    return (min(lows), max(highs))


def resolve_domain(
    visible_series: Iterable[Series],
    previous: Optional[tuple[float, float]] = None,
) -> tuple[float, float]:
    """compute_domain() with fallback to the previous domain, then DEFAULT_DOMAIN."""
    domain = compute_domain(visible_series)
    if domain is not None:
        return domain
    if previous is not None:
        return (float(previous[0]), float(previous[1]))
    return DEFAULT_DOMAIN
