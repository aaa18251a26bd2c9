"""Clinical knowledge for the vitals chart: danger/caution zones and thresholds.

Two independent lookup tables keyed by signal identifier:

- ZONE_TABLE: background bands drawn behind the trend lines. A bound of None
  is open and takes the edge of the current value-axis domain.
- CLINICAL_THRESHOLDS: the value below which a raw sample counts as
  "below threshold" in the tooltip summary.

Zone bounds and thresholds need not coincide (e.g. SpO2 zone < 90, threshold < 92).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from nicevitals.utils.logging import get_logger
from nicevitals.vitals_chart.sample_store import VALUE_COL, filter_signal

logger = get_logger(__name__)


@dataclass(frozen=True)
class ZoneBand:
    """Fixed clinical band; None means unbounded on that side."""
    label: str
    lower: Optional[float]
    upper: Optional[float]
    color_tag: str


@dataclass(frozen=True)
class Zone:
    """Band clipped to the value-axis domain, always min < max."""
    label: str
    min: float
    max: float
    color_tag: str


ZONE_TABLE: dict[str, tuple[ZoneBand, ...]] = {
    "map": (
        ZoneBand("Hypotension", None, 60.0, "danger"),
        ZoneBand("Hypertension", 120.0, None, "caution"),
    ),
    "hr": (
        ZoneBand("Bradycardia", None, 50.0, "danger"),
        ZoneBand("Tachycardia", 120.0, None, "caution"),
    ),
    "spo2": (
        ZoneBand("Hypoxemia", None, 90.0, "danger"),
    ),
    "si": (
        ZoneBand("Unstable", None, 0.5, "danger"),
        ZoneBand("Borderline", 0.5, 0.75, "caution"),
    ),
}

CLINICAL_THRESHOLDS: dict[str, float] = {
    "map": 60.0,
    "hr": 50.0,
    "spo2": 92.0,
}


def zones_for(signal: str, domain: Optional[Sequence[float]]) -> list[Zone]:
    """Zones for a signal clipped to [domain_min, domain_max].

    Bands that end up empty or inverted after clipping are dropped.
    Unknown signal or missing domain gives an empty list.
    """
    bands = ZONE_TABLE.get(signal)
    if not bands or domain is None:
        return []
    d_min, d_max = float(domain[0]), float(domain[1])
    zones: list[Zone] = []
    for band in bands:
        lo = d_min if band.lower is None else max(band.lower, d_min)
        hi = d_max if band.upper is None else min(band.upper, d_max)
        if lo >= hi:
            continue
        zones.append(Zone(label=band.label, min=lo, max=hi, color_tag=band.color_tag))
    return zones


def threshold_for(signal: str) -> Optional[float]:
    return CLINICAL_THRESHOLDS.get(signal)


def percent_below(values: Sequence[float], threshold: float) -> Optional[float]:
    """Percentage of values strictly below threshold; None for no values."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return None
    return 100.0 * float(np.count_nonzero(arr < threshold)) / arr.size


def summarize_thresholds(
    samples: pd.DataFrame,
    group_key: str,
    signal: str,
) -> dict[str, str]:
    """Per-group percentage of raw samples below the signal's clinical threshold.

    Args:
        samples: Long-format samples (filtered to the signal or not; rows of
            other signals are ignored).
        group_key: Categorical column defining groups.
        signal: Signal identifier.

    Returns:
        Mapping group key (str) -> percentage formatted with one decimal.
        Empty dict when the signal has no threshold. Groups without any
        numeric sample are omitted.
    """
    threshold = threshold_for(signal)
    if threshold is None:
        return {}
    if group_key not in samples.columns:
        raise ValueError(f"Unknown group column {group_key!r}")

    df_f = filter_signal(samples, signal)
    df_f = df_f[df_f[group_key].notna()]
    tmp = pd.DataFrame({
        "group": df_f[group_key].astype(str),
        "y": df_f[VALUE_COL],
    })

    summary: dict[str, str] = {}
    for key, sub in tmp.groupby("group", sort=True):
        pct = percent_below(sub["y"].to_numpy(), threshold)
        if pct is None:
            continue
        summary[str(key)] = f"{pct:.1f}"
    logger.debug(f"summarize_thresholds: signal={signal!r} threshold={threshold} groups={len(summary)}")
    return summary
