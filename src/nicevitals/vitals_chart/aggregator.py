"""Group-and-bin aggregation of vital-sign samples.

Turns raw long-format samples into one Series per group: samples of the
selected signal are split by a categorical column, bucketed into fixed-width
normalized-time bins and reduced to mean and sample standard deviation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from nicevitals.utils.logging import get_logger
from nicevitals.vitals_chart.sample_store import TIME_COL, VALUE_COL, filter_signal

logger = get_logger(__name__)

DEFAULT_BIN_WIDTH = 0.01

# Decimal places kept on bin centers (removes float noise from index * width)
_BIN_CENTER_DECIMALS = 10


@dataclass(frozen=True)
class Bin:
    """Summary of all samples of one group that fall in one time bucket."""
    norm_time: float
    mean: float
    sd: Optional[float]  # None when the bucket holds a single sample
    n: int = 1


@dataclass(frozen=True)
class Series:
    """Binned trend for one group key, bins ascending by norm_time."""
    key: str
    bins: tuple[Bin, ...]

    def times(self) -> list[float]:
        return [b.norm_time for b in self.bins]


def bin_index(norm_time: np.ndarray, bin_width: float) -> np.ndarray:
    """Nearest bucket index for each time, ties rounded half away from zero."""
    t = np.asarray(norm_time, dtype=float)
    idx = np.sign(t) * np.floor(np.abs(t) / bin_width + 0.5)
    return idx.astype(np.int64)


def aggregate(
    samples: pd.DataFrame,
    signal: str,
    group_key: str,
    bin_width: float = DEFAULT_BIN_WIDTH,
) -> list[Series]:
    """Aggregate samples of one signal into per-group binned series.

    Args:
        samples: Long-format samples with signal, norm_time, value and group_key columns.
        signal: Signal identifier to keep (e.g. "map").
        group_key: Categorical column to split series by (e.g. "optype").
        bin_width: Width of a normalized-time bucket.

    Returns:
        One Series per group value present after filtering, ordered by key.
        Empty list when no sample matches the signal.

    Raises:
        ValueError: If bin_width is not positive or group_key is not a column.
    """
    if bin_width <= 0:
        raise ValueError(f"bin_width must be positive, got {bin_width!r}")
    if group_key not in samples.columns:
        raise ValueError(f"Unknown group column {group_key!r}")

    df_f = filter_signal(samples, signal)
    df_f = df_f[df_f[group_key].notna()]
    tmp = pd.DataFrame({
        "group": df_f[group_key].astype(str),
        "t": df_f[TIME_COL],
        "y": df_f[VALUE_COL],
    })
    if tmp.empty:
        logger.debug(f"aggregate: no samples for signal={signal!r}")
        return []

    tmp["bin"] = bin_index(tmp["t"].to_numpy(), bin_width)

    # sort=True orders groups by key and bins numerically by integer index
    stats = (
        tmp.groupby(["group", "bin"], sort=True)["y"]
        .agg(mean="mean", sd="std", n="count")
        .reset_index()
    )

    series: list[Series] = []
    for key, sub in stats.groupby("group", sort=True):
        bins = tuple(
            Bin(
                norm_time=round(int(idx) * bin_width, _BIN_CENTER_DECIMALS),
                mean=float(mean),
                sd=float(sd) if n > 1 else None,
                n=int(n),
            )
            for idx, mean, sd, n in zip(sub["bin"], sub["mean"], sub["sd"], sub["n"])
        )
        series.append(Series(key=str(key), bins=bins))

    logger.debug(
        f"aggregate: signal={signal!r} group_key={group_key!r} "
        f"rows={len(tmp)} series={len(series)}"
    )
    return series
