"""Raw vital-sign samples for the vitals chart.

This module provides the SampleStore class, which holds the long-format sample
table (one row per signal per normalized time sample), and filter_signal(),
the single signal filter every pipeline stage goes through. Loading,
validation and wide-to-long conversion live here so the aggregation code can
assume well-typed columns.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import pandas as pd

from nicevitals.utils.logging import get_logger

logger = get_logger(__name__)

SIGNAL_COL = "signal"
TIME_COL = "norm_time"
VALUE_COL = "value"

# Categorical columns the chart can group by
GROUP_COLUMNS = ("optype", "emop")

REQUIRED_COLUMNS = (SIGNAL_COL, TIME_COL, VALUE_COL) + GROUP_COLUMNS


@dataclass(frozen=True)
class Sample:
    """One vital-sign reading at a normalized time point of a case."""
    signal: str
    norm_time: float
    value: float
    optype: str
    emop: Union[str, bool]
    case_id: Optional[Any] = None


class SampleStore:
    """Holds the loaded sample table.

    The table is loaded once and never mutated.

    Attributes:
        df: The long-format sample DataFrame.
    """

    def __init__(self, df: pd.DataFrame) -> None:
        """Initialize SampleStore with a long-format dataframe.

        Args:
            df: DataFrame with at least the columns signal, norm_time, value,
                optype and emop.

        Raises:
            ValueError: If a required column is missing.
        """
        for col in REQUIRED_COLUMNS:
            if col not in df.columns:
                raise ValueError(f"df must contain required column {col!r}")
        self.df = df
        logger.debug(f"SampleStore: {len(df)} rows, signals={self.signals()}")

    @classmethod
    def from_csv(cls, path: Union[str, Path], **read_csv_kwargs: Any) -> "SampleStore":
        """Load a long-format CSV; pandas infers numeric vs string per column."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"CSV not found: {path}")
        df = pd.read_csv(path, **read_csv_kwargs)
        logger.info(f"Loaded {len(df)} rows from {path}")
        return cls(df)

    @classmethod
    def from_samples(cls, samples: Iterable[Sample]) -> "SampleStore":
        """Build a store from Sample records."""
        rows = [asdict(s) for s in samples]
        if rows:
            df = pd.DataFrame(rows)
        else:
            df = pd.DataFrame(columns=[f.name for f in fields(Sample)])
        return cls(df)

    @classmethod
    def from_wide(
        cls,
        df: pd.DataFrame,
        signals: list[str],
        *,
        id_cols: Optional[list[str]] = None,
    ) -> "SampleStore":
        """Convert a wide-format table (one column per vital) to long format.

        Args:
            df: Wide DataFrame with norm_time, optype, emop and one column per signal.
            signals: Columns holding vital values (e.g. ["map", "hr", "spo2"]).
            id_cols: Columns carried to every long row. Defaults to every
                column that is not in signals.

        Raises:
            ValueError: If a signal column is missing.
        """
        missing = [s for s in signals if s not in df.columns]
        if missing:
            raise ValueError(f"wide df is missing signal columns {missing!r}")
        if id_cols is None:
            id_cols = [c for c in df.columns if c not in signals]
        long_df = df.melt(
            id_vars=id_cols,
            value_vars=signals,
            var_name=SIGNAL_COL,
            value_name=VALUE_COL,
        )
        long_df = long_df.dropna(subset=[VALUE_COL]).reset_index(drop=True)
        return cls(long_df)

    def __len__(self) -> int:
        return len(self.df)

    def signals(self) -> list[str]:
        """Sorted unique signal identifiers."""
        return sorted(self.df[SIGNAL_COL].dropna().astype(str).unique().tolist())


def filter_signal(samples: pd.DataFrame, signal: str) -> pd.DataFrame:
    """Rows of one signal with numeric norm_time/value; unparsable rows dropped.

    Idempotent, so aggregate() and summarize_thresholds() can both apply it to
    an already filtered frame. Returns an empty frame (same columns) for an
    unknown signal.
    """
    df_f = samples[samples[SIGNAL_COL].astype(str) == str(signal)].copy()
    df_f[TIME_COL] = pd.to_numeric(df_f[TIME_COL], errors="coerce")
    df_f[VALUE_COL] = pd.to_numeric(df_f[VALUE_COL], errors="coerce")
    return df_f.dropna(subset=[TIME_COL, VALUE_COL])
