"""Chart state for the vitals chart.

ChartState is the explicit interaction state passed into every recomputation:
selected vital, grouping column, bin width, legend selection and the last
value-axis domain (kept so an empty visible set does not collapse the axis).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from nicevitals.vitals_chart.aggregator import DEFAULT_BIN_WIDTH
from nicevitals.vitals_chart.selection_state import SelectionState


@dataclass
class ChartState:
    """Configuration and interaction state for the vitals chart."""
    signal: str
    group_col: str
    bin_width: float = DEFAULT_BIN_WIDTH
    selection: SelectionState = field(default_factory=SelectionState)
    last_domain: Optional[tuple[float, float]] = None  # previous y-axis range

    def to_dict(self) -> dict[str, Any]:
        """Serialize ChartState to dictionary.

        Returns:
            Dictionary representation with the selection as a sorted list.
        """
        return {
            "signal": self.signal,
            "group_col": self.group_col,
            "bin_width": self.bin_width,
            "active_groups": self.selection.to_list(),
            "last_domain": list(self.last_domain) if self.last_domain is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChartState":
        """Deserialize ChartState from dictionary.

        Raises:
            ValueError: If signal or group_col is missing.
        """
        if not data.get("signal"):
            raise ValueError("ChartState requires 'signal'")
        if not data.get("group_col"):
            raise ValueError("ChartState requires 'group_col'")
        last_domain = data.get("last_domain")
        if last_domain is not None:
            last_domain = (float(last_domain[0]), float(last_domain[1]))
        return cls(
            signal=str(data["signal"]),
            group_col=str(data["group_col"]),
            bin_width=float(data.get("bin_width", DEFAULT_BIN_WIDTH)),
            selection=SelectionState.from_list(data.get("active_groups")),
            last_domain=last_domain,
        )

    def copy(self) -> "ChartState":
        return ChartState.from_dict(self.to_dict())
