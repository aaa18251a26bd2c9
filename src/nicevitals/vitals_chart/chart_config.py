"""
Vitals chart configuration (read-only JSON).

Configurable items:
- vital_options / vital_labels: signals offered in the vital selector
- group_options / group_labels: grouping columns offered in the group selector
- default_vital / default_group: initial selector values
- bin_width: normalized-time bucket width
- chart_width / chart_height: figure size in pixels

Behavior:
- If the config file is missing or unreadable -> defaults are used
- Unknown keys are ignored with warnings
- Invalid values are replaced by defaults with warnings

Nothing is ever written back; the chart keeps no state beyond the initial load.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from nicevitals.utils.logging import get_logger
from nicevitals.vitals_chart.aggregator import DEFAULT_BIN_WIDTH

logger = get_logger(__name__)


def _default_vital_labels() -> Dict[str, str]:
    return {"map": "MAP", "hr": "HR", "spo2": "SPO2"}


def _default_group_labels() -> Dict[str, str]:
    return {"optype": "Surgery Type", "emop": "Emergency Status"}


@dataclass
class VitalsChartConfig:
    """Selector options, labels and chart geometry."""
    vital_options: list[str] = field(default_factory=lambda: ["map", "hr", "spo2"])
    vital_labels: Dict[str, str] = field(default_factory=_default_vital_labels)
    group_options: list[str] = field(default_factory=lambda: ["optype", "emop"])
    group_labels: Dict[str, str] = field(default_factory=_default_group_labels)
    default_vital: str = "map"
    default_group: str = "optype"
    bin_width: float = DEFAULT_BIN_WIDTH
    chart_width: int = 1100
    chart_height: int = 400

    def vital_label(self, signal: str) -> str:
        """Display label for a signal; upper-cased identifier when not configured."""
        return self.vital_labels.get(signal, signal.upper())

    def group_label(self, group_col: str) -> str:
        return self.group_labels.get(group_col, group_col)

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            "vital_options": list(self.vital_options),
            "vital_labels": dict(self.vital_labels),
            "group_options": list(self.group_options),
            "group_labels": dict(self.group_labels),
            "default_vital": self.default_vital,
            "default_group": self.default_group,
            "bin_width": self.bin_width,
            "chart_width": self.chart_width,
            "chart_height": self.chart_height,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "VitalsChartConfig":
        """
        Tolerant loader:
        - ignores unknown keys
        - tolerates partially missing values
        - falls back to the default for any value of the wrong type
        """
        defaults = cls()
        known_keys = set(defaults.to_json_dict().keys())
        for key in d.keys():
            if key not in known_keys:
                logger.warning(f"Unknown key '{key}' in vitals chart config, ignoring")

        def _str_list(key: str, default: list[str]) -> list[str]:
            v = d.get(key)
            if v is None:
                return default
            if isinstance(v, list) and v and all(isinstance(x, str) for x in v):
                return list(v)
            logger.warning(f"{key} is not a non-empty list of strings, using default")
            return default

        def _str_dict(key: str, default: Dict[str, str]) -> Dict[str, str]:
            v = d.get(key)
            if v is None:
                return default
            if isinstance(v, dict):
                return {str(k): str(val) for k, val in v.items()}
            logger.warning(f"{key} is not a dict, using default")
            return default

        def _number(key: str, default: Union[int, float], cast: type) -> Any:
            if key not in d:
                return default
            try:
                v = cast(d[key])
            except (TypeError, ValueError):
                logger.warning(f"{key}={d[key]!r} is not a number, using default {default}")
                return default
            if v <= 0:
                logger.warning(f"{key}={v} must be positive, using default {default}")
                return default
            return v

        vital_options = _str_list("vital_options", defaults.vital_options)
        group_options = _str_list("group_options", defaults.group_options)

        default_vital = str(d.get("default_vital", defaults.default_vital))
        if default_vital not in vital_options:
            default_vital = vital_options[0]
        default_group = str(d.get("default_group", defaults.default_group))
        if default_group not in group_options:
            default_group = group_options[0]

        return cls(
            vital_options=vital_options,
            vital_labels=_str_dict("vital_labels", defaults.vital_labels),
            group_options=group_options,
            group_labels=_str_dict("group_labels", defaults.group_labels),
            default_vital=default_vital,
            default_group=default_group,
            bin_width=_number("bin_width", defaults.bin_width, float),
            chart_width=_number("chart_width", defaults.chart_width, int),
            chart_height=_number("chart_height", defaults.chart_height, int),
        )

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "VitalsChartConfig":
        """Load config from a JSON file; defaults when path is None, missing or unreadable."""
        if path is None:
            return cls()
        path = Path(path)
        if not path.exists():
            logger.info(f"No vitals chart config at {path}, using defaults")
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read vitals chart config {path}: {e}; using defaults")
            return cls()
        if not isinstance(data, dict):
            logger.warning(f"Vitals chart config {path} is not a JSON object, using defaults")
            return cls()
        return cls.from_dict(data)
