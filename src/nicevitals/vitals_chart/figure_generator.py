"""Plotly figure generation for the vitals chart.

This module provides the FigureGenerator class for creating Plotly figure
dictionaries from a ChartView, separating figure generation from the
UI/controller concerns.
"""

from __future__ import annotations

from typing import Callable, Optional

import plotly.graph_objects as go
from plotly.colors import qualitative

from nicevitals.utils.logging import get_logger
from nicevitals.vitals_chart.chart_view import ChartView
from nicevitals.vitals_chart.query_engine import format_tooltip

logger = get_logger(__name__)

# d3 category10, same order as d3.schemeCategory10
GROUP_PALETTE: list[str] = list(qualitative.D3)

ZONE_FILL = {
    "danger": "rgba(214, 39, 40, 0.12)",
    "caution": "rgba(255, 127, 14, 0.12)",
}
DEFAULT_ZONE_FILL = "rgba(127, 127, 127, 0.10)"

X_AXIS_TITLE = "Progress Through Surgery"
Y_AXIS_TITLE = "Vital Value"


def _hex_to_rgba(color: str, alpha: float) -> str:
    """'#1f77b4' -> 'rgba(31, 119, 180, alpha)'; other formats returned unchanged."""
    if not color.startswith("#") or len(color) != 7:
        return color
    r, g, b = (int(color[i:i + 2], 16) for i in (1, 3, 5))
    return f"rgba({r}, {g}, {b}, {alpha})"


class GroupColors:
    """Stable group key -> color assignment.

    Keys get palette colors in first-seen order and keep them for the life of
    the instance, so a group does not change color when other groups are
    hidden or the vital changes. The palette cycles once exhausted.
    """

    def __init__(self, palette: Optional[list[str]] = None) -> None:
        self._palette = list(palette) if palette else list(GROUP_PALETTE)
        self._assigned: dict[str, str] = {}

    def __call__(self, key: str) -> str:
        key = str(key)
        if key not in self._assigned:
            self._assigned[key] = self._palette[len(self._assigned) % len(self._palette)]
        return self._assigned[key]


class FigureGenerator:
    """Generates Plotly figure dictionaries from a ChartView.

    Each visible series is drawn as a translucent mean ± SD band plus a mean
    line; clinical zones become background rectangles in layout.shapes.

    Attributes:
        colors: GroupColors used for lines, bands and the legend.
        width: Figure width in pixels.
        height: Figure height in pixels.
    """

    def __init__(
        self,
        colors: Optional[GroupColors] = None,
        *,
        width: int = 1100,
        height: int = 400,
        signal_label: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.colors = colors if colors is not None else GroupColors()
        self.width = width
        self.height = height
        self._signal_label = signal_label or (lambda s: s.upper())

    def make_figure(self, view: ChartView) -> dict:
        """Generate Plotly figure dictionary for a ChartView.

        Args:
            view: Snapshot from build_chart_view().

        Returns:
            Plotly figure dictionary. Trace `name` is the group key; the mean
            line of each group carries `meta={"key": key}`.
        """
        fig = go.Figure()
        signal_label = self._signal_label(view.signal)

        for s in view.visible_series:
            color = self.colors(s.key)
            xs = [b.norm_time for b in s.bins]
            means = [b.mean for b in s.bins]
            upper = [b.mean + (b.sd or 0.0) for b in s.bins]
            lower = [b.mean - (b.sd or 0.0) for b in s.bins]

            fig.add_trace(go.Scatter(
                x=xs + xs[::-1],
                y=upper + lower[::-1],
                fill="toself",
                fillcolor=_hex_to_rgba(color, 0.15),
                line=dict(width=0),
                hoverinfo="skip",
                showlegend=False,
                name=f"{s.key} ± SD",
            ))
            hover = [
                format_tooltip(signal_label, s.key, b, view.threshold_pct(s.key)).replace("\n", "<br>")
                for b in s.bins
            ]
            fig.add_trace(go.Scatter(
                x=xs,
                y=means,
                mode="lines",
                line=dict(color=color, width=2, shape="spline"),
                name=s.key,
                meta={"key": s.key},
                hovertext=hover,
                hoverinfo="text",
                showlegend=False,
            ))

        for z in view.zones:
            fig.add_shape(
                type="rect",
                xref="x",
                yref="y",
                x0=0.0,
                x1=1.0,
                y0=z.min,
                y1=z.max,
                fillcolor=ZONE_FILL.get(z.color_tag, DEFAULT_ZONE_FILL),
                line=dict(width=0),
                layer="below",
                name=z.label,
            )

        if view.is_empty:
            fig.add_annotation(
                text="No data",
                xref="paper",
                yref="paper",
                x=0.5,
                y=0.5,
                showarrow=False,
            )

        fig.update_layout(
            width=self.width,
            height=self.height,
            margin=dict(l=60, r=40, t=50, b=50),
            xaxis=dict(title=X_AXIS_TITLE, range=[0.0, 1.0], tickformat=".0%"),
            yaxis=dict(title=Y_AXIS_TITLE, range=list(view.domain)),
            hovermode="closest",
            showlegend=False,
            uirevision="keep",
        )
        logger.debug(f"Figure generated: {len(fig.data)} traces, {len(view.zones)} zones")
        return fig.to_dict()
