"""Chart controller for the vitals comparison chart.

Provides VitalsChartController, the entry point for building the interactive
chart with NiceGUI: vital and grouping selectors, a clickable legend that
drives the SelectionState, the Plotly chart and a tooltip label. Every
trigger calls refresh(), which recomputes a ChartView from the raw samples
and pushes a new figure.
"""

from __future__ import annotations

from typing import Any, Optional

from nicegui import ui
from nicegui.events import GenericEventArguments

from nicevitals.utils.logging import get_logger
from nicevitals.vitals_chart.chart_config import VitalsChartConfig
from nicevitals.vitals_chart.chart_state import ChartState
from nicevitals.vitals_chart.chart_view import ChartView, build_chart_view
from nicevitals.vitals_chart.figure_generator import FigureGenerator, GroupColors
from nicevitals.vitals_chart.sample_store import SampleStore

logger = get_logger(__name__)

TOOLTIP_PLACEHOLDER = "Hover a line to see group statistics..."

# Legend entry opacity for visible / hidden groups
ACTIVE_OPACITY = 1.0
INACTIVE_OPACITY = 0.3


class VitalsChartController:
    """Controller for the interactive vitals chart with NiceGUI.

    **Public API:**

    - **__init__(store, ...)**: Configure with a SampleStore and optional config/state.
    - **build(container=None)**: Build the UI (selectors, legend, chart, tooltip).
    - **refresh()**: Recompute the ChartView and update the widgets.
    - **set_vital(signal)**, **set_group(group_col)**, **toggle_group(key)**: programmatic triggers.

    The controller works without build() (no widgets are touched), which
    keeps it usable headless.
    """

    def __init__(
        self,
        store: SampleStore,
        *,
        config: Optional[VitalsChartConfig] = None,
        state: Optional[ChartState] = None,
    ) -> None:
        """Initialize controller with samples and configuration.

        Args:
            store: Loaded samples.
            config: Selector options, labels and geometry. Defaults to VitalsChartConfig().
            state: Optional initial ChartState. Defaults to the config's
                default vital and group with show-all selection.
        """
        self.store = store
        self.config = config if config is not None else VitalsChartConfig()
        self.state = state if state is not None else ChartState(
            signal=self.config.default_vital,
            group_col=self.config.default_group,
            bin_width=self.config.bin_width,
        )
        self.colors = GroupColors()
        self.figure_generator = FigureGenerator(
            self.colors,
            width=self.config.chart_width,
            height=self.config.chart_height,
            signal_label=self.config.vital_label,
        )
        self.view: ChartView = self._recompute()
        self._figure: dict = {}

        # UI handles
        self._vital_select: Optional[ui.select] = None
        self._group_select: Optional[ui.select] = None
        self._legend_container: Optional[ui.row] = None
        self._plot: Optional[ui.plotly] = None
        self._tooltip_label: Optional[ui.label] = None

    # ----------------------------
    # State / recompute
    # ----------------------------

    def _recompute(self) -> ChartView:
        view = build_chart_view(self.store.df, self.state)
        self.state.last_domain = view.domain
        return view

    def refresh(self) -> None:
        """Recompute the view from current state and push it to the widgets."""
        self.view = self._recompute()
        self._figure = self.figure_generator.make_figure(self.view)
        if self._plot is not None:
            self._plot.update_figure(self._figure)
        self._rebuild_legend()
        self._set_tooltip(None)

    def set_vital(self, signal: str) -> None:
        if signal == self.state.signal:
            return
        logger.info(f"vital changed: {self.state.signal} -> {signal}")
        self.state.signal = signal
        self.refresh()

    def set_group(self, group_col: str) -> None:
        if group_col == self.state.group_col:
            return
        logger.info(f"group changed: {self.state.group_col} -> {group_col}")
        self.state.group_col = group_col
        self.refresh()

    def toggle_group(self, key: str) -> None:
        """Legend click: flip key in the active set and refresh."""
        self.state.selection.toggle(key)
        logger.info(f"toggled group {key!r}, active={self.state.selection.to_list()}")
        self.refresh()

    def tooltip_text(self, key: str, query_time: float) -> Optional[str]:
        return self.view.tooltip_for(key, query_time, self.config.vital_label(self.view.signal))

    # ----------------------------
    # Event handlers
    # ----------------------------

    def _on_vital_change(self, e: Any) -> None:
        if e.value:
            self.set_vital(str(e.value))

    def _on_group_change(self, e: Any) -> None:
        if e.value:
            self.set_group(str(e.value))

    def _key_for_curve(self, curve_number: int) -> Optional[str]:
        """Group key of the mean-line trace at curve_number, None for bands/unknown."""
        traces = self._figure.get("data", [])
        if not 0 <= curve_number < len(traces):
            return None
        meta = traces[curve_number].get("meta")
        if isinstance(meta, dict):
            return meta.get("key")
        return None

    def _on_hover(self, e: GenericEventArguments) -> None:
        """plotly_hover: map the hovered trace to its group and x to the nearest bin."""
        points = (e.args or {}).get("points") or []
        if not points:
            return
        point = points[0]
        key = self._key_for_curve(int(point.get("curveNumber", -1)))
        x = point.get("x")
        if key is None or x is None:
            return
        try:
            query_time = float(x)
        except (TypeError, ValueError):
            return
        self._set_tooltip(self.tooltip_text(key, query_time))

    def _on_unhover(self, e: GenericEventArguments) -> None:
        self._set_tooltip(None)

    def _set_tooltip(self, text: Optional[str]) -> None:
        if self._tooltip_label is not None:
            self._tooltip_label.text = text if text else TOOLTIP_PLACEHOLDER

    # ----------------------------
    # UI
    # ----------------------------

    def _rebuild_legend(self) -> None:
        if self._legend_container is None:
            return
        self._legend_container.clear()
        with self._legend_container:
            for key in self.view.keys:
                visible = self.state.selection.is_visible(key)
                opacity = ACTIVE_OPACITY if visible else INACTIVE_OPACITY
                color = self.colors(key)
                with ui.row().classes("items-center gap-1 cursor-pointer").style(
                    f"opacity: {opacity}"
                ).on("click", lambda _e, k=key: self.toggle_group(k)):
                    ui.element("div").style(
                        f"width: 12px; height: 12px; background-color: {color}; border-radius: 2px"
                    )
                    ui.label(key)

    def build(self, *, container: Optional[ui.element] = None) -> None:
        """Build the chart UI. Call once to render.

        Args:
            container: Optional NiceGUI container to build into. If None, widgets
                are created at the current top level.
        """
        def _build_content() -> None:
            with ui.column().classes("w-full gap-2"):
                with ui.row().classes("w-full items-center gap-4"):
                    self._vital_select = ui.select(
                        options={v: self.config.vital_label(v) for v in self.config.vital_options},
                        value=self.state.signal,
                        label="Vital",
                        on_change=self._on_vital_change,
                    ).classes("w-40")
                    self._group_select = ui.select(
                        options={g: self.config.group_label(g) for g in self.config.group_options},
                        value=self.state.group_col,
                        label="Group by",
                        on_change=self._on_group_change,
                    ).classes("w-48")
                    ui.button("Show all", on_click=self._on_show_all).classes("text-sm")
                self._legend_container = ui.row().classes("w-full items-center gap-4 flex-wrap")
                self._figure = self.figure_generator.make_figure(self.view)
                self._plot = ui.plotly(self._figure).classes("w-full")
                self._plot.on("plotly_hover", self._on_hover)
                self._plot.on("plotly_unhover", self._on_unhover)
                self._tooltip_label = ui.label(TOOLTIP_PLACEHOLDER).classes(
                    "text-sm whitespace-pre font-mono"
                )
            self._rebuild_legend()

        if container is not None:
            with container:
                _build_content()
        else:
            _build_content()

    def _on_show_all(self) -> None:
        if not self.state.selection.is_filtered:
            return
        self.state.selection.clear()
        logger.info("selection cleared, showing all groups")
        self.refresh()
