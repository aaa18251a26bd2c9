"""Headless tests for VitalsChartController triggers (no build())."""

from types import SimpleNamespace

import pytest

from nicevitals.vitals_chart.chart_config import VitalsChartConfig
from nicevitals.vitals_chart.sample_store import SampleStore
from nicevitals.vitals_chart.vitals_chart_controller import TOOLTIP_PLACEHOLDER, VitalsChartController


@pytest.fixture
def controller(vitals_df):
    return VitalsChartController(SampleStore(vitals_df), config=VitalsChartConfig())


def test_initial_view_uses_config_defaults(controller):
    assert controller.state.signal == "map"
    assert controller.state.group_col == "optype"
    assert controller.view.keys == ["Colorectal", "Stomach"]
    assert controller.state.last_domain == controller.view.domain


def test_set_vital_and_group_recompute(controller):
    controller.set_vital("hr")
    assert controller.view.signal == "hr"
    controller.set_group("emop")
    assert controller.view.keys == ["False", "True"]


def test_toggle_group_updates_visible_series(controller):
    controller.toggle_group("Stomach")
    assert [s.key for s in controller.view.visible_series] == ["Stomach"]
    controller.toggle_group("Stomach")
    assert [s.key for s in controller.view.visible_series] == ["Colorectal", "Stomach"]


def test_hidden_everything_keeps_last_domain(controller):
    controller.toggle_group("Stomach")
    domain = controller.view.domain
    controller.set_group("emop")  # 'Stomach' is now stale, nothing visible
    assert controller.view.visible_series == ()
    assert controller.view.domain == domain


def test_hover_maps_curve_to_group_and_nearest_bin(controller):
    controller.refresh()
    data = controller._figure["data"]
    curve = next(i for i, t in enumerate(data) if (t.get("meta") or {}).get("key") == "Stomach")
    controller._tooltip_label = SimpleNamespace(text="")
    controller._on_hover(SimpleNamespace(args={"points": [{"curveNumber": curve, "x": 0.26}]}))
    text = controller._tooltip_label.text
    assert "Group: Stomach" in text
    assert "Time: 25%" in text
    assert "Vital: MAP" in text

    controller._on_unhover(SimpleNamespace(args={}))
    assert controller._tooltip_label.text == TOOLTIP_PLACEHOLDER


def test_hover_on_band_leaves_tooltip_unchanged(controller):
    controller.refresh()
    controller._tooltip_label = SimpleNamespace(text="")
    controller._on_hover(SimpleNamespace(args={"points": [{"curveNumber": 0, "x": 0.5}]}))
    assert controller._tooltip_label.text == ""
    controller._on_hover(SimpleNamespace(args={"points": []}))
    assert controller._tooltip_label.text == ""


def test_switch_to_signal_without_samples_draws_no_zones(vitals_df):
    store = SampleStore(vitals_df[vitals_df["signal"] != "spo2"])
    controller = VitalsChartController(store, config=VitalsChartConfig())
    map_domain = controller.view.domain

    controller.set_vital("spo2")
    assert controller.view.is_empty
    assert controller.view.domain == map_domain
    assert controller.view.zones == ()
    assert not controller._figure["layout"].get("shapes")


def test_key_for_curve_ignores_bands_and_out_of_range(controller):
    controller.refresh()
    assert controller._key_for_curve(0) is None  # SD band
    assert controller._key_for_curve(99) is None
