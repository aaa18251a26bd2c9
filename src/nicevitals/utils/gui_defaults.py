"""Set up default classes and props for NiceGUI widgets used by the vitals chart."""

from __future__ import annotations

from nicegui import ui

from nicevitals.utils.logging import get_logger

logger = get_logger(__name__)


def setUpGuiDefaults(text_size: str = 'text-base'):
    """Set up default classes and props for the ui elements the chart uses.

    Args:
        text_size: Tailwind CSS text size class ('text-xs', 'text-sm',
                   'text-base', 'text-lg'). Defaults to 'text-base'.
    """
    # map tailwind to quasar size
    text_size_quasar = {
        "text-xs": "xs",
        "text-sm": "sm",
        "text-base": "md",
        "text-lg": "lg",
    }[text_size]

    logger.debug(f'using classes text_size:"{text_size}" text_size_quasar:{text_size_quasar}')

    ui.label.default_classes(f"{text_size} select-text")  # select-text allows double-click selection
    ui.label.default_props("dense")
    #
    ui.button.default_classes(text_size)
    ui.button.default_props(f"dense size={text_size_quasar}")
    #
    ui.select.default_classes(text_size)
    ui.select.default_props("dense")
