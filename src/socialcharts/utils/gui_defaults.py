"""Set up default classes and props for the NiceGUI elements used by the dashboard."""

from __future__ import annotations

from nicegui import ui

from socialcharts.utils.logging import get_logger

logger = get_logger(__name__)

# map tailwind to quasar size
_QUASAR_SIZES = {
    "text-xs": "xs",
    "text-sm": "sm",
    "text-base": "md",
    "text-lg": "lg",
}


def setUpGuiDefaults(text_size: str = "text-base") -> None:
    """Set up default classes and props for labels and tables.

    Args:
        text_size: Tailwind CSS text size class (e.g., 'text-xs', 'text-sm',
                   'text-base', 'text-lg'). Defaults to 'text-base'.

    Raises:
        KeyError: If text_size is not one of the supported classes.
    """
    text_size_quasar = _QUASAR_SIZES[text_size]

    logger.debug(f'using classes text_size:"{text_size}" text_size_quasar:{text_size_quasar}')

    ui.label.default_classes(f"{text_size} select-text")  #  select-text allows double-click selection
    ui.label.default_props("dense")
    #
    ui.table.default_classes(text_size)
    ui.table.default_props("dense flat bordered")
