"""Global configuration and constants for the sorting / filtering engine."""

from __future__ import annotations

import os
from typing import Final

# Filter toggle names (keys of FilterCriteria.toggles)
FILTER_CHANNEL_INDEPENDENT: Final = "filter_cbx_chan_indep"
FILTER_CHANNEL_PREFIX: Final = "filter_cbx_single_"
FILTER_NODE: Final = "filter_cbx_node"
FILTER_LIMIT_TICKS: Final = "filter_cbx_limit_ticks"
FILTER_LIMIT_TRACKS: Final = "filter_cbx_limit_tracks"

CHANNEL_COUNT: Final = 16

# Row field keys understood by the dimension catalogue
FIELD_CHANNEL: Final = "channel"
FIELD_TICK: Final = "tick"
FIELD_TRACK: Final = "track"
FIELD_WARNING: Final = "warning"
FIELD_LEAF_NODE: Final = "leaf_node"
CATEGORY_KEY: Final = "category"

# Ordinal used for cells that are not a valid number (sorts first)
NON_NUMERIC_ORDINAL: Final = -1

ROW_TEXT_SEPARATOR: Final = "\t"

# Export warning kinds
WARNING_IGNORED_SHORT_MESSAGE: Final = "ignored_short_message"
WARNING_IGNORED_META_MESSAGE: Final = "ignored_meta_message"
WARNING_IGNORED_SYSEX_MESSAGE: Final = "ignored_sysex_message"
WARNING_REST_SKIPPED: Final = "rest_skipped"
WARNING_OFF_NOT_FOUND: Final = "off_not_found"

KNOWN_WARNINGS: Final = (
    WARNING_IGNORED_SHORT_MESSAGE,
    WARNING_IGNORED_META_MESSAGE,
    WARNING_IGNORED_SYSEX_MESSAGE,
    WARNING_REST_SKIPPED,
    WARNING_OFF_NOT_FOUND,
)

LOG_LEVEL: Final = os.environ.get("TABLESORTER_LOG_LEVEL", "WARNING").upper()


def channel_toggle(channel: int) -> str:
    """Toggle name enabling a single channel."""
    return f"{FILTER_CHANNEL_PREFIX}{channel}"
