"""Ruler slider public API."""
import logging

from .config import RulerConfig, TickStyle, TicksAlignment, LabelAlignment, ConfigurationError, DEFAULT_RULER_CONFIG, midpoints
from .colors.modes import ColorMap
from .rulers import TickRuler, value_for_offset, offset_for_value, nearest_tick_index
from .labels import normalize_labels, compute_label_mapping
from .interaction.session import ScrollSession, ScrollState
from .interaction.snap import SnapPhase, SnapScheduler
from .renderers import TickDescriptor, TickRenderer, build_tick_descriptors
from .widgets import RulerSliderWidget

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "RulerConfig",
    "TickStyle",
    "TicksAlignment",
    "LabelAlignment",
    "ConfigurationError",
    "DEFAULT_RULER_CONFIG",
    "midpoints",
    "ColorMap",
    "TickRuler",
    "value_for_offset",
    "offset_for_value",
    "nearest_tick_index",
    "normalize_labels",
    "compute_label_mapping",
    "ScrollSession",
    "ScrollState",
    "SnapPhase",
    "SnapScheduler",
    "TickDescriptor",
    "TickRenderer",
    "build_tick_descriptors",
    "RulerSliderWidget",
]
