from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np
from PySide6.QtGui import QColor

from ruler_slider.config import LabelAlignment, RulerConfig, TicksAlignment
from ruler_slider.labels import compute_label_mapping


@dataclass(frozen=True)
class TickDescriptor:
    """Everything a renderer needs to draw one tick and its label.

    Coordinates are in content space: x is the distance from the first tick,
    y runs from 0 (top of the ruler) to viewport_height.
    """
    tick_index: int
    value: int
    is_major: bool
    is_matched: bool
    show_label: bool
    label: str

    x: float
    line_top: float
    line_bottom: float
    thickness: float
    color: QColor

    # Extent of a major tick at this position; labels are placed against it
    major_top: float
    major_bottom: float


def _vertical_extent(length: float, height: float, alignment: TicksAlignment) -> Tuple[float, float]:
    if alignment == TicksAlignment.TOP:
        return 0.0, length
    if alignment == TicksAlignment.BOTTOM:
        return height - length, height
    center = height / 2
    return center - length / 2, center + length / 2


def build_tick_descriptors(config: RulerConfig, labels: Optional[Dict[int, str]] = None,
                           start: int = 0, stop: Optional[int] = None) -> List[TickDescriptor]:
    """Describe ticks [start, stop) of the ruler, all ticks by default.

    labels maps tick index -> custom label; it is computed from the config
    when not given. Ticks without an entry use their value as label.
    """
    if labels is None:
        labels = compute_label_mapping(config)
    stop = config.tick_count if stop is None else min(stop, config.tick_count)
    start = max(0, start)
    if start >= stop:
        return []

    style = config.tick_style
    height = config.viewport_height

    indices = np.arange(start, stop)
    values = indices + config.min_value
    majors = indices % config.interval == 0
    matched = np.isin(values, list(config.match_values)) if config.match_values else np.zeros(len(indices), dtype=bool)
    show_label = (majors | config.show_sub_labels) & config.show_labels

    major_top, major_bottom = _vertical_extent(style.major_height, height, config.ticks_alignment)

    descriptors = []
    for index, value, is_major, is_matched, has_label in zip(
        indices.tolist(), values.tolist(), majors.tolist(), matched.tolist(), show_label.tolist()
    ):
        if is_matched:
            length, thickness, color = style.match_height, style.match_thickness, style.match_color
        elif is_major:
            length, thickness, color = style.major_height, style.major_thickness, style.major_color
        else:
            length, thickness, color = style.minor_height, style.minor_thickness, style.minor_color
        top, bottom = _vertical_extent(length, height, config.ticks_alignment)

        descriptors.append(TickDescriptor(
            tick_index=index,
            value=value,
            is_major=is_major,
            is_matched=is_matched,
            show_label=has_label,
            label=labels.get(index, str(value)),
            x=index * config.tick_spacing,
            line_top=top,
            line_bottom=bottom,
            thickness=thickness,
            color=color,
            major_top=major_top,
            major_bottom=major_bottom,
        ))
    return descriptors


def label_position(tick: TickDescriptor, config: RulerConfig, text_width: float,
                   text_height: float) -> Tuple[float, float]:
    """Top-left corner of the (unrotated) label box for tick."""
    left = tick.x - text_width / 2
    if config.label_alignment == LabelAlignment.TOP:
        top = tick.major_top - config.label_spacing - text_height
    else:
        top = tick.major_bottom + config.label_spacing
    return left, top
