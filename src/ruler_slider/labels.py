"""Label selection for ruler ticks.

Only some ticks carry a label: the major ticks, or every tick when sub labels
are enabled. Custom labels supplied by the caller are normalized against the
labels the ruler would generate itself, so that the n-th custom label always
lands on the n-th eligible tick.
"""
import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

from ruler_slider.config import RulerConfig

log = logging.getLogger(__name__)


def label_tick_indices(config: RulerConfig) -> List[int]:
    """Indices of the ticks that show a label, in ascending order."""
    if not config.show_labels:
        return []
    indices = np.arange(config.tick_count)
    if not config.show_sub_labels:
        indices = indices[indices % config.interval == 0]
    return indices.tolist()


def generated_labels(config: RulerConfig, indices: Optional[Sequence[int]] = None) -> List[str]:
    """Default labels (the tick value as text) for the eligible ticks."""
    if indices is None:
        indices = label_tick_indices(config)
    return [str(config.min_value + i) for i in indices]


def normalize_labels(generated: Sequence[str], custom: Optional[Sequence[str]]) -> List[str]:
    """Fit custom labels to the length of the generated labels.

    Returns an empty list when no custom labels are given. Longer lists are
    cut at the end. Shorter lists are completed with the tail of the
    generated labels, in ascending order, skipping a generated label equal
    to the last custom one.
    """
    if not custom:
        return []

    desired = len(generated)
    normalized = list(custom)

    if len(normalized) > desired:
        return normalized[:desired]

    if len(normalized) < desired:
        tail: List[str] = []
        gi = len(generated) - 1
        while len(normalized) + len(tail) < desired and gi >= 0:
            candidate = generated[gi]
            if candidate != normalized[-1]:
                tail.append(candidate)
            gi -= 1
        normalized.extend(reversed(tail))

        if len(normalized) < desired:
            log.warning("custom labels still short after tail fill (%d of %d), padding from the start",
                        len(normalized), desired)
            si = 0
            while len(normalized) < desired and si < len(generated):
                normalized.append(generated[si])
                si += 1

    return normalized


def compute_label_mapping(config: RulerConfig) -> Dict[int, str]:
    """Map eligible tick index -> custom label.

    Ticks missing from the mapping fall back to their generated label.
    """
    indices = label_tick_indices(config)
    if not indices:
        return {}
    normalized = normalize_labels(generated_labels(config, indices), config.custom_labels)
    return dict(zip(indices, normalized))
