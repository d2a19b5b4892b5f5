import math

from ruler_slider.config import RulerConfig


def round_half_away(x: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    if x < 0:
        return -int(math.floor(-x + 0.5))
    return int(math.floor(x + 0.5))


class TickRuler:
    """Maps scroll offsets to ruler values for one RulerConfig.

    Content space starts at offset 0 (first tick under the indicator) and ends
    at max_scroll_extent (last tick under the indicator). Integer ticks are
    tick_spacing pixels apart and each is split into smaller_interval sub-steps.
    """

    def __init__(self, config: RulerConfig) -> None:
        self.config = config
        self.tick_count = config.tick_count
        self.max_scroll_extent = (self.tick_count - 1) * config.tick_spacing
        self.px_per_sub_step = config.tick_spacing / config.smaller_interval

    def clamp_offset(self, offset: float) -> float:
        return max(0.0, min(float(offset), self.max_scroll_extent))

    def get_value_at(self, offset: float) -> float:
        """Convert scroll offset to a value, at sub-step resolution."""
        cfg = self.config
        # Round the sub-step count, not the final float, so values never drift.
        sub_steps = round_half_away(offset / self.px_per_sub_step)
        value = cfg.min_value + sub_steps / cfg.smaller_interval
        return max(float(cfg.min_value), min(value, float(cfg.max_value)))

    def transform(self, value: float) -> float:
        """Convert a tick value to its scroll offset."""
        return (value - self.config.min_value) * self.config.tick_spacing

    def get_tick_at(self, offset: float) -> int:
        """Index of the tick nearest to offset, clamped to [0, tick_count)."""
        index = round_half_away(offset / self.config.tick_spacing)
        return max(0, min(index, self.tick_count - 1))

    def value_of_tick(self, tick_index: int) -> int:
        return self.config.min_value + tick_index


def value_for_offset(offset: float, config: RulerConfig) -> float:
    return TickRuler(config).get_value_at(offset)


def offset_for_value(value: float, config: RulerConfig) -> float:
    return TickRuler(config).transform(value)


def nearest_tick_index(offset: float, config: RulerConfig) -> int:
    return TickRuler(config).get_tick_at(offset)
