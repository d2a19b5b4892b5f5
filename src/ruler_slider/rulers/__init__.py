from .tick import TickRuler, value_for_offset, offset_for_value, nearest_tick_index, round_half_away

__all__ = ["TickRuler", "value_for_offset", "offset_for_value", "nearest_tick_index", "round_half_away"]
