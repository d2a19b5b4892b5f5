from .ticks import TickDescriptor, build_tick_descriptors, label_position
from .painter import TickRenderer

__all__ = ["TickDescriptor", "build_tick_descriptors", "label_position", "TickRenderer"]
