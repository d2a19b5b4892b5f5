import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Tuple

from PySide6.QtCore import QEasingCurve, Qt
from PySide6.QtGui import QColor


class ConfigurationError(ValueError):
    """Raised when a ruler configuration can not describe a valid ruler."""


class TicksAlignment(Enum):
    """Vertical anchor of tick lines inside the ruler."""
    CENTER = "center"
    TOP = "top"
    BOTTOM = "bottom"


class LabelAlignment(Enum):
    """Side of the major tick the labels are placed on."""
    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class TickStyle:
    """Heights, thicknesses and colors per tick category.

    Matched ticks (values listed in RulerConfig.match_values) take precedence
    over the major/minor styling.
    """
    major_height: float = 30.0
    minor_height: float = 15.0
    match_height: float = 15.0

    major_thickness: float = 1.2
    minor_thickness: float = 1.2
    match_thickness: float = 1.2

    major_color: QColor = field(default_factory=lambda: QColor(Qt.GlobalColor.black))
    minor_color: QColor = field(default_factory=lambda: QColor(Qt.GlobalColor.black))
    match_color: QColor = field(default_factory=lambda: QColor(Qt.GlobalColor.transparent))


@dataclass(frozen=True)
class RulerConfig:
    """Immutable description of one ruler slider.

    Example:
        config = RulerConfig(min_value=20, max_value=100, initial_value=36,
                             viewport_width=300, snapping=True)

    Lists given for match_values and custom_labels are stored as a frozenset
    and a tuple. Invalid combinations raise ConfigurationError.
    """

    # Range
    min_value: int = 0
    max_value: int = 100
    initial_value: int = 0

    # Geometry
    viewport_width: float = 300.0
    viewport_height: float = 100.0
    interval: int = 10
    smaller_interval: int = 10
    tick_spacing: float = 20.0

    # Snapping
    snapping: bool = False
    snap_debounce_ms: int = 100
    snap_duration_ms: int = 200
    snap_curve: QEasingCurve.Type = QEasingCurve.Type.Linear

    # Highlighted ticks and labels
    match_values: FrozenSet[int] = frozenset()
    custom_labels: Optional[Tuple[str, ...]] = None
    show_labels: bool = True
    show_sub_labels: bool = False
    label_spacing: float = 4.0
    label_rotation: float = 0.0  # degrees, clockwise
    label_alignment: LabelAlignment = LabelAlignment.BOTTOM
    label_color: QColor = field(default_factory=lambda: QColor(Qt.GlobalColor.black))
    label_point_size: float = 12.0

    tick_style: TickStyle = field(default_factory=TickStyle)
    ticks_alignment: TicksAlignment = TicksAlignment.CENTER

    def __post_init__(self) -> None:
        object.__setattr__(self, "match_values", frozenset(int(v) for v in self.match_values or ()))
        if self.custom_labels is not None:
            object.__setattr__(self, "custom_labels", tuple(str(label) for label in self.custom_labels))
        self._validate()

    def _validate(self) -> None:
        if self.min_value >= self.max_value:
            raise ConfigurationError(f"min_value ({self.min_value}) must be less than max_value ({self.max_value})")
        if not self.min_value <= self.initial_value <= self.max_value:
            raise ConfigurationError(
                f"initial_value ({self.initial_value}) must lie in [{self.min_value}, {self.max_value}]"
            )
        if self.interval <= 0:
            raise ConfigurationError(f"interval must be positive, got {self.interval}")
        if self.smaller_interval <= 0:
            raise ConfigurationError(f"smaller_interval must be positive, got {self.smaller_interval}")
        if self.tick_spacing <= 0:
            raise ConfigurationError(f"tick_spacing must be positive, got {self.tick_spacing}")
        if self.viewport_width <= 0 or self.viewport_height <= 0:
            raise ConfigurationError(
                f"viewport size must be positive, got {self.viewport_width}x{self.viewport_height}"
            )
        if self.snap_debounce_ms < 0 or self.snap_duration_ms < 0:
            raise ConfigurationError("snap durations can not be negative")

    @property
    def tick_count(self) -> int:
        """Number of integer ticks, both ends included."""
        return self.max_value - self.min_value + 1

    def replace(self, **changes) -> "RulerConfig":
        """Return a validated copy with the given fields changed."""
        return dataclasses.replace(self, **changes)


def midpoints(min_value: int, max_value: int, interval: int) -> Iterable[int]:
    """Yield the rounded midpoint of every full interval, handy as match_values."""
    start = min_value
    while start + interval <= max_value:
        end = start + interval
        total = start + end
        # halves round away from zero
        yield (total + 1) // 2 if total >= 0 else -((1 - total) // 2)
        start = end


DEFAULT_RULER_CONFIG = RulerConfig()
