from typing import Literal, Optional
from PySide6.QtGui import QColor


ObjectColorName = Literal["surface-base"]
AccentColorName = Literal["red"]


class ColorMap:

    # Neutral color level map for light & dark mode
    _neutral_levels: dict[str, list[QColor]] = {
        "neutral-0": [QColor(255, 255, 255), QColor(0, 0, 0)],
        "neutral-50": [QColor(246, 247, 249), QColor(20, 24, 31)],
    }

    # Accent colors for light & dark mode (default indicator)
    _accents: dict[str, list[QColor]] = {
        "red": [QColor(229, 57, 53), QColor(239, 83, 80)],
    }

    def __init__(self, darkmode: bool = False) -> None:
        """Create color map. darkmode=True for dark theme, False for light theme."""
        self.darkmode: bool = darkmode

    def get_object_color(self, name: ObjectColorName, darkmode: Optional[bool] = None) -> QColor:
        """Get UI surface color. Uses instance darkmode if not specified."""
        surface_colors = {
            "surface-base": ["neutral-0", "neutral-50"],
        }
        level = surface_colors[name][self._mode_loc(darkmode)]
        return ColorMap._neutral_levels[level][self._mode_loc(darkmode)]

    def get_accent_color(self, name: AccentColorName, darkmode: Optional[bool] = None) -> QColor:
        """Get accent color. Uses instance darkmode if not specified."""
        return ColorMap._accents[name][self._mode_loc(darkmode)]

    def _mode_loc(self, darkmode: Optional[bool]) -> int:
        if darkmode is None:
            darkmode = self.darkmode
        return 1 if darkmode else 0
