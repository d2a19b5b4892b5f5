import math

from PySide6.QtCore import QLineF, QPointF, QRectF, Qt
from PySide6.QtGui import QFont, QFontMetricsF, QPainter, QPen

from ruler_slider.config import RulerConfig
from ruler_slider.labels import compute_label_mapping
from .ticks import TickDescriptor, build_tick_descriptors, label_position


class TickRenderer:
    """Draws the visible part of a ruler with a QPainter.

    Tick x positions are shifted so that the tick at scroll offset `offset`
    sits in the horizontal centre of the widget.
    """

    def __init__(self, config: RulerConfig) -> None:
        self.config = config
        self.labels = compute_label_mapping(config)
        self.font = QFont()
        self.font.setPointSizeF(config.label_point_size)

    def visible_range(self, offset: float, widget_width: float) -> tuple[int, int]:
        """Tick index range [first, last) that can intersect the widget."""
        spacing = self.config.tick_spacing
        # One extra tick each side so rotated labels are not cut off abruptly
        first = math.floor((offset - widget_width / 2) / spacing) - 1
        last = math.ceil((offset + widget_width / 2) / spacing) + 2
        return max(0, first), min(self.config.tick_count, last)

    def draw_ruler(self, painter: QPainter, offset: float, widget_width: float) -> None:
        first, last = self.visible_range(offset, widget_width)
        shift = widget_width / 2 - offset

        painter.save()
        painter.translate(shift, 0)
        painter.setFont(self.font)
        metrics = QFontMetricsF(self.font)
        for tick in build_tick_descriptors(self.config, self.labels, first, last):
            self.draw_tick(painter, tick)
            if tick.show_label:
                self.draw_label(painter, tick, metrics)
        painter.restore()

    def draw_tick(self, painter: QPainter, tick: TickDescriptor) -> None:
        if tick.color.alpha() == 0:
            return
        painter.setPen(QPen(tick.color, tick.thickness))
        painter.drawLine(QLineF(tick.x, tick.line_top, tick.x, tick.line_bottom))

    def draw_label(self, painter: QPainter, tick: TickDescriptor, metrics: QFontMetricsF) -> None:
        width = metrics.horizontalAdvance(tick.label)
        height = metrics.height()
        left, top = label_position(tick, self.config, width, height)

        painter.setPen(QPen(self.config.label_color, 1))
        if abs(self.config.label_rotation) > 1e-6:
            painter.save()
            painter.translate(left + width / 2, top + height / 2)
            painter.rotate(self.config.label_rotation)
            painter.drawText(QRectF(-width / 2, -height / 2, width, height), Qt.AlignmentFlag.AlignCenter, tick.label)
            painter.restore()
        else:
            painter.drawText(QPointF(left, top + metrics.ascent()), tick.label)
