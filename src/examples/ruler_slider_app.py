import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QLabel, QMainWindow, QVBoxLayout, QWidget

from ruler_slider.colors.modes import ColorMap
from ruler_slider.config import RulerConfig, TickStyle, midpoints
from ruler_slider.widgets import RulerSliderWidget


class RulerWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("Ruler Slider")
        self.color_map = ColorMap(darkmode=False)

        config = RulerConfig(
            min_value=20,
            max_value=100,
            initial_value=36,
            viewport_width=300,
            interval=10,
            smaller_interval=10,
            tick_spacing=20,
            snapping=True,
            label_spacing=6,
            match_values=list(midpoints(20, 100, 10)),
            tick_style=TickStyle(
                major_height=30,
                minor_height=15,
                major_thickness=2,
                minor_thickness=1,
                match_color=QColor(Qt.GlobalColor.transparent),
            ),
        )

        self.value_label = QLabel()
        self.value_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.ruler_widget = RulerSliderWidget(config, self.color_map, on_value_changed=self.show_value)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.addWidget(self.ruler_widget, alignment=Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.value_label)
        self.setCentralWidget(central)

    def show_value(self, value):
        self.value_label.setText(f"Selected: {value:.1f}")


if __name__ == "__main__":
    import sys
    from PySide6.QtWidgets import QApplication
    logging.basicConfig(level=logging.DEBUG, format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    app = QApplication(sys.argv)
    window = RulerWindow()
    window.show()
    sys.exit(app.exec())
