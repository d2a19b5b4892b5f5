from .ruler_slider_widget import RulerSliderWidget

__all__ = ['RulerSliderWidget']
