"""Tick label layout for chart axes: truncation, rotation and overlap filtering."""

from .models import AxisConfig, AxisPosition, AxisRegion, LabelSettings, TextAnchor, TickLabel
from .scales import BandScale, LinearScale
from .services import AxisLabelPipeline, AxisLabels, MonospaceTextMeasurer, PillowTextMeasurer

__version__ = "0.1.0"

__all__ = [
    "AxisConfig",
    "AxisPosition",
    "AxisRegion",
    "LabelSettings",
    "TextAnchor",
    "TickLabel",
    "BandScale",
    "LinearScale",
    "AxisLabelPipeline",
    "AxisLabels",
    "MonospaceTextMeasurer",
    "PillowTextMeasurer",
]
