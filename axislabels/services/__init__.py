"""Axis label layout services."""

from .measure_service import MonospaceTextMeasurer, PillowTextMeasurer, TextMeasurer
from .overlap_service import OverlapDecision, OverlapFilter, filter_labels
from .pipeline_service import AxisLabelPipeline, AxisLabels, build_tick_labels, visible_labels
from .rotation_service import rotate_label, rotate_labels
from .truncation_service import truncate_label, truncate_labels, truncate_text

__all__ = [
    "MonospaceTextMeasurer",
    "PillowTextMeasurer",
    "TextMeasurer",
    "OverlapDecision",
    "OverlapFilter",
    "filter_labels",
    "AxisLabelPipeline",
    "AxisLabels",
    "build_tick_labels",
    "visible_labels",
    "rotate_label",
    "rotate_labels",
    "truncate_label",
    "truncate_labels",
    "truncate_text",
]
