"""Data models for axis label layout."""

from .axis import (
    AxisConfig,
    AxisPosition,
    AxisRegion,
    AxisSpec,
    LabelSettings,
    ScaleSpec,
    TextAnchor,
)
from .label import LabelSize, RotationTransform, TickLabel

__all__ = [
    "AxisConfig",
    "AxisPosition",
    "AxisRegion",
    "AxisSpec",
    "LabelSettings",
    "ScaleSpec",
    "TextAnchor",
    "LabelSize",
    "RotationTransform",
    "TickLabel",
]
