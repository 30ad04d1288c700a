"""Axis label pipeline: visibility, font size, truncation, rotation, overlap filter."""

import logging
from dataclasses import replace
from typing import Any, Callable, Iterable, Optional, Sequence

from ..models.axis import AxisConfig, AxisPosition, TextAnchor
from ..models.label import TickLabel
from ..scales import Scale
from .measure_service import TextMeasurer
from .overlap_service import filter_labels
from .rotation_service import rotate_labels
from .truncation_service import truncate_labels

logger = logging.getLogger(__name__)

# Distance from the axis line to the label's attachment point (tick size 6 + padding 3)
TICK_LABEL_OFFSET = 9.0

# Anchor a freshly created label starts with, per axis side
DEFAULT_ANCHORS = {
    AxisPosition.TOP: TextAnchor.MIDDLE,
    AxisPosition.BOTTOM: TextAnchor.MIDDLE,
    AxisPosition.LEFT: TextAnchor.END,
    AxisPosition.RIGHT: TextAnchor.START,
}


def build_tick_labels(
    scale: Scale,
    position: AxisPosition = AxisPosition.BOTTOM,
    values: Optional[Sequence[Any]] = None,
    count: int = 10,
    formatter: Optional[Callable[[Any], str]] = None,
) -> list[TickLabel]:
    """Create fresh labels for a scale's ticks.

    Args:
        scale: Scale providing pixel positions (and ticks when ``values`` is None).
        position: Axis side, which sets attachment coordinates and default anchor.
        values: Explicit tick values in scale order; defaults to ``scale.ticks(count)``.
        count: Approximate tick count when ticks come from the scale.
        formatter: Optional value-to-text function; defaults to the scale's formatting.

    Returns:
        Labels in scale order, unmeasured.
    """
    values = list(values) if values is not None else scale.ticks(count)
    texts = [formatter(v) for v in values] if formatter else scale.tick_labels(values)
    band_offset = getattr(scale, "bandwidth", 0.0) / 2
    anchor = DEFAULT_ANCHORS[position]

    labels: list[TickLabel] = []
    for value, text in zip(values, texts):
        pixel = scale(value)
        along = pixel + band_offset
        if position == AxisPosition.BOTTOM:
            x, y = along, TICK_LABEL_OFFSET
        elif position == AxisPosition.TOP:
            x, y = along, -TICK_LABEL_OFFSET
        elif position == AxisPosition.LEFT:
            x, y = -TICK_LABEL_OFFSET, along
        else:
            x, y = TICK_LABEL_OFFSET, along
        labels.append(TickLabel(value=value, text=text, position=pixel, x=x, y=y, anchor=anchor))
    return labels


class AxisLabelPipeline:
    """Runs the label stages in their fixed order for one render pass.

    Rotation pivots depend on the truncated text's size, and the overlap
    filter depends on each label's final truncated and rotated size, so the
    order is not configurable.

    Args:
        measurer: Text measurement port shared by the stages.
    """

    def __init__(self, measurer: TextMeasurer):
        self.measurer = measurer

    def render(
        self,
        tick_labels: Iterable[TickLabel],
        config: AxisConfig,
        scale: Scale,
    ) -> list[TickLabel]:
        """Lay out one axis' labels.

        When labels are switched off the whole group is marked
        non-displayed, but truncation, rotation and filtering still run so
        the label records stay complete.

        Returns:
            The same labels, in the same order, with final text, size,
            rotation, style and visibility.
        """
        settings = config.labels
        labels = [
            replace(lbl, font_size=settings.font_size, displayed=settings.show)
            for lbl in tick_labels
        ]
        if not settings.show:
            logger.debug("Labels hidden on %s axis", config.position.value)

        labels = truncate_labels(labels, config)

        if settings.rotate:
            labels = [lbl.with_size(self.measurer.measure(lbl)) for lbl in labels]
            labels = rotate_labels(labels, config)

        if settings.filter:
            labels = filter_labels(labels, config, scale, self.measurer)
        else:
            labels = [lbl.with_size(self.measurer.measure(lbl)) for lbl in labels]

        return labels


class AxisLabels:
    """Tick labels bound to one axis' configuration and scale.

    Args:
        axis_config: Configuration of the axis.
        scale: The axis' scale; held by reference, never modified.
        measurer: Text measurement port.
    """

    def __init__(self, axis_config: AxisConfig, scale: Scale, measurer: TextMeasurer):
        self.axis_config = axis_config
        self.axis_scale = scale
        self.pipeline = AxisLabelPipeline(measurer)

    def render(
        self,
        values: Optional[Sequence[Any]] = None,
        count: int = 10,
        formatter: Optional[Callable[[Any], str]] = None,
    ) -> list[TickLabel]:
        """Build labels for the scale's ticks and run the pipeline over them."""
        labels = build_tick_labels(
            self.axis_scale,
            position=self.axis_config.position,
            values=values,
            count=count,
            formatter=formatter,
        )
        return self.pipeline.render(labels, self.axis_config, self.axis_scale)


def visible_labels(labels: Iterable[TickLabel]) -> list[TickLabel]:
    """Labels that survived filtering and are displayed."""
    return [lbl for lbl in labels if lbl.visible and lbl.displayed]
