"""Label rotation stage.

Computes, per label, the text anchor, the effective rotation angle and the
pivot the rotation turns about. The result is recorded on the label as a
``RotationTransform``; nothing is drawn here.
"""

import logging
from dataclasses import replace
from typing import Iterable

from ..models.axis import AxisConfig, AxisPosition, TextAnchor
from ..models.label import RotationTransform, TickLabel

logger = logging.getLogger(__name__)

# Baseline shift that vertically centres single-line text on horizontal axes
HORIZONTAL_DY = "0.3em"
VERTICAL_DY = "0"


def resolve_anchor(current: TextAnchor, config: AxisConfig) -> TextAnchor:
    """Pick the text anchor for a rotated label.

    Horizontal axes always anchor rotated text at its end. Vertical axes
    centre text turned a quarter turn and otherwise keep ``current``.
    """
    if config.is_horizontal:
        return TextAnchor.END
    if abs(config.labels.rotate) == 90:
        return TextAnchor.MIDDLE
    return current


def effective_angle(config: AxisConfig) -> float:
    """Rotation angle actually applied; top axes turn the opposite way."""
    rotate = config.labels.rotate
    return float(rotate) if config.position == AxisPosition.TOP else float(-rotate)


def rotate_label(label: TickLabel, config: AxisConfig) -> TickLabel:
    """Return ``label`` with anchor, rotation transform and baseline offset set.

    Middle-anchored labels pivot about the centre of their measured,
    un-rotated box; all others pivot about their ``(x, y)`` attachment point.

    Args:
        label: Label to rotate. Its ``size`` should already be measured.
        config: Axis configuration; a ``labels.rotate`` of 0 makes this a no-op.

    Returns:
        A new label, or ``label`` itself when rotation is disabled.
    """
    if not config.labels.rotate:
        return label

    anchor = resolve_anchor(label.anchor, config)
    angle = effective_angle(config)

    if anchor == TextAnchor.MIDDLE and label.size is not None:
        box_x, box_y = replace(label, anchor=anchor).box_origin
        cx = box_x + label.size.width / 2
        cy = box_y + label.size.height / 2
    else:
        if anchor == TextAnchor.MIDDLE:
            logger.debug("Label '%s' has no measured size; pivoting on its anchor point", label.text)
        cx, cy = label.x, label.y

    return replace(
        label,
        anchor=anchor,
        rotated=True,
        rotation=RotationTransform(angle=angle, cx=cx, cy=cy),
        dy=HORIZONTAL_DY if config.is_horizontal else VERTICAL_DY,
    )


def rotate_labels(labels: Iterable[TickLabel], config: AxisConfig) -> list[TickLabel]:
    """Apply the axis' rotation settings to every label."""
    if not config.labels.rotate:
        return list(labels)
    rotated = [rotate_label(lbl, config) for lbl in labels]
    logger.debug(
        "Rotated %d labels by %s degrees on %s axis",
        len(rotated),
        effective_angle(config),
        config.position.value,
    )
    return rotated
