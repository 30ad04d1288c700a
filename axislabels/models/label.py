"""Tick label records passed between layout stages."""

import math
from dataclasses import dataclass, replace
from typing import Any, Optional

import numpy as np

from .axis import TextAnchor


@dataclass(frozen=True)
class LabelSize:
    """Measured bounding box size of a label in pixels."""

    width: float
    height: float

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 and self.height <= 0


@dataclass(frozen=True)
class RotationTransform:
    """A rotation by ``angle`` degrees about the pivot ``(cx, cy)``.

    Angles follow the SVG convention: positive values turn clockwise on a
    y-down canvas.
    """

    angle: float
    cx: float
    cy: float

    def to_svg(self) -> str:
        return f"rotate({_fmt(self.angle)}, {_fmt(self.cx)}, {_fmt(self.cy)})"

    def matrix(self) -> np.ndarray:
        """Return the equivalent 3x3 affine matrix."""
        theta = math.radians(self.angle)
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        return np.array(
            [
                [cos_t, -sin_t, self.cx - cos_t * self.cx + sin_t * self.cy],
                [sin_t, cos_t, self.cy - sin_t * self.cx - cos_t * self.cy],
                [0.0, 0.0, 1.0],
            ]
        )

    def apply(self, x: float, y: float) -> tuple[float, float]:
        """Rotate a single point."""
        out = self.matrix() @ np.array([x, y, 1.0])
        return float(out[0]), float(out[1])


@dataclass(frozen=True)
class TickLabel:
    """One tick's text label for a single render pass.

    ``position`` is the scale's pixel output for ``value``; ``x``/``y`` are
    the label's attachment coordinates (its un-rotated anchor point, with
    ``y`` at the top edge of the text box). ``visible`` is only ever
    cleared by the overlap filter, while ``displayed`` reflects the axis-wide
    show/hide switch.
    """

    value: Any
    text: str
    full_text: str = ""
    position: float = 0.0
    x: float = 0.0
    y: float = 0.0
    size: Optional[LabelSize] = None
    anchor: TextAnchor = TextAnchor.MIDDLE
    rotated: bool = False
    rotation: Optional[RotationTransform] = None
    dy: str = "0"
    visible: bool = True
    displayed: bool = True
    font_size: Optional[float] = None

    def __post_init__(self):
        if not self.full_text:
            object.__setattr__(self, "full_text", self.text)

    @property
    def box_origin(self) -> tuple[float, float]:
        """Top-left corner of the un-rotated text box.

        Requires ``size``; the horizontal offset depends on ``anchor``.
        """
        if self.size is None:
            return (self.x, self.y)
        return (self.x - self.size.width * self.anchor.offset_ratio, self.y)

    @property
    def is_truncated(self) -> bool:
        return self.text != self.full_text

    def with_size(self, size: LabelSize) -> "TickLabel":
        return replace(self, size=size)

    def style(self) -> dict[str, str]:
        """Style attributes for a rendering backend."""
        style: dict[str, str] = {}
        if self.font_size is not None:
            style["font-size"] = f"{_fmt(self.font_size)}px"
        if not self.displayed:
            style["display"] = "none"
        return style

    def to_dict(self) -> dict[str, Any]:
        """Serialize the label for JSON output."""
        return {
            "value": self.value,
            "text": self.text,
            "title": self.full_text,
            "position": self.position,
            "x": self.x,
            "y": self.y,
            "width": self.size.width if self.size else None,
            "height": self.size.height if self.size else None,
            "anchor": self.anchor.value,
            "dy": self.dy,
            "transform": self.rotation.to_svg() if self.rotation else None,
            "visible": self.visible,
            "displayed": self.displayed,
            "style": self.style(),
        }


def _fmt(value: float) -> str:
    """Format a number without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
