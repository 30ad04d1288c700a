"""Text measurement for tick labels.

Every layout decision that depends on label size goes through a
``TextMeasurer``. Measurers report the axis-aligned bounding box of a label
in its *current* state: its (possibly truncated) text, its font size and, if
a rotation has been applied, the rotated extent.
"""

import logging
import math
from typing import Optional, Protocol, runtime_checkable

from PIL import ImageFont

from ..models.label import LabelSize, TickLabel

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 10.0

# Candidate system font paths to try, in preference order
_SYSTEM_FONT_CANDIDATES = [
    # Linux
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    # macOS
    "/System/Library/Fonts/Helvetica.ttc",
    "/Library/Fonts/Arial.ttf",
    # Windows
    "C:/Windows/Fonts/arial.ttf",
    "C:/Windows/Fonts/segoeui.ttf",
]

_FONT_NAMES = ("DejaVuSans", "DejaVu Sans", "LiberationSans", "Arial", "Helvetica")


@runtime_checkable
class TextMeasurer(Protocol):
    """Port for measuring a label's rendered bounding box."""

    def measure(self, label: TickLabel) -> LabelSize: ...


def rotated_extent(width: float, height: float, angle: float) -> LabelSize:
    """Axis-aligned bounding box of a ``width`` x ``height`` box rotated by ``angle`` degrees."""
    theta = math.radians(angle)
    cos_t = abs(math.cos(theta))
    sin_t = abs(math.sin(theta))
    return LabelSize(
        width=width * cos_t + height * sin_t,
        height=width * sin_t + height * cos_t,
    )


class MonospaceTextMeasurer:
    """Deterministic measurer that assumes fixed-advance glyphs.

    Useful headless and in tests: a label is ``len(text) * char_width``
    wide and ``line_height`` tall. When ``char_width``/``line_height`` are
    not given they scale with each label's font size.

    Args:
        char_width: Advance per character in pixels.
        line_height: Text box height in pixels.
        char_width_ratio: Advance per font pixel, used when ``char_width`` is unset.
        line_height_ratio: Height per font pixel, used when ``line_height`` is unset.
        default_font_size: Font size assumed for labels without one.
    """

    def __init__(
        self,
        char_width: Optional[float] = None,
        line_height: Optional[float] = None,
        char_width_ratio: float = 0.6,
        line_height_ratio: float = 1.2,
        default_font_size: float = DEFAULT_FONT_SIZE,
    ):
        self.default_font_size = default_font_size
        self.char_width = char_width
        self.line_height = line_height
        self.char_width_ratio = char_width_ratio
        self.line_height_ratio = line_height_ratio

    def measure(self, label: TickLabel) -> LabelSize:
        font_size = label.font_size or self.default_font_size
        char_width = self.char_width if self.char_width is not None else font_size * self.char_width_ratio
        line_height = self.line_height if self.line_height is not None else font_size * self.line_height_ratio
        width = len(label.text) * char_width
        height = line_height if label.text else 0.0
        if label.rotation is not None:
            return rotated_extent(width, height, label.rotation.angle)
        return LabelSize(width=width, height=height)


class PillowTextMeasurer:
    """Measures labels with real glyph metrics via ``PIL.ImageFont``.

    Attempts the configured font first, then common system TrueType fonts,
    and falls back to Pillow's default bitmap font. Fonts are cached per
    size.

    Args:
        font_path: Optional path (or font name) of a TrueType font.
        default_font_size: Font size assumed for labels without one.
    """

    def __init__(self, font_path: Optional[str] = None, default_font_size: float = DEFAULT_FONT_SIZE):
        self.default_font_size = default_font_size
        self.font_path = str(font_path) if font_path else None
        self._font_cache: dict[int, ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}
        self._system_font_path: Optional[str] = self.font_path or self._find_system_font()

    def measure(self, label: TickLabel) -> LabelSize:
        font_size = label.font_size or self.default_font_size
        font = self._get_font(font_size)
        if not label.text:
            return LabelSize(width=0.0, height=0.0)
        try:
            left, top, right, bottom = font.getbbox(label.text)
            width = float(right - left)
            height = float(bottom - top)
        except Exception:
            logger.warning("Could not measure '%s'; estimating from length", label.text)
            width = len(label.text) * font_size * 0.6
            height = font_size * 1.2
        if label.rotation is not None:
            return rotated_extent(width, height, label.rotation.angle)
        return LabelSize(width=width, height=height)

    # ------------------------------------------------------------------
    # Font handling
    # ------------------------------------------------------------------

    def _get_font(self, font_size: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        size = max(1, int(round(font_size)))
        if size in self._font_cache:
            return self._font_cache[size]
        font = self._load_font(size)
        self._font_cache[size] = font
        return font

    def _load_font(self, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        if self._system_font_path:
            try:
                return ImageFont.truetype(self._system_font_path, size)
            except Exception:
                logger.debug("Font %s failed to load at size %d", self._system_font_path, size)

        for path in _SYSTEM_FONT_CANDIDATES:
            try:
                return ImageFont.truetype(path, size)
            except Exception:
                continue

        logger.warning("No TrueType font found; using PIL default bitmap font")
        return ImageFont.load_default()

    @staticmethod
    def _find_system_font() -> Optional[str]:
        """Probe the system for a usable TrueType font and return its path."""
        for path in _SYSTEM_FONT_CANDIDATES:
            try:
                ImageFont.truetype(path, 12)
                return path
            except Exception:
                continue

        for name in _FONT_NAMES:
            try:
                ImageFont.truetype(name, 12)
                return name
            except Exception:
                continue

        return None
