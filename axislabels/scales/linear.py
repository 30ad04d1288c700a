"""Continuous linear scale."""

import math
from typing import Optional

import numpy as np


class LinearScale:
    """Maps a numeric domain linearly onto a pixel range.

    The range may be inverted (e.g. ``(height, 0)`` for a y-axis drawn on a
    y-down canvas).
    """

    def __init__(self, domain: tuple[float, float], range: tuple[float, float]):
        d0, d1 = float(domain[0]), float(domain[1])
        if d0 == d1:
            raise ValueError("linear scale domain must span a non-zero interval")
        self.domain = (d0, d1)
        self._range = (float(range[0]), float(range[1]))

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self._range
        return r0 + (float(value) - d0) * (r1 - r0) / (d1 - d0)

    def range(self) -> tuple[float, ...]:
        return self._range

    def ticks(self, count: int = 10) -> list[float]:
        """Return "nice" tick values inside the domain, in ascending order."""
        lo, hi = sorted(self.domain)
        return generate_nice_ticks(lo, hi, count).tolist()

    def tick_format(self, value: float, step: Optional[float] = None) -> str:
        return format_tick(float(value), step=step)

    def tick_labels(self, values: list[float]) -> list[str]:
        """Format a tick sequence using a shared precision."""
        if not values:
            return []
        step = abs(values[1] - values[0]) if len(values) > 1 else None
        return [self.tick_format(v, step=step) for v in values]

    def __repr__(self) -> str:
        return f"LinearScale(domain={self.domain}, range={self._range})"


# Mantissa cut-offs for rounding a raw step to 1, 2 or 5 times a power of ten
_STEP_ROUNDING = ((1.5, 1.0), (3.0, 2.0), (7.0, 5.0))


def nice_step(span: float, count: int) -> float:
    """Round ``span / (count - 1)`` to a readable step such as 0.2, 5 or 100."""
    if count <= 0:
        raise ValueError("tick count must be > 0")
    raw = span / max(count - 1, 1)
    magnitude = 10.0 ** math.floor(math.log10(raw))
    mantissa = raw / magnitude
    for cutoff, nice in _STEP_ROUNDING:
        if mantissa < cutoff:
            return nice * magnitude
    return 10.0 * magnitude


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    """Multiples of a nice step lying in ``[vmin, vmax]``, ascending."""
    if target <= 0:
        raise ValueError("tick count must be > 0")
    if vmin == vmax:
        return np.array([vmin], dtype=np.float64)
    step = nice_step(vmax - vmin, target)
    first = math.ceil(vmin / step - 1e-9)
    last = math.floor(vmax / step + 1e-9)
    # Integer multiples of the step avoid accumulating float drift
    return np.arange(first, last + 1, dtype=np.float64) * step


def format_tick(value: float, *, step: Optional[float] = None) -> str:
    """Format a tick value with as many decimals as ``step`` needs.

    Very large and very small magnitudes switch to exponent notation.
    """
    if not math.isfinite(value):
        return str(value)
    magnitude = abs(value)
    if magnitude and not 1e-6 <= magnitude < 1e6:
        return f"{value:.4e}"
    decimals = _step_decimals(step) if step else 6
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _step_decimals(step: float) -> int:
    fraction = f"{abs(step):.12f}".rstrip("0").partition(".")[2]
    return len(fraction)
