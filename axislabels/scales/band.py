"""Ordinal band scale."""

from typing import Sequence


class BandScale:
    """Splits a pixel range into equal bands, one per category.

    Calling the scale returns the *start* of a category's band, and
    ``range()`` lists every band start. The span between the first and last
    band start is therefore one step shorter than the region, which is what
    the overlap filter's start pad compensates for.

    Args:
        domain: Ordered, unique category names.
        range: ``(start, end)`` pixel bounds.
        padding: Fraction of each step left empty between bands (0 <= p < 1).
    """

    def __init__(self, domain: Sequence[str], range: tuple[float, float], padding: float = 0.0):
        if not 0.0 <= padding < 1.0:
            raise ValueError("band padding must be in [0, 1)")
        self.domain = list(domain)
        if len(set(self.domain)) != len(self.domain):
            raise ValueError("band scale domain values must be unique")
        self.padding = padding
        self._bounds = (float(range[0]), float(range[1]))
        self._index = {value: i for i, value in enumerate(self.domain)}

        start, end = self._bounds
        n = len(self.domain)
        self.step = (end - start) / n if n else 0.0
        self.bandwidth = self.step * (1.0 - padding)
        offset = self.step * padding / 2
        self._starts = tuple(start + offset + i * self.step for i, _ in enumerate(self.domain))

    def __call__(self, value: str) -> float:
        return self._starts[self._index[value]]

    def range(self) -> tuple[float, ...]:
        if not self._starts:
            return (self._bounds[0], self._bounds[0])
        return self._starts

    def center(self, value: str) -> float:
        """Pixel position of the middle of a category's band."""
        return self(value) + self.bandwidth / 2

    def ticks(self, count: int = 10) -> list[str]:
        # Every category is a tick; ``count`` is accepted for interface parity.
        return list(self.domain)

    def tick_format(self, value: str) -> str:
        return str(value)

    def tick_labels(self, values: list[str]) -> list[str]:
        return [self.tick_format(v) for v in values]

    def __repr__(self) -> str:
        return f"BandScale(domain={self.domain!r}, range={self._bounds}, padding={self.padding})"
