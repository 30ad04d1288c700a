"""Domain-to-pixel scales consumed by the label layout stages."""

from typing import Any, Protocol, runtime_checkable

from .band import BandScale
from .linear import LinearScale, format_tick, generate_nice_ticks, nice_step


@runtime_checkable
class Scale(Protocol):
    """Anything that maps domain values to pixels and reports its range."""

    def __call__(self, value: Any) -> float: ...

    def range(self) -> tuple[float, ...]: ...

    def ticks(self, count: int = 10) -> list: ...

    def tick_labels(self, values: list) -> list[str]: ...


__all__ = [
    "Scale",
    "BandScale",
    "LinearScale",
    "format_tick",
    "generate_nice_ticks",
    "nice_step",
]
