"""Overlap filtering for tick labels.

A greedy single pass over the labels in scale order: a label is kept only if
its padded extent along the axis fits strictly between the trailing edge of
the last kept label and the end of the axis region. Rejected labels are
marked invisible but never moved, re-measured or reordered, and they leave
no exclusion zone behind.
"""

import logging
from dataclasses import dataclass, replace
from itertools import accumulate, islice
from typing import Optional, Sequence

from ..models.axis import AxisConfig
from ..models.label import LabelSize, TickLabel
from ..scales import Scale
from .measure_service import TextMeasurer

logger = logging.getLogger(__name__)

DEFAULT_PADDING_FACTOR = 1.1


@dataclass(frozen=True)
class OverlapDecision:
    """Outcome of the overlap test for one label."""

    index: int
    position: float  # Centre along the scan direction
    half_size: float  # Half of the padded extent
    kept: bool

    @property
    def start(self) -> float:
        return self.position - self.half_size

    @property
    def end(self) -> float:
        return self.position + self.half_size


@dataclass(frozen=True)
class _ScanState:
    """Trailing edge of the last kept label, plus the verdict for the label just scanned."""

    start_pos: float
    decision: Optional[OverlapDecision] = None


class OverlapFilter:
    """Decides which labels of one axis can be shown without colliding.

    Args:
        padding_factor: Multiplier applied to each measured label size
            before testing, leaving clearance between neighbours.
    """

    def __init__(self, padding_factor: float = DEFAULT_PADDING_FACTOR):
        self.padding_factor = padding_factor

    def scan_positions(self, labels: Sequence[TickLabel], config: AxisConfig, scale: Scale) -> list[float]:
        """Positions of each label along the scan direction.

        The scale's pixel span is centred within the region (band scales span
        less than the region), and vertical axes are flipped so the scan
        always runs from the start edge to the end edge.
        """
        max_extent = config.max_extent
        scale_range = scale.range()
        scale_width = abs(scale_range[-1] - scale_range[0])
        scale_start_pad = 0.5 * (max_extent - scale_width)

        if config.is_horizontal:
            return [scale_start_pad + scale(lbl.value) for lbl in labels]
        return [scale_start_pad + (max_extent - scale(lbl.value)) for lbl in labels]

    def decide(
        self,
        positions: Sequence[float],
        sizes: Sequence[LabelSize],
        max_extent: float,
        horizontal: bool = True,
    ) -> list[OverlapDecision]:
        """Run the greedy scan over precomputed positions and sizes.

        Args:
            positions: Label centres along the scan direction, in scan order.
            sizes: Measured label sizes, parallel to ``positions``.
            max_extent: Region size along the scan direction.
            horizontal: Use widths (True) or heights (False) as the extent.

        Returns:
            One ``OverlapDecision`` per label, in input order.
        """

        def step(state: _ScanState, item: tuple[int, float, LabelSize]) -> _ScanState:
            index, my_pos, size = item
            my_size = (size.width if horizontal else size.height) * self.padding_factor
            half_size = my_size / 2

            kept = (state.start_pos + half_size) < my_pos and (my_pos + half_size) < max_extent
            decision = OverlapDecision(index=index, position=my_pos, half_size=half_size, kept=kept)
            start_pos = my_pos + half_size if kept else state.start_pos
            return _ScanState(start_pos=start_pos, decision=decision)

        items = [(i, pos, size) for i, (pos, size) in enumerate(zip(positions, sizes))]
        states = accumulate(items, step, initial=_ScanState(start_pos=0.0))
        return [state.decision for state in islice(states, 1, None)]

    def filter(
        self,
        labels: Sequence[TickLabel],
        config: AxisConfig,
        scale: Scale,
        measurer: TextMeasurer,
    ) -> list[TickLabel]:
        """Mark overlapping labels invisible.

        Each label is measured in its current state (text, font size and
        rotation) and the measured size is stored on the returned label.

        Args:
            labels: Labels in scale order.
            config: Axis configuration.
            scale: Scale the labels' values are bound to.
            measurer: Text measurement port.

        Returns:
            A list of the same length and order as ``labels``.
        """
        if not config.labels.filter:
            return list(labels)
        if not labels:
            return []

        measured = [lbl.with_size(measurer.measure(lbl)) for lbl in labels]
        for lbl in measured:
            if lbl.size.is_degenerate:
                logger.warning("Label '%s' measured 0x0; it cannot block neighbours", lbl.text)

        positions = self.scan_positions(measured, config, scale)
        decisions = self.decide(
            positions,
            [lbl.size for lbl in measured],
            config.max_extent,
            horizontal=config.is_horizontal,
        )

        result: list[TickLabel] = []
        for lbl, decision in zip(measured, decisions):
            if decision.kept:
                result.append(lbl)
            else:
                logger.debug("Skipped label '%s' at %.1f due to overlap", lbl.text, decision.position)
                result.append(replace(lbl, visible=False))

        logger.info(
            "Kept %d of %d labels on %s axis %s",
            sum(d.kept for d in decisions),
            len(decisions),
            config.position.value,
            config.axis_selector,
        )
        return result


def filter_labels(
    labels: Sequence[TickLabel],
    config: AxisConfig,
    scale: Scale,
    measurer: TextMeasurer,
) -> list[TickLabel]:
    """Apply the axis' overlap filter using its configured padding factor."""
    return OverlapFilter(config.labels.padding_factor).filter(labels, config, scale, measurer)
