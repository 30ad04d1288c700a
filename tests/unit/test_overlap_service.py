"""Tests for axislabels.services.overlap_service."""

import logging
import time

import pytest

from axislabels.models.label import LabelSize, TickLabel
from axislabels.scales import LinearScale
from axislabels.services.overlap_service import OverlapFilter, filter_labels
from axislabels.services.pipeline_service import build_tick_labels


def _kept_values(labels):
    return [lbl.value for lbl in labels if lbl.visible]


# ---------------------------------------------------------------------------
# OverlapFilter.decide
# ---------------------------------------------------------------------------

class TestDecide:
    def test_empty(self):
        assert OverlapFilter().decide([], [], max_extent=100) == []

    def test_exact_touch_with_cursor_is_rejected(self):
        svc = OverlapFilter(padding_factor=1.0)
        sizes = [LabelSize(10, 10), LabelSize(10, 10)]
        # First label ends at 11; second would start at exactly 11.
        decisions = svc.decide([6, 16], sizes, max_extent=100)
        assert [d.kept for d in decisions] == [True, False]

    def test_exact_touch_with_region_start_is_rejected(self):
        svc = OverlapFilter(padding_factor=1.0)
        decisions = svc.decide([5, 15], [LabelSize(10, 10)] * 2, max_extent=100)
        assert [d.kept for d in decisions] == [False, True]

    def test_exact_touch_with_region_end_is_rejected(self):
        svc = OverlapFilter(padding_factor=1.0)
        decisions = svc.decide([95], [LabelSize(10, 10)], max_extent=100)
        assert decisions[0].kept is False

    def test_rejected_label_does_not_advance_cursor(self):
        svc = OverlapFilter(padding_factor=1.0)
        # 12 collides with 10; 21 only collides with 12, which was dropped.
        decisions = svc.decide([10, 12, 21], [LabelSize(8, 10)] * 3, max_extent=100)
        assert [d.kept for d in decisions] == [True, False, True]

    def test_vertical_uses_height(self):
        svc = OverlapFilter(padding_factor=1.0)
        sizes = [LabelSize(width=1, height=30)] * 2
        decisions = svc.decide([20, 40], sizes, max_extent=100, horizontal=False)
        assert [d.kept for d in decisions] == [True, False]

    def test_kept_intervals_never_intersect(self):
        svc = OverlapFilter()
        positions = [3, 9, 14, 22, 25, 31, 40, 44, 52, 61, 63, 70, 78, 85, 91, 97]
        widths = [4, 7, 3, 9, 2, 6, 8, 5, 12, 3, 7, 4, 9, 6, 2, 5]
        sizes = [LabelSize(w, 10) for w in widths]
        kept = [d for d in svc.decide(positions, sizes, max_extent=100) if d.kept]
        assert len(kept) > 1
        for prev, nxt in zip(kept, kept[1:]):
            assert prev.end < nxt.start
        assert kept[0].start > 0
        assert kept[-1].end < 100

    def test_decisions_keep_input_order(self):
        decisions = OverlapFilter().decide([10, 20, 30], [LabelSize(5, 5)] * 3, max_extent=100)
        assert [d.index for d in decisions] == [0, 1, 2]
        assert [d.position for d in decisions] == [10, 20, 30]

    def test_scan_time_grows_linearly(self):
        svc = OverlapFilter(padding_factor=1.0)

        def run(n):
            positions = [10.0 * (i + 1) for i in range(n)]
            sizes = [LabelSize(5, 5)] * n
            start = time.perf_counter()
            decisions = svc.decide(positions, sizes, max_extent=10.0 * (n + 1))
            elapsed = time.perf_counter() - start
            assert len(decisions) == n
            assert all(d.kept for d in decisions)
            return elapsed

        small = min(run(20_000) for _ in range(3))
        large = min(run(160_000) for _ in range(3))
        # 8x the labels; a quadratic scan would take roughly 64x as long
        assert large < small * 24


# ---------------------------------------------------------------------------
# filter_labels
# ---------------------------------------------------------------------------

class TestFilterLabels:
    def test_evenly_spaced_ticks(self, fixed_measurer, make_config, linear_scale):
        """Ticks at 0,10,...,90 with 15px labels on a 100px axis."""
        config = make_config(width=100, filter=True)
        labels = build_tick_labels(linear_scale, values=list(range(0, 100, 10)))
        result = filter_labels(labels, config, linear_scale, fixed_measurer(15))
        assert _kept_values(result) == [10, 30, 50, 70, 90]

    def test_same_length_and_order(self, fixed_measurer, make_config, linear_scale):
        config = make_config(width=100, filter=True)
        labels = build_tick_labels(linear_scale, values=list(range(0, 100, 10)))
        result = filter_labels(labels, config, linear_scale, fixed_measurer(15))
        assert [lbl.value for lbl in result] == [lbl.value for lbl in labels]
        assert [lbl.text for lbl in result] == [lbl.text for lbl in labels]

    def test_disabled_filter_passes_through(self, fixed_measurer, make_config, linear_scale):
        config = make_config(width=100, filter=False)
        labels = build_tick_labels(linear_scale, values=list(range(0, 100, 10)))
        measurer = fixed_measurer(50)
        result = filter_labels(labels, config, linear_scale, measurer)
        assert result == labels
        assert all(lbl.visible for lbl in result)
        assert measurer.measured == []

    def test_empty_input(self, fixed_measurer, make_config, linear_scale):
        config = make_config(filter=True)
        assert filter_labels([], config, linear_scale, fixed_measurer(10)) == []

    def test_band_scale_is_recentred(self, fixed_measurer, make_config, ten_band_scale):
        """Band starts 0..90 are shifted by half a step onto band centres."""
        config = make_config(width=100, filter=True)
        labels = build_tick_labels(ten_band_scale)
        result = filter_labels(labels, config, ten_band_scale, fixed_measurer(15))
        assert _kept_values(result) == ["c1", "c3", "c5", "c7"]

    def test_vertical_axis_scans_from_bottom(self, fixed_measurer, make_config):
        scale = LinearScale(domain=(0, 100), range=(100, 0))
        config = make_config(position="left", height=100, filter=True)
        labels = build_tick_labels(scale, position=config.position, values=list(range(0, 100, 10)))
        result = filter_labels(labels, config, scale, fixed_measurer(width=60, height=15))
        assert _kept_values(result) == [10, 30, 50, 70, 90]

    def test_measured_size_is_stored(self, fixed_measurer, make_config, linear_scale):
        config = make_config(filter=True)
        labels = build_tick_labels(linear_scale, values=[50])
        result = filter_labels(labels, config, linear_scale, fixed_measurer(12, 7))
        assert result[0].size == LabelSize(12, 7)

    def test_custom_padding_factor(self, fixed_measurer, make_config, linear_scale):
        labels = build_tick_labels(linear_scale, values=[10, 20])
        loose = make_config(filter=True, padding_factor=1.0)
        tight = make_config(filter=True, padding_factor=1.5)
        # width 9: half 4.5 (kept) vs 6.75 (10 + 6.75 + 6.75 > 20)
        assert _kept_values(filter_labels(labels, loose, linear_scale, fixed_measurer(9))) == [10, 20]
        assert _kept_values(filter_labels(labels, tight, linear_scale, fixed_measurer(9))) == [10]

    def test_degenerate_size_passes_and_warns(self, fixed_measurer, make_config, linear_scale, caplog):
        config = make_config(filter=True)
        labels = build_tick_labels(linear_scale, values=[10, 11, 12])
        with caplog.at_level(logging.WARNING, logger="axislabels.services.overlap_service"):
            result = filter_labels(labels, config, linear_scale, fixed_measurer(0, 0))
        assert _kept_values(result) == [10, 11, 12]
        assert "0x0" in caplog.text

    def test_filter_only_toggles_visibility(self, fixed_measurer, make_config, linear_scale):
        config = make_config(filter=True)
        labels = [
            TickLabel(value=v, text=str(v), position=linear_scale(v), x=linear_scale(v), y=9)
            for v in (10, 12, 40)
        ]
        result = filter_labels(labels, config, linear_scale, fixed_measurer(6))
        for before, after in zip(labels, result):
            assert (after.x, after.y, after.position, after.text) == (
                before.x,
                before.y,
                before.position,
                before.text,
            )
        assert [lbl.visible for lbl in result] == [True, False, True]

    @pytest.mark.parametrize("width", [1, 5, 15, 30, 80])
    def test_kept_labels_never_overlap(self, fixed_measurer, make_config, linear_scale, width):
        config = make_config(filter=True)
        labels = build_tick_labels(linear_scale, values=list(range(0, 101, 5)))
        result = filter_labels(labels, config, linear_scale, fixed_measurer(width))
        kept_positions = [lbl.position for lbl in result if lbl.visible]
        half = width * 1.1 / 2
        for a, b in zip(kept_positions, kept_positions[1:]):
            assert a + half < b - half
