"""Shared test fixtures."""

import pytest

from axislabels.config import reset_config
from axislabels.models.axis import AxisConfig, AxisRegion, LabelSettings
from axislabels.models.label import LabelSize, TickLabel
from axislabels.scales import BandScale, LinearScale
from axislabels.services.measure_service import MonospaceTextMeasurer


class FixedSizeMeasurer:
    """Measurer reporting the same size for every label, recording what it saw."""

    def __init__(self, width: float, height: float = 10.0):
        self.width = width
        self.height = height
        self.measured: list[str] = []

    def measure(self, label: TickLabel) -> LabelSize:
        self.measured.append(label.text)
        return LabelSize(width=self.width, height=self.height)


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    """Isolate tests from the caller's environment and cached config."""
    for name in ("AXISLABELS_FONT_PATH", "AXISLABELS_FONT_SIZE", "AXISLABELS_MEASURER"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def make_config():
    """Factory for axis configs with a given position, region and label settings."""

    def _make(position="bottom", width=100.0, height=100.0, **labels):
        return AxisConfig(
            position=position,
            region=AxisRegion(width=width, height=height),
            labels=LabelSettings(**labels),
        )

    return _make


@pytest.fixture
def linear_scale():
    """0..100 mapped onto 0..100 px."""
    return LinearScale(domain=(0, 100), range=(0, 100))


@pytest.fixture
def ten_band_scale():
    """Ten categories c0..c9 over 100 px."""
    return BandScale(domain=[f"c{i}" for i in range(10)], range=(0, 100))


@pytest.fixture
def fixed_measurer():
    """Factory for measurers that report a constant size."""
    return FixedSizeMeasurer


@pytest.fixture
def mono_measurer():
    """6 px per character, 10 px tall."""
    return MonospaceTextMeasurer(char_width=6, line_height=10)


@pytest.fixture
def sample_label():
    return TickLabel(value="seven", text="Category Seven", position=50.0, x=50.0, y=9.0)
