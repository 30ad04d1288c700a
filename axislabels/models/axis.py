"""Axis configuration models."""

from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class AxisPosition(str, Enum):
    """Side of the chart an axis is attached to."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"

    @property
    def is_horizontal(self) -> bool:
        """Top and bottom axes run horizontally."""
        return self in (AxisPosition.TOP, AxisPosition.BOTTOM)


class TextAnchor(str, Enum):
    """Text alignment reference point of a label."""

    START = "start"
    MIDDLE = "middle"
    END = "end"

    @property
    def offset_ratio(self) -> float:
        """Fraction of the text width that lies before the anchor point."""
        return {
            TextAnchor.START: 0.0,
            TextAnchor.MIDDLE: 0.5,
            TextAnchor.END: 1.0,
        }[self]


class AxisRegion(BaseModel):
    """Pixel size of the region an axis is drawn into."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(..., ge=0, description="Region width in pixels")
    height: float = Field(..., ge=0, description="Region height in pixels")


class LabelSettings(BaseModel):
    """Tick label behaviour toggles."""

    model_config = ConfigDict(frozen=True)

    show: bool = Field(default=True, description="Render tick labels at all")
    rotate: int = Field(
        default=0,
        ge=-360,
        le=360,
        description="Rotation in degrees (0 disables rotation)",
    )
    truncate: int = Field(
        default=0,
        ge=0,
        description="Maximum label length in characters (0 disables truncation)",
    )
    truncate_ellipsis: str = Field(
        default="",
        description="Suffix appended to truncated labels",
    )
    filter: bool = Field(default=False, description="Hide labels that would overlap")
    font_size: float = Field(default=10.0, gt=0, description="Font size in pixels")
    padding_factor: float = Field(
        default=1.1,
        ge=1.0,
        le=3.0,
        description="Clearance multiplier applied to measured label size",
    )


class AxisConfig(BaseModel):
    """Configuration for one axis, immutable for a render pass."""

    model_config = ConfigDict(frozen=True)

    position: AxisPosition = Field(default=AxisPosition.BOTTOM)
    labels: LabelSettings = Field(default_factory=LabelSettings)
    region: AxisRegion = Field(..., description="Size of the axis' bound region")
    axis_selector: str = Field(
        default=".axis",
        description="Name of the element the region was measured from",
    )

    @field_validator("position", mode="before")
    @classmethod
    def _normalize_position(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def is_horizontal(self) -> bool:
        return self.position.is_horizontal

    @property
    def max_extent(self) -> float:
        """Available pixel size along the axis' primary dimension."""
        return self.region.width if self.is_horizontal else self.region.height

    def get(self, path: str, default: Any = None) -> Any:
        """Look up an option by dotted path, e.g. ``"labels.rotate"``.

        Args:
            path: Dotted attribute path relative to this config.
            default: Value returned when any segment is missing.

        Returns:
            The option value, or ``default``.
        """
        current: Any = self
        for part in path.split("."):
            if not hasattr(current, part):
                return default
            current = getattr(current, part)
        return current


class ScaleSpec(BaseModel):
    """Serialized description of a scale in an axis file."""

    type: str = Field(default="linear", pattern="^(linear|band)$")
    domain: list[Union[float, str]] = Field(..., min_length=1)
    range: tuple[float, float]
    padding: float = Field(default=0.0, ge=0.0, lt=1.0)

    @field_validator("domain", mode="before")
    @classmethod
    def _band_domain_as_text(cls, value, info: ValidationInfo):
        if info.data.get("type") == "band" and isinstance(value, list):
            return [str(v) for v in value]
        return value


class AxisSpec(BaseModel):
    """An axis file: configuration, scale and optional explicit ticks."""

    axis: AxisConfig
    scale: ScaleSpec
    ticks: Optional[list[Union[float, str]]] = None
    tick_count: int = Field(default=10, ge=1)

    @field_validator("ticks", mode="before")
    @classmethod
    def _band_ticks_as_text(cls, value, info: ValidationInfo):
        # Band ticks must match the category names YAML may have parsed as numbers
        scale = info.data.get("scale")
        if scale is not None and scale.type == "band" and isinstance(value, list):
            return [str(v) for v in value]
        return value

    @classmethod
    def from_yaml(cls, path: Path) -> "AxisSpec":
        """Load an axis file from YAML."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls(**(data or {}))

    def to_yaml(self, path: Path) -> None:
        """Save the axis file to YAML."""
        data = self.model_dump(mode="json")
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def build_scale(self):
        """Instantiate the scale described by ``self.scale``."""
        from ..scales import BandScale, LinearScale

        if self.scale.type == "band":
            return BandScale(
                domain=[str(v) for v in self.scale.domain],
                range=self.scale.range,
                padding=self.scale.padding,
            )
        if len(self.scale.domain) != 2:
            raise ValueError("linear scale domain needs exactly two values")
        d0, d1 = (float(v) for v in self.scale.domain)
        return LinearScale(domain=(d0, d1), range=self.scale.range)
