"""Configuration management for axis label layout."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class AppConfig(BaseModel):
    """Application-level configuration."""

    # Text measurement
    measurer: str = Field(
        default="pillow",
        pattern="^(pillow|monospace)$",
        description="Text measurer used by the CLI",
    )
    font_path: Optional[Path] = Field(
        default=None,
        description="TrueType font used for label measurement",
    )
    default_font_size: float = Field(default=10.0, gt=0, description="Fallback font size in px")

    # Monospace measurer metrics, as fractions of the font size
    char_width_ratio: float = Field(default=0.6, gt=0, description="Glyph advance per font px")
    line_height_ratio: float = Field(default=1.2, gt=0, description="Line height per font px")

    @classmethod
    def load(cls) -> "AppConfig":
        """Load configuration from environment and defaults."""
        font_path = os.environ.get("AXISLABELS_FONT_PATH")
        return cls(
            measurer=os.environ.get("AXISLABELS_MEASURER", cls.model_fields["measurer"].default),
            font_path=Path(font_path) if font_path else None,
            default_font_size=os.environ.get(
                "AXISLABELS_FONT_SIZE", cls.model_fields["default_font_size"].default
            ),
        )


# Global config instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get or create global configuration."""
    global _config
    if _config is None:
        _config = AppConfig.load()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next ``get_config`` reloads it."""
    global _config
    _config = None
