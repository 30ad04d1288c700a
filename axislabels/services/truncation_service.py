"""Label truncation stage."""

from dataclasses import replace
from typing import Iterable, Optional

from ..models.axis import AxisConfig
from ..models.label import TickLabel


def truncate_text(text: str, max_length: Optional[int], ellipsis: str = "") -> str:
    """Shorten ``text`` to at most ``max_length`` characters.

    Args:
        text: The full label text.
        max_length: Character limit; ``0`` or ``None`` disables truncation.
        ellipsis: Suffix appended only when characters were actually cut.

    Returns:
        The (possibly) shortened text.
    """
    if not max_length or max_length >= len(text):
        return text
    return text[:max_length] + ellipsis


def truncate_label(label: TickLabel, max_length: Optional[int], ellipsis: str = "") -> TickLabel:
    """Return ``label`` with its rendered text truncated.

    Truncation always starts from ``full_text``, so applying it twice with
    the same limit gives the same result, and the original text remains
    available for a tooltip. The measured size is left untouched; callers
    re-measure after this stage.
    """
    if not max_length:
        return label
    text = truncate_text(label.full_text, max_length, ellipsis)
    if text == label.text:
        return label
    return replace(label, text=text)


def truncate_labels(labels: Iterable[TickLabel], config: AxisConfig) -> list[TickLabel]:
    """Apply the axis' truncation settings to every label."""
    settings = config.labels
    if not settings.truncate:
        return list(labels)
    return [truncate_label(lbl, settings.truncate, settings.truncate_ellipsis) for lbl in labels]
