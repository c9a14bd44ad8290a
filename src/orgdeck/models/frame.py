"""Model classes fed to presentation surfaces.

A [`VisualFrame`][orgdeck.models.frame.VisualFrame] is what a surface draws for a \
given slide and fragment position. It only contains what must be visible: \
fragments that are not revealed yet are already filtered out.
"""

from dataclasses import dataclass
from pathlib import Path

from .blocks import ListItem
from .scalars import SlidePath


@dataclass(frozen=True)
class TextItem:
    text: str


@dataclass(frozen=True)
class ListFrameItem:
    items: tuple[ListItem, ...]
    ordered: bool = False


@dataclass(frozen=True)
class QuoteItem:
    text: str
    attribution: str | None = None


@dataclass(frozen=True)
class CodeItem:
    code: str
    language: str | None
    """Lexer name to highlight with, None to display plain monospaced text."""


@dataclass(frozen=True)
class ImageItem:
    path: Path
    """Resolved path of an existing asset."""


@dataclass(frozen=True)
class PlaceholderItem:
    """Stand-in for an image whose asset could not be found."""

    text: str
    missing_path: Path


@dataclass(frozen=True)
class LinkItem:
    url: str
    label: str
    target: SlidePath | None = None


FrameItem = (
    TextItem
    | ListFrameItem
    | QuoteItem
    | CodeItem
    | ImageItem
    | PlaceholderItem
    | LinkItem
)
"""Alias to any element a surface has to draw."""


@dataclass(frozen=True)
class VisualFrame:
    """Projection of a slide at a given fragment position."""

    title: str | None
    depth: int
    fragment_index: int
    fragment_count: int
    items: tuple[FrameItem, ...]
