"""Model classes for the content of a slide.

Each block is immutable once parsed. Blocks are
[`ContentBlock`][orgdeck.models.blocks.ContentBlock]s and have an \
[`accept`][orgdeck.models.blocks.ContentBlock.accept] method to allow visitors to be \
defined (the renderer and the HTML exporter are such visitors).

A block flagged as a fragment is revealed progressively: bullet lists reveal one \
top-level item per fragment, every other block is a single fragment.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import PurePath

from ..processing import BlockVisitor
from .scalars import SlidePath


@dataclass(frozen=True)
class ContentBlock(ABC):
    """Any content that can be placed in the body of a slide."""

    fragment: bool = field(default=False, kw_only=True)
    """Whether the block is revealed progressively."""

    @property
    def fragment_count(self) -> int:
        """Number of navigation steps needed to fully reveal the block."""
        return 1 if self.fragment else 0

    @abstractmethod
    def accept[**P, T](
        self, visitor: BlockVisitor[P, T], *args: P.args, **kwargs: P.kwargs
    ) -> T:
        """Dispatch method for visitors.

        Args:
            visitor: The visitor asking for the dispatch
            args: Arguments to send back to the visitor untouched
            kwargs: Keyword arguments to send back to the visitor untouched

        Returns:
            The return type is the same as the return type of the corresponding \
            `visit_*` method of the visitor.
        """
        raise NotImplementedError


@dataclass(frozen=True)
class Paragraph(ContentBlock):
    text: str

    def accept[**P, T](
        self, visitor: BlockVisitor[P, T], *args: P.args, **kwargs: P.kwargs
    ) -> T:
        return visitor.visit_paragraph(self, *args, **kwargs)


@dataclass(frozen=True)
class ListItem:
    """Item of a bullet list, possibly holding a nested list."""

    text: str
    children: tuple["ListItem", ...] = ()


@dataclass(frozen=True)
class BulletList(ContentBlock):
    items: tuple[ListItem, ...]
    ordered: bool = False

    @property
    def fragment_count(self) -> int:
        return len(self.items) if self.fragment else 0

    def accept[**P, T](
        self, visitor: BlockVisitor[P, T], *args: P.args, **kwargs: P.kwargs
    ) -> T:
        return visitor.visit_bullet_list(self, *args, **kwargs)


@dataclass(frozen=True)
class Image(ContentBlock):
    path: PurePath
    """Path of the asset, relative to the document directory unless absolute."""

    def accept[**P, T](
        self, visitor: BlockVisitor[P, T], *args: P.args, **kwargs: P.kwargs
    ) -> T:
        return visitor.visit_image(self, *args, **kwargs)


@dataclass(frozen=True)
class Quote(ContentBlock):
    text: str
    attribution: str | None = None

    def accept[**P, T](
        self, visitor: BlockVisitor[P, T], *args: P.args, **kwargs: P.kwargs
    ) -> T:
        return visitor.visit_quote(self, *args, **kwargs)


@dataclass(frozen=True)
class CodeBlock(ContentBlock):
    language: str
    """Language tag as written in the document. Can be empty."""

    text: str

    def accept[**P, T](
        self, visitor: BlockVisitor[P, T], *args: P.args, **kwargs: P.kwargs
    ) -> T:
        return visitor.visit_code_block(self, *args, **kwargs)


@dataclass(frozen=True)
class Link(ContentBlock):
    url: str
    label: str | None = None
    target: SlidePath | None = None
    """Path of the slide pointed to by an internal link, None for external links."""

    def accept[**P, T](
        self, visitor: BlockVisitor[P, T], *args: P.args, **kwargs: P.kwargs
    ) -> T:
        return visitor.visit_link(self, *args, **kwargs)
