from collections.abc import Callable
from functools import cache
from logging import getLogger
from pathlib import Path, PurePath

from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from ..models import (
    BulletList,
    CodeBlock,
    CodeItem,
    ContentBlock,
    FrameItem,
    Image,
    ImageItem,
    Link,
    LinkItem,
    ListFrameItem,
    Paragraph,
    PlaceholderItem,
    Quote,
    QuoteItem,
    SlideNode,
    TextItem,
    VisualFrame,
)
from ..processing import BlockVisitor
from .protocols import RendererProtocol

_logger = getLogger(__name__)


@cache
def lexer_name(language: str) -> str | None:
    """Map a language tag to the name of a Pygments lexer.

    Args:
        language: Language tag of a code block, as written in the document.

    Returns:
        The main alias of the matching lexer, None if the tag is empty or unknown.
    """
    if not language:
        return None
    try:
        lexer = get_lexer_by_name(language)
    except ClassNotFound:
        _logger.debug("No lexer for language %r, using plain text", language)
        return None
    return lexer.aliases[0] if lexer.aliases else language


def placeholder_text(placeholder: str, path: PurePath) -> str:
    """Expand the `{path}` field of a missing image placeholder.

    Any other brace is kept verbatim, so a custom placeholder can never make a frame \
    fail.

    Args:
        placeholder: Placeholder text, as configured.
        path: Path of the missing asset, as written in the document.

    Returns:
        The text to display instead of the image.
    """
    return placeholder.replace("{path}", path.as_posix())


class Renderer(RendererProtocol):
    """Project a slide and a fragment position into a frame."""

    def __init__(
        self, base_dir: Path, placeholder: str = "missing image: {path}"
    ) -> None:
        self._visitor = _FrameItemsVisitor(base_dir, placeholder)

    def render(self, node: SlideNode, fragment_index: int) -> VisualFrame:
        """Build the frame of `node` when `fragment_index` fragments are revealed.

        Blocks that are not fragments are always part of the frame. Fragment blocks \
        are only part of it while there are revealed fragments left to place, a \
        fragment bullet list being truncated to its revealed items.

        Args:
            node: Slide to render.
            fragment_index: Number of revealed fragments.

        Raises:
            ValueError: Raised if `fragment_index` is negative or greater than the \
                number of fragments of `node`.

        Returns:
            The frame to draw.
        """
        if not 0 <= fragment_index <= node.fragment_count:
            msg = (
                f"fragment index {fragment_index} out of range "
                f"[0, {node.fragment_count}] for slide {node.title!r}"
            )
            raise ValueError(msg)
        items: list[FrameItem] = []
        revealable = fragment_index
        for block in node.body:
            item, revealable = block.accept(self._visitor, revealable)
            if item is not None:
                items.append(item)
        return VisualFrame(
            title=node.title,
            depth=node.depth,
            fragment_index=fragment_index,
            fragment_count=node.fragment_count,
            items=tuple(items),
        )


class _FrameItemsVisitor(BlockVisitor[[int], tuple[FrameItem | None, int]]):
    def __init__(self, base_dir: Path, placeholder: str) -> None:
        self._base_dir = base_dir
        self._placeholder = placeholder

    def visit_paragraph(
        self, paragraph: Paragraph, revealable: int
    ) -> tuple[FrameItem | None, int]:
        return self._reveal(paragraph, revealable, lambda: TextItem(paragraph.text))

    def visit_bullet_list(
        self, bullet_list: BulletList, revealable: int
    ) -> tuple[FrameItem | None, int]:
        if not bullet_list.fragment:
            return ListFrameItem(bullet_list.items, bullet_list.ordered), revealable
        shown = bullet_list.items[:revealable]
        if not shown:
            return None, revealable
        return ListFrameItem(shown, bullet_list.ordered), revealable - len(shown)

    def visit_image(
        self, image: Image, revealable: int
    ) -> tuple[FrameItem | None, int]:
        return self._reveal(image, revealable, lambda: self._image_item(image))

    def visit_quote(
        self, quote: Quote, revealable: int
    ) -> tuple[FrameItem | None, int]:
        return self._reveal(
            quote, revealable, lambda: QuoteItem(quote.text, quote.attribution)
        )

    def visit_code_block(
        self, code_block: CodeBlock, revealable: int
    ) -> tuple[FrameItem | None, int]:
        return self._reveal(
            code_block,
            revealable,
            lambda: CodeItem(code_block.text, lexer_name(code_block.language)),
        )

    def visit_link(self, link: Link, revealable: int) -> tuple[FrameItem | None, int]:
        return self._reveal(
            link,
            revealable,
            lambda: LinkItem(link.url, link.label or link.url, link.target),
        )

    def _image_item(self, image: Image) -> FrameItem:
        path = self._base_dir / image.path
        if path.is_file():
            return ImageItem(path.resolve())
        _logger.warning("Missing image asset %s, using a placeholder", path)
        return PlaceholderItem(
            placeholder_text(self._placeholder, image.path), path
        )

    @staticmethod
    def _reveal(
        block: ContentBlock, revealable: int, build: Callable[[], FrameItem]
    ) -> tuple[FrameItem | None, int]:
        if not block.fragment:
            return build(), revealable
        if revealable == 0:
            return None, 0
        return build(), revealable - 1
