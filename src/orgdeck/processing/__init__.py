"""Provide protocols to better type-check slide tree processing code."""

from typing import TYPE_CHECKING, Protocol

# Necessary to avoid circular imports with ..models.blocks
if TYPE_CHECKING:
    from ..models.blocks import BulletList, CodeBlock, Image, Link, Paragraph, Quote
    from ..models.document import Document


class BlockVisitor[**P, T](Protocol):
    """Dispatch actions on [`ContentBlock`][orgdeck.models.blocks.ContentBlock]s."""

    def visit_paragraph(
        self, paragraph: "Paragraph", *args: P.args, **kwargs: P.kwargs
    ) -> T:
        """Dispatched method for [`Paragraph`][orgdeck.models.blocks.Paragraph]s."""
        ...

    def visit_bullet_list(
        self, bullet_list: "BulletList", *args: P.args, **kwargs: P.kwargs
    ) -> T:
        """Dispatched method for [`BulletList`][orgdeck.models.blocks.BulletList]s."""
        ...

    def visit_image(self, image: "Image", *args: P.args, **kwargs: P.kwargs) -> T:
        """Dispatched method for [`Image`][orgdeck.models.blocks.Image]s."""
        ...

    def visit_quote(self, quote: "Quote", *args: P.args, **kwargs: P.kwargs) -> T:
        """Dispatched method for [`Quote`][orgdeck.models.blocks.Quote]s."""
        ...

    def visit_code_block(
        self, code_block: "CodeBlock", *args: P.args, **kwargs: P.kwargs
    ) -> T:
        """Dispatched method for [`CodeBlock`][orgdeck.models.blocks.CodeBlock]s."""
        ...

    def visit_link(self, link: "Link", *args: P.args, **kwargs: P.kwargs) -> T:
        """Dispatched method for [`Link`][orgdeck.models.blocks.Link]s."""
        ...


class Processor[T](Protocol):
    def process(self, document: "Document") -> T:
        """Process a document."""
        ...
