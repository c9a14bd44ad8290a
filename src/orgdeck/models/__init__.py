"""Modules containing model classes for different parts of orgdeck.

The intent is that the classes defined in this package should not end up containing \
too much logic. However some logic is still present, when writing it elsewhere seemed \
worse than not respecting this intent 100%.

- [`blocks`][orgdeck.models.blocks] contains models for the content of slides
- [`document`][orgdeck.models.document] contains models that represent parsed \
    documents and positions in them
- [`frame`][orgdeck.models.frame] contains models that are fed to presentation \
    surfaces
- [`scalars`][orgdeck.models.scalars] contains NewTypes that help disambiguate types \
    that are used a lot in different contexts
"""

from .blocks import (
    BulletList,
    CodeBlock,
    ContentBlock,
    Image,
    Link,
    ListItem,
    Paragraph,
    Quote,
)
from .document import Cursor, Document, SlideNode
from .frame import (
    CodeItem,
    FrameItem,
    ImageItem,
    LinkItem,
    ListFrameItem,
    PlaceholderItem,
    QuoteItem,
    TextItem,
    VisualFrame,
)
from .scalars import SlidePath, format_slide_path, parse_slide_path

__all__ = [
    "BulletList",
    "CodeBlock",
    "CodeItem",
    "ContentBlock",
    "Cursor",
    "Document",
    "FrameItem",
    "Image",
    "ImageItem",
    "Link",
    "LinkItem",
    "ListFrameItem",
    "ListItem",
    "Paragraph",
    "PlaceholderItem",
    "Quote",
    "QuoteItem",
    "SlideNode",
    "SlidePath",
    "TextItem",
    "VisualFrame",
    "format_slide_path",
    "parse_slide_path",
]
