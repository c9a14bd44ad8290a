"""Model NewTypes to disambiguate multi-usage types."""

from typing import NewType

from ..exceptions import InvalidPathError

SlidePath = NewType("SlidePath", tuple[int, ...])
"""Derived from a tuple of ints to represent the position of a slide in a document.

Each int is the index of a child in its parent, the first one being the index of a \
top-level slide. `(1, 0)` is the first vertical slide below the second top-level one.
"""


def parse_slide_path(text: str) -> SlidePath:
    """Parse a dotted slide path such as `1.0`.

    Args:
        text: Dot-separated child indices, starting at 0.

    Raises:
        InvalidPathError: Raised if `text` is not a dot-separated list of \
            non-negative integers.

    Returns:
        The parsed path. It is not checked against any document.
    """
    try:
        indices = tuple(int(part) for part in text.strip().split("."))
    except ValueError:
        msg = f"malformed slide path {text!r}"
        raise InvalidPathError(msg) from None
    if any(index < 0 for index in indices):
        msg = f"malformed slide path {text!r}"
        raise InvalidPathError(msg)
    return SlidePath(indices)


def format_slide_path(path: SlidePath) -> str:
    return ".".join(str(index) for index in path)
