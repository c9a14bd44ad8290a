"""Move a cursor through a document, one fragment or one slide at a time.

Slides are visited in pre-order: a slide first reveals its fragments, then its nested \
slides (its vertical stack), then the next slide at the same depth, ascending as \
needed. Going back is the exact inverse of going forward, which means that entering \
a slide from below lands on it with every fragment revealed.
"""

from collections.abc import Sequence
from enum import Enum
from logging import getLogger

from ..exceptions import InvalidPathError
from ..models import Cursor, Document, Link, SlideNode, SlidePath

_logger = getLogger(__name__)


class Move(Enum):
    FRAGMENT = "fragment"
    SLIDE = "slide"
    END_OF_DOCUMENT = "end-of-document"
    START_OF_DOCUMENT = "start-of-document"

    @property
    def is_boundary(self) -> bool:
        """Whether the move was a no-op because a document boundary was reached."""
        return self in (Move.END_OF_DOCUMENT, Move.START_OF_DOCUMENT)


class Navigator:
    """Own the cursor of a presentation and mutate it on navigation commands."""

    def __init__(self, document: Document) -> None:
        self._document = document
        self._cursor = Cursor(SlidePath((0,)))

    @property
    def document(self) -> Document:
        return self._document

    @property
    def cursor(self) -> Cursor:
        return self._cursor

    @property
    def current(self) -> SlideNode:
        return self._document.node_at(self._cursor.path)

    @property
    def at_start(self) -> bool:
        return self._previous() is None

    @property
    def at_end(self) -> bool:
        return self._next() is None

    def advance(self) -> Move:
        """Reveal the next fragment, or move to the next slide.

        Returns:
            The kind of move made, `END_OF_DOCUMENT` if the cursor was already on \
            the last fragment of the last slide (the cursor is then left untouched).
        """
        step = self._next()
        if step is None:
            _logger.debug("End of document reached at %s", self._cursor)
            return Move.END_OF_DOCUMENT
        self._cursor, move = step
        return move

    def retreat(self) -> Move:
        """Hide the last revealed fragment, or move to the previous slide.

        Returns:
            The kind of move made, `START_OF_DOCUMENT` if the cursor was already on \
            the first slide with no fragment revealed (the cursor is then left \
            untouched).
        """
        step = self._previous()
        if step is None:
            _logger.debug("Start of document reached at %s", self._cursor)
            return Move.START_OF_DOCUMENT
        self._cursor, move = step
        return move

    def jump_to(self, path: Sequence[int]) -> None:
        """Move to the slide at `path`, with no fragment revealed.

        Args:
            path: Child indices from the top-level slides.

        Raises:
            InvalidPathError: Raised if `path` doesn't resolve to a slide. The cursor \
                is left untouched.
        """
        self._document.node_at(path)
        self._cursor = Cursor(SlidePath(tuple(path)))

    def follow(self, link: Link) -> None:
        """Jump to the slide an internal link points to.

        Args:
            link: Link to follow.

        Raises:
            InvalidPathError: Raised if the link points outside of the document. The \
                cursor is left untouched.
        """
        if link.target is None:
            msg = f"link to {link.url} does not point to a slide"
            raise InvalidPathError(msg)
        self.jump_to(link.target)

    def reload(self, document: Document) -> None:
        """Replace the document, keeping the position when it still exists.

        Args:
            document: Freshly parsed document.
        """
        self._document = document
        if document.resolves(self._cursor.path):
            fragment = min(self._cursor.fragment, self.current.fragment_count)
            self._cursor = Cursor(self._cursor.path, fragment)
        else:
            _logger.info("Slide %s disappeared, going back to start", self._cursor)
            self._cursor = Cursor(SlidePath((0,)))

    def _next(self) -> tuple[Cursor, Move] | None:
        path, fragment = self._cursor.path, self._cursor.fragment
        node = self._document.node_at(path)
        if fragment < node.fragment_count:
            return Cursor(path, fragment + 1), Move.FRAGMENT
        if node.children:
            return Cursor(SlidePath((*path, 0))), Move.SLIDE
        for level in range(len(path) - 1, -1, -1):
            siblings = self._document.children_of(path[:level])
            if path[level] + 1 < len(siblings):
                return (
                    Cursor(SlidePath((*path[:level], path[level] + 1))),
                    Move.SLIDE,
                )
        return None

    def _previous(self) -> tuple[Cursor, Move] | None:
        path, fragment = self._cursor.path, self._cursor.fragment
        if fragment > 0:
            return Cursor(path, fragment - 1), Move.FRAGMENT
        if path[-1] > 0:
            # Deepest last slide of the previous sibling
            target = SlidePath((*path[:-1], path[-1] - 1))
            node = self._document.node_at(target)
            while node.children:
                target = SlidePath((*target, len(node.children) - 1))
                node = node.children[-1]
            return Cursor(target, node.fragment_count), Move.SLIDE
        if len(path) > 1:
            parent = SlidePath(path[:-1])
            return (
                Cursor(parent, self._document.node_at(parent).fragment_count),
                Move.SLIDE,
            )
        return None
