"""Model classes for parsed documents.

The main class is [`Document`][orgdeck.models.document.Document]. It owns a forest of \
[`SlideNode`][orgdeck.models.document.SlideNode]s, each node owning its content \
blocks and its nested (vertical) slides. A document is never modified once parsed: \
reloading a file produces a new document.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..exceptions import InvalidPathError
from .blocks import ContentBlock
from .scalars import SlidePath, format_slide_path


@dataclass(frozen=True)
class SlideNode:
    """Slide of a document, possibly holding a stack of nested slides."""

    title: str | None
    """Title of the slide, None for untitled slides."""

    body: tuple[ContentBlock, ...]
    """Content blocks, in document order."""

    children: tuple["SlideNode", ...]
    """Nested slides, displayed as a vertical stack below this one."""

    depth: int
    """0 for top-level slides, parent depth + 1 otherwise."""

    tags: frozenset[str] = frozenset()
    notes: str | None = None
    """Speaker notes. They are never part of a rendered frame."""

    def __post_init__(self) -> None:
        if self.depth < 0:
            msg = f"slide depth must be positive, got {self.depth}"
            raise ValueError(msg)
        for child in self.children:
            if child.depth != self.depth + 1:
                msg = (
                    f"child {child.title!r} of {self.title!r} has depth {child.depth}, "
                    f"expected {self.depth + 1}"
                )
                raise ValueError(msg)

    @property
    def fragment_count(self) -> int:
        """Number of revealable fragments of the slide body."""
        return sum(block.fragment_count for block in self.body)


@dataclass(frozen=True)
class Cursor:
    """Position in a document: a slide and the number of fragments it reveals."""

    path: SlidePath
    fragment: int = 0

    def __str__(self) -> str:
        return f"{format_slide_path(self.path)}#{self.fragment}"


@dataclass(frozen=True)
class Document:
    """Top of the hierarchy for document parsing."""

    slides: tuple[SlideNode, ...]
    """Top-level slides, each of depth 0."""

    metadata: dict[str, str] = field(default_factory=dict, compare=False)
    """Document keywords (title, author, ...), keys lowercased."""

    base_dir: Path = Path()
    """Directory against which relative asset paths are resolved."""

    @property
    def title(self) -> str | None:
        return self.metadata.get("title")

    def node_at(self, path: Sequence[int]) -> SlideNode:
        """Resolve a path to the slide it points to.

        Args:
            path: Child indices from the top-level slides.

        Raises:
            InvalidPathError: Raised if the path is empty or if an index is out of \
                range at any level.

        Returns:
            The slide found at `path`.
        """
        if not path:
            msg = "empty slide path"
            raise InvalidPathError(msg)
        siblings = self.slides
        for level in range(len(path) - 1):
            siblings = _sibling_at(siblings, path, level).children
        return _sibling_at(siblings, path, len(path) - 1)

    def resolves(self, path: Sequence[int]) -> bool:
        try:
            self.node_at(path)
        except InvalidPathError:
            return False
        return True

    def children_of(self, path: Sequence[int]) -> tuple[SlideNode, ...]:
        """Return the children of the slide at `path`, or the top-level slides."""
        return self.node_at(path).children if path else self.slides

    def walk(self) -> Iterator[tuple[SlidePath, SlideNode]]:
        """Yield every slide with its path, in presentation (pre-)order."""
        stack = [
            (SlidePath((index,)), node) for index, node in enumerate(self.slides)
        ][::-1]
        while stack:
            path, node = stack.pop()
            yield path, node
            stack.extend(
                (SlidePath((*path, index)), child)
                for index, child in reversed(list(enumerate(node.children)))
            )

    def find(self, title: str) -> SlidePath | None:
        """Return the path of the first slide titled `title`, if any."""
        for path, node in self.walk():
            if node.title == title:
                return path
        return None


def _sibling_at(
    siblings: tuple[SlideNode, ...], path: Sequence[int], level: int
) -> SlideNode:
    index = path[level]
    if not 0 <= index < len(siblings):
        msg = (
            f"no slide at {format_slide_path(SlidePath(tuple(path)))} "
            f"(index {index} out of range at level {level})"
        )
        raise InvalidPathError(msg)
    return siblings[index]
