"""Parse outline markup into a [`Document`][orgdeck.models.Document].

The markup is a subset of org-mode, the one used to write reveal.js decks:

- `#+KEY: value` lines before the first heading are document keywords, \
    `#+LINK: name prefix` defines a link abbreviation
- `* Title`, `** Title`, ... start slides, each star adding a nesting level, trailing \
    `:tag:` markers are tags and `noexport` drops the slide with its subtree
- `-`, `+`, `1.` and `1)` lines are bullets, indentation encoding nesting
- `#+BEGIN_SRC lang`, `#+BEGIN_QUOTE`, `#+BEGIN_NOTES` and friends are delimited \
    regions kept verbatim
- `[[target][label]]` alone on a line is a link, or an image when the target is an \
    image file
- `#+ATTR_REVEAL: :frag ...` makes the next block a fragment

Parsing is done in two passes. The first one builds a mutable outline while going \
through the lines. The second one freezes it into immutable slides, which is when \
link references are resolved (so that links can point to slides defined later).
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path, PurePath
from re import IGNORECASE
from re import compile as re_compile

from ..configuring.settings import default_link_schemes
from ..exceptions import ParseError
from ..models import (
    BulletList,
    CodeBlock,
    ContentBlock,
    Document,
    Image,
    Link,
    ListItem,
    Paragraph,
    Quote,
    SlideNode,
    SlidePath,
)
from .protocols import ParserProtocol

_logger = getLogger(__name__)

_heading_re = re_compile(r"^(\*+)(?:\s+(.*?))?\s*$")
_tags_re = re_compile(r"^(.*?)\s+(:(?:[\w@#%]+:)+)$")
_keyword_re = re_compile(r"^\s*#\+(\w+):?\s*(.*?)\s*$")
_begin_re = re_compile(r"^\s*#\+begin_(\w+)(?:\s+(.*?))?\s*$", IGNORECASE)
_end_re = re_compile(r"^\s*#\+end_(\w+)\s*$", IGNORECASE)
_bullet_re = re_compile(r"^(\s*)([-+]|\d+[.)])\s+(.*?)\s*$")
_bracket_link_re = re_compile(r"^\s*\[\[([^\]]+)\](?:\[([^\]]+)\])?\]\s*$")
_scheme_re = re_compile(r"^([A-Za-z][\w+.-]*):(.*)$")
_comment_re = re_compile(r"^\s*#(?:\s.*)?$")

_image_suffixes = frozenset([".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp"])
_code_blocks = frozenset(["src", "example"])
_quote_blocks = frozenset(["quote", "verse"])
_notes_block = "notes"
_no_export_tag = "noexport"


@dataclass
class _PendingItem:
    text: str
    children: list["_PendingItem"] = field(default_factory=list)

    def freeze(self) -> ListItem:
        return ListItem(
            text=self.text, children=tuple(child.freeze() for child in self.children)
        )


@dataclass
class _PendingList:
    ordered: bool
    fragment: bool
    items: list[_PendingItem] = field(default_factory=list)
    # Indentation and item list of each opened nesting level
    levels: list[tuple[int, list[_PendingItem]]] = field(default_factory=list)


@dataclass
class _PendingLink:
    target: str
    label: str | None
    fragment: bool
    line_number: int
    line: str


@dataclass
class _PendingSlide:
    title: str | None
    depth: int
    tags: frozenset[str]
    line_number: int
    body: list[ContentBlock | _PendingLink] = field(default_factory=list)
    children: list["_PendingSlide"] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


class _OutlineBuilder:
    """First pass: go through the lines and build a mutable outline."""

    def __init__(self, fragment_lists: bool) -> None:
        self._fragment_lists = fragment_lists
        self.roots: list[_PendingSlide] = []
        self.metadata: dict[str, str] = {}
        self.abbreviations: dict[str, str] = {}
        self._open_slides: list[_PendingSlide] = []
        self._paragraph: list[str] = []
        self._list: _PendingList | None = None
        self._next_is_fragment = False

    def build(self, lines: list[str]) -> None:
        numbered_lines = iter(enumerate(lines, start=1))
        for line_number, line in numbered_lines:
            if not line.strip():
                self._flush()
            elif (match := _begin_re.match(line)) is not None:
                self._flush()
                self._region(
                    match.group(1).lower(),
                    match.group(2) or "",
                    line_number,
                    line,
                    numbered_lines,
                )
            elif (match := _end_re.match(line)) is not None:
                msg = f"#+END_{match.group(1).upper()} without a matching #+BEGIN"
                raise ParseError(msg, line_number, line)
            elif (match := _heading_re.match(line)) is not None:
                self._flush()
                self._heading(match.group(1), match.group(2) or "", line_number, line)
            elif (match := _keyword_re.match(line)) is not None:
                self._flush()
                self._keyword(match.group(1), match.group(2), line_number, line)
            elif _comment_re.match(line):
                self._flush()
            elif not self._open_slides:
                msg = "content outside of any slide"
                raise ParseError(msg, line_number, line)
            elif (match := _bullet_re.match(line)) is not None:
                self._bullet(
                    len(match.group(1).expandtabs()),
                    match.group(2),
                    match.group(3),
                    line_number,
                    line,
                )
            elif (match := _bracket_link_re.match(line)) is not None:
                self._flush()
                self._add(
                    _PendingLink(
                        target=match.group(1).strip(),
                        label=match.group(2),
                        fragment=self._take_fragment(),
                        line_number=line_number,
                        line=line,
                    )
                )
            else:
                self._text(line)
        self._flush()

    def _heading(self, stars: str, text: str, line_number: int, line: str) -> None:
        depth = len(stars) - 1
        previous_depth = self._open_slides[-1].depth if self._open_slides else -1
        if depth > previous_depth + 1:
            msg = (
                f"heading of depth {depth} cannot follow a heading of depth "
                f"{previous_depth}"
                if previous_depth >= 0
                else "first heading must be a top-level one"
            )
            raise ParseError(msg, line_number, line)
        tags: frozenset[str] = frozenset()
        if (match := _tags_re.match(text)) is not None:
            text = match.group(1)
            tags = frozenset(match.group(2).strip(":").split(":"))
        slide = _PendingSlide(
            title=text.strip() or None,
            depth=depth,
            tags=tags,
            line_number=line_number,
        )
        while self._open_slides and self._open_slides[-1].depth >= depth:
            self._open_slides.pop()
        if self._open_slides:
            self._open_slides[-1].children.append(slide)
        else:
            self.roots.append(slide)
        self._open_slides.append(slide)
        self._next_is_fragment = False

    def _keyword(self, key: str, value: str, line_number: int, line: str) -> None:
        key = key.lower()
        if key == "link":
            name, _, prefix = value.partition(" ")
            if not name or not prefix.strip():
                msg = "link abbreviations must be written #+LINK: name prefix"
                raise ParseError(msg, line_number, line)
            self.abbreviations[name] = prefix.strip()
        elif not self._open_slides:
            self.metadata[key] = value
        elif key == "attr_reveal":
            self._next_is_fragment = ":frag" in value.split()
        else:
            _logger.debug("Ignoring keyword %s on line %d", key, line_number)

    def _region(
        self,
        name: str,
        argument: str,
        line_number: int,
        line: str,
        numbered_lines: Iterator[tuple[int, str]],
    ) -> None:
        if not self._open_slides:
            msg = "content outside of any slide"
            raise ParseError(msg, line_number, line)
        content: list[str] = []
        for _, region_line in numbered_lines:
            end = _end_re.match(region_line)
            if end is not None and end.group(1).lower() == name:
                break
            content.append(region_line)
        else:
            msg = f"unterminated {name.upper()} block"
            raise ParseError(msg, line_number, line)
        text = "\n".join(content)
        if name in _code_blocks:
            words = argument.split()
            language = words[0] if name == "src" and words else ""
            self._add(CodeBlock(language, text, fragment=self._take_fragment()))
        elif name in _quote_blocks:
            self._add(self._quote(content))
        elif name == _notes_block:
            self._take_fragment()
            self._open_slides[-1].notes.append(text.strip("\n"))
        else:
            _logger.debug(
                "Keeping unknown %s block on line %d as a paragraph", name, line_number
            )
            self._add(Paragraph(text, fragment=self._take_fragment()))

    def _quote(self, content: list[str]) -> Quote:
        lines = list(content)
        while lines and not lines[-1].strip():
            lines.pop()
        attribution = None
        if lines and lines[-1].strip().startswith("-- "):
            attribution = lines.pop().strip()[3:].strip()
        return Quote(
            "\n".join(lines).strip("\n"),
            attribution,
            fragment=self._take_fragment(),
        )

    def _bullet(
        self, indent: int, marker: str, text: str, line_number: int, line: str
    ) -> None:
        if self._paragraph:
            self._flush()
        item = _PendingItem(text)
        if self._list is None:
            self._list = _PendingList(
                ordered=marker[0].isdigit(),
                fragment=self._take_fragment() or self._fragment_lists,
            )
            self._list.levels.append((indent, self._list.items))
        levels = self._list.levels
        if indent > levels[-1][0]:
            parent = levels[-1][1][-1]
            levels.append((indent, parent.children))
        else:
            while levels and levels[-1][0] > indent:
                levels.pop()
            if not levels or levels[-1][0] != indent:
                msg = "inconsistent bullet indentation"
                raise ParseError(msg, line_number, line)
        levels[-1][1].append(item)

    def _text(self, line: str) -> None:
        if self._list is not None:
            indent = len(line) - len(line.lstrip())
            if indent > self._list.levels[0][0]:
                self._list.levels[-1][1][-1].text += f" {line.strip()}"
                return
            self._flush()
        self._paragraph.append(line.strip())

    def _flush(self) -> None:
        if self._paragraph:
            self._add(
                Paragraph(" ".join(self._paragraph), fragment=self._take_fragment())
            )
            self._paragraph = []
        if self._list is not None:
            pending_list = self._list
            self._list = None
            self._add(
                BulletList(
                    tuple(item.freeze() for item in pending_list.items),
                    pending_list.ordered,
                    fragment=pending_list.fragment,
                )
            )

    def _add(self, block: ContentBlock | _PendingLink) -> None:
        self._open_slides[-1].body.append(block)

    def _take_fragment(self) -> bool:
        fragment, self._next_is_fragment = self._next_is_fragment, False
        return fragment


class Parser(ParserProtocol):
    """Build a document from outline markup.

    The parser is stateless: each call to `parse` is a pure function of its input.
    """

    def __init__(
        self,
        fragment_lists: bool = False,
        link_schemes: Iterable[str] = default_link_schemes,
    ) -> None:
        """Initialize an instance with the markup options.

        Args:
            fragment_lists: Whether every bullet list is revealed item by item.
            link_schemes: URL schemes accepted as is in links. Any other prefix must \
                be a link abbreviation defined with `#+LINK`.
        """
        self._fragment_lists = fragment_lists
        self._link_schemes = frozenset(scheme.lower() for scheme in link_schemes)

    def parse(self, text: str, base_dir: Path = Path()) -> Document:
        """Parse outline markup into a document.

        Args:
            text: Content of the document.
            base_dir: Directory used to resolve relative asset paths.

        Raises:
            ParseError: Raised if headings are badly nested, if a delimited region is \
                not terminated, if bullets are inconsistently indented or if a link \
                reference cannot be resolved.

        Returns:
            The parsed document.
        """
        builder = _OutlineBuilder(self._fragment_lists)
        builder.build(text.splitlines())
        roots = self._prune(builder.roots)
        if not roots:
            msg = "document contains no slides"
            raise ParseError(msg)
        titles: dict[str, SlidePath] = {}
        self._index_titles(roots, (), titles)
        resolver = _LinkResolver(self._link_schemes, builder.abbreviations, titles)
        return Document(
            slides=tuple(self._freeze(root, resolver) for root in roots),
            metadata=builder.metadata,
            base_dir=base_dir,
        )

    def from_path(self, path: Path) -> Document:
        """Parse a document file, resolving its assets against its directory.

        Args:
            path: Path to the UTF-8 outline file.

        Returns:
            The parsed document.
        """
        return self.parse(path.read_text(encoding="utf8"), base_dir=path.parent)

    def _prune(self, slides: list[_PendingSlide]) -> list[_PendingSlide]:
        kept = []
        for slide in slides:
            if _no_export_tag in slide.tags:
                _logger.debug(
                    "Dropping slide %r on line %d", slide.title, slide.line_number
                )
                continue
            slide.children = self._prune(slide.children)
            kept.append(slide)
        return kept

    def _index_titles(
        self,
        slides: list[_PendingSlide],
        base_path: tuple[int, ...],
        titles: dict[str, SlidePath],
    ) -> None:
        for index, slide in enumerate(slides):
            path = SlidePath((*base_path, index))
            if slide.title is not None:
                titles.setdefault(slide.title, path)
            self._index_titles(slide.children, path, titles)

    def _freeze(self, slide: _PendingSlide, resolver: "_LinkResolver") -> SlideNode:
        return SlideNode(
            title=slide.title,
            body=tuple(
                resolver.resolve(block) if isinstance(block, _PendingLink) else block
                for block in slide.body
            ),
            children=tuple(self._freeze(child, resolver) for child in slide.children),
            depth=slide.depth,
            tags=slide.tags,
            notes="\n\n".join(slide.notes) or None,
        )


class _LinkResolver:
    def __init__(
        self,
        link_schemes: frozenset[str],
        abbreviations: dict[str, str],
        titles: dict[str, SlidePath],
    ) -> None:
        self._link_schemes = link_schemes
        self._abbreviations = abbreviations
        self._titles = titles

    def resolve(self, link: _PendingLink) -> Link | Image:
        target = link.target
        if target.startswith("*"):
            title = target[1:].strip()
            if title not in self._titles:
                msg = f"no slide titled {title!r}"
                raise ParseError(msg, link.line_number, link.line)
            return Link(
                url=f"#/{'/'.join(str(i) for i in self._titles[title])}",
                label=link.label or title,
                target=self._titles[title],
                fragment=link.fragment,
            )
        if (match := _scheme_re.match(target)) is not None:
            scheme, rest = match.groups()
            if scheme.lower() == "file" and link.label is None and _is_image(rest):
                return Image(PurePath(rest), fragment=link.fragment)
            if scheme.lower() in self._link_schemes:
                return Link(url=target, label=link.label, fragment=link.fragment)
            if scheme in self._abbreviations:
                prefix = self._abbreviations[scheme]
                url = prefix.replace("%s", rest) if "%s" in prefix else prefix + rest
                return Link(url=url, label=link.label, fragment=link.fragment)
            # Windows drive letters look like schemes
            if len(scheme) > 1:
                msg = f"unknown link abbreviation {scheme!r}"
                raise ParseError(msg, link.line_number, link.line)
        if link.label is None and _is_image(target):
            return Image(PurePath(target), fragment=link.fragment)
        return Link(url=target, label=link.label, fragment=link.fragment)


def _is_image(target: str) -> bool:
    return PurePath(target).suffix.lower() in _image_suffixes


def parse_document(text: str, base_dir: Path = Path()) -> Document:
    """Parse outline markup with the default options.

    Args:
        text: Content of the document.
        base_dir: Directory used to resolve relative asset paths.

    Returns:
        The parsed document.
    """
    return Parser().parse(text, base_dir)
