from pathlib import Path, PurePath

from pytest import mark, raises

from orgdeck.components.parser import Parser, parse_document
from orgdeck.exceptions import InvalidPathError, ParseError
from orgdeck.models import (
    BulletList,
    CodeBlock,
    Image,
    Link,
    ListItem,
    Paragraph,
    Quote,
)


def test_heading_nesting() -> None:
    document = parse_document("* A\n** B\n*** C\n")

    assert len(document.slides) == 1
    a = document.slides[0]
    assert a.title == "A"
    assert [child.title for child in a.children] == ["B"]
    b = a.children[0]
    assert [child.title for child in b.children] == ["C"]
    c = b.children[0]
    assert (a.depth, b.depth, c.depth) == (0, 1, 2)
    assert c.children == ()


def test_depths_match_heading_nesting() -> None:
    text = "* A\n** A1\n*** A1a\n** A2\n* B\n** B1\n* C\n"

    document = parse_document(text)

    assert [(path, node.title) for path, node in document.walk()] == [
        ((0,), "A"),
        ((0, 0), "A1"),
        ((0, 0, 0), "A1a"),
        ((0, 1), "A2"),
        ((1,), "B"),
        ((1, 0), "B1"),
        ((2,), "C"),
    ]
    for path, node in document.walk():
        assert node.depth == len(path) - 1


@mark.parametrize(
    ("text", "line_number"),
    [
        ("* A\n*** C\n", 2),
        ("** A\n", 1),
        ("* A\n** B\n**** D\n", 3),
    ],
)
def test_malformed_heading_nesting(text: str, line_number: int) -> None:
    with raises(ParseError) as exc_info:
        parse_document(text)
    assert exc_info.value.line_number == line_number
    assert f"line {line_number}" in str(exc_info.value)


def test_document_keywords() -> None:
    document = parse_document(
        "#+TITLE: MVVM\n#+AUTHOR: Jane Doe\n# a comment\n\n* Intro\n"
    )

    assert document.title == "MVVM"
    assert document.metadata == {"title": "MVVM", "author": "Jane Doe"}


def test_content_outside_slides() -> None:
    with raises(ParseError, match="content outside of any slide"):
        parse_document("#+TITLE: MVVM\nSome text\n* Intro\n")


def test_empty_document() -> None:
    with raises(ParseError, match="no slides"):
        parse_document("#+TITLE: Nothing yet\n")


def test_paragraphs() -> None:
    document = parse_document("* S\nThe view model\nexposes state.\n\nSecond one.\n")

    assert document.slides[0].body == (
        Paragraph("The view model exposes state."),
        Paragraph("Second one."),
    )


def test_nested_bullets() -> None:
    text = "* S\n- a\n  - b\n    continued\n  - c\n- d\n"

    (block,) = parse_document(text).slides[0].body

    assert block == BulletList(
        (
            ListItem("a", (ListItem("b continued"), ListItem("c"))),
            ListItem("d"),
        )
    )
    assert not block.fragment


def test_ordered_bullets() -> None:
    (block,) = parse_document("* S\n1. first\n2. second\n").slides[0].body

    assert isinstance(block, BulletList)
    assert block.ordered
    assert [item.text for item in block.items] == ["first", "second"]


def test_inconsistent_bullet_indentation() -> None:
    with raises(ParseError, match="inconsistent bullet indentation") as exc_info:
        parse_document("* S\n- a\n    - b\n  - c\n")
    assert exc_info.value.line_number == 4


def test_quote_and_code_are_verbatim() -> None:
    text = (
        "* S\n"
        "#+BEGIN_QUOTE\n"
        "Line one\n"
        "  line two\n"
        "-- Someone\n"
        "#+END_QUOTE\n"
        "#+begin_src kotlin :exports code\n"
        "fun main() {\n"
        "    * not a heading\n"
        "}\n"
        "#+end_src\n"
    )

    quote, code = parse_document(text).slides[0].body

    assert quote == Quote("Line one\n  line two", "Someone")
    assert code == CodeBlock("kotlin", "fun main() {\n    * not a heading\n}")


def test_code_block_without_language() -> None:
    (code,) = parse_document("* S\n#+BEGIN_SRC\nx = 1\n#+END_SRC\n").slides[0].body

    assert code == CodeBlock("", "x = 1")


def test_unterminated_block() -> None:
    with raises(ParseError, match="unterminated SRC block") as exc_info:
        parse_document("* S\n#+BEGIN_SRC python\nprint(1)\n")
    assert exc_info.value.line_number == 2


def test_end_without_begin() -> None:
    with raises(ParseError, match="without a matching"):
        parse_document("* S\n#+END_QUOTE\n")


def test_notes() -> None:
    slide = parse_document(
        "* S\nVisible.\n#+BEGIN_NOTES\nSay hello.\n#+END_NOTES\n"
    ).slides[0]

    assert slide.body == (Paragraph("Visible."),)
    assert slide.notes == "Say hello."


def test_images_are_not_checked_at_parse_time() -> None:
    text = "* S\n[[file:img/missing.png]]\n[[./diagram.svg]]\n"

    slide = parse_document(text).slides[0]

    assert slide.body == (
        Image(PurePath("img/missing.png")),
        Image(PurePath("diagram.svg")),
    )


def test_links() -> None:
    text = (
        "#+LINK: rx https://reactivex.io/documentation/%s.html\n"
        "#+LINK: gh https://github.com/\n"
        "* S\n"
        "[[https://example.com][Example]]\n"
        "[[rx:observable][Observables]]\n"
        "[[gh:ReactiveX/RxJava]]\n"
        "[[*Later][Go later]]\n"
        "* Later\n"
    )

    slide = parse_document(text).slides[0]

    assert slide.body == (
        Link("https://example.com", "Example"),
        Link("https://reactivex.io/documentation/observable.html", "Observables"),
        Link("https://github.com/ReactiveX/RxJava"),
        Link("#/1", "Go later", (1,)),
    )


@mark.parametrize(
    "line",
    ["[[nope:thing][Thing]]", "[[*Nowhere][Lost]]"],
)
def test_unresolvable_link_reference(line: str) -> None:
    with raises(ParseError, match="unknown link abbreviation|no slide titled") as e:
        parse_document(f"* S\n{line}\n")
    assert e.value.line == line


def test_restricted_link_schemes() -> None:
    with raises(ParseError, match="unknown link abbreviation"):
        Parser(link_schemes=["https"]).parse("* S\n[[ftp://host/file][File]]\n")


def test_fragments() -> None:
    text = (
        "* S\n"
        "Always there.\n"
        "#+ATTR_REVEAL: :frag (appear)\n"
        "- one\n"
        "- two\n"
        "- three\n"
        "\n"
        "#+ATTR_REVEAL: :frag\n"
        "#+BEGIN_SRC python\n"
        "pass\n"
        "#+END_SRC\n"
        "- not a fragment\n"
    )

    slide = parse_document(text).slides[0]

    assert [block.fragment for block in slide.body] == [False, True, True, False]
    assert slide.fragment_count == 4


def test_fragment_lists_option() -> None:
    slide = Parser(fragment_lists=True).parse("* S\n- one\n- two\n").slides[0]

    assert slide.fragment_count == 2


def test_tags_and_noexport() -> None:
    text = "* Kept :intro:mvvm:\n* Dropped :noexport:\n** Child\n* Also kept\n"

    document = parse_document(text)

    assert [node.title for node in document.slides] == ["Kept", "Also kept"]
    assert document.slides[0].tags == frozenset({"intro", "mvvm"})


def test_from_path(tmp_path: Path) -> None:
    path = tmp_path / "deck.org"
    path.write_text("* Hello\n[[img/a.png]]\n", encoding="utf8")

    document = Parser().from_path(path)

    assert document.base_dir == tmp_path
    assert document.slides[0].title == "Hello"


def test_notes_consume_fragment_marker() -> None:
    text = (
        "* S\n"
        "#+ATTR_REVEAL: :frag\n"
        "#+BEGIN_NOTES\n"
        "Pause here.\n"
        "#+END_NOTES\n"
        "Always visible.\n"
    )

    slide = parse_document(text).slides[0]

    assert slide.body == (Paragraph("Always visible."),)
    assert slide.fragment_count == 0


def test_node_at() -> None:
    document = parse_document("* A\n** A1\n*** A1a\n* B\n")

    assert document.node_at((0, 0, 0)).title == "A1a"
    assert document.node_at((1,)).title == "B"
    with raises(InvalidPathError, match=r"no slide at 0\.1 \(index 1"):
        document.node_at((0, 1))
    with raises(InvalidPathError, match="empty slide path"):
        document.node_at(())
