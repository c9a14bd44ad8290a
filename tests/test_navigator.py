from pytest import fixture, mark, raises

from orgdeck.components.navigator import Move, Navigator
from orgdeck.components.parser import parse_document
from orgdeck.exceptions import InvalidPathError
from orgdeck.models import Cursor, Document

DECK = """\
* Intro
Welcome.

* MVC
#+ATTR_REVEAL: :frag
- Model
- View
- Controller

** Problems
#+ATTR_REVEAL: :frag
Massive controllers.

*** Details
Too much glue.

** More problems
Coupling.

* MVVM
[[*Details][See the details]]
[[https://example.com][Elsewhere]]
"""


@fixture
def document() -> Document:
    return parse_document(DECK)


def all_cursors(document: Document) -> list[Cursor]:
    navigator = Navigator(document)
    cursors = [navigator.cursor]
    while navigator.advance() is not Move.END_OF_DOCUMENT:
        cursors.append(navigator.cursor)
    return cursors


def test_initial_cursor(document: Document) -> None:
    navigator = Navigator(document)

    assert navigator.cursor == Cursor((0,), 0)
    assert navigator.current.title == "Intro"
    assert navigator.at_start


def test_presentation_order(document: Document) -> None:
    assert all_cursors(document) == [
        Cursor((0,), 0),
        Cursor((1,), 0),
        Cursor((1,), 1),
        Cursor((1,), 2),
        Cursor((1,), 3),
        Cursor((1, 0), 0),
        Cursor((1, 0), 1),
        Cursor((1, 0, 0), 0),
        Cursor((1, 1), 0),
        Cursor((2,), 0),
    ]


def test_advance_reveals_next_fragment(document: Document) -> None:
    navigator = Navigator(document)
    navigator.jump_to((1,))
    navigator.advance()
    assert navigator.cursor == Cursor((1,), 1)

    move = navigator.advance()

    assert move is Move.FRAGMENT
    assert navigator.cursor == Cursor((1,), 2)


def test_advance_enters_vertical_stack(document: Document) -> None:
    navigator = Navigator(document)
    navigator.jump_to((1, 0))
    navigator.advance()

    assert navigator.advance() is Move.SLIDE
    assert navigator.cursor == Cursor((1, 0, 0), 0)


def test_advance_ascends_to_next_sibling(document: Document) -> None:
    navigator = Navigator(document)
    navigator.jump_to((1, 1))

    assert navigator.advance() is Move.SLIDE
    assert navigator.cursor == Cursor((2,), 0)


def test_advance_at_end_is_idempotent(document: Document) -> None:
    navigator = Navigator(document)
    for _ in range(100):
        navigator.advance()
    end = navigator.cursor

    assert navigator.at_end
    assert navigator.advance() is Move.END_OF_DOCUMENT
    assert navigator.advance().is_boundary
    assert navigator.cursor == end == Cursor((2,), 0)


def test_retreat_at_start_is_a_no_op(document: Document) -> None:
    navigator = Navigator(document)

    assert navigator.retreat() is Move.START_OF_DOCUMENT
    assert navigator.cursor == Cursor((0,), 0)


@mark.parametrize("steps", range(9))
def test_advance_then_retreat_round_trips(document: Document, steps: int) -> None:
    navigator = Navigator(document)
    for _ in range(steps):
        navigator.advance()
    before = navigator.cursor

    navigator.advance()
    navigator.retreat()

    assert navigator.cursor == before


def test_retreat_walks_back_in_reverse_order(document: Document) -> None:
    forward = all_cursors(document)
    navigator = Navigator(document)
    navigator.jump_to((2,))

    backward = [navigator.cursor]
    while navigator.retreat() is not Move.START_OF_DOCUMENT:
        backward.append(navigator.cursor)

    assert backward == forward[::-1]


def test_retreat_to_parent_reveals_all_fragments(document: Document) -> None:
    navigator = Navigator(document)
    navigator.jump_to((1, 0))

    assert navigator.retreat() is Move.SLIDE
    assert navigator.cursor == Cursor((1,), 3)


@mark.parametrize("path", [(), (3,), (1, 2), (0, 0), (-1,), (1, 0, 0, 0)])
def test_jump_to_invalid_path_keeps_cursor(document: Document, path: tuple) -> None:
    navigator = Navigator(document)
    navigator.jump_to((1,))
    navigator.advance()
    before = navigator.cursor

    with raises(InvalidPathError):
        navigator.jump_to(path)

    assert navigator.cursor == before


def test_jump_to_resets_fragments(document: Document) -> None:
    navigator = Navigator(document)
    navigator.jump_to((1,))
    navigator.advance()

    navigator.jump_to((1, 0, 0))

    assert navigator.cursor == Cursor((1, 0, 0), 0)
    assert navigator.current.title == "Details"


def test_follow(document: Document) -> None:
    navigator = Navigator(document)
    navigator.jump_to((2,))
    internal, external = navigator.current.body

    navigator.follow(internal)
    assert navigator.cursor == Cursor((1, 0, 0), 0)

    with raises(InvalidPathError):
        navigator.follow(external)
    assert navigator.cursor == Cursor((1, 0, 0), 0)


def test_reload_keeps_existing_position(document: Document) -> None:
    navigator = Navigator(document)
    navigator.jump_to((1,))
    for _ in range(3):
        navigator.advance()

    navigator.reload(parse_document("* Intro\n* MVC\n- no more fragments\n"))

    assert navigator.cursor == Cursor((1,), 0)


def test_reload_resets_vanished_position(document: Document) -> None:
    navigator = Navigator(document)
    navigator.jump_to((1, 1))

    navigator.reload(parse_document("* Only one\n"))

    assert navigator.cursor == Cursor((0,), 0)
    assert navigator.current.title == "Only one"
