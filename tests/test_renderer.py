from io import StringIO
from logging import WARNING
from pathlib import Path

from pytest import LogCaptureFixture, fixture, raises
from rich.console import Console

from orgdeck.components.parser import parse_document
from orgdeck.components.renderer import Renderer
from orgdeck.components.terminal import TerminalSurface
from orgdeck.models import (
    CodeItem,
    ImageItem,
    ListFrameItem,
    ListItem,
    PlaceholderItem,
    QuoteItem,
    SlideNode,
    TextItem,
)

SLIDE = """\
* Bindings
The view observes the view model.
#+ATTR_REVEAL: :frag
- map
- filter
- combineLatest

#+ATTR_REVEAL: :frag
#+BEGIN_QUOTE
Bind, don't push.
-- Anonymous
#+END_QUOTE
"""


@fixture
def slide() -> SlideNode:
    return parse_document(SLIDE).slides[0]


def test_progressive_reveal(slide: SlideNode, tmp_path: Path) -> None:
    renderer = Renderer(tmp_path)

    frames = [renderer.render(slide, i) for i in range(slide.fragment_count + 1)]

    assert slide.fragment_count == 4
    assert frames[0].items == (TextItem("The view observes the view model."),)
    assert frames[2].items[1] == ListFrameItem((ListItem("map"), ListItem("filter")))
    assert len(frames[3].items) == 2
    assert frames[4].items[-1] == QuoteItem("Bind, don't push.", "Anonymous")
    assert [frame.fragment_index for frame in frames] == [0, 1, 2, 3, 4]
    assert all(frame.title == "Bindings" for frame in frames)


def test_fragment_index_out_of_range(slide: SlideNode, tmp_path: Path) -> None:
    renderer = Renderer(tmp_path)

    with raises(ValueError, match="out of range"):
        renderer.render(slide, 5)
    with raises(ValueError, match="out of range"):
        renderer.render(slide, -1)


def test_code_languages(tmp_path: Path) -> None:
    text = (
        "* Code\n"
        "#+BEGIN_SRC python\nx = 1\n#+END_SRC\n"
        "#+BEGIN_SRC no-such-language\nx = 1\n#+END_SRC\n"
        "#+BEGIN_SRC\nx = 1\n#+END_SRC\n"
    )
    node = parse_document(text).slides[0]

    frame = Renderer(tmp_path).render(node, 0)

    assert frame.items == (
        CodeItem("x = 1", "python"),
        CodeItem("x = 1", None),
        CodeItem("x = 1", None),
    )


def test_images(tmp_path: Path, caplog: LogCaptureFixture) -> None:
    (tmp_path / "img").mkdir()
    (tmp_path / "img" / "present.png").write_bytes(b"\x89PNG")
    text = "* Images\n[[img/present.png]]\n[[img/gone.png]]\n"
    node = parse_document(text).slides[0]

    with caplog.at_level(WARNING):
        frame = Renderer(tmp_path, placeholder="<{path}>").render(node, 0)

    assert frame.items == (
        ImageItem((tmp_path / "img" / "present.png").resolve()),
        PlaceholderItem("<img/gone.png>", tmp_path / "img" / "gone.png"),
    )
    assert "gone.png" in caplog.text


def test_terminal_surface(slide: SlideNode, tmp_path: Path) -> None:
    file = StringIO()
    surface = TerminalSurface(Console(file=file, width=80), code_theme="monokai")
    node = parse_document(
        "* Code\n#+BEGIN_SRC unknown-language\nplain <text>\n#+END_SRC\n"
    ).slides[0]

    surface.draw(Renderer(tmp_path).render(slide, 2))
    surface.draw(Renderer(tmp_path).render(node, 0))

    out = file.getvalue()
    assert "Bindings" in out
    assert "• map" in out
    assert "• filter" in out
    assert "combineLatest" not in out
    assert "2/4" in out
    assert "plain <text>" in out


def test_placeholder_with_unknown_fields(tmp_path: Path) -> None:
    node = parse_document("* Images\n[[img/gone.png]]\n").slides[0]

    frame = Renderer(tmp_path, placeholder="missing {file} at {path} {").render(
        node, 0
    )

    assert frame.items == (
        PlaceholderItem(
            "missing {file} at img/gone.png {", tmp_path / "img" / "gone.png"
        ),
    )
