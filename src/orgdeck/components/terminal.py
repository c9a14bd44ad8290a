from rich.console import Console, Group, RenderableType
from rich.padding import Padding
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from ..models import (
    CodeItem,
    FrameItem,
    ImageItem,
    LinkItem,
    ListFrameItem,
    ListItem,
    PlaceholderItem,
    QuoteItem,
    TextItem,
    VisualFrame,
    format_slide_path,
)
from .protocols import SurfaceProtocol


class TerminalSurface(SurfaceProtocol):
    """Draw frames on a Rich console."""

    def __init__(self, console: Console, code_theme: str = "monokai") -> None:
        self._console = console
        self._code_theme = code_theme

    def draw(self, frame: VisualFrame) -> None:
        title = frame.title or ""
        self._console.rule(f"[bold]{title}" if title else "", align="left")
        for item in frame.items:
            self._console.print(Padding(self.renderable(item), (0, 0, 1, 2)))
        if frame.fragment_count:
            self._console.print(
                f"[dim]{frame.fragment_index}/{frame.fragment_count}[/]",
                justify="right",
            )

    def renderable(self, item: FrameItem) -> RenderableType:
        match item:
            case TextItem(text=text):
                return Text(text)
            case ListFrameItem(items=items, ordered=ordered):
                return Group(*self._list_lines(items, ordered, 0))
            case QuoteItem(text=text, attribution=attribution):
                return Panel(
                    Text(text, style="italic"),
                    subtitle=f"-- {attribution}" if attribution else None,
                    subtitle_align="right",
                    border_style="dim",
                )
            case CodeItem(code=code, language=language) if language is not None:
                return Syntax(code, language, theme=self._code_theme)
            case CodeItem(code=code):
                return Text(code, no_wrap=True)
            case ImageItem(path=path):
                return Text(f"[image] {path}", style="cyan")
            case PlaceholderItem(text=text):
                return Panel(Text(text), border_style="red")
            case LinkItem(url=url, label=label, target=target):
                if target is not None:
                    return Text(f"{label} (slide {format_slide_path(target)})")
                return Text(label, style=f"underline link {url}")
            case _:
                msg = f"cannot draw frame item {item!r}"
                raise TypeError(msg)

    def _list_lines(
        self, items: tuple[ListItem, ...], ordered: bool, level: int
    ) -> list[Text]:
        lines = []
        for index, item in enumerate(items, start=1):
            marker = f"{index}." if ordered else "•"
            lines.append(Text(f"{'  ' * level}{marker} {item.text}"))
            lines.extend(self._list_lines(item.children, ordered, level + 1))
        return lines
