from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from rich.console import Console

    from ..models import Document, SlideNode, VisualFrame


class ParserProtocol(Protocol):
    """Build a document from outline markup."""

    def parse(self, text: str, base_dir: Path = Path()) -> "Document":
        """Parse outline markup into a document.

        Args:
            text: Content of the document.
            base_dir: Directory used to resolve relative asset paths.

        Returns:
            The parsed document.
        """

    def from_path(self, path: Path) -> "Document": ...


class RendererProtocol(Protocol):
    def render(self, node: "SlideNode", fragment_index: int) -> "VisualFrame": ...


class SurfaceProtocol(Protocol):
    def draw(self, frame: "VisualFrame") -> None: ...


class ExporterProtocol(Protocol):
    def export(self, document: "Document", output_path: Path) -> None: ...


class FactoryProtocol(Protocol):
    def parser(self) -> ParserProtocol: ...

    def renderer(self, base_dir: Path) -> RendererProtocol: ...

    def terminal_surface(self, console: "Console") -> SurfaceProtocol: ...

    def exporter(self) -> ExporterProtocol: ...
