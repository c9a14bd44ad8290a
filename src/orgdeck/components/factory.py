from pathlib import Path
from typing import TYPE_CHECKING

from .protocols import (
    ExporterProtocol,
    FactoryProtocol,
    ParserProtocol,
    RendererProtocol,
    SurfaceProtocol,
)

if TYPE_CHECKING:
    from rich.console import Console

    from ..configuring.settings import Settings


class SettingsFactory(FactoryProtocol):
    def __init__(self, settings: "Settings") -> None:
        self._settings = settings

    def parser(self) -> ParserProtocol:
        from .parser import Parser

        return Parser(
            fragment_lists=self._settings.fragment_lists,
            link_schemes=self._settings.link_schemes,
        )

    def renderer(self, base_dir: Path) -> RendererProtocol:
        from .renderer import Renderer

        return Renderer(
            base_dir=base_dir, placeholder=self._settings.image_placeholder
        )

    def terminal_surface(self, console: "Console") -> SurfaceProtocol:
        from .terminal import TerminalSurface

        return TerminalSurface(console=console, code_theme=self._settings.code_theme)

    def exporter(self) -> ExporterProtocol:
        from .exporter import HtmlExporter

        return HtmlExporter(
            code_theme=self._settings.code_theme,
            placeholder=self._settings.image_placeholder,
            template_path=self._settings.paths.html_template,
        )
