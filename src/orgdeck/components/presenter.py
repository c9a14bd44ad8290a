"""Drive a presentation from textual commands.

The presenter is single-threaded: each command is handled to completion (cursor \
mutation, then rendering) before the next one is read.

Commands:

- `n`, `next` or an empty line: advance
- `p`, `prev`: retreat
- `j PATH`, `jump PATH`: jump to the slide at PATH (e.g. `1.0`)
- `f N`, `follow N`: follow the N-th revealed link of the current slide
- `r`, `reload`: parse the document again
- `q`, `quit`: stop
"""

from collections.abc import Callable
from logging import getLogger

from ..exceptions import InvalidPathError, ParseError
from ..models import Document, Link, VisualFrame, parse_slide_path
from .navigator import Move, Navigator
from .protocols import RendererProtocol, SurfaceProtocol

_logger = getLogger(__name__)


class Presenter:
    def __init__(
        self,
        navigator: Navigator,
        renderer: RendererProtocol,
        surface: SurfaceProtocol,
        loader: Callable[[], Document] | None = None,
    ) -> None:
        self._navigator = navigator
        self._renderer = renderer
        self._surface = surface
        self._loader = loader

    @property
    def navigator(self) -> Navigator:
        return self._navigator

    def show(self) -> VisualFrame:
        frame = self._renderer.render(
            self._navigator.current, self._navigator.cursor.fragment
        )
        self._surface.draw(frame)
        return frame

    def handle(self, command: str) -> bool:
        """Apply a command to the navigator.

        Args:
            command: Command line as typed by the user.

        Returns:
            False if the presentation should stop, True otherwise.
        """
        name, _, argument = command.strip().partition(" ")
        argument = argument.strip()
        match name.lower():
            case "" | "n" | "next":
                self._report(self._navigator.advance())
            case "p" | "prev" | "previous":
                self._report(self._navigator.retreat())
            case "j" | "jump":
                try:
                    self._navigator.jump_to(parse_slide_path(argument))
                except InvalidPathError as e:
                    _logger.warning("Cannot jump: %s", e)
            case "f" | "follow":
                self._follow(argument)
            case "r" | "reload":
                self._reload()
            case "q" | "quit":
                return False
            case _:
                _logger.warning("Unknown command %r", command.strip())
        return True

    def run(self, read: Callable[[], str]) -> None:
        """Show the current frame and handle commands until asked to stop.

        Args:
            read: Function returning the next command. Raising EOFError stops the \
                presentation.
        """
        self.show()
        while True:
            try:
                command = read()
            except EOFError:
                break
            if not self.handle(command):
                break
            self.show()

    def _follow(self, argument: str) -> None:
        links = self._revealed_links()
        try:
            number = int(argument or "1")
        except ValueError:
            number = 0
        if not 1 <= number <= len(links):
            _logger.warning("No link number %r on this slide", argument)
            return
        link = links[number - 1]
        try:
            self._navigator.follow(link)
        except InvalidPathError as e:
            _logger.warning("Cannot follow: %s", e)

    def _revealed_links(self) -> list[Link]:
        remaining = self._navigator.cursor.fragment
        links = []
        for block in self._navigator.current.body:
            if block.fragment:
                if remaining == 0:
                    continue
                remaining -= min(remaining, block.fragment_count)
            if isinstance(block, Link):
                links.append(block)
        return links

    def _reload(self) -> None:
        if self._loader is None:
            _logger.warning("Nothing to reload from")
            return
        try:
            document = self._loader()
        except ParseError as e:
            _logger.error("Keeping the current document: %s", e)
            return
        self._navigator.reload(document)
        _logger.info("Reloaded document")

    @staticmethod
    def _report(move: Move) -> None:
        if move is Move.END_OF_DOCUMENT:
            _logger.info("Already at the end of the document")
        elif move is Move.START_OF_DOCUMENT:
            _logger.info("Already at the start of the document")
