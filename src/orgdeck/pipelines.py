from collections.abc import Callable, Set
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Any

from watchfiles import Change
from watchfiles import watch as watchfiles_watch

from .components.factory import SettingsFactory
from .configuring.settings import Settings
from .models import Document, SlidePath

if TYPE_CHECKING:
    from rich.console import Console

_logger = getLogger(__name__)


def load(settings: Settings, document_path: Path) -> Document:
    return SettingsFactory(settings).parser().from_path(document_path)


def default_output_path(settings: Settings, document_path: Path) -> Path:
    return settings.paths.output_dir / f"{document_path.stem}.html"


def export(settings: Settings, document_path: Path, output_path: Path) -> None:
    factory = SettingsFactory(settings)
    document = factory.parser().from_path(document_path)
    factory.exporter().export(document, output_path)


def present(
    settings: Settings,
    document_path: Path,
    console: "Console",
    start: SlidePath | None = None,
) -> None:
    """Present a document interactively in the terminal.

    Args:
        settings: Settings to build the components with.
        document_path: Path to the document to present.
        console: Console to draw on and to read commands from.
        start: Slide to start from, the first one if None.
    """
    from .components.navigator import Navigator
    from .components.presenter import Presenter

    factory = SettingsFactory(settings)
    document = load(settings, document_path)
    navigator = Navigator(document)
    if start is not None:
        navigator.jump_to(start)
    presenter = Presenter(
        navigator=navigator,
        renderer=factory.renderer(document.base_dir),
        surface=factory.terminal_surface(console),
        loader=lambda: load(settings, document_path),
    )
    presenter.run(lambda: console.input("[dim]n/p/j PATH/f N/r/q >[/] "))


def watch[**P](
    watch: Set[Path],
    avoid: Set[Path],
    function: Callable[P, Any],
    *function_args: P.args,
    **function_kwargs: P.kwargs,
) -> None:
    _logger.info("Initial build")
    try:
        function(*function_args, **function_kwargs)
        _logger.info("Initial build finished")
    except Exception as e:
        _logger.exception(str(e), extra={"markup": True})

    resolved_avoid = frozenset(p.resolve() for p in avoid)

    def watch_filter(_change: Change, path: str) -> bool:
        resolved = Path(path).resolve()
        return not any(resolved.is_relative_to(a) for a in resolved_avoid)

    changes = watchfiles_watch(*watch, watch_filter=watch_filter, raise_interrupt=False)
    for _ in changes:
        _logger.info("Detected changes, starting a new build")
        try:
            function(*function_args, **function_kwargs)
            _logger.info("Build finished")
        except Exception as e:
            _logger.exception(str(e), extra={"markup": True})
