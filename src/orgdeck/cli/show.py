from pathlib import Path

from . import app


@app.command()
def show(
    document: Path,
    /,
    *,
    path: str = "0",
    fragment: int | None = None,
) -> None:
    """Render a single slide of DOCUMENT in the terminal.

    Args:
        document: Path to the outline document
        path: Dot-separated path of the slide to render, starting at 0
        fragment: Number of revealed fragments, all of them if unset
    """
    from rich.console import Console

    from ..components.factory import SettingsFactory
    from ..configuring.settings import Settings
    from ..exceptions import InvalidPathError
    from ..models import format_slide_path, parse_slide_path
    from ..pipelines import load

    settings = Settings.from_yaml(document)
    factory = SettingsFactory(settings)
    parsed = load(settings, document)
    slide_path = parse_slide_path(path)
    node = parsed.node_at(slide_path)
    if fragment is None:
        fragment = node.fragment_count
    elif not 0 <= fragment <= node.fragment_count:
        msg = (
            f"slide {format_slide_path(slide_path)} has {node.fragment_count} "
            f"fragments, cannot reveal {fragment}"
        )
        raise InvalidPathError(msg)
    frame = factory.renderer(parsed.base_dir).render(node, fragment)
    factory.terminal_surface(Console()).draw(frame)
