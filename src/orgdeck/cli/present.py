from pathlib import Path

from . import app


@app.command()
def present(document: Path, /, *, start: str | None = None) -> None:
    """Present DOCUMENT interactively in the terminal.

    Args:
        document: Path to the outline document
        start: Dot-separated path of the slide to start from
    """
    from rich.console import Console

    from ..configuring.settings import Settings
    from ..models import parse_slide_path
    from ..pipelines import present as present_pipeline

    present_pipeline(
        settings=Settings.from_yaml(document),
        document_path=document,
        console=Console(),
        start=None if start is None else parse_slide_path(start),
    )
