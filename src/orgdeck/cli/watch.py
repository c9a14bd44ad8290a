from pathlib import Path

from . import app


@app.command()
def watch(document: Path, /, *, output: Path | None = None) -> None:
    """Export DOCUMENT to HTML each time its directory changes.

    Args:
        document: Path to the outline document
        output: Path of the HTML file, defaults to the output directory setting
    """
    from logging import getLogger

    from ..configuring.settings import Settings
    from ..pipelines import default_output_path, export, watch

    logger = getLogger(__name__)

    settings = Settings.from_yaml(document)
    output_path = output or default_output_path(settings, document)
    logger.info("Watching %s", document.parent)
    watch(
        frozenset([document.parent]),
        frozenset([output_path, settings.paths.output_dir]),
        export,
        settings=settings,
        document_path=document,
        output_path=output_path,
    )
