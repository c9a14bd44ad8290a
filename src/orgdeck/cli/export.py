from pathlib import Path

from . import app


@app.command()
def export(document: Path, /, *, output: Path | None = None) -> None:
    """Export DOCUMENT to a standalone HTML file.

    Args:
        document: Path to the outline document
        output: Path of the HTML file, defaults to the output directory setting
    """
    from ..configuring.settings import Settings
    from ..pipelines import default_output_path
    from ..pipelines import export as export_pipeline

    settings = Settings.from_yaml(document)
    export_pipeline(
        settings=settings,
        document_path=document,
        output_path=output or default_output_path(settings, document),
    )
