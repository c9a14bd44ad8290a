from pathlib import Path

from . import app


@app.command()
def tree(document: Path, /, *, fragments: bool = True) -> None:
    """Show the slide tree of DOCUMENT.

    Args:
        document: Path to the outline document
        fragments: Display the number of fragments of each slide
    """
    from rich import print as rich_print

    from ..configuring.settings import Settings
    from ..pipelines import load
    from ..processing.rich_tree import SlideTreeProcessor

    settings = Settings.from_yaml(document)
    rich_print(
        SlideTreeProcessor(show_fragments=fragments).process(load(settings, document))
    )
