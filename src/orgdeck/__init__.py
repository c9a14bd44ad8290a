from typing import Any

app_name = "orgdeck"
__version__ = "0.1.0"


def __getattr__(name: str) -> Any:
    """Lazy-load attributes of the orgdeck package.

    This way of loading is required to avoid loading any code before some important \
    setup is done (such as logging setup). If we were to use a normal syntax to expose \
    the attributes, such as writing

        from .components.parser import parse_document

    directly as a top-level module instruction, the entry point (the main function of \
    the orgdeck.cli.__init__ file) could not setup logging before loading the modules \
    that contain the attributes. That is due to the fact that loading \
    orgdeck.cli.__init__ entails loading orgdeck.__init__ first. This cannot be \
    avoided, hence this hack.

    Args:
        name: Name of the attribute to load.

    Raises:
        AttributeError: Raised if the name doesn't match a lazy-loadable attribute.

    Returns:
        Lazy-loaded attribute.
    """
    match name:
        case "parse_document":
            from .components.parser import parse_document

            return parse_document
        case "Navigator":
            from .components.navigator import Navigator

            return Navigator
        case "Renderer":
            from .components.renderer import Renderer

            return Renderer
        case "Document":
            from .models import Document

            return Document
        case _:
            msg = f"cannot find the attribute {name} in module {__name__}"
            raise AttributeError(msg)
