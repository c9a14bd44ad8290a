from logging import INFO, basicConfig, getLogger
from sys import exit as sys_exit

from cyclopts import App
from rich.logging import RichHandler

app = App(help="Present and export outline slide documents.")
app.register_install_completion_command()


def main() -> None:
    basicConfig(
        level=INFO,
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(rich_tracebacks=True, tracebacks_show_locals=False)],
    )
    from ..exceptions import OrgdeckError
    from ..utils import import_module_and_submodules

    import_module_and_submodules(__name__)
    try:
        app()
    except OrgdeckError as e:
        getLogger(__name__).critical(str(e))
        sys_exit(1)
