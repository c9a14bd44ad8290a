"""Export a whole document to a standalone HTML file.

Top-level slides become `<section>` elements and their nested slides are nested \
`<section>` elements, the way reveal.js lays out vertical stacks. Fragment blocks and \
fragment list items carry the `fragment` class.
"""

from contextlib import suppress
from filecmp import cmp
from functools import cached_property
from html import escape
from logging import getLogger
from os.path import relpath
from pathlib import Path
from shutil import move
from tempfile import NamedTemporaryFile

from jinja2 import Environment, FileSystemLoader, PackageLoader, select_autoescape
from markupsafe import Markup
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name

from .. import __version__, app_name
from ..models import (
    BulletList,
    CodeBlock,
    Document,
    Image,
    Link,
    Paragraph,
    Quote,
)
from ..processing import BlockVisitor
from .protocols import ExporterProtocol
from .renderer import lexer_name, placeholder_text

_logger = getLogger(__name__)


class HtmlExporter(ExporterProtocol):
    def __init__(
        self,
        code_theme: str = "monokai",
        placeholder: str = "missing image: {path}",
        template_path: Path | None = None,
    ) -> None:
        """Initialize an instance with the export options.

        Args:
            code_theme: Pygments style used to highlight code blocks.
            placeholder: Text displayed instead of missing images, `{path}` being \
                replaced by the asset path.
            template_path: Jinja2 template to use instead of the packaged one.
        """
        self._code_theme = code_theme
        self._placeholder = placeholder
        self._template_path = template_path

    def render_to_str(self, document: Document, output_dir: Path | None = None) -> str:
        """Render the HTML export of `document`.

        Args:
            document: Document to export.
            output_dir: Directory the HTML file will live in, image sources being \
                relative to it. Defaults to the document directory.

        Returns:
            The HTML content.
        """
        template = self._env.get_template(
            "deck.html.j2" if self._template_path is None else self._template_path.name
        )
        return template.render(
            document=document,
            output_dir=document.base_dir if output_dir is None else output_dir,
            generator=f"{app_name} {__version__}",
            placeholder=self._placeholder,
            code_css=HtmlFormatter(style=self._code_theme).get_style_defs(
                ".highlight"
            ),
        )

    def export(self, document: Document, output_path: Path) -> None:
        """Write the HTML export of `document` to `output_path`.

        The file is only replaced when its content changes, so that watchers of the \
        output (such as a browser auto-reload) are not triggered needlessly.

        Args:
            document: Document to export.
            output_path: Path of the HTML file to write.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        content = self.render_to_str(document, output_path.parent)
        with NamedTemporaryFile("w", encoding="utf8", delete=False) as fh:
            temporary_path = Path(fh.name)
        try:
            temporary_path.write_text(f"{content}\n", encoding="utf8")
            if not output_path.exists() or not cmp(temporary_path, output_path):
                move(temporary_path, output_path)
                _logger.info("Exported %s", output_path)
            else:
                _logger.info("%s is up to date", output_path)
        finally:
            with suppress(FileNotFoundError):
                temporary_path.unlink()

    @cached_property
    def _env(self) -> Environment:
        env = Environment(
            loader=(
                PackageLoader(app_name, "templates")
                if self._template_path is None
                else FileSystemLoader(self._template_path.parent)
            ),
            autoescape=select_autoescape(["html", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        env.filters["block_kind"] = lambda block: block.accept(_KindVisitor())
        env.filters["highlight"] = self._highlight
        env.globals["image_source"] = self._image_source
        env.globals["placeholder_text"] = placeholder_text
        return env

    def _highlight(self, code_block: CodeBlock) -> Markup:
        name = lexer_name(code_block.language)
        if name is None:
            return Markup(f"<pre><code>{escape(code_block.text)}</code></pre>")
        return Markup(
            highlight(code_block.text, get_lexer_by_name(name), HtmlFormatter())
        )

    def _image_source(
        self, document: Document, image: Image, output_dir: Path
    ) -> str | None:
        path = document.base_dir / image.path
        if path.is_file():
            return Path(relpath(path.resolve(), output_dir.resolve())).as_posix()
        _logger.warning("Missing image asset %s, using a placeholder", path)
        return None


class _KindVisitor(BlockVisitor[[], str]):
    def visit_paragraph(self, paragraph: Paragraph) -> str:
        return "paragraph"

    def visit_bullet_list(self, bullet_list: BulletList) -> str:
        return "bullet_list"

    def visit_image(self, image: Image) -> str:
        return "image"

    def visit_quote(self, quote: Quote) -> str:
        return "quote"

    def visit_code_block(self, code_block: CodeBlock) -> str:
        return "code_block"

    def visit_link(self, link: Link) -> str:
        return "link"