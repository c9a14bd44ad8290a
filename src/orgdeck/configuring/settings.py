from functools import reduce
from pathlib import Path
from typing import Annotated, Any, Self

import appdirs
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationInfo,
)

from .. import app_name
from ..utils import dirs_hierarchy, find_git_dir, load_all_yamls

settings_file_name = "orgdeck.yml"
default_link_schemes = ("http", "https", "mailto", "ftp", "file")


def _convert(input_value: str | Path, info: ValidationInfo) -> Path:
    if isinstance(input_value, str):
        return Path(input_value.format(**info.data))
    return input_value


def _user_config_dir() -> Path:
    return Path(appdirs.user_config_dir(app_name)).resolve()


_Path = Annotated[Path, BeforeValidator(_convert), AfterValidator(Path.resolve)]


# ruff: noqa: RUF027
# mypy: ignore-errors
class Paths(BaseModel):
    model_config = ConfigDict(validate_default=True)
    current_dir: _Path
    user_config_dir: _Path = Field(default_factory=_user_config_dir)
    git_dir: _Path | None = Field(
        default_factory=lambda data: find_git_dir(data["current_dir"])
    )
    output_dir: _Path = "{current_dir}/html"
    html_template: _Path | None = None


class Settings(BaseModel):
    fragment_lists: bool = False
    """Reveal every bullet list item by item, even without an ATTR_REVEAL marker."""

    code_theme: str = "monokai"
    """Pygments style used to highlight code blocks."""

    image_placeholder: str = "missing image: {path}"
    """Text displayed instead of missing images. `{path}` is the asset path."""

    link_schemes: tuple[str, ...] = default_link_schemes
    """URL schemes accepted as is in links. Other prefixes must be abbreviations."""

    paths: Paths

    @classmethod
    def from_yaml(cls, path: Path) -> Self:
        """Load the settings applying to the documents of a directory.

        Every `orgdeck.yml` found in the git working directory root, the user \
        configuration directory and the directories between the git root and `path` \
        are merged, the most specific one winning.

        Args:
            path: Directory of the document, or the document itself.

        Returns:
            The merged settings.
        """
        resolved_path = path.resolve()
        if resolved_path.is_file():
            resolved_path = resolved_path.parent
        git_dir = find_git_dir(resolved_path)
        content: dict[str, Any] = reduce(
            lambda a, b: {**a, **b},
            load_all_yamls(
                d
                for p in dirs_hierarchy(git_dir, _user_config_dir(), resolved_path)
                if (d := p / settings_file_name).is_file()
            ),
            {},
        )
        if "paths" not in content:
            content["paths"] = {}
        if "current_dir" not in content["paths"]:
            content["paths"]["current_dir"] = resolved_path
        return cls.model_validate(content)
