from importlib.machinery import SourceFileLoader
from pathlib import Path
from types import ModuleType

from setuptools import find_packages, setup


loader = SourceFileLoader("orgdeck", "./src/orgdeck/__init__.py")
orgdeck = ModuleType(loader.name)
loader.exec_module(orgdeck)

setup(
    name="orgdeck",
    version=orgdeck.__version__,  # type: ignore
    description="Present, navigate and export org-style outline slide documents.",
    long_description=(Path(__file__).parent / "README.md").read_text(encoding="utf-8"),
    long_description_content_type="text/markdown",
    python_requires=">=3.12",
    package_dir={"": "src"},
    packages=find_packages("src", exclude=["tests"]),
    package_data={"orgdeck": ["templates/*.j2"]},
    entry_points={"console_scripts": ["orgdeck=orgdeck.cli:main"]},
    install_requires=[
        "appdirs",
        "cyclopts>=4",
        "Jinja2",
        "MarkupSafe",
        "pydantic>=2.10",
        "pygit2",
        "Pygments",
        "PyYAML",
        "rich",
        "watchfiles",
    ],
    extras_require={"test": ["pytest"]},
    include_package_data=True,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
)
