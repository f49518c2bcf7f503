"""Shared test fixtures for haikal-markdown tests."""

import logging

import pytest
from pathlib import Path

from haikal_markdown.core.document_processor import MarkdownParser


HAIKAL_ENV_VARS = (
    "HAIKAL_LOG_LEVEL",
    "HAIKAL_LOG_FORMAT",
    "HAIKAL_LOG_FILE",
    "HAIKAL_MAX_QUOTE_DEPTH",
    "HAIKAL_TAB_SIZE",
)


@pytest.fixture(autouse=True)
def clean_haikal_environment(monkeypatch):
    """Keep HAIKAL_* variables from the developer's shell out of every test."""
    for name in HAIKAL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def parser():
    """A parser with the default configuration."""
    return MarkdownParser()


@pytest.fixture
def canonical_document():
    """A document already in canonical form, one paragraph of every kind."""
    return (
        "# Title\n"
        "\n"
        "Some **bold** and *italic* text with `code`.\n"
        "\n"
        "- first\n"
        "- second\n"
        "\n"
        "---\n"
        "\n"
        "## Media\n"
        "\n"
        "![A diagram](images/diagram.png)\n"
        "\n"
        "[^1]: The first note\n"
        "[^2]: The second note\n"
        "\n"
        "---\n"
        "\n"
        "> Quoted *text*\n"
        ">\n"
        "> - quoted item\n"
        "\n"
        "```python\n"
        "print('hello')\n"
        "```\n"
        "\n"
        "| Name | Value |\n"
        "| **a** | 1 |"
    )


@pytest.fixture
def messy_document():
    """A document with spacing, separator and marker problems."""
    return "##   H   \n\n\nText\n\n----\n\n-  Item"


@pytest.fixture
def project_dir(tmp_path, monkeypatch) -> Path:
    """An empty working directory with no configuration or .env file."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def markdown_file(project_dir):
    """Write a markdown file into the project directory and return its path."""
    def _write(content: str, name: str = "doc.md") -> Path:
        path = project_dir / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def isolated_root_logger():
    """Remove handlers installed by LoggingManager once the test is done."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers and not type(handler).__module__.startswith("_pytest"):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
