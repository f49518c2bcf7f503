"""
Section editing commands for the haikal CLI.

Insert, replace and remove whole sections of a document. The document body
is re-serialized canonically; frontmatter is carried over unchanged.
"""

from pathlib import Path
from typing import Optional

import typer

sections_app = typer.Typer(
    name="sections",
    help="Section-level structural edits",
    rich_markup_mode="rich",
)


def _cli():
    """Main CLI module, imported lazily to avoid an import cycle."""
    from . import cli
    return cli


def _run_edit(file: Path, in_place: bool, edit) -> None:
    cli = _cli()
    document = cli.load_document(file)
    try:
        body = edit(cli.get_editor(), document.body)
    except Exception as e:
        cli.handle_cli_error(e)
        raise typer.Exit(1)
    cli.emit_document(file, document.with_body(body), in_place)


@sections_app.command("insert")
def insert_section(
    file: Path = typer.Argument(..., help="Markdown file to edit"),
    index: int = typer.Argument(..., help="Position to insert at (0 = first, section count = append)"),
    content: Optional[str] = typer.Option(None, "--content", help="Markdown of the new section"),
    source: Optional[Path] = typer.Option(None, "--source", help="File holding the new section"),
    in_place: bool = typer.Option(False, "--in-place", "-i", help="Rewrite the file"),
) -> None:
    """
    Insert a new section before position INDEX.

    Example:
        haikal sections insert notes.md 1 --content "# Interlude"
    """
    new_content = _cli().resolve_new_content(content, source)
    _run_edit(file, in_place, lambda editor, body: editor.insert_section_at(body, index, new_content))


@sections_app.command("replace")
def replace_section(
    file: Path = typer.Argument(..., help="Markdown file to edit"),
    index: int = typer.Argument(..., help="Position of the section to replace"),
    content: Optional[str] = typer.Option(None, "--content", help="Markdown of the new section"),
    source: Optional[Path] = typer.Option(None, "--source", help="File holding the new section"),
    in_place: bool = typer.Option(False, "--in-place", "-i", help="Rewrite the file"),
) -> None:
    """Replace the section at INDEX."""
    new_content = _cli().resolve_new_content(content, source)
    _run_edit(file, in_place, lambda editor, body: editor.replace_section_at(body, index, new_content))


@sections_app.command("remove")
def remove_section(
    file: Path = typer.Argument(..., help="Markdown file to edit"),
    index: int = typer.Argument(..., help="Position of the section to remove"),
    in_place: bool = typer.Option(False, "--in-place", "-i", help="Rewrite the file"),
) -> None:
    """Remove the section at INDEX."""
    _run_edit(file, in_place, lambda editor, body: editor.remove_section_at(body, index))
