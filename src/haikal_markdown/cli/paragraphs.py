"""
Paragraph editing commands for the haikal CLI.

Paragraph operations work on one section's text. The section is pulled out
of the document, edited, and spliced back in; a section left without
paragraphs is removed from the document.
"""

from pathlib import Path
from typing import Callable, Optional

import typer

from ..core.editor import StructuralEditor
from ..exceptions import EditIndexError

paragraphs_app = typer.Typer(
    name="paragraphs",
    help="Paragraph-level structural edits",
    rich_markup_mode="rich",
)


def _cli():
    """Main CLI module, imported lazily to avoid an import cycle."""
    from . import cli
    return cli


def splice_section_edit(
    editor: StructuralEditor,
    body: str,
    section: int,
    edit: Callable[[str], str],
) -> str:
    """
    Apply a paragraph edit to section ``section`` of ``body``.

    Args:
        editor: Editor whose parser round-trips the document
        body: Document text
        section: Index of the section to edit
        edit: Paragraph operation taking and returning one section's text

    Returns:
        The rewritten document text

    Raises:
        EditIndexError: If ``section`` or the paragraph index is out of bounds
    """
    sections = editor.parser.parse_markdown(body)
    if section < 0 or section >= len(sections):
        raise EditIndexError.out_of_bounds(section, len(sections))

    new_section = edit(editor.parser.serialize_section(sections[section]))
    if not new_section:
        return editor.remove_section_at(body, section)
    return editor.replace_section_at(body, section, new_section)


def _run_edit(file: Path, section: int, in_place: bool, edit) -> None:
    cli = _cli()
    document = cli.load_document(file)
    editor = cli.get_editor()
    try:
        body = splice_section_edit(editor, document.body, section, lambda text: edit(editor, text))
    except Exception as e:
        cli.handle_cli_error(e)
        raise typer.Exit(1)
    cli.emit_document(file, document.with_body(body), in_place)


@paragraphs_app.command("insert")
def insert_paragraph(
    file: Path = typer.Argument(..., help="Markdown file to edit"),
    section: int = typer.Argument(..., help="Section holding the paragraph"),
    index: int = typer.Argument(..., help="Position to insert at within the section"),
    content: Optional[str] = typer.Option(None, "--content", help="Markdown of the new paragraph"),
    source: Optional[Path] = typer.Option(None, "--source", help="File holding the new paragraph"),
    in_place: bool = typer.Option(False, "--in-place", "-i", help="Rewrite the file"),
) -> None:
    """
    Insert a paragraph before position INDEX of section SECTION.

    Example:
        haikal paragraphs insert notes.md 0 1 --content "Some **bold** text"
    """
    new_content = _cli().resolve_new_content(content, source)
    _run_edit(file, section, in_place, lambda editor, text: editor.insert_paragraph_at(text, index, new_content))


@paragraphs_app.command("replace")
def replace_paragraph(
    file: Path = typer.Argument(..., help="Markdown file to edit"),
    section: int = typer.Argument(..., help="Section holding the paragraph"),
    index: int = typer.Argument(..., help="Position of the paragraph to replace"),
    content: Optional[str] = typer.Option(None, "--content", help="Markdown of the new paragraph"),
    source: Optional[Path] = typer.Option(None, "--source", help="File holding the new paragraph"),
    in_place: bool = typer.Option(False, "--in-place", "-i", help="Rewrite the file"),
) -> None:
    """Replace paragraph INDEX of section SECTION."""
    new_content = _cli().resolve_new_content(content, source)
    _run_edit(file, section, in_place, lambda editor, text: editor.replace_paragraph_at(text, index, new_content))


@paragraphs_app.command("remove")
def remove_paragraph(
    file: Path = typer.Argument(..., help="Markdown file to edit"),
    section: int = typer.Argument(..., help="Section holding the paragraph"),
    index: int = typer.Argument(..., help="Position of the paragraph to remove"),
    in_place: bool = typer.Option(False, "--in-place", "-i", help="Rewrite the file"),
) -> None:
    """Remove paragraph INDEX of section SECTION."""
    _run_edit(file, section, in_place, lambda editor, text: editor.remove_paragraph_at(text, index))
