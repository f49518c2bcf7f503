"""
Haikal CLI Application.

Main entry point for the haikal command-line interface. The CLI is the file
boundary of the project: it reads documents, strips YAML frontmatter, runs the
core parser, validator, formatter or editor on the body and writes results
back with the frontmatter re-attached.

Command groups:
- parse / validate / format / stats: whole-document commands
- sections: section-level structural edits
- paragraphs: paragraph-level structural edits within one section
"""

import json
import logging
from collections import Counter
from pathlib import Path
from typing import Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .. import __version__
from ..core.document_processor.markdown_parser import MarkdownParser
from ..core.document_processor.types import HeaderParagraph, ParagraphType
from ..core.editor import StructuralEditor
from ..core.formatter import FormattingRule, MarkdownFormatter
from ..core.validator import validate_markdown
from ..exceptions import ConfigurationError, EditIndexError, FormatError
from ..utils.config import ConfigManager
from ..utils.logging_config import configure_logging
from .documents import FrontmatterParseError, MarkdownDocument, read_document, write_document
from .paragraphs import paragraphs_app
from .sections import sections_app

# Initialize console for rich output
console = Console()

# Create main Typer app
app = typer.Typer(
    name="haikal",
    help="Parse, validate, format and edit Haikal markdown documents",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(sections_app, name="sections", help="Section-level structural edits")
app.add_typer(paragraphs_app, name="paragraphs", help="Paragraph-level structural edits")

# Global state
_config_manager: Optional[ConfigManager] = None
_logger: Optional[logging.Logger] = None
_global_config: dict = {}


def setup_logging(verbose: bool = False, config: Optional[dict] = None) -> logging.Logger:
    """
    Set up logging configuration.

    Args:
        verbose: Enable verbose (DEBUG) logging
        config: Loaded configuration whose ``logging`` section picks level and format

    Returns:
        Configured logger instance
    """
    configure_logging(config, verbose=verbose, console=Console(stderr=True))
    return logging.getLogger("haikal_markdown")


def get_config_manager(config_path: Optional[str] = None) -> ConfigManager:
    """
    Get or create the global configuration manager.

    Args:
        config_path: Optional path to configuration file

    Returns:
        ConfigManager instance, with configuration loaded

    Raises:
        typer.Exit: If configuration loading fails
    """
    global _config_manager

    if _config_manager is None or config_path:
        try:
            manager = ConfigManager(config_file=config_path, load_env=True)
            manager.load_config()
        except ConfigurationError as e:
            rprint(f"[red]Configuration Error:[/red] {escape(str(e))}")
            raise typer.Exit(1)
        _config_manager = manager

    return _config_manager


def get_logger() -> logging.Logger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = setup_logging()
    return _logger


def get_parser() -> MarkdownParser:
    return get_config_manager(_global_config.get("config_path")).create_parser()


def get_formatter() -> MarkdownFormatter:
    return get_config_manager(_global_config.get("config_path")).create_formatter()


def get_editor() -> StructuralEditor:
    return StructuralEditor(parser=get_parser())


def handle_cli_error(error: Exception) -> None:
    """
    Print an error with a user-friendly prefix.

    Args:
        error: The exception that occurred
    """
    logger = get_logger()
    message = escape(str(error))

    if isinstance(error, FormatError):
        rprint(f"[red]Format Error:[/red] {message}")
        if error.preview:
            rprint(f"  in: {escape(repr(error.preview))}")
    elif isinstance(error, EditIndexError):
        rprint(f"[red]Index Error:[/red] {message}")
    elif isinstance(error, FrontmatterParseError):
        rprint(f"[red]Frontmatter Error:[/red] {message}")
    elif isinstance(error, ConfigurationError):
        rprint(f"[red]Configuration Error:[/red] {message}")
    elif isinstance(error, FileNotFoundError):
        rprint(f"[red]File Not Found:[/red] {message}")
    elif isinstance(error, PermissionError):
        rprint(f"[red]Permission Denied:[/red] {message}")
    else:
        rprint(f"[red]Error:[/red] {message}")
    logger.debug("Error details", exc_info=True)


def load_document(path: Path) -> MarkdownDocument:
    """Read ``path`` or exit with an error message."""
    try:
        return read_document(path)
    except (FileNotFoundError, FrontmatterParseError, PermissionError) as e:
        handle_cli_error(e)
        raise typer.Exit(1)


def resolve_new_content(content: Optional[str], source: Optional[Path]) -> str:
    """
    Pick the new content for insert/replace from ``--content`` or ``--source``.

    Raises:
        typer.Exit: If neither or both are given, or the source cannot be read
    """
    if (content is None) == (source is None):
        rprint("[red]Error:[/red] Provide exactly one of --content or --source")
        raise typer.Exit(1)
    if content is not None:
        return content
    try:
        return source.read_text(encoding="utf-8")
    except FileNotFoundError:
        rprint(f"[red]File Not Found:[/red] {escape(str(source))}")
        raise typer.Exit(1)


def emit_document(path: Path, document: MarkdownDocument, in_place: bool) -> None:
    """Write ``document`` back to ``path`` or print it to stdout."""
    if in_place:
        write_document(path, document)
        rprint(f"[green]✓[/green] Updated {escape(str(path))}")
    else:
        text = document.render()
        typer.echo(text, nl=not text.endswith("\n"))


# Global callback for common options
@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None,
        "--config-path",
        "-c",
        help="Path to configuration file (default: haikal.config.json)",
        metavar="PATH",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging (DEBUG level)",
    ),
) -> None:
    """
    Haikal CLI - strict markdown dialect tooling.

    Common workflows:
    • Check a document: haikal validate notes.md
    • Normalize in place: haikal format notes.md --in-place
    • Inspect the tree: haikal parse notes.md --json
    • Edit structure: haikal sections insert notes.md 1 --content "# New"

    For detailed help on any command, use: haikal <command> --help
    """
    global _logger, _global_config, _config_manager

    # Reset so an earlier invocation in the same process does not leak config
    _config_manager = None

    _global_config = {
        "config_path": config_path,
        "verbose": verbose,
    }

    config = get_config_manager(config_path).config
    _logger = setup_logging(verbose, config)
    _global_config["logger"] = _logger
    ctx.obj = _global_config.copy()


@app.command()
def parse(
    file: Path = typer.Argument(..., help="Markdown file to parse"),
    as_json: bool = typer.Option(False, "--json", help="Print the document tree as JSON"),
) -> None:
    """
    Parse a document and show its section/paragraph structure.

    Example:
        haikal parse notes.md --json
    """
    document = load_document(file)
    try:
        sections = get_parser().parse_markdown(document.body)
    except FormatError as e:
        handle_cli_error(e)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(
            {
                "frontmatter": document.metadata,
                "sections": [[p.to_dict() for p in section] for section in sections],
            },
            indent=2,
            default=str,
        ))
        return

    table = Table(title=f"Structure of {escape(str(file))}")
    table.add_column("Section", justify="right", style="cyan")
    table.add_column("Paragraph", justify="right", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Summary")
    for i, section in enumerate(sections):
        for j, paragraph in enumerate(section):
            table.add_row(str(i), str(j), paragraph.type.value, escape(_summarize(paragraph)))
    console.print(table)


def _summarize(paragraph) -> str:
    data = paragraph.to_dict()
    if isinstance(paragraph, HeaderParagraph):
        summary = f"h{paragraph.level}: {paragraph.content.text}"
    elif "content" in data:
        summary = data["content"]["text"]
    elif "contents" in data:
        summary = f"{len(data['contents'])} {data['list_type']} items"
    elif "rows" in data:
        summary = f"{len(data['rows'])} rows"
    elif "footnotes" in data:
        summary = f"{len(data['footnotes'])} footnotes"
    elif "paragraphs" in data:
        summary = f"{len(data['paragraphs'])} quoted paragraphs"
    elif "path" in data:
        summary = data["path"]
    else:
        summary = data.get("language") or ""
    return summary if len(summary) <= 50 else summary[:47] + "..."


@app.command()
def validate(
    file: Path = typer.Argument(..., help="Markdown file to validate"),
) -> None:
    """
    Check a document against the strict grammar. Exits 1 when invalid.

    Example:
        haikal validate notes.md
    """
    document = load_document(file)
    result = validate_markdown(document.body)

    if result.valid:
        rprint(f"[green]✓[/green] {escape(str(file))} is valid")
        return

    rprint(f"[red]✗[/red] {escape(str(file))} has {len(result.errors)} error(s):")
    for error in result.errors:
        rprint(f"  • {escape(error)}")
    raise typer.Exit(1)


@app.command("format")
def format_command(
    file: Path = typer.Argument(..., help="Markdown file to format"),
    rule: Optional[FormattingRule] = typer.Option(
        None,
        "--rule",
        "-r",
        help="Apply only one rule group instead of the full pipeline",
        case_sensitive=False,
    ),
    in_place: bool = typer.Option(False, "--in-place", "-i", help="Rewrite the file"),
    check: bool = typer.Option(False, "--check", help="Exit 1 if the file would change"),
) -> None:
    """
    Normalize a document toward the canonical dialect.

    Example:
        haikal format notes.md --in-place
        haikal format notes.md --rule headers
    """
    document = load_document(file)
    formatter = get_formatter()
    if rule is not None:
        body = formatter.apply_rule(document.body, rule)
    else:
        body = formatter.format(document.body)
    formatted = document.with_body(body)

    if check:
        if formatted.render() != document.render():
            rprint(f"[yellow]Would reformat[/yellow] {escape(str(file))}")
            raise typer.Exit(1)
        rprint(f"[green]✓[/green] {escape(str(file))} is already formatted")
        return

    emit_document(file, formatted, in_place)


@app.command()
def stats(
    file: Path = typer.Argument(..., help="Markdown file to summarize"),
) -> None:
    """Show section, paragraph and header counts for a document."""
    document = load_document(file)
    try:
        sections = get_parser().parse_markdown(document.body)
    except FormatError as e:
        handle_cli_error(e)
        raise typer.Exit(1)

    paragraphs = [p for section in sections for p in section]
    by_type = Counter(p.type for p in paragraphs)
    headers = [p for p in paragraphs if isinstance(p, HeaderParagraph)]

    table = Table(title=f"Statistics for {escape(str(file))}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Sections", str(len(sections)))
    table.add_row("Paragraphs", str(len(paragraphs)))
    for paragraph_type in ParagraphType:
        if by_type[paragraph_type]:
            table.add_row(f"  {paragraph_type.value}", str(by_type[paragraph_type]))
    if headers:
        table.add_row("Top header level", str(min(h.level for h in headers)))
    table.add_row("Frontmatter keys", str(len(document.metadata)))
    console.print(table)


@app.command()
def info() -> None:
    """Show version and configuration status."""
    config_manager = get_config_manager(_global_config.get("config_path"))
    config = config_manager.config

    info_text = Text()
    info_text.append("Haikal Markdown Information\n\n", style="bold blue")
    info_text.append(f"Version: {__version__}\n")
    info_text.append(f"Config file: {config_manager.config_path}")
    info_text.append(" (found)\n" if config_manager.config_path.exists() else " (not found, using defaults)\n")
    info_text.append(f"Project root: {config_manager.project_root}\n\n")

    info_text.append("Configuration:\n", style="bold")
    info_text.append(f"• Max quote depth: {config['parser']['max_quote_depth']}\n")
    info_text.append(f"• Tab size: {config['formatter']['tab_size']}\n")
    info_text.append(f"• Log level: {config['logging']['level']}\n")
    info_text.append(f"• Log format: {config['logging']['format']}\n")

    console.print(Panel(info_text, title="System Information", border_style="blue"))


@app.command()
def version() -> None:
    """Show version information."""
    rprint(f"Haikal Markdown [blue]v{__version__}[/blue]")


def cli_main() -> None:
    """
    Main CLI entry point with error handling.

    This function is called by the console script entry point.
    """
    try:
        app()
    except KeyboardInterrupt:
        rprint("\n[yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(130)


if __name__ == "__main__":
    cli_main()
