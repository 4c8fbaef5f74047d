"""
Token Commands

CLI commands for inspecting and synchronizing design-token files outside of
the ChRIS plugin runtime.

Commands:
- resolve <file>: Show every token with its resolved type and color.
- sync <file>: Resolve a file and push its colors into a JSON style library.
"""

from pathlib import Path
from rich.console import Console
from rich.markup import escape
from rich.table import Table
import click
from tokensync.commands.base import RichCommand, rich_help
from tokensync.config.settings import appsettings
from tokensync.lib.log import LOG
from tokensync.lib.sync import JSONStyleLibrary, styles_sync
from tokensync.lib.tokens import tokens_resolve
from tokensync.models.dataModel import ResolveResult, RGBA, SyncResult

console: Console = Console()


def color_format(color: RGBA | None) -> str:
    """Render a color as `r, g, b, a` with three decimals."""
    if color is None:
        return "-"
    return f"{color.r:.3f}, {color.g:.3f}, {color.b:.3f}, {color.a:.3f}"


def file_resolve(path: Path) -> ResolveResult | None:
    """Read and resolve a token file, reporting read errors on the console."""
    try:
        content: str = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        LOG(f"Error reading {path}: {e}")
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        return None
    return tokens_resolve(content)


def diagnostics_print(result: ResolveResult) -> None:
    for diagnostic in result.diagnostics:
        console.print(
            f"[bold red]![/bold red] [cyan]{escape(diagnostic.name)}[/cyan]: "
            f"{escape(diagnostic.reason)}"
        )


@click.command(
    cls=RichCommand,
    short_help="Resolve a token file",
    help=rich_help(
        description="Resolve a design-token file and show the resulting colors.",
        usage="tokensync-cli resolve <file>",
        args={"<file>": "Style sheet with 'name: value;' declarations."},
    ),
)
@click.argument("file", type=click.Path(path_type=Path))
def resolve(file: Path) -> None:
    """
    Prints a table of the resolved tokens followed by any diagnostics.

    :param file: The token file to resolve.
    """
    result: ResolveResult | None = file_resolve(file)
    if result is None:
        raise SystemExit(1)

    table: Table = Table(title=str(file))
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Color (r, g, b, a)", style="green")
    table.add_column("Via", style="yellow")
    for token in result.tokens:
        table.add_row(
            escape(token.name),
            token.type.value,
            color_format(token.color),
            escape(token.parent.name) if token.parent else "",
        )
    console.print(table)
    diagnostics_print(result)


@click.command(
    cls=RichCommand,
    short_help="Sync a token file into a style library",
    help=rich_help(
        description="Resolve a design-token file and update a JSON style library.",
        usage="tokensync-cli sync <file> [--library PATH] [--clean-name] [--add-styles]",
        args={
            "<file>": "Style sheet with 'name: value;' declarations.",
            "--library": "Style library JSON file (defaults to the user config dir).",
            "--clean-name": "Strip the '--' prefix from token names.",
            "--add-styles": "Create styles for unmatched tokens.",
        },
    ),
)
@click.argument("file", type=click.Path(path_type=Path))
@click.option("--library", type=click.Path(path_type=Path), default=None)
@click.option("--clean-name", is_flag=True, default=False)
@click.option("--add-styles", is_flag=True, default=False)
def sync(file: Path, library: Path | None, clean_name: bool, add_styles: bool) -> None:
    """
    Resolves a token file and writes the updated style library.

    :param file: The token file to resolve.
    :param library: Library file, defaults to the user config directory.
    :param clean_name: Whether to strip the token name prefix before matching.
    :param add_styles: Whether to create styles for unmatched tokens.
    """
    result: ResolveResult | None = file_resolve(file)
    if result is None:
        raise SystemExit(1)
    diagnostics_print(result)

    library_path: Path = library or appsettings.library_pathDefault()
    try:
        style_library: JSONStyleLibrary = JSONStyleLibrary(library_path).load()
        counts: SyncResult = styles_sync(
            result.tokens, style_library, clean_name=clean_name, add_styles=add_styles
        )
        style_library.save()
    except (OSError, ValueError) as e:
        LOG(f"Error syncing into {library_path}: {e}")
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        raise SystemExit(1)

    console.print(
        f"[bold green]Updated {counts.updated} styles, added {counts.created} styles."
        f"[/bold green]"
    )
