"""
tokensync Plugin Main Module.

This module serves as the main entry point for the tokensync plugin, a ChRIS
plugin that resolves design-token style sheets into colors and synchronizes
them into a library of named styles.

Features:
- Parses `name: value;` token files, optionally wrapped in a `:root { }` block
- Resolves hex, rgba(), bare numeric list, named color and var() references
- Writes the resolved tokens of every input as JSON
- Updates (and optionally creates) named styles in a JSON style library

Usage:
    Run this module as a ChRIS plugin with an input and output directory.

Examples:
    Resolve every .css file and update the matching styles:
        $ tokensync --cleanName /incoming /outgoing

    Also create styles that do not exist yet:
        $ tokensync --cleanName --addStyles --library brand.json /incoming /outgoing

Note:
    The style library is read from the input directory (if present) and the
    updated library is written to the output directory under the same name.
"""

from pathlib import Path
from argparse import Namespace, ArgumentParser, ArgumentDefaultsHelpFormatter
from chris_plugin import chris_plugin, PathMapper
from rich.console import Console
from rich.markup import escape
from tokensync.config.settings import appsettings
from tokensync.lib.log import LOG
from tokensync.lib.sync import JSONStyleLibrary, styles_sync
from tokensync.lib.tokens import tokens_export, tokens_resolve
from tokensync.models.dataModel import ResolveResult, SyncResult
from typing import Final
import json
import sys

__version__: Final[str] = "0.1.0"

DISPLAY_TITLE: Final[str] = "tokensync: design tokens to named styles"

OUTPUT_SUFFIX: Final[str] = ".tokens.json"

console: Final[Console] = Console()

# Define the argument parser for the plugin
parser: Final[ArgumentParser] = ArgumentParser(
    description="A ChRIS plugin that syncs design-token colors into named styles.",
    formatter_class=ArgumentDefaultsHelpFormatter,
)
parser.add_argument(
    "-p", "--pattern", type=str, default="**/*.css", help="Input file filter glob"
)
parser.add_argument(
    "--library",
    type=str,
    default=appsettings.libraryName,
    help="Style library file name, read from inputdir and written to outputdir",
)
parser.add_argument(
    "--cleanName",
    action="store_true",
    default=False,
    help="Strip the two-character prefix (e.g. '--') from token names",
)
parser.add_argument(
    "--addStyles",
    action="store_true",
    default=False,
    help="Create styles for tokens without a matching style",
)
parser.add_argument(
    "-V", "--version", action="version", version=f"%(prog)s {__version__}"
)


def tokenFile_process(input_file: Path, output_file: Path) -> ResolveResult:
    """Resolve one token file and write its tokens as JSON.

    Args:
        input_file: Style sheet to read
        output_file: JSON file to write

    Returns:
        The resolve result for the file
    """
    LOG(f"Processing {input_file}")
    result: ResolveResult = tokens_resolve(input_file.read_text(encoding="utf-8"))
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(
        json.dumps(tokens_export(result), indent=2), encoding="utf-8"
    )
    return result


def tokens_process(options: Namespace, inputdir: Path, outputdir: Path) -> SyncResult:
    """Resolve every matching input file and sync the results into the library.

    Args:
        options: Parsed command-line arguments
        inputdir: Directory containing token files and optionally the library
        outputdir: Directory receiving token JSON and the updated library

    Returns:
        SyncResult totalled over all input files
    """
    library: JSONStyleLibrary = JSONStyleLibrary(outputdir / options.library)
    library.load(inputdir / options.library)

    total: SyncResult = SyncResult()
    mapper: PathMapper = PathMapper.file_mapper(
        inputdir, outputdir, glob=options.pattern, suffix=OUTPUT_SUFFIX
    )
    for input_file, output_file in mapper:
        try:
            result: ResolveResult = tokenFile_process(input_file, output_file)
        except (OSError, UnicodeDecodeError) as e:
            LOG(f"Could not process {input_file}: {e}")
            console.print(
                f"[bold red]Skipping {escape(input_file.name)}: {escape(str(e))}[/bold red]"
            )
            continue

        for diagnostic in result.diagnostics:
            console.print(
                f"[yellow]{escape(input_file.name)}[/yellow] [cyan]{escape(diagnostic.name)}[/cyan]: "
                f"{escape(diagnostic.reason)}"
            )

        counts: SyncResult = styles_sync(
            result.tokens,
            library,
            clean_name=options.cleanName,
            add_styles=options.addStyles,
        )
        total.updated += counts.updated
        total.created += counts.created
        total.skipped += counts.skipped

    library.save()
    console.print(
        f"[bold green]Updated {total.updated} styles, added {total.created} styles"
        f"[/bold green] ([dim]{total.skipped} tokens skipped[/dim])"
    )
    return total


@chris_plugin(
    parser=parser,
    title="pl-tokensync",
    category="",
    min_memory_limit="100Mi",
    min_cpu_limit="1000m",
    min_gpu_limit=0,
)
def main(options: Namespace, inputdir: Path, outputdir: Path) -> None:
    """Main entry point for the ChRIS plugin.

    Args:
        options: Parsed command-line options
        inputdir: Directory containing input files
        outputdir: Directory for output files
    """
    console.print(DISPLAY_TITLE)
    try:
        tokens_process(options, inputdir, outputdir)
    except ValueError as e:
        LOG(f"Unhandled error in main: {e}")
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[bold cyan]Program interrupted by user. Exiting.[/bold cyan]")
