"""
Command-line interface for pdfer.
"""

import logging
import os
import sys

import click
from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from pdfer import __version__
from pdfer.config import ON_CONFLICT_CHOICES, PdferConfig
from pdfer.conflicts import ConflictResolver, FixedDecisionProvider, PromptDecisionProvider
from pdfer.exceptions import EXIT_ABORTED, EXIT_IO, EXIT_VALIDATION, PdferError
from pdfer.info import collect_pdf_files, get_pdf_info
from pdfer.logging_utils import configure_logging
from pdfer.merger import PDFMerger
from pdfer.ranges import describe_pages
from pdfer.splitter import PDFSplitter
from pdfer.utils import format_file_size

console = Console()
err_console = Console(stderr=True)


class PdferGroup(click.Group):
    """Group that accepts short aliases and falls back to the info command."""

    aliases = {"m": "merge", "s": "split"}
    default_command = "info"

    def get_command(self, ctx, cmd_name):
        return super().get_command(ctx, self.aliases.get(cmd_name, cmd_name))

    def resolve_command(self, ctx, args):
        if args and not args[0].startswith("-") and self.get_command(ctx, args[0]) is None:
            return self.default_command, self.commands[self.default_command], args
        return super().resolve_command(ctx, args)


def _make_resolver(config: PdferConfig) -> ConflictResolver:
    choice = config.fixed_choice
    if choice is None:
        return ConflictResolver(PromptDecisionProvider())
    return ConflictResolver(FixedDecisionProvider(choice))


def _fail(exc: PdferError) -> None:
    console.print(f"\n[bold red]✗ Error:[/bold red] {exc}", soft_wrap=True)
    sys.exit(exc.exit_code)


def _info_table(info) -> Table:
    table = Table(title=f"📄 {info.path}", show_header=False)
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    table.add_row("Pages", str(info.num_pages))
    table.add_row("Version", info.version)
    table.add_row("Size", format_file_size(info.file_size))
    if info.title:
        table.add_row("Title", info.title)
    if info.author:
        table.add_row("Author", info.author)
    if info.subject:
        table.add_row("Subject", info.subject)
    if info.num_pages:
        if info.num_pages <= 10:
            numbers = ", ".join(str(page) for page in range(1, info.num_pages + 1))
        else:
            numbers = f"1 to {info.num_pages}"
        table.add_row("Page numbers", numbers)
    return table


def _show_inputs(paths) -> None:
    for path in paths:
        try:
            console.print(_info_table(get_pdf_info(path)))
        except PdferError as exc:
            console.print(f"[bold red]✗ Error reading {path}:[/bold red] {exc}")


@click.group(cls=PdferGroup, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="pdfer")
@click.option(
    '--on-conflict',
    type=click.Choice(ON_CONFLICT_CHOICES, case_sensitive=False),
    default=None,
    help='What to do when an output already exists (default: ask, or $PDFER_ON_CONFLICT)'
)
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging')
@click.option('--quiet', '-q', is_flag=True, help='Only log errors')
@click.option('--recursive', '-r', is_flag=True, help='Search directories for PDFs (info mode)')
@click.pass_context
def cli(ctx, on_conflict, verbose, quiet, recursive):
    """
    Merge and split PDFs from the command line.

    Examples:

        pdfer test.pdf

        pdfer merge a.pdf b.pdf -o out.pdf

        pdfer split doc.pdf 1,3,5-10
    """
    try:
        config = PdferConfig.from_env()
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    level = None
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR

    config = config.override(
        on_conflict=on_conflict.lower() if on_conflict else None,
        log_level=level,
    )
    configure_logging(config.log_level, console=err_console)
    ctx.obj = config
    ctx.meta["pdfer.recursive"] = recursive


@cli.command(name="info")
@click.argument('paths', nargs=-1, required=True, type=click.Path())
@click.option('--recursive', '-r', is_flag=True, help='Search directories for PDFs')
@click.pass_context
def show_info(ctx, paths, recursive):
    """
    Display page count, version and metadata of PDF files.

    Examples:

        pdfer report.pdf

        pdfer ./docs -r

        pdfer -r ./docs

        pdfer 'scans/*.pdf'
    """
    recursive = recursive or ctx.meta.get("pdfer.recursive", False)
    try:
        pdf_files = collect_pdf_files(paths, recursive=recursive)
    except PdferError as exc:
        _fail(exc)

    total_pages = 0
    shown = 0
    failed = 0
    for pdf_file in pdf_files:
        try:
            info = get_pdf_info(pdf_file)
        except PdferError as exc:
            console.print(f"[bold red]✗ Error reading {pdf_file}:[/bold red] {exc}")
            failed += 1
            continue
        console.print(_info_table(info))
        total_pages += info.num_pages
        shown += 1

    if shown > 1:
        console.print("━" * 34)
        console.print(f"[bold]Total:[/bold] {shown} PDF(s), {total_pages} page(s)")

    sys.exit(EXIT_VALIDATION if failed else 0)


@cli.command(name="merge")
@click.argument('inputs', nargs=-1, required=True, type=click.Path())
@click.option(
    '--output', '-o',
    default=None,
    help='Output PDF path (default: merged.pdf)',
    type=click.Path()
)
@click.option('--info', '-i', 'show_inputs', is_flag=True, help='Show information about each input first')
@click.option('--no-metadata', is_flag=True, help='Do not copy metadata from the first document')
@click.pass_obj
def merge(config, inputs, output, show_inputs, no_metadata):
    """
    Merge PDFs, in the order given, into one document.

    Examples:

        pdfer merge a.pdf b.pdf -o out.pdf

        pdfer m *.pdf -o merged.pdf
    """
    if show_inputs:
        _show_inputs(inputs)

    try:
        merger = PDFMerger(inputs)
        console.print(
            f"\n[bold cyan]Merging {len(merger.documents)} PDF(s), {merger.total_pages} page(s)...[/bold cyan]"
        )
        result = merger.merge(
            output or config.merge_output,
            resolver=_make_resolver(config),
            metadata=not no_metadata,
        )
    except PdferError as exc:
        _fail(exc)

    console.print(f"[bold green]✓ Merged PDF saved:[/bold green] {result.files_created[0]}")


@cli.command(name="split")
@click.argument('input_pdf', type=click.Path())
@click.argument('pages', required=False, metavar='[PAGES]')
@click.option(
    '--output', '-o',
    'output_dir',
    default=None,
    help='Output directory (default: <name>_pages)',
    type=click.Path()
)
@click.option(
    '--padding',
    default=None,
    help='Number of digits for page numbering',
    type=click.IntRange(min=1)
)
@click.option('--info', '-i', 'show_inputs', is_flag=True, help='Show information about the input first')
@click.pass_obj
def split(config, input_pdf, pages, output_dir, padding, show_inputs):
    """
    Split a PDF into one file per page or per page range.

    PAGES is a comma-separated list of pages (3), ranges (5-7) and
    open ranges (10-). Without it every page becomes its own file.

    Examples:

        pdfer split document.pdf

        pdfer split report.pdf 1,3,5-10

        pdfer s doc.pdf 5- -o chapter
    """
    if show_inputs:
        _show_inputs([input_pdf])

    try:
        splitter = PDFSplitter(input_pdf)
        console.print(f"PDF has {splitter.num_pages} pages.")
        plan = splitter.plan(pages, output_dir, padding or config.padding)
    except PdferError as exc:
        _fail(exc)

    selected = [page for target in plan.targets for page in target.pages]
    if pages is None:
        console.print("\n[bold cyan]Splitting all pages...[/bold cyan]")
    else:
        console.print(f"\n[bold cyan]Splitting {describe_pages(selected)}...[/bold cyan]")

    resolver = _make_resolver(config)
    try:
        if config.fixed_choice is None or len(plan.targets) <= 1:
            result = splitter.execute(plan, resolver=resolver)
        else:
            with Progress(
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console
            ) as progress:
                task = progress.add_task("Writing files", total=len(plan.targets))

                def update_progress(current, total):
                    progress.update(task, completed=current)

                result = splitter.execute(plan, resolver=resolver, progress_callback=update_progress)
    except PdferError as exc:
        _fail(exc)

    if result.files_created:
        directory = os.path.dirname(os.path.abspath(result.files_created[0]))
        console.print(f"\n[bold green]✓ Created {len(result.files_created)} file(s)[/bold green]")
        console.print(f"[dim]Output directory: {directory}[/dim]")
        sample_size = min(5, len(result.files_created))
        for file_path in result.files_created[:sample_size]:
            console.print(f"  • {os.path.basename(file_path)}")
        if len(result.files_created) > sample_size:
            console.print(f"  ... and {len(result.files_created) - sample_size} more")

    if result.failures:
        console.print(f"\n[bold red]✗ {len(result.failures)} file(s) could not be written:[/bold red]")
        for path, error in result.failures:
            console.print(f"  ✗ {os.path.basename(path)}: {error}")

    if result.aborted:
        console.print("\n[bold yellow]⚠ Aborted.[/bold yellow] Files written before the abort were kept.")
        sys.exit(EXIT_ABORTED)
    if result.failures:
        sys.exit(EXIT_IO)


if __name__ == '__main__':
    cli()
