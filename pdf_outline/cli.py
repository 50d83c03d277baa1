"""
Command-line interface for PDF Outline.
"""

import logging
import os
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from pdf_outline import __version__
from pdf_outline.document import OutlineDocument
from pdf_outline.exceptions import PDFOutlineException
from pdf_outline.outline_file import FORMATS, dumps, read_outline_file, write_outline_file
from pdf_outline.tree import build_tree
from pdf_outline.types import FIT_PAGE, FIT_XYZ, OutlineOptions
from pdf_outline.utils import configure_logging, format_file_size, to_path

console = Console()

PAGE_MODES = ["UseNone", "UseOutlines", "UseThumbs", "FullScreen", "UseOC", "UseAttachments"]
FITS = {"xyz": FIT_XYZ, "fit": FIT_PAGE}


def _fail(error):
    console.print(f"\n[bold red]✗ Error:[/bold red] {error}")
    sys.exit(1)


def _default_output(input_pdf):
    root, ext = os.path.splitext(input_pdf)
    return f"{root}_outlined{ext or '.pdf'}"


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """
    PDF Outline CLI - Read and write PDF bookmarks.
    """
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


@cli.command(name="show")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
def show(input_pdf):
    """
    Print the outline of a PDF as a tree.

    Example:

        pdf-outline show input.pdf
    """
    try:
        document = OutlineDocument.open(input_pdf)
        items = document.read_outline()

        if not items:
            console.print(f"[yellow]{os.path.basename(input_pdf)} has no outline.[/yellow]")
            return

        tree = Tree(f"[bold cyan]{os.path.basename(input_pdf)}[/bold cyan]")
        stack = [(tree, node) for node in reversed(build_tree(items))]
        while stack:
            branch, node = stack.pop()
            child = branch.add(f"{escape(node.title)} [dim](page {node.page_index + 1})[/dim]")
            stack.extend((child, grandchild) for grandchild in reversed(node.children))

        console.print(tree)

    except PDFOutlineException as e:
        _fail(e)


@cli.command(name="extract")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output', '-o',
    default=None,
    help='Outline file to write (prints to stdout when omitted)',
    type=click.Path(dir_okay=False)
)
@click.option(
    '--format', 'fmt',
    default=None,
    help='Outline file format (defaults to the output suffix, JSON otherwise)',
    type=click.Choice(FORMATS)
)
def extract(input_pdf, output, fmt):
    """
    Extract the outline of a PDF into an outline file.

    Examples:

        pdf-outline extract input.pdf

        pdf-outline extract input.pdf -o outline.json

        pdf-outline extract input.pdf -o outline.txt --format text
    """
    try:
        document = OutlineDocument.open(input_pdf)
        items = document.read_outline()

        if output is None:
            click.echo(dumps(items, fmt or "json"), nl=False)
            return

        path = write_outline_file(to_path(output), items, fmt)
        console.print(f"\n[bold green]✓ Extracted {len(items)} outline entries:[/bold green] {path}")

    except PDFOutlineException as e:
        _fail(e)


@cli.command(name="apply")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.argument('outline_file', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output', '-o',
    default=None,
    help='Output PDF (defaults to <input>_outlined.pdf)',
    type=click.Path(dir_okay=False)
)
@click.option(
    '--format', 'fmt',
    default=None,
    help='Outline file format (defaults to the file suffix, JSON otherwise)',
    type=click.Choice(FORMATS)
)
@click.option(
    '--fit',
    default='xyz',
    help='Destination view: keep zoom (xyz) or fit the whole page (fit)',
    type=click.Choice(sorted(FITS))
)
@click.option('--strict', is_flag=True, help='Reject outlines whose levels skip ahead')
@click.option(
    '--page-mode',
    default=None,
    help='Catalog /PageMode to set, e.g. UseOutlines to open the bookmarks panel',
    type=click.Choice(PAGE_MODES)
)
def apply(input_pdf, outline_file, output, fmt, fit, strict, page_mode):
    """
    Replace the outline of a PDF with the entries of an outline file.

    Examples:

        pdf-outline apply input.pdf outline.json

        pdf-outline apply input.pdf outline.txt -o with-bookmarks.pdf --page-mode UseOutlines
    """
    try:
        options = OutlineOptions(fit=FITS[fit], strict=strict, page_mode=page_mode)
        items = read_outline_file(outline_file, fmt, default_title=options.default_title)

        document = OutlineDocument.open(input_pdf, options=options)
        written = document.write_outline(items)
        target = document.save(to_path(output or _default_output(input_pdf)))

        console.print(f"\n[bold green]✓ Applied {len(written)} outline entries:[/bold green] {target}")

    except PDFOutlineException as e:
        _fail(e)


@cli.command(name="info")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
def show_info(input_pdf):
    """
    Display page and outline information about a PDF file.

    Example:

        pdf-outline info input.pdf
    """
    try:
        info = OutlineDocument.open(input_pdf).to_info()

        table = Table(title=f"PDF Outline: {os.path.basename(input_pdf)}")
        table.add_column("Property", style="cyan", no_wrap=True)
        table.add_column("Value", style="green")

        table.add_row("Pages", str(info.num_pages))
        table.add_row("File Size", format_file_size(info.file_size))
        table.add_row("Has Outline", "Yes" if info.has_outline else "No")
        table.add_row("Entries", str(info.entries))
        table.add_row("Top-level Entries", str(info.top_level))
        table.add_row("Depth", str(info.max_level + 1))

        console.print()
        console.print(table)
        console.print()

    except PDFOutlineException as e:
        _fail(e)


if __name__ == '__main__':
    cli()
