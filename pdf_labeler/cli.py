"""
Command-line interface for PDF labeler.
"""

import logging
import os
import sys

import click
from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from pdf_labeler import __version__
from pdf_labeler.config import resolve_config
from pdf_labeler.exceptions import PDFLabelerException
from pdf_labeler.info import get_pdf_info
from pdf_labeler.labeler import label_pdf
from pdf_labeler.utils import configure_logging, format_file_size

console = Console()
LOGGER = logging.getLogger("pdf_labeler.cli")


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    PDF Labeler CLI - Stamp a header band and footer caption onto every page.
    """
    pass


@cli.command(name="label")
@click.option('--input', '-i', 'input_pdf', help='Source PDF path', type=click.Path())
@click.option('--output', '-o', 'output_pdf', help='Destination PDF path', type=click.Path())
@click.option(
    '--left', '-l',
    default='',
    help="Left header template; %Page and %EndPage are replaced per page",
    type=str
)
@click.option('--right', '-r', default='', help='Right header text', type=str)
@click.option('--bottom', '-b', default='', help='Footer caption', type=str)
@click.option('--link', '-u', default=None, help='URI opened when the footer caption is clicked', type=str)
@click.option(
    '--font', '-f',
    default=None,
    help='TrueType font file (defaults to the font bundled with reportlab)',
    type=click.Path()
)
@click.option('--password', default=None, help='Password for encrypted PDFs', type=str)
@click.option(
    '--keep-annotations',
    is_flag=True,
    help='Add the footer link next to existing annotations instead of replacing them'
)
@click.option(
    '--max-right-length',
    default=None,
    help='Truncate the right header to this many characters',
    type=int
)
@click.option('--error-log', default=None, help='Append log records to this file', type=click.Path())
@click.option('--verbose', '-v', is_flag=True, help='Log per-page geometry')
def label(input_pdf, output_pdf, left, right, bottom, link, font, password,
          keep_annotations, max_right_length, error_log, verbose):
    """
    Add a header band and footer caption to every page of a PDF.

    Examples:

        pdf-labeler label -i in.pdf -o out.pdf -l 'Page %Page of %EndPage' -r DRAFT

        pdf-labeler label -i in.pdf -o out.pdf -b 'source' -u https://example.com
    """
    configure_logging(logging.DEBUG if verbose else logging.INFO, log_file=error_log)

    try:
        config = resolve_config(
            input_pdf,
            output_pdf,
            left_template=left,
            right_text=right,
            footer_text=bottom,
            footer_link_target=link,
            font_path=font,
            password=password,
            keep_annotations=keep_annotations,
            max_right_length=max_right_length,
        )

        console.print("\n[bold cyan]Labeling PDF...[/bold cyan]")

        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console
        ) as progress:
            task = progress.add_task("Decorating pages", total=None)

            def update_progress(current, total):
                progress.update(task, completed=current, total=total)

            result = label_pdf(config, progress_callback=update_progress)

        LOGGER.info("Labeled %d page(s) into %s", result.page_count, result.output_path)

        # Display results
        console.print(f"\n[bold green]✓ Successfully labeled {result.page_count} page(s)[/bold green]")

        summary_table = Table(title="Labeling Summary", show_header=False)
        summary_table.add_column("Property", style="cyan")
        summary_table.add_column("Value", style="green")

        summary_table.add_row("Source", os.path.basename(result.source_file))
        summary_table.add_row("Output", result.output_path)
        summary_table.add_row("Pages", str(result.page_count))
        summary_table.add_row("Size", format_file_size(result.output_size))
        summary_table.add_row("Links", str(result.links_added))

        console.print(summary_table)
        console.print()

    except PDFLabelerException as e:
        LOGGER.error("Labeling failed: %s", e.message)
        console.print(f"\n[bold red]✗ Error:[/bold red] {e.message}")
        sys.exit(1)
    except Exception as e:
        LOGGER.exception("Unexpected error while labeling")
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


@cli.command(name="info")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.option('--password', default=None, help='Password for encrypted PDFs', type=str)
def show_info(input_pdf, password):
    """
    Display page count, page size and annotations of a PDF file.

    Example:

        pdf-labeler info labeled.pdf
    """
    try:
        info = get_pdf_info(input_pdf, password=password)

        table = Table(title=f"PDF Information: {os.path.basename(input_pdf)}")
        table.add_column("Property", style="cyan", no_wrap=True)
        table.add_column("Value", style="green")

        table.add_row("File Size", format_file_size(info.file_size))
        table.add_row("Number of Pages", str(info.num_pages))
        table.add_row("Page Size", f"{info.page_size[0]:.1f} x {info.page_size[1]:.1f} pt")
        table.add_row("Annotations", str(info.annotations))
        table.add_row("Encrypted", "Yes" if info.is_encrypted else "No")

        console.print()
        console.print(table)
        console.print()

    except PDFLabelerException as e:
        LOGGER.error("Reading PDF info failed: %s", e.message)
        console.print(f"\n[bold red]✗ Error:[/bold red] {e.message}")
        sys.exit(1)
    except Exception as e:
        LOGGER.exception("Unexpected error while reading PDF info")
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


if __name__ == '__main__':
    cli()
