import click
from rich.console import Console
from rich.table import Table

from ...domain.services.vocabulary import (
    CONTROLACCESS_BUCKETS,
    NOTE_ENCODING_ANALOGS,
    include_paragraphs,
    is_headless_note,
)

console = Console()


@click.command()
@click.option(
    "--controlaccess",
    "show_controlaccess",
    is_flag=True,
    help="Show the controlaccess buckets instead of note types",
)
def vocabulary_command(show_controlaccess: bool) -> None:
    """List the note types and controlled-access buckets the exporter knows."""
    if show_controlaccess:
        table = Table(title="Controlled Access Buckets")
        table.add_column("Element", style="cyan")
        table.add_column("Head")
        table.add_column("Encoding analog", justify="right", style="yellow")
        for bucket in CONTROLACCESS_BUCKETS:
            table.add_row(bucket.node_name, bucket.head, bucket.encoding_analog)
        console.print(table)
        return

    table = Table(title="EAD Note Types")
    table.add_column("Note type", style="cyan")
    table.add_column("Encoding analog", justify="right", style="yellow")
    table.add_column("Paragraphs", justify="center")
    table.add_column("Head", justify="center")
    for note_type, analog in sorted(NOTE_ENCODING_ANALOGS.items()):
        table.add_row(
            note_type,
            analog,
            "✓" if include_paragraphs(note_type) else "",
            "" if is_headless_note(note_type, None) else "✓",
        )
    console.print(table)
