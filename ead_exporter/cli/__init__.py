import click

from .commands.export import export_command
from .commands.vocabulary import vocabulary_command


@click.group()
def app() -> None:
    pass


app.add_command(export_command, name="export")
app.add_command(vocabulary_command, name="vocabulary")
__all__ = ["app"]
