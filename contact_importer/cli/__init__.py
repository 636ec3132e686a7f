import click

from .commands.analyze import analyze_command
from .commands.import_ import import_command
from .commands.tables import list_tables_command


@click.group()
def app() -> None:
    pass


app.add_command(analyze_command, name="analyze")
app.add_command(import_command, name="import")
app.add_command(list_tables_command, name="tables")
__all__ = ["app"]
