import click
from rich.console import Console
from rich.table import Table

from ...infrastructure.repositories import TargetCatalogRepository
from ...validators import COMMON_RULES

console = Console()


def _describe_rules(table: str, column: str) -> str:
    notes: list[str] = []
    for rule in COMMON_RULES.get(table, ()):
        if rule.field != column:
            continue
        if rule.required:
            notes.append("required")
        if rule.unique:
            notes.append("unique")
        if rule.type:
            notes.append(rule.type)
        if rule.max_length:
            notes.append(f"≤{rule.max_length}")
    return ", ".join(notes)


@click.command()
@click.argument("table_name", required=False)
def list_tables_command(table_name: str | None) -> None:
    """List destination tables, or the columns of one table."""
    catalog = TargetCatalogRepository()
    if table_name is None:
        table = Table(title="Destination Tables")
        table.add_column("Table", style="cyan")
        table.add_column("Columns", justify="right")
        table.add_column("Notes field")
        for name in catalog.list_tables():
            schema = catalog.get_schema(name)
            overflow = schema.overflow_column()
            table.add_row(
                name, str(len(schema.columns)), overflow.name if overflow else ""
            )
        console.print(table)
        return

    if not catalog.has_table(table_name):
        known = ", ".join(catalog.list_tables())
        raise click.ClickException(f"Unknown table '{table_name}' (known: {known})")
    schema = catalog.get_schema(table_name)
    table = Table(title=f"Columns of {table_name}")
    table.add_column("Column", style="cyan")
    table.add_column("Type")
    table.add_column("Nullable", justify="center")
    table.add_column("Rules", style="dim")
    for column in schema.columns:
        table.add_row(
            column.name,
            column.type,
            "✓" if column.nullable else "",
            _describe_rules(table_name, column.name),
        )
    console.print(table)
