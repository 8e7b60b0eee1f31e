"""
Stats Command - Dataset overview.

Shows totals and the per-category node counts that drive the filter bar.
"""

import sys
from typing import List

import click
from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

from ..utils import configure_logging, load_dataset

console = Console()


# --- API Models ---
class CategoryCount(BaseModel):
    key: str
    label: str
    icon: str
    count: int


class StatsResponse(BaseModel):
    total_nodes: int
    total_edges: int
    orphans: int
    categories: List[CategoryCount]


@click.command()
@click.option("-d", "--data-dir", default=".", type=click.Path(exists=True, file_okay=False),
              help="Directory containing the dataset files")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def stats(data_dir: str, as_json: bool, verbose: bool):
    """
    Show dataset statistics.
    """
    configure_logging(verbose)
    store = load_dataset(data_dir)
    if store is None:
        sys.exit(1)

    summary = store.get_stats()
    response = StatsResponse(
        total_nodes=summary["total_nodes"],
        total_edges=summary["total_edges"],
        orphans=summary["orphans"],
        categories=[
            CategoryCount(
                key=key,
                label=store.get_category(key).label,
                icon=store.get_category(key).icon,
                count=count,
            )
            for key, count in store.group_counts().items()
        ],
    )

    if as_json:
        click.echo(response.model_dump_json(indent=2))
        return

    table = Table(title=f"{response.total_nodes} technologies · {response.total_edges} links")
    table.add_column("Category")
    table.add_column("Key", style="dim")
    table.add_column("Nodes", justify="right")
    table.add_row("All", "all", str(response.total_nodes), style="bold")
    for category in response.categories:
        table.add_row(f"{category.icon} {category.label}".strip(), category.key, str(category.count))
    console.print(table)

    if response.orphans:
        console.print(f"[yellow]{response.orphans} technologies have no links[/yellow]")
