"""
Inspect Command - Node detail view.

Prints what the detail panel shows for one technology: description,
metadata, use cases and its direct connections across the whole dataset.
"""

import sys
from typing import List

import click
from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel

from ..utils import configure_logging, echo_error, load_dataset

console = Console()


# --- API Models ---
class ConnectedTechnology(BaseModel):
    id: str
    group: str


class InspectResponse(BaseModel):
    id: str
    group: str
    category: str
    short_desc: str
    full_desc: str
    difficulty: str
    learn_time: str
    market_share: str
    use_cases: List[str]
    connected: List[ConnectedTechnology]


@click.command()
@click.argument("node_id")
@click.option("-d", "--data-dir", default=".", type=click.Path(exists=True, file_okay=False),
              help="Directory containing the dataset files")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def inspect(node_id: str, data_dir: str, as_json: bool, verbose: bool):
    """
    Show details and connections of a technology.
    """
    configure_logging(verbose)
    store = load_dataset(data_dir)
    if store is None:
        sys.exit(1)

    detail = store.describe(node_id)
    if detail is None:
        echo_error(f"Unknown technology: {node_id}")
        sys.exit(1)

    node = detail.node
    response = InspectResponse(
        id=node.id,
        group=node.group,
        category=detail.category.label,
        short_desc=node.short_desc,
        full_desc=node.full_desc,
        difficulty=node.difficulty,
        learn_time=node.learn_time,
        market_share=node.market_share,
        use_cases=node.use_cases,
        connected=[ConnectedTechnology(id=n.id, group=n.group) for n in detail.connected],
    )

    if as_json:
        click.echo(response.model_dump_json(indent=2))
        return

    body = (
        f"[bold]{response.short_desc}[/bold]\n\n"
        f"{response.full_desc}\n\n"
        f"Difficulty: {response.difficulty}    Learning time: {response.learn_time}    "
        f"Market share: {response.market_share}\n\n"
        f"Use cases: {', '.join(response.use_cases) or '-'}\n"
        f"Connected to ({len(response.connected)}): "
        f"{', '.join(c.id for c in response.connected) or '-'}"
    )
    title = f"{detail.category.icon} {response.id} · {response.category}".strip()
    console.print(Panel(body, title=title))
