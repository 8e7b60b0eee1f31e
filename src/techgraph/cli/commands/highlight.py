"""
Highlight Command - One-hop neighbourhood inside a filtered view.
"""

import json
import sys

import click

from ...core.filtering import compute_visible, normalize_group
from ...core.types import FilterState
from ...interaction.selection import highlight_set
from ..utils import configure_logging, echo_error, echo_warning, load_dataset


@click.command()
@click.argument("node_id")
@click.option("-d", "--data-dir", default=".", type=click.Path(exists=True, file_okay=False),
              help="Directory containing the dataset files")
@click.option("-g", "--group", default=None, help="Category filter")
@click.option("-s", "--search", default="", help="Search filter")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def highlight(node_id: str, data_dir: str, group: str, search: str, verbose: bool):
    """
    List what gets emphasized when a technology is selected.
    """
    configure_logging(verbose)
    store = load_dataset(data_dir)
    if store is None:
        sys.exit(1)

    visible = compute_visible(store, FilterState(active_group=normalize_group(group), search_term=search))
    if node_id not in visible.node_ids:
        if store.has_node(node_id):
            echo_warning(f"{node_id} is hidden by the current filter")
        else:
            echo_error(f"Unknown technology: {node_id}")
        sys.exit(1)

    result = highlight_set(node_id, visible.edges)
    click.echo(json.dumps({
        "focal": result.focal_id,
        "nodes": sorted(result.nodes),
        "edges": [
            {"source": edge.source_id, "target": edge.target_id, "strength": edge.strength}
            for edge in result.edges
        ],
    }, indent=2))
