"""
Layout Command - Headless force layout.

Drives a GraphController on a virtual clock: applies the requested filter
and search, lets the debounce window elapse, runs the simulation until it
settles and writes the final frame as JSON.
"""

import json
import sys
from pathlib import Path

import click

from ...config import MAX_TICKS
from ...controller import GraphController
from ...interaction.clock import VirtualClock
from ...render import RecordingSurface
from ..utils import configure_logging, echo_error, echo_info, echo_success, load_cli_settings, load_dataset


@click.command()
@click.option("-d", "--data-dir", default=".", type=click.Path(exists=True, file_okay=False),
              help="Directory containing the dataset files")
@click.option("-g", "--group", default=None, help="Only lay out this category")
@click.option("-s", "--search", default="", help="Only lay out technologies matching this text")
@click.option("--width", default=None, type=float, help="Viewport width")
@click.option("--height", default=None, type=float, help="Viewport height")
@click.option("--max-ticks", default=MAX_TICKS, show_default=True, type=int, help="Stop after this many ticks")
@click.option("--settings", "settings_file", default=None, type=click.Path(dir_okay=False),
              help="Settings YAML (default: .techgraph/config.yaml)")
@click.option("-o", "--output", default=None, help="Write positions to this file instead of stdout")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def layout(data_dir: str, group: str, search: str, width: float, height: float,
           max_ticks: int, settings_file: str, output: str, verbose: bool):
    """
    Compute node positions for a filtered view.
    """
    configure_logging(verbose)
    settings = load_cli_settings(settings_file)
    store = load_dataset(data_dir)
    if store is None or settings is None:
        sys.exit(1)

    clock = VirtualClock()
    surface = RecordingSurface(keep=1)
    controller = GraphController(surface, clock, settings)
    controller.initialize(store)

    if width or height:
        controller.on_resize(width or controller.state.viewport.width,
                             height or controller.state.viewport.height)
        controller.coordinator.resize.flush()
    if group:
        controller.set_filter(group)
    if search:
        controller.set_search_term(search)
        controller.coordinator.search.flush()

    ticks = controller.simulator.run_until_idle(max_ticks)
    frame = surface.last_frame

    result = frame.to_dict()
    result["ticks"] = ticks
    result["alpha"] = controller.simulator.alpha
    result["settled"] = not controller.simulator.is_running
    result["viewport"] = controller.state.viewport.model_dump()
    payload = json.dumps(result, indent=2)

    if not output:
        click.echo(payload)
        return

    Path(output).write_text(payload)
    if frame.node_count == 0:
        echo_error("No technology matches the filter; wrote an empty layout")
    else:
        echo_success(f"Laid out {frame.node_count} nodes and {frame.edge_count} links in {ticks} ticks")
    echo_info(f"Output: {output}")
