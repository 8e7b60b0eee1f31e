"""
Init Command - Onboarding Automation.

Writes a settings template to ``.techgraph/config.yaml`` and can provision
a demo dataset to explore right away.
"""

from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.panel import Panel

from ...config import Settings
from ...core.demo import DemoManager

console = Console()


@click.command()
@click.argument("directory", default=".", type=click.Path(file_okay=False))
@click.option("--demo", is_flag=True, help="Also write a sample dataset")
@click.option("--force", is_flag=True, help="Overwrite an existing settings file")
def init(directory: str, demo: bool, force: bool):
    """
    Initialize techgraph in a directory.
    """
    root_dir = Path(directory).resolve()
    config_dir = root_dir / ".techgraph"
    config_file = config_dir / "config.yaml"

    if config_file.exists() and not force:
        console.print(f"[yellow]Settings already exist at {config_file} (use --force to overwrite)[/yellow]")
    else:
        config_dir.mkdir(parents=True, exist_ok=True)
        with open(config_file, "w") as f:
            yaml.dump(Settings().model_dump(), f, sort_keys=False)
        console.print(f"[green]Wrote settings to {config_file}[/green]")

    if demo:
        demo_dir = DemoManager(root_dir).provision()
        console.print(Panel.fit(
            f"Demo dataset ready in [cyan]{demo_dir}[/cyan]\n\n"
            f"  techgraph stats -d {demo_dir}\n"
            f"  techgraph layout -d {demo_dir} -o layout.json",
            title="techgraph",
        ))
