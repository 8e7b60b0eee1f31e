"""
CLI Utilities - Shared helper functions for command line operations.

This module provides formatted printing, logging setup and the dataset
loading logic shared by every command.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from ..config import SETTINGS_PATH, Settings, load_settings
from ..core.errors import FatalLoadError
from ..core.store import GraphStore
from ..provider import JsonDataProvider, load_store


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    """Print a warning message with a yellow alert symbol."""
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    """Print an informational message, dimmed."""
    click.echo(click.style(f"   {message}", dim=True))


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="[%X]",
    )


def load_dataset(data_dir: str) -> Optional[GraphStore]:
    """
    Load a GraphStore from a dataset directory.

    Prints a reload hint and returns None when the dataset is unusable.

    Args:
        data_dir (str): Directory containing techdata.json, techlinks.json
            and config.json.
    """
    try:
        return load_store(JsonDataProvider(Path(data_dir)))
    except FatalLoadError as e:
        echo_error(f"Could not load dataset: {e}")
        click.echo("Fix the dataset files and run the command again.")
        click.echo(click.style("   techgraph init --demo   # writes a sample dataset", fg="cyan"))
        return None


def load_cli_settings(settings_file: Optional[str]) -> Optional[Settings]:
    path = Path(settings_file) if settings_file else SETTINGS_PATH
    try:
        return load_settings(path)
    except FatalLoadError as e:
        echo_error(str(e))
        return None
