"""
techgraph CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import click

from .commands import highlight, initialize, inspect, layout, stats


@click.group()
@click.version_option(package_name="techgraph")
def main():
    """techgraph: Technology ecosystem graph engine.

    Filters, lays out and explores a graph of technologies and their
    relationships.

    \b
    Quick Start:
      techgraph init --demo
      techgraph stats -d techgraph-demo
      techgraph layout -d techgraph-demo --group database -o layout.json
      techgraph inspect Django -d techgraph-demo
    """
    pass


# Register commands
main.add_command(initialize.init)
main.add_command(stats.stats)
main.add_command(layout.layout)
main.add_command(inspect.inspect)
main.add_command(highlight.highlight)

if __name__ == "__main__":
    main()
