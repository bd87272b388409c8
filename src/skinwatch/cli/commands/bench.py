"""
Bench command for SkinWatch CLI
"""

from typing import Optional

import click

from skinwatch.core.configurator import bench_config
from skinwatch.cli.utils import resolve_home


@click.command()
@click.argument('context')
@click.option('--home', type=click.Path(file_okay=False),
              help='Configuration directory (default: $SKINWATCH_HOME or ~/.config/skinwatch)')
def bench_command(context: str, home: Optional[str]):
    """Print the benchmark file location for CONTEXT."""
    click.echo(str(bench_config(context, resolve_home(home))))
