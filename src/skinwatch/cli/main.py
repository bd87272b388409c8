#!/usr/bin/env python3
"""
SkinWatch CLI - Main entry point
"""

import click
from colorama import init

from skinwatch.cli.commands.watch import watch_command
from skinwatch.cli.commands.resolve import resolve_command
from skinwatch.cli.commands.bench import bench_command
from skinwatch.cli.commands.init_config import init_config_command

# Initialize colorama for cross-platform colored output
init()


@click.group()
@click.version_option(package_name='skinwatch')
def main():
    """SkinWatch - Live reload of skins and view settings.

    Common workflows:

      # Show which skin file wins and the resulting palette
      skinwatch resolve --context prod

      # Keep watching views and skin files, re-applying them on change
      skinwatch watch

    Use 'skinwatch COMMAND --help' for detailed help on any command.
    """
    pass


main.add_command(watch_command, name='watch')
main.add_command(resolve_command, name='resolve')
main.add_command(bench_command, name='bench')
main.add_command(init_config_command, name='init-config')


if __name__ == '__main__':
    main()
