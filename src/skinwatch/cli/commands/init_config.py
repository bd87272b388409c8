"""
Init-config command for SkinWatch CLI
"""

import sys
from pathlib import Path
from typing import Optional

import click
from colorama import Fore, Style

from skinwatch.core.config import DEFAULT_SETTINGS_TOML
from skinwatch.utils import path_utils


@click.command()
@click.argument('config_path', type=click.Path(), required=False)
@click.option('--force', is_flag=True, help='Overwrite an existing file')
def init_config_command(config_path: Optional[str], force: bool):
    """Create a TOML settings file. Defaults to config.toml in the SkinWatch home."""

    if config_path is None:
        target = path_utils.settings_file(path_utils.config_home())
    else:
        target = Path(config_path)
        # Ensure the settings file has a .toml extension
        if target.suffix != '.toml':
            click.echo(f"{Fore.YELLOW}Warning: Settings file should have .toml extension. Adding .toml{Style.RESET_ALL}")
            target = target.with_name(target.name + '.toml')

    if target.exists() and not force:
        click.echo(f"{Fore.RED}Error: {target} already exists (use --force to overwrite){Style.RESET_ALL}")
        sys.exit(1)

    try:
        path_utils.ensure_directory_exists(target.parent)
        target.write_text(DEFAULT_SETTINGS_TOML, encoding='utf-8')
    except OSError as e:
        click.echo(f"{Fore.RED}Error creating settings file: {e}{Style.RESET_ALL}")
        sys.exit(1)

    click.echo(f"{Fore.GREEN}Configuration file created: {target}{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}Edit this file to choose your context and skin.{Style.RESET_ALL}")
