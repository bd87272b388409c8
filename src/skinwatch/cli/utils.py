"""
Utility functions for CLI commands
"""

import sys
from pathlib import Path
from typing import Dict, Optional

import click
from colorama import Fore, Style

from skinwatch.core.config import Settings, load_settings, load_default_settings
from skinwatch.utils import path_utils


def resolve_home(home: Optional[str]) -> Path:
    """Home directory from the command line, or the default lookup."""
    if home:
        return path_utils.resolve_path(home)
    return path_utils.config_home()


def load_settings_with_fallback(home: Path, verbose: bool = False) -> Settings:
    """Load ``config.toml`` from ``home``, falling back to defaults when absent."""
    settings_file = path_utils.settings_file(home)
    if not settings_file.exists():
        if verbose:
            click.echo(f"{Fore.CYAN}No settings at {settings_file}, using defaults{Style.RESET_ALL}")
        return load_default_settings()

    settings = load_settings(str(settings_file))
    if settings is None:
        click.echo(f"{Fore.RED}Error: Could not load settings file: {settings_file}{Style.RESET_ALL}")
        sys.exit(1)

    if verbose:
        click.echo(f"{Fore.CYAN}Using settings: {settings_file}{Style.RESET_ALL}")
    return settings


def apply_overrides(settings: Settings, context: Optional[str], skin: Optional[str]) -> Settings:
    """Apply command line overrides. ``--skin`` becomes the manual skin."""
    if context is not None:
        settings.context = context
    if skin:
        settings.manual_skin = skin
    return settings


def echo_palette(colors: Dict[str, str]) -> None:
    """Print palette slots one per line."""
    for slot, color in colors.items():
        click.echo(f"  {slot:<10} {color}")


def handle_cli_exception(e: Exception, verbose: bool = False) -> None:
    """Handle exceptions in CLI commands consistently."""
    click.echo(f"{Fore.RED}Error: {e}{Style.RESET_ALL}")
    if verbose:
        import traceback
        traceback.print_exc()
    sys.exit(1)
