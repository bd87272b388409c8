"""
Watch command for SkinWatch CLI
"""

import time
from typing import Optional

import click
from colorama import Fore, Style

from skinwatch.core.configurator import Configurator
from skinwatch.core.errors import WatchSetupError
from skinwatch.core.sync import CancelSignal, UpdateQueue
from skinwatch.utils.logging_utils import setup_logger
from skinwatch.cli.utils import resolve_home, load_settings_with_fallback, apply_overrides, echo_palette


@click.command()
@click.option('--home', type=click.Path(file_okay=False),
              help='Configuration directory (default: $SKINWATCH_HOME or ~/.config/skinwatch)')
@click.option('--context', help='Active cluster context name')
@click.option('--skin', help='Skin to use instead of the configured one')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def watch_command(home: Optional[str], context: Optional[str], skin: Optional[str], verbose: bool):
    """Watch the views and skin files and re-apply them on change."""
    home_path = resolve_home(home)
    settings = apply_overrides(load_settings_with_fallback(home_path, verbose), context, skin)
    setup_logger('skinwatch', 'DEBUG' if verbose else settings.log_level)

    configurator = Configurator(settings=settings, home=home_path)

    def redraw():
        click.echo(f"{Fore.GREEN}Configuration reloaded (palette #{configurator.palette.generation}){Style.RESET_ALL}")
        skin_file = configurator.skin_file or 'built-in'
        click.echo(f"{Fore.CYAN}Skin: {skin_file}{Style.RESET_ALL}")
        if verbose:
            echo_palette(configurator.palette.snapshot())

    updates = UpdateQueue(on_draw=redraw)
    cancel = CancelSignal()

    configurator.refresh_styles(settings.context, settings.skin, settings.get_manual_skin())

    click.echo(f"{Fore.GREEN}Starting SkinWatch...{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}Home: {home_path}{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}Skin: {configurator.skin_file or 'built-in'}{Style.RESET_ALL}")

    updates.start()
    try:
        configurator.start_views_watch(cancel, updates)
        click.echo(f"{Fore.CYAN}Views: {configurator.views_file}{Style.RESET_ALL}")
    except WatchSetupError as e:
        click.echo(f"{Fore.YELLOW}Not watching views: {e}{Style.RESET_ALL}")

    try:
        if configurator.start_styles_watch(cancel, updates) is None:
            click.echo(f"{Fore.YELLOW}No skin file to watch{Style.RESET_ALL}")
    except WatchSetupError as e:
        click.echo(f"{Fore.YELLOW}Not watching skin: {e}{Style.RESET_ALL}")

    try:
        click.echo(f"{Fore.YELLOW}Press Ctrl+C to stop watching...{Style.RESET_ALL}")
        while True:
            time.sleep(1)

    except KeyboardInterrupt:
        click.echo(f"\n{Fore.YELLOW}Stopping SkinWatch...{Style.RESET_ALL}")
        cancel.cancel()
        for session in configurator.sessions.values():
            session.join(timeout=5)
        updates.stop(timeout=5)
        click.echo(f"{Fore.GREEN}SkinWatch stopped.{Style.RESET_ALL}")
