"""
Resolve command for SkinWatch CLI
"""

from typing import Optional

import click
from colorama import Fore, Style

from skinwatch.core.configurator import Configurator
from skinwatch.core.palette import RenderPalette
from skinwatch.utils.logging_utils import setup_logger
from skinwatch.cli.utils import resolve_home, load_settings_with_fallback, apply_overrides, echo_palette


@click.command()
@click.option('--home', type=click.Path(file_okay=False),
              help='Configuration directory (default: $SKINWATCH_HOME or ~/.config/skinwatch)')
@click.option('--context', help='Active cluster context name')
@click.option('--skin', help='Skin to use instead of the configured one')
@click.option('--verbose', '-v', is_flag=True, help='Log every candidate tried')
def resolve_command(home: Optional[str], context: Optional[str], skin: Optional[str], verbose: bool):
    """Show which skin file is in effect and the resulting palette."""
    home_path = resolve_home(home)
    settings = apply_overrides(load_settings_with_fallback(home_path, verbose), context, skin)
    setup_logger('skinwatch', 'DEBUG' if verbose else 'ERROR')

    configurator = Configurator(settings=settings, home=home_path, palette=RenderPalette())
    configurator.refresh_styles(settings.context, settings.skin, settings.get_manual_skin())

    if configurator.has_skin():
        click.echo(f"{Fore.GREEN}Skin: {configurator.skin_file}{Style.RESET_ALL}")
    else:
        click.echo(f"{Fore.YELLOW}Skin: none (built-in){Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}Bench: {configurator.bench_file}{Style.RESET_ALL}")
    click.echo("Palette:")
    echo_palette(configurator.palette.snapshot())
