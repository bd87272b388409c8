# PyInstaller hook for skinwatch
# This ensures all necessary modules are included

hiddenimports = [
    # Click dependencies
    'click',
    'click.core',
    'click.decorators',
    'click.exceptions',
    'click.parser',
    'click.types',
    'click.utils',
    'click.termui',

    # Colorama
    'colorama',
    'colorama.ansi',
    'colorama.ansitowin32',
    'colorama.initialise',
    'colorama.win32',
    'colorama.winterm',

    # Watchdog
    'watchdog',
    'watchdog.observers',
    'watchdog.observers.api',
    'watchdog.observers.polling',
    'watchdog.events',
    'watchdog.utils',

    # TOML settings
    'tomli',
    'tomli._parser',
    'tomli._re',

    # YAML skins and views
    'yaml',
    'yaml.loader',
    'yaml.constructor',
]
