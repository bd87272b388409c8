"""
Path and file utilities for SkinWatch
"""

import os
from pathlib import Path
from typing import Optional, Union


HOME_ENV = 'SKINWATCH_HOME'
APP_DIR_NAME = 'skinwatch'

VIEWS_FILE_NAME = 'views'
SETTINGS_FILE_NAME = 'config.toml'
BENCH_PREFIX = 'bench'


def resolve_path(path: Union[str, Path]) -> Path:
    """Resolve a path to an absolute Path object, expanding ``~``."""
    return Path(path).expanduser().resolve()


def config_home(env: Optional[dict] = None) -> Path:
    """Locate the SkinWatch home directory.

    Lookup order is ``$SKINWATCH_HOME``, then ``$XDG_CONFIG_HOME/skinwatch``,
    then ``~/.config/skinwatch``. The directory is not created.
    """
    if env is None:
        env = os.environ

    explicit = env.get(HOME_ENV)
    if explicit:
        return resolve_path(explicit)

    xdg = env.get('XDG_CONFIG_HOME')
    if xdg:
        return resolve_path(xdg) / APP_DIR_NAME

    return Path.home() / '.config' / APP_DIR_NAME


def views_file(home: Path, extension: str = 'yaml') -> Path:
    """Location of the custom views file inside ``home``."""
    return Path(home) / f"{VIEWS_FILE_NAME}.{extension}"


def settings_file(home: Path) -> Path:
    """Location of the application settings file inside ``home``."""
    return Path(home) / SETTINGS_FILE_NAME


def with_extension(home: Path, name: str, extension: str) -> Path:
    """Build ``home/name.extension``."""
    return Path(home) / f"{name}.{extension}"


def ensure_directory_exists(directory: Path) -> None:
    """Ensure a directory exists, creating it if necessary."""
    directory.mkdir(parents=True, exist_ok=True)
