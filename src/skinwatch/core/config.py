"""
Application settings for SkinWatch
"""

import logging
from pathlib import Path
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field

import tomli


logger = logging.getLogger(__name__)

DEFAULT_SKIN_EXTENSIONS = ['yaml', 'yml']


@dataclass
class Settings:
    """Persisted settings consumed by the configurator"""
    context: str = ''
    skin: str = ''
    log_level: str = 'info'
    debounce_delay: float = 0.1
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_SKIN_EXTENSIONS))
    # Skin forced from the command line, never persisted
    manual_skin: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Settings':
        """Create Settings instance from dictionary"""
        extensions = data.get('extensions') or list(DEFAULT_SKIN_EXTENSIONS)
        if isinstance(extensions, str):
            extensions = [extensions]
        return cls(
            context=str(data.get('context', '')),
            skin=str(data.get('skin', '')),
            log_level=str(data.get('log_level', 'info')),
            debounce_delay=float(data.get('debounce_delay', 0.1)),
            extensions=[str(ext).lstrip('.') for ext in extensions],
        )

    def get_manual_skin(self) -> str:
        """Skin requested on the command line, empty when none"""
        return self.manual_skin


def load_settings(settings_path: str) -> Optional[Settings]:
    """Load settings from a TOML file"""
    settings_file = Path(settings_path)
    if not settings_file.exists():
        return None

    try:
        with open(settings_file, 'rb') as f:
            data = tomli.load(f)
    except (OSError, tomli.TOMLDecodeError) as e:
        logger.error("Error loading settings %s: %s", settings_file, e)
        return None

    # Handle both flat and nested formats
    if 'skinwatch' in data:
        data = data['skinwatch']

    if not isinstance(data, dict):
        logger.error("Invalid settings in %s: [skinwatch] must be a table", settings_file)
        return None

    try:
        return Settings.from_dict(data)
    except (TypeError, ValueError) as e:
        logger.error("Invalid settings in %s: %s", settings_file, e)
        return None


def load_default_settings() -> Settings:
    """Built-in settings used when no settings file is present"""
    return Settings()


DEFAULT_SETTINGS_TOML = '''# SkinWatch Configuration File

[skinwatch]
# Active cluster context, selects <context>_skin.yaml when present
context = ""
# Preferred skin name, looked up as <skin>.yaml or <skin>.yml
skin = ""
log_level = "info"
debounce_delay = 0.1
extensions = ["yaml", "yml"]
'''
