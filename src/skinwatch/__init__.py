"""
SkinWatch - Live reload of view settings and skins for terminal applications
"""

__version__ = "0.1.0"
__description__ = "Watch skin and view configuration files and re-apply them without a restart."

from .core.configurator import Configurator, bench_config
from .core.config import Settings, load_settings
from .core.palette import RenderPalette
from .core.sync import CancelSignal, UpdateQueue

__all__ = [
    'Configurator',
    'bench_config',
    'Settings',
    'load_settings',
    'RenderPalette',
    'CancelSignal',
    'UpdateQueue',
]
