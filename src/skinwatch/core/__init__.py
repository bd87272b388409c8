"""Core functionality for SkinWatch."""

from .config import Settings, load_settings, load_default_settings
from .configurator import Configurator, bench_config
from .errors import (
    SkinWatchError,
    WatchSetupError,
    WatchFatalError,
    ConfigError,
    ConfigNotFound,
    ConfigParseError,
)
from .palette import RenderPalette, DEFAULT_PALETTE
from .skin import SkinResolver
from .styles import StyleSet
from .sync import CancelSignal, UpdateQueue
from .views import ViewConfig
from .watcher import WatchSession, WatchState, WatchdogAdapter, watch

__all__ = [
    'Settings', 'load_settings', 'load_default_settings',
    'Configurator', 'bench_config',
    'SkinWatchError', 'WatchSetupError', 'WatchFatalError',
    'ConfigError', 'ConfigNotFound', 'ConfigParseError',
    'RenderPalette', 'DEFAULT_PALETTE',
    'SkinResolver',
    'StyleSet',
    'CancelSignal', 'UpdateQueue',
    'ViewConfig',
    'WatchSession', 'WatchState', 'WatchdogAdapter', 'watch',
]
