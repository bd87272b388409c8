"""
Configurator: keeps view settings and skin in sync with the files on disk
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from .config import Settings, load_default_settings
from .errors import ConfigError
from .palette import RenderPalette, DEFAULT_PALETTE
from .skin import SkinResolver
from .styles import StyleSet, new_styles
from .sync import CancelSignal, Synchronizer
from .views import ViewConfig, new_custom_view
from .watcher import AdapterFactory, WatchdogAdapter, WatchSession, WatchState, content_changed, watch
from ..utils import path_utils


logger = logging.getLogger(__name__)

VIEWS = 'views'
SKIN = 'skin'


def bench_config(context: str, home: Optional[Union[str, Path]] = None) -> Path:
    """Location of the benchmarks configuration file for ``context``"""
    if home is None:
        home = path_utils.config_home()
    return Path(home) / f"{path_utils.BENCH_PREFIX}-{context}.yml"


class Configurator:
    """Holds the current view settings and styles of the application.

    Every mutation (``refresh_views``, ``refresh_styles``) is expected to run
    on the host's serialized update cycle; the watchers started here only
    queue them there. ``refresh_styles`` is the only code that writes the
    render palette.
    """

    def __init__(self, settings: Optional[Settings] = None, home: Optional[Union[str, Path]] = None,
                 palette: Optional[RenderPalette] = None,
                 adapter_factory: AdapterFactory = WatchdogAdapter):
        self.settings = settings if settings is not None else load_default_settings()
        self.home = Path(home) if home is not None else path_utils.config_home()
        self.palette = palette if palette is not None else DEFAULT_PALETTE
        self.adapter_factory = adapter_factory

        self.styles: Optional[StyleSet] = None
        self.custom_view: Optional[ViewConfig] = None
        self.bench_file: Optional[Path] = None
        self.skin_file: Optional[Path] = None

        self.resolver = SkinResolver(self.home, extensions=self.settings.extensions)
        self.sessions: Dict[str, WatchSession] = {}

    def has_skin(self) -> bool:
        """True if a skin file was located by the last style refresh"""
        return self.skin_file is not None

    def watch_state(self, concern: str) -> WatchState:
        session = self.sessions.get(concern)
        if session is None:
            return WatchState.UNINITIALIZED
        return session.state

    @property
    def views_file(self) -> Path:
        """The views file, ``views.yaml`` unless only ``views.yml`` exists"""
        preferred = path_utils.views_file(self.home, 'yaml')
        legacy = path_utils.views_file(self.home, 'yml')
        if not preferred.exists() and legacy.exists():
            return legacy
        return preferred

    def start_views_watch(self, cancel: CancelSignal, synchronizer: Synchronizer) -> WatchSession:
        """Load the views file and reload it whenever it changes.

        Raises:
            WatchSetupError: if the views file cannot be watched
        """
        self.refresh_views()
        session = watch(
            self.views_file,
            self.refresh_views,
            synchronizer,
            cancel,
            name='CustomView',
            debounce_delay=self.settings.debounce_delay,
            error_level=logging.WARNING,
            adapter_factory=self.adapter_factory,
        )
        self.sessions[VIEWS] = session
        return session

    def refresh_views(self):
        """Reload view settings from scratch"""
        if self.custom_view is None:
            self.custom_view = new_custom_view()
        else:
            self.custom_view.reset()

        path = self.views_file
        try:
            self.custom_view.load(path)
        except ConfigError as e:
            logger.warning("Custom view load failed %s: %s", path, e.detail)

    def start_styles_watch(self, cancel: CancelSignal,
                           synchronizer: Synchronizer) -> Optional[WatchSession]:
        """Re-resolve the skin whenever the active skin file changes.

        Does nothing when no skin file is in use.

        Raises:
            WatchSetupError: if the skin file cannot be watched
        """
        if not self.has_skin():
            return None

        session = watch(
            self.skin_file,
            self._reload_styles,
            synchronizer,
            cancel,
            name='Skin',
            event_filter=content_changed,
            debounce_delay=self.settings.debounce_delay,
            error_level=logging.INFO,
            adapter_factory=self.adapter_factory,
        )
        self.sessions[SKIN] = session
        return session

    def _reload_styles(self):
        self.refresh_styles(
            self.settings.context,
            self.settings.skin,
            self.settings.get_manual_skin(),
        )

    def refresh_styles(self, context: str = '', configured_skin: str = '', manual_skin: str = ''):
        """Resolve the skin again and push its colors to the render palette"""
        self.bench_file = bench_config(context, self.home)

        if self.styles is None:
            self.styles = new_styles()
        else:
            self.styles.reset()

        self.skin_file = self.resolver.resolve(self.styles, context, configured_skin, manual_skin)
        if not self.has_skin():
            logger.info("No skin file located, using the built-in skin")
            self.styles.default_skin()
        self.styles.update()

        self.palette.apply(self.styles.frame().status)
