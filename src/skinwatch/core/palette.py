"""
Render palette shared with the rendering layer
"""

import threading
from typing import Dict, Tuple

from .styles import Status


# Palette slot -> status color attribute in a skin
SLOT_SOURCES: Tuple[Tuple[str, str], ...] = (
    ('modify', 'modify_color'),
    ('add', 'add_color'),
    ('error', 'error_color'),
    ('standard', 'new_color'),
    ('pending', 'pending_color'),
    ('highlight', 'highlight_color'),
    ('kill', 'kill_color'),
    ('completed', 'completed_color'),
)

SLOTS: Tuple[str, ...] = tuple(slot for slot, _ in SLOT_SOURCES)


class RenderPalette:
    """The eight named colors used to render resource rows.

    The configurator is the only writer. Readers on any thread get whole
    snapshots, never a mix of two skins.
    """

    def __init__(self):
        self._lock = threading.Lock()
        defaults = Status()
        self._colors: Dict[str, str] = {
            slot: getattr(defaults, attr) for slot, attr in SLOT_SOURCES
        }
        self._generation = 0

    def apply(self, status: Status):
        """Copy every status color into its slot"""
        colors = {slot: getattr(status, attr) for slot, attr in SLOT_SOURCES}
        with self._lock:
            self._colors = colors
            self._generation += 1

    def snapshot(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._colors)

    @property
    def generation(self) -> int:
        """Number of times the palette was applied"""
        with self._lock:
            return self._generation

    def __getitem__(self, slot: str) -> str:
        with self._lock:
            return self._colors[slot]

    def __getattr__(self, name: str) -> str:
        if name in SLOTS:
            return self[name]
        raise AttributeError(name)


# Shared instance for hosts that want a single process-wide palette
DEFAULT_PALETTE = RenderPalette()
