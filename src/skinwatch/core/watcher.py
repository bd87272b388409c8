"""
File watch sessions used to reload configuration files on change
"""

import os
import enum
import time
import queue
import logging
import threading
from pathlib import Path
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union

from watchdog.observers import Observer
from watchdog.events import (
    FileSystemEventHandler,
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
)

from .errors import WatchFatalError, WatchSetupError
from .sync import CancelSignal, Synchronizer


logger = logging.getLogger(__name__)

# Change operations reported for a watched file
CREATE = 'create'
WRITE = 'write'
REMOVE = 'remove'
RENAME = 'rename'
CHMOD = 'chmod'


@dataclass(frozen=True)
class WatchEvent:
    """A change to the watched file"""
    path: str
    op: str


EventSink = Callable[[WatchEvent], None]
ErrorSink = Callable[[BaseException], None]


def content_changed(event: WatchEvent) -> bool:
    """Filter out permission-only changes, they carry no new content"""
    return event.op != CHMOD


def _normalize(path: Union[str, bytes, Path]) -> str:
    if isinstance(path, bytes):
        path = os.fsdecode(path)
    return os.path.normcase(os.path.abspath(str(path)))


class FileWatchAdapter:
    """Interface of the primitive that observes one file.

    Implementations report changes through ``on_event`` and runtime failures
    through ``on_error``; both may be called from any thread.
    """

    def __init__(self, on_event: EventSink, on_error: ErrorSink):
        self.on_event = on_event
        self.on_error = on_error

    def add(self, path: Union[str, Path]):
        """Start observing ``path``. Raises OSError when that is impossible."""
        raise NotImplementedError

    def close(self):
        """Stop observing and release resources"""
        raise NotImplementedError


class _TargetHandler(FileSystemEventHandler):
    """Turns watchdog events of a directory into events of one file in it"""

    def __init__(self, adapter: 'WatchdogAdapter', target: str, directory: str):
        super().__init__()
        self.adapter = adapter
        self.target = target
        self.directory = directory
        self._signature = self._stat()

    def _stat(self) -> Optional[Tuple[int, int]]:
        try:
            st = os.stat(self.target)
        except OSError:
            return None
        return st.st_mtime_ns, st.st_size

    def _modified_op(self) -> str:
        # Attribute changes surface as modifications; only a new mtime or size
        # means the content changed
        signature = self._stat()
        previous, self._signature = self._signature, signature
        if signature is not None and signature == previous:
            return CHMOD
        return WRITE

    def on_any_event(self, event):
        src_path = _normalize(event.src_path)
        dest_path = getattr(event, 'dest_path', '')
        dest_path = _normalize(dest_path) if dest_path else ''
        event_type = event.event_type

        if event.is_directory:
            if src_path == self.directory and event_type in (EVENT_TYPE_DELETED, EVENT_TYPE_MOVED):
                self.adapter.on_error(OSError(f"watched directory {self.directory} is gone"))
            return

        op = None
        if event_type == EVENT_TYPE_MODIFIED and src_path == self.target:
            op = self._modified_op()
        elif event_type == EVENT_TYPE_CREATED and src_path == self.target:
            self._signature = self._stat()
            op = CREATE
        elif event_type == EVENT_TYPE_DELETED and src_path == self.target:
            self._signature = None
            op = REMOVE
        elif event_type == EVENT_TYPE_MOVED:
            if src_path == self.target:
                self._signature = None
                op = RENAME
            elif dest_path == self.target:
                # Editors commonly save through a rename onto the target
                self._signature = self._stat()
                op = CREATE

        if op is not None:
            self.adapter.on_event(WatchEvent(path=self.target, op=op))


class WatchdogAdapter(FileWatchAdapter):
    """File watch adapter backed by a watchdog observer.

    watchdog observes directories, so the parent directory is scheduled
    non-recursively and events are narrowed down to the target file.
    """

    def __init__(self, on_event: EventSink, on_error: ErrorSink):
        super().__init__(on_event, on_error)
        self.observer = Observer()
        self._started = False

    def add(self, path: Union[str, Path]):
        target = Path(path).absolute()
        if not target.exists():
            raise FileNotFoundError(f"no such file: {target}")

        directory = target.parent
        handler = _TargetHandler(self, _normalize(target), _normalize(directory))
        self.observer.schedule(handler, str(directory), recursive=False)
        if not self._started:
            self.observer.start()
            self._started = True

    def close(self):
        self.observer.stop()
        if self._started:
            self.observer.join()


class WatchState(enum.Enum):
    UNINITIALIZED = 'uninitialized'
    WATCHING = 'watching'
    STOPPED = 'stopped'


_EVENT = 'event'
_ERROR = 'error'
_CANCEL = 'cancel'

AdapterFactory = Callable[[EventSink, ErrorSink], FileWatchAdapter]


class WatchSession:
    """One watch loop bound to a single path.

    The loop runs on its own thread and blocks until a change, an adapter
    error or a cancellation arrives. Reloads are never run on that thread:
    they are handed to the synchronizer so they execute on the host's
    serialized update cycle.
    """

    def __init__(self, path: Union[str, Path], on_change: Callable[[], None],
                 synchronizer: Synchronizer, cancel: CancelSignal, name: str = 'watch',
                 event_filter: Optional[Callable[[WatchEvent], bool]] = None,
                 debounce_delay: float = 0.0, error_level: int = logging.WARNING,
                 on_fatal: Optional[Callable[[WatchFatalError], None]] = None):
        self.path = Path(path)
        self.name = name
        self.on_change = on_change
        self.synchronizer = synchronizer
        self.cancel = cancel
        self.event_filter = event_filter
        self.debounce_delay = debounce_delay
        self.error_level = error_level
        self.on_fatal = on_fatal
        self.state = WatchState.UNINITIALIZED
        self.error: Optional[WatchFatalError] = None

        self.adapter: Optional[FileWatchAdapter] = None
        self._queue: 'queue.Queue' = queue.Queue()
        self._close_lock = threading.Lock()
        self._closed = False
        self._thread = threading.Thread(
            target=self._run, name=f"skinwatch-{name}", daemon=True
        )

    @property
    def alive(self) -> bool:
        return self.state is WatchState.WATCHING

    def join(self, timeout: Optional[float] = None):
        """Wait for the watch loop to exit"""
        if self._thread.is_alive():
            self._thread.join(timeout)

    def _post_event(self, event: WatchEvent):
        self._queue.put((_EVENT, event))

    def _post_error(self, error: BaseException):
        self._queue.put((_ERROR, error))

    def _post_cancel(self):
        self._queue.put((_CANCEL, None))

    def start(self, adapter_factory: AdapterFactory):
        """Create the adapter, spawn the loop and register the path.

        Raises:
            WatchSetupError: if the adapter cannot be created or the path
                cannot be registered
        """
        try:
            self.adapter = adapter_factory(self._post_event, self._post_error)
        except (OSError, RuntimeError) as e:
            raise WatchSetupError(self.path, e) from e

        self.state = WatchState.WATCHING
        self._thread.start()
        self.cancel.on_cancel(self._post_cancel)

        logger.debug("%s watching `%s`", self.name, self.path)
        try:
            self.adapter.add(self.path)
        except (OSError, RuntimeError) as e:
            self._close_adapter()
            self._post_cancel()
            raise WatchSetupError(self.path, e) from e

    def _close_adapter(self):
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
            self.state = WatchState.STOPPED

        self.cancel.remove(self._post_cancel)
        try:
            self.adapter.close()
        except (OSError, RuntimeError) as e:
            logger.error("Closing %s watcher: %s", self.name, e)

    def _schedule(self):
        def reload():
            # A reload queued before cancellation must not run after it
            if self.cancel.is_cancelled():
                return
            self.on_change()
        self.synchronizer.queue_update_draw(reload)

    def _debounce(self) -> Optional[Tuple[str, object]]:
        """Swallow change events for ``debounce_delay`` seconds.

        Returns the first error or cancellation seen meanwhile, if any.
        """
        deadline = time.monotonic() + self.debounce_delay
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return None
            try:
                kind, payload = self._queue.get(timeout=remaining)
            except queue.Empty:
                return None
            if kind != _EVENT:
                return kind, payload

    def _run(self):
        pending: Optional[Tuple[str, object]] = None
        while True:
            kind, payload = pending if pending is not None else self._queue.get()
            pending = None

            if kind == _CANCEL:
                logger.debug("%s watcher canceled `%s`", self.name, self.path)
                self._close_adapter()
                return

            if kind == _ERROR:
                self.error = WatchFatalError(self.path, payload)
                logger.log(self.error_level, "%s watcher failed: %s", self.name, payload)
                self._close_adapter()
                if self.on_fatal is not None:
                    self.on_fatal(self.error)
                return

            if self.event_filter is not None and not self.event_filter(payload):
                continue

            if self.debounce_delay > 0:
                pending = self._debounce()
                if pending is not None and pending[0] == _CANCEL:
                    continue

            if self.cancel.is_cancelled():
                pending = (_CANCEL, None)
                continue

            self._schedule()


def watch(path: Union[str, Path], on_change: Callable[[], None],
          synchronizer: Synchronizer, cancel: CancelSignal, name: str = 'watch',
          event_filter: Optional[Callable[[WatchEvent], bool]] = None,
          debounce_delay: float = 0.0, error_level: int = logging.WARNING,
          on_fatal: Optional[Callable[[WatchFatalError], None]] = None,
          adapter_factory: AdapterFactory = WatchdogAdapter) -> WatchSession:
    """Watch ``path`` and reload through ``synchronizer`` on every change.

    Args:
        path: File to watch
        on_change: Reload routine, run on the synchronizer's update cycle
        synchronizer: Host event queue receiving reloads
        cancel: Signal ending the session
        name: Label used in log messages and the thread name
        event_filter: Predicate; events it rejects never trigger a reload
        debounce_delay: Seconds during which further changes are coalesced
        error_level: Log level used when the adapter fails
        on_fatal: Called on the watch thread once an adapter error ended
            the session
        adapter_factory: Builds the file watch adapter

    Returns:
        The running session

    Raises:
        WatchSetupError: if the watch could not be established
    """
    session = WatchSession(
        path, on_change, synchronizer, cancel, name=name,
        event_filter=event_filter, debounce_delay=debounce_delay,
        error_level=error_level, on_fatal=on_fatal,
    )
    session.start(adapter_factory)
    return session
