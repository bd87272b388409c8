"""
Serialized update cycle and cooperative cancellation
"""

import logging
import queue
import threading
from typing import Callable, List, Optional, Protocol


logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class Synchronizer(Protocol):
    """Host UI event queue. Callbacks run later on its single update thread."""

    def queue_update_draw(self, callback: Callback) -> None:
        ...

    def queue_update(self, callback: Callback) -> None:
        ...


class CancelSignal:
    """Cooperative cancellation shared by one or more watch sessions.

    Callbacks registered with ``on_cancel`` run once, on the thread that
    calls ``cancel``, or immediately when the signal is already cancelled.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._event = threading.Event()
        self._callbacks: List[Callback] = []

    def cancel(self):
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._event.wait(timeout)

    def remove(self, callback: Callback):
        """Forget a callback registered with ``on_cancel``"""
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def on_cancel(self, callback: Callback):
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        callback()


_STOP = object()


class UpdateQueue:
    """A Synchronizer running callbacks one at a time on a worker thread"""

    def __init__(self, on_draw: Optional[Callback] = None, name: str = 'skinwatch-updates'):
        self.on_draw = on_draw
        self._queue: 'queue.Queue' = queue.Queue()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._started = False

    def start(self):
        if not self._started:
            self._started = True
            self._thread.start()

    def stop(self, timeout: Optional[float] = None):
        """Run pending callbacks, then stop the worker"""
        if not self._started:
            return
        self._queue.put(_STOP)
        self._thread.join(timeout)

    def queue_update(self, callback: Callback):
        self._queue.put((callback, False))

    def queue_update_draw(self, callback: Callback):
        self._queue.put((callback, True))

    def join(self):
        """Block until every queued callback has run"""
        self._queue.join()

    def _run(self):
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                callback, draw = item
                try:
                    callback()
                    if draw and self.on_draw is not None:
                        self.on_draw()
                except Exception:
                    logger.exception("Update callback failed")
            finally:
                self._queue.task_done()
