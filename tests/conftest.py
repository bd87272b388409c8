"""
Shared fixtures for SkinWatch tests
"""

import logging
import threading
from pathlib import Path

import pytest

from skinwatch.core.watcher import FileWatchAdapter


class FakeAdapter(FileWatchAdapter):
    """In-memory file watch adapter driven by the tests"""

    def __init__(self, on_event, on_error, add_error=None, close_error=None):
        super().__init__(on_event, on_error)
        self.add_error = add_error
        self.close_error = close_error
        self.added = []
        self.close_calls = 0

    def add(self, path):
        if self.add_error is not None:
            raise self.add_error
        self.added.append(Path(path))

    def close(self):
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error


class AdapterFactory:
    """Builds FakeAdapters and remembers them"""

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.adapters = []

    def __call__(self, on_event, on_error):
        adapter = FakeAdapter(on_event, on_error, **self.kwargs)
        self.adapters.append(adapter)
        return adapter

    @property
    def last(self):
        return self.adapters[-1]


class RecordingSynchronizer:
    """Synchronizer that keeps queued callbacks until the test runs them"""

    def __init__(self):
        self.callbacks = []
        self.draws = 0
        self._cond = threading.Condition()

    def queue_update_draw(self, callback):
        with self._cond:
            self.callbacks.append(callback)
            self.draws += 1
            self._cond.notify_all()

    def queue_update(self, callback):
        with self._cond:
            self.callbacks.append(callback)
            self._cond.notify_all()

    def wait_for(self, count, timeout=2.0):
        with self._cond:
            return self._cond.wait_for(lambda: len(self.callbacks) >= count, timeout)

    def run_all(self):
        with self._cond:
            callbacks, self.callbacks = self.callbacks, []
        for callback in callbacks:
            callback()
        return len(callbacks)


@pytest.fixture
def adapter_factory():
    return AdapterFactory()


@pytest.fixture
def synchronizer():
    return RecordingSynchronizer()


@pytest.fixture
def home(tmp_path):
    directory = tmp_path / 'home'
    directory.mkdir()
    return directory


def write_skin(home, name, status=None, body=None):
    """Write a skin file ``home/name`` with the given status colors"""
    lines = ['skinwatch:']
    if body:
        lines.append('  body:')
        lines.extend(f'    {key}: {value}' for key, value in body.items())
    lines.append('  frame:')
    lines.append('    status:')
    for key, value in (status or {'newColor': 'white'}).items():
        lines.append(f'      {key}: "{value}"')
    path = Path(home) / name
    path.write_text('\n'.join(lines) + '\n', encoding='utf-8')
    return path


@pytest.fixture
def skin_writer(home):
    def write(name, status=None, body=None):
        return write_skin(home, name, status=status, body=body)
    return write


@pytest.fixture(autouse=True)
def reset_skinwatch_logger():
    """CLI commands configure the package logger; undo it between tests"""
    yield
    logger = logging.getLogger('skinwatch')
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logging.getLogger('watchdog').setLevel(logging.NOTSET)
