"""
Tests for the watch sessions
"""

import logging
import time

import pytest
from watchdog.events import (
    FileModifiedEvent,
    FileCreatedEvent,
    FileDeletedEvent,
    FileMovedEvent,
    DirDeletedEvent,
    DirModifiedEvent,
)
from unittest.mock import Mock

from skinwatch.core.errors import WatchSetupError, WatchFatalError
from skinwatch.core.sync import CancelSignal
from skinwatch.core.watcher import (
    WatchEvent,
    WatchState,
    WatchdogAdapter,
    _TargetHandler,
    _normalize,
    content_changed,
    watch,
    CHMOD,
    CREATE,
    REMOVE,
    RENAME,
    WRITE,
)

from conftest import AdapterFactory


def start(path, synchronizer, adapter_factory, **kwargs):
    cancel = kwargs.pop('cancel', None) or CancelSignal()
    on_change = kwargs.pop('on_change', None) or Mock()
    session = watch(path, on_change, synchronizer, cancel,
                    adapter_factory=adapter_factory, **kwargs)
    return session, cancel, on_change


class TestWatchSession:
    """Test the watch loop against a fake adapter"""

    def test_registers_path(self, tmp_path, synchronizer, adapter_factory):
        target = tmp_path / 'views.yaml'
        session, cancel, _ = start(target, synchronizer, adapter_factory)

        assert adapter_factory.last.added == [target]
        assert session.state is WatchState.WATCHING
        assert session.alive

        cancel.cancel()
        session.join(timeout=2)

    def test_change_is_queued_not_run_inline(self, tmp_path, synchronizer, adapter_factory):
        session, cancel, on_change = start(tmp_path / 'skin.yaml', synchronizer, adapter_factory)

        adapter_factory.last.on_event(WatchEvent(str(tmp_path / 'skin.yaml'), WRITE))

        assert synchronizer.wait_for(1)
        on_change.assert_not_called()
        assert synchronizer.draws == 1

        synchronizer.run_all()
        on_change.assert_called_once_with()

        cancel.cancel()
        session.join(timeout=2)

    def test_each_content_event_triggers_one_reload(self, tmp_path, synchronizer, adapter_factory):
        session, cancel, on_change = start(tmp_path / 'skin.yaml', synchronizer, adapter_factory)
        adapter = adapter_factory.last

        for op in (WRITE, CREATE, RENAME):
            adapter.on_event(WatchEvent('skin.yaml', op))

        assert synchronizer.wait_for(3)
        assert synchronizer.run_all() == 3
        assert on_change.call_count == 3

        cancel.cancel()
        session.join(timeout=2)

    def test_chmod_events_are_filtered(self, tmp_path, synchronizer, adapter_factory):
        session, cancel, on_change = start(
            tmp_path / 'skin.yaml', synchronizer, adapter_factory, event_filter=content_changed
        )
        adapter = adapter_factory.last

        adapter.on_event(WatchEvent('skin.yaml', CHMOD))
        adapter.on_event(WatchEvent('skin.yaml', CHMOD))
        adapter.on_event(WatchEvent('skin.yaml', WRITE))

        # Events are handled in order, so once the write is queued both
        # chmod events have already been dropped
        assert synchronizer.wait_for(1)
        time.sleep(0.05)
        assert synchronizer.run_all() == 1
        on_change.assert_called_once_with()

        cancel.cancel()
        session.join(timeout=2)

    def test_cancel_closes_adapter_once(self, tmp_path, synchronizer, adapter_factory):
        session, cancel, _ = start(tmp_path / 'views.yaml', synchronizer, adapter_factory)

        cancel.cancel()
        cancel.cancel()
        session.join(timeout=2)

        assert adapter_factory.last.close_calls == 1
        assert session.state is WatchState.STOPPED
        assert not session._thread.is_alive()

    def test_no_reload_after_cancel(self, tmp_path, synchronizer, adapter_factory):
        session, cancel, on_change = start(tmp_path / 'views.yaml', synchronizer, adapter_factory)
        adapter = adapter_factory.last

        adapter.on_event(WatchEvent('views.yaml', WRITE))
        cancel.cancel()
        session.join(timeout=2)
        adapter.on_event(WatchEvent('views.yaml', WRITE))
        time.sleep(0.05)

        # The in-flight reload may have been queued, but it must not run
        synchronizer.run_all()
        on_change.assert_not_called()
        assert adapter.close_calls == 1

    def test_already_cancelled_signal_stops_session(self, tmp_path, synchronizer, adapter_factory):
        cancel = CancelSignal()
        cancel.cancel()
        session, _, _ = start(tmp_path / 'views.yaml', synchronizer, adapter_factory, cancel=cancel)

        session.join(timeout=2)
        assert session.state is WatchState.STOPPED
        assert adapter_factory.last.close_calls == 1

    def test_adapter_error_stops_session(self, tmp_path, synchronizer, adapter_factory, caplog):
        session, cancel, on_change = start(tmp_path / 'views.yaml', synchronizer, adapter_factory)
        adapter = adapter_factory.last

        with caplog.at_level(logging.WARNING, logger='skinwatch.core.watcher'):
            adapter.on_error(OSError('inotify overflow'))
            session.join(timeout=2)

        assert session.state is WatchState.STOPPED
        assert isinstance(session.error, WatchFatalError)
        assert adapter.close_calls == 1
        assert 'watcher failed' in caplog.text

        # No restart: later events are never turned into reloads
        adapter.on_event(WatchEvent('views.yaml', WRITE))
        time.sleep(0.05)
        assert synchronizer.run_all() == 0

        cancel.cancel()
        assert adapter.close_calls == 1

    def test_on_fatal_receives_error(self, tmp_path, synchronizer, adapter_factory):
        on_fatal = Mock()
        session, cancel, _ = start(tmp_path / "views.yaml", synchronizer, adapter_factory,
                                   on_fatal=on_fatal)

        adapter_factory.last.on_error(OSError("gone"))
        session.join(timeout=2)

        on_fatal.assert_called_once_with(session.error)
        assert "gone" in str(session.error)

    def test_adapter_creation_failure(self, tmp_path, synchronizer):
        def broken_factory(on_event, on_error):
            raise OSError('too many open files')

        with pytest.raises(WatchSetupError) as exc_info:
            start(tmp_path / 'views.yaml', synchronizer, broken_factory)

        assert 'too many open files' in str(exc_info.value)

    def test_registration_failure(self, tmp_path, synchronizer):
        factory = AdapterFactory(add_error=FileNotFoundError('missing'))
        cancel = CancelSignal()

        with pytest.raises(WatchSetupError):
            watch(tmp_path / 'views.yaml', Mock(), synchronizer, cancel, adapter_factory=factory)

        assert factory.last.close_calls == 1
        cancel.cancel()
        assert factory.last.close_calls == 1

    def test_stopped_sessions_release_cancel_callback(self, tmp_path, synchronizer, adapter_factory):
        cancel = CancelSignal()

        for _ in range(3):
            session, _, _ = start(tmp_path / "views.yaml", synchronizer, adapter_factory, cancel=cancel)
            adapter_factory.last.on_error(OSError("gone"))
            session.join(timeout=2)

        failing = AdapterFactory(add_error=FileNotFoundError("missing"))
        with pytest.raises(WatchSetupError):
            watch(tmp_path / "views.yaml", Mock(), synchronizer, cancel, adapter_factory=failing)

        assert cancel._callbacks == []

    def test_close_failure_is_logged(self, tmp_path, synchronizer, caplog):
        factory = AdapterFactory(close_error=OSError('bad descriptor'))
        session, cancel, _ = start(tmp_path / 'skin.yaml', synchronizer, factory, name='Skin')

        with caplog.at_level(logging.ERROR, logger='skinwatch.core.watcher'):
            cancel.cancel()
            session.join(timeout=2)

        assert session.state is WatchState.STOPPED
        assert 'Closing Skin watcher' in caplog.text

    def test_debounce_coalesces_bursts(self, tmp_path, synchronizer, adapter_factory):
        session, cancel, on_change = start(
            tmp_path / 'skin.yaml', synchronizer, adapter_factory, debounce_delay=0.2
        )
        adapter = adapter_factory.last

        for _ in range(3):
            adapter.on_event(WatchEvent('skin.yaml', WRITE))

        assert synchronizer.wait_for(1)
        time.sleep(0.3)
        assert synchronizer.run_all() == 1

        cancel.cancel()
        session.join(timeout=2)

    def test_cancel_during_debounce_drops_reload(self, tmp_path, synchronizer, adapter_factory):
        session, cancel, _ = start(
            tmp_path / 'skin.yaml', synchronizer, adapter_factory, debounce_delay=1.0
        )

        adapter_factory.last.on_event(WatchEvent('skin.yaml', WRITE))
        time.sleep(0.05)
        cancel.cancel()
        session.join(timeout=2)

        assert synchronizer.callbacks == []
        assert adapter_factory.last.close_calls == 1


class TestTargetHandler:
    """Test translation of watchdog events into file events"""

    def setup_method(self):
        self.adapter = Mock()

    def make_handler(self, tmp_path, name='skin.yaml'):
        target = tmp_path / name
        return _TargetHandler(self.adapter, _normalize(target), _normalize(tmp_path)), target

    def last_op(self):
        return self.adapter.on_event.call_args[0][0].op

    def test_unchanged_content_is_chmod(self, tmp_path):
        (tmp_path / 'skin.yaml').write_text('a: 1\n')
        handler, target = self.make_handler(tmp_path)

        handler.dispatch(FileModifiedEvent(str(target)))
        assert self.last_op() == CHMOD

    def test_new_content_is_write(self, tmp_path):
        (tmp_path / 'skin.yaml').write_text('a: 1\n')
        handler, target = self.make_handler(tmp_path)

        target.write_text('a: 1\nb: 2\n')
        handler.dispatch(FileModifiedEvent(str(target)))
        assert self.last_op() == WRITE

    def test_create_delete_and_moves(self, tmp_path):
        handler, target = self.make_handler(tmp_path)

        handler.dispatch(FileCreatedEvent(str(target)))
        assert self.last_op() == CREATE

        handler.dispatch(FileDeletedEvent(str(target)))
        assert self.last_op() == REMOVE

        handler.dispatch(FileMovedEvent(str(target), str(tmp_path / 'old.yaml')))
        assert self.last_op() == RENAME

        handler.dispatch(FileMovedEvent(str(tmp_path / '.skin.yaml.swp'), str(target)))
        assert self.last_op() == CREATE
        assert self.adapter.on_event.call_count == 4

    def test_other_files_are_ignored(self, tmp_path):
        handler, _ = self.make_handler(tmp_path)

        handler.dispatch(FileModifiedEvent(str(tmp_path / 'views.yaml')))
        handler.dispatch(DirModifiedEvent(str(tmp_path)))

        self.adapter.on_event.assert_not_called()
        self.adapter.on_error.assert_not_called()

    def test_removed_directory_is_an_error(self, tmp_path):
        handler, _ = self.make_handler(tmp_path)

        handler.dispatch(DirDeletedEvent(str(tmp_path)))

        self.adapter.on_error.assert_called_once()
        self.adapter.on_event.assert_not_called()


class TestWatchdogAdapter:
    """Integration tests with a real watchdog observer"""

    def test_missing_file_cannot_be_added(self, tmp_path):
        adapter = WatchdogAdapter(Mock(), Mock())
        with pytest.raises(FileNotFoundError):
            adapter.add(tmp_path / 'missing.yaml')
        adapter.close()

    def test_write_triggers_reload(self, tmp_path, synchronizer):
        target = tmp_path / 'skin.yaml'
        target.write_text('skinwatch: {}\n')
        cancel = CancelSignal()
        on_change = Mock()

        session = watch(target, on_change, synchronizer, cancel, event_filter=content_changed)
        try:
            time.sleep(0.2)
            target.write_text("skinwatch:\n  body:\n    fgColor: white\n")
            assert synchronizer.wait_for(1, timeout=5)
            synchronizer.run_all()
            assert on_change.called
        finally:
            cancel.cancel()
            session.join(timeout=5)

        assert session.state is WatchState.STOPPED
