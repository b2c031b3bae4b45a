"""Tests for the polling token watcher."""

from __future__ import annotations

import os

import pytest


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def touch(path, mtime: float) -> None:
    os.utime(path, (mtime, mtime))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def setup_watcher(tmp_path, write_tokens, flat_tokens, clock):
    """Build a watcher over a valid token file with a CSS output."""

    def _setup(**kwargs):
        from tokensync.core.pipeline import TokenPipeline
        from tokensync.watcher import TokenWatcher

        path = write_tokens(flat_tokens)
        touch(path, 1_000_000)
        pipeline = TokenPipeline(path, {"css": tmp_path / "tokens.css"})
        calls = []
        watcher = TokenWatcher(
            pipeline,
            debounce=0.3,
            on_sync=lambda result, error: calls.append((result, error)),
            clock=clock,
            **kwargs,
        )
        return watcher, path, calls

    return _setup


class TestPolling:
    """Change detection and trailing debounce."""

    def test_no_change_no_sync(self, setup_watcher, clock):
        watcher, _, calls = setup_watcher()

        clock.now = 5.0
        assert watcher.poll() is False
        assert calls == []

    def test_sync_after_quiet_period(self, setup_watcher, clock, tmp_path):
        watcher, path, calls = setup_watcher()

        touch(path, 1_000_010)
        assert watcher.poll() is False

        clock.now = 0.29
        assert watcher.poll() is False

        clock.now = 0.3
        assert watcher.poll() is True
        assert (tmp_path / "tokens.css").exists()
        assert len(calls) == 1
        result, error = calls[0]
        assert error is None
        assert result.written_paths == [tmp_path / "tokens.css"]

    def test_new_change_restarts_debounce(self, setup_watcher, clock):
        watcher, path, calls = setup_watcher()

        touch(path, 1_000_010)
        watcher.poll()

        clock.now = 0.2
        touch(path, 1_000_020)
        assert watcher.poll() is False

        clock.now = 0.4
        assert watcher.poll() is False

        clock.now = 0.5
        assert watcher.poll() is True
        assert len(calls) == 1

    def test_one_sync_per_burst(self, setup_watcher, clock):
        watcher, path, calls = setup_watcher()

        touch(path, 1_000_010)
        watcher.poll()
        clock.now = 1.0
        assert watcher.poll() is True
        clock.now = 2.0
        assert watcher.poll() is False
        assert len(calls) == 1

    def test_deleted_file_counts_as_change(self, setup_watcher, clock):
        from tokensync.core.errors import TokenFileNotFoundError

        watcher, path, calls = setup_watcher()

        path.unlink()
        watcher.poll()
        clock.now = 1.0
        assert watcher.poll() is True

        result, error = calls[0]
        assert result is None
        assert isinstance(error, TokenFileNotFoundError)


class TestSyncNow:
    """Sync execution and error reporting."""

    def test_reads_fresh_contents(self, setup_watcher, write_tokens, flat_tokens, tmp_path):
        watcher, _, _ = setup_watcher()
        watcher.sync_now()

        flat_tokens["colors"]["primary"]["500"] = "#00ff00"
        write_tokens(flat_tokens)
        watcher.sync_now()

        assert "#00ff00" in (tmp_path / "tokens.css").read_text(encoding="utf-8")

    def test_validation_failure_is_reported(self, setup_watcher, write_tokens, tmp_path):
        from tokensync.core.errors import TokenValidationError

        watcher, _, calls = setup_watcher()
        write_tokens({"spacing": {"sm": "0.5rem"}})

        assert watcher.sync_now() is None
        result, error = calls[0]
        assert result is None
        assert isinstance(error, TokenValidationError)
        assert not (tmp_path / "tokens.css").exists()

    def test_force_generates_invalid_tokens(self, setup_watcher, write_tokens, tmp_path):
        watcher, _, calls = setup_watcher(force=True)
        write_tokens({"spacing": {"sm": "0.5rem"}})

        result = watcher.sync_now()
        assert result is not None
        assert (tmp_path / "tokens.css").exists()

    def test_callback_errors_are_logged(self, tmp_path, write_tokens, flat_tokens, caplog):
        from tokensync.core.pipeline import TokenPipeline
        from tokensync.watcher import TokenWatcher

        def broken(result, error):
            raise RuntimeError("callback exploded")

        pipeline = TokenPipeline(write_tokens(flat_tokens), {"css": tmp_path / "tokens.css"})
        watcher = TokenWatcher(pipeline, on_sync=broken)

        assert watcher.sync_now() is not None
        assert "Error in sync callback" in caplog.text


class TestLifecycle:
    """Background thread start/stop."""

    def test_start_and_stop(self, setup_watcher):
        watcher, _, _ = setup_watcher(poll_interval=0.01)

        watcher.start()
        assert watcher.running is True

        watcher.stop()
        assert watcher.running is False
