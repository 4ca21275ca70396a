from __future__ import annotations

import pytest

import run


class _FakeServer:
    started = False
    exit_code = None

    def __init__(self, config):
        self.config = config

    def run(self):
        if self.exit_code is not None:
            raise SystemExit(self.exit_code)


def test_main_returns_non_zero_when_server_never_starts(monkeypatch):
    monkeypatch.setattr(run, "Server", _FakeServer)
    assert run.main() == 1


def test_main_returns_zero_after_clean_shutdown(monkeypatch):
    class StartedServer(_FakeServer):
        def run(self):
            self.started = True

    monkeypatch.setattr(run, "Server", StartedServer)
    assert run.main() == 0


def test_bind_failure_exit_status_propagates(monkeypatch):
    class BindFailure(_FakeServer):
        exit_code = 1

    monkeypatch.setattr(run, "Server", BindFailure)
    with pytest.raises(SystemExit) as excinfo:
        run.main()
    assert excinfo.value.code == 1
