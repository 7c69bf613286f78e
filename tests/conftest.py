"""Shared test fixtures for lanchat tests."""

import pytest

from lanchat.core import settings as settings_module
from lanchat.core import storage
from lanchat.core.settings import SettingsStore


class RecordingErrorReporter:
    """Collects the messages that would have been shown to the user."""

    def __init__(self):
        self.messages: list[str] = []

    def report(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture(autouse=True)
def os_user_name(monkeypatch):
    """Use a fixed operating system user name, so the default nick is known."""
    monkeypatch.setattr(settings_module, "get_os_user_name", lambda: "tester")
    return "tester"


@pytest.fixture
def log_dir(tmp_path, monkeypatch):
    path = tmp_path / "logs"
    monkeypatch.setattr(storage, "get_log_dir", lambda: path)
    return path


@pytest.fixture
def settings_file(tmp_path):
    return tmp_path / "config" / "lanchat.ini"


@pytest.fixture
def error_reporter():
    return RecordingErrorReporter()


@pytest.fixture
def make_settings(settings_file, error_reporter):
    """Factory for a settings store using the temporary settings file."""

    def _make(**kwargs) -> SettingsStore:
        kwargs.setdefault("error_reporter", error_reporter)
        return SettingsStore(settings_file, **kwargs)

    return _make


@pytest.fixture
def write_settings(settings_file):
    """Write raw lines to the settings file."""

    def _write(*lines: str) -> None:
        settings_file.parent.mkdir(parents=True, exist_ok=True)
        settings_file.write_text("\n".join(lines) + "\n", encoding="latin-1")

    return _write
