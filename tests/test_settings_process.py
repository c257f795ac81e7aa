import json
import logging
import sys

from hermes.logging_setup import LOGGER_NAME, configure_logging
from hermes.process import ProcessExecutor
from hermes.settings import default_settings, load_settings, save_settings, settings_path


def test_load_settings_fills_missing_keys(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"editor": "hx"}), encoding="utf-8")
    s = load_settings(path)
    assert s["editor"] == "hx"
    assert set(default_settings()) <= set(s)


def test_load_settings_defaults_on_missing_or_bad_file(tmp_path) -> None:
    assert load_settings(tmp_path / "none.json") == default_settings()
    bad = tmp_path / "bad.json"
    bad.write_text("[]", encoding="utf-8")
    assert load_settings(bad) == default_settings()


def test_save_settings_round_trip(tmp_path) -> None:
    path = tmp_path / "nested" / "settings.json"
    s = default_settings()
    s["service_marker"] = "org.example."
    save_settings(path, s)
    assert load_settings(path)["service_marker"] == "org.example."


def test_settings_path_env_override(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("HERMES_SETTINGS", str(tmp_path / "custom.json"))
    assert settings_path() == tmp_path / "custom.json"
    monkeypatch.delenv("HERMES_SETTINGS")
    assert settings_path().name == "settings.json"


def test_run_sync_captures_stdout() -> None:
    out = ProcessExecutor(timeout=30).run_sync(sys.executable, ["-c", "print('hello')"])
    assert out.strip() == "hello"


def test_run_sync_missing_program_gives_empty_string(tmp_path) -> None:
    assert ProcessExecutor().run_sync(str(tmp_path / "no-such-tool"), []) == ""


def test_run_sync_timeout_gives_empty_string() -> None:
    executor = ProcessExecutor(timeout=0.5)
    assert executor.run_sync(sys.executable, ["-c", "import time; time.sleep(5)"]) == ""


def test_spawn_reports_failure(tmp_path) -> None:
    executor = ProcessExecutor()
    assert executor.spawn(str(tmp_path / "no-such-tool"), []) is False
    marker = tmp_path / "ran.txt"
    assert executor.spawn(sys.executable, ["-c", f"open({str(marker)!r}, 'w').close()"]) is True


def test_configure_logging_writes_to_file(tmp_path) -> None:
    info = configure_logging(tmp_path / "logs")
    assert info["logger_name"] == LOGGER_NAME
    logger = logging.getLogger(LOGGER_NAME)
    assert logger.propagate is False
    assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)


def test_configure_logging_survives_unusable_directory(tmp_path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    info = configure_logging(blocker / "logs")
    assert info["handlers"] == "none"
    assert info["log_path"] == ""
