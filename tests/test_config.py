from pathlib import Path
import logging
from logging.handlers import RotatingFileHandler

import pytest

from antig.config import configure_logging, default_config_path, load_defaults


def test_load_defaults_without_user_file_returns_defaults(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    loaded = load_defaults()

    assert default_config_path() == tmp_path / ".antig" / "config.yaml"
    assert loaded.recursive is False
    assert loaded.noise is False
    assert loaded.progress is True
    assert loaded.log_level == "WARNING"
    assert loaded.log_file is None


def test_load_defaults_reads_user_yaml(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    config_file = tmp_path / ".antig" / "config.yaml"
    config_file.parent.mkdir()
    config_file.write_text(
        """
recursive: true
noise: true
progress: false
logLevel: debug
logFile: ~/logs/antig.log
""".strip(),
        encoding="utf-8",
    )

    loaded = load_defaults()

    assert loaded.recursive is True
    assert loaded.noise is True
    assert loaded.progress is False
    assert loaded.log_level == "DEBUG"
    assert loaded.log_file == tmp_path / "logs" / "antig.log"


def test_load_defaults_reads_json(tmp_path: Path) -> None:
    config_file = tmp_path / "antig.json"
    config_file.write_text('{"recursive": true}', encoding="utf-8")

    loaded = load_defaults(config_file)

    assert loaded.recursive is True
    assert loaded.progress is True


def test_empty_yaml_means_defaults(tmp_path: Path) -> None:
    config_file = tmp_path / "antig.yaml"
    config_file.write_text("", encoding="utf-8")

    assert load_defaults(config_file).recursive is False


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("recursive: yes please", "recursive must be a boolean"),
        ("logLevel: LOUD", "logLevel must be one of"),
        ("- a\n- b", "Config root must be an object"),
    ],
)
def test_load_defaults_rejects_bad_values(tmp_path: Path, content: str, message: str) -> None:
    config_file = tmp_path / "antig.yaml"
    config_file.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError, match=message):
        load_defaults(config_file)


def test_explicit_missing_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="does not exist"):
        load_defaults(tmp_path / "missing.yaml")


def test_unknown_suffix_is_an_error(tmp_path: Path) -> None:
    config_file = tmp_path / "antig.toml"
    config_file.write_text("recursive = true", encoding="utf-8")

    with pytest.raises(ValueError, match=".yaml/.yml or .json"):
        load_defaults(config_file)


def test_configure_logging_replaces_handlers_and_adds_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "antig.log"

    configure_logging("INFO")
    logger = configure_logging("DEBUG", log_file)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    assert any(isinstance(handler, RotatingFileHandler) for handler in logger.handlers)

    logging.getLogger("antig.run").debug("hello from the run")
    for handler in logger.handlers:
        handler.flush()
    assert "hello from the run" in log_file.read_text(encoding="utf-8")

    configure_logging("WARNING")
