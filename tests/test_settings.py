import json
from pathlib import Path

import pytest
import yaml

from calibration_map import Settings


def test_defaults() -> None:
    settings = Settings()
    assert settings.calibration.summary_precision == 6
    assert settings.logging.level == "INFO"
    assert settings.logging.log_file == "calibration_map.log"
    assert settings.to_dict()["custom"] == {}


def test_load_yaml(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml.safe_dump({
        "calibration": {"summary_precision": 4},
        "logging": {"level": "DEBUG", "console_output": False},
        "custom": {"axis": "x"},
    }))

    settings = Settings(str(config_file))
    assert settings.load_config()
    assert settings.calibration.summary_precision == 4
    assert settings.logging.level == "DEBUG"
    assert settings.logging.console_output is False
    assert settings.get_custom_setting("axis") == "x"
    assert settings.get_custom_setting("missing", 1) == 1


def test_load_json(tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"logging": {"backup_count": 2}}))

    settings = Settings()
    assert settings.load_config(str(config_file))
    assert settings.config_file == str(config_file)
    assert settings.logging.backup_count == 2


def test_missing_file_writes_defaults(tmp_path: Path) -> None:
    config_file = tmp_path / "nested" / "default_config.yaml"

    settings = Settings(str(config_file))
    assert settings.load_config()
    assert config_file.exists()
    saved = yaml.safe_load(config_file.read_text())
    assert saved["calibration"] == {"summary_precision": 6}
    assert saved["logging"]["level"] == "INFO"


def test_save_and_reload(tmp_path: Path) -> None:
    config_file = tmp_path / "saved.json"
    settings = Settings()
    settings.calibration.summary_precision = 9
    settings.set_custom_setting("units", "mm")
    assert settings.save_config(str(config_file))

    reloaded = Settings(str(config_file))
    assert reloaded.load_config()
    assert reloaded.to_dict() == settings.to_dict()


def test_unsupported_format(tmp_path: Path) -> None:
    config_file = tmp_path / "config.ini"
    config_file.write_text("[logging]\nlevel=DEBUG\n")
    assert not Settings(str(config_file)).load_config()
    assert not Settings().save_config(str(tmp_path / "out.ini"))


def test_invalid_values_rejected(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml.safe_dump({"calibration": {"summary_precision": 0}}))
    assert not Settings(str(config_file)).load_config()

    config_file.write_text(yaml.safe_dump({"logging": {"level": "LOUD"}}))
    assert not Settings(str(config_file)).load_config()


def test_malformed_yaml(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text("calibration: [unterminated\n")
    assert not Settings(str(config_file)).load_config()


def test_unknown_keys_ignored() -> None:
    settings = Settings()
    settings.update_from_dict({"calibration": {"summary_precision": 3, "bogus": 1}})
    assert settings.calibration.summary_precision == 3
    assert not hasattr(settings.calibration, "bogus")


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("CALMAP_LOG_LEVEL", "warning")
    monkeypatch.setenv("CALMAP_LOG_FILE", "/tmp/calmap-test.log")
    monkeypatch.setenv("CALMAP_SUMMARY_PRECISION", "8")

    settings = Settings()
    settings.load_environment_overrides()
    assert settings.logging.level == "WARNING"
    assert settings.logging.log_file == "/tmp/calmap-test.log"
    assert settings.calibration.summary_precision == 8


def test_null_section_rejected(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text("calibration:\nlogging:\n  level: INFO\n")
    assert not Settings(str(config_file)).load_config()


def test_non_mapping_config_rejected(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml.safe_dump(["calibration", "logging"]))
    assert not Settings(str(config_file)).load_config()

    config_file.write_text(yaml.safe_dump({"custom": [1, 2]}))
    assert not Settings(str(config_file)).load_config()


def test_environment_overrides_valid(monkeypatch) -> None:
    monkeypatch.setenv("CALMAP_SUMMARY_PRECISION", "4")
    settings = Settings()
    assert settings.load_environment_overrides()
    assert settings.calibration.summary_precision == 4


@pytest.mark.parametrize("value", ["-1", "0", "six", "2.5"])
def test_environment_overrides_invalid_precision(monkeypatch, value: str) -> None:
    monkeypatch.setenv("CALMAP_SUMMARY_PRECISION", value)
    assert not Settings().load_environment_overrides()


def test_environment_overrides_invalid_level(monkeypatch) -> None:
    monkeypatch.setenv("CALMAP_LOG_LEVEL", "loud")
    assert not Settings().load_environment_overrides()
