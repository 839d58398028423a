from pathlib import Path

import config
from utils.scheduler import rules_from_config


def _use_config_dir(tmp_path: Path, monkeypatch) -> Path:
    config_dir = tmp_path / ".linguatron"
    config_path = config_dir / "config.toml"
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", config_path)
    for name in (
        "LINGUATRON_LOG_LEVEL",
        "LINGUATRON_ANSWER_MATCH_THRESHOLD",
        "LINGUATRON_LAPSE_DEMOTES",
        "LINGUATRON_PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    return config_path


def test_load_config_copies_example_when_missing(tmp_path, monkeypatch):
    config_path = _use_config_dir(tmp_path, monkeypatch)

    loaded = config.load_config()

    assert config_path.exists()
    assert loaded["scheduling"]["learning_step_minutes"] == 1
    assert loaded["scheduling"]["lapse_demotes_to_learning"] is False
    assert loaded["grading"]["answer_match_threshold"] == 1.0
    assert loaded["server"]["port"] == 8080


def test_environment_overrides_file_values(tmp_path, monkeypatch):
    config_path = _use_config_dir(tmp_path, monkeypatch)
    config_path.parent.mkdir()
    config_path.write_text(
        "[scheduling]\nlearning_step_minutes = 5\n\n[logging]\nlevel = \"info\"\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("LINGUATRON_LAPSE_DEMOTES", "true")
    monkeypatch.setenv("LINGUATRON_LOG_LEVEL", "debug")

    loaded = config.load_config()
    rules = rules_from_config(loaded)

    assert rules.learning_step_minutes == 5
    assert rules.lapse_demotes_to_learning is True
    assert loaded["logging"]["level"] == "DEBUG"

