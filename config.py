import tomllib
import shutil
from pathlib import Path
from typing import Any, Dict
from dotenv import load_dotenv
import os

CONFIG_DIR = Path.home() / ".linguatron"
CONFIG_PATH = CONFIG_DIR / "config.toml"
PROJECT_CONFIG_EXAMPLE = Path(__file__).parent / "config.toml"

def _env_bool(name: str, default: Any) -> bool:
    return os.getenv(name, str(default)).lower() == "true"

def load_config() -> Dict[str, Any]:
    """Load config from ~/.linguatron/config.toml, copy example if missing, load .env overrides."""
    load_dotenv()  # .env may carry LINGUATRON_* overrides
    if not CONFIG_PATH.exists():
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        shutil.copy(PROJECT_CONFIG_EXAMPLE, CONFIG_PATH)
    with open(CONFIG_PATH, "rb") as f:
        config = tomllib.load(f)

    scheduling_cfg = config.get("scheduling", {})
    config["scheduling"] = {
        "learning_step_minutes": int(scheduling_cfg.get("learning_step_minutes", 1)),
        "graduating_interval_hours": int(scheduling_cfg.get("graduating_interval_hours", 24)),
        "learning_growth": float(scheduling_cfg.get("learning_growth", 2.0)),
        "graduating_growth": float(scheduling_cfg.get("graduating_growth", 1.0)),
        "review_growth": float(scheduling_cfg.get("review_growth", 2.0)),
        "lapse_demotes_to_learning": _env_bool(
            "LINGUATRON_LAPSE_DEMOTES",
            scheduling_cfg.get("lapse_demotes_to_learning", False),
        ),
    }
    grading_cfg = config.get("grading", {})
    config["grading"] = {
        "answer_match_threshold": float(os.getenv(
            "LINGUATRON_ANSWER_MATCH_THRESHOLD",
            grading_cfg.get("answer_match_threshold", 1.0)
        )),
    }
    logging_cfg = config.get("logging", {})
    config["logging"] = {
        "level": os.getenv("LINGUATRON_LOG_LEVEL", logging_cfg.get("level", "INFO")).upper(),
    }
    server_cfg = config.get("server", {})
    config["server"] = {
        "host": server_cfg.get("host", "127.0.0.1"),
        "port": int(os.getenv("LINGUATRON_PORT", server_cfg.get("port", 8080))),
    }
    return config
