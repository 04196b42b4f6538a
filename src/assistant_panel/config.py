"""
Session settings and the CLI config file (~/.assistant-panel/config.json).
"""

import json
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

CONFIG_FILE = Path.home() / ".assistant-panel" / "config.json"

DEFAULT_CANNED_REPLY = "I understand your request. Let me help you with that information."
DEFAULT_REPLY_DELAY_S = 1.5
DEFAULT_REPLY_TIMEOUT_S = 30.0

OverlapPolicy = Literal["reject", "queue"]


class SessionSettings(BaseModel):
    reply_timeout: Optional[float] = Field(default=DEFAULT_REPLY_TIMEOUT_S, gt=0)
    overlap_policy: OverlapPolicy = "reject"
    failure_notice: Optional[str] = None
    reply_delay: float = Field(default=DEFAULT_REPLY_DELAY_S, ge=0)
    canned_reply: str = DEFAULT_CANNED_REPLY


def load_config(path: Optional[Path] = None) -> dict[str, Any]:
    try:
        cfg = json.loads((path or CONFIG_FILE).read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return cfg if isinstance(cfg, dict) else {}


def save_config(cfg: dict[str, Any], path: Optional[Path] = None) -> None:
    target = path or CONFIG_FILE
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(cfg, indent=2))


def load_settings(path: Optional[Path] = None, **overrides: Any) -> SessionSettings:
    """Settings from the config file, with non-None overrides applied on top."""
    cfg = load_config(path)
    cfg.update({k: v for k, v in overrides.items() if v is not None})
    return SessionSettings.model_validate(cfg)
