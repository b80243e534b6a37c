"""Global configuration — XDG paths, env vars, defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _default_data_dir() -> Path:
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / "accessaudit"
    return Path.home() / ".local" / "share" / "accessaudit"


@dataclass
class AccessAuditConfig:
    """Application-wide configuration."""

    data_dir: Path = field(default_factory=_default_data_dir)
    web_host: str = "127.0.0.1"
    web_port: int = 8471
    fetch_timeout: float = 30.0
    max_markup_bytes: int = 5 * 1024 * 1024
    user_agent: str = "Mozilla/5.0 (compatible; AccessibilityBot/1.0)"
    default_level: str = "AA"

    @property
    def db_path(self) -> Path:
        return self.data_dir / "accessaudit.db"

    @classmethod
    def load(cls) -> AccessAuditConfig:
        """Load config from environment variables with XDG defaults."""
        config = cls()

        env_dir = os.environ.get("ACCESSAUDIT_DATA_DIR")
        if env_dir:
            config.data_dir = Path(env_dir)

        env_port = os.environ.get("ACCESSAUDIT_WEB_PORT")
        if env_port:
            config.web_port = int(env_port)

        env_timeout = os.environ.get("ACCESSAUDIT_FETCH_TIMEOUT")
        if env_timeout:
            config.fetch_timeout = float(env_timeout)

        env_max = os.environ.get("ACCESSAUDIT_MAX_MARKUP_BYTES")
        if env_max:
            config.max_markup_bytes = int(env_max)

        env_level = os.environ.get("ACCESSAUDIT_DEFAULT_LEVEL")
        if env_level:
            config.default_level = env_level.strip().upper()

        return config
