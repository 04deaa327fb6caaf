"""Load settings from a TOML settings file, .env and environment variables."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

# Load .env from project root if present
_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
if _env_path.exists():
    from dotenv import load_dotenv
    load_dotenv(_env_path)

DEFAULT_SETTINGS_PATH = Path("config") / "settings.toml"
DEFAULT_PORT = 8080
DEFAULT_HOST = "0.0.0.0"
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB
SOURCE_SUBDIR = "markdown"
RENDERED_SUBDIR = "html"


class ConfigError(RuntimeError):
    """Raised at startup when settings are missing or malformed."""


def _str(key: str, default: str = "") -> str:
    return (os.environ.get(key) or "").strip() or default


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, built once at startup and never mutated."""

    api_key: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    data_dir: Path = Path("data")
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    log_level: str = "INFO"

    @property
    def source_dir(self) -> Path:
        return self.data_dir / SOURCE_SUBDIR

    @property
    def rendered_dir(self) -> Path:
        return self.data_dir / RENDERED_SUBDIR


def _read_settings_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot read settings file {path}: {e}") from e


def _int(value: Any, key: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be an integer, got {value!r}") from None
    if number <= 0:
        raise ConfigError(f"{key} must be positive, got {number}")
    return number


def load_settings(path: str | Path | None = None) -> Settings:
    """Build Settings from the TOML file (if any), then environment overrides.

    Fails fast with ConfigError when no API key is configured.
    """
    settings_path = Path(path or _str("MARKDOWN_PUBLISH_SETTINGS") or DEFAULT_SETTINGS_PATH)
    raw = _read_settings_file(settings_path)

    api_key = _str("MARKDOWN_PUBLISH_API_KEY") or str(raw.get("api_key") or "").strip()
    if not api_key:
        raise ConfigError(
            f"No api_key configured (set MARKDOWN_PUBLISH_API_KEY or api_key in {settings_path})"
        )

    port = _str("MARKDOWN_PUBLISH_PORT") or raw.get("port", DEFAULT_PORT)
    max_bytes = _str("MARKDOWN_PUBLISH_MAX_UPLOAD_BYTES") or raw.get(
        "max_upload_bytes", DEFAULT_MAX_UPLOAD_BYTES
    )
    data_dir = _str("MARKDOWN_PUBLISH_DATA_DIR") or str(raw.get("data_dir") or "data")

    return Settings(
        api_key=api_key,
        host=_str("MARKDOWN_PUBLISH_HOST") or str(raw.get("host") or DEFAULT_HOST),
        port=_int(port, "port"),
        data_dir=Path(data_dir),
        max_upload_bytes=_int(max_bytes, "max_upload_bytes"),
        log_level=(_str("MARKDOWN_PUBLISH_LOG_LEVEL") or str(raw.get("log_level") or "INFO")).upper(),
    )
