"""Runtime configuration and logging setup."""

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import BaseModel, Field


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
    "http://127.0.0.1:5173",
]


def _load_env_file(env_path: Optional[Path] = None):
    """Load environment variables from .env file."""
    env_path = env_path or Path(__file__).parent.parent / ".env"
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    os.environ.setdefault(key.strip(), value.strip())


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {name}: {raw}")


class Settings(BaseModel):
    """Service settings."""
    log_level: str = Field(default="INFO", description="Minimum loguru level")
    default_meta: bool = Field(default=False, description="Extract metadata unless the request says otherwise")
    default_strict: bool = Field(default=True, description="Strict mode unless the request says otherwise")
    max_upload_bytes: int = Field(default=5 * 1024 * 1024, ge=1, description="Largest accepted upload")
    cors_origins: list[str] = Field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))


def get_settings() -> Settings:
    """Build settings from the environment (and .env, if present)."""
    _load_env_file()

    origins = os.getenv("CUEPARSE_CORS_ORIGINS")
    return Settings(
        log_level=os.getenv("CUEPARSE_LOG_LEVEL", "INFO").upper(),
        default_meta=_env_bool("CUEPARSE_DEFAULT_META", False),
        default_strict=_env_bool("CUEPARSE_DEFAULT_STRICT", True),
        max_upload_bytes=int(os.getenv("CUEPARSE_MAX_UPLOAD_BYTES", 5 * 1024 * 1024)),
        cors_origins=(
            [o.strip() for o in origins.split(",") if o.strip()]
            if origins else list(DEFAULT_CORS_ORIGINS)
        ),
    )


def configure_logging(level: str = "INFO") -> None:
    """Send loguru output to stderr at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level)
