"""
Runtime configuration, read from the environment.

    CODEDUEL_HOST       Interface to bind (default 0.0.0.0)
    PORT                Port to listen on (default 5000)
    ALLOWED_ORIGINS     Comma separated CORS origins (default *)
    CODEDUEL_LOG_LEVEL  Logging level name (default INFO)
    CODEDUEL_ENV        development or production (default development)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import os

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5000


def _split_origins(raw: str) -> list[str]:
    origins = [origin.strip() for origin in raw.split(",")]
    return [origin for origin in origins if origin] or ["*"]


@dataclass(frozen=True)
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    env: str = "development"

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from environment variables."""
        raw_port = os.getenv("PORT", str(DEFAULT_PORT))
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {raw_port!r}") from None

        return cls(
            host=os.getenv("CODEDUEL_HOST", DEFAULT_HOST),
            port=port,
            allowed_origins=_split_origins(os.getenv("ALLOWED_ORIGINS", "*")),
            log_level=os.getenv("CODEDUEL_LOG_LEVEL", "INFO").upper(),
            env=os.getenv("CODEDUEL_ENV", "development"),
        )
