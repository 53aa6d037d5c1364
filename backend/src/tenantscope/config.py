"""Process configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from tenantscope.store.config import DatabaseConfig

DEFAULT_SECRET_KEY = "dev-secret-key-change-in-production"
DEFAULT_CORS_ORIGINS = ("http://localhost:5173",)


def resolve_base_path(cwd: Path | None = None) -> Path:
    """Repository root: the working directory, or its parent when run from ``backend``."""
    cwd = cwd or Path.cwd()
    if cwd.name == "backend":
        return cwd.parent
    return cwd


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


@dataclass
class AppSettings:
    """Settings shared by the API server and the CLI.

    Attributes:
        baseline_path: Directory holding baseline.yaml, schemas/, templates/
        database: Where tenant hierarchy and override rows live
        secret_key: HS256 key for verifying access tokens
        disable_auth: Trust identity headers instead of bearer tokens
    """

    base_path: Path
    baseline_path: Path
    database: DatabaseConfig
    secret_key: str = DEFAULT_SECRET_KEY
    disable_auth: bool = False
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    port: int = 8000
    log_level: str = "info"

    @classmethod
    def from_env(cls, base_path: Path | None = None) -> AppSettings:
        """Read TENANTSCOPE_* variables (and DATABASE_URL) from the environment."""
        base_path = base_path or resolve_base_path()

        baseline_env = os.environ.get("TENANTSCOPE_BASELINE_PATH")
        baseline_path = Path(baseline_env) if baseline_env else base_path / "metadata" / "baseline"

        origins_env = os.environ.get("TENANTSCOPE_CORS_ORIGINS")
        cors_origins = (
            [origin.strip() for origin in origins_env.split(",") if origin.strip()]
            if origins_env
            else list(DEFAULT_CORS_ORIGINS)
        )

        return cls(
            base_path=base_path,
            baseline_path=baseline_path,
            database=DatabaseConfig.from_env(base_path),
            secret_key=os.environ.get("TENANTSCOPE_SECRET_KEY", DEFAULT_SECRET_KEY),
            disable_auth=_env_flag("TENANTSCOPE_DISABLE_AUTH"),
            cors_origins=cors_origins,
            port=int(os.environ.get("TENANTSCOPE_PORT", "8000")),
            log_level=os.environ.get("TENANTSCOPE_LOG_LEVEL", "info").lower(),
        )
