"""Application configuration read from environment variables.

Environment:
    API_HOST, API_PORT      - bind address for the HTTP API (default 127.0.0.1:40001)
    USER_OPERATORS_LIST     - comma-separated numeric ids allowed to mutate state
    USER_VIEWERS_LIST       - comma-separated numeric ids allowed to read state
    STORAGE_BACKEND         - "postgres" (default) or "memory"
    DATABASE_URL            - PostgreSQL connection string (required for postgres)
    INIT_DB                 - "true" to seed the starter symbols/deals at startup
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Literal, Mapping, Optional

from core.errors import ConfigError

StorageBackend = Literal["postgres", "memory"]

_TRUE_VALUES = ("1", "true", "yes", "on")


def parse_ids(name: str, raw: Optional[str]) -> frozenset[int]:
    """Parse a comma-separated list of integer ids; blanks are skipped."""
    ids: set[int] = set()
    for part in (raw or "").split(","):
        part = part.strip()
        if not part:
            continue
        try:
            ids.add(int(part))
        except ValueError as exc:
            raise ConfigError(f"can't parse {name}: {part!r} is not an integer") from exc
    return frozenset(ids)


@dataclass(frozen=True)
class AppConfig:
    host: str = "127.0.0.1"
    port: int = 40001
    operators: frozenset[int] = field(default_factory=frozenset)
    viewers: frozenset[int] = field(default_factory=frozenset)
    storage_backend: StorageBackend = "postgres"
    # Do not log it (may contain credentials).
    database_url: Optional[str] = field(default=None, repr=False)
    init_db: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        env = os.environ if environ is None else environ

        backend = env.get("STORAGE_BACKEND", "postgres").strip().lower()
        if backend not in ("postgres", "memory"):
            raise ConfigError(f"STORAGE_BACKEND must be 'postgres' or 'memory', got {backend!r}")

        database_url = env.get("DATABASE_URL") or None
        if backend == "postgres" and not database_url:
            raise ConfigError("DATABASE_URL environment variable is required for the postgres backend")

        raw_port = env.get("API_PORT", "40001")
        try:
            port = int(raw_port)
        except ValueError as exc:
            raise ConfigError(f"can't parse API_PORT: {raw_port!r}") from exc

        return cls(
            host=env.get("API_HOST", "127.0.0.1"),
            port=port,
            operators=parse_ids("USER_OPERATORS_LIST", env.get("USER_OPERATORS_LIST")),
            viewers=parse_ids("USER_VIEWERS_LIST", env.get("USER_VIEWERS_LIST")),
            storage_backend=backend,  # type: ignore[arg-type]
            database_url=database_url,
            init_db=env.get("INIT_DB", "false").strip().lower() in _TRUE_VALUES,
        )
