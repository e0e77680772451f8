"""Settings for the PFT interpretation server, read from ``SERVER_*`` env vars.

Defaults suit a local checkout; deployments override them in the process
environment.
"""

import os
from dataclasses import dataclass, field

ENV_PREFIX = "SERVER_"


def _env(name: str, default: str) -> str:
    return os.getenv(ENV_PREFIX + name, default)


def _env_int(name: str, default: int) -> int:
    raw = _env(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class ServerSettings:
    """Read once by ``create_app``; the engine itself never sees it."""

    host: str = "0.0.0.0"
    port: int = 8080
    # Origins allowed to post measurements from a browser form
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    # Directory holding grading.yaml; None uses the tables shipped in pft_interpreter/rules
    rules_dir: str | None = None
    log_level: str = "INFO"
    # Records accepted by one POST /interpret/batch
    max_batch_size: int = 100


def load_settings() -> ServerSettings:
    origins = [origin.strip() for origin in _env("CORS_ORIGINS", "*").split(",")]
    return ServerSettings(
        host=_env("HOST", "0.0.0.0"),
        port=_env_int("PORT", 8080),
        cors_origins=[origin for origin in origins if origin],
        rules_dir=_env("RULES_DIR", "") or None,
        log_level=_env("LOG_LEVEL", "INFO").upper(),
        max_batch_size=_env_int("MAX_BATCH_SIZE", 100),
    )
