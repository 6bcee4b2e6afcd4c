"""CLI configuration — singleton RpxConfig resolved at startup."""

from __future__ import annotations

from functools import lru_cache

from pydantic import ValidationError

from rpx.errors import ConfigError
from rpx.settings import RpxConfig


@lru_cache(maxsize=1)
def get_config() -> RpxConfig:
    """Return the global RpxConfig (resolved once, cached). Raises ConfigError."""
    try:
        return RpxConfig()
    except ValidationError as exc:
        problems = "\n".join(
            f"  {'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigError(f"Invalid configuration (check the RPX_* environment variables):\n{problems}") from exc
