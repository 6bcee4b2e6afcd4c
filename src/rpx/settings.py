"""Runtime settings for rpx, overridable through RPX_* environment variables."""

from __future__ import annotations

import os
import socket
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from rpx.constants import (
    ACME_OWNER,
    ACME_WEBROOT,
    AUDIT_DB_PATH,
    CERTBOT_AUTHENTICATOR,
    DEFAULT_SITE_NAME,
    LETSENCRYPT_LIVE_DIR,
    LOG_DIR,
    SITES_AVAILABLE_DIR,
    SITES_ENABLED_DIR,
)


def _env_path(name: str, default: Path) -> Path:
    env = os.environ.get(name)
    return Path(env) if env else default


def _default_acme_owner() -> str | None:
    # Empty string disables the chown (useful for unprivileged test runs).
    return os.environ.get("RPX_ACME_OWNER", ACME_OWNER) or None


class RpxConfig(BaseModel):
    """Runtime configuration resolved once at startup."""

    # Environment values arrive through default factories; validate them too.
    model_config = ConfigDict(validate_default=True)

    host_id: str = Field(default_factory=lambda: os.environ.get("RPX_HOST_ID") or socket.gethostname())
    sites_available: Path = Field(default_factory=lambda: _env_path("RPX_SITES_AVAILABLE", SITES_AVAILABLE_DIR))
    sites_enabled: Path = Field(default_factory=lambda: _env_path("RPX_SITES_ENABLED", SITES_ENABLED_DIR))
    default_site_name: str = Field(default=DEFAULT_SITE_NAME)
    acme_webroot: Path = Field(default_factory=lambda: _env_path("RPX_ACME_WEBROOT", ACME_WEBROOT))
    acme_owner: str | None = Field(default_factory=_default_acme_owner)
    letsencrypt_live_dir: Path = Field(default_factory=lambda: _env_path("RPX_LETSENCRYPT_LIVE", LETSENCRYPT_LIVE_DIR))
    certbot_authenticator: Literal["webroot", "nginx"] = Field(
        default_factory=lambda: os.environ.get("RPX_CERTBOT_AUTHENTICATOR", CERTBOT_AUTHENTICATOR)
    )
    include_www: bool = True
    log_dir: Path = Field(default_factory=lambda: _env_path("RPX_LOG_DIR", LOG_DIR))
    audit_db_path: Path = Field(default_factory=lambda: _env_path("RPX_AUDIT_DB", AUDIT_DB_PATH))

    @property
    def audit_jsonl_path(self) -> Path:
        return self.log_dir / "audit.jsonl"

    def vhost_path(self, domain: str) -> Path:
        return self.sites_available / domain

    def enabled_path(self, domain: str) -> Path:
        return self.sites_enabled / domain
