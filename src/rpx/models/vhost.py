"""Virtual-host models: one variant per config state."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from rpx.constants import ACME_WEBROOT, BACKEND_HOST, LETSENCRYPT_LIVE_DIR


class CertPaths(BaseModel):
    """Files certbot places under ``live/<domain>/``."""

    fullchain: Path
    privkey: Path
    chain: Path

    @classmethod
    def for_domain(cls, domain: str, live_dir: Path = LETSENCRYPT_LIVE_DIR) -> CertPaths:
        base = live_dir / domain
        return cls(
            fullchain=base / "fullchain.pem",
            privkey=base / "privkey.pem",
            chain=base / "chain.pem",
        )


class _VhostBase(BaseModel):
    domain: str
    port: int
    include_www: bool = True
    acme_webroot: Path = ACME_WEBROOT

    @property
    def server_names(self) -> list[str]:
        names = [self.domain]
        if self.include_www:
            names.append(f"www.{self.domain}")
        return names

    @property
    def upstream(self) -> str:
        return f"http://{BACKEND_HOST}:{self.port}"


class HttpOnlyVhost(_VhostBase):
    """Plain HTTP proxy with the ACME challenge exception."""

    kind: Literal["http_only"] = "http_only"


class HttpsRedirectVhost(_VhostBase):
    """HTTP block redirecting to HTTPS, plus the TLS proxy block."""

    kind: Literal["https_redirect"] = "https_redirect"
    cert: CertPaths

    @classmethod
    def from_http(cls, vhost: HttpOnlyVhost, live_dir: Path = LETSENCRYPT_LIVE_DIR) -> HttpsRedirectVhost:
        return cls(
            domain=vhost.domain,
            port=vhost.port,
            include_www=vhost.include_www,
            acme_webroot=vhost.acme_webroot,
            cert=CertPaths.for_domain(vhost.domain, live_dir),
        )


Vhost = Annotated[Union[HttpOnlyVhost, HttpsRedirectVhost], Field(discriminator="kind")]
