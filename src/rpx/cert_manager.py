"""Let's Encrypt issuance and the switch to the HTTPS vhost."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from rpx.config_writer import ConfigWriter
from rpx.constants import CERTBOT_PACKAGES, LETSENCRYPT_LIVE_DIR
from rpx.errors import CertbotError
from rpx.models import HttpOnlyVhost, HttpsRedirectVhost
from rpx.provisioner import ensure_installed
from rpx.services.base import AcmeClient, PackageManager

log = logging.getLogger(__name__)


def contact_email(domain: str) -> str:
    return f"admin@{domain}"


class CertManager:
    def __init__(
        self,
        acme: AcmeClient,
        packages: PackageManager,
        writer: ConfigWriter,
        *,
        live_dir: Path = LETSENCRYPT_LIVE_DIR,
        console: Console | None = None,
    ):
        self.acme = acme
        self.packages = packages
        self.writer = writer
        self.live_dir = live_dir
        self.console = console or Console()

    def ensure_client(self) -> bool:
        return ensure_installed(self.packages, "certbot", *CERTBOT_PACKAGES, console=self.console)

    def obtain(self, vhost: HttpOnlyVhost) -> HttpsRedirectVhost:
        """Request a certificate and return the HTTPS variant of ``vhost``.

        The certificate file is the only success signal. No retries.
        """
        domain = vhost.domain
        alt_names = vhost.server_names[1:]
        result = self.acme.issue(domain, alt_names, contact_email(domain))

        if not self.acme.certificate_exists(domain):
            log.debug("certbot output for %s: %s", domain, result.detail)
            raise CertbotError(
                f"SSL certificate generation failed for {domain}. Please check domain DNS or logs."
            )
        if not result.ok:
            self.console.print(
                f"[yellow]certbot reported an error, but a certificate for {escape(domain)} is present; continuing.[/yellow]"
            )
        return HttpsRedirectVhost.from_http(vhost, self.live_dir)

    def secure(self, vhost: HttpsRedirectVhost) -> bool:
        return self.writer.rewrite(vhost)

    def check_renewal(self) -> bool:
        """Smoke-test ``certbot renew``. Informational; never fails the run."""
        result = self.acme.renew_dry_run()
        if result.ok:
            self.console.print("  Renewal dry-run succeeded")
        else:
            self.console.print(f"[yellow]Renewal dry-run failed (certificate is still installed):\n{escape(result.detail)}[/yellow]")
        return result.ok
