"""Certbot certificate issuance and renewal checks."""

from __future__ import annotations

from pathlib import Path

from rpx.constants import ACME_WEBROOT, LETSENCRYPT_LIVE_DIR
from rpx.models import CertPaths, CommandResult
from rpx.services import runner


class Certbot:
    """Drives the certbot CLI on the host.

    ``authenticator`` is either ``webroot`` (HTTP-01 answered from
    ``webroot``, which the generated vhost already serves) or ``nginx``
    (certbot's nginx plugin).
    """

    def __init__(
        self,
        *,
        authenticator: str = "webroot",
        webroot: Path = ACME_WEBROOT,
        live_dir: Path = LETSENCRYPT_LIVE_DIR,
    ):
        self.authenticator = authenticator
        self.webroot = webroot
        self.live_dir = live_dir

    def issue_command(self, domain: str, alt_names: list[str], email: str) -> list[str]:
        cmd = ["certbot", "certonly"]
        if self.authenticator == "webroot":
            cmd.extend(["--webroot", "-w", str(self.webroot)])
        else:
            cmd.append("--nginx")
        for name in [domain, *alt_names]:
            cmd.extend(["-d", name])
        cmd.extend([
            "--non-interactive", "--agree-tos",
            "-m", email,
            "--keep-until-expiring",
        ])
        return cmd

    def issue(self, domain: str, alt_names: list[str], email: str) -> CommandResult:
        return runner.run(self.issue_command(domain, alt_names, email), capture=False)

    def certificate_exists(self, domain: str) -> bool:
        return CertPaths.for_domain(domain, self.live_dir).fullchain.is_file()

    def renew_dry_run(self) -> CommandResult:
        return runner.run(["certbot", "renew", "--dry-run"])
