"""One provisioning run, start to finish.

Order is fixed: prerequisites, HTTP vhost, firewall, then (optionally)
certificate issuance and the HTTPS rewrite. Nothing is retried or rolled
back; a fatal error stops the run in whatever state it reached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape

from rpx.cert_manager import CertManager
from rpx.config_writer import ConfigWriter
from rpx.models import HttpOnlyVhost, ProvisionState, SessionInput
from rpx.models.session import TRANSITIONS
from rpx.provisioner import Provisioner
from rpx.services import firewall as firewall_service
from rpx.services.base import AcmeClient, ConfigStore, Firewall, PackageManager, ProxyServer
from rpx.services.certbot import Certbot
from rpx.services.config_store import FileConfigStore
from rpx.services.nginx import NginxServer
from rpx.services.packages import AptPackageManager
from rpx.services.webroot import ensure_acme_webroot
from rpx.settings import RpxConfig

log = logging.getLogger(__name__)


@dataclass
class SetupReport:
    domain: str
    port: int
    ssl: bool
    state: ProvisionState
    config_live: bool = False
    renewal_ok: bool | None = None

    @property
    def url(self) -> str:
        scheme = "https" if self.ssl else "http"
        return f"{scheme}://{self.domain}"


class ProxySetup:
    def __init__(
        self,
        cfg: RpxConfig,
        *,
        store: ConfigStore,
        packages: PackageManager,
        server: ProxyServer,
        acme: AcmeClient,
        firewall: Firewall,
        console: Console | None = None,
    ):
        self.cfg = cfg
        self.console = console or Console()
        self.firewall = firewall
        self.provisioner = Provisioner(packages, console=self.console)
        self.writer = ConfigWriter(store, server, console=self.console)
        self.certs = CertManager(
            acme, packages, self.writer,
            live_dir=cfg.letsencrypt_live_dir,
            console=self.console,
        )
        self.state = ProvisionState.START

    @classmethod
    def from_config(cls, cfg: RpxConfig, *, console: Console | None = None) -> ProxySetup:
        """Wire the real host collaborators."""
        return cls(
            cfg,
            store=FileConfigStore(cfg.sites_available, cfg.sites_enabled, cfg.default_site_name),
            packages=AptPackageManager(),
            server=NginxServer(),
            acme=Certbot(
                authenticator=cfg.certbot_authenticator,
                webroot=cfg.acme_webroot,
                live_dir=cfg.letsencrypt_live_dir,
            ),
            firewall=firewall_service.Ufw(),
            console=console,
        )

    def _advance(self, new: ProvisionState) -> None:
        if new not in TRANSITIONS[self.state]:
            raise RuntimeError(f"illegal transition {self.state.value} -> {new.value}")
        log.debug("state %s -> %s", self.state.value, new.value)
        self.state = new

    def _step(self, n: int, total: int, text: str) -> None:
        self.console.print(f"[bold][{n}/{total}][/bold] {escape(text)}")

    def run(self, session: SessionInput) -> SetupReport:
        self._advance(ProvisionState.INPUT_COLLECTED)
        report = SetupReport(domain=session.domain, port=session.port, ssl=session.ssl, state=self.state)
        total = 7 if session.ssl else 4

        self._step(1, total, "Ensuring nginx is installed")
        self.provisioner.ensure_proxy_installed()

        self._step(2, total, f"Writing HTTP vhost for {session.domain}")
        webroot = ensure_acme_webroot(self.cfg.acme_webroot, self.cfg.acme_owner)
        if not webroot.ok:
            self.console.print(
                f"[yellow]Could not chown {escape(str(self.cfg.acme_webroot))} to {escape(str(self.cfg.acme_owner))}; continuing:\n"
                f"{escape(webroot.detail)}[/yellow]"
            )
        vhost = HttpOnlyVhost(
            domain=session.domain,
            port=session.port,
            include_www=self.cfg.include_www,
            acme_webroot=self.cfg.acme_webroot,
        )
        report.config_live = self.writer.install(vhost)
        self._advance(ProvisionState.HTTP_CONFIG_ACTIVE)
        report.state = self.state

        self._step(3, total, "Configuring firewall")
        rules = ["80/tcp", f"{session.port}/tcp"]
        if session.ssl:
            rules.append("443/tcp")
        if not firewall_service.open_ports(self.firewall, rules):
            self.console.print("  ufw not found, skipping")

        if session.ssl:
            self._advance(ProvisionState.TLS_REQUESTED)
            report.state = self.state

            self._step(4, total, "Ensuring certbot is installed")
            self.certs.ensure_client()

            self._step(5, total, f"Requesting certificate for {' and '.join(vhost.server_names)}")
            https_vhost = self.certs.obtain(vhost)

            self._step(6, total, "Enabling HTTPS vhost")
            report.config_live = self.certs.secure(https_vhost)
            self._advance(ProvisionState.TLS_CONFIG_ACTIVE)
            report.state = self.state

            self._step(7, total, "Testing certificate auto-renewal")
            report.renewal_ok = self.certs.check_renewal()
        else:
            self._step(4, total, "Skipping SSL (HTTP only)")

        self._advance(ProvisionState.DONE)
        report.state = self.state
        return report
