"""Render, install and activate the vhost; validate and reload nginx."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape

from rpx.errors import NginxConfigError
from rpx.models import Vhost
from rpx.services.base import ConfigStore, ProxyServer
from rpx.services.vhost_renderer import render_vhost

log = logging.getLogger(__name__)


class ConfigWriter:
    def __init__(self, store: ConfigStore, server: ProxyServer, *, console: Console | None = None):
        self.store = store
        self.server = server
        self.console = console or Console()

    def install(self, vhost: Vhost) -> bool:
        """Replace whatever exists for the domain with a fresh, enabled vhost.

        The default site goes first, then any previous definition/activation
        for this domain. Returns whether nginx is now running the new config.
        """
        if self.store.remove_default():
            self.console.print("  Removed default nginx site")
        self.store.remove(vhost.domain)
        self.store.write(vhost.domain, render_vhost(vhost))
        self.store.activate(vhost.domain)
        log.debug("installed %s vhost for %s", vhost.kind, vhost.domain)
        return self.apply()

    def rewrite(self, vhost: Vhost) -> bool:
        """Overwrite the existing definition in place (full replace, never append)."""
        self.store.write(vhost.domain, render_vhost(vhost))
        if not self.store.enabled(vhost.domain):
            self.store.activate(vhost.domain)
        log.debug("rewrote %s vhost for %s", vhost.kind, vhost.domain)
        return self.apply()

    def validate(self) -> None:
        """Run the config test. Raises NginxConfigError on failure."""
        result = self.server.validate_config()
        if not result.ok:
            raise NginxConfigError(f"NGINX config test failed:\n{result.detail}")

    def apply(self) -> bool:
        """Validate, then reload. A bad config is reported and left on disk."""
        try:
            self.validate()
        except NginxConfigError as exc:
            self.console.print(f"[yellow]{escape(str(exc))}[/yellow]")
            self.console.print("[yellow]Reload skipped; the written config was left in place.[/yellow]")
            return False

        result = self.server.reload()
        if not result.ok:
            self.console.print(f"[yellow]NGINX reload failed:\n{escape(result.detail)}[/yellow]")
            return False
        return True
