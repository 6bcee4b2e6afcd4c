"""Shared test fixtures and fake host collaborators."""

from __future__ import annotations

from pathlib import Path

import pytest
from rich.console import Console

from rpx.models import CertPaths, CommandResult
from rpx.services.config_store import MemoryConfigStore
from rpx.settings import RpxConfig
from rpx.workflow import ProxySetup


class FakePackages:
    def __init__(self, installed: set[str] | None = None, *, fail: bool = False):
        self.installed = set(installed or ())
        self.fail = fail
        self.calls: list[tuple[str, ...]] = []

    def is_available(self, binary: str) -> bool:
        return binary in self.installed

    def install(self, *names: str) -> CommandResult:
        self.calls.append(names)
        if self.fail:
            return CommandResult.failure("E: Unable to locate package", returncode=100)
        self.installed.update(names)
        return CommandResult.success()


class FakeServer:
    def __init__(self, *, valid: bool = True):
        self.valid = valid
        self.validations = 0
        self.reloads = 0

    def validate_config(self) -> CommandResult:
        self.validations += 1
        if self.valid:
            return CommandResult.success("syntax is ok")
        return CommandResult.failure('unknown directive "proxy_pas"', returncode=1)

    def reload(self) -> CommandResult:
        self.reloads += 1
        return CommandResult.success()


class FakeAcme:
    """Writes the certificate files on success, like certbot would."""

    def __init__(self, live_dir: Path, *, issue_ok: bool = True, renew_ok: bool = True):
        self.live_dir = live_dir
        self.issue_ok = issue_ok
        self.renew_ok = renew_ok
        self.requests: list[tuple[str, list[str], str]] = []
        self.dry_runs = 0

    def issue(self, domain: str, alt_names: list[str], email: str) -> CommandResult:
        self.requests.append((domain, alt_names, email))
        if not self.issue_ok:
            return CommandResult.failure("Challenge failed for domain", returncode=1)
        paths = CertPaths.for_domain(domain, self.live_dir)
        paths.fullchain.parent.mkdir(parents=True, exist_ok=True)
        for path in (paths.fullchain, paths.privkey, paths.chain):
            path.write_text("-----BEGIN CERTIFICATE-----\n")
        return CommandResult.success()

    def certificate_exists(self, domain: str) -> bool:
        return CertPaths.for_domain(domain, self.live_dir).fullchain.is_file()

    def renew_dry_run(self) -> CommandResult:
        self.dry_runs += 1
        if self.renew_ok:
            return CommandResult.success("Congratulations, all simulated renewals succeeded")
        return CommandResult.failure("Failed to renew certificate", returncode=1)


class FakeFirewall:
    def __init__(self, *, available: bool = True, fail: bool = False):
        self.available = available
        self.fail = fail
        self.rules: list[str] = []
        self.reloaded = False

    def is_available(self) -> bool:
        return self.available

    def allow(self, rule: str) -> CommandResult:
        self.rules.append(rule)
        if self.fail:
            return CommandResult.failure("ERROR: problem running iptables")
        return CommandResult.success()

    def reload(self) -> CommandResult:
        self.reloaded = True
        return CommandResult.success()


@pytest.fixture
def tmp_config(tmp_path: Path) -> RpxConfig:
    """Return an RpxConfig pointing at temp directories."""
    return RpxConfig(
        host_id="test-host",
        sites_available=tmp_path / "nginx" / "sites-available",
        sites_enabled=tmp_path / "nginx" / "sites-enabled",
        acme_webroot=tmp_path / "www" / "certbot",
        acme_owner=None,
        letsencrypt_live_dir=tmp_path / "letsencrypt" / "live",
        log_dir=tmp_path / "log",
        audit_db_path=tmp_path / "lib" / "audit.db",
    )


@pytest.fixture
def quiet_console() -> Console:
    return Console(quiet=True)


@pytest.fixture
def make_setup(tmp_config: RpxConfig, quiet_console: Console):
    """Build a ProxySetup wired to fakes; returns (setup, fakes)."""

    def _make(**overrides):
        fakes = {
            "store": MemoryConfigStore(with_default=True),
            "packages": FakePackages({"nginx", "certbot"}),
            "server": FakeServer(),
            "acme": FakeAcme(tmp_config.letsencrypt_live_dir),
            "firewall": FakeFirewall(),
        }
        fakes.update(overrides)
        setup = ProxySetup(tmp_config, console=quiet_console, **fakes)
        return setup, fakes

    return _make
