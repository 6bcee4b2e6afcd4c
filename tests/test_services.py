"""Tests for the subprocess-backed host adapters."""

from __future__ import annotations

import grp
import os
import pwd
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import FakeFirewall
from rpx.models import CommandResult
from rpx.services import runner
from rpx.services.certbot import Certbot
from rpx.services.firewall import open_ports
from rpx.services.nginx import NginxServer
from rpx.services.packages import AptPackageManager
from rpx.services.webroot import ensure_acme_webroot


def _completed(cmd, returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)


class TestRunner:
    def test_success(self):
        with patch("rpx.services.runner.subprocess.run", return_value=_completed(["true"], stdout="ok\n")):
            result = runner.run(["true"])
        assert result.ok
        assert result.detail == "ok"

    def test_failure_prefers_stderr(self):
        proc = _completed(["nginx", "-t"], 1, stderr="nginx: [emerg] unexpected end of file\n")
        with patch("rpx.services.runner.subprocess.run", return_value=proc):
            result = runner.run(["nginx", "-t"])
        assert not result.ok
        assert result.returncode == 1
        assert "unexpected end of file" in result.detail

    def test_failure_without_output(self):
        with patch("rpx.services.runner.subprocess.run", return_value=_completed(["apt-get"], 100)):
            result = runner.run(["apt-get", "install"], capture=False)
        assert result.detail == "apt-get exited with status 100"

    def test_missing_binary(self):
        with patch("rpx.services.runner.subprocess.run", side_effect=FileNotFoundError):
            result = runner.run(["ufw", "reload"])
        assert not result.ok
        assert result.returncode == 127


class TestNginxServer:
    def test_commands(self):
        with patch("rpx.services.nginx.runner.run", return_value=CommandResult.success()) as run:
            server = NginxServer()
            server.validate_config()
            server.reload()
        assert [c.args[0] for c in run.call_args_list] == [
            ["nginx", "-t"],
            ["systemctl", "reload", "nginx"],
        ]


class TestAptPackageManager:
    def test_update_then_install(self):
        with patch("rpx.services.packages.runner.run", return_value=CommandResult.success()) as run:
            AptPackageManager().install("certbot", "python3-certbot-nginx")
        assert [c.args[0] for c in run.call_args_list] == [
            ["apt-get", "update"],
            ["apt-get", "install", "-y", "certbot", "python3-certbot-nginx"],
        ]

    def test_update_failure_stops(self):
        failure = CommandResult.failure("Temporary failure resolving", returncode=100)
        with patch("rpx.services.packages.runner.run", return_value=failure) as run:
            result = AptPackageManager().install("nginx")
        assert not result.ok
        assert run.call_count == 1


class TestCertbot:
    def test_webroot_command(self, tmp_path: Path):
        cmd = Certbot(webroot=tmp_path).issue_command("example.com", ["www.example.com"], "admin@example.com")
        assert cmd[:5] == ["certbot", "certonly", "--webroot", "-w", str(tmp_path)]
        assert cmd.count("-d") == 2
        assert "www.example.com" in cmd
        assert "--non-interactive" in cmd
        assert "--agree-tos" in cmd
        assert cmd[cmd.index("-m") + 1] == "admin@example.com"

    def test_nginx_authenticator(self):
        cmd = Certbot(authenticator="nginx").issue_command("example.com", [], "admin@example.com")
        assert "--nginx" in cmd
        assert "--webroot" not in cmd
        assert cmd.count("-d") == 1

    def test_certificate_exists(self, tmp_path: Path):
        certbot = Certbot(live_dir=tmp_path)
        assert not certbot.certificate_exists("example.com")
        (tmp_path / "example.com").mkdir()
        (tmp_path / "example.com" / "fullchain.pem").write_text("cert")
        assert certbot.certificate_exists("example.com")

    def test_renew_dry_run(self):
        with patch("rpx.services.certbot.runner.run", return_value=CommandResult.success()) as run:
            Certbot().renew_dry_run()
        run.assert_called_once_with(["certbot", "renew", "--dry-run"])


class TestOpenPorts:
    def test_allows_and_reloads(self):
        fw = FakeFirewall()
        assert open_ports(fw, ["80/tcp", "443/tcp"]) is True
        assert fw.rules == ["80/tcp", "443/tcp"]
        assert fw.reloaded

    def test_errors_swallowed(self):
        fw = FakeFirewall(fail=True)
        assert open_ports(fw, ["80/tcp"]) is True
        assert fw.reloaded

    def test_absent(self):
        assert open_ports(FakeFirewall(available=False), ["80/tcp"]) is False


class TestAcmeWebroot:
    def test_creates_directory(self, tmp_path: Path):
        webroot = tmp_path / "var" / "www" / "certbot"
        assert ensure_acme_webroot(webroot, owner=None).ok
        assert webroot.is_dir()

    def test_chown_never_follows_symlinks(self, tmp_path: Path):
        webroot = tmp_path / "certbot"
        with patch("rpx.services.webroot.runner.run", return_value=CommandResult.success()) as run:
            ensure_acme_webroot(webroot, owner="www-data")
        run.assert_called_once_with(["chown", "-R", "-P", "www-data:www-data", str(webroot)])

    def test_unknown_owner_is_reported_not_raised(self, tmp_path: Path):
        failure = CommandResult.failure("chown: invalid user: 'www-data-missing:www-data-missing'", returncode=1)
        with patch("rpx.services.webroot.runner.run", return_value=failure):
            result = ensure_acme_webroot(tmp_path / "certbot", owner="www-data-missing")
        assert not result.ok
        assert "invalid user" in result.detail
        assert (tmp_path / "certbot").is_dir()

    @pytest.mark.skipif(not hasattr(os, "geteuid") or os.geteuid() != 0, reason="needs root to give files away")
    def test_symlink_target_outside_webroot_keeps_owner(self, tmp_path: Path):
        try:
            pwd.getpwnam("daemon")
            grp.getgrnam("daemon")
        except KeyError:
            pytest.skip("no daemon user/group on this host")

        outside = tmp_path / "shadow"
        outside.write_text("secret")
        os.chown(outside, 0, 0)
        webroot = tmp_path / "certbot"
        webroot.mkdir()
        (webroot / "evil").symlink_to(outside)

        assert ensure_acme_webroot(webroot, owner="daemon").ok

        st = outside.stat()
        assert (st.st_uid, st.st_gid) == (0, 0)
        assert webroot.stat().st_uid == pwd.getpwnam("daemon").pw_uid
