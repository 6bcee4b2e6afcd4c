"""Preconditions, operator input, and prerequisite software."""

from __future__ import annotations

import os
import re
import sys
from typing import Callable

import typer
from rich.console import Console

from rpx.errors import BackendUnavailableError, InvalidInputError, PackageInstallError, PreconditionError
from rpx.models import SessionInput
from rpx.services.base import PackageManager

Prompt = Callable[[str], str]

_YES = re.compile(r"^[Yy]$")
_DIGITS = re.compile(r"^[0-9]+$")


def check_preconditions(*, euid: int | None = None, interactive: bool | None = None) -> None:
    """Fail unless running as root with an interactive stdin."""
    if euid is None:
        euid = os.geteuid()
    if interactive is None:
        interactive = sys.stdin.isatty()
    if euid != 0:
        raise PreconditionError("This command must be run as root. Please use sudo.")
    if not interactive:
        raise PreconditionError("This command must be run in an interactive shell.")


def parse_domain(raw: str) -> str:
    domain = raw.strip()
    if not domain:
        raise InvalidInputError("Invalid input. Please provide a valid domain.")
    return domain


def parse_port(raw: str) -> int:
    """Accept any string of ASCII digits; there is no range check."""
    value = raw.strip()
    if not _DIGITS.match(value):
        raise InvalidInputError("Invalid input. Please provide a valid backend port.")
    return int(value)


def parse_yes(raw: str) -> bool:
    return bool(_YES.match(raw.strip()))


def _typer_prompt(text: str) -> str:
    return typer.prompt(text, default="", show_default=False)


def collect_input(prompt: Prompt = _typer_prompt) -> SessionInput:
    """Ask the operator for domain, backend port and SSL choice, in that order."""
    domain = parse_domain(prompt("Enter your domain (e.g., example.com)"))

    if not parse_yes(prompt("Is your backend available? (y/n)")):
        raise BackendUnavailableError("Backend not available. Nothing to proxy to.")
    port = parse_port(prompt("Enter the port number your backend listens on (e.g., 3002)"))

    ssl = parse_yes(prompt("Do you want to set up SSL with Let's Encrypt? (y/n)"))
    return SessionInput(domain=domain, port=port, ssl=ssl)


def ensure_installed(packages: PackageManager, binary: str, *names: str, console: Console | None = None) -> bool:
    """Install ``names`` when ``binary`` is missing. Returns True if an install ran."""
    if packages.is_available(binary):
        return False
    if console is not None:
        console.print(f"  {binary} not found, installing {' '.join(names)}...")
    result = packages.install(*names)
    if not result.ok:
        raise PackageInstallError(f"Failed to install {' '.join(names)}:\n{result.detail}")
    return True


class Provisioner:
    """Gets the host ready to serve a proxied site."""

    def __init__(self, packages: PackageManager, *, console: Console | None = None):
        self.packages = packages
        self.console = console or Console()

    def ensure_proxy_installed(self) -> bool:
        return ensure_installed(self.packages, "nginx", "nginx", console=self.console)
