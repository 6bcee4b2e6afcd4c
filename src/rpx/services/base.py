"""Narrow interfaces for the external tools rpx drives.

Each method returns a :class:`~rpx.models.CommandResult` so the workflow can
run against fakes without touching the host.
"""

from __future__ import annotations

from typing import Protocol

from rpx.models import CommandResult


class PackageManager(Protocol):
    def is_available(self, binary: str) -> bool: ...

    def install(self, *names: str) -> CommandResult: ...


class ProxyServer(Protocol):
    def validate_config(self) -> CommandResult: ...

    def reload(self) -> CommandResult: ...


class Firewall(Protocol):
    def is_available(self) -> bool: ...

    def allow(self, rule: str) -> CommandResult: ...

    def reload(self) -> CommandResult: ...


class AcmeClient(Protocol):
    def issue(self, domain: str, alt_names: list[str], email: str) -> CommandResult: ...

    def certificate_exists(self, domain: str) -> bool: ...

    def renew_dry_run(self) -> CommandResult: ...


class ConfigStore(Protocol):
    def write(self, domain: str, content: str) -> None: ...

    def read(self, domain: str) -> str | None: ...

    def activate(self, domain: str) -> None: ...

    def remove(self, domain: str) -> None: ...

    def remove_default(self) -> bool: ...

    def enabled(self, domain: str) -> bool: ...

    def enabled_domains(self) -> list[str]: ...
