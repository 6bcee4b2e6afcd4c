"""UFW rules for the ports a site needs. Best-effort only."""

from __future__ import annotations

import logging

from rpx.models import CommandResult
from rpx.services import runner
from rpx.services.base import Firewall

log = logging.getLogger(__name__)


class Ufw:
    def is_available(self) -> bool:
        return runner.command_exists("ufw")

    def allow(self, rule: str) -> CommandResult:
        return runner.run(["ufw", "allow", rule])

    def reload(self) -> CommandResult:
        return runner.run(["ufw", "reload"])


def open_ports(firewall: Firewall, rules: list[str]) -> bool:
    """Allow each rule and reload. Failures are ignored. Returns False if ufw is absent."""
    if not firewall.is_available():
        return False
    for rule in rules:
        result = firewall.allow(rule)
        if not result.ok:
            log.debug("ufw allow %s failed (ignored): %s", rule, result.detail)
    result = firewall.reload()
    if not result.ok:
        log.debug("ufw reload failed (ignored): %s", result.detail)
    return True
