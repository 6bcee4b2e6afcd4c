"""NGINX config validation and reload."""

from __future__ import annotations

from rpx.models import CommandResult
from rpx.services import runner


class NginxServer:
    def __init__(self, binary: str = "nginx", service: str = "nginx"):
        self.binary = binary
        self.service = service

    def validate_config(self) -> CommandResult:
        """Run ``nginx -t``; the failure detail is nginx's own error output."""
        return runner.run([self.binary, "-t"])

    def reload(self) -> CommandResult:
        return runner.run(["systemctl", "reload", self.service])
