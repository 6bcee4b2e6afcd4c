"""apt package installation."""

from __future__ import annotations

from rpx.models import CommandResult
from rpx.services import runner


class AptPackageManager:
    """Installs packages with apt-get; output streams to the terminal."""

    def is_available(self, binary: str) -> bool:
        return runner.command_exists(binary)

    def install(self, *names: str) -> CommandResult:
        result = runner.run(["apt-get", "update"], capture=False)
        if not result.ok:
            return result
        return runner.run(["apt-get", "install", "-y", *names], capture=False)
