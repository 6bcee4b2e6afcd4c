"""ACME HTTP-01 challenge directory."""

from __future__ import annotations

from pathlib import Path

from rpx.models import CommandResult
from rpx.services import runner


def chown_command(path: Path, owner: str) -> list[str]:
    # -P: never traverse or dereference symlinks; links found inside are lchown'd.
    return ["chown", "-R", "-P", f"{owner}:{owner}", str(path)]


def ensure_acme_webroot(path: Path, owner: str | None) -> CommandResult:
    """Create ``path`` and hand it (recursively) to ``owner:owner``.

    A failed chown (e.g. unknown user) comes back as a failure result; the
    directory itself is still usable by certbot running as root.
    """
    path.mkdir(parents=True, exist_ok=True)
    if not owner:
        return CommandResult.success()
    return runner.run(chown_command(path, owner))
