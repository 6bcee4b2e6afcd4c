"""Subprocess wrapper shared by the service adapters."""

from __future__ import annotations

import logging
import shutil
import subprocess

from rpx.models import CommandResult

log = logging.getLogger(__name__)


def run(cmd: list[str], *, capture: bool = True) -> CommandResult:
    """Run ``cmd`` to completion and fold the outcome into a CommandResult."""
    log.debug("exec: %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, check=False, capture_output=capture, text=True)
    except FileNotFoundError:
        return CommandResult.failure(f"{cmd[0]}: command not found", returncode=127)

    output = ((proc.stderr or "") + (proc.stdout or "")).strip() if capture else ""
    if proc.returncode != 0:
        log.debug("exit %d: %s", proc.returncode, output)
        return CommandResult.failure(output or f"{cmd[0]} exited with status {proc.returncode}", proc.returncode)
    return CommandResult.success(output, proc.returncode)


def command_exists(binary: str) -> bool:
    return shutil.which(binary) is not None
