"""Outcome of an external command."""

from __future__ import annotations

from pydantic import BaseModel


class CommandResult(BaseModel):
    """Either ``success`` or ``failure(detail)``.

    ``detail`` carries whatever the tool printed (stderr preferred) so the
    operator sees the real reason when a step fails.
    """

    ok: bool
    detail: str = ""
    returncode: int | None = None

    @classmethod
    def success(cls, detail: str = "", returncode: int | None = 0) -> CommandResult:
        return cls(ok=True, detail=detail, returncode=returncode)

    @classmethod
    def failure(cls, detail: str, returncode: int | None = None) -> CommandResult:
        return cls(ok=False, detail=detail, returncode=returncode)

    def __bool__(self) -> bool:
        return self.ok
