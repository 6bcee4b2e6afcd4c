"""Pydantic models shared across rpx."""

from rpx.models.audit_event import AuditEvent
from rpx.models.result import CommandResult
from rpx.models.session import ProvisionState, SessionInput
from rpx.models.vhost import CertPaths, HttpOnlyVhost, HttpsRedirectVhost, Vhost

__all__ = [
    "AuditEvent",
    "CertPaths",
    "CommandResult",
    "HttpOnlyVhost",
    "HttpsRedirectVhost",
    "ProvisionState",
    "SessionInput",
    "Vhost",
]
