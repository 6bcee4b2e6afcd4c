"""Custom exceptions for rpx."""

from __future__ import annotations


class RpxError(Exception):
    """Base exception for all rpx operations."""

    def __init__(self, message: str, *, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class PreconditionError(RpxError):
    """Not running as root, or stdin is not interactive."""


class InvalidInputError(RpxError):
    """Operator input failed validation."""


class BackendUnavailableError(RpxError):
    """Operator reported that no backend is listening."""


class PackageInstallError(RpxError):
    """Package manager failed to install a required package."""


class NginxConfigError(RpxError):
    """NGINX configuration validation failed."""


class CertbotError(RpxError):
    """Certificate issuance failed."""


class ConfigError(RpxError):
    """An RPX_* setting has an invalid value."""
