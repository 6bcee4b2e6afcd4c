"""rpx — provision an nginx reverse proxy (and optional Let's Encrypt TLS) for a domain."""

__version__ = "0.1.0"
