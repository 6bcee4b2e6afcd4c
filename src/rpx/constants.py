"""Shared constants for rpx."""

from pathlib import Path

# NGINX layout (Debian/Ubuntu)
SITES_AVAILABLE_DIR = Path("/etc/nginx/sites-available")
SITES_ENABLED_DIR = Path("/etc/nginx/sites-enabled")
DEFAULT_SITE_NAME = "default"

# ACME HTTP-01 webroot
ACME_WEBROOT = Path("/var/www/certbot")
ACME_OWNER = "www-data"
ACME_CHALLENGE_PATH = "/.well-known/acme-challenge/"

# Certbot
LETSENCRYPT_LIVE_DIR = Path("/etc/letsencrypt/live")
CERTBOT_AUTHENTICATOR = "webroot"
CERTBOT_PACKAGES = ("certbot", "python3-certbot-nginx")

# Backend
BACKEND_HOST = "127.0.0.1"

# Audit / logging
LOG_DIR = Path("/var/log/rpx")
AUDIT_DB_PATH = Path("/var/lib/rpx/audit.db")
