"""Jinja2-based NGINX vhost config renderer."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from rpx.constants import ACME_CHALLENGE_PATH
from rpx.models import HttpOnlyVhost, HttpsRedirectVhost, Vhost

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape([]),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_http_vhost(vhost: HttpOnlyVhost) -> str:
    """Render the HTTP-only proxy vhost (pre-cert issuance)."""
    template = _get_env().get_template("vhost_http.conf.j2")
    return template.render(site=vhost, acme_path=ACME_CHALLENGE_PATH)


def render_https_vhost(vhost: HttpsRedirectVhost) -> str:
    """Render the HTTP redirect block + the TLS proxy block."""
    template = _get_env().get_template("vhost_https.conf.j2")
    return template.render(site=vhost, acme_path=ACME_CHALLENGE_PATH)


def render_vhost(vhost: Vhost) -> str:
    if isinstance(vhost, HttpsRedirectVhost):
        return render_https_vhost(vhost)
    return render_http_vhost(vhost)
