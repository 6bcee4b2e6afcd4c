"""Root Typer application for the rpx CLI."""

from __future__ import annotations

import logging
import re
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.table import Table

from rpx.audit import audit
from rpx.config import get_config
from rpx.errors import ConfigError, RpxError
from rpx.models import HttpOnlyVhost, HttpsRedirectVhost
from rpx.provisioner import check_preconditions, collect_input
from rpx.services.config_store import FileConfigStore
from rpx.services.vhost_renderer import render_vhost
from rpx.settings import RpxConfig
from rpx.workflow import ProxySetup

app = typer.Typer(
    name="rpx",
    help="Put a domain in front of a local backend with nginx, optionally secured with Let's Encrypt.",
    no_args_is_help=True,
)
console = Console()

_PROXY_PASS = re.compile(r"proxy_pass\s+([^;]+);")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _fail(exc: RpxError) -> NoReturn:
    console.print(f"[red]{escape(str(exc))}[/red]")
    raise typer.Exit(exc.exit_code)


def _load_config() -> RpxConfig:
    try:
        return get_config()
    except ConfigError as exc:
        _fail(exc)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show the commands being run."),
) -> None:
    _configure_logging(verbose)


@app.command()
def setup() -> None:
    """Interactively provision an nginx reverse proxy for one domain."""
    try:
        cfg = get_config()
        check_preconditions()
        session = collect_input()

        with audit("setup", target=session.domain, port=session.port, ssl=session.ssl) as event:
            proxy = ProxySetup.from_config(cfg, console=console)
            try:
                report = proxy.run(session)
            finally:
                event.state = proxy.state.value
            event.params["config_live"] = report.config_live
            event.params["renewal_ok"] = report.renewal_ok
            if not report.config_live:
                event.result = "degraded"
    except RpxError as exc:
        _fail(exc)

    if not report.config_live:
        console.print("[yellow]Warning: nginx is not running the new config; fix it and run `nginx -t`.[/yellow]")
    if report.ssl:
        console.print(f"\n[green bold]Setup complete![/green bold] {escape(report.url)} is now secured with SSL.")
    else:
        console.print(
            f"\n[green bold]Setup complete (HTTP only).[/green bold] {escape(report.url)} points to port {report.port}."
        )


@app.command()
def render(
    domain: str = typer.Argument(help="Domain name (e.g., example.com)"),
    port: int = typer.Option(..., help="Local backend port"),
    ssl: bool = typer.Option(False, "--ssl", help="Render the HTTPS (redirect + TLS) variant"),
    no_www: bool = typer.Option(False, "--no-www", help="Skip www subdomain"),
) -> None:
    """Print the vhost config that setup would write, without touching the host."""
    cfg = _load_config()
    vhost = HttpOnlyVhost(domain=domain, port=port, include_www=not no_www, acme_webroot=cfg.acme_webroot)
    if ssl:
        vhost = HttpsRedirectVhost.from_http(vhost, cfg.letsencrypt_live_dir)
    typer.echo(render_vhost(vhost), nl=False)


@app.command()
def show(
    domain: str = typer.Argument(help="Domain name to show config for"),
) -> None:
    """Display the installed nginx vhost for a domain."""
    cfg = _load_config()
    store = FileConfigStore(cfg.sites_available, cfg.sites_enabled, cfg.default_site_name)
    content = store.read(domain)

    if content is None:
        console.print(f"[red]No vhost found for {escape(domain)}[/red]")
        raise typer.Exit(1)

    state = "enabled" if store.enabled(domain) else "disabled"
    console.print(f"[bold]{escape(str(store.definition_path(domain)))}[/bold] ({state})")
    console.print(Syntax(content, "nginx", theme="monokai"))


@app.command(name="list")
def list_sites() -> None:
    """List the vhosts enabled in nginx."""
    cfg = _load_config()
    store = FileConfigStore(cfg.sites_available, cfg.sites_enabled, cfg.default_site_name)
    domains = store.enabled_domains()

    if not domains:
        console.print("No enabled vhosts.")
        return

    table = Table(title="Enabled vhosts")
    table.add_column("Domain", style="cyan")
    table.add_column("Upstream", style="yellow")
    table.add_column("TLS", style="green")

    for domain in domains:
        content = store.read(domain) or ""
        match = _PROXY_PASS.search(content)
        table.add_row(
            escape(domain),
            escape(match.group(1)) if match else "-",
            "yes" if "listen 443 ssl;" in content else "no",
        )

    console.print(table)


if __name__ == "__main__":
    app()
