"""CLI commands for inspecting request construction."""

import json
import logging
import sys
import uuid

import click
import structlog
from pydantic import ValidationError

from src.features.observability.logging import bind_request_context, configure_logging
from src.features.request import (
    OutboundOptions,
    RedirectMode,
    Request,
    RequestError,
    build_outbound_options,
    redact_headers,
    redact_url_credentials,
)
from src.settings import get_settings


logger = structlog.get_logger()

# Marker passed as the connection agent when --agent is given
CLI_AGENT = "keep-alive-pool"


def parse_header(raw: str) -> tuple[str, str]:
    """Split a ``Name: value`` header argument.

    Args:
        raw: Header argument as typed on the command line.

    Returns:
        Tuple of (name, value) with surrounding whitespace removed.

    Raises:
        click.BadParameter: If the argument has no colon.
    """
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        msg = f"Expected 'Name: value', got {raw!r}"
        raise click.BadParameter(msg, param_hint="--header")
    return name.strip(), value.strip()


def render_options(options: OutboundOptions) -> dict[str, object]:
    """Render outbound options as JSON-safe data with secrets redacted."""
    return {
        "method": options.method,
        "href": redact_url_credentials(options.href),
        "protocol": options.protocol,
        "hostname": options.hostname,
        "host": options.host,
        "port": options.port,
        "path": options.path,
        "headers": redact_headers(options.headers),
        "agent": options.agent is not None,
    }


@click.group()
@click.version_option(version="0.1.0")
def cli() -> None:
    """HTTP request construction CLI."""


@cli.command()
@click.argument("url")
@click.option("--method", "-X", default=None, help="HTTP method (default: GET).")
@click.option(
    "--header",
    "-H",
    "headers",
    multiple=True,
    help="Request header as 'Name: value'. May be repeated.",
)
@click.option("--data", "-d", default=None, help="Text request body.")
@click.option(
    "--compress/--no-compress",
    default=True,
    help="Advertise gzip/deflate acceptance (default: true).",
)
@click.option(
    "--agent",
    "use_agent",
    is_flag=True,
    help="Send through a pooled connection agent instead of Connection: close.",
)
@click.option(
    "--redirect",
    type=click.Choice([mode.value for mode in RedirectMode]),
    default=None,
    help="Redirect mode (default: follow).",
)
@click.option("--follow", type=int, default=None, help="Maximum redirect hops.")
@click.option(
    "--json-logs/--no-json-logs",
    default=None,
    help="Use JSON format for logs (default: from REQUEST_JSON_LOGS).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
def inspect(  # noqa: PLR0913
    url: str,
    method: str | None,
    headers: tuple[str, ...],
    data: str | None,
    compress: bool,
    use_agent: bool,
    redirect: str | None,
    follow: int | None,
    json_logs: bool | None,
    verbose: bool,
) -> None:
    """Build a request for URL and print its transport options as JSON."""
    settings = get_settings()
    try:
        configure_logging(
            level=logging.DEBUG if verbose else settings.log_level,
            json_format=settings.json_logs if json_logs is None else json_logs,
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    request_id = str(uuid.uuid4())
    bind_request_context(request_id)
    log = logger.bind(command="inspect", url=redact_url_credentials(url))

    header_pairs = [parse_header(raw) for raw in headers]

    try:
        request = Request(
            url,
            method=method,
            headers=header_pairs,
            body=data,
            compress=compress,
            agent=CLI_AGENT if use_agent else None,
            redirect=redirect,
            follow=follow,
        )
        options = build_outbound_options(request, user_agent=settings.user_agent)
    except RequestError as e:
        log.info("inspect_failed", **e.to_dict())
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)
    except ValidationError as e:
        click.echo(f"Error: invalid option: {e}", err=True)
        sys.exit(1)

    log.info(
        "inspect_complete",
        method=options.method,
        header_count=len(options.headers),
    )
    click.echo(json.dumps(render_options(options), indent=2))


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
