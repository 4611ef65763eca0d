"""hipchat -- HipChat command-line client.

Thin command-line wrapper over HipchatClient: list rooms, read room history
and post messages.

Usage:
    hipchat [--token TOKEN] [--base-url URL] COMMAND [OPTIONS]
"""

from __future__ import annotations

import json
import logging
import os

import click

from hipchat.client import HipchatClient
from hipchat.errors import HipchatError
from hipchat.models import DEFAULT_BASE_URL, Color, MessageFormat, MessageRequest

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(verbose: bool) -> None:
    """Configure Python logging."""
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(
            logging, os.environ.get("HIPCHAT_LOG_LEVEL", "WARNING").upper(), logging.WARNING
        )
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def _fail(exc: Exception) -> click.ClickException:
    if isinstance(exc, HipchatError):
        return click.ClickException(f"HipChat error ({exc.code} {exc.type}): {exc.message}")
    if isinstance(exc, json.JSONDecodeError):
        return click.ClickException(f"Unexpected response from HipChat: {exc}")
    return click.ClickException(str(exc))


@click.group()
@click.option(
    "--token",
    envvar="HIPCHAT_AUTH_TOKEN",
    required=True,
    help="HipChat API auth token.",
)
@click.option(
    "--base-url",
    default=DEFAULT_BASE_URL,
    envvar="HIPCHAT_BASE_URL",
    help="HipChat API base URL.",
    show_default=True,
)
@click.option("--timeout", type=float, default=30.0, show_default=True, help="Request timeout in seconds.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, token: str, base_url: str, timeout: float, verbose: bool) -> None:
    """hipchat -- HipChat command-line interface."""
    setup_logging(verbose)
    ctx.obj = ctx.with_resource(HipchatClient(token, base_url=base_url, timeout=timeout))


# ── rooms ─────────────────────────────────────────────────────────────────


@cli.command()
@click.pass_obj
def rooms(client: HipchatClient) -> None:
    """List rooms."""
    try:
        data = client.room_list()
    except (HipchatError, ValueError, ConnectionError, TimeoutError) as e:
        raise _fail(e) from e
    if not data:
        click.echo("No rooms found.")
        return
    click.echo(f"{'ID':<8s} {'NAME':<25s} {'FLAGS':<10s} {'TOPIC'}")
    for room in data:
        flags = ",".join(
            flag for flag, on in (("archived", room.archived), ("private", room.private)) if on
        )
        click.echo(f"{room.room_id:<8d} {room.name:<25s} {flags:<10s} {room.topic}")


# ── history ───────────────────────────────────────────────────────────────


@cli.command()
@click.argument("room_id")
@click.option("--date", default="recent", show_default=True, help="Day as YYYY-MM-DD, or 'recent'.")
@click.option("--timezone", default="UTC", show_default=True, help="Timezone for --date.")
@click.pass_obj
def history(client: HipchatClient, room_id: str, date: str, timezone: str) -> None:
    """Show the message history of ROOM_ID."""
    try:
        messages = client.room_history(room_id, date, timezone)
    except (HipchatError, ValueError, ConnectionError, TimeoutError) as e:
        raise _fail(e) from e
    if not messages:
        click.echo("No messages.")
        return
    for msg in messages:
        click.echo(f"{msg.date}  {msg.sender.name}: {msg.message}")


# ── send ──────────────────────────────────────────────────────────────────


@cli.command()
@click.argument("room_id")
@click.argument("from_name")
@click.argument("message")
@click.option(
    "--color",
    type=click.Choice([c.value for c in Color]),
    default=None,
    help="Background color (server default: yellow).",
)
@click.option(
    "--format",
    "message_format",
    type=click.Choice([f.value for f in MessageFormat]),
    default=None,
    help="Message format (server default: html).",
)
@click.option("--notify", is_flag=True, help="Notify people in the room.")
@click.option("--auth-test", is_flag=True, help="Only check that the token may post.")
@click.pass_obj
def send(
    client: HipchatClient,
    room_id: str,
    from_name: str,
    message: str,
    color: str | None,
    message_format: str | None,
    notify: bool,
    auth_test: bool,
) -> None:
    """Post MESSAGE to ROOM_ID as FROM_NAME."""
    request = MessageRequest(
        room_id=room_id,
        from_name=from_name,
        message=message,
        message_format=message_format or "",
        color=color or "",
        notify=notify,
        auth_test=auth_test,
    )
    try:
        result = client.post_message(request)
    except (HipchatError, ValueError, ConnectionError, TimeoutError) as e:
        raise _fail(e) from e
    if result is not None:
        detail = f": {result.success.message}" if result.success else ""
        click.echo(f"✓ Auth test passed{detail}")
    else:
        click.echo("✓ Message sent")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
