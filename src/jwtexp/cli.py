from __future__ import annotations

import sys
from datetime import UTC, datetime
from typing import Annotated

import typer

from jwtexp import __version__
from jwtexp.diagnostics import configure_logging, get_logger
from jwtexp.errors import JwtExpError
from jwtexp.extract import extract_expiration, has_expired
from jwtexp.models import ExpirationReport, ExpiryStatus
from jwtexp.settings import ExtractorSettings, load_settings
from jwtexp.utils.output import OutputFormat, emit

app = typer.Typer(no_args_is_help=True, add_completion=False, help="Inspect JWT expiration claims")


class CLIState:
    def __init__(self, *, settings: ExtractorSettings, output: OutputFormat) -> None:
        self.settings = settings
        self.output = output


def _state(ctx: typer.Context) -> CLIState:
    obj = ctx.obj
    if not isinstance(obj, CLIState):
        raise typer.BadParameter("CLI context was not initialized")
    return obj


def _read_token(token: str) -> str:
    if token == "-":
        return sys.stdin.read().strip()
    return token


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"jwtexp {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = "json",
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version"),
    ] = None,
) -> None:
    _ = version
    try:
        settings = load_settings()
    except JwtExpError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    configure_logging(settings)
    ctx.obj = CLIState(settings=settings, output=output)


@app.command("exp")
def exp_command(
    ctx: typer.Context,
    token: Annotated[str, typer.Argument(help="Compact JWT, or '-' to read it from stdin")],
) -> None:
    """Print the expiration claim of TOKEN without verifying its signature."""

    state = _state(ctx)
    expiry = extract_expiration(_read_token(token), get_logger("jwtexp.cli"))
    emit(ExpirationReport(exp=expiry), output=state.output)


@app.command("expired")
def expired_command(
    ctx: typer.Context,
    token: Annotated[str, typer.Argument(help="Compact JWT, or '-' to read it from stdin")],
    skew: Annotated[
        int | None,
        typer.Option("--skew", min=0, help="Seconds before exp to treat the token as expired"),
    ] = None,
) -> None:
    """Exit with status 1 when TOKEN is expired or has no usable expiration."""

    state = _state(ctx)
    skew_seconds = state.settings.expiry_skew_seconds if skew is None else skew
    now = datetime.now(UTC)
    expiry = extract_expiration(_read_token(token), get_logger("jwtexp.cli"))
    expired = has_expired(expiry, skew_seconds=skew_seconds, now=now)
    remaining = None if expiry is None else (expiry - now).total_seconds()
    emit(
        ExpiryStatus(exp=expiry, expired=expired, skew_seconds=skew_seconds, seconds_remaining=remaining),
        output=state.output,
    )
    if expired:
        raise typer.Exit(code=1)
