#!/usr/bin/env python3
"""Main entry point for LanChat."""

import logging
import sys
from pathlib import Path

import typer

from . import APP_NAME, APP_VERSION
from .core.settings import SettingsStore

logger = logging.getLogger(__name__)

app = typer.Typer(help=f"{APP_NAME} - chat on the local network", add_completion=False)

CLIENT_NAME = "Console"


def setup_logging(debug: bool = False) -> None:
    """Set up logging configuration."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{APP_NAME} v{APP_VERSION}")
        raise typer.Exit()


def apply_startup_arguments(
    settings: SettingsStore,
    no_private_chat: bool = False,
    always_log: bool = False,
    log_location: str | None = None,
) -> None:
    """Apply the startup overrides. These are never saved to the settings file."""
    settings.no_private_chat = no_private_chat
    settings.always_log = always_log
    settings.log_location = log_location


def describe_settings(settings: SettingsStore) -> list[str]:
    """Human readable summary of the effective settings."""
    me = settings.me
    return [
        f"Nick name: {me.nick}",
        f"User code: {me.code}",
        f"Client: {me.client}",
        f"Operating system: {me.operating_system}",
        f"Own color: {settings.own_color}",
        f"System color: {settings.sys_color}",
        f"Sound: {settings.sound}",
        f"Logging: {settings.logging_enabled}",
        f"Log location: {settings.log_location}",
        f"Smileys: {settings.smileys}",
        f"Balloons: {settings.balloons}",
        f"Browser: {settings.browser or '(system default)'}",
        f"Look and feel: {settings.look_and_feel or '(default)'}",
        f"Network interface: {settings.network_interface or '(automatic)'}",
        f"Private chat: {not settings.no_private_chat}",
    ]


@app.command()
def run(
    no_private_chat: bool = typer.Option(
        False, "--no-private-chat", "-n", help="Disable private chat"
    ),
    always_log: bool = typer.Option(
        False, "--always-log", "-l", help="Always log the main chat, ignoring the setting"
    ),
    log_location: str | None = typer.Option(
        None, "--log-location", "-f", help="Folder to store logs in"
    ),
    settings_file: Path | None = typer.Option(
        None, "--settings-file", dir_okay=False, help="Use another settings file"
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Load the settings, apply the startup arguments and show the result."""
    setup_logging(debug)

    settings = SettingsStore(settings_file)
    settings.set_client(CLIENT_NAME)
    apply_startup_arguments(settings, no_private_chat, always_log, log_location)

    logger.debug(f"Using settings from {settings.path}")
    for line in describe_settings(settings):
        typer.echo(line)


def main() -> int:
    """Main entry point."""
    app()
    return 0


if __name__ == "__main__":
    sys.exit(main())
