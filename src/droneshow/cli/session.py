"""Shared wiring for CLI commands: config, services and error reporting."""

import functools
import logging
import sys
from collections.abc import Callable
from pathlib import Path

import click

from droneshow.exceptions import DroneShowError, format_error_for_display
from droneshow.model_manager import FileBlobStore
from droneshow.models import AppConfig
from droneshow.models.config import DEFAULT_CONFIG_PATH
from droneshow.services import EditorService, ExportService, SequenceLibraryService

logger = logging.getLogger(__name__)


class Session:
    """Services for one CLI invocation, built from the config file."""

    def __init__(self, config: AppConfig, config_path: Path):
        self.config = config
        self.config_path = config_path
        self.store = FileBlobStore(config.data_dir)
        self.library = SequenceLibraryService(self.store, config.storage_key)
        self.library.load()
        self.editor = EditorService(config, self.library)
        self.editor.load_active()
        self.exporter = ExportService(self.editor.mapper)

    @classmethod
    def from_context(cls, ctx: click.Context) -> "Session":
        """Build (once per invocation) from the root command's options."""
        root = ctx.find_root()
        root.ensure_object(dict)
        session = root.obj.get("session")
        if session is None:
            config_path = root.obj.get("config_path") or DEFAULT_CONFIG_PATH
            session = cls(AppConfig.load_or_default(config_path), config_path)
            root.obj["session"] = session
        return session


def report_error(error: Exception, log_path: Path | None = None) -> None:
    """Print a formatted error the same way for every command."""
    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)

    if log_path:
        click.echo(f"\nFor details, check the log file: {log_path}", err=True)


def command_errors(func: Callable) -> Callable:
    """
    Report DroneShowError and ValueError as clean messages with exit code 1.

    Wraps a click command callback; must be applied below the click decorators.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (DroneShowError, ValueError) as e:
            logger.error(f"{func.__name__} failed: {getattr(e, 'technical_message', e)}")
            ctx = click.get_current_context(silent=True)
            log_path = ctx.find_root().obj.get("log_path") if ctx and ctx.find_root().obj else None
            report_error(e, log_path)
            sys.exit(1)

    return wrapper


def session_command(func: Callable) -> Callable:
    """Inject a Session as the first argument and report errors."""

    @functools.wraps(func)
    @command_errors
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()
        return func(Session.from_context(ctx), *args, **kwargs)

    return wrapper
