"""Main CLI entry point."""

import logging
import logging.handlers
import sys
from pathlib import Path

import click

from droneshow import __version__

from .commands import config, draw, export, pattern, preview, sequences_group

logger = logging.getLogger(__name__)

_HANDLER_NAME = "droneshow-file"


def resolve_log_path(debug: bool, log_file: Path | None) -> Path:
    """Where logs go: --log-file, ./droneshow-debug.log with --debug, else ~/.droneshow/logs."""
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / "droneshow-debug.log"
    return Path.home() / ".droneshow" / "logs" / "droneshow.log"


def setup_logging(verbose: int, debug: bool, log_file: Path | None, log_level: str) -> Path:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)

    Returns:
        Path of the log file
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Override with explicit log level if provided
    if log_file:
        level = getattr(logging, log_level.upper())

    log_path = resolve_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Rotating file handler (keeps last 5 files, max 10MB each)
    file_handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=10 * 1024 * 1024, backupCount=5
    )
    file_handler.set_name(_HANDLER_NAME)
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    # Replace the handler from a previous invocation in the same process
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__, prog_name="droneshow")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="DRONESHOW_CONFIG",
    default=None,
    help="Config file (default: ~/.droneshow/config.json)",
)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v: INFO, -vv: DEBUG)")
@click.option(
    "--debug", is_flag=True, help="Enable debug mode (DEBUG level, logs to ./droneshow-debug.log)"
)
@click.option("--log-file", type=click.Path(path_type=Path), default=None, help="Custom log file path")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Log level for file logging (default: INFO)",
)
def cli(
    ctx: click.Context,
    config_path: Path | None,
    verbose: int,
    debug: bool,
    log_file: Path | None,
    log_level: str,
):
    """
    Drone light show designer.

    Compose single-drone flights on a top view and a front view, generate
    patterns, preview them, and export them for the autopilot.

    Without a command, opens the terminal preview of the active sequence.

    \b
    Examples:
      # Draw a triangle at 25 m in green
      droneshow draw 100,100 200,50 300,100 --altitude 25 --color '#00ff00'

      # Generate and keep a spiral
      droneshow pattern spiral --save

      # See what is saved
      droneshow sequences list

      # Export the active sequence
      droneshow export --format csv -o flight.csv

      # Change a setting
      droneshow config set flight.max_speed 12
    """
    log_path = setup_logging(verbose, debug, log_file, log_level)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["log_path"] = log_path

    if ctx.invoked_subcommand is not None:
        return

    from droneshow.cli.session import Session, report_error
    from droneshow.tui import PreviewApp

    logger.info("Starting droneshow preview")

    try:
        session = Session.from_context(ctx)
        PreviewApp(session.config, session.library, session.editor).run()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
        click.echo("\nShutting down...", err=True)
    except click.Abort:
        raise
    except Exception as e:
        logger.exception("Error running application")
        report_error(e, log_path)
        click.echo("For logging options, run: droneshow --help", err=True)
        sys.exit(1)


cli.add_command(sequences_group)
cli.add_command(draw)
cli.add_command(pattern)
cli.add_command(export)
cli.add_command(preview)
cli.add_command(config)

if __name__ == "__main__":
    cli()
