"""Main entry point for droneshow."""

from droneshow.cli.main import cli

if __name__ == "__main__":
    cli()
