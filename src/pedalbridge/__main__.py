"""Main entry point for pedalbridge."""

from pedalbridge.cli import cli

if __name__ == "__main__":
    cli()
