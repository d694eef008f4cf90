"""Main CLI entry point."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

import click

from .commands import config_group, midi_group, run
from .directives import format_directive_help

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "run"

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def resolve_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Where setup_logging() writes the log file."""
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / "pedalbridge-debug.log"
    return Path.home() / ".pedalbridge" / "logs" / "pedalbridge.log"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> None:
    """
    Send log records to a rotating file and to stderr.

    The level comes from -v/-vv or --debug; with --log-file the file level
    is --log-level instead. The terminal shows warnings and up unless -v
    was given.
    """
    if log_file:
        level = logging.getLevelName(log_level.upper())
    elif debug or verbose > 1:
        level = logging.DEBUG
    else:
        level = logging.INFO if verbose else logging.WARNING

    log_path = resolve_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)-7s [%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    ))

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level if verbose else max(level, logging.WARNING))
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    root = logging.getLogger()
    root.setLevel(level)
    for handler in (file_handler, console_handler):
        root.addHandler(handler)

    logger.info(f"Logging to {log_path} at {logging.getLevelName(level)}")


class DirectiveGroup(click.Group):
    """
    Group that treats a leading non-command word as the start of directives.

    `pedalbridge dout fcb ch 2` runs as `pedalbridge run dout fcb ch 2`,
    while `pedalbridge midi list` still reaches the midi group.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        index = self._first_run_argument(ctx, args)
        if index is not None and args[index] not in self.commands:
            args = args[:index] + [DEFAULT_COMMAND] + args[index:]
        return super().parse_args(ctx, args)

    def _first_run_argument(self, ctx: click.Context, args: list[str]) -> Optional[int]:
        takes_value = {}
        for param in self.get_params(ctx):
            if isinstance(param, click.Option):
                for name in param.opts + param.secondary_opts:
                    takes_value[name] = not (param.is_flag or param.count)

        skip_next = False
        for i, arg in enumerate(args):
            if skip_next:
                skip_next = False
                continue
            if arg == "--":
                return i + 1 if i + 1 < len(args) else None
            if arg.startswith("-") and len(arg) > 1:
                name = arg.split("=", 1)[0]
                if name not in takes_value:
                    # Not ours, so it belongs to run (e.g. --config)
                    return i
                skip_next = takes_value[name] and "=" not in arg
                continue
            return i
        return None


@click.group(cls=DirectiveGroup, invoke_without_command=True, epilog=format_directive_help())
@click.pass_context
@click.version_option(version="0.1.0", prog_name="pedalbridge")
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./pedalbridge-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
def cli(ctx, verbose: int, debug: bool, log_file: Optional[Path], log_level: str):
    """
    Pedal Bridge - drive FCB1010 pedal LEDs from a looping engine over OSC.

    The bridge binds its OSC ports, pings the engine, subscribes to LED and
    display updates for every loop, and mirrors them onto the pedal board.
    It keeps running (and reconnecting) until interrupted with Ctrl+C.

    Anything that isn't a subcommand is read as DIRECTIVES for `run`; a
    directive that isn't recognised is read as the name of a file
    containing more directives.

    \b
    Examples:
      # Bridge to the first MIDI output with "fcb" in its name
      pedalbridge dout fcb

      # Custom OSC ports and MIDI channel 2
      pedalbridge dout "UM-ONE" ch 2 oin 9001 oout 9000

      # Read directives from a file
      pedalbridge setup.txt

      # Enable debug logging
      pedalbridge --debug dout fcb

      # List MIDI ports
      pedalbridge list
      pedalbridge midi list
    """
    ctx.ensure_object(dict)
    ctx.obj["log_path"] = resolve_log_path(debug, log_file)

    # Subcommands other than run only print, so they skip the log file
    if ctx.invoked_subcommand in (None, DEFAULT_COMMAND):
        setup_logging(verbose, debug, log_file, log_level)

    # Bare `pedalbridge` runs with the saved configuration
    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


cli.add_command(run)
cli.add_command(config_group)
cli.add_command(midi_group)

if __name__ == "__main__":
    cli()
