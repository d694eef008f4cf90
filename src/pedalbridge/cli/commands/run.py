"""Run command - applies directives and runs the bridge."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from pedalbridge.exceptions import ConfigValidationError, format_error_for_display
from pedalbridge.models import BridgeConfig

logger = logging.getLogger(__name__)


def report_error(error: Exception, log_path: Optional[Path]) -> None:
    """Print a PedalBridgeError (or any exception) without a traceback."""
    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)

    if log_path:
        click.echo(f"\nFor details, check the log file: {log_path}", err=True)
    click.echo("For logging options, run: pedalbridge --help", err=True)


@click.command(context_settings={"ignore_unknown_options": True})
@click.option(
    '--config',
    'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Config file (default: ~/.pedalbridge/config.json)'
)
@click.option(
    '--stdin',
    'read_stdin',
    is_flag=True,
    help='Also read directives from standard input'
)
@click.option(
    '--save',
    is_flag=True,
    help='Save the resulting settings to the config file before starting'
)
@click.option(
    '--tick-ms',
    type=click.IntRange(min=10),
    default=None,
    help='Heartbeat/blink tick period in milliseconds (default: 200)'
)
@click.argument('directives', nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def run(
    ctx,
    config_path: Optional[Path],
    read_stdin: bool,
    save: bool,
    tick_ms: Optional[int],
    directives: tuple[str, ...] = (),
):
    """
    Apply DIRECTIVES and run the bridge until Ctrl+C.

    Settings start from the config file; directives override them for
    this run (use --save to keep them).

    \b
    Examples:
      pedalbridge run dout fcb ch 1
      pedalbridge run --stdin < setup.txt
    """
    # Lazy imports keep --help fast
    from pedalbridge.core import Bridge
    from pedalbridge.midi import MidiOutputManager

    from ..directives import CommandDispatcher

    log_path = (ctx.obj or {}).get("log_path")

    bridge = None
    try:
        config_obj = BridgeConfig.load_or_default(config_path)

        dispatcher = CommandDispatcher(config_obj, echo=click.echo)
        dispatcher.dispatch(directives)
        if read_stdin and not dispatcher.exit_requested:
            dispatcher.dispatch_lines(sys.stdin)

        if dispatcher.exit_requested:
            return

        if tick_ms is not None:
            config_obj.tick_interval = tick_ms / 1000.0

        if not config_obj.midi_output:
            raise ConfigValidationError(
                field="midi_output",
                value=None,
                error_msg="no MIDI output device given (use 'dout <name>')",
                file_path=str(config_path) if config_path else None,
            )

        if save:
            config_obj.save(config_path)
            logger.info("Settings saved")

        logger.info("Starting Pedal Bridge")
        click.echo(
            f"Bridging OSC {config_obj.osc_receive_port}/{config_obj.osc_send_port} "
            f"to MIDI '{config_obj.midi_output}' (Ctrl+C to quit)",
            err=True,
        )

        midi = MidiOutputManager.for_device(
            config_obj.midi_output, poll_interval=config_obj.midi_poll_interval
        )
        bridge = Bridge(config_obj, midi)
        bridge.run()

    except KeyboardInterrupt:
        logger.info("Bridge interrupted by user")
        click.echo("\nShutting down...", err=True)
    except click.Abort:
        raise
    except Exception as e:
        logger.exception("Error running bridge")
        report_error(e, log_path)
        sys.exit(1)
    finally:
        if bridge is not None and bridge.is_running:
            bridge.shutdown()
