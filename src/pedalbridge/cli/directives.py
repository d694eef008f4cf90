"""Startup directives: the small command language read from arguments and scripts.

Directives are whitespace-separated tokens, e.g.::

    dout FCB1010 ch 1 oin 9001 oout 9000

A token naming a command starts it; the following tokens are its arguments.
A token that isn't a command while nothing is pending is taken as the path
of a script file, which is read and dispatched the same way (lines starting
with ``#`` are comments).

Numbers are decimal unless the ``hex`` directive was given. A trailing
``H`` forces hexadecimal and a trailing ``M`` forces decimal, e.g. ``7FH``
or ``127M``.
"""

import logging
import re
import shlex
import string
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

from pydantic import ValidationError

from pedalbridge.exceptions import wrap_pydantic_error
from pedalbridge.midi import list_ports
from pedalbridge.models import BridgeConfig

logger = logging.getLogger(__name__)

# Commands taking arguments until the next command or end of input
VARIABLE_ARGUMENTS = -1

# Guard against scripts that include each other
MAX_SCRIPT_DEPTH = 16


class CommandKind(Enum):
    """Directive kinds."""

    LIST = "list"
    DEVICE_OUT = "device_out"
    CHANNEL = "channel"
    OSC_IN = "osc_in"
    OSC_OUT = "osc_out"
    HEX = "hex"
    DEC = "dec"


@dataclass(frozen=True)
class Command:
    """Catalog entry for one directive."""

    name: str
    alternate_name: str
    kind: CommandKind
    expected_arguments: int
    options_description: str
    help_text: str

    def matches(self, token: str) -> bool:
        """Check if a token names this command (case-insensitive)."""
        token = token.lower()
        return token == self.name or (bool(self.alternate_name) and token == self.alternate_name)


COMMANDS: tuple[Command, ...] = (
    Command("dout", "device out", CommandKind.DEVICE_OUT, 1, "name", "Set the name of the MIDI output port"),
    Command("list", "", CommandKind.LIST, 0, "", "Lists the MIDI ports"),
    Command("ch", "channel", CommandKind.CHANNEL, 1, "number", "Set MIDI channel for the commands (0-16), defaults to 1"),
    Command("oin", "osc in", CommandKind.OSC_IN, 1, "number", "OSC receive port"),
    Command("oout", "osc out", CommandKind.OSC_OUT, 1, "number", "OSC send port"),
    Command("hex", "hexadecimal", CommandKind.HEX, 0, "", "Interpret the following numbers as hexadecimal"),
    Command("dec", "decimal", CommandKind.DEC, 0, "", "Interpret the following numbers as decimal (default)"),
)


@dataclass
class PendingCommand:
    """A command whose arguments are being collected."""

    command: Command
    remaining: int
    arguments: list[str] = field(default_factory=list)

    @classmethod
    def start(cls, command: Command) -> "PendingCommand":
        return cls(command=command, remaining=command.expected_arguments)

    @property
    def is_variadic(self) -> bool:
        return self.remaining < 0

    @property
    def is_complete(self) -> bool:
        return self.remaining == 0


def find_command(token: str, commands: Sequence[Command] = COMMANDS) -> Optional[Command]:
    """Look up a directive by name or alternate name."""
    for command in commands:
        if command.matches(token):
            return command
    return None


def parse_line(line: str) -> list[str]:
    """
    Split a script line into tokens.

    Lines starting with '#' are comments. Double-quoted tokens may contain
    spaces; the quotes are removed.
    """
    if line.lstrip().startswith("#"):
        return []
    try:
        tokens = shlex.split(line)
    except ValueError:
        # Unbalanced quotes: fall back to plain whitespace splitting
        tokens = [token.strip('"') for token in line.split()]
    return [token for token in tokens if token]


def _decimal_value(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def _hex_value(text: str) -> int:
    digits = "".join(c for c in text if c in string.hexdigits)
    return int(digits[-8:], 16) if digits else 0


def parse_number(value: str, hex_by_default: bool = False) -> int:
    """
    Parse a directive number.

    Args:
        value: Token such as "42", "2AH" or "42M"
        hex_by_default: Interpret unsuffixed numbers as hexadecimal

    Returns:
        Parsed value; unparseable text gives 0
    """
    if value.lower().endswith("h"):
        return _hex_value(value[:-1])
    if value.lower().endswith("m"):
        return _decimal_value(value[:-1])
    if hex_by_default:
        return _hex_value(value)
    return _decimal_value(value)


def limit(value: int, maximum: int) -> int:
    """Clamp a value to 0..maximum."""
    return max(0, min(maximum, value))


def format_directive_help() -> str:
    """Render the directive catalog for --help (\\b keeps click from rewrapping it)."""
    lines = ["\b", "Directives:"]
    for command in COMMANDS:
        lines.append(f"  {command.name:<5} {command.options_description:<8} {command.help_text}")

    alternates = " ".join(f'"{c.alternate_name}"' for c in COMMANDS if c.alternate_name)
    lines += [
        "",
        f"Long forms: {alternates}",
        "",
        "Numbers are decimal by default, or hexadecimal after 'hex'. Suffix a",
        "number with M or H to force decimal or hexadecimal.",
        "",
        "The MIDI device name doesn't have to be an exact match: the first output",
        "port containing the text, irrespective of case, is used.",
    ]
    return "\n".join(lines)


class CommandDispatcher:
    """
    Applies directives to a BridgeConfig.

    Fixed-arity commands run as soon as their last argument arrives.
    Variable-arity commands run when the next command starts or the
    current run of tokens ends.
    """

    def __init__(
        self,
        config: BridgeConfig,
        echo: Callable[[str], None] = print,
        base_dir: Optional[Path] = None,
        commands: Sequence[Command] = COMMANDS,
    ):
        """
        Initialize dispatcher.

        Args:
            config: Configuration the directives update
            echo: Output function for 'list'
            base_dir: Directory script paths are relative to (cwd if None)
            commands: Directive catalog
        """
        self.config = config
        self.echo = echo
        self.base_dir = base_dir
        self.commands = tuple(commands)
        self.exit_requested = False
        self._pending: Optional[PendingCommand] = None
        self._script_depth = 0

    @property
    def pending(self) -> Optional[PendingCommand]:
        """Command currently collecting arguments, if any."""
        return self._pending

    def dispatch(self, tokens: Iterable[str]) -> None:
        """
        Dispatch a run of tokens.

        Raises:
            ConfigValidationError: If a directive sets an invalid value
        """
        for token in tokens:
            if token == "--":
                continue

            command = find_command(token, self.commands)
            if command:
                self._flush_variadic()
                self._pending = PendingCommand.start(command)
            elif self._pending is None:
                self._load_script_or_warn(token)
            elif self._pending.is_variadic:
                self._pending.arguments.append(token)
            else:
                self._pending.arguments.append(token)
                self._pending.remaining -= 1

            if self._pending is not None and self._pending.is_complete:
                pending, self._pending = self._pending, None
                self.execute(pending)

        self._flush_variadic()

    def dispatch_lines(self, lines: Iterable[str]) -> None:
        """Dispatch script lines one at a time (e.g. from stdin)."""
        for line in lines:
            self.dispatch(parse_line(line))

    def load_script(self, path: Path) -> None:
        """Read a script file and dispatch its tokens."""
        if self._script_depth >= MAX_SCRIPT_DEPTH:
            logger.error(f"Not loading {path}: scripts nested too deeply")
            return

        logger.info(f"Loading directives from {path}")
        tokens: list[str] = []
        for line in path.read_text().splitlines():
            tokens.extend(parse_line(line))

        self._script_depth += 1
        try:
            self.dispatch(tokens)
        finally:
            self._script_depth -= 1

    def execute(self, pending: PendingCommand) -> None:
        """
        Apply a fully formed command.

        Raises:
            ConfigValidationError: If the resulting value is invalid
        """
        kind = pending.command.kind
        args = pending.arguments
        logger.debug(f"Directive {pending.command.name} {args}")

        try:
            if kind == CommandKind.LIST:
                self._list_devices()
                self.exit_requested = True
            elif kind == CommandKind.DEVICE_OUT:
                self.config.midi_output = args[0]
            elif kind == CommandKind.CHANNEL:
                self.config.midi_channel = limit(self._number(args[0]), 0x7F)
            elif kind == CommandKind.OSC_IN:
                self.config.osc_receive_port = limit(self._number(args[0]), 0xFFFF)
            elif kind == CommandKind.OSC_OUT:
                self.config.osc_send_port = limit(self._number(args[0]), 0xFFFF)
            elif kind == CommandKind.HEX:
                self.config.hex_numbers = True
            elif kind == CommandKind.DEC:
                self.config.hex_numbers = False
        except ValidationError as e:
            raise wrap_pydantic_error(e) from e

    def _number(self, value: str) -> int:
        return parse_number(value, self.config.hex_numbers)

    def _flush_variadic(self) -> None:
        if self._pending is not None and self._pending.is_variadic:
            pending, self._pending = self._pending, None
            self.execute(pending)

    def _load_script_or_warn(self, token: str) -> None:
        base = self.base_dir or Path.cwd()
        path = base / token
        if path.is_file():
            self.load_script(path)
        else:
            logger.warning(f"Ignoring '{token}': not a directive or script file")

    def _list_devices(self) -> None:
        ports = list_ports()
        self.echo("MIDI Input devices:")
        for port in ports["input"]:
            self.echo(port)
        self.echo("MIDI Output devices:")
        for port in ports["output"]:
            self.echo(port)
