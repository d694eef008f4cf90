"""CLI commands for pedalbridge."""

from .config import config_group
from .midi import midi_group
from .run import run

__all__ = ["config_group", "midi_group", "run"]
