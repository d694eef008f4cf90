"""MIDI command implementations."""

import click

from pedalbridge.midi import list_ports, name_filter


@click.group(name="midi")
def midi_group():
    """MIDI device commands."""
    pass


@midi_group.command(name="list")
def list_midi():
    """List available MIDI ports."""
    ports = list_ports()

    click.echo("MIDI Input Ports:\n")
    if not ports["input"]:
        click.echo("  No MIDI input ports found.")
    else:
        for i, port in enumerate(ports["input"]):
            click.echo(f"  [{i}] {port}")

    click.echo("\nMIDI Output Ports:\n")
    if not ports["output"]:
        click.echo("  No MIDI output ports found.")
    else:
        for i, port in enumerate(ports["output"]):
            click.echo(f"  [{i}] {port}")


@midi_group.command(name="find")
@click.argument("name")
def find_midi(name: str):
    """
    Show which output ports a device NAME would match.

    Matching is the same as for the 'dout' directive: case-insensitive,
    anywhere in the port name.
    """
    matches = [port for port in list_ports()["output"] if name_filter(name)(port)]

    if not matches:
        click.echo(f"No MIDI output port matches '{name}'.")
        raise SystemExit(1)

    for port in matches:
        click.echo(port)
