"""
Command-Line Interface for the Art-Net bridge.

Provides commands for running the relay, probing the DMX USB Pro and
sending test packets.
"""

from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path
from typing import Optional

import click
import structlog

from artnet_bridge import __version__
from artnet_bridge.core.config import Settings
from artnet_bridge.core.exceptions import BridgeError
from artnet_bridge.core.status import BridgeStatus, TargetUniverse
from artnet_bridge.relay.shutdown import ShutdownWatcher

logger = structlog.get_logger()

QUIT_COMMANDS = {"q", "quit", "exit"}


def _load_settings(config_path: Optional[Path]) -> Settings:
    if config_path:
        return Settings.from_yaml(config_path)
    return Settings()


def _read_target_updates(
    stream, target: TargetUniverse, status: BridgeStatus, watcher: ShutdownWatcher
) -> None:
    """Front-end stand-in: each stdin line sets the target universe."""
    for line in stream:
        text = line.strip()
        if text.lower() in QUIT_COMMANDS:
            watcher.request_shutdown("ui_close")
            return
        if text.lower() == "status":
            for value in status.snapshot().values():
                click.echo(value)
            continue
        universe = target.set_text(text)
        click.echo(f"Universe: {universe}")


@click.group()
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Path to configuration file",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, config: Optional[str]) -> None:
    """
    Art-Net to Enttec DMX USB Pro bridge.

    Listens for ArtDMX packets on the network and forwards one universe
    to a DMX USB Pro serial interface.
    """
    ctx.ensure_object(dict)

    config_path = Path(config) if config else None
    try:
        settings = _load_settings(config_path)
    except BridgeError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    if debug:
        settings.debug = True
        settings.log_level = "DEBUG"

    # Configure logging
    log_level = settings.log_level.upper()
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level, logging.INFO)
        ),
    )

    ctx.obj["debug"] = settings.debug
    ctx.obj["settings"] = settings


@cli.command()
@click.option("--universe", "-u", default=None, help="Target universe (0-32767)")
@click.option("--port", "-p", "serial_port", default=None, help="Serial device path")
@click.option("--listen-port", type=int, default=None, help="Art-Net UDP port")
@click.option("--mock", is_flag=True, help="Record frames instead of using a device")
@click.option("--interactive", "-i", is_flag=True, help="Read target universe changes from stdin")
@click.pass_context
def run(
    ctx: click.Context,
    universe: Optional[str],
    serial_port: Optional[str],
    listen_port: Optional[int],
    mock: bool,
    interactive: bool,
) -> None:
    """Relay Art-Net DMX to the DMX USB Pro until interrupted."""
    from artnet_bridge.relay.listener import ArtNetListener
    from artnet_bridge.relay.loop import RelayLoop, start_relay_thread
    from artnet_bridge.relay.mocks import MockSerialTransmitter
    from artnet_bridge.relay.transmitter import SerialTransmitter

    settings: Settings = ctx.obj["settings"]
    if serial_port:
        settings.serial.port = serial_port
    if listen_port is not None:
        settings.listener.port = listen_port

    target = TargetUniverse(universe if universe is not None else settings.target_universe)
    status = BridgeStatus()

    if mock:
        transmitter = MockSerialTransmitter()
    else:
        transmitter = SerialTransmitter(settings.serial)
    status.record_probe(settings.serial.port, transmitter.probe())

    click.echo(f"Art-Net to DMX USB Pro v{__version__}")
    click.echo("=" * 50)
    click.echo(f"Universe: {target.get()}")
    click.echo(status.device_status)
    click.echo(f"Listening on UDP {settings.listener.host}:{settings.listener.port}")
    click.echo("Press Ctrl+C to stop.")
    click.echo()

    watcher = ShutdownWatcher()
    loop = RelayLoop(
        listener=ArtNetListener(settings.listener),
        transmitter=transmitter,
        target=target,
        cancel=watcher.cancel,
        poll_interval_s=settings.listener.poll_interval_s,
        status=status,
    )

    with watcher:
        thread = start_relay_thread(loop)
        if interactive:
            threading.Thread(
                target=_read_target_updates,
                args=(sys.stdin, target, status, watcher),
                name="Target-Input",
                daemon=True,
            ).start()

        while not watcher.wait(0.5):
            pass

        thread.join(timeout=settings.listener.poll_interval_s + 1.0)

    logger.info("Cleanup completed", **loop.get_stats())
    sys.exit(0)


@cli.command()
@click.option("--port", "-p", "serial_port", default=None, help="Serial device path")
@click.pass_context
def probe(ctx: click.Context, serial_port: Optional[str]) -> None:
    """Check once whether the DMX USB Pro can be opened."""
    from artnet_bridge.relay.transmitter import probe_device

    settings: Settings = ctx.obj["settings"]
    port = serial_port or settings.serial.port

    status = BridgeStatus()
    connected = probe_device(port, settings.serial.baudrate)
    status.record_probe(port, connected)
    click.echo(status.device_status)
    if not connected:
        sys.exit(1)


@cli.command()
@click.pass_context
def list_ports(ctx: click.Context) -> None:
    """List available serial ports."""
    from serial.tools import list_ports as serial_list_ports

    ports = serial_list_ports.comports()

    click.echo("Available serial ports:")
    click.echo("-" * 60)

    for port in ports:
        click.echo(f"  {port.device}")
        if port.description and port.description != "n/a":
            click.echo(f"      {port.description}")

    if not ports:
        click.echo("  (no serial ports found)")


@cli.command()
@click.option("--universe", "-u", type=int, default=0, help="Universe (0-32767)")
@click.option("--channel", "-c", type=int, required=True, help="DMX channel (1-512)")
@click.option("--value", "-v", type=int, required=True, help="Value (0-255)")
@click.option("--host", default="127.0.0.1", help="Destination address")
@click.option("--port", "dest_port", type=int, default=None, help="Destination UDP port")
@click.pass_context
def send_test(
    ctx: click.Context,
    universe: int,
    channel: int,
    value: int,
    host: str,
    dest_port: Optional[int],
) -> None:
    """Send one ArtDMX packet setting a single channel."""
    from artnet_bridge.dmx.artnet import send_artdmx
    from artnet_bridge.dmx.universe import DMX_CHANNEL_COUNT, UNIVERSE_MAX

    if not 0 <= universe <= UNIVERSE_MAX:
        click.echo("Error: Universe must be 0-32767", err=True)
        sys.exit(1)

    if not 1 <= channel <= DMX_CHANNEL_COUNT:
        click.echo("Error: Channel must be 1-512", err=True)
        sys.exit(1)

    if not 0 <= value <= 255:
        click.echo("Error: Value must be 0-255", err=True)
        sys.exit(1)

    settings: Settings = ctx.obj["settings"]
    port = dest_port if dest_port is not None else settings.listener.port

    data = bytearray(DMX_CHANNEL_COUNT)
    data[channel - 1] = value

    send_artdmx(host, universe, bytes(data), port=port)

    click.echo(f"Sent universe {universe} channel {channel}={value} to {host}:{port}")


def main() -> None:
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
