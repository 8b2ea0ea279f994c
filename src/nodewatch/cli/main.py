"""nodewatch CLI - command-line access to a DMX/RDM network node."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Awaitable, Callable, TypeVar

import click

from nodewatch.utils.logging import setup_logging

T = TypeVar("T")

device_url_option = click.option(
    "--device-url",
    default=None,
    help="Device base URL (default: NODEWATCH_DEVICE_URL or http://192.168.4.1)",
)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.pass_context
def cli(ctx: click.Context, debug: bool, json_output: bool) -> None:
    """nodewatch - live monitoring for a two-port DMX/RDM node."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["json_output"] = json_output
    setup_logging(level="DEBUG" if debug else "INFO", json_output=json_output)


def _settings(device_url: str | None):
    from nodewatch.config import ClientSettings
    from nodewatch.exceptions import ConfigurationError

    try:
        return ClientSettings.from_env(device_url=device_url)
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc


def _make_client(settings):
    """Create a DeviceClient for the configured device."""
    from nodewatch.client.device import DeviceClient

    return DeviceClient(settings.device_url, timeout=settings.request_timeout_s)


def _with_client(device_url: str | None, action: Callable[[Any], Awaitable[T]]) -> T:
    """Run *action(client)* on a fresh event loop and close the client after."""
    from nodewatch.exceptions import NodewatchError

    settings = _settings(device_url)

    async def _main() -> T:
        client = _make_client(settings)
        try:
            return await action(client)
        finally:
            await client.aclose()

    try:
        return asyncio.run(_main())
    except NodewatchError as exc:
        raise click.ClickException(str(exc)) from exc


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2))


# --- Monitoring ---


async def _poll(client, count: int, interval_ms: int, emit: Callable[[int, Any, Any], None]) -> None:
    """Run *count* poll ticks (0 = forever) and hand each result to *emit*."""
    from nodewatch.core.metrics import MetricsDeriver
    from nodewatch.core.notifications import NotificationCenter
    from nodewatch.core.poller import PollScheduler
    from nodewatch.core.scheduling import LoopScheduler
    from nodewatch.core.state import DashboardStore

    store = DashboardStore()
    poller = PollScheduler(client, MetricsDeriver(), NotificationCenter(LoopScheduler()), store)
    ticks = 0
    while count == 0 or ticks < count:
        if ticks:
            await asyncio.sleep(interval_ms / 1000)
        result = await poller.tick()
        ticks += 1
        emit(ticks, result, store.snapshot())


@cli.command()
@device_url_option
@click.pass_context
def status(ctx: click.Context, device_url: str | None) -> None:
    """Poll the device once and show its state."""
    from nodewatch.ui.formatting import format_bytes, format_uptime, text_or

    def emit(_n: int, result, state) -> None:
        if ctx.obj.get("json_output"):
            _echo_json(state.model_dump(mode="json"))
            return
        connected = "connected" if state.device_connected else "disconnected"
        click.echo(f"Device: {connected}")
        info = state.system_info
        if info is not None:
            click.echo(f"  Firmware: {text_or(info.firmware_version)}")
            click.echo(f"  Hardware: {text_or(info.hardware)}")
            click.echo(f"  Free Heap: {format_bytes(info.free_heap)}")
            click.echo(f"  Uptime: {format_uptime(info.uptime_sec)}")
        net = state.network_status
        if net is not None:
            mode = text_or(net.mode) if net.available else "N/A"
            click.echo(f"Network: {mode} {text_or(net.ip)}")
        stats = state.protocol_stats
        if stats is not None:
            if stats.artnet is not None:
                click.echo(f"Art-Net: {stats.artnet.packets} packets, {stats.artnet.dmx_packets} DMX")
            if stats.sacn is not None:
                click.echo(f"sACN: {stats.sacn.packets} packets, {stats.sacn.data_packets} data")
        for number, view in enumerate(state.ports, start=1):
            snap = view.snapshot
            if snap is None:
                click.echo(f"Port {number}: --")
                continue
            click.echo(
                f"Port {number}: {snap.mode_name}, universe {text_or(snap.universe)}, "
                f"{snap.frames_sent} sent, {snap.frames_received} received"
            )
        if result.failed_resources:
            click.echo(f"Failed: {', '.join(result.failed_resources)}", err=True)

    _with_client(device_url, lambda client: _poll(client, 1, 0, emit))


@cli.command()
@device_url_option
@click.option("--interval", type=int, default=2000, help="Polling interval in ms")
@click.option("--count", type=int, default=0, help="Number of ticks (0=infinite)")
@click.pass_context
def watch(ctx: click.Context, device_url: str | None, interval: int, count: int) -> None:
    """Poll repeatedly and print per-port frame rates."""
    from nodewatch.ui.formatting import format_rate

    if interval <= 0:
        raise click.BadParameter("must be positive", param_hint="--interval")

    def emit(n: int, _result, state) -> None:
        if ctx.obj.get("json_output"):
            click.echo(json.dumps({
                "tick": n,
                "device_connected": state.device_connected,
                "ports": [v.rate.rate_per_second if v.rate else None for v in state.ports],
                "protocols": {k: r.rate_per_second for k, r in state.protocol_rates.items()},
            }))
            return
        ports = "  ".join(
            f"Port {i}: {format_rate(v.rate):>9}" for i, v in enumerate(state.ports, start=1)
        )
        flag = "" if state.device_connected else "  [disconnected]"
        click.echo(f"[{n:>4}] {ports}{flag}")

    try:
        _with_client(device_url, lambda client: _poll(client, count, interval, emit))
    except KeyboardInterrupt:
        pass


# --- Device actions ---


@cli.command()
@click.argument("port", type=int)
@device_url_option
@click.pass_context
def blackout(ctx: click.Context, port: int, device_url: str | None) -> None:
    """Set every channel on PORT (1 or 2) to zero."""
    result = _with_client(device_url, lambda client: client.blackout_port(port))
    if ctx.obj.get("json_output"):
        _echo_json(result.model_dump())
    else:
        click.echo(f"Port {port} blackout activated")


@cli.command()
@device_url_option
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def restart(ctx: click.Context, device_url: str | None, yes: bool) -> None:
    """Reboot the device."""
    if not yes:
        click.confirm("Are you sure you want to reboot the device?", abort=True)
    result = _with_client(device_url, lambda client: client.restart())
    if ctx.obj.get("json_output"):
        _echo_json(result.model_dump())
    else:
        click.echo("Device is rebooting...")


@cli.command("factory-reset")
@device_url_option
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def factory_reset(ctx: click.Context, device_url: str | None, yes: bool) -> None:
    """Erase all settings on the device."""
    if not yes:
        click.confirm("Are you sure you want to factory reset? All settings will be lost!", abort=True)
    result = _with_client(device_url, lambda client: client.factory_reset())
    if ctx.obj.get("json_output"):
        _echo_json(result.model_dump())
    else:
        click.echo("Factory reset initiated")


@cli.command("rdm-discover")
@device_url_option
@click.pass_context
def rdm_discover(ctx: click.Context, device_url: str | None) -> None:
    """Run RDM discovery and list responders."""
    devices = _with_client(device_url, lambda client: client.discover_rdm())
    if ctx.obj.get("json_output"):
        _echo_json([d.model_dump() for d in devices])
        return
    if not devices:
        click.echo("No RDM devices found.")
        return
    click.echo(f"Found {len(devices)} device(s):")
    click.echo(f"{'Port':>4}  {'UID':<14}  {'Address':>7}  {'Label'}")
    click.echo("-" * 48)
    for d in devices:
        address = d.dmx_address if d.dmx_address is not None else "--"
        click.echo(f"{d.port or '--':>4}  {d.uid:<14}  {address:>7}  {d.label}")


# --- Server ---


@cli.command()
@click.option("--host", default="0.0.0.0", help="Bind address (0.0.0.0 for network access)")
@click.option("--port", type=int, default=8000, help="HTTP port")
@click.option("--no-ui", is_flag=True, help="Serve the API only, without the dashboard")
@device_url_option
def serve(host: str, port: int, no_ui: bool, device_url: str | None) -> None:
    """Start the web server (API + dashboard)."""
    import uvicorn
    from nodewatch.api.app import create_app

    app = create_app(_settings(device_url), enable_ui=not no_ui)
    uvicorn.run(app, host=host, port=port)


# Register subcommand groups
from nodewatch.cli.config import config  # noqa: E402

cli.add_command(config)
