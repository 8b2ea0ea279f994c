"""CLI subcommands for reading and writing the device configuration."""

from __future__ import annotations

import json

import click

from nodewatch.models.port import MERGE_MODE_NAMES, PORT_COUNT, PORT_MODE_NAMES, MergeMode, PortMode

_MODE_CHOICES = {mode.name.lower().replace("_", "-"): mode for mode in PortMode}
_MERGE_CHOICES = {mode.name.lower(): mode for mode in MergeMode}


@click.group()
def config() -> None:
    """Read and change the device configuration."""


@config.command()
@click.option("--device-url", default=None, help="Device base URL")
@click.pass_context
def show(ctx: click.Context, device_url: str | None) -> None:
    """Show the stored configuration."""
    from nodewatch.cli.main import _with_client

    cfg = _with_client(device_url, lambda client: client.get_config())
    if ctx.obj.get("json_output"):
        click.echo(json.dumps(cfg.model_dump(mode="json", exclude={"network": {"wifi_password"}}), indent=2))
        return
    for number in range(1, PORT_COUNT + 1):
        p = cfg.port(number)
        priority = p.priority if p.priority is not None else "--"
        click.echo(f"Port {number}:")
        click.echo(f"  Mode: {PORT_MODE_NAMES[p.mode]}")
        click.echo(f"  Universe: {p.universe_primary}")
        click.echo(f"  Merge: {MERGE_MODE_NAMES[p.merge_mode]}")
        click.echo(f"  Priority: {priority}")
    net = cfg.network
    click.echo("Network:")
    click.echo(f"  Mode: {net.mode}")
    click.echo(f"  SSID: {net.wifi_ssid or '--'}")
    if net.use_dhcp:
        click.echo("  Addressing: DHCP")
    else:
        click.echo(f"  Addressing: {net.static_ip} / {net.netmask} via {net.gateway}")


@config.command("port")
@click.argument("port", type=click.IntRange(1, PORT_COUNT))
@click.option("--mode", type=click.Choice(sorted(_MODE_CHOICES)), default=None)
@click.option("--universe", type=click.IntRange(0, 32767), default=None)
@click.option("--priority", type=click.IntRange(0, 200), default=None)
@click.option("--merge-mode", type=click.Choice(sorted(_MERGE_CHOICES)), default=None)
@click.option("--device-url", default=None, help="Device base URL")
@click.pass_context
def port_cmd(
    ctx: click.Context,
    port: int,
    mode: str | None,
    universe: int | None,
    priority: int | None,
    merge_mode: str | None,
    device_url: str | None,
) -> None:
    """Change the settings of one PORT."""
    from nodewatch.cli.main import _with_client
    from nodewatch.models.device_config import port_update

    update = port_update(
        port,
        mode=_MODE_CHOICES[mode] if mode else None,
        universe=universe,
        priority=priority,
        merge_mode=_MERGE_CHOICES[merge_mode] if merge_mode else None,
    )
    if not update[f"port{port}"]:
        raise click.UsageError("Nothing to change; pass at least one option.")
    result = _with_client(device_url, lambda client: client.update_config(update))
    if ctx.obj.get("json_output"):
        click.echo(json.dumps(result.model_dump(), indent=2))
    else:
        click.echo(f"Port {port} configuration saved")


@config.command("network")
@click.option("--mode", type=click.Choice(["sta", "ap", "eth"]), default="sta")
@click.option("--ssid", default="", help="WiFi network name")
@click.option("--password", default=None, help="WiFi password (kept when omitted)")
@click.option("--dhcp/--static", default=True, help="Use DHCP or a static address")
@click.option("--ip", "static_ip", default="", help="Static IP address")
@click.option("--gateway", default="")
@click.option("--netmask", default="")
@click.option("--device-url", default=None, help="Device base URL")
@click.pass_context
def network_cmd(
    ctx: click.Context,
    mode: str,
    ssid: str,
    password: str | None,
    dhcp: bool,
    static_ip: str,
    gateway: str,
    netmask: str,
    device_url: str | None,
) -> None:
    """Replace the network settings."""
    from nodewatch.cli.main import _with_client
    from nodewatch.models.device_config import NetworkConfig, network_update

    if not dhcp and not static_ip:
        raise click.UsageError("--static requires --ip.")
    update = network_update(NetworkConfig(
        mode=mode,
        wifi_ssid=ssid,
        wifi_password=password,
        use_dhcp=dhcp,
        static_ip=static_ip,
        gateway=gateway,
        netmask=netmask,
    ))
    result = _with_client(device_url, lambda client: client.update_config(update))
    if ctx.obj.get("json_output"):
        click.echo(json.dumps(result.model_dump(), indent=2))
    else:
        click.echo("Network configuration saved")
