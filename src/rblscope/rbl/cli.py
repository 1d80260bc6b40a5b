"""
RBL/Blacklist CLI commands.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import json

import click
import dns.exception
from rich.console import Console
from rich.table import Table

from rblscope.config import get_config
from rblscope.dns.core import AsyncDNSResolver
from rblscope.errors import DomainResolutionError, ValidationError
from rblscope.rbl.engine import AggregationEngine
from rblscope.rbl.providers import DEFAULT_CATALOG, ProviderType


def _build_engine(
    timeout: int | None, concurrency: int | None, servers: tuple[str, ...]
) -> AggregationEngine:
    config = get_config()
    nameservers = list(servers) or list(config.nameservers) or None
    return AggregationEngine(
        resolver=AsyncDNSResolver(nameservers=nameservers),
        timeout_ms=timeout or config.query_timeout_ms,
        concurrency=concurrency or config.concurrency,
    )


@click.group()
def rbl():
    """RBL/Blacklist lookup utilities."""
    pass


@rbl.command()
@click.argument("target")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON response")
@click.option("--timeout", type=click.IntRange(min=1), help="Timeout per lookup in milliseconds")
@click.option("--concurrency", type=click.IntRange(min=1), help="Maximum lookups in flight")
@click.option("-s", "--server", "servers", multiple=True, help="DNS server to query (repeatable)")
def check(target: str, as_json: bool, timeout: int | None, concurrency: int | None, servers: tuple[str, ...]):
    """Check an IP address or domain against RBL providers.

    Domains are checked on domain lists, then every address they
    resolve to is checked on IP lists.

    Examples:
        rblscope rbl check 192.0.2.1
        rblscope rbl check 2001:db8::1
        rblscope rbl check example.com --json
    """
    console = Console()

    try:
        engine = _build_engine(timeout, concurrency, servers)
        if as_json:
            result = asyncio.run(engine.check(target))
        else:
            with console.status(f"[cyan]Checking {target}...[/cyan]"):
                result = asyncio.run(engine.check(target))
    except (ValidationError, DomainResolutionError, dns.exception.DNSException) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    summary = result.summary
    console.print(f"\n[cyan]RBL Check: {result.target}[/cyan] [dim]({result.target_type.value})[/dim]")
    if result.resolved_ips:
        console.print(f"[dim]Resolved to: {', '.join(result.resolved_ips)}[/dim]")
    console.print()

    if summary.listed_count == 0:
        console.print(f"[green]CLEAN[/green] - Not listed on any of {summary.total_checked} RBLs checked\n")
    else:
        console.print(f"[red]LISTED[/red] on {summary.listed_count} of {summary.total_checked} RBLs\n")

        table = Table(title="Blacklist Listings", box=None)
        table.add_column("RBL", style="red", width=40)
        table.add_column("Code", style="dim", width=15)
        table.add_column("Details", style="white", width=50, overflow="ellipsis")

        for listing in result.listings:
            table.add_row(listing.rbl, listing.response or "-", listing.reason or "-")

        console.print(table)

    if result.errors:
        console.print(f"\n[yellow]Errors ({len(result.errors)}):[/yellow]")
        for err in result.errors[:5]:
            console.print(f"  {err.rbl}: {err.error}")
        if len(result.errors) > 5:
            console.print(f"  ... and {len(result.errors) - 5} more errors")


@rbl.command(name="list")
@click.option("--ipv6", is_flag=True, help="Show only IPv6-capable RBLs")
@click.option(
    "--type", "rbl_type",
    type=click.Choice([t.value for t in ProviderType]),
    help="Filter by provider type",
)
def list_rbls(ipv6: bool, rbl_type: str | None):
    """List available RBL providers.

    Examples:
        rblscope rbl list
        rblscope rbl list --ipv6
        rblscope rbl list --type domain
    """
    console = Console()

    table = Table(title="Available RBL Providers", box=None)
    table.add_column("Zone", style="cyan", width=28)
    table.add_column("Name", style="white", width=18)
    table.add_column("Type", style="dim", width=7)
    table.add_column("IPv6", style="dim", width=5)
    table.add_column("Description", style="dim", width=30, overflow="ellipsis")

    shown = 0
    for provider in DEFAULT_CATALOG:
        if ipv6 and not provider.supports_ipv6:
            continue
        if rbl_type and provider.type.value != rbl_type:
            continue

        ipv6_str = "[green]Yes[/green]" if provider.supports_ipv6 else "[dim]No[/dim]"
        table.add_row(
            provider.zone,
            provider.name,
            provider.type.value,
            ipv6_str,
            provider.description or "-",
        )
        shown += 1

    console.print(table)
    console.print(f"\nShowing {shown} of {len(DEFAULT_CATALOG)} providers")


@rbl.command()
@click.argument("target")
@click.argument("zone")
@click.option("--timeout", type=click.IntRange(min=1), help="Timeout per lookup in milliseconds")
def single(target: str, zone: str, timeout: int | None):
    """Check a target against one specific RBL zone.

    Examples:
        rblscope rbl single 192.0.2.1 zen.spamhaus.org
        rblscope rbl single example.com dbl.spamhaus.org
    """
    console = Console()

    try:
        engine = _build_engine(timeout, None, ())
        with console.status(f"[cyan]Checking {target} on {zone}...[/cyan]"):
            result = asyncio.run(engine.check_single(target, zone))
    except (ValidationError, dns.exception.DNSException) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if result.error:
        console.print(f"[yellow]Error:[/yellow] {result.error}")
    elif result.listed:
        console.print(f"[red]LISTED[/red] on {result.rbl}")
        if result.response:
            console.print(f"  Return code: {result.response}")
        if result.reason:
            console.print(f"  Details: {result.reason}")
    else:
        console.print(f"[green]NOT LISTED[/green] on {result.rbl}")

    console.print(f"  Response time: {result.response_time_ms}ms")
