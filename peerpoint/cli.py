"""
PeerPoint - Command Line Interface

Usage:
    peerpoint parse <descriptor>...
    peerpoint local [--port PORT]
    peerpoint interfaces
    peerpoint advertise [--config CONFIG]
    peerpoint --version

Copyright (c) 2024-2025 ReGen Designs LLC
"""

import json
from dataclasses import replace
import sys
from typing import Optional, Tuple

import click

from peerpoint.__version__ import __version__, __title__
from peerpoint.config import load_config
from peerpoint.network import (
    enumerate_interfaces,
    get_preferred_local_endpoint,
    parse_descriptor,
    parse_endpoint,
)
from peerpoint.utils.errors import (
    ConfigurationError,
    EndpointError,
    InterfaceEnumerationError,
)
from peerpoint.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

# Exit codes
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


def _endpoint_dict(endpoint) -> dict:
    return {
        "descriptor": endpoint.to_descriptor(),
        "family": endpoint.family,
        "host": endpoint.host,
        "port": endpoint.port,
    }


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name=__title__)
@click.option(
    "--log-level", "-l", default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Enable logging at this level",
)
@click.pass_context
def cli(ctx, log_level: Optional[str]):
    """PeerPoint - endpoint parsing and local address selection.

    \b
    Examples:
      peerpoint parse inet:192.168.1.10/42424
      peerpoint local --port 42424
      peerpoint interfaces
    """
    if log_level:
        setup_logging(level=log_level)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("descriptors", nargs=-1, required=True)
@click.option("--no-resolve", is_flag=True, help="Only check syntax, skip name lookups")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def parse(descriptors: Tuple[str, ...], no_resolve: bool, as_json: bool):
    """Parse endpoint descriptors and print their canonical form."""
    results = []
    failed = False

    for text in descriptors:
        try:
            if no_resolve:
                results.append({"input": text, "descriptor": str(parse_descriptor(text))})
            else:
                endpoint = parse_endpoint(text)
                results.append({"input": text, **_endpoint_dict(endpoint)})
        except EndpointError as e:
            failed = True
            logger.debug(f"Failed to parse {text!r}: {e}")
            results.append({"input": text, **e.to_dict()})

    if as_json:
        click.echo(json.dumps(results, indent=2))
    else:
        for result in results:
            if "error" in result:
                click.echo(f"{result['input']}: error: {result['message']}", err=True)
            else:
                click.echo(result["descriptor"])

    if failed:
        sys.exit(EXIT_ERROR)


@cli.command()
@click.option("--port", "-p", default=0, type=click.IntRange(0, 65535), help="Port to attach")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def local(port: int, as_json: bool):
    """Show the preferred local endpoint."""
    try:
        endpoint = get_preferred_local_endpoint()
    except InterfaceEnumerationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(EXIT_ERROR)

    if endpoint is None:
        click.echo("No suitable local endpoint found.", err=True)
        sys.exit(EXIT_NOT_FOUND)

    if port:
        endpoint = replace(endpoint, port=port)

    if as_json:
        click.echo(json.dumps(_endpoint_dict(endpoint), indent=2))
    else:
        click.echo(endpoint.to_descriptor())


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def interfaces(as_json: bool):
    """List local network interfaces and their IP addresses."""
    try:
        found = enumerate_interfaces()
    except InterfaceEnumerationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(EXIT_ERROR)

    if as_json:
        click.echo(json.dumps([i.to_dict() for i in found], indent=2))
        return

    for interface in found:
        click.echo(interface.name)
        for address in interface.addresses:
            click.echo(f"  {address}")


@cli.command()
@click.option("--config", "-c", "config_path", default=None, help="Path to configuration file")
def advertise(config_path: Optional[str]):
    """Show the endpoint this node would advertise to peers."""
    try:
        config = load_config(config_path)
        endpoint = config.advertised_endpoint()
    except (ConfigurationError, EndpointError, InterfaceEnumerationError) as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(EXIT_ERROR)

    if endpoint is None:
        click.echo("No suitable local endpoint found.", err=True)
        sys.exit(EXIT_NOT_FOUND)

    click.echo(endpoint.to_descriptor())


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
