#!/usr/bin/python3

import click

from deployment.manifest import OutputManifest, read_manifest
from deployment.options import manifest_option


def _display_manifest(manifest: OutputManifest) -> None:
    groups = (
        ("Dependency Contracts", manifest.dependency_contracts),
        ("Deployed Contracts", manifest.deployed_contracts),
    )
    for title, contracts in groups:
        click.secho(f"\n{title}", fg="green")
        if not contracts:
            click.secho("    (none)", fg="yellow")
        for index, (name, address) in enumerate(contracts.items(), start=1):
            click.secho(f"    {index}. {name} {address}", fg="cyan")

    abi_names = sorted(set(manifest.dependency_abis) | set(manifest.deployed_abis))
    click.secho(f"\nABIs: {', '.join(abi_names)}", fg="yellow")


@click.command(name="show-manifest")
@manifest_option
def cli(manifest):
    """List the contracts recorded in a contracts manifest."""
    _display_manifest(read_manifest(filepath=manifest))


if __name__ == "__main__":
    cli()
