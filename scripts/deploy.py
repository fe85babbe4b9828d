#!/usr/bin/python3

import click

from deployment.accounts import load_account
from deployment.config import DeploymentConfig
from deployment.networks import connect, print_network_info
from deployment.options import (
    autosign_option,
    pool_timeout_option,
    project_root_option,
    variant_option,
)
from deployment.params import Deployer
from deployment.zksync import zksync_deployer_for


@click.command()
@variant_option
@autosign_option
@pool_timeout_option
@project_root_option
def cli(variant, autosign, pool_timeout, project_root):
    """Deploy the Hands contracts and write the contracts manifest."""
    print(f"Running deploy script for the Hands contracts ({variant})")

    config = DeploymentConfig.from_environment(
        variant=variant,
        project_root=project_root,
        autosign=autosign,
        pool_timeout=pool_timeout,
    )
    account = load_account(config)

    # everything read from disk is validated before connecting
    deployer = Deployer.from_yaml(
        config=config, account=account, zksync=zksync_deployer_for(config)
    )

    with connect(config.network_choice):
        print_network_info()
        deployer.deploy_all()

    deployer.finalize()


if __name__ == "__main__":
    cli()
