from pathlib import Path

import click

from deployment.constants import (
    DEFAULT_MANIFEST_FILENAME,
    POOL_CREATION_TIMEOUT,
    SUPPORTED_VARIANTS,
)
from deployment.types import MinFloat

variant_option = click.option(
    "--variant",
    "-v",
    help="Deployment variant (network and contract set).",
    type=click.Choice(SUPPORTED_VARIANTS),
    required=True,
)

autosign_option = click.option(
    "--autosign",
    help="Sign transactions without asking for confirmation.",
    is_flag=True,
    default=False,
)

pool_timeout_option = click.option(
    "--pool-timeout",
    help="Seconds to wait for the PoolCreated event.",
    type=MinFloat(1),
    default=POOL_CREATION_TIMEOUT,
    show_default=True,
)

project_root_option = click.option(
    "--project-root",
    help="Directory holding the compiled artifacts, secrets and dependency files.",
    type=click.Path(file_okay=False, exists=True, path_type=Path),
    default=Path.cwd,
)

manifest_option = click.option(
    "--manifest",
    "-m",
    help="Filepath of the contracts manifest.",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    default=DEFAULT_MANIFEST_FILENAME,
)
