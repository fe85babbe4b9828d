import os
from pathlib import Path
from typing import Mapping, Optional

from deployment.constants import (
    ACCOUNT_ALIAS_ENVVAR,
    ACCOUNT_PASSPHRASE_ENVVAR,
    CONSTRUCTOR_PARAMS_DIR,
    DEFAULT_ACCOUNT_ALIAS,
    LOCAL,
    NETWORK_ENDPOINTS,
    NETWORK_ENVVAR,
    NODE_ENV_ENVVAR,
    POOL_CREATION_TIMEOUT,
    PRIVATE_KEY_SOURCES,
    SECRETS_FILENAME,
    SUPPORTED_VARIANTS,
    VARIANT_PARAMS_FILENAMES,
    ZKSYNC_TESTNET,
    ZKSYNC_VARIANTS,
)
from deployment.exceptions import DeploymentConfigError, MalformedPrerequisite
from deployment.utils import _load_json


def _load_secrets(filepath: Path) -> dict:
    """Loads the untracked secrets file; a missing file means no secrets."""
    if not filepath.exists():
        return dict()
    try:
        secrets = _load_json(filepath)
    except ValueError as e:
        raise MalformedPrerequisite(f"{filepath} is not valid JSON.") from e
    if not isinstance(secrets, dict):
        raise MalformedPrerequisite(f"{filepath} must contain a JSON object.")
    return secrets


def _get_network_choice(variant: str, environ: Mapping[str, str]) -> str:
    override = environ.get(NETWORK_ENVVAR)
    if override:
        return override
    if variant == ZKSYNC_TESTNET and environ.get(NODE_ENV_ENVVAR) == "test":
        # local zkSync node for tests
        variant = LOCAL
    rpc, _ = NETWORK_ENDPOINTS[variant]
    return rpc


class DeploymentConfig:
    """
    Process-level settings for one deployment run.
    Built once at start-up and handed to the deployer; nothing past this
    point reads the environment or the secrets file.
    """

    def __init__(
        self,
        variant: str,
        params_filepath: Path,
        network_choice: str,
        private_key: Optional[str] = None,
        account_alias: str = DEFAULT_ACCOUNT_ALIAS,
        passphrase: Optional[str] = None,
        project_root: Optional[Path] = None,
        pool_timeout: float = POOL_CREATION_TIMEOUT,
        autosign: bool = False,
    ):
        if variant not in SUPPORTED_VARIANTS:
            raise DeploymentConfigError(f"Unsupported deployment variant '{variant}'.")
        self.variant = variant
        self.params_filepath = Path(params_filepath)
        self.network_choice = network_choice
        self.private_key = private_key
        self.account_alias = account_alias
        self.passphrase = passphrase
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.pool_timeout = pool_timeout
        self.autosign = autosign

    @property
    def is_zksync(self) -> bool:
        return self.variant in ZKSYNC_VARIANTS

    @property
    def rpc_uri(self) -> str:
        """The JSON-RPC endpoint; an ape network choice falls back to the variant's endpoint."""
        if "://" in self.network_choice:
            return self.network_choice
        rpc, _ = NETWORK_ENDPOINTS[self.variant]
        return rpc

    @property
    def l1_network(self) -> Optional[str]:
        _, l1_rpc = NETWORK_ENDPOINTS[self.variant]
        return l1_rpc

    @classmethod
    def from_environment(
        cls,
        variant: str,
        project_root: Optional[Path] = None,
        params_filepath: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
        **kwargs,
    ) -> "DeploymentConfig":
        """
        Reads the signing key from the variant's environment variable, falling
        back to secrets.json in the project root. A missing key is fatal.
        """
        if variant not in SUPPORTED_VARIANTS:
            raise DeploymentConfigError(f"Unsupported deployment variant '{variant}'.")
        environ = os.environ if environ is None else environ
        project_root = Path(project_root) if project_root else Path.cwd()

        envvar, secrets_key = PRIVATE_KEY_SOURCES[variant]
        private_key = environ.get(envvar)
        if not private_key:
            secrets = _load_secrets(project_root / SECRETS_FILENAME)
            private_key = secrets.get(secrets_key)
        if not private_key:
            raise DeploymentConfigError(
                f"Please set {envvar} in the environment variables "
                f"or '{secrets_key}' in {SECRETS_FILENAME}."
            )

        if params_filepath is None:
            params_filepath = CONSTRUCTOR_PARAMS_DIR / VARIANT_PARAMS_FILENAMES[variant]

        return cls(
            variant=variant,
            params_filepath=params_filepath,
            network_choice=_get_network_choice(variant, environ),
            private_key=private_key,
            account_alias=environ.get(ACCOUNT_ALIAS_ENVVAR, DEFAULT_ACCOUNT_ALIAS),
            passphrase=environ.get(ACCOUNT_PASSPHRASE_ENVVAR),
            project_root=project_root,
            **kwargs,
        )
