from ape import accounts
from ape.api import AccountAPI
from ape_accounts import import_account_from_private_key

from deployment.config import DeploymentConfig
from deployment.constants import ACCOUNT_PASSPHRASE_ENVVAR
from deployment.exceptions import DeploymentConfigError


def _require_passphrase(config: DeploymentConfig, purpose: str) -> str:
    if not config.passphrase:
        raise DeploymentConfigError(
            f"Please set {ACCOUNT_PASSPHRASE_ENVVAR} to {purpose} "
            f"the '{config.account_alias}' account."
        )
    return config.passphrase


def load_account(config: DeploymentConfig) -> AccountAPI:
    """
    Returns the ape keyfile account used to sign deployments,
    importing it from the configured private key the first time.
    Without autosign, an existing account prompts for its passphrase when signing.
    """
    if config.account_alias in accounts.aliases:
        account = accounts.load(config.account_alias)
    else:
        passphrase = _require_passphrase(config, purpose="encrypt")
        account = import_account_from_private_key(
            config.account_alias, passphrase, config.private_key
        )
        print(f"Account imported: {account.address}")

    if config.autosign:
        passphrase = _require_passphrase(config, purpose="autosign with")
        account.set_autosign(True, passphrase=passphrase)
    return account
