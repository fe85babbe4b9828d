import json
from pathlib import Path
from typing import Dict

import yaml

from deployment.constants import CONTRACT_ARTIFACTS_DIR, DEFAULT_MANIFEST_FILENAME
from deployment.exceptions import DeploymentConfigError
from deployment.networks import get_chain_id, is_local_network


def _load_yaml(filepath: Path) -> dict:
    """Loads a YAML file."""
    with open(filepath, "r") as file:
        return yaml.safe_load(file)


def _load_json(filepath: Path) -> dict:
    """Loads a JSON file."""
    with open(filepath, "r") as file:
        return json.load(file)


def get_manifest_filepath(config: Dict, project_root: Path) -> Path:
    """Returns the filepath of the contracts manifest written at the end of a run."""
    artifact_config = config.get("artifacts") or {}
    artifact_dir = Path(artifact_config.get("dir", "."))
    if not artifact_dir.is_absolute():
        artifact_dir = project_root / artifact_dir
    filename = artifact_config.get("filename", DEFAULT_MANIFEST_FILENAME)
    return artifact_dir / filename


def get_contract_artifacts_dir(config: Dict, project_root: Path) -> Path:
    """Returns the directory holding the compiled artifacts of the contracts to deploy."""
    artifact_config = config.get("artifacts") or {}
    contracts_dir = Path(artifact_config.get("contracts_dir", CONTRACT_ARTIFACTS_DIR))
    if not contracts_dir.is_absolute():
        contracts_dir = project_root / contracts_dir
    return contracts_dir


def validate_config(config: Dict) -> None:
    """Checks the structure of a deployment parameters file without touching the network."""
    print("Validating parameters YAML...")

    if not isinstance(config, dict):
        raise DeploymentConfigError("Malformed deployment parameters YAML.")

    deployment = config.get("deployment")
    if not deployment:
        raise DeploymentConfigError("deployment is not set in params file.")

    if not deployment.get("chain_id"):
        raise DeploymentConfigError("chain_id is not set in params file.")

    contracts = config.get("contracts")
    if not contracts:
        raise DeploymentConfigError("Constructor parameters file missing 'contracts' field.")
    if not isinstance(contracts, list):
        raise DeploymentConfigError("'contracts' must be a list of contract entries.")


def validate_network(config: Dict) -> None:
    """
    Checks that the connected network matches the chain_id specified in the params file.
    Local networks are exempt.
    """
    config_chain_id = int(config["deployment"]["chain_id"])
    if is_local_network():
        return

    chain_id = get_chain_id()
    if config_chain_id != chain_id:
        raise DeploymentConfigError(
            f"chain_id in params file ({config_chain_id}) does not match "
            f"chain_id of current network ({chain_id})."
        )
