import json
from pathlib import Path
from typing import Dict, Iterable, NamedTuple

from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address

from deployment.artifacts import ABI
from deployment.dependencies import DependencyManifest
from deployment.utils import _load_json

ContractName = str


STANDARD_MANIFEST_JSON_FORMAT = {"indent": 4, "separators": (",", ": ")}

DEPENDENCY_CONTRACTS_KEY = "dependencyContracts"
DEPENDENCY_ABIS_KEY = "dependencyAbis"
DEPLOYED_CONTRACTS_KEY = "deployedContracts"
DEPLOYED_ABIS_KEY = "deployedAbis"

MANIFEST_KEYS = (
    DEPENDENCY_CONTRACTS_KEY,
    DEPENDENCY_ABIS_KEY,
    DEPLOYED_CONTRACTS_KEY,
    DEPLOYED_ABIS_KEY,
)


class DeployedContractRecord(NamedTuple):
    """A contract deployed (and confirmed) during the current run."""

    name: ContractName
    address: ChecksumAddress
    abi: ABI


class OutputManifest(NamedTuple):
    """The contracts manifest consumed by the front-end and tests."""

    dependency_contracts: Dict[str, ChecksumAddress]
    dependency_abis: Dict[str, ABI]
    deployed_contracts: Dict[ContractName, ChecksumAddress]
    deployed_abis: Dict[ContractName, ABI]

    def to_json(self) -> Dict[str, Dict]:
        return {
            DEPENDENCY_CONTRACTS_KEY: dict(self.dependency_contracts),
            DEPENDENCY_ABIS_KEY: dict(self.dependency_abis),
            DEPLOYED_CONTRACTS_KEY: dict(self.deployed_contracts),
            DEPLOYED_ABIS_KEY: dict(self.deployed_abis),
        }


def manifest_from_deployments(
    dependencies: DependencyManifest, deployments: Iterable[DeployedContractRecord]
) -> OutputManifest:
    deployed_contracts, deployed_abis = dict(), dict()
    for record in deployments:
        deployed_contracts[record.name] = to_checksum_address(record.address)
        deployed_abis[record.name] = record.abi

    return OutputManifest(
        dependency_contracts=dict(dependencies.addresses),
        dependency_abis=dict(dependencies.abis),
        deployed_contracts=deployed_contracts,
        deployed_abis=deployed_abis,
    )


def write_manifest(manifest: OutputManifest, filepath: Path) -> Path:
    """Writes the manifest, replacing any previous file at the same path."""
    filepath.parent.mkdir(parents=True, exist_ok=True)
    if filepath.exists():
        print(f"Overwriting existing manifest at {filepath}.")
    else:
        print(f"Creating new manifest at {filepath}.")

    with open(filepath, "w") as file:
        json.dump(manifest.to_json(), file, **STANDARD_MANIFEST_JSON_FORMAT)

    return filepath


def read_manifest(filepath: Path) -> OutputManifest:
    data = _load_json(filepath)
    missing = [key for key in MANIFEST_KEYS if key not in data]
    if missing:
        raise ValueError(f"Manifest at {filepath} is missing {', '.join(missing)}.")

    return OutputManifest(
        dependency_contracts=data[DEPENDENCY_CONTRACTS_KEY],
        dependency_abis=data[DEPENDENCY_ABIS_KEY],
        deployed_contracts=data[DEPLOYED_CONTRACTS_KEY],
        deployed_abis=data[DEPLOYED_ABIS_KEY],
    )
