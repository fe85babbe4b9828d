from pathlib import Path
from typing import Dict, Mapping, NamedTuple, Optional

from eth_typing import ChecksumAddress

from deployment.artifacts import ABI
from deployment.constants import (
    DEPENDENCY_ARTIFACTS,
    DEPENDENCY_ARTIFACTS_DIR,
    DEPENDENCY_CONTRACTS_FILENAME,
    DEPENDENCY_PREREQUISITE_COMMAND,
)
from deployment.exceptions import MalformedPrerequisite, PrerequisiteNotFound
from deployment.utils import _load_json

DependencyName = str

PREREQUISITE_HINT = f"Please run `{DEPENDENCY_PREREQUISITE_COMMAND}` first"


class DependencyManifest(NamedTuple):
    """Addresses and ABIs of the externally deployed SyncSwap contracts."""

    addresses: Dict[DependencyName, ChecksumAddress]
    abis: Dict[DependencyName, ABI]

    @classmethod
    def empty(cls) -> "DependencyManifest":
        return cls(addresses=dict(), abis=dict())


def _read_prerequisite(filepath: Path) -> object:
    """Reads and parses one JSON file written by the prerequisite deployment."""
    try:
        return _load_json(filepath)
    except ValueError as e:
        raise MalformedPrerequisite(f"{filepath} is not valid JSON. {PREREQUISITE_HINT}.") from e
    except OSError as e:
        raise PrerequisiteNotFound(f"Cannot read {filepath}. {PREREQUISITE_HINT}.") from e


def load_dependency_addresses(filepath: Path) -> Dict[DependencyName, ChecksumAddress]:
    """Loads the dependency name -> address mapping written by the prerequisite deployment."""
    contracts = _read_prerequisite(filepath)
    if not contracts or not isinstance(contracts, dict):
        raise MalformedPrerequisite(
            f"{filepath} does not contain any dependency contracts. {PREREQUISITE_HINT}."
        )
    return contracts


def load_dependency_abis(
    artifact_filepaths: Mapping[DependencyName, Path]
) -> Dict[DependencyName, ABI]:
    """Loads the ABI of each dependency artifact; any missing or invalid file aborts the load."""
    abis = dict()
    for name, filepath in artifact_filepaths.items():
        artifact = _read_prerequisite(filepath)
        abi = artifact.get("abi") if isinstance(artifact, dict) else None
        if not abi:
            raise MalformedPrerequisite(
                f"Artifact {filepath} for {name} has no 'abi' field. {PREREQUISITE_HINT}."
            )
        abis[name] = abi
    return abis


def get_dependency_artifact_filepaths(
    artifacts_dir: Path, artifacts: Optional[Mapping[DependencyName, str]] = None
) -> Dict[DependencyName, Path]:
    artifacts = artifacts or DEPENDENCY_ARTIFACTS
    return {name: artifacts_dir / relative_path for name, relative_path in artifacts.items()}


def fetch_dependencies(
    addresses_filepath: Path,
    artifact_filepaths: Mapping[DependencyName, Path],
) -> DependencyManifest:
    """Loads every dependency input or fails; there is no partial result."""
    print("Loading dependency contracts...")
    addresses = load_dependency_addresses(addresses_filepath)
    abis = load_dependency_abis(artifact_filepaths)
    return DependencyManifest(addresses=addresses, abis=abis)


def dependencies_from_config(config: Dict, project_root: Path) -> DependencyManifest:
    """
    Loads the dependencies declared in the 'dependencies' section of a params file.
    Variants without that section have no dependencies.
    """
    dependency_config = config.get("dependencies")
    if not dependency_config:
        return DependencyManifest.empty()

    addresses_filepath = Path(dependency_config.get("contracts", DEPENDENCY_CONTRACTS_FILENAME))
    artifacts_dir = Path(dependency_config.get("artifacts_dir", DEPENDENCY_ARTIFACTS_DIR))
    if not addresses_filepath.is_absolute():
        addresses_filepath = project_root / addresses_filepath
    if not artifacts_dir.is_absolute():
        artifacts_dir = project_root / artifacts_dir

    artifact_filepaths = get_dependency_artifact_filepaths(
        artifacts_dir=artifacts_dir, artifacts=dependency_config.get("artifacts")
    )
    return fetch_dependencies(
        addresses_filepath=addresses_filepath, artifact_filepaths=artifact_filepaths
    )
