from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional

from ape.contracts import ContractContainer, ContractInstance
from eth_typing import ChecksumAddress
from ethpm_types import ContractType

from deployment.exceptions import MalformedPrerequisite, PrerequisiteNotFound
from deployment.utils import _load_json

ABI = List[Dict[str, Any]]

COMPILE_COMMAND = "yarn hardhat compile"


class ContractArtifact(NamedTuple):
    """A compiled contract as produced by hardhat-zksync."""

    name: str
    abi: ABI
    bytecode: str
    filepath: Optional[Path]
    contract_type: ContractType

    @property
    def container(self) -> ContractContainer:
        return ContractContainer(self.contract_type)

    @property
    def constructor_inputs(self) -> List[Any]:
        return list(self.contract_type.constructor.inputs)

    def method_abis(self, method_name: str) -> List[Any]:
        return [abi for abi in self.contract_type.methods if abi.name == method_name]


def contract_type_from_abi(
    name: str, abi: ABI, bytecode: Optional[str] = None
) -> ContractType:
    data: Dict[str, Any] = {"contractName": name, "abi": abi}
    if bytecode:
        data["deploymentBytecode"] = {"bytecode": bytecode}
    return ContractType.model_validate(data)


def artifact_from_json(data: Dict[str, Any], filepath: Optional[Path] = None) -> ContractArtifact:
    """Builds an artifact from the JSON document written by the compiler."""
    name = data.get("contractName")
    abi = data.get("abi")
    if not name or abi is None:
        raise MalformedPrerequisite(
            f"Artifact {filepath} is missing 'contractName' or 'abi'; "
            f"please run `{COMPILE_COMMAND}` first."
        )
    bytecode = data.get("bytecode") or "0x"
    return ContractArtifact(
        name=name,
        abi=abi,
        bytecode=bytecode,
        filepath=filepath,
        contract_type=contract_type_from_abi(name=name, abi=abi, bytecode=bytecode),
    )


def find_artifact_filepath(contract_name: str, artifacts_dir: Path) -> Path:
    """
    Returns the artifact path of a contract.
    The compiler writes contracts/<Source>.sol/<Name>.json; the source file
    usually shares the contract name, otherwise the directory is searched.
    """
    filepath = artifacts_dir / f"{contract_name}.sol" / f"{contract_name}.json"
    if filepath.exists():
        return filepath

    matches = sorted(artifacts_dir.glob(f"**/*.sol/{contract_name}.json"))
    if not matches:
        raise PrerequisiteNotFound(
            f"No artifact found for {contract_name} in {artifacts_dir}; "
            f"please run `{COMPILE_COMMAND}` first."
        )
    if len(matches) != 1:
        raise MalformedPrerequisite(
            f"Artifact for {contract_name} is ambiguous - "
            f"found {len(matches)} candidates in {artifacts_dir}."
        )
    return matches[0]


def load_artifact(contract_name: str, artifacts_dir: Path) -> ContractArtifact:
    filepath = find_artifact_filepath(contract_name, artifacts_dir)
    try:
        data = _load_json(filepath)
    except ValueError as e:
        raise MalformedPrerequisite(
            f"Artifact {filepath} is not valid JSON; please run `{COMPILE_COMMAND}` first."
        ) from e

    artifact = artifact_from_json(data, filepath=filepath)
    if artifact.name != contract_name:
        raise MalformedPrerequisite(
            f"Artifact {filepath} describes {artifact.name}, expected {contract_name}."
        )
    return artifact


def contract_at(name: str, abi: ABI, address: ChecksumAddress) -> ContractInstance:
    """Returns an instance of an externally deployed contract known only by its ABI."""
    contract_type = contract_type_from_abi(name=name, abi=abi)
    return ContractContainer(contract_type).at(address)
