import json

import pytest

from deployment.constants import DEPENDENCY_ARTIFACTS
from deployment.dependencies import (
    DependencyManifest,
    dependencies_from_config,
    fetch_dependencies,
    get_dependency_artifact_filepaths,
    load_dependency_addresses,
)
from deployment.exceptions import (
    DeploymentConfigError,
    MalformedPrerequisite,
    PrerequisiteNotFound,
)
from tests.conftest import FACTORY_ADDRESS, FACTORY_ABI, ROUTER_ADDRESS, WETH_ADDRESS


def test_fetch_dependencies(dependency_files):
    addresses_filepath, artifact_filepaths = dependency_files
    dependencies = fetch_dependencies(addresses_filepath, artifact_filepaths)

    assert dependencies.addresses == {
        "wETH": WETH_ADDRESS,
        "router": ROUTER_ADDRESS,
        "classicFactory": FACTORY_ADDRESS,
    }
    assert list(dependencies.abis) == list(DEPENDENCY_ARTIFACTS)
    assert dependencies.abis["classicFactory"] == FACTORY_ABI


def test_missing_addresses_file(dependency_files):
    addresses_filepath, artifact_filepaths = dependency_files
    addresses_filepath.unlink()

    with pytest.raises(PrerequisiteNotFound, match="yarn deploy:local"):
        fetch_dependencies(addresses_filepath, artifact_filepaths)


def test_missing_artifact_aborts_the_whole_load(dependency_files):
    addresses_filepath, artifact_filepaths = dependency_files
    artifact_filepaths["feeRegistry"].unlink()

    with pytest.raises(PrerequisiteNotFound) as exc_info:
        fetch_dependencies(addresses_filepath, artifact_filepaths)
    assert "FeeRegistry" in str(exc_info.value)


def test_malformed_addresses_file(dependency_files):
    addresses_filepath, artifact_filepaths = dependency_files
    addresses_filepath.write_text("{not json")

    with pytest.raises(MalformedPrerequisite):
        fetch_dependencies(addresses_filepath, artifact_filepaths)


@pytest.mark.parametrize("content", ["{}", "[]", '["0x"]'])
def test_empty_addresses_file(tmp_path, content):
    filepath = tmp_path / "deps.json"
    filepath.write_text(content)

    with pytest.raises(MalformedPrerequisite):
        load_dependency_addresses(filepath)


def test_artifact_without_abi(dependency_files):
    addresses_filepath, artifact_filepaths = dependency_files
    artifact_filepaths["router"].write_text(json.dumps({"contractName": "router"}))

    with pytest.raises(MalformedPrerequisite, match="'abi'"):
        fetch_dependencies(addresses_filepath, artifact_filepaths)


def test_prerequisite_errors_are_config_errors():
    assert issubclass(PrerequisiteNotFound, DeploymentConfigError)
    assert issubclass(PrerequisiteNotFound, FileNotFoundError)
    assert issubclass(MalformedPrerequisite, DeploymentConfigError)


def test_artifact_filepaths(tmp_path):
    filepaths = get_dependency_artifact_filepaths(tmp_path)
    assert list(filepaths) == list(DEPENDENCY_ARTIFACTS)
    assert filepaths["wETH"] == tmp_path / "WETH.sol" / "WETH.json"

    custom = get_dependency_artifact_filepaths(tmp_path, {"token": "Token.sol/Token.json"})
    assert custom == {"token": tmp_path / "Token.sol" / "Token.json"}


def test_dependencies_from_config(project_root, dependency_files):
    dependencies = dependencies_from_config({"dependencies": {}}, project_root)
    assert dependencies == DependencyManifest.empty()

    config = {"dependencies": {"contracts": "local-dependency-contracts.json"}}
    dependencies = dependencies_from_config(config, project_root)
    assert dependencies.addresses["router"] == ROUTER_ADDRESS
    assert len(dependencies.abis) == len(DEPENDENCY_ARTIFACTS)


def test_dependencies_from_config_with_custom_artifacts(project_root, dependency_files):
    config = {
        "dependencies": {
            "contracts": "local-dependency-contracts.json",
            "artifacts": {"classicFactory": DEPENDENCY_ARTIFACTS["classicFactory"]},
        }
    }
    dependencies = dependencies_from_config(config, project_root)
    assert list(dependencies.abis) == ["classicFactory"]


def test_no_dependencies_section(project_root):
    assert dependencies_from_config({"contracts": ["Hands"]}, project_root) == (
        DependencyManifest.empty()
    )
