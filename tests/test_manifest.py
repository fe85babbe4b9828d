import json

import pytest
from eth_utils import to_checksum_address

from deployment.dependencies import DependencyManifest
from deployment.manifest import (
    MANIFEST_KEYS,
    DeployedContractRecord,
    manifest_from_deployments,
    read_manifest,
    write_manifest,
)
from tests.conftest import (
    CONTRACT_ABIS,
    DEPLOYED_ADDRESSES,
    POOL_ADDRESS,
    ROUTER_ABI,
    ROUTER_ADDRESS,
)


@pytest.fixture
def records():
    return [
        DeployedContractRecord("HandsToken", DEPLOYED_ADDRESSES[0], CONTRACT_ABIS["HandsToken"]),
        DeployedContractRecord("Hands", DEPLOYED_ADDRESSES[1], CONTRACT_ABIS["Hands"]),
        DeployedContractRecord("HandsPool", POOL_ADDRESS, []),
    ]


def test_manifest_from_deployments(records):
    dependencies = DependencyManifest(
        addresses={"router": ROUTER_ADDRESS}, abis={"router": ROUTER_ABI}
    )
    manifest = manifest_from_deployments(dependencies, records)

    assert manifest.dependency_contracts == {"router": ROUTER_ADDRESS}
    assert manifest.dependency_abis == {"router": ROUTER_ABI}
    assert list(manifest.deployed_contracts) == ["HandsToken", "Hands", "HandsPool"]
    # addresses are checksummed
    assert manifest.deployed_contracts["HandsPool"] == to_checksum_address(POOL_ADDRESS)
    assert manifest.deployed_abis["Hands"] == CONTRACT_ABIS["Hands"]


def test_write_and_read_manifest(tmp_path, records):
    filepath = tmp_path / "out" / "local-contracts.json"
    manifest = manifest_from_deployments(DependencyManifest.empty(), records)

    assert write_manifest(manifest, filepath) == filepath
    data = json.loads(filepath.read_text())
    assert set(data) == set(MANIFEST_KEYS)
    assert data["dependencyContracts"] == {}
    assert data["deployedContracts"]["HandsToken"] == DEPLOYED_ADDRESSES[0]

    assert read_manifest(filepath) == manifest


def test_manifest_is_overwritten(tmp_path, records, capsys):
    filepath = tmp_path / "local-contracts.json"
    write_manifest(manifest_from_deployments(DependencyManifest.empty(), records), filepath)
    assert "Creating new manifest" in capsys.readouterr().out

    write_manifest(manifest_from_deployments(DependencyManifest.empty(), records[1:2]), filepath)
    assert "Overwriting existing manifest" in capsys.readouterr().out

    # previous entries are not merged into the new manifest
    assert list(read_manifest(filepath).deployed_contracts) == ["Hands"]


def test_read_incomplete_manifest(tmp_path):
    filepath = tmp_path / "local-contracts.json"
    filepath.write_text(json.dumps({"deployedContracts": {}}))

    with pytest.raises(ValueError, match="dependencyContracts"):
        read_manifest(filepath)
