import json
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

from deployment.artifacts import contract_type_from_abi
from deployment.config import DeploymentConfig
from deployment.dependencies import DependencyManifest

# Digit-only addresses are their own checksum
DEPLOYER_ADDRESS = "0x" + "1" * 40
WETH_ADDRESS = "0x" + "a0" * 20
ROUTER_ADDRESS = "0x" + "b0" * 20
FACTORY_ADDRESS = "0x" + "c0" * 20
POOL_ADDRESS = "0x" + "d0" * 20
DEPLOYED_ADDRESSES = ["0x" + f"{i:040d}" for i in range(100, 120)]

ONE_MILLION_TOKENS = 1_000_000 * 10**18
HANDS_PRIVATE_KEY = "0x" + "2" * 64


def _input(name: str, type_: str = "address") -> Dict[str, str]:
    return {"name": name, "type": type_, "internalType": type_}


def _constructor(*inputs) -> Dict[str, Any]:
    return {"type": "constructor", "stateMutability": "nonpayable", "inputs": list(inputs)}


def _function(name: str, *inputs, outputs=()) -> Dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "stateMutability": "nonpayable",
        "inputs": list(inputs),
        "outputs": list(outputs),
    }


def _event(name: str, *inputs) -> Dict[str, Any]:
    return {
        "type": "event",
        "name": name,
        "anonymous": False,
        "inputs": [dict(i, indexed=False) for i in inputs],
    }


SET_BANK_CONTRACT = _function("setBankContract", _input("_bank"))

CONTRACT_ABIS = {
    "HandsToken": [
        _constructor(
            _input("premintReceiver"),
            _input("premintAmount", "uint256"),
            _input("supplyCap", "uint256"),
        ),
        _function("transfer", _input("to"), _input("amount", "uint256")),
    ],
    "Affiliate": [SET_BANK_CONTRACT],
    "Staking": [_constructor(_input("_token")), SET_BANK_CONTRACT],
    "Bank": [_constructor(_input("_affiliate"), _input("_staking"))],
    "Hands": [_constructor(_input("_bank"))],
    "Bankroll": [_function("deposit")],
}

ROUTER_ABI = [
    _function("createPool", _input("_factory"), _input("data", "bytes"), outputs=[_input("pool")])
]
FACTORY_ABI = [
    _function("createPool", _input("data", "bytes"), outputs=[_input("pool")]),
    _event("PoolCreated", _input("token0"), _input("token1"), _input("pool")),
]
WETH_ABI = [_function("deposit")]
CLASSIC_POOL_ABI = [_function("sync")]

LOCAL_PARAMS = {
    "deployment": {"name": "hands-test", "chain_id": 270, "estimate_fees": True},
    "artifacts": {"dir": "out", "filename": "local-contracts.json"},
    "constants": {"PREMINT_AMOUNT": ONE_MILLION_TOKENS, "SUPPLY_CAP": ONE_MILLION_TOKENS},
    "contracts": [
        {
            "HandsToken": {
                "constructor": {
                    "premintReceiver": "$deployer",
                    "premintAmount": "$PREMINT_AMOUNT",
                    "supplyCap": "$SUPPLY_CAP",
                }
            }
        },
        "Affiliate",
        {"Staking": {"constructor": {"_token": "$HandsToken"}}},
        {
            "Bank": {
                "constructor": {"_affiliate": "$Affiliate", "_staking": "$Staking"},
                "calls": [
                    {"Affiliate.setBankContract": ["$Bank"]},
                    {"Staking.setBankContract": ["$Bank"]},
                ],
            }
        },
        {"Hands": {"constructor": {"_bank": "$Bank"}}},
    ],
}


def write_artifact(artifacts_dir: Path, name: str, abi: List[Dict], source: str = None) -> Path:
    source = source or name
    filepath = artifacts_dir / f"{source}.sol" / f"{name}.json"
    filepath.parent.mkdir(parents=True, exist_ok=True)
    artifact = {
        "_format": "hh-zksolc-artifact-1",
        "contractName": name,
        "sourceName": f"contracts/{source}.sol",
        "abi": abi,
        "bytecode": "0x6080",
        "deployedBytecode": "0x6080",
    }
    filepath.write_text(json.dumps(artifact))
    return filepath


class FakeReceipt:
    def __init__(self, logs=None):
        self.logs = logs or list()
        self.confirmed = False

    def await_confirmations(self):
        self.confirmed = True
        return self

    def decode_logs(self, event):
        return list(self.logs)


class FakeMethod:
    def __init__(self, instance, name, abis):
        self.contract = instance
        self.name = name
        self.abis = abis

    def __str__(self):
        return f"{self.name}()"

    def __call__(self, *args, sender=None):
        self.contract.history.append(("call", self.contract.name, self.name, list(args)))
        receipt = FakeReceipt(logs=self.contract.receipt_logs.get(self.name))
        self.contract.receipts.append(receipt)
        return receipt


class FakeInstance:
    """Stands in for an ape ContractInstance."""

    def __init__(self, name, address, abi, history=None, events=None, receipt_logs=None):
        self.name = name
        self.address = address
        self.contract_type = contract_type_from_abi(name=name, abi=abi)
        self.history = history if history is not None else list()
        self.events = events or dict()
        self.receipt_logs = receipt_logs or dict()
        self.receipts = list()

    def __getattr__(self, item):
        if item in self.__dict__.get("events", {}):
            return self.events[item]
        abis = [abi for abi in self.contract_type.methods if abi.name == item]
        if not abis:
            raise AttributeError(item)
        return FakeMethod(self, item, abis)


class FakeAccount:
    """Stands in for an ape account; deployments get sequential addresses."""

    def __init__(self, address=DEPLOYER_ADDRESS, fail_on=None):
        self.address = address
        self.fail_on = fail_on
        self.history = list()
        self.instances = dict()
        self._addresses = iter(DEPLOYED_ADDRESSES)

    def deploy(self, container, *args):
        name = container.contract_type.name
        if name == self.fail_on:
            raise RuntimeError(f"simulated RPC rejection of {name}")
        self.history.append(("deploy", name, list(args)))
        instance = FakeInstance(
            name=name,
            address=next(self._addresses),
            abi=CONTRACT_ABIS[name],
            history=self.history,
        )
        self.instances[name] = instance
        return instance


class FakeZkSyncDeployer:
    """Stands in for the zkSync deployer; deployments are recorded by the wrapped account."""

    def __init__(self, account, fee=10**15, fee_error=None):
        self.account = account
        self.address = account.address
        self.fee = fee
        self.fee_error = fee_error
        self.estimates = list()

    def estimate_fee(self, artifact, *args):
        self.estimates.append(artifact.name)
        if self.fee_error:
            raise self.fee_error
        return self.fee

    def deploy(self, artifact, *args):
        return self.account.deploy(artifact.container, *args)


class FakeEvent:
    """Stands in for an ape ContractEvent; `range` serves logs by block number."""

    def __init__(self, name="PoolCreated", logs_by_block=None):
        self.name = name
        self.logs_by_block = logs_by_block or dict()
        self.ranges = list()

    def range(self, start, stop):
        self.ranges.append((start, stop))
        for block in range(start, stop):
            yield from self.logs_by_block.get(block, [])


def pool_created_log(token0, token1, pool=POOL_ADDRESS):
    return SimpleNamespace(event_arguments={"token0": token0, "token1": token1, "pool": pool})


@pytest.fixture(autouse=True)
def local_network(monkeypatch):
    """Keeps tests off the network: no chain id check, no fee estimates."""
    monkeypatch.setattr("deployment.utils.is_local_network", lambda: True)
    monkeypatch.setattr(
        "deployment.params.estimate_deploy_fee", lambda container, *args, sender: 10**15
    )
    monkeypatch.setattr(
        "deployment.liquidity.chain", SimpleNamespace(blocks=SimpleNamespace(height=10))
    )


@pytest.fixture
def project_root(tmp_path) -> Path:
    return tmp_path


@pytest.fixture
def artifacts_dir(project_root) -> Path:
    artifacts_dir = project_root / "artifacts-zk" / "contracts"
    for name, abi in CONTRACT_ABIS.items():
        write_artifact(artifacts_dir, name, abi)
    return artifacts_dir


@pytest.fixture
def dependency_files(project_root):
    """Writes a SyncSwap dependency deployment in the default locations."""
    from deployment.constants import (
        DEPENDENCY_ARTIFACTS,
        DEPENDENCY_ARTIFACTS_DIR,
        DEPENDENCY_CONTRACTS_FILENAME,
    )

    addresses = {
        "wETH": WETH_ADDRESS,
        "router": ROUTER_ADDRESS,
        "classicFactory": FACTORY_ADDRESS,
    }
    addresses_filepath = project_root / DEPENDENCY_CONTRACTS_FILENAME
    addresses_filepath.write_text(json.dumps(addresses))

    abis = {"router": ROUTER_ABI, "classicFactory": FACTORY_ABI, "classicPool": CLASSIC_POOL_ABI}
    artifact_filepaths = dict()
    for name, relative_path in DEPENDENCY_ARTIFACTS.items():
        filepath = project_root / DEPENDENCY_ARTIFACTS_DIR / relative_path
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_text(json.dumps({"contractName": name, "abi": abis.get(name, WETH_ABI)}))
        artifact_filepaths[name] = filepath
    return addresses_filepath, artifact_filepaths


@pytest.fixture
def dependencies() -> DependencyManifest:
    return DependencyManifest(
        addresses={
            "wETH": WETH_ADDRESS,
            "router": ROUTER_ADDRESS,
            "classicFactory": FACTORY_ADDRESS,
        },
        abis={
            "wETH": WETH_ABI,
            "router": ROUTER_ABI,
            "classicFactory": FACTORY_ABI,
            "classicPool": CLASSIC_POOL_ABI,
        },
    )


@pytest.fixture
def deployment_config(project_root) -> DeploymentConfig:
    return DeploymentConfig(
        variant="local",
        params_filepath=project_root / "params.yml",
        network_choice="http://localhost:3050",
        private_key=HANDS_PRIVATE_KEY,
        passphrase="secret",
        project_root=project_root,
        pool_timeout=0.2,
        autosign=True,
    )


@pytest.fixture
def account() -> FakeAccount:
    return FakeAccount()
