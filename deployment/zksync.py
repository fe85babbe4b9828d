from typing import Optional

from ape.contracts import ContractInstance
from eth_abi import encode
from eth_account import Account
from eth_typing import ChecksumAddress
from eth_utils import to_bytes, to_checksum_address
from zksync2.core.types import EthBlockParams
from zksync2.module.module_builder import ZkSyncBuilder
from zksync2.signer.eth_signer import PrivateKeyEthSigner
from zksync2.transaction.transaction_builders import TxCreateContract

from deployment.artifacts import ContractArtifact
from deployment.config import DeploymentConfig
from deployment.constants import ZKSYNC_POLL_LATENCY, ZKSYNC_RECEIPT_TIMEOUT
from deployment.exceptions import DeploymentConfigError, DeploymentError


def encode_constructor_args(artifact: ContractArtifact, *args) -> bytes:
    types = [abi_input.canonical_type for abi_input in artifact.constructor_inputs]
    return encode(types, list(args))


class ZkSyncDeployer:
    """
    Deploys zksolc-compiled contracts to zkSync Era.

    zkSync only accepts contract creation as an EIP-712 (type 113) transaction
    to the ContractDeployer system contract, with the bytecode shipped as a
    factory dependency. Calls to deployed contracts are regular transactions
    and stay with the ape account.
    """

    def __init__(
        self,
        rpc_uri: str,
        private_key: str,
        receipt_timeout: float = ZKSYNC_RECEIPT_TIMEOUT,
        poll_latency: float = ZKSYNC_POLL_LATENCY,
    ):
        self.rpc_uri = rpc_uri
        self.web3 = ZkSyncBuilder.build(rpc_uri)
        self._account = Account.from_key(private_key)
        self.receipt_timeout = receipt_timeout
        self.poll_latency = poll_latency

    @property
    def address(self) -> ChecksumAddress:
        return to_checksum_address(self._account.address)

    def _create_contract(self, artifact: ContractArtifact, *args) -> TxCreateContract:
        nonce = self.web3.zksync.get_transaction_count(self.address, EthBlockParams.PENDING.value)
        return TxCreateContract(
            web3=self.web3,
            chain_id=self.web3.eth.chain_id,
            nonce=nonce,
            from_=self.address,
            gas_limit=0,  # estimated below
            gas_price=self.web3.zksync.gas_price,
            bytecode=to_bytes(hexstr=artifact.bytecode),
            call_data=encode_constructor_args(artifact, *args),
        )

    def estimate_fee(self, artifact: ContractArtifact, *args) -> int:
        """Returns the deployment cost in wei."""
        create_contract = self._create_contract(artifact, *args)
        gas = self.web3.zksync.eth_estimate_gas(create_contract.tx)
        return gas * self.web3.zksync.gas_price

    def deploy(self, artifact: ContractArtifact, *args) -> ContractInstance:
        """Sends the deployment and blocks until its receipt is available."""
        create_contract = self._create_contract(artifact, *args)
        gas = self.web3.zksync.eth_estimate_gas(create_contract.tx)
        tx_712 = create_contract.tx712(gas)

        signer = PrivateKeyEthSigner(self._account, self.web3.eth.chain_id)
        signed_message = signer.sign_typed_data(tx_712.to_eip712_struct())
        tx_hash = self.web3.zksync.send_raw_transaction(tx_712.encode(signed_message))
        receipt = self.web3.zksync.wait_for_transaction_receipt(
            tx_hash, timeout=self.receipt_timeout, poll_latency=self.poll_latency
        )
        if receipt["status"] != 1:
            raise DeploymentError(
                f"{artifact.name} deployment failed in transaction {tx_hash.hex()}."
            )
        return artifact.container.at(receipt["contractAddress"])


def zksync_deployer_for(config: DeploymentConfig) -> Optional[ZkSyncDeployer]:
    """Returns the zkSync deployer of a zkSync variant, or None for other networks."""
    if not config.is_zksync:
        return None
    if not config.private_key:
        raise DeploymentConfigError(
            f"A private key is required to deploy to zkSync ({config.variant})."
        )
    return ZkSyncDeployer(rpc_uri=config.rpc_uri, private_key=config.private_key)
