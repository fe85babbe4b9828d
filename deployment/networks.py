from ape import networks
from ape.api.networks import LOCAL_NETWORK_NAME
from ape.contracts import ContractContainer


def connect(network_choice: str):
    """
    Returns a context manager connected to the given ape network choice.
    The choice may be an ecosystem:network:provider triple or an RPC URI.
    """
    return networks.parse_network_choice(network_choice)


def is_local_network() -> bool:
    return networks.provider.network.name == LOCAL_NETWORK_NAME


def get_chain_id() -> int:
    return networks.provider.network.chain_id


def estimate_deploy_fee(container: ContractContainer, *args, sender) -> int:
    """Estimates the fee, in wei, of deploying a contract with the given constructor arguments."""
    txn = container.constructor.serialize_transaction(*args, sender=sender)
    gas = networks.provider.estimate_gas_cost(txn)
    return gas * networks.provider.gas_price


def print_network_info() -> None:
    print(
        f"Ecosystem: {networks.provider.network.ecosystem.name}",
        f"Network: {networks.provider.network.name}",
        f"Chain ID: {networks.provider.network.chain_id}",
        f"Gas Price: {networks.provider.gas_price}",
        sep="\n",
    )
