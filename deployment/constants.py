from collections import OrderedDict
from pathlib import Path

import deployment

#
# Filesystem
#

DEPLOYMENT_DIR = Path(deployment.__file__).parent
CONSTRUCTOR_PARAMS_DIR = DEPLOYMENT_DIR / "constructor_params"

# hardhat-zksync compiler output of this project
CONTRACT_ARTIFACTS_DIR = Path("artifacts-zk") / "contracts"

SECRETS_FILENAME = "secrets.json"

#
# Variants
#

LOCAL = "local"
ZKSYNC_TESTNET = "zksync-testnet"
ARBITRUM_GOERLI = "arbitrum-goerli"

SUPPORTED_VARIANTS = [LOCAL, ZKSYNC_TESTNET, ARBITRUM_GOERLI]

# contracts on these are deployed with zkSync EIP-712 transactions
ZKSYNC_VARIANTS = [LOCAL, ZKSYNC_TESTNET]

VARIANT_PARAMS_FILENAMES = {
    LOCAL: "local.yml",
    ZKSYNC_TESTNET: "zksync_testnet.yml",
    ARBITRUM_GOERLI: "arbitrum_goerli.yml",
}

#
# Networks
#

ZKSYNC_LOCAL_RPC = "http://localhost:3050"
ZKSYNC_LOCAL_L1_RPC = "http://localhost:8545"
ZKSYNC_TESTNET_RPC = "https://testnet.era.zksync.dev"
ARBITRUM_GOERLI_RPC = "https://goerli-rollup.arbitrum.io/rpc"

NETWORK_ENDPOINTS = {
    # variant -> (rpc, l1 rpc)
    LOCAL: (ZKSYNC_LOCAL_RPC, ZKSYNC_LOCAL_L1_RPC),
    ZKSYNC_TESTNET: (ZKSYNC_TESTNET_RPC, "goerli"),
    ARBITRUM_GOERLI: (ARBITRUM_GOERLI_RPC, None),
}

# zkSync deployment receipts
ZKSYNC_RECEIPT_TIMEOUT = 240
ZKSYNC_POLL_LATENCY = 0.5

#
# Secrets & environment
#

NETWORK_ENVVAR = "HANDS_NETWORK"
ACCOUNT_ALIAS_ENVVAR = "HANDS_ACCOUNT_ALIAS"
ACCOUNT_PASSPHRASE_ENVVAR = "HANDS_ACCOUNT_PASSPHRASE"
NODE_ENV_ENVVAR = "NODE_ENV"

DEFAULT_ACCOUNT_ALIAS = "hands-deployer"

PRIVATE_KEY_SOURCES = {
    # variant -> (environment variable, secrets.json key)
    LOCAL: ("ZKS_PRIVATE_KEY", "privateKey"),
    ZKSYNC_TESTNET: ("ZKS_PRIVATE_KEY", "privateKey"),
    ARBITRUM_GOERLI: ("ARBITRUM_GOERLI_PRIVATE_KEY", "privateKeyArbitrumGoerli"),
}

#
# SyncSwap dependencies
#

DEPENDENCY_CONTRACTS_FILENAME = "local-dependency-contracts.json"
DEPENDENCY_ARTIFACTS_DIR = Path("syncswap-contracts") / "artifacts-zk" / "contracts"
DEPENDENCY_PREREQUISITE_COMMAND = "yarn deploy:local"

DEPENDENCY_ARTIFACTS = OrderedDict(
    [
        ("wETH", "WETH.sol/WETH.json"),
        ("vault", "vault/SyncSwapVault.sol/SyncSwapVault.json"),
        ("master", "master/SyncSwapPoolMaster.sol/SyncSwapPoolMaster.json"),
        (
            "classicFactory",
            "pool/classic/SyncSwapClassicPoolFactory.sol/SyncSwapClassicPoolFactory.json",
        ),
        (
            "stableFactory",
            "pool/stable/SyncSwapStablePoolFactory.sol/SyncSwapStablePoolFactory.json",
        ),
        ("router", "SyncSwapRouter.sol/SyncSwapRouter.json"),
        ("feeManager", "master/SyncSwapFeeManager.sol/SyncSwapFeeManager.json"),
        ("feeRecipient", "master/SyncSwapFeeRecipient.sol/SyncSwapFeeRecipient.json"),
        ("feeRegistry", "master/FeeRegistry.sol/FeeRegistry.json"),
        ("forwardRegistry", "master/ForwarderRegistry.sol/ForwarderRegistry.json"),
        ("classicPool", "pool/classic/SyncSwapClassicPool.sol/SyncSwapClassicPool.json"),
    ]
)

#
# Liquidity
#

POOL_CREATED_EVENT = "PoolCreated"
POOL_CREATION_TIMEOUT = 60  # seconds
EVENT_POLL_INTERVAL = 1  # seconds

#
# Manifest
#

DEFAULT_MANIFEST_FILENAME = "local-contracts.json"
