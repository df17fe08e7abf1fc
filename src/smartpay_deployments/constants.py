"""Configuration constants for smartpay-deployments."""

SOLIDITY_VERSION = "0.8.17"

DEFAULT_CONTRACT_NAME = "SmartPay"
DEFAULT_NETWORK = "base-goerli"

# Environment variables read by load_config()
SIGNING_KEY_ENV = "PRIVATE_KEY"
EXPLORER_API_KEY_ENV = "BASE_API_KEY"

# Static network entries; the signing key comes from SIGNING_KEY_ENV
NETWORK_CONFIG = {
    "base-goerli": {
        "rpc_url": "https://goerli.base.org",
        "gas_price_wei": 1_000_000_000,
        "chain_id": 84531,
    },
}

# Etherscan-compatible explorers, keyed by network name
EXPLORER_CONFIG = {
    "base-goerli": {
        "chain_id": 84531,
        "api_url": "https://api-goerli.basescan.org/api",
        "browser_url": "https://goerli.basescan.org",
    },
}

# JSON-RPC request timeout in seconds
RPC_TIMEOUT = 30

# Multiplier applied to eth_estimateGas results
GAS_ESTIMATE_BUFFER = 1.2
