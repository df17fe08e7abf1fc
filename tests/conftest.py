"""Shared pytest fixtures for smartpay-deployments tests."""

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Union

import pytest
import responses
import structlog

from smartpay_deployments.config import load_config
from smartpay_deployments.types import ProjectConfig

RPC_URL = "https://goerli.base.org"
API_URL = "https://api-goerli.basescan.org/api"

TEST_PRIVATE_KEY = "0x" + "11" * 32
TEST_API_KEY = "EKEY"

TX_HASH = "0x" + "ab" * 32
CONTRACT_ADDRESS = "0x5fbdb2315678afecb367f032d93f642f64180aa3"
BYTECODE = "0x6080604052348015600f57600080fd5b50603f80601d6000396000f3fe"
DEPLOYED_BYTECODE = "0x6080604052600080fdfea164736f6c6343000811000a"

SMARTPAY_ABI = [
    {"inputs": [], "stateMutability": "nonpayable", "type": "constructor"},
    {
        "inputs": [{"internalType": "address", "name": "to", "type": "address"}],
        "name": "pay",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
]


class RpcErrorReply:
    """Marker for a JSON-RPC error reply in RpcMock handlers."""

    def __init__(self, message: str, code: int = -32000):
        self.message = message
        self.code = code


class RpcMock:
    """responses callback that answers JSON-RPC requests per method."""

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.handlers: Dict[str, Union[Any, Callable[[list], Any]]] = {
            "eth_chainId": hex(84531),
            "eth_blockNumber": "0x10",
            "eth_getTransactionCount": "0x0",
            "eth_estimateGas": hex(100_000),
            "eth_sendRawTransaction": TX_HASH,
            "eth_getTransactionReceipt": {
                "transactionHash": TX_HASH,
                "blockNumber": "0x10",
                "status": "0x1",
                "contractAddress": CONTRACT_ADDRESS,
                "gasUsed": hex(90_000),
            },
            "eth_getCode": DEPLOYED_BYTECODE,
        }

    def methods(self) -> List[str]:
        return [call["method"] for call in self.calls]

    def __call__(self, request):
        body = json.loads(request.body)
        self.calls.append(body)

        reply: Dict[str, Any] = {"jsonrpc": "2.0", "id": body["id"]}

        if body["method"] not in self.handlers:
            reply["error"] = {"code": -32601, "message": "method not found"}
        else:
            handler = self.handlers[body["method"]]
            result = handler(body["params"]) if callable(handler) else handler
            if isinstance(result, RpcErrorReply):
                reply["error"] = {"code": result.code, "message": result.message}
            else:
                reply["result"] = result

        return (200, {}, json.dumps(reply))


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo CLI logging configuration between tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def test_environ() -> Dict[str, str]:
    """Environment with both credentials set."""
    return {"PRIVATE_KEY": TEST_PRIVATE_KEY, "BASE_API_KEY": TEST_API_KEY}


@pytest.fixture
def project_config(test_environ: Dict[str, str]) -> ProjectConfig:
    """Configuration loaded from the test environment."""
    return load_config(environ=test_environ)


@pytest.fixture
def artifacts_dir(tmp_path: Path) -> Path:
    """Create a Hardhat artifacts tree holding a compiled SmartPay contract."""
    root = tmp_path / "artifacts"
    contract_dir = root / "contracts" / "SmartPay.sol"
    build_info_dir = root / "build-info"
    contract_dir.mkdir(parents=True)
    build_info_dir.mkdir(parents=True)

    artifact = {
        "_format": "hh-sol-artifact-1",
        "contractName": "SmartPay",
        "sourceName": "contracts/SmartPay.sol",
        "abi": SMARTPAY_ABI,
        "bytecode": BYTECODE,
        "deployedBytecode": DEPLOYED_BYTECODE,
        "linkReferences": {},
        "deployedLinkReferences": {},
    }
    (contract_dir / "SmartPay.json").write_text(json.dumps(artifact))
    (contract_dir / "SmartPay.dbg.json").write_text(
        json.dumps({"_format": "hh-sol-dbg-1", "buildInfo": "../../build-info/abc123.json"})
    )

    build_info = {
        "id": "abc123",
        "_format": "hh-sol-build-info-1",
        "solcVersion": "0.8.17",
        "solcLongVersion": "0.8.17+commit.8df45f5f",
        "input": {
            "language": "Solidity",
            "sources": {"contracts/SmartPay.sol": {"content": "contract SmartPay {}"}},
            "settings": {"optimizer": {"enabled": False, "runs": 200}},
        },
    }
    (build_info_dir / "abc123.json").write_text(json.dumps(build_info))

    return root


@pytest.fixture
def rpc_mock():
    """Mock the base-goerli JSON-RPC endpoint; yields the RpcMock for inspection."""
    mock = RpcMock()
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        rsps.add_callback(
            responses.POST, RPC_URL, callback=mock, content_type="application/json"
        )
        yield mock
