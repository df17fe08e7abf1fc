"""Minimal JSON-RPC client for smartpay-deployments."""

import itertools
from typing import Any, Dict, List, Optional

import requests
import structlog

from .constants import RPC_TIMEOUT
from .exceptions import RpcConnectionError, RpcResponseError

logger = structlog.get_logger(__name__)


class JsonRpcClient:
    """Sends Ethereum JSON-RPC 2.0 requests over HTTP."""

    def __init__(
        self,
        rpc_url: str,
        timeout: float = RPC_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self._ids = itertools.count(1)

    def call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """
        Perform a single JSON-RPC call.

        Args:
            method: RPC method name, e.g. "eth_chainId"
            params: Positional parameters

        Returns:
            The "result" member of the response

        Raises:
            RpcConnectionError: If the endpoint is unreachable or returns non-200
            RpcResponseError: If the response carries a JSON-RPC error object
        """
        request_id = next(self._ids)
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params or [],
            "id": request_id,
        }

        try:
            response = self.session.post(self.rpc_url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise RpcConnectionError(f"Network error during RPC call {method}: {e}") from e

        # Check for HTTP errors
        if response.status_code != 200:
            raise RpcConnectionError(
                f"RPC request {method} failed with status {response.status_code}"
            )

        try:
            result = response.json()
        except ValueError as e:
            raise RpcConnectionError(f"RPC endpoint returned invalid JSON for {method}") from e

        # Check for RPC errors
        if "error" in result:
            error = result["error"] or {}
            if not isinstance(error, dict):
                raise RpcResponseError(f"RPC error in {method}: {error}")
            raise RpcResponseError(
                f"RPC error in {method}: {error.get('message', error)}",
                code=error.get("code"),
                data=error.get("data"),
            )

        logger.debug("rpc_call", method=method, id=request_id)
        return result.get("result")

    def chain_id(self) -> int:
        return int(self.call("eth_chainId"), 16)

    def block_number(self) -> int:
        return int(self.call("eth_blockNumber"), 16)

    def get_transaction_count(self, address: str, block: str = "pending") -> int:
        return int(self.call("eth_getTransactionCount", [address, block]), 16)

    def estimate_gas(self, tx: Dict[str, Any]) -> int:
        return int(self.call("eth_estimateGas", [tx]), 16)

    def send_raw_transaction(self, raw_tx: str) -> str:
        return self.call("eth_sendRawTransaction", [raw_tx])

    def get_transaction_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        """Return the receipt, or None while the transaction is pending."""
        return self.call("eth_getTransactionReceipt", [tx_hash])

    def get_code(self, address: str, block: str = "latest") -> str:
        return self.call("eth_getCode", [address, block])
