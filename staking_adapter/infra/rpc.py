"""
Tendermint / CometBFT JSON-RPC client

Provides:
- Generic JSON-RPC call
- abci_query for gRPC-style protobuf queries (binary request/response)
- broadcast_tx_sync for signed transaction bytes
"""

import base64
import logging
from typing import Any, Dict, Optional

import httpx

from ..errors import UpstreamQueryError
from .http import HttpClient

logger = logging.getLogger(__name__)


class TendermintRpcClient:
    """
    JSON-RPC client for a Tendermint-style RPC endpoint

    Usage:
        rpc = TendermintRpcClient("https://rpc.dukong.mantrachain.io")
        raw = rpc.abci_query("/cosmos.staking.v1beta1.Query/DelegatorDelegations", request_bytes)
        result = rpc.broadcast_tx_sync(signed_tx_bytes)
    """

    def __init__(
        self,
        endpoint: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize RPC client

        Args:
            endpoint: RPC endpoint URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._http = HttpClient(endpoint, timeout=timeout, transport=transport)
        self._request_id = 0

    @property
    def endpoint(self) -> str:
        return self._http.base_url

    def call(self, method: str, params: Dict[str, Any]) -> Any:
        """
        Make JSON-RPC call

        Args:
            method: RPC method name
            params: Named RPC parameters

        Returns:
            RPC result

        Raises:
            UpstreamQueryError: On transport failure or JSON-RPC error
        """
        self._request_id += 1
        body = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }
        data = self._http.post_json("", body)

        if not isinstance(data, dict):
            raise UpstreamQueryError.invalid_response(self.endpoint, f"{method}: expected object")

        if data.get("error"):
            error = data["error"]
            if isinstance(error, dict):
                message = error.get("data") or error.get("message") or str(error)
                code = error.get("code")
            else:
                message, code = str(error), None
            logger.warning(f"RPC error for {method}: {message}")
            raise UpstreamQueryError.query_failed(self.endpoint, method, code, message)

        if "result" not in data:
            raise UpstreamQueryError.invalid_response(self.endpoint, f"{method}: missing result")

        return data["result"]

    def abci_query(self, path: str, data: bytes, height: int = 0) -> bytes:
        """
        Run an ABCI query and return the raw response value

        Args:
            path: gRPC method path (e.g. "/cosmos.staking.v1beta1.Query/Validators")
            data: Protobuf encoded request
            height: Block height (0 = latest)

        Returns:
            Protobuf encoded response (empty bytes when the chain returns no value)

        Raises:
            UpstreamQueryError: If the query result code is non-zero
        """
        params = {
            "path": path,
            "data": data.hex(),
            "height": str(height),
            "prove": False,
        }
        result = self.call("abci_query", params)
        response = (result or {}).get("response") or {}

        code = int(response.get("code") or 0)
        if code != 0:
            log = response.get("log") or ""
            logger.warning(f"ABCI query {path} failed with code {code}: {log}")
            raise UpstreamQueryError.query_failed(self.endpoint, path, code, log)

        value = response.get("value")
        if not value:
            return b""
        try:
            return base64.b64decode(value)
        except ValueError:
            raise UpstreamQueryError.invalid_response(self.endpoint, f"{path}: value is not base64")

    def broadcast_tx_sync(self, tx_bytes: bytes) -> Dict[str, Any]:
        """
        Submit signed transaction bytes and wait for CheckTx

        Returns:
            Result dict with "code", "hash", "log", "codespace"
        """
        tx_b64 = base64.b64encode(tx_bytes).decode("ascii")
        result = self.call("broadcast_tx_sync", {"tx": tx_b64})
        if not isinstance(result, dict) or "hash" not in result:
            raise UpstreamQueryError.invalid_response(self.endpoint, "broadcast_tx_sync: missing hash")
        return result

    def close(self):
        self._http.close()
