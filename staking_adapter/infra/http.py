"""
HTTP client for chain REST endpoints

Thin httpx wrapper that:
- applies a bounded timeout to every request
- maps transport failures and non-2xx statuses to UpstreamQueryError
- never retries (failures surface immediately)
"""

import logging
from typing import Any, Dict, Optional

import httpx

from ..config import config as global_config
from ..errors import ConfigurationError, UpstreamQueryError

logger = logging.getLogger(__name__)


def _error_reason(response: httpx.Response) -> str:
    """Best-effort extraction of an upstream error message"""
    try:
        data = response.json()
    except ValueError:
        return response.text[:500] if response.text else ""
    if isinstance(data, dict):
        for key in ("reason", "error", "message", "description"):
            if data.get(key):
                return str(data[key])
    return str(data)[:500]


class HttpClient:
    """
    JSON-over-HTTP client bound to one base URL

    The underlying httpx.Client is owned by this instance and released by close().

    Usage:
        http = HttpClient("https://api.testnet.hiro.so")
        info = http.get_json("/v2/pox")
        http.close()
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize HTTP client

        Args:
            base_url: Endpoint root (e.g. node URL)
            timeout: Request timeout in seconds (defaults to STAKING_HTTP_TIMEOUT)
            transport: Optional httpx transport (used by tests)
        """
        if not base_url:
            raise ConfigurationError.missing("endpoint URL")

        self._base_url = base_url.rstrip("/")
        self._timeout = timeout or global_config.http.timeout_seconds
        self._client = httpx.Client(
            timeout=self._timeout,
            transport=transport,
            headers={
                "Accept": "application/json",
                "User-Agent": global_config.http.user_agent,
            },
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    def url(self, path: str) -> str:
        """Build absolute URL for path"""
        if not path:
            return self._base_url
        return f"{self._base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Any = None,
        content: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """
        Send a request and return the successful response

        Raises:
            UpstreamQueryError: On timeout, connection failure or non-2xx status
        """
        url = self.url(path)
        logger.debug(f"{method} {url}")

        try:
            response = self._client.request(
                method,
                url,
                params=params,
                json=json_data,
                content=content,
                headers=headers,
            )
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout calling {url}")
            raise UpstreamQueryError.timeout(url, self._timeout, e)
        except httpx.RequestError as e:
            logger.warning(f"Request to {url} failed: {e}")
            raise UpstreamQueryError.connection_failed(url, e)

        if response.is_error:
            reason = _error_reason(response)
            logger.warning(f"{url} returned HTTP {response.status_code}: {reason}")
            raise UpstreamQueryError.bad_status(url, response.status_code, reason)

        return response

    def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET path and decode the JSON body"""
        response = self.request("GET", path, params=params)
        return self._decode(response)

    def post_json(self, path: str, payload: Any) -> Any:
        """POST a JSON body and decode the JSON response"""
        response = self.request("POST", path, json_data=payload)
        return self._decode(response)

    def post_bytes(self, path: str, body: bytes, content_type: str = "application/octet-stream") -> Any:
        """POST raw bytes and decode the JSON response"""
        response = self.request("POST", path, content=body, headers={"Content-Type": content_type})
        return self._decode(response)

    def _decode(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            raise UpstreamQueryError.invalid_response(str(response.url), "body is not JSON")

    def close(self):
        """Release the underlying connection pool"""
        self._client.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
