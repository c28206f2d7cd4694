"""
kvhttp Client

A thin synchronous client for the kvhttp wire protocol, built on httpx.
"""

from typing import Any, Dict, Optional

import httpx

from .protocol.commands import KEY_NOT_FOUND_MESSAGE


class KVClientError(Exception):
    """Raised when the server answers an operation with an error status."""

    def __init__(self, status: int, message: str):
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message


class KVClient:
    """
    Simple HTTP client for kvhttp.

    Usage:
        with KVClient("127.0.0.1", 8080) as client:
            client.set("foo", "bar")
            client.get("foo")  # -> "bar"
    """

    def __init__(
            self,
            host: str = "127.0.0.1",
            port: int = 8080,
            timeout: float = 5.0,
            transport: Optional[httpx.BaseTransport] = None,
    ):
        self.host = host
        self.port = port
        self.timeout = timeout
        self._http = httpx.Client(
            base_url=f"http://{host}:{port}",
            timeout=timeout,
            transport=transport,
        )

    def send(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Send a raw request payload and return the decoded response payload."""
        response = self._http.post("/", json=payload)
        return response.json()

    def send_raw(self, body: bytes) -> httpx.Response:
        """Send an arbitrary body, e.g. to exercise malformed requests."""
        return self._http.post("/", content=body, headers={"Content-Type": "application/json"})

    def get(self, key: str) -> Optional[str]:
        """
        Retrieve a value.

        Returns:
            The value, or None if the server reports the key as missing.

        Raises:
            KVClientError: for any other error response
        """
        payload = self.send({"op": "GET", "key": key})
        if "error" in payload:
            if payload["error"] == KEY_NOT_FOUND_MESSAGE:
                return None
            raise KVClientError(payload["status"], payload["error"])
        return payload["value"]

    def set(self, key: str, value: str) -> None:
        """Store a value, raising KVClientError on an error response."""
        payload = self.send({"op": "SET", "key": key, "value": value})
        if "error" in payload:
            raise KVClientError(payload["status"], payload["error"])

    def close(self) -> None:
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
