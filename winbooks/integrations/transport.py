"""
HTTP transport for the Winbooks on Web API.

This module handles:
1. Sending requests relative to the API base URL
2. Turning 4xx/5xx responses into HttpStatusError
3. Turning httpx connection failures into TransportConnectionError
4. Decoding JSON bodies

It knows nothing about tokens or retries; callers pass headers in.
"""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from winbooks.utils.errors import (
    HttpStatusError,
    MalformedResponseError,
    TransportConnectionError,
)
from winbooks.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Status code and raw body of a non-error response."""
    status_code: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    def json(self) -> Any:
        return decode_json(self.body)


def decode_json(body: bytes) -> Any:
    """
    Parse a response body.

    Raises:
        MalformedResponseError: If the body is not valid JSON
    """
    try:
        return json.loads(body)
    except (ValueError, TypeError) as e:
        raise MalformedResponseError(f"Response body is not valid JSON: {e}")


class HttpTransport:
    """
    Thin synchronous wrapper around httpx.Client.

    Usage:
        transport = HttpTransport("https://prd.winbooksapis.be/wow/v2/")
        response = transport.send("GET", "app/Sale/Folder/DEMO", headers=...)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ):
        """
        Args:
            base_url: API base URL; request paths are relative to it
            timeout: Request timeout in seconds
            client: Preconfigured httpx client (tests pass one built on
                httpx.MockTransport)
        """
        if not base_url.endswith("/"):
            base_url += "/"
        self.base_url = base_url
        self._client = client or httpx.Client(timeout=timeout)

    def send(
        self,
        method: str,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        data: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> TransportResponse:
        """
        Send one request.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            headers: Request headers
            data: Form fields (sent url-encoded)
            params: Query parameters

        Returns:
            TransportResponse for any status below 400

        Raises:
            HttpStatusError: 4xx or 5xx response
            TransportConnectionError: No response was received
        """
        url = f"{self.base_url}{path.lstrip('/')}"

        try:
            response = self._client.request(
                method,
                url,
                headers=headers,
                data=data,
                params=params,
            )
        except httpx.RequestError as e:
            logger.error(f"Winbooks request failed: {method} {path} - {e}")
            raise TransportConnectionError(f"Failed to connect to Winbooks: {e}")

        if response.status_code >= 400:
            logger.warning(f"Winbooks API error {response.status_code} on {method} {path}")
            raise HttpStatusError(response.status_code, response.content, method, path)

        return TransportResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
