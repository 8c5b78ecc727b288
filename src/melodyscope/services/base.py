"""Base service for the Last.fm web API, providing common HTTP and decoding utilities."""

import asyncio
import logging
import math
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from rnet import Client, Impersonate, Response

from melodyscope import config
from melodyscope.exceptions import (
    ApiError,
    ConfigurationError,
    EnvelopeError,
    HttpStatusError,
    TransportError,
)

logger = logging.getLogger(__name__)


class BaseService:
    """Base class for all API services.

    Provides request construction, the request timeout, JSON decoding and the
    mapping of every failure onto :class:`~melodyscope.exceptions.ApiError`.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the service with a configured HTTP client.

        Args:
            api_key (str | None): Last.fm API key. Defaults to ``config.LASTFM_API_KEY``.
            base_url (str | None): API endpoint. Defaults to ``config.LASTFM_BASE_URL``.
            timeout (float | None): Request timeout in seconds.
                Defaults to ``config.REQUEST_TIMEOUT_SECONDS``.
        """
        self._api_key = api_key if api_key is not None else config.LASTFM_API_KEY
        self._base_url = base_url or config.LASTFM_BASE_URL
        self._timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT_SECONDS
        self._client: Client = Client(
            impersonate=Impersonate.Firefox136,
            timeout=math.ceil(self._timeout),
        )

    def _build_url(self, method: str, params: dict[str, str]) -> str:
        """Builds the request URL for an API method, with every parameter percent-encoded."""
        query = {"api_key": self._api_key or "", "format": "json", "method": method}
        query.update(params)
        return f"{self._base_url}?{urlencode(query)}"

    async def _call_api(self, method: str, params: dict[str, str]) -> Mapping[str, Any]:
        """Calls an API method and returns the decoded JSON body.

        Args:
            method (str): The API method name, e.g. "album.getinfo".
            params (dict[str, str]): Method-specific query parameters.

        Returns:
            Mapping[str, Any]: The decoded response body.

        Raises:
            ConfigurationError: If no API key is configured. No request is made.
            HttpStatusError: If the server responds with a non-2xx status.
            EnvelopeError: If the body reports an API-level error.
            TransportError: On timeout, connection failure or an undecodable body.
        """
        if not self._api_key:
            raise ConfigurationError("Last.fm API key is not configured")

        url = self._build_url(method, params)
        try:
            data = await asyncio.wait_for(self._get_json(url, method), timeout=self._timeout)
            if not isinstance(data, Mapping):
                raise TransportError(f"Unexpected response from {method}: expected a JSON object")
            if "error" in data:
                message = data.get("message") or "Unknown error"
                code = data.get("error")
                raise EnvelopeError(
                    f"Last.fm API error: {message}",
                    api_error_code=code if isinstance(code, int) else None,
                )
            return data
        except ApiError as e:  # Already mapped, re-raise without wrapping
            logger.debug("[%s] %s", method, e)
            raise
        except asyncio.TimeoutError as e:
            logger.debug("[%s] timed out after %s seconds", method, self._timeout)
            raise TransportError(
                f"Last.fm request {method} timed out after {self._timeout} seconds",
                original_error=e,
            ) from e
        except Exception as e:  # Connection errors and anything else from the client
            logger.debug("[%s] network error: %s", method, e)
            raise TransportError(f"Network error calling {method}: {e}", original_error=e) from e

    async def _get_json(self, url: str, method: str) -> Any:
        response: Response = await self._client.get(url)
        if not response.ok:
            raise HttpStatusError(
                f"Last.fm request failed with status {response.status}",
                status_code=response.status,
            )
        try:
            return await response.json()
        except Exception as e:
            raise TransportError(f"Invalid JSON in response to {method}: {e}", original_error=e) from e

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        if hasattr(self._client, "close") and callable(self._client.close):
            await self._client.close()
