"""HTTP transport for the appliance's control endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from aiohttp import ClientError, ClientSession, ClientTimeout

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Self

from .const import REQUEST_TIMEOUT
from .exceptions import SyncTransportError

_LOGGER = logging.getLogger(__name__)


class Transport(Protocol):
    """Capability to issue a GET with query parameters."""

    async def get(self, path: str, params: Mapping[str, int]) -> None:
        """Issue a GET request against the configured endpoint."""


class HttpTransport:
    """
    aiohttp-backed transport.

    Usage:
        async with HttpTransport("http://192.168.1.50:1337") as transport:
            await transport.get("/remote", {"power": 1, "fan": 2})

    A session passed in is left open on close(); a session created
    here is owned and closed with the transport.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = REQUEST_TIMEOUT,
        session: ClientSession | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = ClientTimeout(total=timeout)
        self._session = session
        self._owned_session = session is None

    @property
    def base_url(self) -> str:
        """Return the endpoint base URL."""
        return self._base_url

    def _get_session(self) -> ClientSession:
        if self._session is None or self._session.closed:
            self._session = ClientSession(timeout=self._timeout)
            self._owned_session = True
        return self._session

    async def get(self, path: str, params: Mapping[str, int]) -> None:
        """
        Issue GET <base_url><path>?<params>.

        Raises:
            SyncTransportError: On timeout, connection failure, or a
                non-success response status.

        """
        url = f"{self._base_url}/{path.lstrip('/')}"
        _LOGGER.debug("GET %s %s", url, dict(params))
        try:
            async with self._get_session().get(
                url, params=dict(params), timeout=self._timeout
            ) as resp:
                if resp.status >= 400:
                    raise SyncTransportError(
                        f"Unexpected response status {resp.status} from {url}"
                    )
        except TimeoutError as exc:
            raise SyncTransportError(
                f"Request timed out after {self._timeout.total}s"
            ) from exc
        except ClientError as exc:
            raise SyncTransportError(f"Request failed: {exc!r}") from exc

    async def close(self) -> None:
        """Close the session if it was created by this transport."""
        if self._owned_session and self._session is not None:
            if not self._session.closed:
                await self._session.close()
            self._session = None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
