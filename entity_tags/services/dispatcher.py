"""HTTP dispatch primitive for remote service operations.

Resolves an operation name to a route, sends the payload over HTTP and
turns every failure into a RemoteCallError:

- Transport errors (connection refused, timeouts) -> status_code=None
- Non-success responses -> status_code set, error envelope parsed if present

Nothing is retried or cached here. The only timeout is the httpx client's.
"""

import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

import httpx
from pydantic import BaseModel, ValidationError

from .errors import RemoteCallError, RemoteServiceErrorInfo, UnknownOperationError
from .operations import ENTITY_TAG_ROUTES, RemoteRoute

logger = logging.getLogger(__name__)

# Invoke a remote operation by name: dispatch(operation_name, payload)
Dispatch = Callable[[str, Any], Awaitable[Any]]

DEFAULT_TIMEOUT = 30.0


class HttpRemoteServiceDispatcher:
    """Dispatches named operations to a remote service over HTTP.

    Instances are callables matching ``Dispatch`` and carry no per-call
    state, so one dispatcher can serve any number of concurrent calls.

    Usage:
        async with HttpRemoteServiceDispatcher(
            api_url="https://cms.example.com",
            access_token="your-token",
        ) as dispatch:
            await dispatch(
                "AddTagToEntityAsync",
                TagAssignmentRequest(entity_id="42", entity_type="Page", tag_id="7"),
            )
    """

    def __init__(
        self,
        api_url: str,
        routes: Mapping[str, RemoteRoute] = ENTITY_TAG_ROUTES,
        access_token: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize dispatcher.

        Args:
            api_url: Base URL of the remote service
            routes: Operation name -> route table
            access_token: Bearer token sent with every request, if set
            timeout: HTTP request timeout in seconds
            transport: Custom httpx transport (mock or ASGI transport in tests)
        """
        self.api_url = api_url.rstrip("/")
        self.routes = routes
        self.access_token = access_token
        self.timeout = timeout
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def connect(self) -> None:
        """Initialize HTTP client."""
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            transport=self.transport,
            headers={
                "User-Agent": "EntityTags-Client/1.0",
                "Accept": "application/json",
            },
        )
        logger.info(f"HTTP dispatcher initialized for {self.api_url}")

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info(f"HTTP dispatcher closed for {self.api_url}")

    async def __aenter__(self) -> "HttpRemoteServiceDispatcher":
        self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _get_headers(self) -> dict[str, str]:
        """Get headers for requests."""
        headers = {"X-Requested-With": "XMLHttpRequest"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def resolve(self, operation_name: str) -> RemoteRoute:
        """Look up the route for an operation name.

        Raises:
            UnknownOperationError: If the route table has no such operation
        """
        try:
            return self.routes[operation_name]
        except KeyError:
            raise UnknownOperationError(
                f"No route for remote operation '{operation_name}'"
            ) from None

    @staticmethod
    def _serialize(payload: Any) -> Any:
        """Convert a payload into JSON-compatible data using wire names."""
        if payload is None:
            return None
        if isinstance(payload, BaseModel):
            return payload.model_dump(mode="json", by_alias=True)
        if isinstance(payload, Mapping):
            return dict(payload)
        raise TypeError(f"Unsupported payload type: {type(payload).__name__}")

    @staticmethod
    def _parse_error(response: httpx.Response) -> Optional[RemoteServiceErrorInfo]:
        """Extract the error envelope from a failed response, if there is one."""
        try:
            body = response.json()
        except ValueError:
            return None

        if not isinstance(body, dict) or not isinstance(body.get("error"), dict):
            return None

        try:
            return RemoteServiceErrorInfo.model_validate(body["error"])
        except ValidationError:
            return None

    async def __call__(self, operation_name: str, payload: Any = None) -> Any:
        """Invoke a remote operation.

        Args:
            operation_name: Route key, e.g. "AddTagToEntityAsync"
            payload: Pydantic model or mapping sent as JSON body or query string

        Returns:
            Decoded JSON response body, or None for empty responses

        Raises:
            UnknownOperationError: If the operation has no route
            RuntimeError: If connect() has not been called
            RemoteCallError: If the request fails or the service rejects it
        """
        route = self.resolve(operation_name)

        if not self._client:
            raise RuntimeError("Not connected - call connect() first")

        url = f"{self.api_url}{route.path}"
        data = self._serialize(payload)

        request_kwargs: dict[str, Any] = {"headers": self._get_headers()}
        if data is not None:
            if route.payload_in == "query":
                request_kwargs["params"] = data
            else:
                request_kwargs["json"] = data

        logger.debug(f"{operation_name} -> {route.http_method} {url}")

        try:
            response = await self._client.request(route.http_method, url, **request_kwargs)
        except httpx.RequestError as e:
            logger.error(f"HTTP error calling {operation_name}: {e}")
            raise RemoteCallError(
                f"Remote call {operation_name} failed: {e}"
            ) from e

        if not response.is_success:
            error = self._parse_error(response)
            if error and error.message:
                message = error.message
            else:
                message = (
                    f"Remote service returned {response.status_code} "
                    f"{response.reason_phrase} for {operation_name}"
                )
            logger.warning(f"{operation_name} failed with status {response.status_code}: {message}")
            raise RemoteCallError(message, status_code=response.status_code, error=error)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError:
            return response.text
