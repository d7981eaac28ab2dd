"""Remote action gateway for the Sound Whiskers HTTP API.

Every call performs exactly one HTTP request and classifies the outcome into
a small closed set of result types, so callers branch on the result type
instead of re-deriving HTTP status handling per endpoint:

- Success: any 2xx response
- EntitlementDenied: 403 carrying the PRO_PLAN_REQUIRED code
- QuotaExceeded: 429
- GenericFailure: everything else, including transport faults

The gateway never retries and never caches.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import httpx

from .config import SoundWhiskersConfig

logger = logging.getLogger(__name__)

PRO_PLAN_REQUIRED = "PRO_PLAN_REQUIRED"

_ERROR_CODE_PATTERN = re.compile(r"^[A-Z][A-Z0-9_]+$")


@dataclass(frozen=True)
class Endpoint:
    """Named API endpoint.

    Attributes:
        name: Identifier used by callers (e.g., "generate_playlist")
        method: HTTP method
        path: Path template, formatted with path parameters
    """
    name: str
    method: str
    path: str

    def build_path(self, path_params: Optional[Mapping[str, Any]] = None) -> str:
        try:
            return self.path.format(**(path_params or {}))
        except KeyError as e:
            raise KeyError(f"Missing path parameter {e} for endpoint {self.name}") from e


ENDPOINTS: Dict[str, Endpoint] = {
    endpoint.name: endpoint
    for endpoint in (
        Endpoint("generate_playlist", "POST", "/api/ai/generate"),
        Endpoint("list_playlists", "GET", "/api/playlists"),
        Endpoint("create_playlist", "POST", "/api/playlists"),
        Endpoint("get_playlist", "GET", "/api/playlists/{playlist_id}"),
        Endpoint("update_playlist", "PATCH", "/api/playlists/{playlist_id}"),
        Endpoint("delete_playlist", "DELETE", "/api/playlists/{playlist_id}"),
        Endpoint("add_tracks", "POST", "/api/playlists/{playlist_id}/tracks"),
    )
}


# ============================================================================
# Results
# ============================================================================


@dataclass(frozen=True)
class Success:
    """2xx response with its parsed JSON body (None when empty)."""
    data: Any
    status_code: int = 200


@dataclass(frozen=True)
class EntitlementDenied:
    """Request refused because the account's plan does not include it."""
    code: str = PRO_PLAN_REQUIRED
    message: Optional[str] = None


@dataclass(frozen=True)
class QuotaExceeded:
    """Request refused because a usage limit was reached."""
    message: Optional[str] = None


@dataclass(frozen=True)
class GenericFailure:
    """Any other failure.

    Attributes:
        message: Server-provided or transport error message, if any
        status_code: HTTP status, or None when no response was received
        code: Server-provided error code, if any
    """
    message: Optional[str] = None
    status_code: Optional[int] = None
    code: Optional[str] = None


GatewayResult = Union[Success, EntitlementDenied, QuotaExceeded, GenericFailure]


def extract_error(body: Any) -> Tuple[Optional[str], Optional[str]]:
    """Pull (code, message) out of an error response body.

    Accepts both ``{"code": ...}`` and ``{"error": {"code", "message"}}``.
    Some service routes put the code in ``message`` and the text in ``code``;
    those are swapped back.

    Returns:
        Tuple of (code, message), either of which may be None
    """
    if not isinstance(body, dict):
        return None, None

    code = message = None
    error = body.get("error")
    if isinstance(error, dict):
        code = error.get("code")
        message = error.get("message")
    elif isinstance(error, str):
        message = error

    code = body.get("code", code)
    message = body.get("message", message)

    if (
        isinstance(message, str)
        and _ERROR_CODE_PATTERN.match(message)
        and not (isinstance(code, str) and _ERROR_CODE_PATTERN.match(code))
    ):
        code, message = message, code

    return code, message


class RemoteActionGateway:
    """Async gateway performing one classified request per call.

    Attributes:
        base_url: Service base URL
        client: httpx.AsyncClient used for requests

    Example:
        >>> async with RemoteActionGateway(config) as gateway:
        ...     result = await gateway.call("generate_playlist", {"prompt": "rainy day jazz"})
        ...     if isinstance(result, Success):
        ...         print(result.data["count"])
    """

    def __init__(
        self,
        config: SoundWhiskersConfig,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize gateway.

        Args:
            config: Client configuration (base URL, token, timeout)
            client: Optional pre-built client; the gateway then does not close it
        """
        self.base_url = config.api_url.rstrip("/")
        self._owns_client = client is None

        headers = {"Accept": "application/json"}
        if config.access_token:
            headers["Authorization"] = f"Bearer {config.access_token}"

        if client is None:
            client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=httpx.Timeout(config.timeout_seconds, connect=10.0),
                follow_redirects=True,
            )
        else:
            client.headers.update(headers)
        self.client = client

        logger.debug(f"Initialized gateway for {self.base_url}")

    async def __aenter__(self) -> "RemoteActionGateway":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    @staticmethod
    def resolve(endpoint: Union[str, Endpoint]) -> Endpoint:
        """Look up an endpoint by name.

        Raises:
            KeyError: If the endpoint name is unknown
        """
        if isinstance(endpoint, Endpoint):
            return endpoint
        try:
            return ENDPOINTS[endpoint]
        except KeyError:
            raise KeyError(f"Unknown endpoint: {endpoint}") from None

    async def call(
        self,
        endpoint: Union[str, Endpoint],
        body: Any = None,
        path_params: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> GatewayResult:
        """Perform one request against a named endpoint.

        Args:
            endpoint: Endpoint name or instance
            body: JSON-serializable request body (omitted when None)
            path_params: Values for the endpoint's path template
            params: Query string parameters; None values are dropped

        Returns:
            Success, EntitlementDenied, QuotaExceeded or GenericFailure

        Raises:
            KeyError: If the endpoint or one of its path parameters is unknown
        """
        target = self.resolve(endpoint)
        path = target.build_path(path_params)
        query = {k: str(v) for k, v in (params or {}).items() if v is not None}

        logger.debug(f"{target.method} {path} ({target.name})")
        try:
            response = await self.client.request(
                target.method,
                f"{self.base_url}{path}",
                json=body,
                params=query or None,
            )
        except httpx.HTTPError as e:
            logger.warning(f"Transport error calling {target.name}: {e}")
            return GenericFailure(message=str(e) or None)

        return self.classify(target, response)

    def classify(self, endpoint: Endpoint, response: httpx.Response) -> GatewayResult:
        """Map an HTTP response onto a gateway result."""
        status = response.status_code

        if response.is_success:
            if not response.content:
                return Success(data=None, status_code=status)
            try:
                return Success(data=response.json(), status_code=status)
            except ValueError:
                logger.error(f"{endpoint.name} returned an undecodable body (HTTP {status})")
                return GenericFailure(status_code=status)

        try:
            error_body = response.json()
        except ValueError:
            error_body = None
        code, message = extract_error(error_body)

        if status == 403 and code == PRO_PLAN_REQUIRED:
            logger.info(f"{endpoint.name} denied: {code}")
            return EntitlementDenied(code=code, message=message)

        if status == 429:
            logger.info(f"{endpoint.name} quota exceeded")
            return QuotaExceeded(message=message)

        logger.warning(f"{endpoint.name} failed with HTTP {status}: {code} {message}")
        return GenericFailure(message=message, status_code=status, code=code)
