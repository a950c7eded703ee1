# =============================================================================
# GetTranslated Server Gateway
# =============================================================================
#
# Every request is a single JSON POST to <server>/client/<endpoint>:
#   - Authorization: Bearer <api key>
#   - User-Agent: GetTranslated-SDK/<version> <app name>
#
# No retries; the httpx timeout is the only timeout.
#
# =============================================================================

import logging
from typing import Any

import httpx

from gettranslated.config import DEFAULT_SERVER_URL, SDK_VERSION, normalize_server_url
from gettranslated.core.errors import HttpError, NetworkError, ParseError

logger = logging.getLogger(__name__)


class NetworkGateway:
    """Authenticated JSON request/response against the GetTranslated server."""
    
    def __init__(
        self,
        server_url: str = DEFAULT_SERVER_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.server_url = normalize_server_url(server_url) or DEFAULT_SERVER_URL
        self.timeout = timeout
        self._transport = transport
    
    def set_server_url(self, server_url: str | None) -> None:
        """Point at another server. Empty values are ignored."""
        url = normalize_server_url(server_url)
        if url is None:
            return
        logger.debug(f"Using server {url}")
        self.server_url = url
    
    def url_for(self, endpoint: str) -> str:
        return f"{self.server_url}{endpoint}"
    
    def _headers(self, api_key: str, user_agent_suffix: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "User-Agent": f"GetTranslated-SDK/{SDK_VERSION} {user_agent_suffix}".rstrip(),
        }
    
    async def send(
        self,
        endpoint: str,
        payload: dict[str, Any],
        api_key: str,
        user_agent_suffix: str = "",
    ) -> dict[str, Any]:
        """
        POST ``payload`` to ``endpoint`` and return the JSON object response.
        
        Raises:
            NetworkError: transport failure or timeout
            HttpError: non-2xx status
            ParseError: body is not a JSON object
        """
        url = self.url_for(endpoint)
        
        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.post(
                    url,
                    json=payload,
                    headers=self._headers(api_key, user_agent_suffix),
                )
            except httpx.HTTPError as e:
                logger.debug(f"Request to {url} failed: {e!r}")
                raise NetworkError(str(e) or "Network error or connection failed") from e
        
        if not response.is_success:
            logger.debug(f"{url} returned {response.status_code}: {response.text}")
            raise HttpError(response.status_code)
        
        try:
            data = response.json()
        except ValueError as e:
            raise ParseError("Invalid JSON response") from e
        
        if not isinstance(data, dict):
            raise ParseError("Invalid JSON response")
        
        return data
