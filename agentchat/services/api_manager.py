"""
ApiManager - single point of outbound HTTP communication with the backend.

Features:
- Absolute URL building with query parameters
- Bearer token injection from an injected TokenProvider
- JSON request bodies
- Uniform ApiError for non-2xx responses and transport failures

No retry, backoff or timeout policy is applied; callers own resilience.
"""

import json
import time
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urljoin

import httpx

from agentchat.core.config import settings
from agentchat.core.exceptions import ApiError, ConfigurationError
from agentchat.core.logging_config import logger
from agentchat.services.token_provider import TokenProvider
from agentchat.utils.error_messages import message_text


DEFAULT_ERROR_MESSAGE = "An unexpected error occurred"


def _query_value(value: Any) -> Any:
    """Render a query parameter value the way the backend expects it"""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return [_query_value(item) for item in value]
    return str(value)


class ApiManager:
    """
    Async HTTP client wrapper for the backend REST API.

    Usage:
        provider = TokenProvider()
        provider.set_token_getter(session.get_token)

        async with ApiManager(token_provider=provider) as api:
            agents = await api.get(API_ENDPOINTS.AGENTS.BASE)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token_provider: Optional[TokenProvider] = None,
        default_headers: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self._base_url = base_url if base_url is not None else settings.API_BASE_URL
        if not self._base_url:
            raise ConfigurationError("API base URL is not configured", setting="API_BASE_URL")
        self.token_provider = token_provider
        self._default_headers: Dict[str, str] = {
            "Content-Type": "application/json",
            **settings.DEFAULT_HEADERS,
            **(default_headers or {}),
        }
        self._client = httpx.AsyncClient(
            transport=transport,
            timeout=httpx.Timeout(timeout if timeout is not None else settings.HTTP_TIMEOUT),
            follow_redirects=True,
        )

    async def __aenter__(self) -> "ApiManager":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying connection pool"""
        await self._client.aclose()

    # ==================== URL / Auth ====================

    def build_url(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Resolve `endpoint` against the base URL and append query parameters"""
        url = httpx.URL(urljoin(self._base_url, endpoint))

        if params:
            query = {
                key: _query_value(value)
                for key, value in params.items()
                if value is not None
            }
            if query:
                url = url.copy_merge_params(query)

        return str(url)

    async def _get_token(self) -> Optional[str]:
        if self.token_provider is None:
            return None
        try:
            return await self.token_provider.get_token()
        except Exception as e:
            logger.warning(f"Token provider failed, sending request without token: {e}")
            return None

    # ==================== Response handling ====================

    async def _handle_response(self, response: httpx.Response, token: Optional[str]) -> Any:
        status = response.status_code

        if not response.is_success:
            fallback = f"HTTP error! status: {status}"
            try:
                error_data = response.json()
            except ValueError:
                error_data = {"message": fallback}

            message = message_text(error_data.get("message")) if isinstance(error_data, dict) else None

            if status == 401 and not token:
                raise ApiError(
                    "Authentication required",
                    status=status,
                    data=error_data,
                    expected=True,
                )

            raise ApiError(message or fallback, status=status, data=error_data)

        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            if not response.content:
                return {}
            return response.json()

        return response.text

    # ==================== Request ====================

    async def _request(
        self,
        method: str,
        endpoint: str,
        data: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        skip_error_handling: bool = False,
    ) -> Any:
        url = self.build_url(endpoint, params)
        token = await self._get_token()

        request_headers = dict(self._default_headers)
        if token:
            request_headers["Authorization"] = f"Bearer {token}"
        if headers:
            request_headers.update(headers)

        content = json.dumps(data) if data is not None else None

        start = time.perf_counter()
        try:
            response = await self._client.request(
                method,
                url,
                content=content,
                headers=request_headers,
            )
            logger.log_request(method, url, response.status_code, (time.perf_counter() - start) * 1000)
            return await self._handle_response(response, token)
        except ApiError:
            raise
        except (httpx.HTTPError, ValueError) as e:
            if skip_error_handling:
                raise
            logger.warning(f"HTTP {method} {url} failed: {type(e).__name__}: {e}")
            raise ApiError(str(e) or DEFAULT_ERROR_MESSAGE) from e

    # ==================== Verbs ====================

    async def get(
        self,
        endpoint: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        skip_error_handling: bool = False,
    ) -> Any:
        """GET request"""
        return await self._request(
            "GET", endpoint, params=params, headers=headers,
            skip_error_handling=skip_error_handling,
        )

    async def post(
        self,
        endpoint: str,
        data: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        skip_error_handling: bool = False,
    ) -> Any:
        """POST request"""
        return await self._request(
            "POST", endpoint, data=data, params=params, headers=headers,
            skip_error_handling=skip_error_handling,
        )

    async def put(
        self,
        endpoint: str,
        data: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        skip_error_handling: bool = False,
    ) -> Any:
        """PUT request"""
        return await self._request(
            "PUT", endpoint, data=data, params=params, headers=headers,
            skip_error_handling=skip_error_handling,
        )

    async def patch(
        self,
        endpoint: str,
        data: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        skip_error_handling: bool = False,
    ) -> Any:
        """PATCH request"""
        return await self._request(
            "PATCH", endpoint, data=data, params=params, headers=headers,
            skip_error_handling=skip_error_handling,
        )

    async def delete(
        self,
        endpoint: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        skip_error_handling: bool = False,
    ) -> Any:
        """DELETE request"""
        return await self._request(
            "DELETE", endpoint, params=params, headers=headers,
            skip_error_handling=skip_error_handling,
        )

    # ==================== Accessors ====================

    def set_default_headers(self, headers: Mapping[str, str]) -> None:
        """Merge `headers` into the headers sent with every request"""
        self._default_headers = {**self._default_headers, **headers}

    def get_default_headers(self) -> Dict[str, str]:
        return dict(self._default_headers)

    def get_base_url(self) -> str:
        return self._base_url

    def set_base_url(self, base_url: str) -> None:
        self._base_url = base_url
