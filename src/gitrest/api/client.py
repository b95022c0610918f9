"""Async HTTP transport for the Git REST API."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Mapping
from urllib.parse import unquote_plus

import httpx

from gitrest.api.exceptions import (
    ConflictError,
    GitAPIError,
    NotFoundError,
    RateLimitedError,
    UnauthorizedError,
    ValidationError,
)
from gitrest.api.models import GitModel
from gitrest.api.routing import MediaType, RequestSpec

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

CONNECTION_DATA_PATH = "_apis/connectiondata"
SERVICE_ERROR_HEADER = "X-TFS-ServiceError"
METHOD_OVERRIDE_HEADER = "X-HTTP-Method-Override"

# Sent as POST with an override header when method override is on
OVERRIDABLE_METHODS = frozenset({"PATCH", "PUT", "DELETE"})


def _encode_body(body: Any) -> Any:
    if isinstance(body, GitModel):
        return body.to_wire()
    if isinstance(body, (list, tuple)):
        return [_encode_body(b) for b in body]
    return body


def unwrap_list(data: Any) -> list:
    """Return the items of a ``{"count": n, "value": [...]}`` response."""
    if isinstance(data, list):
        return data
    if not data:
        return []
    return data.get("value") or []


def _parse_retry_after(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


class GitClient:
    """Async transport for a Git hosting collection.

    Uses a single long-lived httpx.AsyncClient to reuse TCP/TLS connections.
    The client is lazily initialized on first request.

    ``translated_exceptions`` maps the service's error ``typeKey`` to the
    exception class raised for it. It is copied into a read-only mapping at
    construction and consulted before the status-code mapping.

    With ``method_override`` on, PATCH, PUT and DELETE go out as POST with an
    ``X-HTTP-Method-Override`` header naming the real verb.
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        *,
        auth_scheme: str = "basic",
        timeout: float = DEFAULT_TIMEOUT,
        translated_exceptions: Mapping[str, type[GitAPIError]] | None = None,
        method_override: bool = True,
    ) -> None:
        if auth_scheme not in ("basic", "bearer"):
            raise ValueError(f"Unknown auth scheme: {auth_scheme}")
        self._base_url = base_url.rstrip("/") + "/"
        self._token = token
        self._auth_scheme = auth_scheme
        self._timeout = timeout
        self._method_override = method_override
        self._translated_exceptions: Mapping[str, type[GitAPIError]] = MappingProxyType(
            dict(translated_exceptions or {})
        )
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def method_override(self) -> bool:
        return self._method_override

    @property
    def translated_exceptions(self) -> Mapping[str, type[GitAPIError]]:
        return self._translated_exceptions

    def _auth(self) -> httpx.Auth | None:
        if not self._token or self._auth_scheme != "basic":
            return None
        return httpx.BasicAuth("", self._token)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            headers = {}
            if self._token and self._auth_scheme == "bearer":
                headers["Authorization"] = f"Bearer {self._token}"
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                auth=self._auth(),
                timeout=httpx.Timeout(self._timeout, connect=10.0),
            )
        return self._client

    def _headers(self, spec: RequestSpec) -> dict[str, str]:
        endpoint = spec.endpoint
        headers = {
            "Accept": f"{endpoint.response_media_type.value};api-version={endpoint.api_version}",
        }
        if spec.body is not None:
            media = endpoint.request_media_type or MediaType.JSON
            headers["Content-Type"] = media.value
        return headers

    async def execute(self, spec: RequestSpec) -> Any:
        """Send ``spec`` and decode the response for its media type.

        JSON responses decode to Python objects (``{}`` when empty), text to
        ``str`` and binary media types to ``bytes``.
        """
        client = self._get_client()
        params = list(spec.query) + [("api-version", spec.endpoint.api_version)]
        body = _encode_body(spec.body) if spec.body is not None else None
        method = spec.method
        headers = self._headers(spec)
        if self._method_override and method in OVERRIDABLE_METHODS:
            headers[METHOD_OVERRIDE_HEADER] = method
            method = "POST"
        logger.debug("%s %s%s", spec.method, self._base_url, spec.path)
        response = await client.request(
            method,
            spec.path,
            params=params,
            json=body,
            headers=headers,
        )
        logger.debug("%s %s -> %s", spec.method, spec.path, response.status_code)
        self._handle_errors(response)

        media = spec.endpoint.response_media_type
        if media is MediaType.TEXT:
            return response.text
        if media in (MediaType.OCTET_STREAM, MediaType.ZIP):
            return response.content
        if response.status_code == 204:
            return {}
        if not response.content:
            return {}
        return response.json()

    def _handle_errors(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        try:
            error_body = response.json()
        except Exception:
            error_body = None
        if not isinstance(error_body, dict):
            error_body = None

        status = response.status_code
        service_error = response.headers.get(SERVICE_ERROR_HEADER)
        if service_error:
            service_error = unquote_plus(service_error)
        message = service_error or (error_body or {}).get("message") or response.text
        type_key = (error_body or {}).get("typeKey")
        logger.warning("Request failed with %s: %s", status, type_key or message)

        translated = self._translated_exceptions.get(type_key) if type_key else None
        if translated is not None:
            raise translated(message, status_code=status, type_key=type_key)

        if status in (401, 403):
            raise UnauthorizedError(
                service_error or "Invalid or insufficient credentials",
                status_code=status,
                type_key=type_key,
            )
        if status == 404:
            raise NotFoundError(
                service_error or f"Resource not found: {response.url}",
                status_code=status,
                type_key=type_key,
            )
        if status == 400:
            raise ValidationError(
                error_body or {"error": response.text}, status_code=status, type_key=type_key
            )
        if status == 409:
            raise ConflictError(
                error_body or {"error": response.text}, status_code=status, type_key=type_key
            )
        if status == 429:
            raise RateLimitedError(
                service_error or "Rate limit exceeded",
                retry_after=_parse_retry_after(response.headers.get("Retry-After")),
                status_code=status,
                type_key=type_key,
            )
        raise GitAPIError(
            f"API error {status}: {message}", status_code=status, type_key=type_key
        )

    async def check_connection(self) -> bool:
        """Ask the collection for its connection data.

        Returns True when the service answers with a non-empty body. Failures,
        usually an expired or revoked token, are logged and return False.
        """
        client = self._get_client()
        try:
            response = await client.get(
                CONNECTION_DATA_PATH,
                headers={"Accept": MediaType.JSON.value},
                follow_redirects=True,
            )
        except httpx.HTTPError as exc:
            logger.error("Connection check failed: %s", exc)
            return False
        if not response.is_success:
            logger.error("Connection check failed with %s", response.status_code)
            return False
        return bool(response.content)

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> GitClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
