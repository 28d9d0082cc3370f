"""Storage adapter: the remote versions endpoint over HTTP.

Fetch reads `versions/latest`, persist posts the whole document to
`versions/update`. Responses may come wrapped in a `{"data": ...}` envelope.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.environment import Environment
from core.domain.models import VersionedConfig
from core.errors import StorageError
from core.interfaces.storage import VersionsStorage

logger = logging.getLogger(__name__)


def _unwrap(payload: Any) -> Any:
    if isinstance(payload, dict) and "data" in payload and "sdkVersions" not in payload:
        return payload["data"]
    return payload


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()[:500]
    errors = body.get("errors") if isinstance(body, dict) else None
    if isinstance(errors, list) and errors:
        messages = [str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors]
        return "; ".join(messages)
    return str(body)[:500]


class VersionsApiStorage(VersionsStorage):
    """`VersionsStorage` backed by the versions API of one environment."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        environment: Environment = Environment.STAGING,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._environment = environment
        self._transport = transport

    @property
    def host(self) -> str:
        return self._settings.host_for(self._environment)

    @property
    def inspect_url(self) -> str:
        return self._settings.versions_url_for(self._environment)

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        base_url = self._settings.base_url_for(self._environment)
        logger.debug("%s %s/%s", method, base_url, path)
        try:
            with build_client(self._settings, base_url=base_url, transport=self._transport) as client:
                response = client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise StorageError(f"{method} {path} failed: {exc}") from exc

        if response.is_error:
            raise StorageError(f"{method} {path} returned HTTP {response.status_code}: {_error_detail(response)}")
        try:
            return response.json()
        except ValueError as exc:
            raise StorageError(f"{method} {path} returned a non-JSON body.") from exc

    def fetch(self) -> VersionedConfig:
        payload = _unwrap(self._request("GET", "versions/latest"))
        if not isinstance(payload, dict):
            raise StorageError("Versions endpoint returned an unexpected payload.")
        try:
            return VersionedConfig.model_validate(payload)
        except PydanticValidationError as exc:
            raise StorageError(f"Versions endpoint returned an invalid document: {exc}") from exc

    def persist(self, config: VersionedConfig) -> None:
        self._request("POST", "versions/update", json={"versions": config.to_payload()})
        logger.debug("persisted versions config to %s", self.host)
