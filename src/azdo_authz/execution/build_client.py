"""Azure DevOps build client for authorized resources."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol
from urllib.parse import quote

import httpx

from azdo_authz.config import Settings, load_settings
from azdo_authz.domain.models import RemoteResourceReference

logger = logging.getLogger(__name__)

_AUTHORIZED_RESOURCES_PATH = "_apis/build/authorizedresources"


class BuildClient(Protocol):
    """Remote operations the reconciler depends on."""

    async def set_authorization(
        self,
        project_id: str,
        resources: Sequence[RemoteResourceReference],
    ) -> list[RemoteResourceReference]: ...

    async def list_resources(
        self,
        project_id: str,
        resource_type: str,
        resource_id: str | None = None,
    ) -> list[RemoteResourceReference]: ...


class AzureDevOpsApiError(Exception):
    """Non-success response from the Azure DevOps REST API."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text.strip() or response.reason_phrase


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    raise AzureDevOpsApiError(response.status_code, _error_message(response))


def _parse_references(payload: Any) -> list[RemoteResourceReference]:
    # List responses wrap entries as {"count": n, "value": [...]}.
    if isinstance(payload, dict):
        payload = payload.get("value") or []
    if not isinstance(payload, list):
        return []
    return [
        RemoteResourceReference.from_wire(item) for item in payload if isinstance(item, dict)
    ]


class HttpBuildClient:
    """Async client for the ``build/authorizedresources`` endpoints."""

    def __init__(
        self,
        org_url: str,
        personal_access_token: str,
        *,
        api_version: str = "5.1-preview.1",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            org_url: Organization URL (e.g. "https://dev.azure.com/contoso")
            personal_access_token: PAT with Build read & execute scope
            api_version: REST API version sent with every request
            timeout: HTTP request timeout in seconds
            transport: Optional httpx transport, mainly for tests
        """
        self.org_url = org_url.rstrip("/")
        self.api_version = api_version
        self._client = httpx.AsyncClient(
            auth=httpx.BasicAuth("", personal_access_token),
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def _url(self, project_id: str) -> str:
        return f"{self.org_url}/{quote(project_id, safe='')}/{_AUTHORIZED_RESOURCES_PATH}"

    async def set_authorization(
        self,
        project_id: str,
        resources: Sequence[RemoteResourceReference],
    ) -> list[RemoteResourceReference]:
        """Authorize or deauthorize resources via PATCH."""
        body = [resource.to_wire() for resource in resources]
        logger.debug("PATCH authorized resources project=%s count=%d", project_id, len(body))
        response = await self._client.patch(
            self._url(project_id),
            params={"api-version": self.api_version},
            json=body,
        )
        _raise_for_status(response)
        try:
            payload = response.json()
        except ValueError:
            # The flag is set once the service answers 2xx, whatever the body.
            logger.debug("Ignoring non-JSON body of successful PATCH for project %s", project_id)
            return []
        return _parse_references(payload)

    async def list_resources(
        self,
        project_id: str,
        resource_type: str,
        resource_id: str | None = None,
    ) -> list[RemoteResourceReference]:
        """List authorized resources of a type, optionally filtered by id."""
        params = {"api-version": self.api_version, "type": resource_type}
        if resource_id is not None:
            params["id"] = resource_id
        logger.debug(
            "GET authorized resources project=%s type=%s id=%s",
            project_id,
            resource_type,
            resource_id,
        )
        response = await self._client.get(self._url(project_id), params=params)
        _raise_for_status(response)
        return _parse_references(response.json())

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpBuildClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def build_client_from_settings(settings: Settings | None = None) -> HttpBuildClient:
    """Create an :class:`HttpBuildClient` from configured settings."""
    settings = settings or load_settings()
    azdo = settings.azure_devops
    if not azdo.org_service_url:
        raise RuntimeError("AZDO_ORG_SERVICE_URL is required to reach Azure DevOps")
    if not azdo.personal_access_token:
        raise RuntimeError("AZDO_PERSONAL_ACCESS_TOKEN is required to reach Azure DevOps")
    return HttpBuildClient(
        azdo.org_service_url,
        azdo.personal_access_token,
        api_version=azdo.api_version,
        timeout=azdo.timeout_seconds,
    )
