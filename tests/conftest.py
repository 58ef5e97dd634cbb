from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from azdo_authz import config
from azdo_authz.domain.models import AuthorizationRecord, RemoteResourceReference

PROJECT_ID = "projectid"
ENDPOINT_ID = "5b2a8c1e-0f3d-4e6a-9b7c-2d1e0f9a8b7c"


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    config._load_settings_cached.cache_clear()
    yield
    config._load_settings_cached.cache_clear()


@pytest.fixture
def authorized_record() -> AuthorizationRecord:
    return AuthorizationRecord(
        project_id=PROJECT_ID,
        resource_id=ENDPOINT_ID,
        resource_type="endpoint",
        authorized=True,
    )


@pytest.fixture
def authorized_reference() -> RemoteResourceReference:
    return RemoteResourceReference(id=ENDPOINT_ID, type="endpoint", authorized=True)


@pytest.fixture
def not_authorized_reference() -> RemoteResourceReference:
    return RemoteResourceReference(id=ENDPOINT_ID, type="endpoint", authorized=False)


@pytest.fixture
def build_client() -> AsyncMock:
    client = AsyncMock()
    client.set_authorization.return_value = []
    client.list_resources.return_value = []
    return client
