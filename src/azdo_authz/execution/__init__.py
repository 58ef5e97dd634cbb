"""Remote build service clients."""

from azdo_authz.execution.build_client import (
    AzureDevOpsApiError,
    BuildClient,
    HttpBuildClient,
    build_client_from_settings,
)

__all__ = [
    "AzureDevOpsApiError",
    "BuildClient",
    "HttpBuildClient",
    "build_client_from_settings",
]
