"""Declared authorization input: validation, manifests and planning."""

from azdo_authz.declarative.loader import load_manifest
from azdo_authz.declarative.models import (
    FORCE_NEW_FIELDS,
    SUPPORTED_RESOURCE_TYPES,
    AuthorizationConfig,
    ManifestConfig,
    record_from_config,
    record_from_state,
    requires_replacement,
)

__all__ = [
    "AuthorizationConfig",
    "FORCE_NEW_FIELDS",
    "ManifestConfig",
    "SUPPORTED_RESOURCE_TYPES",
    "load_manifest",
    "record_from_config",
    "record_from_state",
    "requires_replacement",
]
