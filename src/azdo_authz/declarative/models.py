"""Declared authorization models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator

from azdo_authz.domain.models import DEFAULT_RESOURCE_TYPE, AuthorizationRecord
from azdo_authz.errors import ValidationError

SUPPORTED_RESOURCE_TYPES = frozenset({DEFAULT_RESOURCE_TYPE})

# Changing any of these means a different relationship, not an update.
FORCE_NEW_FIELDS = ("project_id", "resource_id", "resource_type")


def _ensure_list(v: Any) -> list:
    if v is None:
        return []
    return v


class AuthorizationConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    project_id: str = Field(min_length=1)
    resource_id: str = Field(min_length=1)
    resource_type: str = Field(default=DEFAULT_RESOURCE_TYPE, alias="type")
    authorized: bool

    @field_validator("project_id", "resource_id", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("resource_type")
    @classmethod
    def _validate_type(cls, v: str) -> str:
        if v not in SUPPORTED_RESOURCE_TYPES:
            allowed = ", ".join(sorted(SUPPORTED_RESOURCE_TYPES))
            raise ValueError(f"type must be one of: {allowed}")
        return v

    def to_record(self) -> AuthorizationRecord:
        return AuthorizationRecord(
            project_id=self.project_id,
            resource_id=self.resource_id,
            resource_type=self.resource_type,
            authorized=self.authorized,
        )


class ManifestConfig(BaseModel):
    version: int = Field(default=1)
    authorizations: list[AuthorizationConfig] = Field(default_factory=list)

    @field_validator("authorizations", mode="before")
    @classmethod
    def _validate_authorizations(cls, v: Any) -> list:
        return _ensure_list(v)

    def to_records(self) -> list[AuthorizationRecord]:
        records: list[AuthorizationRecord] = []
        seen: set[tuple[str, str, str]] = set()
        for entry in self.authorizations:
            record = entry.to_record()
            if record.identity in seen:
                project_id, resource_type, resource_id = record.identity
                raise ValidationError(
                    f"Duplicate authorization for {resource_type} {resource_id} "
                    f"in project {project_id}"
                )
            seen.add(record.identity)
            records.append(record)
        return records


def record_from_config(data: Mapping[str, Any]) -> AuthorizationRecord:
    """Validate one declared entry and convert it to a record."""
    try:
        config = AuthorizationConfig.model_validate(dict(data))
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Invalid authorization: {exc}") from exc
    return config.to_record()


def record_from_state(state: Mapping[str, Any]) -> AuthorizationRecord | None:
    """Rebuild a record from a flat state mapping.

    Accepts what ``ReconcileResult.apply`` writes. An empty mapping means
    nothing is managed and yields ``None``.
    """
    if not state:
        return None
    resource_id = state.get("resource_id") or state.get("id")
    authorized = state.get("authorized", False)
    if not isinstance(authorized, bool):
        raise ValidationError(f"authorized must be a boolean, got {authorized!r}")
    return AuthorizationRecord(
        project_id=state.get("project_id") or "",
        resource_id=resource_id or "",
        resource_type=state.get("type") or DEFAULT_RESOURCE_TYPE,
        authorized=authorized,
    )


def requires_replacement(old: AuthorizationRecord, new: AuthorizationRecord) -> bool:
    return any(getattr(old, name) != getattr(new, name) for name in FORCE_NEW_FIELDS)
