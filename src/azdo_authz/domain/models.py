"""Domain objects for pipeline resource authorizations."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from pydantic import BaseModel, ConfigDict

from azdo_authz.errors import ValidationError

DEFAULT_RESOURCE_TYPE = "endpoint"


@dataclass(frozen=True)
class AuthorizationRecord:
    """Declared authorization of one resource for one project's pipelines."""

    project_id: str
    resource_id: str
    resource_type: str = DEFAULT_RESOURCE_TYPE
    authorized: bool = True

    def __post_init__(self) -> None:
        if not self.project_id:
            raise ValidationError("project_id must not be empty")
        if not self.resource_id:
            raise ValidationError("resource_id must not be empty")

    @property
    def identity(self) -> tuple[str, str, str]:
        return (self.project_id, self.resource_type, self.resource_id)

    @property
    def state_id(self) -> str:
        # The local state id doubles as the resource id.
        return self.resource_id

    def with_authorized(self, authorized: bool) -> AuthorizationRecord:
        return replace(self, authorized=authorized)


class RemoteResourceReference(BaseModel):
    """Wire shape of a definition resource reference.

    Every field is optional on the wire. ``name`` is display metadata the
    service may return; it never flows into an :class:`AuthorizationRecord`.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str | None = None
    type: str | None = None
    authorized: bool | None = None
    name: str | None = None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> RemoteResourceReference:
        return cls.model_validate(data)
