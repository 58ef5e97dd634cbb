"""Mapping between declared records and remote resource references."""

from __future__ import annotations

from azdo_authz.domain.models import AuthorizationRecord, RemoteResourceReference
from azdo_authz.errors import ValidationError


def to_remote(record: AuthorizationRecord) -> RemoteResourceReference:
    return RemoteResourceReference(
        id=record.resource_id,
        type=record.resource_type,
        authorized=record.authorized,
    )


def to_local(
    reference: RemoteResourceReference,
    project_id: str,
    *,
    resource_type: str | None = None,
) -> AuthorizationRecord:
    """Build a record from a remote reference.

    ``resource_type`` is only used when the reference carries no type of its
    own. An absent ``authorized`` flag reads as ``False``.

    Raises ``ValidationError`` when the reference has no id.
    """
    if not reference.id:
        raise ValidationError("Resource reference has no id")

    kind = reference.type if reference.type is not None else resource_type
    if kind is None:
        raise ValidationError(f"Resource reference {reference.id} has no type")

    return AuthorizationRecord(
        project_id=project_id,
        resource_id=reference.id,
        resource_type=kind,
        authorized=bool(reference.authorized),
    )
