"""Create/read/update/delete lifecycle for pipeline resource authorizations.

The build service has no insert or delete verb for this relationship. Both
directions go through ``set_authorization`` with the authorized flag set to
the desired value, and a read that finds no matching entry means the
relationship is gone.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from azdo_authz.domain.models import AuthorizationRecord
from azdo_authz.errors import InvariantViolation, RemoteOperationError
from azdo_authz.execution.build_client import BuildClient
from azdo_authz.translator import to_local, to_remote

logger = logging.getLogger(__name__)


class StateAction(str, Enum):
    SET = "set"
    REMOVE = "remove"


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of one lifecycle call.

    ``SET`` means ``record`` is the new local state. ``REMOVE`` means local
    state should be dropped; ``record`` is then the caller's record as it was
    passed in.
    """

    action: StateAction
    record: AuthorizationRecord

    @property
    def exists(self) -> bool:
        return self.action is StateAction.SET

    def apply(self, state: MutableMapping[str, Any]) -> None:
        """Write this outcome into a flat, mutable state mapping."""
        state.clear()
        if not self.exists:
            return
        state.update(
            {
                "id": self.record.state_id,
                "project_id": self.record.project_id,
                "resource_id": self.record.resource_id,
                "type": self.record.resource_type,
                "authorized": self.record.authorized,
            }
        )


async def _set_authorization(
    client: BuildClient,
    record: AuthorizationRecord,
    authorized: bool,
    verb: str,
) -> None:
    reference = to_remote(record.with_authorized(authorized))
    logger.info(
        "%s authorization project=%s type=%s resource=%s authorized=%s",
        verb,
        record.project_id,
        record.resource_type,
        record.resource_id,
        authorized,
    )
    try:
        await client.set_authorization(record.project_id, [reference])
    except Exception as exc:
        logger.warning(
            "%s authorization failed for resource %s in project %s: %s",
            verb,
            record.resource_id,
            record.project_id,
            exc,
        )
        raise RemoteOperationError(
            f"Error {verb.lower()} authorization for resource {record.resource_id} "
            f"in project {record.project_id}",
            exc,
        ) from exc


async def create(record: AuthorizationRecord, client: BuildClient) -> ReconcileResult:
    await _set_authorization(client, record, record.authorized, "Creating")
    return ReconcileResult(StateAction.SET, record)


async def update(record: AuthorizationRecord, client: BuildClient) -> ReconcileResult:
    await _set_authorization(client, record, record.authorized, "Updating")
    return ReconcileResult(StateAction.SET, record)


async def delete(record: AuthorizationRecord, client: BuildClient) -> ReconcileResult:
    await _set_authorization(client, record, False, "Deleting")
    return ReconcileResult(StateAction.REMOVE, record)


async def read(record: AuthorizationRecord, client: BuildClient) -> ReconcileResult:
    """Refresh ``record`` from the remote listing.

    The remote value of ``authorized`` always wins. No matching entry is a
    normal outcome (``StateAction.REMOVE``); more than one is an
    ``InvariantViolation``.
    """
    try:
        references = await client.list_resources(
            record.project_id,
            record.resource_type,
            record.resource_id,
        )
    except Exception as exc:
        logger.warning(
            "Reading authorization failed for resource %s in project %s: %s",
            record.resource_id,
            record.project_id,
            exc,
        )
        raise RemoteOperationError(
            f"Error reading authorization for resource {record.resource_id} "
            f"in project {record.project_id}",
            exc,
        ) from exc

    matches = [ref for ref in references if ref.id == record.resource_id]
    if not matches:
        logger.info(
            "Resource %s no longer listed for project %s",
            record.resource_id,
            record.project_id,
        )
        return ReconcileResult(StateAction.REMOVE, record)
    if len(matches) > 1:
        raise InvariantViolation(
            f"Found {len(matches)} authorization entries for resource "
            f"{record.resource_id} of type {record.resource_type} "
            f"in project {record.project_id}"
        )

    refreshed = to_local(matches[0], record.project_id, resource_type=record.resource_type)
    return ReconcileResult(StateAction.SET, refreshed)


class ResourceAuthorizationReconciler:
    """Lifecycle operations bound to one build client."""

    def __init__(self, client: BuildClient) -> None:
        self.client = client

    async def create(self, record: AuthorizationRecord) -> ReconcileResult:
        return await create(record, self.client)

    async def read(self, record: AuthorizationRecord) -> ReconcileResult:
        return await read(record, self.client)

    async def update(self, record: AuthorizationRecord) -> ReconcileResult:
        return await update(record, self.client)

    async def delete(self, record: AuthorizationRecord) -> ReconcileResult:
        return await delete(record, self.client)
