"""Reconcile Azure DevOps pipeline resource authorizations."""

from azdo_authz.domain.models import AuthorizationRecord, RemoteResourceReference
from azdo_authz.errors import (
    AuthorizationError,
    InvariantViolation,
    RemoteOperationError,
    ValidationError,
)
from azdo_authz.reconciler import (
    ReconcileResult,
    ResourceAuthorizationReconciler,
    StateAction,
    create,
    delete,
    read,
    update,
)
from azdo_authz.translator import to_local, to_remote

__version__ = "0.1.0"

__all__ = [
    "AuthorizationError",
    "AuthorizationRecord",
    "InvariantViolation",
    "ReconcileResult",
    "RemoteOperationError",
    "RemoteResourceReference",
    "ResourceAuthorizationReconciler",
    "StateAction",
    "ValidationError",
    "__version__",
    "create",
    "delete",
    "read",
    "to_local",
    "to_remote",
    "update",
]
