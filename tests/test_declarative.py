from __future__ import annotations

from pathlib import Path

import pytest

from azdo_authz.declarative import (
    load_manifest,
    record_from_config,
    record_from_state,
    requires_replacement,
)
from azdo_authz.domain.models import AuthorizationRecord
from azdo_authz.errors import ValidationError
from azdo_authz.reconciler import ReconcileResult, StateAction

ENDPOINT_ID = "5b2a8c1e-0f3d-4e6a-9b7c-2d1e0f9a8b7c"


def test_record_from_config_defaults_type() -> None:
    record = record_from_config(
        {"project_id": "proj", "resource_id": ENDPOINT_ID, "authorized": True}
    )

    assert record == AuthorizationRecord("proj", ENDPOINT_ID, "endpoint", True)


def test_record_from_config_accepts_false() -> None:
    record = record_from_config(
        {"project_id": "proj", "resource_id": ENDPOINT_ID, "type": "endpoint", "authorized": False}
    )

    assert record.authorized is False


@pytest.mark.parametrize(
    ("data", "fragment"),
    [
        ({"project_id": "", "resource_id": ENDPOINT_ID, "authorized": True}, "project_id"),
        ({"project_id": "proj", "resource_id": "  ", "authorized": True}, "resource_id"),
        ({"project_id": "proj", "resource_id": ENDPOINT_ID}, "authorized"),
        (
            {"project_id": "proj", "resource_id": ENDPOINT_ID, "type": "queue", "authorized": True},
            "type must be one of",
        ),
        (
            {"project_id": "proj", "resource_id": ENDPOINT_ID, "authorized": True, "extra": 1},
            "extra",
        ),
    ],
)
def test_record_from_config_rejects_invalid(data: dict, fragment: str) -> None:
    with pytest.raises(ValidationError, match=fragment):
        record_from_config(data)


def test_requires_replacement_only_for_identity_fields() -> None:
    base = AuthorizationRecord("proj", ENDPOINT_ID, "endpoint", True)

    assert requires_replacement(base, base.with_authorized(False)) is False
    assert requires_replacement(base, AuthorizationRecord("other", ENDPOINT_ID)) is True
    assert requires_replacement(base, AuthorizationRecord("proj", "other-endpoint")) is True


def test_record_from_state_reads_applied_state() -> None:
    record = AuthorizationRecord("proj", ENDPOINT_ID, "endpoint", False)
    state: dict[str, object] = {}
    ReconcileResult(StateAction.SET, record).apply(state)

    assert record_from_state(state) == record


def test_record_from_state_empty_is_none() -> None:
    assert record_from_state({}) is None


def test_record_from_state_import_by_id() -> None:
    record = record_from_state({"id": ENDPOINT_ID, "project_id": "proj"})

    assert record == AuthorizationRecord("proj", ENDPOINT_ID, "endpoint", False)


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "authorizations.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_manifest(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        f"""
version: 1
authorizations:
  - project_id: proj
    resource_id: {ENDPOINT_ID}
    authorized: true
  - project_id: proj
    resource_id: other-endpoint
    type: endpoint
    authorized: false
""",
    )

    records = load_manifest(path)

    assert records == [
        AuthorizationRecord("proj", ENDPOINT_ID, "endpoint", True),
        AuthorizationRecord("proj", "other-endpoint", "endpoint", False),
    ]


def test_load_manifest_empty_file(tmp_path: Path) -> None:
    assert load_manifest(_write(tmp_path, "")) == []


def test_load_manifest_null_authorizations(tmp_path: Path) -> None:
    assert load_manifest(_write(tmp_path, "authorizations:\n")) == []


def test_load_manifest_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Manifest file not found"):
        load_manifest(tmp_path / "missing.yaml")


def test_load_manifest_rejects_duplicate_triples(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        f"""
authorizations:
  - {{project_id: proj, resource_id: {ENDPOINT_ID}, authorized: true}}
  - {{project_id: proj, resource_id: {ENDPOINT_ID}, authorized: false}}
""",
    )

    with pytest.raises(ValidationError, match="Duplicate authorization"):
        load_manifest(path)


def test_load_manifest_rejects_non_mapping(tmp_path: Path) -> None:
    with pytest.raises(ValidationError, match="must be a mapping"):
        load_manifest(_write(tmp_path, "- just\n- a list\n"))


def test_load_manifest_wraps_schema_errors(tmp_path: Path) -> None:
    path = _write(tmp_path, "authorizations:\n  - project_id: proj\n")

    with pytest.raises(ValidationError, match="Invalid manifest"):
        load_manifest(path)


@pytest.mark.parametrize("value", ["false", "true", 0, None])
def test_record_from_state_rejects_non_boolean_flag(value: object) -> None:
    state = {"id": ENDPOINT_ID, "project_id": "proj", "authorized": value}

    with pytest.raises(ValidationError, match="authorized must be a boolean"):
        record_from_state(state)


def test_load_manifest_wraps_yaml_errors(tmp_path: Path) -> None:
    path = _write(tmp_path, "authorizations: [\n  - project_id: proj\n")

    with pytest.raises(ValidationError, match="Invalid manifest"):
        load_manifest(path)
