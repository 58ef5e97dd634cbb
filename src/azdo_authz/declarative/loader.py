"""Manifest loader for declared authorizations."""

from __future__ import annotations

from pathlib import Path

import pydantic
import yaml

from azdo_authz.declarative.models import ManifestConfig
from azdo_authz.domain.models import AuthorizationRecord
from azdo_authz.errors import ValidationError


def load_manifest(path: str | Path) -> list[AuthorizationRecord]:
    manifest_path = Path(path)
    if not manifest_path.exists():
        raise FileNotFoundError(f"Manifest file not found: {manifest_path}")
    with manifest_path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ValidationError(f"Invalid manifest {manifest_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValidationError(f"Manifest {manifest_path} must be a mapping")
    try:
        manifest = ManifestConfig.model_validate(data)
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Invalid manifest {manifest_path}: {exc}") from exc
    return manifest.to_records()
