"""Shared HTTP utilities."""

from __future__ import annotations

from urllib.parse import urlparse

_ORG_URL_ALLOWED_SCHEMES = frozenset({"http", "https"})


def normalize_org_url(value: str) -> str:
    """Normalize and validate an Azure DevOps organization URL."""
    candidate = value.strip()
    if not candidate:
        raise ValueError("org_service_url must not be empty")

    parsed = urlparse(candidate)
    if parsed.scheme.lower() not in _ORG_URL_ALLOWED_SCHEMES:
        raise ValueError("org_service_url must use http or https")
    if not parsed.netloc:
        raise ValueError("org_service_url must include host")
    if parsed.query or parsed.fragment:
        raise ValueError("org_service_url must not include query or fragment")
    if parsed.username or parsed.password:
        raise ValueError("org_service_url must not include userinfo")

    normalized_path = parsed.path.rstrip("/")
    return f"{parsed.scheme.lower()}://{parsed.netloc}{normalized_path}"
