"""
Settings and configuration for alixir-oss.

Centralizes configuration values and provides validation with fail-fast behavior.
Settings are immutable and loaded once, either from environment variables or
from a YAML file, then passed explicitly to every builder.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

__all__ = ["Settings", "create_settings_from_env", "load_settings_file", "DEFAULT_ENDPOINT"]

DEFAULT_ENDPOINT = "oss-cn-hangzhou.aliyuncs.com"

# Methods the signer can sign at all; presign_methods must be a subset
SIGNABLE_METHODS = ("GET", "PUT", "POST", "DELETE", "HEAD")


@dataclass(frozen=True)
class Settings:
    """
    Configuration settings for OSS signing.

    Credentials:
        access_key_id: OSS access key id (sent in artifacts)
        access_key_secret: OSS access key secret (used for HMAC only, never sent)
        security_token: STS security token for temporary credentials

    Service:
        endpoint: Region endpoint host, without scheme (e.g. oss-cn-hangzhou.aliyuncs.com)

    Artifact defaults:
        presign_expires_s: Default lifetime of presigned URLs in seconds
        policy_ttl_s: Default lifetime of post policies in seconds
        presign_methods: HTTP methods allowed for presigned URLs
    """
    access_key_id: Optional[str] = None
    access_key_secret: Optional[str] = None
    endpoint: str = DEFAULT_ENDPOINT
    security_token: Optional[str] = None
    presign_expires_s: int = 3600
    policy_ttl_s: int = 3600
    presign_methods: Tuple[str, ...] = ("GET", "PUT", "HEAD")

    def __post_init__(self):
        """Validate settings on construction."""
        if not self.endpoint:
            raise ValueError("endpoint is required")

        if "://" in self.endpoint:
            raise ValueError(f"endpoint must not include a scheme: {self.endpoint}")

        host_pattern = r"^[a-zA-Z0-9.-]+(?::[0-9]+)?$"
        if not re.match(host_pattern, self.endpoint):
            raise ValueError(f"Invalid endpoint format: {self.endpoint}")

        if self.presign_expires_s <= 0:
            raise ValueError(f"presign_expires_s must be positive, got {self.presign_expires_s}")

        if self.policy_ttl_s <= 0:
            raise ValueError(f"policy_ttl_s must be positive, got {self.policy_ttl_s}")

        # Credentials may be absent entirely (signers report MissingCredentials),
        # but a half-configured pair is always a mistake
        if self.access_key_id and not self.access_key_secret:
            raise ValueError("access_key_id specified but access_key_secret is missing")
        if self.access_key_secret and not self.access_key_id:
            raise ValueError("access_key_secret specified but access_key_id is missing")

        methods = tuple(m.upper() for m in self.presign_methods)
        unknown = [m for m in methods if m not in SIGNABLE_METHODS]
        if unknown:
            raise ValueError(f"Unknown presign_methods {unknown}. Supported values: {', '.join(SIGNABLE_METHODS)}")
        object.__setattr__(self, "presign_methods", methods)

    @property
    def has_credentials(self) -> bool:
        return bool(self.access_key_id and self.access_key_secret)

    def redacted(self) -> Dict[str, Any]:
        """Return settings as a dict safe to print or log."""
        return {
            "access_key_id": self.access_key_id,
            "access_key_secret": "***" if self.access_key_secret else None,
            "endpoint": self.endpoint,
            "security_token": "***" if self.security_token else None,
            "presign_expires_s": self.presign_expires_s,
            "policy_ttl_s": self.policy_ttl_s,
            "presign_methods": list(self.presign_methods),
        }


# Environment variable -> Settings field
_ENV_FIELDS = {
    "OSS_ACCESS_KEY_ID": "access_key_id",
    "OSS_ACCESS_KEY_SECRET": "access_key_secret",
    "OSS_ENDPOINT": "endpoint",
    "OSS_SECURITY_TOKEN": "security_token",
    "OSS_PRESIGN_EXPIRES": "presign_expires_s",
    "OSS_POLICY_TTL": "policy_ttl_s",
    "OSS_PRESIGN_METHODS": "presign_methods",
}


def create_settings_from_env(base: Optional[Dict[str, Any]] = None) -> Settings:
    """
    Load settings from environment variables.

    Environment Variables:
        - OSS_ACCESS_KEY_ID (optional, required for signing)
        - OSS_ACCESS_KEY_SECRET (optional, required for signing)
        - OSS_ENDPOINT (default: oss-cn-hangzhou.aliyuncs.com)
        - OSS_SECURITY_TOKEN (optional)
        - OSS_PRESIGN_EXPIRES (default: 3600)
        - OSS_POLICY_TTL (default: 3600)
        - OSS_PRESIGN_METHODS (default: GET,PUT,HEAD)

    Args:
        base: Values (e.g. from a YAML file) that environment variables override

    Returns:
        Settings object with validated configuration

    Raises:
        ValueError: If configuration is invalid

    Note:
        Creates a fresh Settings instance every time (no caching).
    """
    values: Dict[str, Any] = dict(base or {})
    for env_name, field_name in _ENV_FIELDS.items():
        raw = os.getenv(env_name)
        if raw:
            values[field_name] = raw
    return _build_settings(values)


def load_settings_file(path: Path) -> Settings:
    """
    Load settings from a YAML file.

    The file holds the Settings field names as top-level keys. An optional
    ``oss:`` section is accepted as well.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file content is not a mapping or values are invalid
    """
    return _build_settings(read_settings_file(path))


def read_settings_file(path: Path) -> Dict[str, Any]:
    """Read raw settings values from a YAML file without validating them."""
    import yaml

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a mapping: {path}")

    if "oss" in data:
        data = data["oss"] or {}

    known = set(_ENV_FIELDS.values())
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown settings keys in {path}: {', '.join(unknown)}")
    return data


def _build_settings(values: Dict[str, Any]) -> Settings:
    """Coerce raw values (strings from env or YAML scalars) and build Settings."""
    def get_int(key: str, default: int) -> int:
        value = values.get(key)
        if value is None or value == "":
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValueError(f"{key} must be an integer, got {value!r}")

    methods = values.get("presign_methods")
    if methods is None:
        presign_methods: Tuple[str, ...] = ("GET", "PUT", "HEAD")
    elif isinstance(methods, str):
        presign_methods = tuple(m.strip() for m in methods.split(",") if m.strip())
    else:
        presign_methods = tuple(str(m) for m in methods)

    return Settings(
        access_key_id=values.get("access_key_id") or None,
        access_key_secret=values.get("access_key_secret") or None,
        endpoint=values.get("endpoint") or DEFAULT_ENDPOINT,
        security_token=values.get("security_token") or None,
        presign_expires_s=get_int("presign_expires_s", 3600),
        policy_ttl_s=get_int("policy_ttl_s", 3600),
        presign_methods=presign_methods,
    )
