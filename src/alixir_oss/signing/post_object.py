"""
Post object form data for direct-from-browser uploads.

Builds a signed policy document constraining what a browser may upload
(bucket, key or key prefix, size bounds, expiry) and returns the multipart
form fields the browser sends alongside the file.
"""
from __future__ import annotations

import base64
import json
import logging
import time
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ExpirationInPast, InvalidArgument, InvalidCondition
from ..settings import Settings
from ..types import FileObject
from .base import Signer
from .callback import Callback
from .options import Expiry, coerce_options, resolve_expiry
from .signer import HmacSha1Signer

__all__ = [
    "PolicyOptions",
    "PolicyDocument",
    "PostObjectDataBuilder",
    "post_object_data",
    "validate_condition",
]

logger = logging.getLogger(__name__)

CONTENT_LENGTH_RANGE = "content-length-range"

# Condition values are embedded in the JSON policy as scalars
_SCALAR_TYPES = (str, int, float, bool, type(None))


class PolicyOptions(BaseModel):
    """Per-call options for post policies."""
    model_config = ConfigDict(frozen=True)

    expires: Optional[Expiry] = Field(default=None, description="TTL seconds, timedelta, or absolute datetime")
    key_prefix: Optional[str] = Field(default=None, description="Allow any key starting with this prefix")
    content_length_range: Optional[Tuple[Any, ...]] = Field(default=None, description="Inclusive (min, max) upload size in bytes")
    extra_conditions: Tuple[Any, ...] = Field(default=(), description="Additional policy conditions, appended in order")
    callback: Optional[Callback] = Field(default=None, description="Upload callback sent as the callback form field")
    success_action_status: Optional[int] = Field(default=None, description="Status the service returns on success")


class PolicyDocument(BaseModel):
    """Post policy: expiration plus ordered conditions."""
    expiration: str = Field(..., description="ISO-8601 UTC timestamp, e.g. 2024-01-01T00:00:00.000Z")
    conditions: List[Any] = Field(default_factory=list, description="Ordered condition clauses")

    def to_json(self) -> str:
        """Canonical compact JSON; key order is expiration, conditions."""
        return json.dumps(
            {"expiration": self.expiration, "conditions": self.conditions},
            separators=(",", ":"),
            ensure_ascii=False,
        )

    def encode(self) -> str:
        """base64 of the canonical JSON, used as the ``policy`` form field."""
        return base64.b64encode(self.to_json().encode("utf-8")).decode("ascii")


def format_expiration(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z")


def _length_range(minimum: Any, maximum: Any) -> List[Any]:
    for bound in (minimum, maximum):
        if isinstance(bound, bool) or not isinstance(bound, int):
            raise InvalidCondition(f"{CONTENT_LENGTH_RANGE} bounds must be integers, got {bound!r}")
        if bound < 0:
            raise InvalidCondition(f"{CONTENT_LENGTH_RANGE} bounds must be non-negative, got {bound}")
    if minimum > maximum:
        raise InvalidCondition(f"{CONTENT_LENGTH_RANGE} minimum {minimum} exceeds maximum {maximum}")
    return [CONTENT_LENGTH_RANGE, minimum, maximum]


def _check_value(value: Any) -> Any:
    if not isinstance(value, _SCALAR_TYPES):
        raise InvalidCondition(
            f"condition value must be a string, number, boolean or null, got {type(value).__name__}"
        )
    return value


def validate_condition(clause: Any) -> Any:
    """
    Validate one caller-supplied condition and return its JSON form.

    Accepted shapes:
    - exact match: a single-entry mapping, e.g. ``{"x-oss-meta-uid": "42"}``
    - three-element clause: ``[op, "$field", value]`` or
      ``["content-length-range", min, max]``

    Raises:
        InvalidCondition: For any other shape, or a value that is not a JSON
            scalar
    """
    if isinstance(clause, Mapping):
        if len(clause) != 1:
            raise InvalidCondition(f"exact-match condition must have exactly one entry, got {len(clause)}")
        (name, value), = clause.items()
        if not isinstance(name, str) or not name:
            raise InvalidCondition(f"exact-match condition name must be a non-empty string, got {name!r}")
        return {name: _check_value(value)}

    if isinstance(clause, (list, tuple)):
        if len(clause) != 3:
            raise InvalidCondition(f"condition clause must have 3 elements, got {len(clause)}: {list(clause)!r}")
        op, first, second = clause
        if not isinstance(op, str) or not op:
            raise InvalidCondition(f"condition operator must be a non-empty string, got {op!r}")
        if op.lower() == CONTENT_LENGTH_RANGE:
            return _length_range(first, second)
        if not isinstance(first, str):
            raise InvalidCondition(f"condition field must be a string, got {first!r}")
        return [op, first, _check_value(second)]

    raise InvalidCondition(f"condition must be a mapping or a 3-element list, got {type(clause).__name__}")


class PostObjectDataBuilder:
    """
    Builds post-object form fields from settings and a signer.

    Holds no mutable state; the clock is injectable for deterministic tests.
    """

    def __init__(
        self,
        settings: Settings,
        signer: Optional[Signer] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._settings = settings
        self._signer = signer if signer is not None else HmacSha1Signer(settings)
        self._clock = clock

    def policy(self, file_object: FileObject, options: PolicyOptions) -> PolicyDocument:
        """
        Build the policy document for ``file_object``.

        Raises:
            ExpirationInPast: If the expiration is not after the current time
            InvalidCondition: If a condition is malformed
            InvalidArgument: If object_key does not start with key_prefix
        """
        now = self._clock()
        expires_at = resolve_expiry(options.expires, self._settings.policy_ttl_s, now)
        if expires_at <= now:
            raise ExpirationInPast(
                f"Policy expiration {format_expiration(expires_at)} is not after the current time"
            )

        conditions: List[Any] = [{"bucket": file_object.bucket}]

        if options.key_prefix is not None:
            if not file_object.object_key.startswith(options.key_prefix):
                raise InvalidArgument(
                    f"object_key {file_object.object_key!r} does not start with key_prefix {options.key_prefix!r}"
                )
            conditions.append(["starts-with", "$key", options.key_prefix])
        else:
            conditions.append({"key": file_object.object_key})

        if options.content_length_range is not None:
            length_range = options.content_length_range
            if len(length_range) != 2:
                raise InvalidCondition(
                    f"{CONTENT_LENGTH_RANGE} must be a (min, max) pair, got {list(length_range)!r}"
                )
            conditions.append(_length_range(*length_range))

        conditions.extend(validate_condition(c) for c in options.extra_conditions)

        if options.success_action_status is not None:
            conditions.append({"success_action_status": str(options.success_action_status)})

        return PolicyDocument(expiration=format_expiration(expires_at), conditions=conditions)

    def build(self, file_object: FileObject, options: Any = None) -> Dict[str, str]:
        """
        Build post-object form fields.

        Args:
            file_object: Target bucket and key (the key may contain ``${filename}``)
            options: PolicyOptions or an equivalent mapping

        Returns:
            Mapping of form field name to value: OSSAccessKeyId, policy,
            signature, key, and optionally callback, success_action_status,
            x-oss-security-token
        """
        opts: PolicyOptions = coerce_options(PolicyOptions, options)
        document = self.policy(file_object, opts)
        encoded_policy = document.encode()

        fields = {
            "OSSAccessKeyId": self._signer.access_key_id,
            "policy": encoded_policy,
            "signature": self._signer.sign_text(encoded_policy),
            "key": file_object.object_key,
        }
        if opts.callback is not None:
            fields["callback"] = opts.callback.encode()
        if opts.success_action_status is not None:
            fields["success_action_status"] = str(opts.success_action_status)
        if self._settings.security_token:
            fields["x-oss-security-token"] = self._settings.security_token

        logger.debug(
            f"Post policy for {file_object.bucket}/{file_object.object_key} "
            f"with {len(document.conditions)} conditions, expiring {document.expiration}"
        )
        return fields


def post_object_data(
    file_object: FileObject,
    policy_options: Any = None,
    *,
    settings: Optional[Settings] = None,
) -> Dict[str, str]:
    """
    Generate form data for a direct HTML-form upload to OSS.

    Settings are loaded from the environment when not given.
    """
    if settings is None:
        from ..settings import create_settings_from_env
        settings = create_settings_from_env()
    return PostObjectDataBuilder(settings).build(file_object, policy_options)
