"""
OSS V1 request signer.

Implements the OSS header/query signing convention:

    StringToSign = VERB + "\\n"
                 + Content-MD5 + "\\n"
                 + Content-Type + "\\n"
                 + Expires + "\\n"
                 + CanonicalizedOSSHeaders
                 + CanonicalizedResource

    Signature = base64(HMAC-SHA1(AccessKeySecret, StringToSign))

Each canonicalized x-oss- header line ends with "\\n", so the resource follows
the last header line (or the Expires line when there are none) directly.
"""
from __future__ import annotations

import base64
import hashlib
import hmac
import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple

from ..errors import InvalidArgument, MissingCredentials
from ..headers import OSS_HEADER_PREFIX, HeaderPairs, check_header_text, normalize_header_pairs
from ..settings import Settings
from ..types import HttpMethod
from .base import SignRequest, SignResult

__all__ = ["HmacSha1Signer", "SIGNABLE_SUBRESOURCES", "canonical_resource", "canonical_oss_headers"]

logger = logging.getLogger(__name__)

# Query parameters that are part of the canonical resource when present
SIGNABLE_SUBRESOURCES = frozenset([
    "acl", "append", "bucketInfo", "callback", "callback-var", "comp", "cors",
    "delete", "endTime", "group", "lifecycle", "link", "live", "location",
    "logging", "objectInfo", "objectMeta", "partNumber", "policy", "position",
    "referer", "restore", "security-token", "startTime", "status", "symlink",
    "tagging", "uploadId", "uploads", "versionId", "versioning", "versions",
    "vod", "website", "x-oss-process", "x-oss-traffic-limit",
    "response-cache-control", "response-content-disposition",
    "response-content-encoding", "response-content-language",
    "response-content-type", "response-expires",
])


def _header_pairs(headers: Any) -> HeaderPairs:
    if isinstance(headers, Mapping):
        headers = [(str(k), v) for k, v in headers.items()]
    return normalize_header_pairs(headers)


def _header_value(pairs: HeaderPairs, name: str) -> str:
    """Case-insensitive lookup of a fixed header; absent headers are empty."""
    wanted = name.lower()
    for key, value in pairs:
        if key.lower() == wanted:
            return value.strip()
    return ""


def canonical_oss_headers(pairs: HeaderPairs) -> str:
    """
    Render x-oss- headers as sorted ``name:value\\n`` lines.

    Names are lowercased and values stripped. Headers outside the x-oss-
    prefix are not signed.

    Raises:
        InvalidArgument: If the same x-oss- header appears twice
    """
    selected: Dict[str, str] = {}
    for key, value in pairs:
        lowered = key.strip().lower()
        if not lowered.startswith(OSS_HEADER_PREFIX):
            continue
        if lowered in selected:
            raise InvalidArgument(f"Duplicate signed header: {lowered}")
        selected[lowered] = value.strip()

    return "".join(f"{name}:{selected[name]}\n" for name in sorted(selected))


def canonical_resource(
    bucket: Optional[str],
    object_key: str,
    subresources: Optional[Mapping[str, Optional[str]]] = None,
) -> str:
    """
    Build the canonicalized resource.

    ``/bucket/key`` for objects, ``/bucket/`` for bucket-level requests and
    ``/`` for bucket-less global requests. Signable sub-resources are appended
    sorted by name; a None value renders the bare name.
    """
    if bucket:
        resource = f"/{bucket}/{object_key}"
    else:
        resource = "/"

    params: List[Tuple[str, Optional[str]]] = sorted(
        (k, v) for k, v in (subresources or {}).items() if k in SIGNABLE_SUBRESOURCES
    )
    if params:
        resource += "?" + "&".join(k if v is None else f"{k}={v}" for k, v in params)
    return resource


class HmacSha1Signer:
    """
    Signer using HMAC-SHA1 with the configured access key secret.

    Stateless apart from the immutable credentials it is constructed with, so
    one instance can be shared across threads.
    """

    def __init__(self, settings: Settings) -> None:
        """
        Initialize signer with settings.

        Raises:
            MissingCredentials: If access key id or secret is not configured
        """
        if not settings.access_key_id:
            raise MissingCredentials("OSS access key id not configured: set OSS_ACCESS_KEY_ID")
        if not settings.access_key_secret:
            raise MissingCredentials("OSS access key secret not configured: set OSS_ACCESS_KEY_SECRET")

        self._access_key_id = settings.access_key_id
        self._secret = settings.access_key_secret.encode("utf-8")
        logger.debug(f"HMAC-SHA1 signer initialized for access key {self._access_key_id}")

    @property
    def access_key_id(self) -> str:
        return self._access_key_id

    def string_to_sign(self, request: SignRequest) -> str:
        """Compute the canonical string to sign for ``request``."""
        method = HttpMethod.parse(request.http_method)
        pairs = _header_pairs(request.headers)

        for key, value in (request.subresources or {}).items():
            if value is not None:
                check_header_text(key, str(value))

        if request.resource_override is not None:
            resource = request.resource_override
        else:
            resource = canonical_resource(request.bucket, request.object_key, request.subresources)

        return (
            f"{method.value}\n"
            f"{_header_value(pairs, 'Content-MD5')}\n"
            f"{_header_value(pairs, 'Content-Type')}\n"
            f"{request.expires}\n"
            f"{canonical_oss_headers(pairs)}"
            f"{resource}"
        )

    def sign(self, request: SignRequest) -> SignResult:
        text = self.string_to_sign(request)
        # The string to sign may embed an STS token; never log it
        method = HttpMethod.parse(request.http_method).value
        logger.debug(f"Signing {method} request for {request.bucket}/{request.object_key}")
        return SignResult(signature=self.sign_text(text), string_to_sign=text)

    def sign_text(self, text: str) -> str:
        digest = hmac.new(self._secret, text.encode("utf-8"), hashlib.sha1).digest()
        return base64.b64encode(digest).decode("ascii")
