"""
Value types for OSS operations.

FileObject identifies a target object. Operations are intention records
consumed once by an external executor, which issues the HTTP request and
reports status back. There is one Operation variant per HTTP method, each
carrying only the fields valid for it, so a content stream can only ever
travel with a put.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union
from urllib.parse import quote

from .errors import InvalidArgument, UnsupportedMethod
from .headers import HeaderPairs

__all__ = [
    "HttpMethod",
    "FileObject",
    "PutObject",
    "DeleteObject",
    "HeadObject",
    "Operation",
    "object_url",
]


class HttpMethod(str, Enum):
    """HTTP methods the OSS signer understands."""
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"
    HEAD = "HEAD"

    @classmethod
    def parse(cls, value: Union[str, HttpMethod]) -> HttpMethod:
        """
        Parse a method name in any case.

        Raises:
            UnsupportedMethod: If value is not a known method
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.upper())
            except ValueError:
                pass
        raise UnsupportedMethod(
            f"Unsupported HTTP method: {value!r}. Supported values: {', '.join(m.value for m in cls)}"
        )


def object_url(bucket: str, object_key: str, endpoint: str) -> str:
    """Virtual-hosted style URL for an object: https://<bucket>.<endpoint>/<key>."""
    return f"https://{bucket}.{endpoint}/{quote(object_key, safe='/')}"


def _require_name(value: Any, what: str) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidArgument(f"{what} must be a non-empty string, got {value!r}")


@dataclass(frozen=True)
class FileObject:
    """
    Identifies exactly one storage object.

    Attributes:
        bucket: Bucket name
        object_key: Object key within the bucket (no leading slash)
        object: Optional readable content stream; never read by this package
    """
    bucket: str
    object_key: str
    object: Any = None

    def __post_init__(self) -> None:
        _require_name(self.bucket, "bucket")
        _require_name(self.object_key, "object_key")


@dataclass(frozen=True)
class PutObject:
    """Upload ``file`` to bucket/object_key."""
    http_method: ClassVar[HttpMethod] = HttpMethod.PUT

    bucket: str
    object_key: str
    file: Any
    oss_headers: HeaderPairs = ()

    def url(self, endpoint: str) -> str:
        return object_url(self.bucket, self.object_key, endpoint)


@dataclass(frozen=True)
class DeleteObject:
    """Delete bucket/object_key."""
    http_method: ClassVar[HttpMethod] = HttpMethod.DELETE

    bucket: str
    object_key: str
    oss_headers: HeaderPairs = ()

    def url(self, endpoint: str) -> str:
        return object_url(self.bucket, self.object_key, endpoint)


@dataclass(frozen=True)
class HeadObject:
    """
    Probe bucket/object_key.

    Building this value answers nothing. The executor runs it and maps the
    response status with ``alixir_oss.objects.object_exists``.
    """
    http_method: ClassVar[HttpMethod] = HttpMethod.HEAD

    bucket: str
    object_key: str
    oss_headers: HeaderPairs = ()

    def url(self, endpoint: str) -> str:
        return object_url(self.bucket, self.object_key, endpoint)


Operation = Union[PutObject, DeleteObject, HeadObject]
