"""
Operation builders for object requests.

Each builder returns an Operation value that an external executor turns into
an HTTP request against ``https://<bucket>.<endpoint>/<object_key>``. Nothing
here performs I/O.

Example:
    >>> fo = FileObject(bucket="foo_bucket", object_key="foo/bar.jpg", object=open("bar.jpg", "rb"))
    >>> op = put_object(fo, [("X-OSS-Object-Acl", "public-read")])
    >>> op.http_method
    <HttpMethod.PUT: 'PUT'>
"""
from __future__ import annotations

import logging
from typing import Any

from .errors import InvalidArgument
from .headers import normalize_header_pairs
from .types import DeleteObject, FileObject, HeadObject, PutObject

__all__ = ["put_object", "delete_object", "head_object", "object_exists"]

logger = logging.getLogger(__name__)


def _require_file_object(file_object: Any) -> FileObject:
    if not isinstance(file_object, FileObject):
        raise InvalidArgument(f"expected FileObject, got {type(file_object).__name__}")
    return file_object


def put_object(file_object: FileObject, headers: Any = ()) -> PutObject:
    """
    Build a put operation carrying the content stream of ``file_object``.

    Args:
        file_object: Target object; ``object`` must be set
        headers: Ordered (name, value) pairs sent verbatim with the request

    Returns:
        PutObject with the original stream and headers

    Raises:
        InvalidArgument: If the FileObject has no content or headers are malformed
        InvalidHeaderValue: If a header contains a line break
    """
    file_object = _require_file_object(file_object)
    if file_object.object is None:
        raise InvalidArgument(
            f"put_object requires content: FileObject {file_object.bucket}/{file_object.object_key} has no object"
        )

    oss_headers = normalize_header_pairs(headers)
    logger.debug(f"Built put operation for {file_object.bucket}/{file_object.object_key} with {len(oss_headers)} headers")

    return PutObject(
        bucket=file_object.bucket,
        object_key=file_object.object_key,
        file=file_object.object,
        oss_headers=oss_headers,
    )


def delete_object(file_object: FileObject, headers: Any = ()) -> DeleteObject:
    """
    Build a delete operation. Any content stream on ``file_object`` is ignored.

    Raises:
        InvalidArgument: If headers are malformed
    """
    file_object = _require_file_object(file_object)
    oss_headers = normalize_header_pairs(headers)
    logger.debug(f"Built delete operation for {file_object.bucket}/{file_object.object_key}")

    return DeleteObject(
        bucket=file_object.bucket,
        object_key=file_object.object_key,
        oss_headers=oss_headers,
    )


def head_object(bucket: str, key: str) -> HeadObject:
    """
    Build a head operation for bucket/key.

    This does not check existence. The executor sends the request and passes
    the response status to ``object_exists``.
    """
    FileObject(bucket=bucket, object_key=key)
    return HeadObject(bucket=bucket, object_key=key, oss_headers=())


def object_exists(status_code: int) -> bool:
    """
    Interpret the status of an executed head operation.

    Returns:
        True for 200, False for 404

    Raises:
        InvalidArgument: For any other status, which answers neither way
    """
    if status_code == 200:
        return True
    if status_code == 404:
        return False
    raise InvalidArgument(f"head status {status_code} does not indicate existence or absence")
