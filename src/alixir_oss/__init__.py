"""
alixir-oss builds request descriptors and authorization artifacts for Aliyun OSS.

Operations (put, delete, head) are values for an external executor to send.
Presigned URLs, post-object form data and callbacks are self-contained
artifacts a browser or other client can use without holding credentials.

Example:
    >>> from alixir_oss import FileObject, presigned_url
    >>> presigned_url("GET", FileObject(bucket="b", object_key="a/b.jpg"), settings=settings)
    'https://b.oss-cn-hangzhou.aliyuncs.com/a/b.jpg?OSSAccessKeyId=...&Expires=...&Signature=...'
"""
from .errors import (
    ExpirationInPast,
    InvalidArgument,
    InvalidCondition,
    InvalidHeaderValue,
    InvalidMethod,
    MissingCredentials,
    OssError,
    UnsupportedBodyType,
    UnsupportedMethod,
)
from .objects import delete_object, head_object, object_exists, put_object
from .settings import Settings, create_settings_from_env, load_settings_file
from .signing import (
    Callback,
    HmacSha1Signer,
    PolicyOptions,
    PresignOptions,
    post_object_data,
    presigned_url,
)
from .types import DeleteObject, FileObject, HeadObject, HttpMethod, Operation, PutObject

__all__ = [
    "FileObject",
    "HttpMethod",
    "Operation",
    "PutObject",
    "DeleteObject",
    "HeadObject",
    "put_object",
    "delete_object",
    "head_object",
    "object_exists",
    "presigned_url",
    "post_object_data",
    "Callback",
    "PresignOptions",
    "PolicyOptions",
    "HmacSha1Signer",
    "Settings",
    "create_settings_from_env",
    "load_settings_file",
    "OssError",
    "InvalidArgument",
    "InvalidHeaderValue",
    "InvalidCondition",
    "UnsupportedMethod",
    "InvalidMethod",
    "MissingCredentials",
    "UnsupportedBodyType",
    "ExpirationInPast",
]
