"""
OSS signing error classes.

Provides the taxonomy of failures raised while building operations and
authorization artifacts. Every error is raised synchronously at construction
time; nothing in this package retries or downgrades a failure.
"""
from __future__ import annotations


class OssError(Exception):
    """Base class for all errors raised by alixir_oss."""
    pass


class InvalidArgument(OssError, ValueError):
    """
    Malformed option or header shape.

    Raised when:
    - headers are not an ordered sequence of (name, value) pairs
    - put_object is given a FileObject without content
    - bucket or object key is empty
    """
    pass


class InvalidHeaderValue(InvalidArgument):
    """
    Header name or value would corrupt canonicalization.

    Raised when a header contains a CR or LF character.
    """

    def __init__(self, message: str, header: str | None = None):
        super().__init__(message)
        self.header = header


class InvalidCondition(InvalidArgument):
    """
    Malformed post policy condition clause.

    Raised when:
    - an extra condition is neither a single-entry mapping nor a 3-element list
    - content-length-range bounds are negative, non-integer or inverted
    """
    pass


class UnsupportedMethod(OssError, ValueError):
    """HTTP method is not one the signer knows how to sign."""
    pass


class InvalidMethod(UnsupportedMethod):
    """HTTP method is signable but not allowed for presigned URLs by configuration."""

    def __init__(self, message: str, method: str | None = None, allowed: tuple[str, ...] = ()):
        super().__init__(message)
        self.method = method
        self.allowed = allowed


class MissingCredentials(OssError):
    """Access key id or access key secret is not configured."""
    pass


class UnsupportedBodyType(OssError, ValueError):
    """
    Callback body cannot be encoded.

    Raised when:
    - body_type is "application/json" and body is not a mapping
    - body_type is anything other than "application/json"
    """
    pass


class ExpirationInPast(OssError, ValueError):
    """Computed policy expiration is not strictly after the current time."""
    pass


__all__ = [
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
