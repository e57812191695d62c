"""
Signing interfaces for alixir-oss.

These protocols define the boundary between artifact builders (presigned URLs,
post policies) and signature implementations, so builders can be tested with
fakes and the algorithm can be swapped without touching call sites.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, Union, runtime_checkable

from ..types import HttpMethod

__all__ = ["SignRequest", "SignResult", "Signer"]


@dataclass(frozen=True)
class SignRequest:
    """
    Everything a signature is bound to.

    Invariants:
    - expires is passed through unmodified; the service rejects expired signatures
    - headers may be a mapping or ordered (name, value) pairs
    - resource_override, when set, replaces the /bucket/key resource verbatim
    """
    http_method: Union[HttpMethod, str]
    bucket: Optional[str]
    object_key: str
    expires: Union[int, str] = ""
    headers: Any = ()
    resource_override: Optional[str] = None
    subresources: Mapping[str, Optional[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class SignResult:
    """
    Signature plus the exact text it was computed over.

    string_to_sign is kept for diagnostics and tests; it is never transmitted.
    """
    signature: str
    string_to_sign: str


@runtime_checkable
class Signer(Protocol):
    """Protocol for request and policy signing."""

    @property
    def access_key_id(self) -> str:
        """Access key id that identifies the signing secret."""
        ...

    def sign(self, request: SignRequest) -> SignResult:
        """
        Sign a request.

        Args:
            request: Method, resource, headers and expiry to bind

        Returns:
            SignResult with base64 signature and string to sign

        Raises:
            UnsupportedMethod: If the method cannot be signed
            InvalidHeaderValue: If a header would corrupt canonicalization
        """
        ...

    def sign_text(self, text: str) -> str:
        """
        Sign arbitrary text (e.g. a base64 post policy).

        Returns:
            base64 signature
        """
        ...
