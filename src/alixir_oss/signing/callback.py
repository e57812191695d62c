"""
Upload callback encoding.

After a successful upload the storage service POSTs an application-chosen
body to a callback URL. The callback is described by a base64 JSON document
sent either as the ``x-oss-callback`` request header or as the ``callback``
field of a post-object form.
"""
from __future__ import annotations

import base64
import json
from collections.abc import Mapping
from typing import Any, Optional, Tuple
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

from ..errors import UnsupportedBodyType

__all__ = ["Callback", "encode", "CALLBACK_HEADER", "JSON_BODY_TYPE"]

CALLBACK_HEADER = "x-oss-callback"
JSON_BODY_TYPE = "application/json"

# URI reserved characters kept as-is; everything else outside the unreserved
# set is percent-encoded
_URL_SAFE = "!#$&'()*+,/:;=?@[]~"


class Callback(BaseModel):
    """Post-upload callback descriptor."""
    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Endpoint the service calls after upload")
    body: Any = Field(..., description="Body forwarded to the callback endpoint")
    body_type: str = Field(default=JSON_BODY_TYPE, description="Body content type")
    host: Optional[str] = Field(default=None, description="Host header override for the callback request")

    def encode(self) -> str:
        return encode(self)

    def as_header(self) -> Tuple[str, str]:
        """Header pair for attaching this callback to a put operation."""
        return (CALLBACK_HEADER, encode(self))


def encode(callback: Callback) -> str:
    """
    Encode a callback into the opaque base64 value the service expects.

    The decoded value is
    ``{"callbackUrl": <percent-encoded url>, "callbackBody": <json string>,
    "callbackBodyType": "application/json"}``, with ``callbackHost`` after the
    url when a host is set.

    Raises:
        UnsupportedBodyType: If body_type is not application/json, or the body
            is not a JSON-encodable mapping
    """
    if callback.body_type != JSON_BODY_TYPE:
        raise UnsupportedBodyType(
            f"Unsupported callback body type {callback.body_type!r}: only {JSON_BODY_TYPE} is implemented"
        )

    if not isinstance(callback.body, Mapping):
        raise UnsupportedBodyType(
            f"Callback body must be a mapping for {JSON_BODY_TYPE}, got {type(callback.body).__name__}"
        )

    try:
        body_json = json.dumps(dict(callback.body), separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise UnsupportedBodyType(f"Callback body is not JSON-encodable: {e}") from e

    descriptor = {"callbackUrl": quote(callback.url, safe=_URL_SAFE)}
    if callback.host:
        descriptor["callbackHost"] = callback.host
    descriptor["callbackBody"] = body_json
    descriptor["callbackBodyType"] = JSON_BODY_TYPE

    payload = json.dumps(descriptor, separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")
