"""
Presigned URL construction.

A presigned URL embeds access key id, expiry and signature as query
parameters, granting one operation on one object to whoever holds the URL:

    https://<bucket>.<endpoint>/<key>?OSSAccessKeyId=<id>&Expires=<ts>&Signature=<sig>
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple, Union
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

from ..errors import InvalidArgument, InvalidMethod
from ..settings import Settings
from ..types import FileObject, HttpMethod, object_url
from .base import SignRequest, Signer
from .options import Expiry, coerce_options, resolve_expiry
from .signer import HmacSha1Signer

__all__ = ["PresignOptions", "PresignedURLBuilder", "presigned_url"]

logger = logging.getLogger(__name__)

# Query parameters the builder itself writes
AUTH_PARAMS = frozenset(["OSSAccessKeyId", "Expires", "Signature"])


class PresignOptions(BaseModel):
    """Per-call options for presigned URLs."""
    model_config = ConfigDict(frozen=True)

    expires: Optional[Expiry] = Field(default=None, description="Seconds from now, timedelta, or absolute datetime")
    headers: Tuple[Tuple[str, str], ...] = Field(default=(), description="Headers the request must carry; x-oss- ones are signed")
    params: Dict[str, Optional[str]] = Field(default_factory=dict, description="Extra query parameters")


class PresignedURLBuilder:
    """
    Builds presigned URLs from settings and a signer.

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

    def _check_method(self, method: Union[str, HttpMethod]) -> HttpMethod:
        parsed = HttpMethod.parse(method)
        allowed = self._settings.presign_methods
        if parsed.value not in allowed:
            raise InvalidMethod(
                f"HTTP method {parsed.value} is not allowed for presigned URLs. Allowed: {', '.join(allowed)}",
                method=parsed.value,
                allowed=allowed,
            )
        return parsed

    def build(
        self,
        method: Union[str, HttpMethod],
        file_object: FileObject,
        options: Any = None,
    ) -> str:
        """
        Build a presigned URL.

        Args:
            method: HTTP method the URL grants
            file_object: Target bucket and key
            options: PresignOptions or an equivalent mapping

        Returns:
            Fully-qualified URL

        Raises:
            UnsupportedMethod: If method is unknown
            InvalidMethod: If method is not in settings.presign_methods
            InvalidArgument: If options are malformed or params name an
                authentication parameter
            InvalidHeaderValue: If a header contains a line break
        """
        http_method = self._check_method(method)
        opts: PresignOptions = coerce_options(PresignOptions, options)
        reserved = sorted(AUTH_PARAMS.intersection(opts.params))
        if reserved:
            raise InvalidArgument(f"params must not override authentication parameters: {', '.join(reserved)}")
        expires = resolve_expiry(opts.expires, self._settings.presign_expires_s, self._clock())

        params: Dict[str, Optional[str]] = dict(opts.params)
        if self._settings.security_token:
            params["security-token"] = self._settings.security_token

        result = self._signer.sign(SignRequest(
            http_method=http_method,
            bucket=file_object.bucket,
            object_key=file_object.object_key,
            expires=expires,
            headers=opts.headers,
            subresources=params,
        ))

        query = [
            ("OSSAccessKeyId", self._signer.access_key_id),
            ("Expires", str(expires)),
            ("Signature", result.signature),
        ]
        query.extend((k, v) for k, v in params.items())

        url = object_url(file_object.bucket, file_object.object_key, self._settings.endpoint)
        url += "?" + "&".join(
            quote(k, safe="") if v is None else f"{quote(k, safe='')}={quote(v, safe='')}"
            for k, v in query
        )

        logger.debug(f"Presigned {http_method.value} URL for {file_object.bucket}/{file_object.object_key} expiring at {expires}")
        return url


def presigned_url(
    method: Union[str, HttpMethod],
    file_object: FileObject,
    options: Any = None,
    *,
    settings: Optional[Settings] = None,
) -> str:
    """
    Generate a presigned URL which other applications (such as a browser
    frontend) can use to operate on OSS without holding credentials.

    Settings are loaded from the environment when not given.
    """
    if settings is None:
        from ..settings import create_settings_from_env
        settings = create_settings_from_env()
    return PresignedURLBuilder(settings).build(method, file_object, options)
