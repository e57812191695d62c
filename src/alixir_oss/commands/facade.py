"""
SigningCommands Facade - Application service layer.

Provides a clean interface between CLI and the signing builders, centralizing
command orchestration and configuration while keeping CLI commands thin and
testable.
"""
from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..errors import InvalidArgument
from ..settings import Settings
from ..signing import (
    Callback,
    HmacSha1Signer,
    PostObjectDataBuilder,
    PresignedURLBuilder,
    SignRequest,
    SignResult,
)
from ..signing.options import coerce_options
from ..types import FileObject, HttpMethod


def parse_header(raw: str) -> Tuple[str, str]:
    """
    Parse a ``NAME:VALUE`` command line header.

    Raises:
        InvalidArgument: If the colon separator is missing
    """
    if ":" not in raw:
        raise InvalidArgument(f"Header must be NAME:VALUE, got {raw!r}")
    name, value = raw.split(":", 1)
    return name.strip(), value.strip()


def parse_param(raw: str) -> Tuple[str, Optional[str]]:
    """Parse a ``KEY=VALUE`` (or bare ``KEY``) query parameter."""
    if "=" not in raw:
        return raw, None
    key, value = raw.split("=", 1)
    return key, value


def parse_json_body(raw: str) -> Any:
    """
    Parse a callback body given as JSON text.

    Raises:
        InvalidArgument: If the text is not valid JSON
    """
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidArgument(f"Callback body is not valid JSON: {e}") from e


@dataclass(frozen=True)
class CommandsConfig:
    """
    Configuration for the SigningCommands facade.

    Centralizes output policy decisions to avoid scattered configuration.
    """
    json_output: bool = False     # Emit JSON instead of tables
    verbose: bool = False         # Show detailed output


class SigningCommands:
    """
    Application service facade for CLI commands.

    One method per CLI verb. The facade is stateless except for the injected
    config, settings and clock; exceptions bubble up for central mapping in
    ``run_and_exit``.
    """

    def __init__(
        self,
        config: CommandsConfig,
        settings: Optional[Settings] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize facade.

        Args:
            config: Output configuration
            settings: Optional settings (if None, loaded from environment on
                first use)
            clock: Time source used for default expiries
        """
        self.cfg = config
        self._settings = settings
        self.clock = clock

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            from ..settings import create_settings_from_env
            self._settings = create_settings_from_env()
        return self._settings

    def presign(
        self,
        method: str,
        bucket: str,
        key: str,
        *,
        expires: Optional[int] = None,
        headers: Sequence[str] = (),
        params: Sequence[str] = (),
    ) -> str:
        """Build a presigned URL from command line values."""
        options = {
            "expires": expires,
            "headers": [parse_header(h) for h in headers],
            "params": dict(parse_param(p) for p in params),
        }
        builder = PresignedURLBuilder(self.settings, clock=self.clock)
        return builder.build(method, FileObject(bucket=bucket, object_key=key), options)

    def post_data(
        self,
        bucket: str,
        key: str,
        *,
        ttl: Optional[int] = None,
        key_prefix: Optional[str] = None,
        min_size: Optional[int] = None,
        max_size: Optional[int] = None,
        callback_url: Optional[str] = None,
        callback_body: Optional[str] = None,
        success_status: Optional[int] = None,
    ) -> Dict[str, str]:
        """Build post-object form fields from command line values."""
        length_range = None
        if min_size is not None or max_size is not None:
            if min_size is None or max_size is None:
                raise InvalidArgument("--min-size and --max-size must be given together")
            length_range = (min_size, max_size)

        callback = None
        if callback_url is not None or callback_body is not None:
            if callback_url is None or callback_body is None:
                raise InvalidArgument("--callback-url and --callback-body must be given together")
            callback = {"url": callback_url, "body": parse_json_body(callback_body)}

        options = {
            "expires": ttl,
            "key_prefix": key_prefix,
            "content_length_range": length_range,
            "callback": callback,
            "success_action_status": success_status,
        }
        builder = PostObjectDataBuilder(self.settings, clock=self.clock)
        return builder.build(FileObject(bucket=bucket, object_key=key), options)

    def callback(self, url: str, body: str, *, host: Optional[str] = None) -> str:
        """Encode a callback header value. Needs no settings."""
        callback = coerce_options(Callback, {"url": url, "body": parse_json_body(body), "host": host})
        return callback.encode()

    def sign_debug(
        self,
        method: str,
        bucket: str,
        key: str,
        *,
        expires: Optional[int] = None,
        headers: Sequence[str] = (),
    ) -> SignResult:
        """Compute the string to sign and signature for a request."""
        signer = HmacSha1Signer(self.settings)
        pairs: List[Tuple[str, str]] = [parse_header(h) for h in headers]
        return signer.sign(SignRequest(
            http_method=HttpMethod.parse(method),
            bucket=bucket,
            object_key=key,
            expires="" if expires is None else expires,
            headers=pairs,
        ))
