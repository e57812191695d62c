"""
Test SigningCommands facade wiring.

Validates that the facade turns command line values into builder options and
delegates to the signing builders with the injected settings and clock.
"""
from __future__ import annotations

import base64
import json
from unittest.mock import patch

import pytest

from alixir_oss.commands import CommandsConfig, SigningCommands
from alixir_oss.commands.facade import parse_header, parse_param
from alixir_oss.errors import InvalidArgument


@pytest.fixture
def cmds(settings, clock):
    return SigningCommands(config=CommandsConfig(), settings=settings, clock=clock)


class TestSigningCommandsFacade:
    """Test facade orchestration."""

    def test_facade_initialization(self, settings):
        config = CommandsConfig(json_output=True, verbose=True)
        cmds = SigningCommands(config=config, settings=settings)

        assert cmds.cfg is config
        assert cmds.settings is settings

    def test_settings_loaded_from_env_when_missing(self, monkeypatch):
        monkeypatch.setenv("OSS_ENDPOINT", "oss-cn-qingdao.aliyuncs.com")
        cmds = SigningCommands(config=CommandsConfig())
        assert cmds.settings.endpoint == "oss-cn-qingdao.aliyuncs.com"

    def test_presign_uses_clock(self, cmds):
        url = cmds.presign("GET", "b", "k", expires=60)
        assert "&Expires=1700000060&" in url

    def test_presign_delegates_options(self, cmds):
        with patch("alixir_oss.commands.facade.PresignedURLBuilder") as mock_builder:
            mock_builder.return_value.build.return_value = "https://signed"

            result = cmds.presign("PUT", "b", "k", headers=["x-oss-meta-a: 1"], params=["acl"])

        assert result == "https://signed"
        method, file_object, options = mock_builder.return_value.build.call_args.args
        assert method == "PUT"
        assert (file_object.bucket, file_object.object_key) == ("b", "k")
        assert options["headers"] == [("x-oss-meta-a", "1")]
        assert options["params"] == {"acl": None}

    def test_post_data_builds_range_and_callback(self, cmds):
        fields = cmds.post_data(
            "b", "k",
            min_size=0, max_size=10,
            callback_url="https://example.com/cb", callback_body='{"a": 1}',
        )
        policy = json.loads(base64.b64decode(fields["policy"]))

        assert ["content-length-range", 0, 10] in policy["conditions"]
        assert "callback" in fields

    def test_post_data_requires_both_sizes(self, cmds):
        with pytest.raises(InvalidArgument, match="--min-size and --max-size"):
            cmds.post_data("b", "k", min_size=1)

    def test_post_data_requires_both_callback_parts(self, cmds):
        with pytest.raises(InvalidArgument, match="--callback-url and --callback-body"):
            cmds.post_data("b", "k", callback_url="https://example.com/cb")

    def test_callback_with_host(self, cmds):
        decoded = json.loads(base64.b64decode(cmds.callback("https://example.com/cb", "{}", host="h")))
        assert decoded["callbackHost"] == "h"

    def test_callback_does_not_load_settings(self, monkeypatch):
        monkeypatch.setenv("OSS_ENDPOINT", "https://bad")
        cmds = SigningCommands(config=CommandsConfig())
        assert json.loads(base64.b64decode(cmds.callback("https://example.com/cb", "{}")))["callbackBody"] == "{}"

    def test_presign_rejects_auth_param(self, cmds):
        with pytest.raises(InvalidArgument, match="Signature"):
            cmds.presign("GET", "b", "k", params=["Signature=x"])

    def test_post_data_bad_success_status_is_invalid_argument(self, cmds):
        with pytest.raises(InvalidArgument, match="PolicyOptions"):
            cmds.post_data("b", "k", success_status="not-a-status")

    def test_sign_debug_without_expires(self, cmds):
        result = cmds.sign_debug("HEAD", "b", "k")
        assert result.string_to_sign == "HEAD\n\n\n\n/b/k"


class TestParsers:
    """Test command line value parsers."""

    def test_parse_header(self):
        assert parse_header("Content-Type: text/plain") == ("Content-Type", "text/plain")
        assert parse_header("x-oss-meta-url:http://a") == ("x-oss-meta-url", "http://a")

    def test_parse_header_without_colon(self):
        with pytest.raises(InvalidArgument, match="NAME:VALUE"):
            parse_header("broken")

    def test_parse_param(self):
        assert parse_param("a=b=c") == ("a", "b=c")
        assert parse_param("acl") == ("acl", None)
