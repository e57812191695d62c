"""
CLI smoke tests.

Tests command wiring, output formats and exit codes through Typer's
CliRunner with credentials supplied via environment or a YAML file.
"""
from __future__ import annotations

import base64
import json
from urllib.parse import parse_qsl, urlsplit

import pytest
from typer.testing import CliRunner

from alixir_oss.cli import app

ENV = {
    "OSS_ACCESS_KEY_ID": "cliid",
    "OSS_ACCESS_KEY_SECRET": "clisecret",
    "OSS_ENDPOINT": "oss-cn-hangzhou.aliyuncs.com",
}


class TestCLISmokeTests:
    """Smoke tests for CLI commands."""

    def setup_method(self):
        """Set up test environment."""
        self.runner = CliRunner()

    def test_presign_command(self):
        result = self.runner.invoke(app, ["presign", "GET", "b", "a/b.jpg", "--expires", "60"], env=ENV)

        assert result.exit_code == 0
        url = result.stdout.strip()
        parts = urlsplit(url)
        params = dict(parse_qsl(parts.query))
        assert parts.netloc == "b.oss-cn-hangzhou.aliyuncs.com"
        assert parts.path == "/a/b.jpg"
        assert params["OSSAccessKeyId"] == "cliid"
        assert "Signature" in params

    def test_presign_with_header_and_param(self):
        result = self.runner.invoke(app, [
            "presign", "PUT", "b", "k",
            "--header", "Content-Type: image/png",
            "--param", "response-content-type=image/png",
        ], env=ENV)

        assert result.exit_code == 0
        assert "response-content-type=image%2Fpng" in result.stdout

    def test_presign_disallowed_method(self):
        result = self.runner.invoke(app, ["presign", "DELETE", "b", "k"], env=ENV)
        assert result.exit_code == 4
        assert "not allowed" in result.output

    def test_presign_missing_credentials(self):
        result = self.runner.invoke(app, ["presign", "GET", "b", "k"])
        assert result.exit_code == 5

    def test_presign_bad_header(self):
        result = self.runner.invoke(app, ["presign", "GET", "b", "k", "--header", "no-colon"], env=ENV)
        assert result.exit_code == 2

    def test_post_data_json(self):
        result = self.runner.invoke(app, [
            "post-data", "b", "uploads/${filename}",
            "--key-prefix", "uploads/",
            "--min-size", "0", "--max-size", "1048576",
            "--callback-url", "https://example.com/cb",
            "--callback-body", '{"object": "${object}"}',
            "--success-status", "201",
            "--json",
        ], env=ENV)

        assert result.exit_code == 0
        fields = json.loads(result.stdout)
        assert fields["OSSAccessKeyId"] == "cliid"
        assert fields["key"] == "uploads/${filename}"
        assert fields["success_action_status"] == "201"
        assert "callback" in fields

        policy = json.loads(base64.b64decode(fields["policy"]))
        assert ["content-length-range", 0, 1048576] in policy["conditions"]
        assert ["starts-with", "$key", "uploads/"] in policy["conditions"]

    def test_post_data_table(self):
        result = self.runner.invoke(app, ["post-data", "b", "k"], env=ENV)
        assert result.exit_code == 0
        assert "OSSAccessKeyId" in result.stdout

    def test_post_data_half_range(self):
        result = self.runner.invoke(app, ["post-data", "b", "k", "--max-size", "10"], env=ENV)
        assert result.exit_code == 2

    def test_callback_command(self):
        result = self.runner.invoke(app, ["callback", "https://example.com/cb", '{"a": 1}'])

        assert result.exit_code == 0
        decoded = json.loads(base64.b64decode(result.stdout.strip()))
        assert decoded["callbackUrl"] == "https://example.com/cb"
        assert json.loads(decoded["callbackBody"]) == {"a": 1}

    def test_callback_ignores_broken_settings(self):
        env = {"OSS_ENDPOINT": "https://bad", "OSS_ACCESS_KEY_ID": "only-id"}
        result = self.runner.invoke(app, ["callback", "https://example.com/cb", "{}"], env=env)
        assert result.exit_code == 0

    def test_callback_non_mapping_body(self):
        result = self.runner.invoke(app, ["callback", "https://example.com/cb", "[1, 2]"])
        assert result.exit_code == 7

    def test_callback_invalid_json(self):
        result = self.runner.invoke(app, ["callback", "https://example.com/cb", "{not json"])
        assert result.exit_code == 2

    def test_sign_debug(self):
        result = self.runner.invoke(app, ["sign-debug", "GET", "b", "k", "--expires", "1700000000"], env=ENV)

        assert result.exit_code == 0
        assert "'1700000000'" in result.stdout
        assert "'/b/k'" in result.stdout
        assert "clisecret" not in result.stdout

    def test_settings_redacted(self):
        result = self.runner.invoke(app, ["settings"], env=ENV)
        assert result.exit_code == 0
        assert "clisecret" not in result.stdout

    def test_config_file(self, tmp_path):
        path = tmp_path / "oss.yaml"
        path.write_text("access_key_id: fileid\naccess_key_secret: filesecret\nendpoint: oss-cn-beijing.aliyuncs.com\n")

        result = self.runner.invoke(app, ["--config", str(path), "presign", "GET", "b", "k"])

        assert result.exit_code == 0
        assert result.stdout.startswith("https://b.oss-cn-beijing.aliyuncs.com/k?OSSAccessKeyId=fileid&")

    def test_invalid_settings_exit_code(self):
        result = self.runner.invoke(app, ["presign", "GET", "b", "k"], env={**ENV, "OSS_ENDPOINT": "https://bad"})
        assert result.exit_code == 2
