"""Root pytest configuration for alixir-oss tests."""
import pytest

from alixir_oss.settings import Settings

# 2023-11-14T22:13:20Z
FIXED_NOW = 1_700_000_000

ACCESS_KEY_ID = "LTAItestkeyid"
ACCESS_KEY_SECRET = "testsecret/with+chars="


# Isolate tests from the developer's environment
@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Automatically clear OSS environment variables."""
    for name in (
        "OSS_ACCESS_KEY_ID",
        "OSS_ACCESS_KEY_SECRET",
        "OSS_ENDPOINT",
        "OSS_SECURITY_TOKEN",
        "OSS_PRESIGN_EXPIRES",
        "OSS_POLICY_TTL",
        "OSS_PRESIGN_METHODS",
        "ALIXIR_OSS_CONFIG",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    """Standard test settings."""
    return Settings(
        access_key_id=ACCESS_KEY_ID,
        access_key_secret=ACCESS_KEY_SECRET,
        endpoint="oss-cn-hangzhou.aliyuncs.com",
    )


@pytest.fixture
def clock():
    """Frozen clock returning FIXED_NOW."""
    return lambda: float(FIXED_NOW)
