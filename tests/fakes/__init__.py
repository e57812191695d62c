"""Test fakes for alixir-oss."""
from .fake_signer import FakeSigner

__all__ = ["FakeSigner"]
