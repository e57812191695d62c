"""
Fake signer for builder tests.

Records every request and returns predictable signatures so builder tests
can assert on what was signed without recomputing HMACs.
"""
from __future__ import annotations

from typing import List

from alixir_oss.signing import SignRequest, SignResult


class FakeSigner:
    """In-memory Signer that records calls."""

    def __init__(self, access_key_id: str = "FAKEKEY", signature: str = "fake+sig/=="):
        self._access_key_id = access_key_id
        self._signature = signature
        self.requests: List[SignRequest] = []
        self.texts: List[str] = []

    @property
    def access_key_id(self) -> str:
        return self._access_key_id

    def sign(self, request: SignRequest) -> SignResult:
        self.requests.append(request)
        return SignResult(signature=self._signature, string_to_sign=f"fake:{request.object_key}")

    def sign_text(self, text: str) -> str:
        self.texts.append(text)
        return self._signature
