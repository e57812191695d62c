"""
Signing package - authorization artifacts handed to third parties.

Presigned URLs, post-object form data and upload callbacks all share the
Signer capability defined in ``base``.
"""
from .base import SignRequest, SignResult, Signer
from .callback import Callback, encode
from .post_object import PolicyDocument, PolicyOptions, PostObjectDataBuilder, post_object_data
from .presigned_url import PresignOptions, PresignedURLBuilder, presigned_url
from .signer import HmacSha1Signer

__all__ = [
    "SignRequest",
    "SignResult",
    "Signer",
    "HmacSha1Signer",
    "Callback",
    "encode",
    "PolicyDocument",
    "PolicyOptions",
    "PostObjectDataBuilder",
    "post_object_data",
    "PresignOptions",
    "PresignedURLBuilder",
    "presigned_url",
]
