"""Service block, comment and signature extractors."""

from .comments import mask_source, normalize_comments, strip_comments
from .service_block import extract_service_block
from .signatures import SignatureExtractor, normalize_signature

__all__ = [
    "SignatureExtractor",
    "extract_service_block",
    "mask_source",
    "normalize_comments",
    "normalize_signature",
    "strip_comments",
]
