"""Method signature extraction and normalization."""

import logging
import re
from collections.abc import Sequence

from ..analyzers.base import (
    TARPC,
    Dialect,
    MethodSignature,
    ServiceBlock,
    SignatureTable,
)

logger = logging.getLogger(__name__)

WHITESPACE = re.compile(r"\s+")
AFTER_OPEN = re.compile(r"([(\[]) ")
BEFORE_CLOSE = re.compile(r" ([)\],;])")


def normalize_signature(signature: str, modifiers: Sequence[str] = TARPC.modifiers) -> str:
    """Canonical form of a declaration for equality comparison.

    Drops modifier keywords that don't change the calling contract (whole
    tokens only) and collapses every whitespace run, line breaks included,
    to a single space. Space just inside brackets and before ``,`` or ``;``
    is dropped, so wrapping a parameter list doesn't change the result.
    """
    for modifier in modifiers:
        signature = re.sub(rf"(?<!\w){re.escape(modifier)}(?!\w)", " ", signature)
    signature = WHITESPACE.sub(" ", signature).strip()
    signature = AFTER_OPEN.sub(r"\1", signature)
    return BEFORE_CLOSE.sub(r"\1", signature)


class SignatureExtractor:
    """Extract bodiless method declarations from a service block."""

    def __init__(self, dialect: Dialect = TARPC):
        self.dialect = dialect
        self._method_pattern = dialect.method_pattern()
        self._default_body_pattern = dialect.default_body_pattern()

    def extract(self, block: ServiceBlock) -> SignatureTable:
        """Build the signature table for ``block``.

        Comments are expected to be stripped already. Declaration order is
        kept; a repeated method name replaces the earlier signature.
        """
        body = block.body
        signatures: dict[str, MethodSignature] = {}

        for match in self._method_pattern.finditer(body):
            name = match.group(1)
            raw = match.group(0).strip()
            if name in signatures:
                logger.debug("%s: duplicate method %s, keeping the later one", block.source_name, name)
            signatures[name] = MethodSignature(
                name=name,
                raw=raw,
                normalized=normalize_signature(raw, self.dialect.modifiers),
            )

        for match in self._default_body_pattern.finditer(body):
            logger.warning(
                "%s: method %s has a default body and is not compared",
                block.source_name,
                match.group(1),
            )

        return SignatureTable(block.source_name, signatures)
