"""Data model, errors and dialects shared by the extractors."""

from .base import (
    ConfigurationError,
    Dialect,
    FileAccessError,
    MethodSignature,
    NoServiceBlockFound,
    ServiceBlock,
    SignatureTable,
    SourceDocument,
    TraitDiffError,
)
from .registry import DialectRegistry, create_default_registry

__all__ = [
    "ConfigurationError",
    "Dialect",
    "DialectRegistry",
    "FileAccessError",
    "MethodSignature",
    "NoServiceBlockFound",
    "ServiceBlock",
    "SignatureTable",
    "SourceDocument",
    "TraitDiffError",
    "create_default_registry",
]
