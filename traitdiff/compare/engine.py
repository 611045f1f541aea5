"""
Service Trait Comparison Engine

Builds one signature table per input file and partitions the method names
of two tables into added-or-missing, modified, unchanged and removed.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..analyzers.base import (
    TARPC,
    Dialect,
    MethodSignature,
    NoServiceBlockFound,
    SignatureTable,
    SourceDocument,
)
from ..extractors.comments import strip_comments
from ..extractors.service_block import extract_service_block
from ..extractors.signatures import SignatureExtractor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModifiedMethod:
    """A method declared in both tables with differing signatures."""
    name: str
    first: MethodSignature
    second: MethodSignature

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "first": self.first.normalized,
            "second": self.second.normalized,
        }


@dataclass
class DiffResult:
    """Result of comparing two signature tables."""
    first_path: str
    second_path: str
    added_or_missing: list[MethodSignature] = field(default_factory=list)
    modified: list[ModifiedMethod] = field(default_factory=list)
    removed: list[MethodSignature] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)

    @property
    def change_count(self) -> int:
        return len(self.added_or_missing) + len(self.modified) + len(self.removed)

    @property
    def is_identical(self) -> bool:
        return self.change_count == 0

    def to_dict(self) -> dict:
        return {
            "first": self.first_path,
            "second": self.second_path,
            "is_identical": self.is_identical,
            "change_count": self.change_count,
            "added_or_missing": [s.normalized for s in self.added_or_missing],
            "modified": [m.to_dict() for m in self.modified],
            "removed": [s.normalized for s in self.removed],
            "unchanged": list(self.unchanged),
        }


def diff_tables(
    table1: SignatureTable,
    table2: SignatureTable,
    first_path: str | None = None,
    second_path: str | None = None,
) -> DiffResult:
    """
    Compare two signature tables.

    Args:
        table1: Table whose extra methods are reported as added or missing
        table2: Table whose extra methods are reported as removed

    Returns:
        DiffResult with every category in declaration order
    """
    result = DiffResult(
        first_path=first_path or table1.source_name,
        second_path=second_path or table2.source_name,
    )

    for name, signature in table1.items():
        other = table2.get(name)
        if other is None:
            result.added_or_missing.append(signature)
        elif signature.normalized != other.normalized:
            result.modified.append(ModifiedMethod(name=name, first=signature, second=other))
        else:
            result.unchanged.append(name)

    for name, signature in table2.items():
        if name not in table1:
            result.removed.append(signature)

    return result


def table_from_document(document: SourceDocument, dialect: Dialect = TARPC) -> SignatureTable:
    """Extract the signature table of one loaded file.

    A file without a service block yields an empty table.
    """
    lines = strip_comments(document.lines, keep_docs=False)
    try:
        block = extract_service_block(lines, dialect, document.name)
    except NoServiceBlockFound as e:
        logger.warning("%s", e)
        return SignatureTable.empty(document.name)

    return SignatureExtractor(dialect).extract(block)


def table_from_file(path: str | Path, dialect: Dialect = TARPC) -> SignatureTable:
    """Load ``path`` and extract its signature table.

    Raises FileAccessError when the file can't be read.
    """
    return table_from_document(SourceDocument.load(path), dialect)


def compare_files(path1: str | Path, path2: str | Path, dialect: Dialect = TARPC) -> DiffResult:
    """
    Main entry point for comparing the service traits of two files.

    Both files are read before any comparison happens, so an unreadable
    second file fails the run without producing partial output.
    """
    table1 = table_from_file(path1, dialect)
    table2 = table_from_file(path2, dialect)
    return diff_tables(table1, table2, str(path1), str(path2))
