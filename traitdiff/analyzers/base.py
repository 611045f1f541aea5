"""Shared data model for service block extraction and comparison."""

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class TraitDiffError(Exception):
    """Base class for all errors raised by traitdiff."""


class FileAccessError(TraitDiffError):
    """Input path is missing, not a regular file, or cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"File not found or is not readable: {path} ({reason})")


class NoServiceBlockFound(TraitDiffError):
    """No trait annotated with the marker attribute could be isolated."""

    def __init__(self, source_name: str, reason: str):
        self.source_name = source_name
        self.reason = reason
        super().__init__(f"No service trait found in {source_name}: {reason}")


class ConfigurationError(TraitDiffError):
    """Config file or dialect selection is invalid."""


# ---------------------------------------------------------------------------
# Dialect
# ---------------------------------------------------------------------------

# Square-bracket group, one level of nesting: [u8; 32], [[u8; 4]; 2]
BRACKETED = r"\[(?:[^\[\]]|\[[^\[\]]*\])*\]"


class Dialect(BaseModel):
    """Tokens that identify a service trait and its method declarations."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = "tarpc"
    marker: str = "#[tarpc::service]"
    trait_keyword: str = "trait"
    fn_keyword: str = "fn"
    modifiers: tuple[str, ...] = Field(default=("async", "pub"))

    def trait_pattern(self) -> re.Pattern:
        return re.compile(rf"\b{re.escape(self.trait_keyword)}\b")

    def _modifier_prefix(self) -> str:
        if not self.modifiers:
            return ""
        alternatives = "|".join(re.escape(m) for m in self.modifiers)
        return rf"(?:(?:{alternatives})\s+)*"

    def _declaration_head(self) -> str:
        return (
            rf"^[ \t]*{self._modifier_prefix()}{re.escape(self.fn_keyword)}\s+"
            rf"([A-Za-z0-9_]+)\s*\((?:[^;{{\[]|{BRACKETED})*"
        )

    def method_pattern(self) -> re.Pattern:
        """Bodiless declaration: ``[modifiers] fn name(...) ... ;``.

        The match may span lines but never crosses an opening brace, so a
        declaration with a default body is not picked up. A ``;`` inside
        square brackets, as in ``[u8; 32]``, does not end the declaration.
        """
        return re.compile(self._declaration_head() + ";", re.MULTILINE)

    def default_body_pattern(self) -> re.Pattern:
        """Declaration that opens a body before reaching a semicolon."""
        return re.compile(self._declaration_head() + r"\{", re.MULTILINE)


TARPC = Dialect()


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SourceDocument:
    """Raw lines of one input file."""
    path: str
    lines: tuple[str, ...]

    @property
    def name(self) -> str:
        return Path(self.path).name

    @classmethod
    def load(cls, path: str | Path) -> "SourceDocument":
        file_path = Path(path)
        if not file_path.exists():
            raise FileAccessError(str(path), "does not exist")
        if not file_path.is_file():
            raise FileAccessError(str(path), "not a regular file")
        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileAccessError(str(path), str(e)) from e
        return cls(path=str(path), lines=tuple(content.splitlines()))


@dataclass(frozen=True)
class ServiceBlock:
    """Lines from the trait keyword through the matching closing brace."""
    source_name: str
    lines: tuple[str, ...]
    start_line: int
    end_line: int

    @property
    def text(self) -> str:
        return "\n".join(self.lines) + "\n"

    @property
    def body(self) -> str:
        """Text strictly between the first ``{`` and the last ``}``."""
        text = self.text
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            return ""
        return text[start + 1:end]


@dataclass(frozen=True)
class MethodSignature:
    """One declared method.

    ``raw`` is the declaration as written; ``normalized`` is the form two
    signatures are compared by.
    """
    name: str
    raw: str
    normalized: str


class SignatureTable(Mapping):
    """Read-only, declaration-ordered mapping of method name to signature."""

    def __init__(self, source_name: str, signatures: Mapping[str, MethodSignature] | None = None):
        self.source_name = source_name
        self._signatures: dict[str, MethodSignature] = dict(signatures or {})

    def __getitem__(self, name: str) -> MethodSignature:
        return self._signatures[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._signatures)

    def __len__(self) -> int:
        return len(self._signatures)

    def __repr__(self) -> str:
        return f"SignatureTable({self.source_name!r}, {list(self._signatures)!r})"

    @classmethod
    def empty(cls, source_name: str) -> "SignatureTable":
        return cls(source_name)
