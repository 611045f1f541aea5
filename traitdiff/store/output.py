"""Output renderers for diff reports and canonical service documents."""

import json
from pathlib import Path

from ..analyzers.base import TARPC, Dialect, ServiceBlock
from ..compare.engine import DiffResult
from ..extractors.comments import DEFAULT_DOC_INDENT, normalize_comments

TITLE_RULE = "=" * 29
SECTION_RULE = "-" * 50
NONE_LINE = "   None"

GENERATED_HEADER = "// This file is auto-generated from {name}. Do not edit directly."


class ReportRenderer:
    """Render a DiffResult as a text or JSON report."""

    def __init__(self, result: DiffResult):
        self.result = result
        self.first_name = Path(result.first_path).name
        self.second_name = Path(result.second_path).name

    def render_text(self) -> str:
        """Three-section report, each section printing ``None`` when empty."""
        lines = self._header()
        lines += self._added_section()
        lines += self._modified_section()
        lines += self._removed_section()
        return "\n".join(lines) + "\n"

    def render_json(self) -> str:
        return json.dumps(self.result.to_dict(), indent=2) + "\n"

    def _header(self) -> list[str]:
        return [
            "RPC Trait Difference Report",
            TITLE_RULE,
            f"File 1: {self.first_name}",
            f"File 2: {self.second_name}",
            TITLE_RULE,
            "",
        ]

    def _added_section(self) -> list[str]:
        lines = [
            f"1. NEW / MISSING METHODS (in {self.first_name}, not {self.second_name})",
            SECTION_RULE,
        ]
        if not self.result.added_or_missing:
            lines.append(NONE_LINE)
        for signature in self.result.added_or_missing:
            lines.append(f"   + {signature.normalized}")
        lines.append("")
        return lines

    def _modified_section(self) -> list[str]:
        lines = ["2. MODIFIED METHODS", SECTION_RULE]
        if not self.result.modified:
            lines.append(NONE_LINE)
        for change in self.result.modified:
            lines += [
                f"   ~ Method '{change.name}' was modified:",
                f"     - {change.first.normalized} (from {self.first_name})",
                f"     + {change.second.normalized} (from {self.second_name})",
                "",
            ]
        lines.append("")
        return lines

    def _removed_section(self) -> list[str]:
        lines = [
            f"3. REMOVED METHODS (in {self.second_name}, not {self.first_name})",
            SECTION_RULE,
        ]
        if not self.result.removed:
            lines.append(NONE_LINE)
        for signature in self.result.removed:
            lines.append(f"   - {signature.normalized}")
        lines.append("")
        return lines


def _dedent(lines: list[str], prefix: str) -> list[str]:
    """Remove ``prefix``, or at most as many leading whitespace characters."""
    width = len(prefix)
    if not width:
        return lines
    dedented = []
    for line in lines:
        if line.startswith(prefix):
            dedented.append(line[width:])
            continue
        leading = len(line) - len(line.lstrip())
        dedented.append(line[min(leading, width):])
    return dedented


def canonicalize_block(block: ServiceBlock, dialect: Dialect = TARPC) -> list[str]:
    """Comment-normalized block lines with one blank line after each method.

    The block is dedented by the trait line's indentation, and a marker
    sharing the trait line is dropped since the document re-adds it.
    """
    first = block.lines[0]
    indent = first[:len(first) - len(first.lstrip())]
    lines = [first.replace(dialect.marker, "", 1).lstrip(), *block.lines[1:]]
    normalized = normalize_comments(lines, indent=indent + DEFAULT_DOC_INDENT)

    canonical = []
    for line in _dedent(normalized, indent):
        if not line.strip():
            continue
        canonical.append(line)
        if line.endswith(";"):
            canonical.append("")
    return canonical


def render_canonical_document(block: ServiceBlock, dialect: Dialect = TARPC) -> str:
    """Standalone document holding only the marker and the service trait."""
    lines = [
        GENERATED_HEADER.format(name=block.source_name),
        "",
        dialect.marker,
        *canonicalize_block(block, dialect),
    ]
    return "\n".join(lines) + "\n"
