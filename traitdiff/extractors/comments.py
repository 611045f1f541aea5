"""Comment handling for interface source text.

A small lexer splits text into code, literals and comments. It only knows
enough to tell a brace in code from one inside a string, a char literal or
a comment; it is not a grammar.
"""

import re
from collections.abc import Iterator, Sequence
from enum import Enum


class Segment(str, Enum):
    CODE = "code"
    STRING = "string"
    CHAR = "char"
    LINE_COMMENT = "line_comment"
    DOC_COMMENT = "doc_comment"
    BLOCK_COMMENT = "block_comment"


LITERALS = {Segment.STRING, Segment.CHAR}
COMMENTS = {Segment.LINE_COMMENT, Segment.DOC_COMMENT, Segment.BLOCK_COMMENT}

DOC_MARKER = "///"
DEFAULT_DOC_INDENT = "    "

DOC_LINE = re.compile(r"^\s*///(?!/)(.*)$")


def _block_comment_end(text: str, start: int) -> int:
    """Index just past the ``*/`` closing the comment opened at ``start``."""
    depth = 0
    i = start
    n = len(text)
    while i < n:
        if text.startswith("/*", i):
            depth += 1
            i += 2
        elif text.startswith("*/", i):
            depth -= 1
            i += 2
            if depth == 0:
                return i
        else:
            i += 1
    return n


def _string_end(text: str, start: int) -> int:
    i = start + 1
    n = len(text)
    while i < n:
        if text[i] == "\\":
            i += 2
        elif text[i] == '"':
            return i + 1
        else:
            i += 1
    return n


def _char_end(text: str, start: int) -> int | None:
    """End of a char literal at ``start``, or None for a lifetime like ``'a``."""
    if text.startswith("\\", start + 1):
        close = text.find("'", start + 3)
        if close != -1 and "\n" not in text[start:close]:
            return close + 1
        return None
    if start + 2 < len(text) and text[start + 2] == "'" and text[start + 1] != "\n":
        return start + 3
    return None


def _is_doc_comment(text: str, start: int) -> bool:
    """``///`` starts a doc comment; ``////`` and longer are plain comments."""
    return text.startswith(DOC_MARKER, start) and not text.startswith("////", start)


def iter_segments(text: str) -> Iterator[tuple[Segment, int, int]]:
    """Yield ``(kind, start, end)`` spans covering ``text`` in order."""
    n = len(text)
    code_start = 0
    i = 0

    while i < n:
        ch = text[i]
        kind = None
        end = i

        if text.startswith("//", i):
            newline = text.find("\n", i)
            end = n if newline == -1 else newline
            kind = Segment.DOC_COMMENT if _is_doc_comment(text, i) else Segment.LINE_COMMENT
        elif text.startswith("/*", i):
            end = _block_comment_end(text, i)
            kind = Segment.BLOCK_COMMENT
        elif ch == '"':
            end = _string_end(text, i)
            kind = Segment.STRING
        elif ch == "'":
            char_end = _char_end(text, i)
            if char_end is not None:
                end = char_end
                kind = Segment.CHAR

        if kind is None:
            i += 1
            continue

        if code_start < i:
            yield Segment.CODE, code_start, i
        yield kind, i, end
        i = code_start = end

    if code_start < n:
        yield Segment.CODE, code_start, n


def _blank_out(fragment: str) -> str:
    return re.sub(r"[^\n]", " ", fragment)


def mask_source(text: str) -> str:
    """Replace literal and comment characters with spaces.

    The result has the same length and line structure as ``text``, so a
    character found in it sits at the same position in ``text``.
    """
    parts = []
    for kind, start, end in iter_segments(text):
        fragment = text[start:end]
        parts.append(fragment if kind is Segment.CODE else _blank_out(fragment))
    return "".join(parts)


def strip_comments(lines: Sequence[str], keep_docs: bool = True) -> list[str]:
    """Remove comments from ``lines``.

    Line comments truncate their line, block comments disappear but leave
    their line breaks behind, and documentation comments survive only when
    ``keep_docs`` is set. The number of lines never changes.
    """
    if not lines:
        return []
    text = "\n".join(lines)
    parts = []
    for kind, start, end in iter_segments(text):
        fragment = text[start:end]
        if kind is Segment.BLOCK_COMMENT:
            parts.append("\n" * fragment.count("\n"))
        elif kind is Segment.LINE_COMMENT:
            continue
        elif kind is Segment.DOC_COMMENT and not keep_docs:
            continue
        else:
            parts.append(fragment)
    return [line.rstrip() for line in "".join(parts).split("\n")]


def collapse_doc_comments(lines: Sequence[str], indent: str = DEFAULT_DOC_INDENT) -> list[str]:
    """Keep only the first line of each run of consecutive ``///`` lines."""
    collapsed = []
    in_run = False
    for line in lines:
        match = DOC_LINE.match(line)
        if match is None:
            in_run = False
            collapsed.append(line)
        elif not in_run:
            in_run = True
            collapsed.append(f"{indent}{DOC_MARKER}{match.group(1)}")
    return collapsed


def normalize_comments(lines: Sequence[str], indent: str = DEFAULT_DOC_INDENT) -> list[str]:
    """Strip non-documentation comments and collapse documentation runs."""
    return collapse_doc_comments(strip_comments(lines, keep_docs=True), indent)
