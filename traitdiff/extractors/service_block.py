"""Locate the trait block annotated with a service marker attribute."""

import logging
from collections.abc import Sequence
from enum import Enum

from ..analyzers.base import TARPC, Dialect, NoServiceBlockFound, ServiceBlock
from .comments import mask_source

logger = logging.getLogger(__name__)


class ExtractionState(str, Enum):
    SEEKING_MARKER = "seeking_marker"
    SEEKING_TRAIT = "seeking_trait"
    CAPTURING = "capturing"
    DONE = "done"


_FAILURE_REASONS = {
    ExtractionState.SEEKING_MARKER: "marker attribute {marker} not found",
    ExtractionState.SEEKING_TRAIT: "no '{keyword}' declaration after {marker}",
    ExtractionState.CAPTURING: "braces never balance after the '{keyword}' declaration",
}


def extract_service_block(
    lines: Sequence[str],
    dialect: Dialect = TARPC,
    source_name: str = "<source>",
) -> ServiceBlock:
    """Return the first trait block following the dialect's marker.

    Markers, keywords and braces are looked for in a masked copy of the
    source, so occurrences inside string literals and comments are ignored.
    Captured lines are the raw ones.
    """
    masked = mask_source("\n".join(lines)).split("\n") if lines else []
    trait_pattern = dialect.trait_pattern()

    state = ExtractionState.SEEKING_MARKER
    captured: list[str] = []
    depth = 0
    opened = False
    start_line = 0
    end_line = 0

    for number, (raw, code) in enumerate(zip(lines, masked), start=1):
        if state is ExtractionState.SEEKING_MARKER and dialect.marker in code:
            logger.debug("%s:%d: found marker %s", source_name, number, dialect.marker)
            state = ExtractionState.SEEKING_TRAIT

        if state is ExtractionState.SEEKING_TRAIT and trait_pattern.search(code):
            state = ExtractionState.CAPTURING
            start_line = number

        if state is not ExtractionState.CAPTURING:
            continue

        captured.append(raw)
        for ch in code:
            if ch == "{":
                depth += 1
                opened = opened or depth > 0
            elif ch == "}":
                depth -= 1
                if opened and depth == 0:
                    break

        if opened and depth == 0:
            state = ExtractionState.DONE
            end_line = number
            break

    if state is not ExtractionState.DONE:
        reason = _FAILURE_REASONS[state].format(
            marker=dialect.marker, keyword=dialect.trait_keyword
        )
        raise NoServiceBlockFound(source_name, reason)

    logger.debug("%s: service block spans lines %d-%d", source_name, start_line, end_line)
    return ServiceBlock(
        source_name=source_name,
        lines=tuple(captured),
        start_line=start_line,
        end_line=end_line,
    )
