"""Snippet data types and the snippet classifier."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag

# The literal trigger text a user types.
LHS = str


@dataclass(frozen=True)
class RHSInfo:
    """Metadata computed while compiling a right-hand side."""

    has_newline: bool = False
    cursor_end: int = 0  # chars to move left from the end of the inserted text


@dataclass(frozen=True)
class RHS:
    """A compiled right-hand side: text to insert plus cursor metadata."""

    data: str
    info: RHSInfo = field(default_factory=RHSInfo)


@dataclass(frozen=True)
class Snippet:
    """A left-hand side paired with its compiled expansion."""

    lhs: LHS
    rhs: RHS


class SnippetType(IntFlag):
    """Single-/multi-line shape of a snippet.

    Bit 0 is set when the expansion contains a line break, bit 1 when the
    trigger text does.
    """

    SLSR = 0
    SLMR = 1
    MLSR = 2
    MLMR = 3


def classify(snippet: Snippet) -> SnippetType:
    """Return the shape of a snippet. Total: every snippet has a type."""
    kind = SnippetType.SLSR
    if snippet.rhs.info.has_newline:
        kind |= SnippetType.SLMR
    if "\n" in snippet.lhs:
        kind |= SnippetType.MLSR
    return SnippetType(kind)
