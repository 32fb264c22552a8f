"""Whitespace tokenizer for configuration lines."""

from __future__ import annotations

COMMENT_MARKER = "#"
BLANKS = " \t"
_TERMINATORS = BLANKS + COMMENT_MARKER + "\r\n"


def skip_blank(line: str, pos: int = 0) -> int | None:
    """Advance ``pos`` past spaces and tabs.

    Returns the index of the first content character, or ``None`` when a
    comment marker or the end of the line is reached first.
    """

    end = len(line)
    while pos < end and line[pos] in BLANKS:
        pos += 1
    if pos >= end or line[pos] in (COMMENT_MARKER, "\r", "\n"):
        return None
    return pos


def read_token(line: str, pos: int) -> tuple[str, int]:
    """Read a maximal run of non-blank, non-comment characters starting at ``pos``.

    The returned cursor points at the terminator (or the end of the line).
    """

    start = pos
    end = len(line)
    while pos < end and line[pos] not in _TERMINATORS:
        pos += 1
    return line[start:pos], pos


def at_terminator(line: str, pos: int) -> bool:
    """Return True when ``pos`` sits on end of line or a comment marker."""

    return pos >= len(line) or line[pos] in (COMMENT_MARKER, "\r", "\n")


def rest_of_line(line: str, pos: int) -> str:
    """Return the text from ``pos`` up to the comment marker, stripped of blanks."""

    text = line[pos:]
    marker = text.find(COMMENT_MARKER)
    if marker != -1:
        text = text[:marker]
    return text.strip(BLANKS + "\r\n")


def tokens(line: str, pos: int = 0) -> list[str]:
    """Split the content of ``line`` from ``pos`` into tokens."""

    found: list[str] = []
    cursor = skip_blank(line, pos)
    while cursor is not None:
        token, cursor = read_token(line, cursor)
        found.append(token)
        cursor = skip_blank(line, cursor)
    return found
