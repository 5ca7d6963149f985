from __future__ import annotations

from typing import Iterator, List, Tuple


_CR = "\r"
_LF = "\n"


def iter_segments(text: str) -> Iterator[Tuple[str, str]]:
    """
    Split text into (segment, terminator) pairs.

    The terminator is "\\r", "\\n", or "" for end of input. Exactly one
    end-of-input pair is emitted, so "abc\\r" yields ("abc", "\\r") and
    then ("", "").
    """
    start = 0
    i = 0
    L = len(text)
    while i < L:
        ch = text[i]
        if ch == _CR or ch == _LF:
            yield text[start:i], ch
            start = i + 1
        i += 1
    yield text[start:], ""


def overwrite(line: str, segment: str) -> str:
    # Cursor is at column 0; untouched trailing characters stay visible
    if len(segment) >= len(line):
        return segment
    return segment + line[len(segment):]


def render(text: str) -> str:
    """
    Render text the way a terminal displays it after carriage returns.

    Tools print progress like 'Downloading: 1%\\r' followed by
    'Downloading: 2%\\r'; on screen the digit simply changes in place.
    This collapses such overwrites into the final visible text.

    - A "\\r" moves the cursor back to column 0 of the current line.
    - Text after it overwrites the line from the start; characters past
      the end of the new text are kept.
    - A "\\n" starts a new line.

    Other control characters and escape sequences are left untouched.
    """
    # Happy path: nothing to overwrite
    if _CR not in text:
        return text

    lines: List[str] = [""]
    for segment, terminator in iter_segments(text):
        if segment:
            lines[-1] = overwrite(lines[-1], segment)
        if terminator == _LF:
            lines.append("")
    return _LF.join(lines)


__all__ = ["iter_segments", "overwrite", "render"]
