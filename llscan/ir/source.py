"""Statement splitting for textual IR.

A statement is one physical line, unless it leaves a `{` open. Then it runs
to the line where the brace closes. Function definitions always run until
their body has been opened and closed, which covers the style where `{`
sits on its own line after the header.
"""
from __future__ import annotations
from typing import Optional, Tuple

from llscan.internals.report import Span
from llscan.ir.exceptions import UnterminatedBodyError

_BLANK = " \t\r\n"


def _starts_define(text: str, start: int) -> bool:
    end = start + len("define")
    return text.startswith("define", start) and (end == len(text) or text[end] in _BLANK)


def statement_bounds(text: str, pos: int = 0) -> Optional[Tuple[int, int]]:
    """Locate the next statement at or after `pos`.

    Returns (start, end) with `end` at the terminating newline (or the end of
    `text`), or None when only whitespace remains.

    Raises:
        UnterminatedBodyError: input ends inside an open brace.
    """
    n = len(text)
    while pos < n and text[pos] in _BLANK:
        pos += 1
    if pos >= n:
        return None

    start = pos
    needs_body = _starts_define(text, start)
    depth = 0
    opened = False
    in_string = False
    i = start
    while i < n:
        ch = text[i]
        if ch == "\n":
            in_string = False
            if depth <= 0 and (opened or not needs_body):
                return start, i
        elif in_string:
            if ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == ";":
            # comment runs to end of line
            nl = text.find("\n", i)
            i = n if nl < 0 else nl
            continue
        elif ch == "{":
            depth += 1
            opened = True
        elif ch == "}":
            depth -= 1
        i += 1

    if depth > 0 or (needs_body and not opened):
        line = text.count("\n", 0, start) + 1
        first_line = text[start:].split("\n", 1)[0].strip()
        raise UnterminatedBodyError(first_line, Span(line, 1, line, len(first_line) + 1), text[start:])
    return start, n


def line_start(text: str, pos: int) -> int:
    """Index of the first character of the line containing `pos`."""
    return text.rfind("\n", 0, pos) + 1
