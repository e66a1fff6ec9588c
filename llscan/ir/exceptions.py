"""Exceptions raised while splitting and recognizing top-level items."""
from __future__ import annotations

from typing import Optional

from llscan.internals.report import Span


class ItemParseError(Exception):
    """Base for failures that stop the item pass."""
    def __init__(self, message: str, span: Optional[Span] = None, rest: str = ""):
        super().__init__(message)
        self.span = span
        self.rest = rest


class UnrecognizedItemError(ItemParseError):
    """No recognizer accepted the statement at the head of `rest`."""
    def __init__(self, statement: str, span: Optional[Span] = None, rest: str = ""):
        super().__init__(f"unrecognized top-level construct: {statement}", span, rest)
        self.statement = statement


class UnterminatedBodyError(ItemParseError):
    """Input ended while a `{` was still open."""
    def __init__(self, statement: str, span: Optional[Span] = None, rest: str = ""):
        super().__init__(f"unterminated braces in statement: {statement}", span, rest)
        self.statement = statement
