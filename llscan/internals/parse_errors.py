"""Shared parse exception handling for the CLI."""
from __future__ import annotations

from llscan.ir.exceptions import UnrecognizedItemError, UnterminatedBodyError


def handle_parse_exception(exc: Exception, reporter) -> bool:
    """Handle a parse exception by emitting diagnostics through the reporter.

    Args:
        exc: The exception to handle.
        reporter: Reporter for error/warning collection.

    Returns:
        True if the exception was handled, False otherwise.
    """
    from llscan.internals import errors as er

    if isinstance(exc, UnterminatedBodyError):
        er.emit(reporter, er.ERR.LE1002, exc.span, text=_clip(exc.statement))
        return True

    if isinstance(exc, UnrecognizedItemError):
        er.emit(reporter, er.ERR.LE1001, exc.span, text=_clip(exc.statement))
        return True

    return False


def _clip(text: str, limit: int = 60) -> str:
    text = text.strip()
    return text if len(text) <= limit else text[:limit - 3] + "..."
