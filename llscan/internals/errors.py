# llscan/internals/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from llscan.internals.report import Span, Reporter


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Category(str, Enum):
    GENERAL   = "general"
    SYNTAX    = "syntax"
    IO        = "io"
    CONFIG    = "config"
    INTERNAL  = "internal"


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    severity: Severity
    text: str
    category: Category = Category.GENERAL
    doc: str = ""


REGISTRY: Dict[str, ErrorMessage] = {}

class _ErrorCatalog:
    def __init__(self, backing: Dict[str, ErrorMessage]) -> None:
        self._registry = backing

    def __getattr__(self, name: str) -> ErrorMessage:
        try:
            return self._registry[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __getitem__(self, code: str) -> ErrorMessage:
        return self._registry[code]


ERR = _ErrorCatalog(REGISTRY)

def emit(r: Reporter, em: ErrorMessage, span: Optional[Span], **kwargs) -> None:
    text = _fmt(em.code, **kwargs)
    if em.severity == Severity.ERROR:
        r.error(em.code, text, span)
    else:
        r.warn(em.code, text, span)

def raise_internal_error(code: str, **kwargs) -> None:
    """Raise a RuntimeError for internal errors.

    Internal errors indicate a bug in llscan (for example a grammar rule
    the tree builder does not know about), not a problem with the input.

    Raises:
        RuntimeError: Always raises with formatted error message
    """
    text = _fmt(code, **kwargs)
    raise RuntimeError(f"{code}: {text}")


#
# --- Helpers
#

def _add(msg: ErrorMessage) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}")

def _fmt(code: str, **kwargs) -> str:
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None

#
# --- Registry population
#

# Internal errors - LE0xxx range
_add(ErrorMessage("LE0001", Severity.ERROR,
    "unknown type node '{node}'",
    Category.INTERNAL, "The grammar produced a type tree the builder does not handle."))

# Syntax errors - LE1xxx range
_add(ErrorMessage("LE1001", Severity.ERROR,
    "unrecognized top-level construct: {text}",
    Category.SYNTAX, "No item recognizer accepted the statement; the IR was probably emitted by an unsupported toolchain version."))

_add(ErrorMessage("LE1002", Severity.ERROR,
    "unterminated braces in statement: {text}",
    Category.SYNTAX, "Input ended inside an open '{' (usually a truncated function body)."))

# I/O and configuration - LE2xxx range
_add(ErrorMessage("LE2001", Severity.ERROR,
    "cannot read {path}: {reason}",
    Category.IO, "The source file could not be opened or decoded as UTF-8."))

_add(ErrorMessage("LE2002", Severity.ERROR,
    "invalid configuration: {message}",
    Category.CONFIG, "llscan.toml contains an unknown value."))

# Warnings - LWxxxx range
_add(ErrorMessage("LW0001", Severity.WARNING,
    "missing trailing newline", Category.GENERAL,
    "Source file should end with a newline character."))
