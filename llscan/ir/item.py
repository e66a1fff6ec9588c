"""Top-level item recognizers and the ordered dispatcher.

Every recognizer takes the text of one statement and either returns an Item
or raises lark.UnexpectedInput. Recognizers parse the statement from
scratch, so a failed alternative leaves nothing consumed for the next one.
"""
from __future__ import annotations
from typing import Callable, Iterator, NamedTuple, Optional, Tuple

from lark import UnexpectedInput

from llscan.internals.parser import parse_rule
from llscan.internals.report import Span, span_of
from llscan.ir import define
from llscan.ir.builder import build_signature, first_token, first_tree
from llscan.ir.exceptions import ItemParseError, UnrecognizedItemError
from llscan.ir.model import (
    Alias, Attributes, Comment, Declare, Global, Item, Metadata,
    SourceFilename, Target, TypeDef, is_intrinsic, symbol_name,
)
from llscan.ir.source import line_start, statement_bounds


# ------------------------
# Shortcut recognizers
# ------------------------

def comment(statement: str) -> Item:
    parse_rule(statement, "comment")
    return Comment()


def source_filename(statement: str) -> Item:
    parse_rule(statement, "source_filename")
    return SourceFilename()


def target(statement: str) -> Item:
    parse_rule(statement, "target")
    return Target()


def type_def(statement: str) -> Item:
    parse_rule(statement, "type_def")
    return TypeDef()


def global_var(statement: str) -> Item:
    parse_rule(statement, "global_var")
    return Global()


def attributes(statement: str) -> Item:
    parse_rule(statement, "attribute_group")
    return Attributes()


def metadata(statement: str) -> Item:
    parse_rule(statement, "metadata")
    return Metadata()


# ------------------------
# Structured recognizers
# ------------------------

def alias(statement: str) -> Item:
    """`@new = <attrs> alias T, T* @old`; both types are checked, then dropped."""
    tree = parse_rule(statement, "alias")
    names = [c for c in tree.children if getattr(c, "type", None) == "GLOBAL_NAME"]
    return Alias(symbol_name(names[0]), symbol_name(names[-1]))


def declare(statement: str) -> Item:
    """`declare <attrs> <ret> @name(<params>) <trailing>`.

    The head is parsed first. Intrinsics stop there with no signature; for
    any other symbol the parameter text is parsed as a second step and only
    the parameter types are kept.
    """
    tree = parse_rule(statement, "declare")
    name = symbol_name(first_token(tree.children, "GLOBAL_NAME"))
    if is_intrinsic(name):
        return Declare(name=name, sig=None)

    rest = first_token(tree.children, "REST")
    try:
        params = parse_rule(str(rest), "declare_params")
    except UnexpectedInput as e:
        # report the failure relative to the whole statement
        if getattr(e, "column", -1) > 0:
            e.pos_in_stream += rest.start_pos
            e.column += rest.column - 1
        raise
    sig = build_signature(first_tree(tree.children, "return_type"), params.children)
    return Declare(name=name, sig=sig)


def definition(statement: str) -> Item:
    return define.parse(statement)


# ------------------------
# Dispatcher
# ------------------------

class Alternative(NamedTuple):
    leader: str                                # required statement prefix
    recognize: Callable[[str], Item]


# Cheap and frequent constructs first. The leaders keep the Earley parser
# from running on statements that cannot possibly match.
ALTERNATIVES: Tuple[Alternative, ...] = (
    Alternative(";", comment),
    Alternative("source_filename", source_filename),
    Alternative("target", target),
    Alternative("%", type_def),
    Alternative("@", global_var),
    Alternative("@", alias),
    Alternative("define", definition),
    Alternative("declare", declare),
    Alternative("attributes", attributes),
    Alternative("!", metadata),
)


def recognize(statement: str) -> Item:
    """Classify one statement; the first matching alternative wins.

    Raises:
        UnrecognizedItemError: no alternative matched. Its span points at the
            furthest position any candidate grammar reached, relative to the
            statement.
    """
    furthest: Optional[UnexpectedInput] = None
    for alt in ALTERNATIVES:
        if not statement.startswith(alt.leader):
            continue
        try:
            return alt.recognize(statement)
        except UnexpectedInput as e:
            if furthest is None or getattr(e, "pos_in_stream", -1) > getattr(furthest, "pos_in_stream", -1):
                furthest = e
    first_line = statement.split("\n", 1)[0]
    raise UnrecognizedItemError(first_line, span_of(furthest), statement)


def parse_item(text: str) -> Tuple[Item, str]:
    """Recognize the statement at the head of `text`.

    Returns the item and the unconsumed remainder (after the statement's
    terminating newline).
    """
    bounds = statement_bounds(text)
    if bounds is None:
        raise UnrecognizedItemError("<end of input>", None, text)
    start, end = bounds
    item = recognize(text[start:end].rstrip())
    return item, text[end + 1:]


def iter_items(text: str) -> Iterator[Tuple[Item, Span]]:
    """Yield every item of a module with the span of its statement.

    Errors carry module-relative spans and the unconsumed input in `rest`.
    """
    pos = 0
    line = 1
    while True:
        bounds = statement_bounds(text, pos)
        if bounds is None:
            return
        start, end = bounds
        line += text.count("\n", pos, start)
        statement = text[start:end].rstrip()
        last_line = statement.rsplit("\n", 1)[-1]
        end_line = line + statement.count("\n")
        span = Span(line, start - line_start(text, start) + 1, end_line, len(last_line) + 1)
        try:
            item = recognize(statement)
        except ItemParseError as e:
            if e.span is not None:
                e.span = e.span.shifted(line - 1, start - line_start(text, start))
            else:
                e.span = span
            e.rest = text[start:]
            raise
        yield item, span
        pos = end
        line = end_line
