"""Lark parser setup for the item grammar."""
from __future__ import annotations

from pathlib import Path

from lark import Lark, Tree

GRAMMAR_PATH = Path(__file__).parent.parent / "grammar.lark"

# Start rules, one per recognizer. The dispatcher chooses the order.
START_RULES = (
    "comment",
    "source_filename",
    "target",
    "type_def",
    "global_var",
    "alias",
    "define_header",
    "declare",
    "declare_params",
    "attribute_group",
    "metadata",
)

_item_parser: Lark | None = None


def get_item_parser() -> Lark:
    """Get or create the shared Earley parser for all item start rules.

    Earley with the dynamic lexer is used because item prefixes overlap
    (`@x = <attrs> global` vs `@x = <attrs> alias`) and the type grammar is
    left recursive (`T*`, `R (T)`), neither of which LALR can express here.
    """
    global _item_parser
    if _item_parser is None:
        _item_parser = Lark.open(
            str(GRAMMAR_PATH),
            start=list(START_RULES),
            parser="earley",
            lexer="dynamic",
            propagate_positions=True,
            maybe_placeholders=False,
        )
    return _item_parser


def parse_rule(text: str, start: str) -> Tree:
    """Parse `text` completely as the given start rule.

    Raises lark.UnexpectedInput when the text does not match. Every call is
    an independent parse, so a failure leaves nothing behind for the next
    attempt.
    """
    return get_item_parser().parse(text, start=start)
