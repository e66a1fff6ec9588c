"""Function definitions: header signature plus basic blocks.

The header goes through the `define_header` grammar rule, so definitions
and declarations build signatures the same way. Instructions are kept as
text; only labels are interpreted, to cut the body into blocks.
"""
from __future__ import annotations
import re
from typing import List, Optional, Tuple

from lark import UnexpectedCharacters

from llscan.internals.parser import parse_rule
from llscan.ir.builder import build_signature, first_token, first_tree
from llscan.ir.model import BasicBlock, Define, symbol_name

# `entry:`, `5:`, `"odd name":`, optionally followed by `; preds = ...`
_LABEL_RE = re.compile(r'^([-a-zA-Z$._0-9]+|"[^"]*"):\s*(;.*)?$')


def _shape_error(statement: str, pos: int, line: int, column: int) -> UnexpectedCharacters:
    return UnexpectedCharacters(statement, min(pos, len(statement) - 1), line, column)


def _split_header(statement: str) -> Tuple[str, List[str]]:
    """Separate the header text from the body lines (braces removed)."""
    lines = statement.split("\n")
    header = lines[0].rstrip()
    rest = lines[1:]
    if header.endswith("{"):
        header = header[:-1].rstrip()
    else:
        # `{` on its own line, as llvmlite prints it
        while rest and not rest[0].strip():
            rest = rest[1:]
        if not rest or rest[0].strip() != "{":
            raise _shape_error(statement, len(lines[0]), 1, len(lines[0]) + 1)
        rest = rest[1:]
    while rest and not rest[-1].strip():
        rest = rest[:-1]
    if not rest or rest[-1].strip() != "}":
        raise _shape_error(statement, len(statement), len(lines), 1)
    return header, rest[:-1]


def _split_blocks(body: List[str]) -> Tuple[BasicBlock, ...]:
    blocks: List[BasicBlock] = []
    label: Optional[str] = None
    instructions: List[str] = []
    started = False

    for raw in body:
        line = raw.strip()
        if not line or line.startswith(";"):
            continue
        m = _LABEL_RE.match(line)
        if m:
            if started:
                blocks.append(BasicBlock(label, tuple(instructions)))
            label = symbol_name(m.group(1))
            instructions = []
            started = True
            continue
        started = True
        instructions.append(line)

    if started:
        blocks.append(BasicBlock(label, tuple(instructions)))
    return tuple(blocks)


def parse(statement: str) -> Define:
    """Parse a complete `define ... { ... }` statement.

    Raises lark.UnexpectedInput when the header does not match or the body
    braces are not where a definition needs them.
    """
    header, body = _split_header(statement)
    tree = parse_rule(header, "define_header")
    name = symbol_name(first_token(tree.children, "GLOBAL_NAME"))
    sig = build_signature(first_tree(tree.children, "return_type"), tree.children)
    return Define(name=name, sig=sig, blocks=_split_blocks(body))
