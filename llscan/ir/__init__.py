"""
Item-level view of textual LLVM IR.

Exports:
    parse_item, iter_items, recognize: the ordered item dispatcher
    parse_module, Module: symbol table / call graph over the item stream
    Item variants and FunctionSignature: the data model
    Exceptions: failures of the item pass
"""
from llscan.ir.item import iter_items, parse_item, recognize
from llscan.ir.module import Module, parse_module
from llscan.ir.model import (
    Alias,
    Attributes,
    BasicBlock,
    Comment,
    Declare,
    Define,
    FunctionSignature,
    Global,
    Item,
    ItemKind,
    Metadata,
    SourceFilename,
    Target,
    TypeDef,
    is_intrinsic,
)
from llscan.ir.exceptions import (
    ItemParseError,
    UnrecognizedItemError,
    UnterminatedBodyError,
)

__all__ = [
    'iter_items',
    'parse_item',
    'recognize',
    'Module',
    'parse_module',
    'Alias',
    'Attributes',
    'BasicBlock',
    'Comment',
    'Declare',
    'Define',
    'FunctionSignature',
    'Global',
    'Item',
    'ItemKind',
    'Metadata',
    'SourceFilename',
    'Target',
    'TypeDef',
    'is_intrinsic',
    'ItemParseError',
    'UnrecognizedItemError',
    'UnterminatedBodyError',
]
