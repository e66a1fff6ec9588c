# llscan/ir/model.py
from __future__ import annotations
import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, List, Optional, Tuple

from llscan.ir.types import Type

INTRINSIC_PREFIX = "llvm."


def is_intrinsic(name: str) -> bool:
    """True for compiler-provided symbols such as `llvm.memcpy.p0i8.p0i8.i32`."""
    return name.startswith(INTRINSIC_PREFIX)


class ItemKind(str, Enum):
    ALIAS = "alias"
    COMMENT = "comment"
    SOURCE_FILENAME = "source_filename"
    TARGET = "target"
    GLOBAL = "global"
    TYPE = "type"
    DEFINE = "define"
    DECLARE = "declare"
    ATTRIBUTES = "attributes"
    METADATA = "metadata"

    def __str__(self) -> str:
        return self.value


# === Signatures ===

@dataclass(frozen=True)
class FunctionSignature:
    output: Optional[Type]             # None encodes a void return
    inputs: Tuple[Type, ...] = ()      # one per declared parameter, source order
    variadic: bool = False             # trailing `...`, not counted in inputs

    def __str__(self) -> str:
        params = [str(t) for t in self.inputs]
        if self.variadic:
            params.append("...")
        ret = "void" if self.output is None else str(self.output)
        return f"{ret} ({', '.join(params)})"


# === Items ===

@dataclass(frozen=True)
class Item:
    kind: ClassVar[ItemKind]

# `@__pre_init = unnamed_addr alias void (), void ()* @DefaultPreInit`
@dataclass(frozen=True)
class Alias(Item):
    kind: ClassVar[ItemKind] = ItemKind.ALIAS
    name: str
    target: str

# `; ModuleID = 'ipv4.e7riqz8u-cgu.0'`
@dataclass(frozen=True)
class Comment(Item):
    kind: ClassVar[ItemKind] = ItemKind.COMMENT

# `source_filename = "ipv4.e7riqz8u-cgu.0"`
@dataclass(frozen=True)
class SourceFilename(Item):
    kind: ClassVar[ItemKind] = ItemKind.SOURCE_FILENAME

# `target datalayout = "e-m:e-p:32:32-i64:64-v128:64:128-a:0:32-n32-S64"`
@dataclass(frozen=True)
class Target(Item):
    kind: ClassVar[ItemKind] = ItemKind.TARGET

# `@__sbss = external global i32`
@dataclass(frozen=True)
class Global(Item):
    kind: ClassVar[ItemKind] = ItemKind.GLOBAL

# `%Struct = type { i8, i16 }`
@dataclass(frozen=True)
class TypeDef(Item):
    kind: ClassVar[ItemKind] = ItemKind.TYPE

# `attributes #0 = { norecurse nounwind readnone "target-cpu"="generic" }`
@dataclass(frozen=True)
class Attributes(Item):
    kind: ClassVar[ItemKind] = ItemKind.ATTRIBUTES

# `!0 = !DIGlobalVariableExpression(var: !1, expr: !DIExpression())`
@dataclass(frozen=True)
class Metadata(Item):
    kind: ClassVar[ItemKind] = ItemKind.METADATA

# `declare void @llvm.dbg.declare(metadata, metadata, metadata) #4`
@dataclass(frozen=True)
class Declare(Item):
    """A function declaration.

    `sig` is None exactly for intrinsics; their parameter lists are never
    parsed.
    """
    kind: ClassVar[ItemKind] = ItemKind.DECLARE
    name: str
    sig: Optional[FunctionSignature] = None


# === Function definitions ===

# `call`/`invoke` as an opcode, not inside a value name such as `%call.i`
_CALLEE_RE = re.compile(r'(?<![-%@\w.$])(?:call|invoke)\b[^@;]*@("[^"]*"|[-a-zA-Z$._0-9]+)')

@dataclass(frozen=True)
class BasicBlock:
    label: Optional[str]               # None for an unlabeled entry block
    instructions: Tuple[str, ...] = ()

@dataclass(frozen=True)
class Define(Item):
    """`define void @main() unnamed_addr #3 !dbg !4512 { (..) }`"""
    kind: ClassVar[ItemKind] = ItemKind.DEFINE
    name: str
    sig: FunctionSignature
    blocks: Tuple[BasicBlock, ...] = ()

    def callees(self) -> Tuple[str, ...]:
        """Direct call and invoke targets, in order of first appearance."""
        seen: List[str] = []
        for block in self.blocks:
            for inst in block.instructions:
                for m in _CALLEE_RE.finditer(inst):
                    name = symbol_name(m.group(1))
                    if name not in seen:
                        seen.append(name)
        return tuple(seen)


def symbol_name(raw: str) -> str:
    """Strip a leading `@`/`%` sigil and surrounding quotes."""
    if raw[:1] in ("@", "%"):
        raw = raw[1:]
    if len(raw) >= 2 and raw[0] == '"' and raw[-1] == '"':
        raw = raw[1:-1]
    return raw
