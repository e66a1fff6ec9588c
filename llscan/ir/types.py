from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class FloatKind(Enum):
    HALF = "half"
    BFLOAT = "bfloat"
    FLOAT = "float"
    DOUBLE = "double"
    FP128 = "fp128"
    X86_FP80 = "x86_fp80"
    PPC_FP128 = "ppc_fp128"

    def __str__(self) -> str:
        return self.value

@dataclass(frozen=True)
class IntegerType:
    bits: int

    def __str__(self) -> str:
        return f"i{self.bits}"

@dataclass(frozen=True)
class FloatType:
    kind: FloatKind

    def __str__(self) -> str:
        return str(self.kind)

@dataclass(frozen=True)
class PointerType:
    """Typed pointer, `T*` or `T addrspace(N)*`."""
    pointee: "Type"
    addrspace: int = 0

    def __str__(self) -> str:
        if self.addrspace:
            return f"{self.pointee} addrspace({self.addrspace})*"
        return f"{self.pointee}*"

@dataclass(frozen=True)
class OpaquePointerType:
    """`ptr` as emitted by LLVM 15 and later."""
    addrspace: int = 0

    def __str__(self) -> str:
        if self.addrspace:
            return f"ptr addrspace({self.addrspace})"
        return "ptr"

@dataclass(frozen=True)
class ArrayType:
    length: int
    element: "Type"

    def __str__(self) -> str:
        return f"[{self.length} x {self.element}]"

@dataclass(frozen=True)
class VectorType:
    length: int
    element: "Type"

    def __str__(self) -> str:
        return f"<{self.length} x {self.element}>"

@dataclass(frozen=True)
class StructType:
    """Literal (anonymous) struct; `packed` for the `<{ ... }>` form."""
    fields: Tuple["Type", ...] = ()
    packed: bool = False

    def __str__(self) -> str:
        inner = ", ".join(str(f) for f in self.fields)
        body = f"{{ {inner} }}" if inner else "{}"
        return f"<{body}>" if self.packed else body

@dataclass(frozen=True)
class NamedType:
    """Reference to an identified struct, `%Name` (name stored without the sigil)."""
    name: str

    def __str__(self) -> str:
        if _needs_quotes(self.name):
            return f'%"{self.name}"'
        return f"%{self.name}"

@dataclass(frozen=True)
class FunctionType:
    output: Optional["Type"]          # None is `void`
    inputs: Tuple["Type", ...] = ()
    variadic: bool = False

    def __str__(self) -> str:
        params = [str(t) for t in self.inputs]
        if self.variadic:
            params.append("...")
        ret = "void" if self.output is None else str(self.output)
        return f"{ret} ({', '.join(params)})"

@dataclass(frozen=True)
class MetadataType:
    def __str__(self) -> str:
        return "metadata"

@dataclass(frozen=True)
class LabelType:
    def __str__(self) -> str:
        return "label"

@dataclass(frozen=True)
class TokenType:
    def __str__(self) -> str:
        return "token"


Type = Union[
    IntegerType,
    FloatType,
    PointerType,
    OpaquePointerType,
    ArrayType,
    VectorType,
    StructType,
    NamedType,
    FunctionType,
    MetadataType,
    LabelType,
    TokenType,
]


def _needs_quotes(name: str) -> bool:
    return not name or not all(ch.isalnum() or ch in "-$._" for ch in name)
