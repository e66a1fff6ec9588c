"""Build type and signature values from item parse trees.

The grammar labels every type alternative (`int_t`, `pointer_t`, ...);
`build_type` dispatches on that label the same way for every item kind, so
declare, define and alias share one notion of a type.
"""
from __future__ import annotations
from typing import Callable, List, Optional, Sequence

from lark import Token, Tree

from llscan.internals.errors import raise_internal_error
from llscan.ir.model import FunctionSignature, symbol_name
from llscan.ir.types import (
    ArrayType, FloatKind, FloatType, FunctionType, IntegerType, LabelType,
    MetadataType, NamedType, OpaquePointerType, PointerType, StructType,
    TokenType, Type, VectorType,
)


# ------------------------
# Tree navigation
# ------------------------

def first(children: Sequence[object], pred: Callable) -> Optional[object]:
    """Find first child matching predicate."""
    for ch in children:
        if pred(ch):
            return ch
    return None


def first_token(children: Sequence[object], type_: str) -> Optional[Token]:
    """Get first token of the given terminal type."""
    return first(children, lambda c: isinstance(c, Token) and c.type == type_)  # type: ignore[return-value]


def first_tree(children: Sequence[object], data: str) -> Optional[Tree]:
    """Get first Tree child with specific data tag."""
    return first(children, lambda c: isinstance(c, Tree) and c.data == data)  # type: ignore[return-value]


def trees(children: Sequence[object], data: str) -> List[Tree]:
    return [c for c in children if isinstance(c, Tree) and c.data == data]


def type_trees(children: Sequence[object]) -> List[Tree]:
    """Children that are type nodes, in source order."""
    return [c for c in children if isinstance(c, Tree) and c.data in _TYPE_BUILDERS]


# ------------------------
# Types
# ------------------------

def _addrspace(children: Sequence[object]) -> int:
    node = first_tree(children, "addrspace")
    if node is None:
        return 0
    return int(first_token(node.children, "INT"))


def _int_t(node: Tree) -> Type:
    return IntegerType(int(first_token(node.children, "INT_TYPE")[1:]))


def _float_t(node: Tree) -> Type:
    return FloatType(FloatKind(str(first_token(node.children, "FLOAT_TYPE"))))


def _opaque_ptr_t(node: Tree) -> Type:
    return OpaquePointerType(_addrspace(node.children))


def _pointer_t(node: Tree) -> Type:
    (pointee,) = type_trees(node.children)
    return PointerType(build_type(pointee), _addrspace(node.children))


def _array_t(node: Tree) -> Type:
    (element,) = type_trees(node.children)
    return ArrayType(int(first_token(node.children, "INT")), build_type(element))


def _vector_t(node: Tree) -> Type:
    (element,) = type_trees(node.children)
    return VectorType(int(first_token(node.children, "INT")), build_type(element))


def _struct_t(node: Tree) -> Type:
    return StructType(tuple(build_type(t) for t in type_trees(node.children)))


def _packed_struct_t(node: Tree) -> Type:
    return StructType(tuple(build_type(t) for t in type_trees(node.children)), packed=True)


def _named_t(node: Tree) -> Type:
    return NamedType(symbol_name(first_token(node.children, "LOCAL_NAME")))


def _function_t(node: Tree) -> Type:
    ret = first_tree(node.children, "return_type")
    return FunctionType(
        output=build_return_type(ret),
        inputs=tuple(build_type(t) for t in type_trees(node.children)),
        variadic=first_token(node.children, "VARARGS") is not None,
    )


_TYPE_BUILDERS: dict[str, Callable[[Tree], Type]] = {
    "int_t": _int_t,
    "float_t": _float_t,
    "opaque_ptr_t": _opaque_ptr_t,
    "pointer_t": _pointer_t,
    "array_t": _array_t,
    "vector_t": _vector_t,
    "struct_t": _struct_t,
    "packed_struct_t": _packed_struct_t,
    "named_t": _named_t,
    "function_t": _function_t,
    "metadata_t": lambda node: MetadataType(),
    "label_t": lambda node: LabelType(),
    "token_t": lambda node: TokenType(),
}


def build_type(node: Tree) -> Type:
    """Build a Type from a type tree."""
    builder = _TYPE_BUILDERS.get(node.data)
    if builder is None:
        raise_internal_error("LE0001", node=node.data)
    return builder(node)


def build_return_type(node: Tree) -> Optional[Type]:
    """`return_type` is either the VOID token (None) or one type tree."""
    if first_token(node.children, "VOID") is not None:
        return None
    (ty,) = type_trees(node.children)
    return build_type(ty)


# ------------------------
# Signatures
# ------------------------

def build_signature(return_node: Tree, children: Sequence[object]) -> FunctionSignature:
    """Signature from a `return_type` tree and the children holding `param` trees.

    Parameter attributes and parameter names are dropped; only each
    parameter's type is kept, in order.
    """
    inputs = []
    for param in trees(children, "param"):
        (ty,) = type_trees(param.children)
        inputs.append(build_type(ty))
    return FunctionSignature(
        output=build_return_type(return_node),
        inputs=tuple(inputs),
        variadic=first_token(children, "VARARGS") is not None,
    )
