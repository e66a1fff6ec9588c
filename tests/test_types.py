"""Tests for the type grammar and type rendering."""

import pytest

from llscan.ir import Alias, Declare, UnrecognizedItemError, recognize
from llscan.ir.types import (
    ArrayType,
    FloatKind,
    FloatType,
    FunctionType,
    IntegerType,
    LabelType,
    MetadataType,
    NamedType,
    OpaquePointerType,
    PointerType,
    StructType,
    TokenType,
    VectorType,
)


def param_type(text: str):
    """Helper: the type of the single parameter of `declare void @f(<text>)`."""
    item = recognize(f"declare void @f({text})")
    assert isinstance(item, Declare)
    (ty,) = item.sig.inputs
    return ty


@pytest.mark.parametrize("text,expected", [
    ("i1", IntegerType(1)),
    ("i128", IntegerType(128)),
    ("half", FloatType(FloatKind.HALF)),
    ("x86_fp80", FloatType(FloatKind.X86_FP80)),
    ("[16 x i8]", ArrayType(16, IntegerType(8))),
    ("[2 x [3 x float]]", ArrayType(2, ArrayType(3, FloatType(FloatKind.FLOAT)))),
    ("<8 x i16>", VectorType(8, IntegerType(16))),
    ("{}", StructType()),
    ("{ i8, i16 }", StructType((IntegerType(8), IntegerType(16)))),
    ("<{ [0 x i8] }>", StructType((ArrayType(0, IntegerType(8)),), packed=True)),
    ("%struct.point", NamedType("struct.point")),
    ('%"blue_pill::ItmLogger"', NamedType("blue_pill::ItmLogger")),
    ("i8**", PointerType(PointerType(IntegerType(8)))),
    ("ptr", OpaquePointerType()),
    ("i32 (i8*, ...)*", PointerType(FunctionType(IntegerType(32), (PointerType(IntegerType(8)),), variadic=True))),
    ("metadata", MetadataType()),
    ("token", TokenType()),
    ("label", LabelType()),
])
def test_parameter_types(text, expected):
    assert param_type(text) == expected


@pytest.mark.parametrize("ty,text", [
    (PointerType(NamedType("blue_pill::ItmLogger")), '%"blue_pill::ItmLogger"*'),
    (NamedType("struct.point"), "%struct.point"),
    (StructType((IntegerType(8),), packed=True), "<{ i8 }>"),
    (StructType(), "{}"),
    (FunctionType(None, (IntegerType(32),)), "void (i32)"),
    (ArrayType(4, VectorType(2, FloatType(FloatKind.DOUBLE))), "[4 x <2 x double>]"),
])
def test_rendering(ty, text):
    assert str(ty) == text


def test_types_are_hashable_values():
    assert {IntegerType(8), IntegerType(8), PointerType(IntegerType(8))} == {
        IntegerType(8), PointerType(IntegerType(8)),
    }


def test_alias_checks_both_types():
    assert recognize("@a = alias [4 x i8], [4 x i8]* @b") == Alias("a", "b")
    with pytest.raises(UnrecognizedItemError):
        recognize("@a = alias [4 x i8, [4 x i8]* @b")
