"""Tests for the module symbol table and call graph."""

from llscan.ir import Alias, Declare, FunctionSignature, ItemKind, Module, parse_module
from llscan.ir.types import IntegerType


def test_counts(rust_module):
    module = parse_module(rust_module)
    assert sum(module.counts.values()) == 22
    assert module.counts[ItemKind.COMMENT] == 4
    assert module.counts[ItemKind.TYPE] == 2
    assert module.counts[ItemKind.GLOBAL] == 2
    assert module.counts[ItemKind.ATTRIBUTES] == 2


def test_symbols(rust_module):
    module = parse_module(rust_module)
    assert set(module.defines) == {"DefaultPreInit", "main"}
    assert set(module.declares) == {"malloc", "llvm.dbg.declare", "printf"}
    assert module.aliases == {"__pre_init": "DefaultPreInit"}
    assert module.declares["llvm.dbg.declare"].sig is None


def test_main_blocks(rust_module):
    main = parse_module(rust_module).defines["main"]
    assert [b.label for b in main.blocks] == ["start", "bb1"]
    assert len(main.blocks[0].instructions) == 5


def test_call_graph_resolves_aliases(rust_module):
    module = parse_module(rust_module)
    graph = module.call_graph()
    assert graph == {"DefaultPreInit": [], "main": ["DefaultPreInit", "malloc"]}
    assert module.call_graph(include_intrinsics=True)["main"] == [
        "llvm.dbg.declare", "DefaultPreInit", "malloc",
    ]


def test_signature_through_alias(rust_module):
    module = parse_module(rust_module)
    assert module.signature("__pre_init") == FunctionSignature(None, ())
    assert str(module.signature("malloc")) == "i8* (i64)"
    assert module.signature("llvm.dbg.declare") is None
    assert module.signature("missing") is None


def test_alias_chain_and_cycle():
    module = Module()
    module.add(Alias("a", "b"))
    module.add(Alias("b", "c"))
    module.add(Declare("c", FunctionSignature(IntegerType(32))))
    assert module.resolve("a") == "c"
    assert module.resolve("c") == "c"
    assert module.signature("a").output == IntegerType(32)

    module.add(Alias("x", "y"))
    module.add(Alias("y", "x"))
    assert module.resolve("x") in ("x", "y")


def test_summary(rust_module):
    summary = parse_module(rust_module).summary()
    assert summary["items"]["define"] == 2
    assert summary["items"]["declare"] == 3
    assert summary["declares"] == {"malloc": "i8* (i64)", "printf": "i32 (i8*, ...)"}
    assert summary["defines"]["main"] == "void ()"
    assert summary["aliases"] == {"__pre_init": "DefaultPreInit"}

    full = parse_module(rust_module).summary(include_intrinsics=True)
    assert full["declares"]["llvm.dbg.declare"] is None
