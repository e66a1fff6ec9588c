import pytest
from llvmlite import ir


# Trimmed rustc output for a thumbv7m target.
RUST_MODULE = """\
; ModuleID = 'ipv4.e7riqz8u-cgu.0'
source_filename = "ipv4.e7riqz8u-cgu.0"
target datalayout = "e-m:e-p:32:32-i64:64-v128:64:128-a:0:32-n32-S64"
target triple = "thumbv7m-none-eabi"

%"blue_pill::ItmLogger" = type {}
%"core::fmt::Formatter" = type { [0 x i32], i32, [0 x i32] }

@0 = private constant <{ [0 x i8] }> zeroinitializer, align 4, !dbg !0
@DEVICE_PERIPHERALS = local_unnamed_addr global <{ [1 x i8] }> zeroinitializer, align 1, !dbg !175
@__pre_init = unnamed_addr alias void (), void ()* @DefaultPreInit

; Function Attrs: norecurse nounwind
define void @DefaultPreInit() unnamed_addr #0 !dbg !200 {
start:
  ret void, !dbg !201
}

; Function Attrs: noreturn nounwind
define void @main() unnamed_addr #1 !dbg !210 {
start:
  %_3 = alloca %"blue_pill::ItmLogger", align 1
  call void @llvm.dbg.declare(metadata %"blue_pill::ItmLogger"* %_3, metadata !212, metadata !DIExpression()), !dbg !213
  call void @__pre_init(), !dbg !214
  %p = tail call i8* @malloc(i64 16), !dbg !215
  br label %bb1

bb1:                                              ; preds = %bb1, %start
  call void @__pre_init()
  br label %bb1
}

declare noalias i8* @malloc(i64) unnamed_addr #3

; Function Attrs: nounwind readnone speculatable
declare void @llvm.dbg.declare(metadata, metadata, metadata) #4

declare i32 @printf(i8* nocapture readonly, ...) local_unnamed_addr #2

attributes #0 = { norecurse nounwind "target-cpu"="generic" }
attributes #4 = { nounwind readnone speculatable }

!llvm.dbg.cu = !{!5}
!0 = !DIGlobalVariableExpression(var: !1, expr: !DIExpression())
!5 = distinct !DICompileUnit(language: DW_LANG_Rust, file: !6, producer: "clang LLVM (rustc version 1.31.0)", isOptimized: true, runtimeVersion: 0, emissionKind: FullDebug, enums: !{})
"""


@pytest.fixture
def rust_module() -> str:
    return RUST_MODULE


def build_llvmlite_module() -> ir.Module:
    """A small module with a global, an external declaration and two definitions."""
    module = ir.Module(name="demo")
    i32 = ir.IntType(32)
    i8p = ir.IntType(8).as_pointer()

    counter = ir.GlobalVariable(module, i32, name="counter")
    counter.linkage = "internal"
    counter.initializer = ir.Constant(i32, 0)

    puts = ir.Function(module, ir.FunctionType(i32, [i8p]), name="puts")

    helper = ir.Function(module, ir.FunctionType(i32, [i32]), name="helper")
    builder = ir.IRBuilder(helper.append_basic_block(name="entry"))
    builder.ret(builder.add(helper.args[0], ir.Constant(i32, 1)))

    main = ir.Function(module, ir.FunctionType(i32, []), name="main")
    builder = ir.IRBuilder(main.append_basic_block(name="entry"))
    value = builder.call(helper, [ir.Constant(i32, 41)])
    builder.call(puts, [ir.Constant(i8p, None)])
    exit_block = main.append_basic_block(name="exit")
    builder.branch(exit_block)
    builder.position_at_end(exit_block)
    builder.ret(value)
    return module


@pytest.fixture
def llvmlite_module() -> str:
    return str(build_llvmlite_module())


@pytest.fixture
def write_ir(tmp_path, monkeypatch):
    """Write IR text into an isolated cwd and return its path."""
    monkeypatch.chdir(tmp_path)

    def write(text: str, name: str = "input.ll"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return write
