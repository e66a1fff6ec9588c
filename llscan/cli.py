"""CLI entry point and argument parsing."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from llscan.internals.version import print_banner
from llscan.ir.model import Alias, Declare, Define, Item, ItemKind, is_intrinsic


def describe(item: Item) -> str:
    """One-line rendering of an item for --dump-items."""
    if isinstance(item, Alias):
        detail = f"@{item.name} -> @{item.target}"
    elif isinstance(item, Declare):
        detail = f"@{item.name} (intrinsic)" if item.sig is None else f"@{item.name} : {item.sig}"
    elif isinstance(item, Define):
        count = len(item.blocks)
        detail = f"@{item.name} : {item.sig} [{count} block{'s' if count != 1 else ''}]"
    else:
        detail = ""
    return f"{item.kind!s:<16}{detail}".rstrip()


def print_summary(module, include_intrinsics: bool, call_graph: bool) -> None:
    total = sum(module.counts.values())
    parts = [f"{kind} {module.counts[kind]}" for kind in ItemKind if module.counts.get(kind)]
    print(f"items: {total}" + (f" ({', '.join(parts)})" if parts else ""))

    intrinsics = sum(1 for name in module.declares if is_intrinsic(name))
    print(f"defines: {len(module.defines)}, "
          f"declares: {len(module.declares)} ({intrinsics} intrinsic), "
          f"aliases: {len(module.aliases)}")

    if call_graph:
        print()
        for caller, callees in module.call_graph(include_intrinsics).items():
            print(f"{caller} -> {', '.join(callees) if callees else '(none)'}")


def main(argv: list[str] | None = None) -> int:
    """Main llscan entry point.

    Returns:
        Exit code (0=success, 1=warnings, 2=errors).
    """
    ap = argparse.ArgumentParser(prog="llscan", description="Classify the top-level items of a textual LLVM IR module")

    ap.add_argument("source", nargs='?', help="Path to an IR file (.ll)")
    ap.add_argument("--version", action="store_true", help="Show version and exit")
    ap.add_argument("--dump-items", action="store_true", help="Print every recognized item")
    ap.add_argument("--call-graph", action="store_true", help="Print the call graph of defined functions")
    ap.add_argument("--json", action="store_true", help="Print the module summary as JSON")
    ap.add_argument("--include-intrinsics", action="store_true",
                    help="Keep llvm.* intrinsics in declares and call graph output")
    ap.add_argument("--config", metavar="PATH",
                    help="Path to llscan.toml (default: ./llscan.toml if present)")
    ap.add_argument(
        "--traceback",
        action="store_true",
        help="Print full traceback on internal errors (for debugging)",
    )
    args = ap.parse_args(argv)

    from llscan.config import ConfigError, load_config
    from llscan.internals import errors as er
    from llscan.internals.parse_errors import handle_parse_exception
    from llscan.internals.report import Reporter
    from llscan.ir.exceptions import ItemParseError
    from llscan.ir.item import iter_items
    from llscan.ir.module import Module

    try:
        config = load_config(Path(args.config) if args.config else None)
    except ConfigError as e:
        reporter = Reporter(filename=args.config or "llscan.toml")
        er.emit(reporter, er.ERR.LE2002, None, message=str(e))
        reporter.print()
        return 2

    as_json = args.json or config.output == "json"
    include_intrinsics = args.include_intrinsics or config.include_intrinsics

    if not as_json:
        print_banner()
    if args.version:
        return 0

    if not args.source:
        print("error: source file required", file=sys.stderr)
        return 2

    src_path = Path(args.source).resolve()
    try:
        src = src_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        reporter = Reporter(filename=str(src_path))
        er.emit(reporter, er.ERR.LE2001, None, path=src_path, reason=e)
        reporter.print()
        return 2

    reporter = Reporter(source=src, filename=str(src_path))
    if config.warn_missing_newline and src and not src.endswith('\n'):
        er.emit(reporter, er.ERR.LW0001, None)

    module = Module()
    try:
        for item, span in iter_items(src):
            if args.dump_items and not as_json:
                print(f"{span.line:>6}  {describe(item)}")
            module.add(item)
    except ItemParseError as e:
        handle_parse_exception(e, reporter)
        reporter.print()
        return 2
    except RuntimeError as e:
        if args.traceback:
            import traceback
            traceback.print_exc()
        else:
            print(f"internal error: {e}", file=sys.stderr)
        return 2

    if args.dump_items and not as_json:
        print()
    if as_json:
        print(json.dumps(module.summary(include_intrinsics), indent=2))
    else:
        print_summary(module, include_intrinsics, args.call_graph)

    reporter.print()
    return 1 if reporter.has_warnings else 0


if __name__ == "__main__":
    raise SystemExit(main())
