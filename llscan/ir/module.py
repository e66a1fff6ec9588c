"""Module-level symbol table built from the item stream.

This is the consumer side of the item pass: items are folded in one at a
time and dropped, leaving only what call-graph construction needs.
"""
from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from llscan.ir.item import iter_items
from llscan.ir.model import (
    Alias, Declare, Define, FunctionSignature, Item, ItemKind, is_intrinsic,
)


@dataclass
class Module:
    defines: Dict[str, Define] = field(default_factory=dict)
    declares: Dict[str, Declare] = field(default_factory=dict)
    aliases: Dict[str, str] = field(default_factory=dict)
    counts: Counter = field(default_factory=Counter)

    def add(self, item: Item) -> None:
        self.counts[item.kind] += 1
        if isinstance(item, Define):
            self.defines[item.name] = item
        elif isinstance(item, Declare):
            self.declares[item.name] = item
        elif isinstance(item, Alias):
            self.aliases[item.name] = item.target

    def resolve(self, name: str) -> str:
        """Follow alias bindings to the symbol that is actually called.

        Stops at the first name that is not an alias, or when the chain
        revisits a name.
        """
        seen = {name}
        while name in self.aliases:
            name = self.aliases[name]
            if name in seen:
                break
            seen.add(name)
        return name

    def signature(self, name: str) -> Optional[FunctionSignature]:
        target = self.resolve(name)
        if target in self.defines:
            return self.defines[target].sig
        if target in self.declares:
            return self.declares[target].sig
        return None

    def call_graph(self, include_intrinsics: bool = False) -> Dict[str, List[str]]:
        """Map each defined function to its callees, resolved through aliases."""
        graph: Dict[str, List[str]] = {}
        for name, fn in self.defines.items():
            callees: List[str] = []
            for callee in fn.callees():
                if not include_intrinsics and is_intrinsic(callee):
                    continue
                resolved = self.resolve(callee)
                if resolved not in callees:
                    callees.append(resolved)
            graph[name] = callees
        return graph

    def summary(self, include_intrinsics: bool = False) -> dict:
        """JSON-ready description of the module."""
        def sig_str(sig: Optional[FunctionSignature]) -> Optional[str]:
            return None if sig is None else str(sig)

        return {
            "items": {str(kind): self.counts.get(kind, 0) for kind in ItemKind},
            "defines": {name: str(fn.sig) for name, fn in self.defines.items()},
            "declares": {
                name: sig_str(d.sig)
                for name, d in self.declares.items()
                if include_intrinsics or not is_intrinsic(name)
            },
            "aliases": dict(self.aliases),
            "call_graph": self.call_graph(include_intrinsics),
        }


def parse_module(text: str) -> Module:
    """Run the item pass over a whole module."""
    module = Module()
    for item, _span in iter_items(text):
        module.add(item)
    return module
