"""
Assertion database: the proved theorems the catalogs are mined from.

Assertions are kept in registration order, and that order is part of the
contract: when two assertions have the same rule shape, the one registered
first is the one the catalogs keep.

JSON layout:

    {
      "symbols":    {"+": ["const", "class"], "A": ["var", "class"], ...},
      "assertions": [
        {"label": "addcl",
         "hyps": [["e.", "A", "CC"], ["e.", "B", "CC"]],
         "conclusion": ["e.", ["+", "A", "B"], "CC"],
         "mand_var_hyps": ["A", "B"]},
        ...
      ]
    }

Trees are nested [label, child, child, ...] lists; a bare string is a leaf.
"mand_var_hyps" is optional; without it the default order is recomputed.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from .core.tree import (
    Stmt, ParseNode, Assrt, LogHyp, CONST, VAR,
    serialize_tree, deserialize_tree,
)


logger = logging.getLogger(__name__)


class AssertionDatabase:
    """Symbols plus an ordered collection of assertions."""

    def __init__(self, assertions=None, symbols=None):
        self._symbols: dict[str, Stmt] = {}
        self._assertions: dict[str, Assrt] = {}
        for stmt in symbols or ():
            self.add_symbol(stmt)
        for assrt in assertions or ():
            self.add(assrt)
        logger.debug(
            "AssertionDatabase created: %d symbols, %d assertions",
            len(self._symbols), len(self._assertions),
        )

    # --- Read-only properties ---

    @property
    def symbols(self) -> dict[str, Stmt]:
        return dict(self._symbols)

    @property
    def assertions(self) -> list[Assrt]:
        return list(self._assertions.values())

    def get(self, label: str) -> Optional[Assrt]:
        return self._assertions.get(label)

    def __iter__(self):
        return iter(list(self._assertions.values()))

    def __len__(self):
        return len(self._assertions)

    def __contains__(self, label):
        return label in self._assertions

    # --- Mutation ---

    def add_symbol(self, stmt: Stmt) -> None:
        known = self._symbols.get(stmt.label)
        if known is not None and known != stmt:
            raise ValueError(f"Symbol {stmt.label!r} redeclared: {known} vs {stmt}")
        self._symbols[stmt.label] = stmt

    def _add_tree_symbols(self, node: ParseNode) -> None:
        self.add_symbol(node.stmt)
        for child in node.children:
            self._add_tree_symbols(child)

    def add(self, assrt: Assrt) -> None:
        """Append an assertion; its symbols join the symbol table."""
        if assrt.label in self._assertions:
            raise ValueError(f"Duplicate assertion label {assrt.label!r}")
        for hyp in assrt.log_hyps:
            self._add_tree_symbols(hyp.tree)
        self._add_tree_symbols(assrt.conclusion)
        self._assertions[assrt.label] = assrt
        logger.debug("Added assertion %s: %s", assrt.label, assrt.formula)

    # --- Serialization ---

    def to_dict(self) -> dict:
        return {
            "symbols": {
                label: [stmt.kind, stmt.typ]
                for label, stmt in self._symbols.items()
            },
            "assertions": [
                {
                    "label": assrt.label,
                    "hyps": [serialize_tree(h.tree) for h in assrt.log_hyps],
                    "conclusion": serialize_tree(assrt.conclusion),
                    "mand_var_hyps": [v.label for v in assrt.mand_var_hyps],
                }
                for assrt in self._assertions.values()
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> AssertionDatabase:
        symbols = []
        for label, (kind, typ) in data.get("symbols", {}).items():
            if kind not in (CONST, VAR):
                raise ValueError(f"Symbol {label!r} has unknown kind {kind!r}")
            symbols.append(Stmt(label, typ, kind))
        table = {s.label: s for s in symbols}

        assertions = []
        for entry in data.get("assertions", []):
            label = entry["label"]
            log_hyps = tuple(
                LogHyp(f"{label}.{i + 1}", deserialize_tree(h, table))
                for i, h in enumerate(entry.get("hyps", []))
            )
            conclusion = deserialize_tree(entry["conclusion"], table)
            mand_var_hyps = entry.get("mand_var_hyps")
            if mand_var_hyps is not None:
                mand_var_hyps = tuple(deserialize_tree(v, table).stmt for v in mand_var_hyps)
            assertions.append(Assrt(label, log_hyps, conclusion, mand_var_hyps))
        return cls(assertions=assertions, symbols=symbols)

    def to_file(self, path: str | Path) -> None:
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.debug("Saved database to %s", path)

    @classmethod
    def from_file(cls, path: str | Path) -> AssertionDatabase:
        with open(path) as f:
            data = json.load(f)
        logger.debug("Loaded database from %s", path)
        return cls.from_dict(data)
