"""
Core data structures: Stmt, ParseNode, LogHyp, Assrt.

These are the atoms of the whole system. Nothing in here depends on
templates, catalogs, worksheets or inference collaborators.

Symbols (Stmt):
    const        -- function, relation or connective: "+", "e.", "->"
    var          -- variable hypothesis (VarHyp):      "A", "ph"
    placeholder  -- the single hole of a property template

Formula trees (ParseNode) are immutable. Two trees are equal iff their
symbols and children are equal recursively, so a tree can be used directly
as a dict key (the worksheet cache and the closure catalog rely on this).

    A e. CC           ParseNode(ELEM, (A, CC))
    ( A + B ) e. CC   ParseNode(ELEM, (ParseNode(PLUS, (A, B)), CC))

An assertion (Assrt) is a named theorem: logical hypotheses plus a
conclusion, both fixed when the database is loaded.
"""

from dataclasses import dataclass, field
from typing import Optional


CONST = "const"
VAR = "var"
PLACEHOLDER_KIND = "placeholder"


@dataclass(frozen=True)
class Stmt:
    """A symbol of the formal system, tagged with its syntax type."""
    label: str
    typ: str = "class"
    kind: str = CONST

    @property
    def is_var(self) -> bool:
        return self.kind == VAR

    @property
    def is_placeholder(self) -> bool:
        return self.kind == PLACEHOLDER_KIND

    def __str__(self):
        return self.label


def var(label: str, typ: str = "class") -> Stmt:
    """Variable hypothesis symbol."""
    return Stmt(label, typ, VAR)


def const(label: str, typ: str = "class") -> Stmt:
    """Constant (function, relation or connective) symbol."""
    return Stmt(label, typ, CONST)


@dataclass(frozen=True)
class ParseNode:
    """
    A formula tree: a symbol plus an ordered tuple of child trees.

    Leaves are variables or constants with no arguments. Instances are
    never mutated; every transformation returns a fresh tree.
    """
    stmt: Stmt
    children: tuple = ()

    def __post_init__(self):
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def is_var_node(self) -> bool:
        return self.stmt.is_var

    @property
    def is_const_node(self) -> bool:
        """True if no variable (and no hole) occurs anywhere in this subtree."""
        if self.stmt.is_var or self.stmt.is_placeholder:
            return False
        return all(child.is_const_node for child in self.children)

    @property
    def max_depth(self) -> int:
        """Number of nodes on the longest root-to-leaf path. A leaf is 1."""
        return 1 + max((child.max_depth for child in self.children), default=0)

    def variables(self) -> list:
        """Distinct variable symbols, in order of first appearance."""
        found = []

        def walk(node):
            if node.stmt.is_var:
                if node.stmt not in found:
                    found.append(node.stmt)
                return
            for child in node.children:
                walk(child)

        walk(self)
        return found

    def replace(self, old: Stmt, new: "ParseNode") -> tuple:
        """
        Replace every occurrence of symbol `old` with the tree `new`.

        Returns (fresh_tree, number_of_replacements).
        """
        if self.stmt == old:
            return new, 1
        if not self.children:
            return self, 0
        count = 0
        children = []
        for child in self.children:
            replaced, n = child.replace(old, new)
            children.append(replaced)
            count += n
        if count == 0:
            return self, 0
        return ParseNode(self.stmt, tuple(children)), count

    def deep_clone(self) -> "ParseNode":
        """Trees are immutable, so sharing is already an independent copy."""
        return self

    def __str__(self):
        if not self.children:
            return self.stmt.label
        args = [str(c) for c in self.children]
        if len(args) == 1:
            return f"( {self.stmt.label} {args[0]} )"
        if len(args) == 2:
            return f"( {args[0]} {self.stmt.label} {args[1]} )"
        return f"{self.stmt.label}( {', '.join(args)} )"

    def __repr__(self):
        return f"ParseNode({self})"


def leaf(stmt: Stmt) -> ParseNode:
    return ParseNode(stmt)


def node(stmt: Stmt, *args) -> ParseNode:
    """node(ELEM, node(PLUS, A, B), CC): bare Stmt arguments become leaves."""
    return ParseNode(stmt, tuple(a if isinstance(a, ParseNode) else ParseNode(a) for a in args))


def create_binary_node(stmt: Stmt, left: ParseNode, right: ParseNode) -> ParseNode:
    return ParseNode(stmt, (left, right))


def serialize_tree(node: ParseNode) -> list:
    """[label, child, child, ...] with children serialized the same way."""
    return [node.stmt.label] + [serialize_tree(c) for c in node.children]


def deserialize_tree(data, symbols: dict) -> ParseNode:
    """Inverse of serialize_tree; `symbols` maps label -> Stmt."""
    if isinstance(data, str):
        data = [data]
    label = data[0]
    if label not in symbols:
        raise ValueError(f"Unknown symbol {label!r}")
    return ParseNode(symbols[label], tuple(deserialize_tree(c, symbols) for c in data[1:]))


@dataclass(frozen=True)
class LogHyp:
    """A logical hypothesis of an assertion."""
    label: str
    tree: ParseNode

    @property
    def max_depth(self) -> int:
        return self.tree.max_depth

    @property
    def variables(self) -> list:
        return self.tree.variables()


@dataclass(frozen=True)
class Assrt:
    """
    A named theorem: ordered logical hypotheses and one conclusion.

    mand_var_hyps defaults to the distinct variables of the hypotheses
    followed by those of the conclusion, in order of first appearance.
    """
    label: str
    log_hyps: tuple
    conclusion: ParseNode
    mand_var_hyps: Optional[tuple] = field(default=None, compare=False)

    def __post_init__(self):
        if not isinstance(self.log_hyps, tuple):
            object.__setattr__(self, "log_hyps", tuple(self.log_hyps))
        if self.mand_var_hyps is None:
            found = []
            for tree in [h.tree for h in self.log_hyps] + [self.conclusion]:
                for v in tree.variables():
                    if v not in found:
                        found.append(v)
            object.__setattr__(self, "mand_var_hyps", tuple(found))

    @property
    def max_depth(self) -> int:
        return self.conclusion.max_depth

    @property
    def formula(self) -> str:
        if not self.log_hyps:
            return f"|- {self.conclusion}"
        hyps = " & ".join(f"|- {h.tree}" for h in self.log_hyps)
        return f"{hyps} => |- {self.conclusion}"

    def __str__(self):
        return self.label

    def __repr__(self):
        return f"Assrt({self.label!r})"


def make_assrt(label: str, hyps, conclusion: ParseNode, mand_var_hyps=None) -> Assrt:
    """Build an Assrt from bare hypothesis trees, labelling them label.1, label.2, ..."""
    log_hyps = tuple(
        LogHyp(f"{label}.{i + 1}", tree) for i, tree in enumerate(hyps)
    )
    if mand_var_hyps is not None:
        mand_var_hyps = tuple(mand_var_hyps)
    return Assrt(label, log_hyps, conclusion, mand_var_hyps)
