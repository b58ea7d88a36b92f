"""
Single-hole templates and the keys of the closure catalog.

A property template is a formula tree with exactly one hole:

    "_ e. CC"     ParseNode(ELEM, (PLACEHOLDER, CC))

match(template, input) walks both trees in lock-step. Outside the hole the
two trees must agree symbol for symbol; whatever input subtree sits under
the hole is the capture. The round trip holds by construction:

    match(T, I) == Matched(c)   implies   T.subst(c) == I

ConstSubst and GeneralizedStmt describe one function application matched
against a cataloged closure rule: which argument positions are fixed
constants and which are recursion points.
"""

from dataclasses import dataclass
from typing import Optional, Union

from .tree import Stmt, ParseNode, PLACEHOLDER_KIND


HOLE = Stmt("_", "", PLACEHOLDER_KIND)
PLACEHOLDER = ParseNode(HOLE)


@dataclass(frozen=True)
class NoMatch:
    """The template and the input disagree somewhere outside the hole."""
    def __bool__(self):
        return False


@dataclass(frozen=True)
class Matched:
    """The input fits the template; `node` is the subtree under the hole."""
    node: ParseNode

    def __bool__(self):
        return True


NO_MATCH = NoMatch()

MatchResult = Union[NoMatch, Matched]


def _match_rec(template: ParseNode, input: ParseNode):
    """Matched, NO_MATCH, or None when the subtrees agree but hold no hole."""
    if template.stmt.is_placeholder:
        return Matched(input)
    if template.stmt != input.stmt or len(template.children) != len(input.children):
        return NO_MATCH

    result = None
    for t_child, i_child in zip(template.children, input.children):
        res = _match_rec(t_child, i_child)
        if res is NO_MATCH:
            return NO_MATCH
        if res is not None:
            result = res
    return result


def match(template: ParseNode, input: ParseNode) -> MatchResult:
    """
    Match `input` against a single-hole template tree.

    A template whose hole is never reached (because the walk has nothing
    left to compare) does not match either.
    """
    res = _match_rec(template, input)
    if res is None:
        return NO_MATCH
    return res


def get_corresponding_node(template: ParseNode, input: ParseNode) -> Optional[ParseNode]:
    """The captured subtree, or None."""
    res = match(template, input)
    return res.node if res else None


def count_placeholders(node: ParseNode) -> int:
    if node.stmt.is_placeholder:
        return 1
    return sum(count_placeholders(child) for child in node.children)


def create_template_node_from_hyp_root(hyp_root: ParseNode, var: Stmt) -> Optional[ParseNode]:
    """
    Turn a hypothesis such as "A e. CC" into the template "_ e. CC".

    Fails (None) unless `var` occurs exactly once. A hypothesis that is the
    bare variable ("|- ph") carries no property and is rejected too.
    """
    if hyp_root.stmt == var:
        return None
    templ, replaced = hyp_root.replace(var, PLACEHOLDER)
    if replaced != 1:
        return None
    return templ


@dataclass(frozen=True)
class PropertyTemplate:
    """A property such as "_ e. CC"; exactly one hole, compared structurally."""
    node: ParseNode

    def __post_init__(self):
        holes = count_placeholders(self.node)
        if holes != 1:
            raise ValueError(
                f"A property template needs exactly one placeholder, found {holes} in {self.node}"
            )

    def subst(self, node: ParseNode) -> ParseNode:
        """The template with its hole filled by `node`."""
        res, _ = self.node.replace(HOLE, node)
        return res

    def match(self, input: ParseNode) -> MatchResult:
        return match(self.node, input)

    def __str__(self):
        return str(self.node)

    def __repr__(self):
        return f"PropertyTemplate({self.node})"


@dataclass(frozen=True)
class ConstSubst:
    """
    The fixed arguments of a function application.

    One slot per child position: None for a variable position, otherwise
    the constant subtree found there.
    """
    const_map: tuple

    def __post_init__(self):
        if not isinstance(self.const_map, tuple):
            object.__setattr__(self, "const_map", tuple(self.const_map))

    @classmethod
    def create_from_node(cls, node: ParseNode) -> "ConstSubst":
        """Constant children are kept, everything else becomes a variable slot."""
        return cls(tuple(
            child if child.is_const_node else None
            for child in node.children
        ))

    @property
    def var_indexes(self) -> tuple:
        return tuple(i for i, c in enumerate(self.const_map) if c is None)

    def fits(self, node: ParseNode) -> bool:
        """Does `node` carry exactly these constants at the fixed positions?"""
        if len(node.children) != len(self.const_map):
            return False
        return all(
            c is None or c == child
            for c, child in zip(self.const_map, node.children)
        )

    def __len__(self):
        return len(self.const_map)

    def __str__(self):
        return "[" + ", ".join("_" if c is None else str(c) for c in self.const_map) + "]"


@dataclass(frozen=True)
class GeneralizedStmt:
    """A node recognized as an instance of a cataloged closure pattern."""
    stmt: Stmt
    const_subst: ConstSubst
    template: PropertyTemplate
    var_indexes: tuple

    def __post_init__(self):
        if not isinstance(self.var_indexes, tuple):
            object.__setattr__(self, "var_indexes", tuple(self.var_indexes))

    def __str__(self):
        return f"{self.stmt} {self.const_subst} {self.template}"
