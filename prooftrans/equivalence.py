"""
Equivalence relations: commutative + transitive lemma pairs.

A binary relation R counts as an equivalence when the database proves both

    |- A R B                 =>   |- B R A      (commutative, e.g. eqcom)
    |- A R B  &  |- B R C    =>   |- A R C      (transitive,  e.g. eqtr)

The first assertion of each shape per relation wins. Relations with only one
of the two lemmas are filtered out until both maps have the same symbols.
Each surviving relation becomes the canonical equivalence for the syntax
type of its operands, e.g. class -> "=", wff -> "<->".

The algebra builds worksheet steps from those lemmas:
    create_eq_node(a, b)                 the tree  a R b
    create_reverse(a R b)                step      b R a
    get_transitive_step(a R b, b R c)    step      a R c
"""

import logging
from dataclasses import dataclass
from functools import reduce
from typing import Optional

from .core.tree import Assrt, ParseNode, Stmt, create_binary_node
from .core.outcome import Recognized, NotApplicable
from .core.worksheet import Worksheet, ProofStep
from .errors import EquivalenceRuleMissing


logger = logging.getLogger(__name__)

COMMUTATIVE = "commutative"
TRANSITIVE = "transitive"


@dataclass(frozen=True)
class EquivalenceRule:
    stmt: Stmt
    assrt: Assrt
    kind: str

    def __str__(self):
        return f"{self.stmt} {self.kind}: {self.assrt}"


def _is_binary_of_vars(node: ParseNode) -> bool:
    return (
        len(node.children) == 2
        and node.max_depth == 2
        and all(c.is_var_node for c in node.children)
    )


def find_commutative_rule(assrt: Assrt):
    """Recognize  |- A R B  =>  |- B R A."""
    if len(assrt.log_hyps) != 1:
        return NotApplicable("not exactly one logical hypothesis")
    if len(assrt.mand_var_hyps) != 2:
        return NotApplicable("not exactly two variables")

    hyp = assrt.log_hyps[0].tree
    root = assrt.conclusion
    if not _is_binary_of_vars(hyp) or not _is_binary_of_vars(root):
        return NotApplicable("not a relation between two variables")

    stmt = root.stmt
    if hyp.stmt != stmt:
        return NotApplicable("hypothesis and conclusion use different relations")

    a, b = hyp.children
    if a.stmt == b.stmt:
        return NotApplicable("both sides are the same variable")
    if root.children[0].stmt != b.stmt or root.children[1].stmt != a.stmt:
        return NotApplicable("conclusion does not swap the sides")

    return Recognized(EquivalenceRule(stmt, assrt, COMMUTATIVE))


def find_transitive_rule(assrt: Assrt):
    """Recognize  |- A R B  &  |- B R C  =>  |- A R C  with A, B, C distinct."""
    if len(assrt.log_hyps) != 2:
        return NotApplicable("not exactly two logical hypotheses")

    hyp1 = assrt.log_hyps[0].tree
    hyp2 = assrt.log_hyps[1].tree
    root = assrt.conclusion
    if not all(_is_binary_of_vars(t) for t in (hyp1, hyp2, root)):
        return NotApplicable("not relations between two variables")

    stmt = root.stmt
    if hyp1.stmt != stmt or hyp2.stmt != stmt:
        return NotApplicable("hypotheses and conclusion use different relations")

    # 'A' in 'A R B & B R C => A R C'
    if hyp1.children[0].stmt != root.children[0].stmt:
        return NotApplicable("left sides differ")
    # 'B' in 'A R B & B R C'
    if hyp1.children[1].stmt != hyp2.children[0].stmt:
        return NotApplicable("no shared middle term")
    # 'C' in 'A R B & B R C => A R C'
    if hyp2.children[1].stmt != root.children[1].stmt:
        return NotApplicable("right sides differ")

    a, b, c = hyp1.children[0].stmt, hyp1.children[1].stmt, hyp2.children[1].stmt
    if len({a, b, c}) != 3:
        return NotApplicable("variables are not distinct")

    return Recognized(EquivalenceRule(stmt, assrt, TRANSITIVE))


class EquivalenceInfo:
    """Equivalence relations of a database, mined once."""

    def __init__(self, assrt_list=None):
        self._is_init = False
        self.eq_commutatives = {}
        self.eq_transitives = {}
        self.eq_map = {}
        if assrt_list is not None:
            self.init_me(assrt_list)

    def init_me(self, assrt_list):
        """Mine `assrt_list` from scratch, discarding anything mined before."""
        assrt_list = list(assrt_list)
        self.eq_commutatives = {}
        self.eq_transitives = {}

        for assrt in assrt_list:
            outcome = find_commutative_rule(assrt)
            if outcome:
                self._register(outcome.rule, self.eq_commutatives)

        for assrt in assrt_list:
            outcome = find_transitive_rule(assrt)
            if outcome:
                self._register(outcome.rule, self.eq_transitives)

        self.filter_only_eq_rules()
        self._is_init = True

    @staticmethod
    def _register(rule: EquivalenceRule, rules: dict):
        logger.debug("Equivalence %s assrt: %s: %s", rule.kind, rule.assrt, rule.assrt.formula)
        if rule.stmt not in rules:
            rules[rule.stmt] = rule.assrt

    def filter_only_eq_rules(self):
        """
        Drop relations that lack either lemma, until a fixed point, then
        build the type -> relation map.
        """
        while True:
            changed = False
            for eq in list(self.eq_transitives):
                if eq not in self.eq_commutatives:
                    del self.eq_transitives[eq]
                    changed = True
            for eq in list(self.eq_commutatives):
                if eq not in self.eq_transitives:
                    del self.eq_commutatives[eq]
                    changed = True
            if not changed:
                break

        for eq in self.eq_transitives:
            logger.debug(
                "Equivalence rules: %s: %s and %s", eq,
                self.eq_commutatives[eq].formula, self.eq_transitives[eq].formula,
            )

        self.eq_map = {}
        for eq, assrt in self.eq_commutatives.items():
            typ = assrt.conclusion.children[0].stmt.typ
            self.eq_map[typ] = eq
            logger.debug("Type equivalence map: %s: %s", typ, eq)

    # --- Queries ---

    @property
    def is_init(self) -> bool:
        return self._is_init

    def is_equivalence(self, stmt: Stmt) -> bool:
        return stmt in self.eq_commutatives

    def get_eq_stmt(self, typ: str) -> Optional[Stmt]:
        return self.eq_map.get(typ)

    def get_eq_commutative(self, stmt: Stmt) -> Optional[Assrt]:
        return self.eq_commutatives.get(stmt)

    def get_eq_transitive(self, stmt: Stmt) -> Optional[Assrt]:
        return self.eq_transitives.get(stmt)

    # --- Transformations ---

    def create_eq_node(self, left: ParseNode, right: ParseNode) -> ParseNode:
        """The tree  left R right  for the canonical relation R of left's type."""
        typ = left.stmt.typ
        if right.stmt.typ != typ:
            raise ValueError(f"{left} has type {typ} but {right} has type {right.stmt.typ}")
        eq = self.get_eq_stmt(typ)
        if eq is None:
            raise EquivalenceRuleMissing(f"No equivalence relation for type {typ}")
        return create_binary_node(eq, left, right)

    def create_reverse(self, worksheet: Worksheet, source: ProofStep) -> ProofStep:
        """The step  b R a  for the step  a R b."""
        root = source.formula
        eq = root.stmt
        eq_comm = self.get_eq_commutative(eq)
        if eq_comm is None:
            raise EquivalenceRuleMissing(f"{eq} is not an equivalence relation")
        left, right = root.children
        rev_node = create_binary_node(eq, right, left)
        return worksheet.get_or_create_proof_step(rev_node, (source,), eq_comm)

    def get_transitive_step(
        self,
        worksheet: Worksheet,
        first: Optional[ProofStep],
        second: ProofStep,
    ) -> ProofStep:
        """
        The step  a R c  from  a R b  and  b R c.

        With no first step yet, `second` is returned as is, so a chain of
        rewrites can be folded without special-casing its first element.
        """
        if first is None:
            return second

        first_root = first.formula
        second_root = second.formula
        eq = first_root.stmt
        if second_root.stmt != eq:
            raise ValueError(f"{first_root} and {second_root} use different relations")
        if first_root.children[1] != second_root.children[0]:
            raise ValueError(f"{first_root} and {second_root} do not share a middle term")

        transitive = self.get_eq_transitive(eq)
        if transitive is None:
            raise EquivalenceRuleMissing(f"{eq} is not an equivalence relation")

        node = create_binary_node(eq, first_root.children[0], second_root.children[1])
        return worksheet.get_or_create_proof_step(node, (first, second), transitive)

    def get_transitive_chain(self, worksheet: Worksheet, steps) -> Optional[ProofStep]:
        """Fold  a R b, b R c, ..., y R z  into  a R z. None for no steps."""
        return reduce(
            lambda acc, step: self.get_transitive_step(worksheet, acc, step),
            steps,
            None,
        )
