"""
Conjunction: splitting conjunctions apart and building them back up.

An operator OP of arity n is a conjunction operator when the database
proves its introduction rule

    |- ph   &   |- ps            =>   |- ( ph OP ps )          (pm3.2i)
    |- ph   &   |- ps  &  |- ch  =>   |- OP( ph, ps, ch )       (3pm3.2i)

separate_by_and flattens nested conjunctions left to right.
concatenate_in_the_same_pattern goes the other way: given one proof step
per conjunct, it mints the conjunction steps needed to reach a formula with
the same shape as a pattern, one introduction rule per conjunction node.
"""

import logging
from typing import Optional

from ..core.tree import Assrt, ParseNode, Stmt
from ..core.worksheet import Worksheet, ProofStep


logger = logging.getLogger(__name__)


def find_conjunction_intro(assrt: Assrt) -> Optional[Stmt]:
    """The conjunction operator `assrt` introduces, or None."""
    hyps = [h.tree for h in assrt.log_hyps]
    if len(hyps) < 2:
        return None
    root = assrt.conclusion
    if root.max_depth != 2 or len(root.children) != len(hyps):
        return None
    if not all(h.is_var_node for h in hyps):
        return None
    if len(set(h.stmt for h in hyps)) != len(hyps):
        return None
    if tuple(hyps) != root.children:
        return None
    return root.stmt


class ConjunctionInfo:
    """Conjunction operators of a database and their introduction rules."""

    def __init__(self, assrt_list):
        self._intro_rules = {}
        for assrt in assrt_list:
            op = find_conjunction_intro(assrt)
            if op is None or op in self._intro_rules:
                continue
            self._intro_rules[op] = assrt
            logger.debug("Conjunction operator %s: %s: %s", op, assrt, assrt.formula)

    def is_and_operator(self, stmt: Stmt) -> bool:
        return stmt in self._intro_rules

    def get_intro_assrt(self, stmt: Stmt) -> Optional[Assrt]:
        return self._intro_rules.get(stmt)

    @property
    def operators(self) -> list:
        return list(self._intro_rules)

    def _is_conjunction(self, node: ParseNode) -> bool:
        rule = self._intro_rules.get(node.stmt)
        return rule is not None and len(node.children) == len(rule.log_hyps)

    def separate_by_and(self, node: ParseNode) -> list:
        """Conjuncts of `node`, left to right. A non-conjunction is its own only conjunct."""
        if not self._is_conjunction(node):
            return [node]
        res = []
        for child in node.children:
            res.extend(self.separate_by_and(child))
        return res

    def concatenate_in_the_same_pattern(
        self,
        steps,
        pattern: ParseNode,
        worksheet: Worksheet,
    ) -> ProofStep:
        """
        Combine `steps` into one step shaped like `pattern`.

        The i-th step fills the i-th conjunct of the pattern; the formulas of
        the steps replace the pattern's conjuncts, the conjunction nodes are
        kept.
        """
        steps = list(steps)
        expected = len(self.separate_by_and(pattern))
        if expected != len(steps):
            raise ValueError(
                f"Pattern {pattern} has {expected} conjuncts but {len(steps)} steps were given"
            )

        remaining = iter(steps)

        def build(node):
            if not self._is_conjunction(node):
                return next(remaining)
            parts = [build(child) for child in node.children]
            rule = self._intro_rules[node.stmt]
            formula = ParseNode(node.stmt, tuple(p.formula for p in parts))
            return worksheet.get_or_create_proof_step(formula, parts, rule)

        return build(pattern)
