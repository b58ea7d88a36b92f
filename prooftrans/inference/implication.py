"""
Implication: modus ponens over a mined implication operator.

An operator OP is an implication operator when the database proves

    |- ph   &   |- ( ph OP ps )   =>   |- ps

(ax-mp in set.mm). apply_implication_rule uses that rule to discharge a
closed theorem of the form ( antecedent OP consequent ):

    step 1  |- ( antecedent OP consequent )     by the closed theorem
    step 2  |- consequent                       by modus ponens on the
                                                antecedent step and step 1
"""

import logging
from typing import Optional

from ..core.tree import Assrt, ParseNode, Stmt, create_binary_node
from ..core.worksheet import Worksheet, ProofStep
from ..errors import ImplicationRuleMissing


logger = logging.getLogger(__name__)


def find_modus_ponens(assrt: Assrt) -> Optional[Stmt]:
    """The implication operator `assrt` is modus ponens for, or None."""
    if len(assrt.log_hyps) != 2:
        return None
    minor = assrt.log_hyps[0].tree
    major = assrt.log_hyps[1].tree
    result = assrt.conclusion

    if not minor.is_var_node or not result.is_var_node:
        return None
    if minor.stmt == result.stmt:
        return None
    if len(major.children) != 2 or major.max_depth != 2:
        return None
    if major.children[0] != minor or major.children[1] != result:
        return None
    return major.stmt


class ImplicationInfo:
    """Implication operators of a database and their modus ponens rules."""

    def __init__(self, assrt_list):
        self._mp_rules = {}
        for assrt in assrt_list:
            op = find_modus_ponens(assrt)
            if op is None or op in self._mp_rules:
                continue
            self._mp_rules[op] = assrt
            logger.debug("Implication operator %s: %s: %s", op, assrt, assrt.formula)

    def is_impl_operator(self, stmt: Stmt) -> bool:
        return stmt in self._mp_rules

    def get_mp_assrt(self, stmt: Stmt) -> Optional[Assrt]:
        return self._mp_rules.get(stmt)

    @property
    def operators(self) -> list:
        return list(self._mp_rules)

    def apply_implication_rule(
        self,
        worksheet: Worksheet,
        antecedent_step: ProofStep,
        consequent: ParseNode,
        assrt: Assrt,
    ) -> ProofStep:
        """
        Derive `consequent` from `antecedent_step` and the closed theorem `assrt`.

        `assrt` must conclude ( _ OP _ ) for a mined implication operator OP.
        """
        op = assrt.conclusion.stmt
        mp = self._mp_rules.get(op)
        if mp is None:
            raise ImplicationRuleMissing(
                f"{assrt} does not conclude an implication with a known modus ponens rule"
            )
        impl_node = create_binary_node(op, antecedent_step.formula, consequent)
        assrt_step = worksheet.get_or_create_proof_step(impl_node, (), assrt)
        return worksheet.get_or_create_proof_step(
            consequent, (antecedent_step, assrt_step), mp,
        )
