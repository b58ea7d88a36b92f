"""
Closure rules: "if every argument has property P, so does the application".

    |- A e. CC   &   |- B e. CC   =>   |- ( A + B ) e. CC          (addcl)
    |- ( ( A e. CC /\\ B e. CC ) -> ( A - B ) e. CC )              (subcl)

The first shape is a pure closure rule: one hypothesis per argument. The
second is an implication closure rule: a closed theorem whose antecedent is
a conjunction with one conjunct per argument. Both are cataloged under

    (function symbol, ConstSubst, PropertyTemplate) -> Assrt

e.g. ("+", [_, _], "_ e. CC") -> addcl. Recognition is deliberately narrow:

    - every hypothesis (conjunct) has the same property of one variable
    - hypothesis i binds variable i, and variable i is the i-th variable
      argument of the function; any permutation is rejected
    - the remaining arguments are constants; an argument such as ( A + 1 )
      that nests a variable is rejected
    - the first assertion recorded under a key wins

closure_property then builds "|- P( f(x1, ..., xn) )" on a worksheet by
recursing into the variable arguments and applying the cataloged rule.
"""

import logging
from types import MappingProxyType
from typing import Optional
from dataclasses import dataclass

from .core.tree import Assrt, ParseNode, Stmt
from .core.template import (
    PropertyTemplate, ConstSubst, GeneralizedStmt,
    create_template_node_from_hyp_root, get_corresponding_node,
)
from .core.outcome import Recognized, NotApplicable
from .core.worksheet import Worksheet, ProofStep
from .errors import ClosureRuleMissing


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClosureRule:
    """One cataloged closure rule."""
    stmt: Stmt
    const_subst: ConstSubst
    template: PropertyTemplate
    assrt: Assrt

    @property
    def key(self) -> tuple:
        return (self.stmt, self.const_subst, self.template)

    @property
    def var_indexes(self) -> tuple:
        return self.const_subst.var_indexes

    def __str__(self):
        return f"{self.stmt} {self.const_subst} {self.template} -> {self.assrt}"


class ClosureRuleMap:
    """
    Closure rules keyed by (symbol, ConstSubst, PropertyTemplate).

    Registration is first-writer-wins. After mining, `rules` is a read-only
    view.
    """

    def __init__(self):
        self._rules = {}
        self._const_substs = {}  # stmt -> [ConstSubst, ...] in registration order

    def register(self, rule: ClosureRule) -> bool:
        """Store `rule` unless its key is taken. Returns whether it was stored."""
        if rule.key in self._rules:
            return False
        self._rules[rule.key] = rule
        substs = self._const_substs.setdefault(rule.stmt, [])
        if rule.const_subst not in substs:
            substs.append(rule.const_subst)
        return True

    def get(self, stmt: Stmt, const_subst: ConstSubst, template: PropertyTemplate) -> Optional[Assrt]:
        rule = self._rules.get((stmt, const_subst, template))
        return rule.assrt if rule else None

    def const_substs(self, stmt: Stmt) -> tuple:
        return tuple(self._const_substs.get(stmt, ()))

    @property
    def rules(self):
        return MappingProxyType(self._rules)

    @property
    def symbols(self) -> list:
        return list(self._const_substs)

    def __contains__(self, key):
        return key in self._rules

    def __len__(self):
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules.values())


# ── Mining ──────────────────────────────────────────────────────────────────

def get_hyp_to_var_map(assrt: Assrt) -> Optional[tuple]:
    """The single variable of each logical hypothesis, or None if one has 0 or 2+."""
    res = []
    for hyp in assrt.log_hyps:
        variables = hyp.variables
        if len(variables) != 1:
            return None
        res.append(variables[0])
    return tuple(res)


def _template_from_hyps(hyp_trees, hyp_to_var) -> Optional[PropertyTemplate]:
    """
    The property shared by all hypotheses, taken from the first one.

    Hypothesis i must fit the template with exactly its own variable under
    the hole.
    """
    templ_node = create_template_node_from_hyp_root(hyp_trees[0], hyp_to_var[0])
    if templ_node is None:
        return None
    for tree, var in zip(hyp_trees[1:], hyp_to_var[1:]):
        res = get_corresponding_node(templ_node, tree)
        if res is None or res.stmt != var:
            return None
    return PropertyTemplate(templ_node)


def create_template_from_hyp(assrt: Assrt) -> Optional[PropertyTemplate]:
    """The property template implied by the hypotheses of `assrt`, if any."""
    if not assrt.log_hyps:
        return None
    hyp_to_var = get_hyp_to_var_map(assrt)
    if hyp_to_var is None:
        return None
    return _template_from_hyps([h.tree for h in assrt.log_hyps], hyp_to_var)


def find_closure_rule_core(
    assrt: Assrt,
    main_root: ParseNode,
    template: PropertyTemplate,
    hyp_to_var: tuple,
):
    """
    Match `template` against `main_root` and classify the captured
    function application's arguments as hypothesis variables or constants.
    """
    res = get_corresponding_node(template.node, main_root)
    if res is None:
        return NotApplicable("conclusion does not have the hypotheses' property")
    if not res.children:
        return NotApplicable("property is not applied to a function application")

    const_map = []
    used = set()
    var_num = 0
    for child in res.children:
        if child.is_var_node:
            if child.stmt not in hyp_to_var:
                return NotApplicable(f"argument {child} is not bound by a hypothesis")
            slot = hyp_to_var.index(child.stmt)
            if slot in used:
                return NotApplicable(f"argument {child} is used twice")
            if slot != var_num:
                return NotApplicable("arguments are not in hypothesis order")
            used.add(slot)
            var_num += 1
            const_map.append(None)
        elif child.is_const_node:
            const_map.append(child.deep_clone())
        else:
            return NotApplicable(f"argument {child} nests a variable")

    if var_num != len(hyp_to_var):
        return NotApplicable("some hypothesis is not used by the conclusion")

    return Recognized(ClosureRule(res.stmt, ConstSubst(tuple(const_map)), template, assrt))


def find_closure_rule(assrt: Assrt):
    """
    Recognize a pure closure rule:

        |- P(x)  &  |- P(y)  &  |- P(z)   =>   |- P( f(x, y, z, a, b, c) )

    with a, b, c constants.
    """
    log_hyps = assrt.log_hyps
    if not log_hyps:
        return NotApplicable("no logical hypotheses")
    if len(log_hyps) != len(assrt.mand_var_hyps):
        return NotApplicable("hypotheses and variables are not one-to-one")

    hyp_to_var = get_hyp_to_var_map(assrt)
    if hyp_to_var is None:
        return NotApplicable("a hypothesis does not have exactly one variable")

    template = _template_from_hyps([h.tree for h in log_hyps], hyp_to_var)
    if template is None:
        return NotApplicable("hypotheses do not share a single-hole property")

    return find_closure_rule_core(assrt, assrt.conclusion, template, hyp_to_var)


def find_impl_closure_rule(assrt: Assrt, impl_info, conj_info):
    """
    Recognize an implication closure rule:

        |- ( ( P(x) /\\ P(y) ) -> P( f(x, y, a) ) )

    Only the depth-4 form is recognized.
    """
    if assrt.log_hyps:
        return NotApplicable("has logical hypotheses")
    if assrt.max_depth != 4:
        return NotApplicable("conclusion depth is not 4")

    root = assrt.conclusion
    if not impl_info.is_impl_operator(root.stmt) or len(root.children) != 2:
        return NotApplicable("conclusion is not an implication")

    hyp_trees = conj_info.separate_by_and(root.children[0])
    main_root = root.children[1]

    hyp_to_var = []
    for tree in hyp_trees:
        variables = tree.variables()
        if len(variables) != 1:
            return NotApplicable("a conjunct does not have exactly one variable")
        hyp_to_var.append(variables[0])
    hyp_to_var = tuple(hyp_to_var)

    template = _template_from_hyps(hyp_trees, hyp_to_var)
    if template is None:
        return NotApplicable("conjuncts do not share a single-hole property")

    return find_closure_rule_core(assrt, main_root, template, hyp_to_var)


# ── Catalog ─────────────────────────────────────────────────────────────────

class ClosureInfo:
    """
    Closure rules of a database, mined once.

    closure_rules holds pure rules, impl_closure_rules implication rules.
    outcomes / impl_outcomes record, per assertion label, what mining made
    of it.
    """

    def __init__(self, impl_info, conj_info, assrt_list):
        self.impl_info = impl_info
        self.conj_info = conj_info
        self.closure_rules = ClosureRuleMap()
        self.impl_closure_rules = ClosureRuleMap()
        self.outcomes = {}
        self.impl_outcomes = {}

        assrt_list = list(assrt_list)
        for assrt in assrt_list:
            outcome = find_closure_rule(assrt)
            self.outcomes[assrt.label] = self._register(outcome, self.closure_rules)

        for assrt in assrt_list:
            outcome = find_impl_closure_rule(assrt, impl_info, conj_info)
            self.impl_outcomes[assrt.label] = self._register(outcome, self.impl_closure_rules)

        logger.debug(
            "ClosureInfo built: %d closure rules, %d implication closure rules",
            len(self.closure_rules), len(self.impl_closure_rules),
        )

    @staticmethod
    def _register(outcome, rule_map: ClosureRuleMap):
        if not outcome:
            return outcome
        rule = outcome.rule
        if not rule_map.register(rule):
            logger.debug("Duplicate closure rule ignored: %s", rule)
            return NotApplicable(f"duplicate of {rule_map.get(*rule.key)}")
        logger.debug("Closure rule: %s: %s", rule, rule.assrt.formula)
        return outcome

    # --- Queries ---

    def has_closure_assert(self, stmt: Stmt, const_subst: ConstSubst, template: PropertyTemplate) -> bool:
        """Is there a rule, of either kind, for this key?"""
        if self.closure_rules.get(stmt, const_subst, template) is not None:
            return True
        return self.impl_closure_rules.get(stmt, const_subst, template) is not None

    def get_closure_assert(self, gen_stmt: GeneralizedStmt) -> Optional[Assrt]:
        key = (gen_stmt.stmt, gen_stmt.const_subst, gen_stmt.template)
        return self.closure_rules.get(*key) or self.impl_closure_rules.get(*key)

    def generalize(self, node: ParseNode, template: PropertyTemplate) -> Optional[GeneralizedStmt]:
        """
        Find the cataloged pattern `node` is an instance of for `template`.

        The node's children at the constant positions must equal the
        cataloged constants. Pure rules are preferred.
        """
        for rule_map in (self.closure_rules, self.impl_closure_rules):
            for const_subst in rule_map.const_substs(node.stmt):
                if not const_subst.fits(node):
                    continue
                if rule_map.get(node.stmt, const_subst, template) is not None:
                    return GeneralizedStmt(node.stmt, const_subst, template, const_subst.var_indexes)
        return None

    def is_closure_provable(self, worksheet: Worksheet, gen_stmt: GeneralizedStmt, node: ParseNode) -> bool:
        """Would closure_property succeed for `node`? Nothing is minted."""
        if worksheet.get_proof_step(gen_stmt.template.subst(node)) is not None:
            return True
        if node.stmt != gen_stmt.stmt or not gen_stmt.const_subst.fits(node):
            return False
        if not self.has_closure_assert(gen_stmt.stmt, gen_stmt.const_subst, gen_stmt.template):
            return False
        return all(
            self.is_closure_provable(worksheet, gen_stmt, node.children[n])
            for n in gen_stmt.var_indexes
        )

    # --- Synthesis ---

    def closure_property(self, worksheet: Worksheet, gen_stmt: GeneralizedStmt, node: ParseNode) -> ProofStep:
        """
        Derive the closure property of `node` on the worksheet.

        For " _ e. CC" and "( sin A )", with |- A e. CC already on the
        worksheet, this finds that step and mints |- ( sin A ) e. CC.
        Steps already on the worksheet are reused, never duplicated.

        The caller must have checked has_closure_assert for `gen_stmt`;
        a missing rule raises ClosureRuleMissing.
        """
        step_node = gen_stmt.template.subst(node)

        res = worksheet.get_proof_step(step_node)
        if res is not None:
            return res

        if node.stmt != gen_stmt.stmt or not gen_stmt.const_subst.fits(node):
            raise ClosureRuleMissing(
                f"No step for {step_node} and {node} is not an instance of {gen_stmt}"
            )

        hyps = [
            self.closure_property(worksheet, gen_stmt, node.children[n])
            for n in gen_stmt.var_indexes
        ]

        assrt = self.closure_rules.get(gen_stmt.stmt, gen_stmt.const_subst, gen_stmt.template)
        if assrt is not None:
            return worksheet.get_or_create_proof_step(step_node, hyps, assrt)

        assrt = self.impl_closure_rules.get(gen_stmt.stmt, gen_stmt.const_subst, gen_stmt.template)
        if assrt is None:
            raise ClosureRuleMissing(
                f"Incorrect call of closure_property: there is no closure rule for {gen_stmt}"
            )

        hyps_part = assrt.conclusion.children[0]
        impl_hyp = self.conj_info.concatenate_in_the_same_pattern(hyps, hyps_part, worksheet)
        return self.impl_info.apply_implication_rule(worksheet, impl_hyp, step_node, assrt)
