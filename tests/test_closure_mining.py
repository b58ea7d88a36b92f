"""
Tests for closure rule mining.

Recognition is narrow on purpose; each rejected shape below records the
reason it was passed over.
"""

import pytest

from prooftrans.core.tree import node, make_assrt
from prooftrans.core.template import PLACEHOLDER, PropertyTemplate, ConstSubst
from prooftrans.catalogs import TransformationCatalogs
from prooftrans.closure import (
    ClosureRule, ClosureRuleMap,
    find_closure_rule, find_impl_closure_rule,
    create_template_from_hyp, get_hyp_to_var_map,
)
from prooftrans.domains.arithmetic import (
    A, B, CC, RR, ONE, ELEM, PLUS, TIMES, MINUS, SIN, F, MULADD, DIV, IMP, AND, EQ,
    ELEM_CC, ELEM_RR, in_cc,
)


TWO_VARS = ConstSubst((None, None))


class TestFindClosureRule:
    def test_addcl(self, database):
        outcome = find_closure_rule(database.get("addcl"))
        assert outcome
        rule = outcome.rule
        assert rule.stmt == PLUS
        assert rule.const_subst == TWO_VARS
        assert rule.template == ELEM_CC
        assert rule.var_indexes == (0, 1)
        assert rule.assrt.label == "addcl"

    def test_other_property(self, database):
        rule = find_closure_rule(database.get("readdcl")).rule
        assert rule.key == (PLUS, TWO_VARS, ELEM_RR)

    def test_unary(self, database):
        rule = find_closure_rule(database.get("sincl")).rule
        assert rule.key == (SIN, ConstSubst((None,)), ELEM_CC)

    def test_constant_argument(self, database):
        rule = find_closure_rule(database.get("fcl")).rule
        assert rule.const_subst == ConstSubst((None, node(ONE)))
        assert rule.var_indexes == (0,)

    def test_wrong_order_rejected(self, database):
        outcome = find_closure_rule(database.get("divrevcl"))
        assert not outcome
        assert outcome.reason == "arguments are not in hypothesis order"

    def test_nested_variable_rejected(self):
        assrt = make_assrt("t", [in_cc(A)], in_cc(node(PLUS, node(PLUS, A, ONE), ONE)))
        outcome = find_closure_rule(assrt)
        assert not outcome
        assert "nests a variable" in outcome.reason

    def test_repeated_argument_rejected(self):
        assrt = make_assrt("t", [in_cc(A)], in_cc(node(PLUS, A, A)))
        assert find_closure_rule(assrt).reason == "argument A is used twice"

    def test_unused_hypothesis_rejected(self):
        assrt = make_assrt(
            "t", [in_cc(A), in_cc(B)], in_cc(node(SIN, A)), mand_var_hyps=[A, B],
        )
        assert find_closure_rule(assrt).reason == "some hypothesis is not used by the conclusion"

    def test_unbound_argument_rejected(self):
        assrt = make_assrt(
            "t", [in_cc(A)], in_cc(node(PLUS, A, B)), mand_var_hyps=[A],
        )
        assert find_closure_rule(assrt).reason == "argument B is not bound by a hypothesis"

    def test_different_property_rejected(self):
        assrt = make_assrt("t", [in_cc(A)], node(ELEM, node(SIN, A), RR))
        assert find_closure_rule(assrt).reason == "conclusion does not have the hypotheses' property"

    def test_bare_variable_conclusion_rejected(self):
        assrt = make_assrt("t", [in_cc(A)], in_cc(A))
        assert find_closure_rule(assrt).reason == "property is not applied to a function application"

    def test_no_hypotheses(self, database):
        assert find_closure_rule(database.get("subcl")).reason == "no logical hypotheses"

    def test_not_one_to_one(self, database):
        outcome = find_closure_rule(database.get("eqtr"))
        assert outcome.reason == "hypotheses and variables are not one-to-one"

    def test_hypothesis_with_two_variables(self, database):
        outcome = find_closure_rule(database.get("ax-mp"))
        assert outcome.reason == "a hypothesis does not have exactly one variable"

    def test_mixed_properties_rejected(self):
        assrt = make_assrt(
            "t", [in_cc(A), node(ELEM, B, RR)], in_cc(node(PLUS, A, B)),
        )
        assert find_closure_rule(assrt).reason == "hypotheses do not share a single-hole property"

    def test_bare_variable_hypotheses_rejected(self, database):
        outcome = find_closure_rule(database.get("pm3.2i"))
        assert outcome.reason == "hypotheses do not share a single-hole property"


class TestFindImplClosureRule:
    def test_subcl(self, catalogs, database):
        outcome = find_impl_closure_rule(
            database.get("subcl"), catalogs.impl_info, catalogs.conj_info,
        )
        assert outcome.rule.key == (MINUS, TWO_VARS, ELEM_CC)

    def test_ternary_conjunction(self, catalogs, database):
        outcome = find_impl_closure_rule(
            database.get("muladdcl"), catalogs.impl_info, catalogs.conj_info,
        )
        assert outcome.rule.key == (MULADD, ConstSubst((None, None, None)), ELEM_CC)
        assert outcome.rule.var_indexes == (0, 1, 2)

    def test_has_hypotheses(self, catalogs, database):
        outcome = find_impl_closure_rule(
            database.get("addcl"), catalogs.impl_info, catalogs.conj_info,
        )
        assert outcome.reason == "has logical hypotheses"

    def test_only_depth_four(self, catalogs):
        deeper = make_assrt("t", [], node(
            IMP,
            node(AND, in_cc(A), in_cc(B)),
            in_cc(node(MINUS, node(SIN, A), B)),
        ))
        outcome = find_impl_closure_rule(deeper, catalogs.impl_info, catalogs.conj_info)
        assert outcome.reason == "conclusion depth is not 4"

    def test_not_an_implication(self, catalogs):
        assrt = make_assrt("t", [], node(
            EQ, node(PLUS, A, node(SIN, B)), node(PLUS, A, node(SIN, B)),
        ))
        outcome = find_impl_closure_rule(assrt, catalogs.impl_info, catalogs.conj_info)
        assert outcome.reason == "conclusion is not an implication"

    def test_conjunct_with_two_variables(self, catalogs):
        assrt = make_assrt("t", [], node(
            IMP,
            node(AND, node(EQ, A, B), in_cc(B)),
            in_cc(node(MINUS, A, B)),
        ))
        outcome = find_impl_closure_rule(assrt, catalogs.impl_info, catalogs.conj_info)
        assert outcome.reason == "a conjunct does not have exactly one variable"

    def test_wrong_order(self, catalogs):
        assrt = make_assrt("t", [], node(
            IMP,
            node(AND, in_cc(A), in_cc(B)),
            in_cc(node(MINUS, B, A)),
        ))
        outcome = find_impl_closure_rule(assrt, catalogs.impl_info, catalogs.conj_info)
        assert outcome.reason == "arguments are not in hypothesis order"


class TestHelpers:
    def test_hyp_to_var_map(self, database):
        assert get_hyp_to_var_map(database.get("addcl")) == (A, B)
        assert get_hyp_to_var_map(database.get("ax-mp")) is None

    def test_create_template_from_hyp(self, database):
        assert create_template_from_hyp(database.get("addcl")) == ELEM_CC
        assert create_template_from_hyp(database.get("readdcl")) == ELEM_RR
        assert create_template_from_hyp(database.get("subcl")) is None
        assert create_template_from_hyp(database.get("pm3.2i")) is None


class TestClosureRuleMap:
    def _rule(self, label):
        assrt = make_assrt(label, [in_cc(A), in_cc(B)], in_cc(node(PLUS, A, B)))
        return ClosureRule(PLUS, TWO_VARS, ELEM_CC, assrt)

    def test_first_writer_wins(self):
        rule_map = ClosureRuleMap()
        assert rule_map.register(self._rule("first"))
        assert not rule_map.register(self._rule("second"))
        assert rule_map.get(PLUS, TWO_VARS, ELEM_CC).label == "first"
        assert len(rule_map) == 1

    def test_lookup_by_structurally_equal_key(self):
        rule_map = ClosureRuleMap()
        rule_map.register(self._rule("first"))
        template = PropertyTemplate(node(ELEM, PLACEHOLDER, CC))
        assert rule_map.get(PLUS, ConstSubst([None, None]), template) is not None
        assert (PLUS, ConstSubst((None, None)), template) in rule_map

    def test_missing_key(self):
        rule_map = ClosureRuleMap()
        assert rule_map.get(PLUS, TWO_VARS, ELEM_CC) is None
        assert rule_map.const_substs(PLUS) == ()

    def test_const_substs_in_registration_order(self):
        rule_map = ClosureRuleMap()
        fcl = make_assrt("fcl", [in_cc(A)], in_cc(node(F, A, ONE)))
        fcl2 = make_assrt("fcl2", [in_cc(A), in_cc(B)], in_cc(node(F, A, B)))
        one = ConstSubst((None, node(ONE)))
        rule_map.register(ClosureRule(F, one, ELEM_CC, fcl))
        rule_map.register(ClosureRule(F, TWO_VARS, ELEM_CC, fcl2))
        rule_map.register(ClosureRule(F, one, ELEM_RR, fcl))
        assert rule_map.const_substs(F) == (one, TWO_VARS)
        assert rule_map.symbols == [F]

    def test_rules_view_is_read_only(self):
        rule_map = ClosureRuleMap()
        rule = self._rule("first")
        rule_map.register(rule)
        with pytest.raises(TypeError):
            rule_map.rules[rule.key] = rule
        assert list(rule_map) == [rule]


class TestClosureInfo:
    def test_catalog_contents(self, catalogs):
        closure = catalogs.closure_info
        pure = {(r.stmt, r.assrt.label) for r in closure.closure_rules}
        assert pure == {
            (PLUS, "addcl"), (TIMES, "mulcl"), (PLUS, "readdcl"),
            (SIN, "sincl"), (F, "fcl"),
        }
        impl = {(r.stmt, r.assrt.label) for r in closure.impl_closure_rules}
        assert impl == {(MINUS, "subcl"), (MULADD, "muladdcl")}

    def test_duplicate_is_ignored(self, catalogs):
        closure = catalogs.closure_info
        assert closure.closure_rules.get(PLUS, TWO_VARS, ELEM_CC).label == "addcl"
        assert closure.outcomes["addcl"]
        assert not closure.outcomes["addcl2"]
        assert closure.outcomes["addcl2"].reason == "duplicate of addcl"

    def test_rejected_shapes_are_not_cataloged(self, catalogs):
        closure = catalogs.closure_info
        assert not closure.has_closure_assert(DIV, TWO_VARS, ELEM_CC)
        assert not closure.outcomes["divrevcl"]
        assert not closure.impl_outcomes["divrevcl"]

    def test_has_closure_assert_covers_both_kinds(self, catalogs):
        closure = catalogs.closure_info
        assert closure.has_closure_assert(PLUS, TWO_VARS, ELEM_CC)
        assert closure.has_closure_assert(MINUS, TWO_VARS, ELEM_CC)
        assert not closure.has_closure_assert(MINUS, TWO_VARS, ELEM_RR)

    def test_every_assertion_has_an_outcome(self, catalogs, database):
        closure = catalogs.closure_info
        labels = [a.label for a in database]
        assert list(closure.outcomes) == labels
        assert list(closure.impl_outcomes) == labels

    def test_first_registered_wins_whatever_the_order(self, database):
        reordered = sorted(database, key=lambda a: a.label != "addcl2")
        closure = TransformationCatalogs.build(reordered).closure_info
        assert closure.closure_rules.get(PLUS, TWO_VARS, ELEM_CC).label == "addcl2"
        assert closure.outcomes["addcl"].reason == "duplicate of addcl2"

    def test_catalog_reflects_only_recognized_outcomes(self, catalogs):
        closure = catalogs.closure_info
        recognized = {label for label, o in closure.outcomes.items() if o}
        assert recognized == {r.assrt.label for r in closure.closure_rules}
