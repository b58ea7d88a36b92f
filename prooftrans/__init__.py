"""
prooftrans: rule discovery and proof-step synthesis for a proof assistant.

Mines a database of proved assertions once for two families of derived
rules, then uses them to mint justified steps on a proof worksheet:

    closure rules      |- A e. CC & |- B e. CC => |- ( A + B ) e. CC
    equivalence rules  commutative and transitive lemmas of =, <->, ...

Usage:
    python -m prooftrans --database arithmetic --demo
    python -m prooftrans --load db.json --skipped
"""

from .core.tree import Stmt, ParseNode, LogHyp, Assrt, var, const, node, make_assrt
from .core.template import (
    PLACEHOLDER, NoMatch, Matched, match,
    PropertyTemplate, ConstSubst, GeneralizedStmt,
)
from .core.worksheet import ProofStep, Worksheet
from .core.proof import extract_derivation, print_derivation
from .inference.implication import ImplicationInfo
from .inference.conjunction import ConjunctionInfo
from .closure import ClosureInfo, ClosureRule, ClosureRuleMap, find_closure_rule, find_impl_closure_rule
from .equivalence import EquivalenceInfo, find_commutative_rule, find_transitive_rule
from .catalogs import TransformationCatalogs
from .database import AssertionDatabase
from .errors import RuleMissing, ClosureRuleMissing, EquivalenceRuleMissing, ImplicationRuleMissing

__all__ = [
    "Stmt", "ParseNode", "LogHyp", "Assrt", "var", "const", "node", "make_assrt",
    "PLACEHOLDER", "NoMatch", "Matched", "match",
    "PropertyTemplate", "ConstSubst", "GeneralizedStmt",
    "ProofStep", "Worksheet",
    "extract_derivation", "print_derivation",
    "ImplicationInfo", "ConjunctionInfo",
    "ClosureInfo", "ClosureRule", "ClosureRuleMap", "find_closure_rule", "find_impl_closure_rule",
    "EquivalenceInfo", "find_commutative_rule", "find_transitive_rule",
    "TransformationCatalogs",
    "AssertionDatabase",
    "RuleMissing", "ClosureRuleMissing", "EquivalenceRuleMissing", "ImplicationRuleMissing",
]
