"""
Catalog population: everything mined from one database snapshot.

    catalogs = TransformationCatalogs.build(database)

Implication and conjunction operators are mined first because closure
mining needs them to read implication closure rules. Nothing is updated
incrementally: a changed database means a fresh build.
"""

import logging
from dataclasses import dataclass

from .inference.implication import ImplicationInfo
from .inference.conjunction import ConjunctionInfo
from .closure import ClosureInfo
from .equivalence import EquivalenceInfo


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformationCatalogs:
    impl_info: ImplicationInfo
    conj_info: ConjunctionInfo
    closure_info: ClosureInfo
    eq_info: EquivalenceInfo

    @classmethod
    def build(cls, assrt_list) -> "TransformationCatalogs":
        assrt_list = list(assrt_list)
        impl_info = ImplicationInfo(assrt_list)
        conj_info = ConjunctionInfo(assrt_list)
        closure_info = ClosureInfo(impl_info, conj_info, assrt_list)
        eq_info = EquivalenceInfo(assrt_list)
        logger.info(
            "Catalogs built from %d assertions: %d closure, %d implication closure, %d equivalence",
            len(assrt_list),
            len(closure_info.closure_rules),
            len(closure_info.impl_closure_rules),
            len(eq_info.eq_commutatives),
        )
        return cls(impl_info, conj_info, closure_info, eq_info)

    def rebuild(self, assrt_list) -> "TransformationCatalogs":
        return type(self).build(assrt_list)

    # --- Client surface ---

    def has_closure_assert(self, stmt, const_subst, template) -> bool:
        return self.closure_info.has_closure_assert(stmt, const_subst, template)

    def closure_property(self, worksheet, gen_stmt, node):
        return self.closure_info.closure_property(worksheet, gen_stmt, node)

    def is_equivalence(self, stmt) -> bool:
        return self.eq_info.is_equivalence(stmt)
