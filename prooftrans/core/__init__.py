from .tree import (
    Stmt, ParseNode, LogHyp, Assrt,
    var, const, leaf, node, make_assrt, create_binary_node,
    serialize_tree, deserialize_tree,
)
from .template import (
    PLACEHOLDER, NoMatch, Matched, NO_MATCH, match, get_corresponding_node,
    create_template_node_from_hyp_root,
    PropertyTemplate, ConstSubst, GeneralizedStmt,
)
from .outcome import Recognized, NotApplicable
from .worksheet import ProofStep, Worksheet
from .proof import extract_derivation, used_assertions, print_derivation

__all__ = [
    "Stmt", "ParseNode", "LogHyp", "Assrt",
    "var", "const", "leaf", "node", "make_assrt", "create_binary_node",
    "serialize_tree", "deserialize_tree",
    "PLACEHOLDER", "NoMatch", "Matched", "NO_MATCH", "match", "get_corresponding_node",
    "create_template_node_from_hyp_root",
    "PropertyTemplate", "ConstSubst", "GeneralizedStmt",
    "Recognized", "NotApplicable",
    "ProofStep", "Worksheet",
    "extract_derivation", "used_assertions", "print_derivation",
]
