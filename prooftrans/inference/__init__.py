from .implication import ImplicationInfo, find_modus_ponens
from .conjunction import ConjunctionInfo, find_conjunction_intro

__all__ = [
    "ImplicationInfo", "find_modus_ponens",
    "ConjunctionInfo", "find_conjunction_intro",
]
