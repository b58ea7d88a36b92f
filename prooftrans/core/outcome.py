"""
Mining outcomes.

Mining looks at one assertion at a time and either recognizes a rule in it
or explains why it does not have a recognized shape. Only Recognized
outcomes reach a catalog; NotApplicable is kept so callers and tests can
see why a theorem was passed over.
"""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Recognized:
    rule: Any

    def __bool__(self):
        return True


@dataclass(frozen=True)
class NotApplicable:
    reason: str

    def __bool__(self):
        return False


Outcome = Union[Recognized, NotApplicable]
