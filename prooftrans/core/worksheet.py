"""
Worksheet: the per-proof-session store of derived steps.

Every step is keyed by its formula, so a goal is derived at most once per
worksheet however many times synthesis asks for it:

    get_proof_step(tree)                        -> cached step or None
    get_or_create_proof_step(tree, hyps, assrt) -> cached step, or a new one

A step records the assertion that justifies it and the steps it was derived
from. Steps with no assertion are hypotheses supplied by the user. Nothing
here checks that the justification is valid; that is the proof checker's job.
"""

from dataclasses import dataclass, field
from typing import Optional
import json
import logging

from .tree import Assrt, ParseNode, serialize_tree, deserialize_tree


logger = logging.getLogger(__name__)


@dataclass(eq=False)
class ProofStep:
    """A justified formula within one worksheet."""
    number: int
    formula: ParseNode
    hyps: tuple = ()
    assrt: Optional[Assrt] = None

    @property
    def is_hypothesis(self) -> bool:
        return self.assrt is None

    @property
    def name(self):
        if self.assrt is None:
            ref = "hyp"
        else:
            ref = ",".join(str(h.number) for h in self.hyps)
            ref = f"{ref}:{self.assrt.label}" if ref else f":{self.assrt.label}"
        return f"{self.number}:{ref} |- {self.formula}"

    def __repr__(self):
        return f"ProofStep({self.name})"


@dataclass
class Worksheet:
    """All proof steps of one session, in creation order."""
    steps: list = field(default_factory=list)
    _by_formula: dict = field(init=False, default_factory=dict, repr=False)

    def __post_init__(self):
        for step in self.steps:
            if step.formula in self._by_formula:
                raise ValueError(f"Two steps for {step.formula}")
            self._by_formula[step.formula] = step

    def get_proof_step(self, formula: ParseNode) -> Optional[ProofStep]:
        return self._by_formula.get(formula)

    def get_or_create_proof_step(self, formula: ParseNode, hyps, assrt: Optional[Assrt]) -> ProofStep:
        existing = self._by_formula.get(formula)
        if existing is not None:
            return existing
        step = ProofStep(len(self.steps) + 1, formula, tuple(hyps), assrt)
        self.steps.append(step)
        self._by_formula[formula] = step
        logger.debug("New step %s", step.name)
        return step

    def add_hypothesis(self, formula: ParseNode) -> ProofStep:
        return self.get_or_create_proof_step(formula, (), None)

    def __len__(self):
        return len(self.steps)

    def __contains__(self, formula):
        return formula in self._by_formula

    def __iter__(self):
        return iter(self.steps)

    # --- Persistence ---

    def to_dict(self):
        return {
            "steps": [
                {
                    "number": s.number,
                    "formula": serialize_tree(s.formula),
                    "hyps": [h.number for h in s.hyps],
                    "assrt": s.assrt.label if s.assrt else None,
                }
                for s in self.steps
            ],
        }

    @classmethod
    def from_dict(cls, d, database):
        """Rebuild a worksheet; symbols and assertions are resolved through `database`."""
        sheet = cls()
        by_number = {}
        for entry in d["steps"]:
            formula = deserialize_tree(entry["formula"], database.symbols)
            hyps = tuple(by_number[n] for n in entry["hyps"])
            assrt = database.get(entry["assrt"]) if entry["assrt"] else None
            if entry["assrt"] and assrt is None:
                raise ValueError(f"Unknown assertion {entry['assrt']!r}")
            step = sheet.get_or_create_proof_step(formula, hyps, assrt)
            by_number[entry["number"]] = step
        return sheet

    def save(self, path="worksheet.json"):
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, database, path="worksheet.json"):
        with open(path) as f:
            return cls.from_dict(json.load(f), database)
