"""
Derivation extraction and display.

After synthesis mints a step, these utilities walk back through the
hypothesis links to recover the derivation tree that justifies it.
"""

from .worksheet import ProofStep


def extract_derivation(step: ProofStep) -> list:
    """
    Walk back from `step` through its hypothesis steps.
    Returns a list of (step, depth) pairs, ordered from leaves to `step`.
    Shared sub-derivations appear once.
    """
    derivation = []
    visited = set()

    def walk(s, depth):
        if s.number in visited:
            return
        visited.add(s.number)
        derivation.append((s, depth))
        for hyp in s.hyps:
            walk(hyp, depth + 1)

    walk(step, 0)
    derivation.reverse()
    return derivation


def used_assertions(step: ProofStep) -> set:
    """Labels of every assertion the derivation of `step` relies on."""
    return {s.assrt.label for s, _ in extract_derivation(step) if s.assrt is not None}


def print_derivation(step: ProofStep):
    """Pretty-print the derivation tree."""
    derivation = extract_derivation(step)
    print(f"\n{'='*60}")
    print(f"DERIVATION of |- {step.formula}")
    print(f"{'='*60}")
    for s, depth in derivation:
        indent = "  " * depth
        print(f"  {indent}{s.name}")
    print(f"{'='*60}")
