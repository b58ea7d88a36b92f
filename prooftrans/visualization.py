"""
Reporting utilities for mined catalogs.
"""

from .catalogs import TransformationCatalogs
from .core.worksheet import Worksheet


def print_catalogs(catalogs: TransformationCatalogs):
    """Print every mined rule, grouped by catalog."""
    closure = catalogs.closure_info
    eq_info = catalogs.eq_info

    print(f"\n{'='*60}")
    print(f"Implication operators: {', '.join(map(str, catalogs.impl_info.operators)) or '(none)'}")
    print(f"Conjunction operators: {', '.join(map(str, catalogs.conj_info.operators)) or '(none)'}")

    print(f"Closure rules ({len(closure.closure_rules)}):")
    for rule in closure.closure_rules:
        print(f"  {rule}")
    print(f"Implication closure rules ({len(closure.impl_closure_rules)}):")
    for rule in closure.impl_closure_rules:
        print(f"  {rule}")

    print(f"Equivalence relations ({len(eq_info.eq_commutatives)}):")
    for typ, eq in eq_info.eq_map.items():
        comm = eq_info.get_eq_commutative(eq)
        trans = eq_info.get_eq_transitive(eq)
        print(f"  {typ}: {eq}  [{comm} / {trans}]")
    print(f"{'='*60}")


def print_skipped(catalogs: TransformationCatalogs):
    """Print why each assertion was not cataloged as a closure rule."""
    closure = catalogs.closure_info
    print(f"\n{'='*60}")
    print("Not cataloged as closure rules:")
    print(f"{'='*60}")
    for label, outcome in closure.outcomes.items():
        impl_outcome = closure.impl_outcomes.get(label)
        if outcome or impl_outcome:
            continue
        print(f"  {label}: {outcome.reason}; {impl_outcome.reason}")


def export_dot(worksheet: Worksheet, path="worksheet.dot"):
    """Export the worksheet's derivation graph as a DOT file for Graphviz."""
    with open(path, "w") as f:
        f.write("digraph worksheet {\n")
        f.write("  rankdir=BT;\n")
        f.write("  node [shape=box, style=rounded];\n")

        for step in worksheet:
            label = f"{step.number}: {step.formula}".replace("\\", "\\\\").replace('"', '\\"')
            color = "lightblue" if step.is_hypothesis else "lightgray"
            f.write(f'  s{step.number} [label="{label}", fillcolor={color}, style=filled];\n')
            for hyp in step.hyps:
                f.write(f"  s{hyp.number} -> s{step.number};\n")
        f.write("}\n")
    print(f"Graph exported to {path}")
