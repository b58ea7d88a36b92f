"""
Domain: a small set.mm-flavoured arithmetic database.

Enough theorems to exercise every recognized shape, plus a few that are
passed over on purpose:

    ax-mp        |- ph & |- ( ph -> ps ) => |- ps               modus ponens
    pm3.2i       |- ph & |- ps => |- ( ph /\\ ps )               conjunction
    3pm3.2i      |- ph & |- ps & |- ch => |- 3an( ph, ps, ch )  conjunction
    addcl        |- A e. CC & |- B e. CC => |- ( A + B ) e. CC   closure
    addcl2       same shape as addcl, recorded second: ignored
    mulcl        |- A e. CC & |- B e. CC => |- ( A x. B ) e. CC  closure
    readdcl      |- A e. RR & |- B e. RR => |- ( A + B ) e. RR   closure
    sincl        |- A e. CC => |- ( sin A ) e. CC                 closure
    fcl          |- A e. CC => |- ( A f 1 ) e. CC                 constant argument
    divrevcl     |- A e. CC & |- B e. CC => |- ( B / A ) e. CC   wrong order: ignored
    subcl        |- ( ( A e. CC /\\ B e. CC ) -> ( A - B ) e. CC ) implication closure
    muladdcl     |- ( 3an( A e. CC, B e. CC, C e. CC ) -> muladd( A, B, C ) e. CC )
    eqcom, eqtr  = is an equivalence on classes
    bicom, bitr  <-> is an equivalence on wffs
    letr         only transitive: <_ is filtered out
"""

from ..core.tree import var, const, node, make_assrt
from ..core.template import PropertyTemplate, PLACEHOLDER
from ..core.worksheet import Worksheet
from ..core.proof import print_derivation
from ..database import AssertionDatabase


# --- Symbols ---

PH = var("ph", "wff")
PS = var("ps", "wff")
CH = var("ch", "wff")

A = var("A")
B = var("B")
C = var("C")
X = var("X")
Y = var("Y")
Z = var("Z")

CC = const("CC")
RR = const("RR")
ONE = const("1")

IMP = const("->", "wff")
AND = const("/\\", "wff")
AND3 = const("3an", "wff")
BIIMP = const("<->", "wff")
ELEM = const("e.", "wff")
EQ = const("=", "wff")
LE = const("<_", "wff")

PLUS = const("+")
TIMES = const("x.")
MINUS = const("-")
DIV = const("/")
SIN = const("sin")
F = const("f")
MULADD = const("muladd")


def in_cc(x):
    return node(ELEM, x, CC)


ELEM_CC = PropertyTemplate(node(ELEM, PLACEHOLDER, CC))
ELEM_RR = PropertyTemplate(node(ELEM, PLACEHOLDER, RR))


def make_assertions() -> list:
    return [
        make_assrt("ax-mp", [node(PH), node(IMP, PH, PS)], node(PS)),
        make_assrt("pm3.2i", [node(PH), node(PS)], node(AND, PH, PS)),
        make_assrt("3pm3.2i", [node(PH), node(PS), node(CH)], node(AND3, PH, PS, CH)),

        make_assrt("addcl", [in_cc(A), in_cc(B)], in_cc(node(PLUS, A, B))),
        make_assrt("addcl2", [in_cc(A), in_cc(B)], in_cc(node(PLUS, A, B))),
        make_assrt("mulcl", [in_cc(A), in_cc(B)], in_cc(node(TIMES, A, B))),
        make_assrt("readdcl", [node(ELEM, A, RR), node(ELEM, B, RR)],
                   node(ELEM, node(PLUS, A, B), RR)),
        make_assrt("sincl", [in_cc(A)], in_cc(node(SIN, A))),
        make_assrt("fcl", [in_cc(A)], in_cc(node(F, A, ONE))),
        make_assrt("divrevcl", [in_cc(A), in_cc(B)], in_cc(node(DIV, B, A))),

        make_assrt("subcl", [], node(
            IMP,
            node(AND, in_cc(A), in_cc(B)),
            in_cc(node(MINUS, A, B)),
        )),
        make_assrt("muladdcl", [], node(
            IMP,
            node(AND3, in_cc(A), in_cc(B), in_cc(C)),
            in_cc(node(MULADD, A, B, C)),
        )),

        make_assrt("eqcom", [node(EQ, A, B)], node(EQ, B, A)),
        make_assrt("eqtr", [node(EQ, A, B), node(EQ, B, C)], node(EQ, A, C)),
        make_assrt("bicom", [node(BIIMP, PH, PS)], node(BIIMP, PS, PH)),
        make_assrt("bitr", [node(BIIMP, PH, PS), node(BIIMP, PS, CH)], node(BIIMP, PH, CH)),
        make_assrt("letr", [node(LE, A, B), node(LE, B, C)], node(LE, A, C)),
    ]


def make_arithmetic_database() -> AssertionDatabase:
    """The database above, with the worksheet variables X, Y, Z declared too."""
    return AssertionDatabase(assertions=make_assertions(), symbols=[X, Y, Z])


def make_demo_worksheet() -> Worksheet:
    """Hypotheses |- X e. CC, |- Y e. CC, |- Z e. CC, |- X = Y, |- Y = Z."""
    sheet = Worksheet()
    for v in (X, Y, Z):
        sheet.add_hypothesis(in_cc(node(v)))
    sheet.add_hypothesis(node(EQ, X, Y))
    sheet.add_hypothesis(node(EQ, Y, Z))
    return sheet


def run_arithmetic_demo(catalogs, verbose=True) -> tuple:
    """
    Synthesize a few goals on the demo worksheet.

    Returns (worksheet, {description: ProofStep}).
    """
    closure = catalogs.closure_info
    eq_info = catalogs.eq_info
    sheet = make_demo_worksheet()
    results = {}

    goals = [
        ("sum closure", node(PLUS, node(PLUS, X, Y), Z)),
        ("difference closure", node(MINUS, node(MINUS, X, Y), Z)),
        ("constant argument closure", node(F, node(F, X, ONE), ONE)),
    ]
    for description, goal in goals:
        gen_stmt = closure.generalize(goal, ELEM_CC)
        if gen_stmt is None or not closure.is_closure_provable(sheet, gen_stmt, goal):
            if verbose:
                print(f"  [no rule] {description}: {ELEM_CC.subst(goal)}")
            continue
        results[description] = closure.closure_property(sheet, gen_stmt, goal)

    xy = sheet.get_proof_step(node(EQ, X, Y))
    yz = sheet.get_proof_step(node(EQ, Y, Z))
    xz = eq_info.get_transitive_chain(sheet, [xy, yz])
    results["transitive chain"] = xz
    results["reverse"] = eq_info.create_reverse(sheet, xz)

    if verbose:
        for step in results.values():
            print_derivation(step)
    return sheet, results
