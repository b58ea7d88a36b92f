"""
Database registry.

Each entry describes a demonstration database:
    make_database:  () -> AssertionDatabase
    run_demo:       (catalogs, verbose) -> (Worksheet, dict)   [optional]
    description:    str
"""

from .arithmetic import make_arithmetic_database, run_arithmetic_demo


DATABASES = {
    "arithmetic": {
        "make_database": make_arithmetic_database,
        "run_demo":      run_arithmetic_demo,
        "description":   "Closure, implication closure and equality rules over CC and RR",
    },
}
