"""
Contract violations raised during synthesis.

Mining never raises for an assertion of the wrong shape; it simply does not
catalog it. These errors mean a caller asked for a rule that the catalogs
never recorded, i.e. the caller and the engine disagree. They subclass
AssertionError so that nothing treats them as recoverable.
"""


class RuleMissing(AssertionError):
    """A synthesis call needed a rule that was never cataloged."""


class ClosureRuleMissing(RuleMissing):
    pass


class EquivalenceRuleMissing(RuleMissing):
    pass


class ImplicationRuleMissing(RuleMissing):
    pass
