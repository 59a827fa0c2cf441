"""
Exception hierarchy for the presolve package.
Reductions themselves never raise; these report broken input state.
"""
class PresolveError(Exception):
    """Base class for presolve-related errors."""

class ProblemShapeError(PresolveError):
    pass

class InconsistentDataError(PresolveError):
    pass
