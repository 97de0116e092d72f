"""exceptions raised by the rating update"""


class GlickoError(Exception):
    """Base exception for glicko_engine."""
    pass


class InvalidInput(GlickoError, ValueError):
    """Raised when a player, result or option carries a value outside its domain."""
    pass


class NumericDivergence(GlickoError, ArithmeticError):
    """Raised when the volatility root-finding does not converge within the iteration cap."""

    def __init__(self, message, iterations=None):
        super().__init__(message)
        self.iterations = iterations


class DegenerateInput(GlickoError, ArithmeticError):
    """Raised when a set of results carries no information, leaving the variance estimate undefined."""
    pass
