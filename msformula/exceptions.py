"""Exceptions raised by msformula."""


class IncorrectFormula(ValueError):
    """Exception raised when a formula cannot be built from the provided data."""


class MalformedFormula(IncorrectFormula):
    """Exception raised when a formula string does not follow the formula grammar."""


class NegativeElementCount(IncorrectFormula):
    """Exception raised when an operation would leave an element with a negative count."""


class InvalidCharge(IncorrectFormula):
    """Exception raised when a charge magnitude and sign are not compatible."""


class UnknownElement(ValueError):
    """Exception raised when a symbol is not found in the periodic table."""


class IncorrectAdduct(ValueError):
    """Exception raised when an adduct cannot be built from the provided data."""


class MalformedAdduct(IncorrectAdduct):
    """Exception raised when an adduct string does not follow the adduct grammar."""
