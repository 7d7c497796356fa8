"""
Exception and warning types raised by the tmatrix2d package.

Every exception also derives from the closest built-in type so that code
catching ``ValueError`` or ``TypeError`` keeps working.
"""


class TMatrixError(Exception):
    """Base class for all errors raised by tmatrix2d."""


class IncidentTypeError(TMatrixError, TypeError):
    """An operand does not provide the incident field interface."""


class InvalidOperandsError(TMatrixError, TypeError):
    """Wrong operand combination, e.g. field * field or scalar * scalar."""


class TranslationNotSupportedError(TMatrixError, NotImplementedError):
    """Coefficients were requested about a centre other than the origin."""


class UnsupportedKindError(TMatrixError, ValueError):
    """The far field kernel was used where a radial function is required."""


class SingularPointError(TMatrixError, ZeroDivisionError):
    """A gradient was requested at the expansion centre."""


class IncompatibleOperandsError(TMatrixError, ValueError):
    """
    Operands disagree on wavenumber, origin, order or kind.

    Attributes:
        attribute: Name of the mismatched attribute
    """

    def __init__(self, message: str, attribute: str = None):
        super().__init__(message)
        self.attribute = attribute


class FormatError(TMatrixError, ValueError):
    """Unknown file format tag or malformed file contents."""


class IncompleteCoefficientsWarning(UserWarning):
    """The truncation order is too small to hold every coefficient."""
