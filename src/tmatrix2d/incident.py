"""
Incident fields and their algebra.

Any object that derives from IncidentField can be combined with other
incident fields using +, - and multiplication by a scalar, or the
equivalent functions add, subtract, negate and scale. The result is a new
incident field that evaluates its operands on demand, so arbitrarily deep
combinations can be built, e.g.

    u = 2 * RegularWavefunction2D(0, k) - PlaneWave(1j, k)

Incident fields that radiate (point sources, radiating wavefunctions and
expansions) derive from RadiatingIncidentField and also provide a far
field. Combinations of radiating fields are themselves radiating.
"""

import logging
import warnings
from abc import ABC, abstractmethod
from collections import namedtuple
from typing import Optional, Tuple

import numpy as np

from .exceptions import (
    IncidentTypeError, InvalidOperandsError, IncompatibleOperandsError,
    IncompleteCoefficientsWarning
)
from .utilities import is_scalar_number

logger = logging.getLogger(__name__)


CoefficientResult = namedtuple('CoefficientResult', ['values', 'complete', 'messages'])
CoefficientResult.__doc__ = """
Coefficient vector together with a completeness flag.

Attributes:
    values: Complex coefficient vector of length 2*nmax+1
    complete: False if some coefficients did not fit in the vector
    messages: Diagnostic messages explaining why the vector is incomplete
"""


def warn_incomplete(message: str) -> None:
    """Report a coefficient vector that is too short to hold every term."""
    logger.warning(message)
    warnings.warn(message, IncompleteCoefficientsWarning, stacklevel=3)


class IncidentField(ABC):
    """
    Abstract incident field.

    Subclasses must provide get_coefficients, evaluate and evaluate_gradient
    and set the attribute kwave.
    """

    # Make numpy scalars defer to the reflected operators below
    __array_ufunc__ = None

    kwave: float = None

    @abstractmethod
    def get_coefficients(self, centre: complex, nmax: int) -> np.ndarray:
        """
        Regular wavefunction expansion coefficients about centre.

        Args:
            centre: Expansion centre (complex point)
            nmax: Truncation order

        Returns:
            Complex vector of length 2*nmax+1, orders -nmax..nmax
        """

    @abstractmethod
    def evaluate(self, points, mask: Optional[np.ndarray] = None) -> np.ndarray:
        """Field values at points (NaN where mask is False)."""

    @abstractmethod
    def evaluate_gradient(self, points, mask: Optional[np.ndarray] = None) -> Tuple[np.ndarray, np.ndarray]:
        """Cartesian gradient (dx, dy) at points (NaN where mask is False)."""

    def coefficient_result(self, centre: complex, nmax: int) -> CoefficientResult:
        """
        Coefficients with an explicit completeness flag.

        Same as get_coefficients but, instead of relying on the caller to
        watch for IncompleteCoefficientsWarning, the warning is captured and
        reported in the returned CoefficientResult.
        """
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always', IncompleteCoefficientsWarning)
            values = self.get_coefficients(centre, nmax)

        messages = []
        for w in caught:
            if issubclass(w.category, IncompleteCoefficientsWarning):
                messages.append(str(w.message))
            else:
                warnings.warn(w.message, w.category)

        return CoefficientResult(values, len(messages) == 0, tuple(messages))

    def combine_terms(self, other: 'IncidentField', operation):
        """
        Combine with another field of the same representation term by term.

        Used by add and subtract before building a composite field. Fields
        without a coefficient representation return NotImplemented.

        Args:
            other: The right operand
            operation: Binary function applied to the coefficient vectors
        """
        return NotImplemented

    def scale_terms(self, scalar: complex):
        """Scale term by term, or NotImplemented (see combine_terms)."""
        return NotImplemented

    def __add__(self, other):
        return add(self, other)

    def __radd__(self, other):
        return add(other, self)

    def __sub__(self, other):
        return subtract(self, other)

    def __rsub__(self, other):
        return subtract(other, self)

    def __neg__(self):
        return negate(self)

    def __mul__(self, other):
        return scale(self, other)

    def __rmul__(self, other):
        return scale(other, self)


class RadiatingIncidentField(IncidentField):
    """Incident field that also has a far field pattern."""

    @abstractmethod
    def evaluate_far_field(self, points) -> np.ndarray:
        """
        Far field amplitude in the directions points (unit complex numbers).
        """


# ============================================================================
# COMPOSITE FIELDS
# ============================================================================

class IncidentNegation(IncidentField):
    """The field -left."""

    def __init__(self, left: IncidentField):
        if not isinstance(left, IncidentField):
            raise IncidentTypeError("left must be an IncidentField")
        self.left = left
        self.kwave = left.kwave

    def get_coefficients(self, centre, nmax):
        return -self.left.get_coefficients(centre, nmax)

    def evaluate(self, points, mask=None):
        return -self.left.evaluate(points, mask)

    def evaluate_gradient(self, points, mask=None):
        dx, dy = self.left.evaluate_gradient(points, mask)
        return -dx, -dy

    def __repr__(self):
        return f"{type(self).__name__}({self.left!r})"


class RadiatingIncidentNegation(IncidentNegation, RadiatingIncidentField):
    """The radiating field -left."""

    def evaluate_far_field(self, points):
        return -self.left.evaluate_far_field(points)


class _IncidentPair(IncidentField):

    def __init__(self, left: IncidentField, right: IncidentField):
        if not isinstance(left, IncidentField):
            raise IncidentTypeError("left must be an IncidentField")
        if not isinstance(right, IncidentField):
            raise IncidentTypeError("right must be an IncidentField")
        if left.kwave != right.kwave:
            raise IncompatibleOperandsError(
                f"Incident field wavenumbers do not match ({left.kwave} != {right.kwave})",
                attribute='kwave'
            )
        self.left = left
        self.right = right
        self.kwave = left.kwave

    def __repr__(self):
        return f"{type(self).__name__}({self.left!r}, {self.right!r})"


class IncidentSum(_IncidentPair):
    """The field left + right."""

    def get_coefficients(self, centre, nmax):
        return self.left.get_coefficients(centre, nmax) + self.right.get_coefficients(centre, nmax)

    def evaluate(self, points, mask=None):
        return self.left.evaluate(points, mask) + self.right.evaluate(points, mask)

    def evaluate_gradient(self, points, mask=None):
        ldx, ldy = self.left.evaluate_gradient(points, mask)
        rdx, rdy = self.right.evaluate_gradient(points, mask)
        return ldx + rdx, ldy + rdy


class RadiatingIncidentSum(IncidentSum, RadiatingIncidentField):
    """The radiating field left + right."""

    def evaluate_far_field(self, points):
        return self.left.evaluate_far_field(points) + self.right.evaluate_far_field(points)


class IncidentDifference(_IncidentPair):
    """The field left - right."""

    def get_coefficients(self, centre, nmax):
        return self.left.get_coefficients(centre, nmax) - self.right.get_coefficients(centre, nmax)

    def evaluate(self, points, mask=None):
        return self.left.evaluate(points, mask) - self.right.evaluate(points, mask)

    def evaluate_gradient(self, points, mask=None):
        ldx, ldy = self.left.evaluate_gradient(points, mask)
        rdx, rdy = self.right.evaluate_gradient(points, mask)
        return ldx - rdx, ldy - rdy


class RadiatingIncidentDifference(IncidentDifference, RadiatingIncidentField):
    """The radiating field left - right."""

    def evaluate_far_field(self, points):
        return self.left.evaluate_far_field(points) - self.right.evaluate_far_field(points)


class IncidentScalarProduct(IncidentField):
    """The field scalar * left."""

    def __init__(self, left: IncidentField, scalar: complex):
        if not isinstance(left, IncidentField):
            raise InvalidOperandsError("left must be an IncidentField")
        if not is_scalar_number(scalar):
            raise InvalidOperandsError(f"scalar must be a number, got {type(scalar).__name__}")
        self.left = left
        self.scalar = scalar
        self.kwave = left.kwave

    def get_coefficients(self, centre, nmax):
        return self.scalar * self.left.get_coefficients(centre, nmax)

    def evaluate(self, points, mask=None):
        return self.scalar * self.left.evaluate(points, mask)

    def evaluate_gradient(self, points, mask=None):
        dx, dy = self.left.evaluate_gradient(points, mask)
        return self.scalar * dx, self.scalar * dy

    def __repr__(self):
        return f"{type(self).__name__}({self.left!r}, {self.scalar!r})"


class RadiatingIncidentScalarProduct(IncidentScalarProduct, RadiatingIncidentField):
    """The radiating field scalar * left."""

    def evaluate_far_field(self, points):
        return self.scalar * self.left.evaluate_far_field(points)


# ============================================================================
# COMPOSITION FUNCTIONS
# ============================================================================

def _all_radiating(*fields) -> bool:
    return all(isinstance(f, RadiatingIncidentField) for f in fields)


def _check_pair(left, right, operation: str) -> None:
    if not isinstance(left, IncidentField) or not isinstance(right, IncidentField):
        raise IncidentTypeError(
            f"Cannot {operation} {type(left).__name__} and {type(right).__name__}: "
            f"both operands must be incident fields"
        )


def add(left: IncidentField, right: IncidentField) -> IncidentField:
    """
    Sum of two incident fields.

    Two wavefunction expansions are added coefficient by coefficient and
    must agree in kind, wavenumber, origin and order.

    Raises:
        IncidentTypeError: If either operand is not an IncidentField
        IncompatibleOperandsError: If the wavenumbers differ, or two
            expansions are not compatible
    """
    _check_pair(left, right, 'add')
    combined = left.combine_terms(right, np.add)
    if combined is not NotImplemented:
        return combined
    if _all_radiating(left, right):
        return RadiatingIncidentSum(left, right)
    return IncidentSum(left, right)


def subtract(left: IncidentField, right: IncidentField) -> IncidentField:
    """
    Difference of two incident fields, see add.

    Raises:
        IncidentTypeError: If either operand is not an IncidentField
        IncompatibleOperandsError: If the wavenumbers differ, or two
            expansions are not compatible
    """
    _check_pair(left, right, 'subtract')
    combined = left.combine_terms(right, np.subtract)
    if combined is not NotImplemented:
        return combined
    if _all_radiating(left, right):
        return RadiatingIncidentDifference(left, right)
    return IncidentDifference(left, right)


def negate(field: IncidentField) -> IncidentField:
    """
    Negation of an incident field.

    Raises:
        IncidentTypeError: If field is not an IncidentField
    """
    if not isinstance(field, IncidentField):
        raise IncidentTypeError(f"Cannot negate {type(field).__name__}: operand must be an incident field")
    scaled = field.scale_terms(-1)
    if scaled is not NotImplemented:
        return scaled
    if _all_radiating(field):
        return RadiatingIncidentNegation(field)
    return IncidentNegation(field)


def scale(first, second) -> IncidentField:
    """
    Product of an incident field and a scalar, in either order.

    Raises:
        InvalidOperandsError: Unless exactly one operand is an IncidentField
            and the other is a number
    """
    first_is_field = isinstance(first, IncidentField)
    second_is_field = isinstance(second, IncidentField)

    if first_is_field and second_is_field:
        raise InvalidOperandsError("Cannot multiply two incident fields; one operand must be a scalar")
    if not first_is_field and not second_is_field:
        raise InvalidOperandsError("One of the operands must be an incident field")

    field, scalar = (first, second) if first_is_field else (second, first)
    if not is_scalar_number(scalar):
        raise InvalidOperandsError(f"Incident fields can only be multiplied by a number, got {type(scalar).__name__}")

    scaled = field.scale_terms(scalar)
    if scaled is not NotImplemented:
        return scaled

    if _all_radiating(field):
        return RadiatingIncidentScalarProduct(field, scalar)
    return IncidentScalarProduct(field, scalar)
