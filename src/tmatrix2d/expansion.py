"""
Wavefunction expansions.

A wavefunction expansion stores the coefficients of a truncated series of
regular or radiating circular wavefunctions about an origin. Regular
expansions describe incident fields near a scatterer; radiating expansions
describe scattered fields and are produced from regular ones by a T-matrix.

Two expansions are added or subtracted coefficient by coefficient, both by
the operators and by the functions add and subtract, and must agree in
kind, wavenumber, origin and order. Scaling and negation also act on the
coefficients. Mixing an expansion with any other incident field falls back
to the general incident field algebra.
"""

import logging
from typing import Optional, Union

import numpy as np

from .exceptions import IncompatibleOperandsError, TranslationNotSupportedError
from .incident import IncidentField, RadiatingIncidentField, warn_incomplete
from .series import BasisKind, sumcof, gradsumcof, far_field_phase
from .utilities import check_order, check_wavenumber

logger = logging.getLogger(__name__)


class WavefunctionExpansion(IncidentField):
    """
    Truncated wavefunction expansion.

    Attributes:
        order: Truncation order nmax
        origin: Expansion centre
        kwave: Wavenumber
        coefficients: Read-only complex vector of length 2*nmax+1
    """

    kind: BasisKind = None

    def __init__(self,
                 order: int,
                 origin: complex,
                 kwave: float,
                 coefficients: Union[np.ndarray, IncidentField]):
        """
        Initialize an expansion from a coefficient vector or an incident field.

        Args:
            order: Truncation order nmax
            origin: Expansion centre
            kwave: Wavenumber
            coefficients: Coefficient vector of length 2*nmax+1, or an
                IncidentField whose coefficients about origin are used

        Raises:
            ValueError: If order is negative or the vector has the wrong length
        """
        order = check_order(order)
        if order < 0:
            raise ValueError(f"Expansion order must be non-negative, got {order}")
        self._order = order
        self._origin = complex(origin)
        self._kwave = check_wavenumber(kwave)

        if isinstance(coefficients, IncidentField):
            coefficients = coefficients.get_coefficients(self._origin, order)

        cof = np.array(np.ravel(coefficients), dtype=complex)
        if cof.size != 2 * order + 1:
            raise ValueError(f"Expected {2 * order + 1} coefficients for order {order}, got {cof.size}")
        cof.setflags(write=False)
        self._coefficients = cof

    @property
    def order(self) -> int:
        return self._order

    @property
    def origin(self) -> complex:
        return self._origin

    @property
    def kwave(self) -> float:
        return self._kwave

    @property
    def coefficients(self) -> np.ndarray:
        return self._coefficients

    def evaluate(self, points, mask: Optional[np.ndarray] = None) -> np.ndarray:
        return sumcof(points, self._origin, self._kwave, self._coefficients, self.kind, mask)

    def evaluate_gradient(self, points, mask: Optional[np.ndarray] = None):
        return gradsumcof(points, self._origin, self._kwave, self._coefficients, self.kind, mask)

    def get_coefficients(self, centre: complex, nmax: int) -> np.ndarray:
        """
        Coefficients about the expansion origin, zero padded or truncated to
        nmax. Truncating non-zero coefficients issues an
        IncompleteCoefficientsWarning.

        Raises:
            TranslationNotSupportedError: If centre differs from origin
        """
        if complex(centre) != self._origin:
            raise TranslationNotSupportedError(
                f"Only centre = origin ({self._origin}) is supported, got centre {complex(centre)}: "
                f"translation not supported"
            )
        nmax = check_order(nmax)
        if nmax < 0:
            raise ValueError(f"nmax must be non-negative, got {nmax}")

        cof = np.zeros(2 * nmax + 1, dtype=complex)
        m = min(nmax, self._order)
        cof[nmax - m:nmax + m + 1] = self._coefficients[self._order - m:self._order + m + 1]

        if nmax < self._order:
            dropped = np.concatenate([self._coefficients[:self._order - m], self._coefficients[self._order + m + 1:]])
            if np.any(dropped != 0):
                warn_incomplete(f"expansion order {self._order} > nmax {nmax} so coefficient vector is incomplete.")
        return cof

    def check_compatible(self, other: 'WavefunctionExpansion') -> None:
        """
        Check that two expansions can be combined term by term.

        Raises:
            IncompatibleOperandsError: Naming the first mismatched attribute
        """
        if type(other) is not type(self):
            raise IncompatibleOperandsError(
                f"Cannot combine {type(self).__name__} with {type(other).__name__}", attribute='kind'
            )
        for attribute in ('kwave', 'origin', 'order'):
            mine, theirs = getattr(self, attribute), getattr(other, attribute)
            if mine != theirs:
                raise IncompatibleOperandsError(
                    f"Expansion {attribute}s do not match ({mine} != {theirs})", attribute=attribute
                )

    def _new(self, coefficients: np.ndarray) -> 'WavefunctionExpansion':
        return type(self)(self._order, self._origin, self._kwave, coefficients)

    def combine_terms(self, other, operation):
        if not isinstance(other, WavefunctionExpansion):
            return NotImplemented
        self.check_compatible(other)
        return self._new(operation(self._coefficients, other._coefficients))

    def scale_terms(self, scalar):
        return self._new(scalar * self._coefficients)

    def __repr__(self):
        return (f"{type(self).__name__}(order={self._order}, origin={self._origin}, "
                f"kwave={self._kwave})")


class RegularWavefunctionExpansion(WavefunctionExpansion):
    """Expansion in regular wavefunctions J_|n|(k r) exp(i n theta)."""

    kind = BasisKind.REGULAR


class RadiatingWavefunctionExpansion(WavefunctionExpansion, RadiatingIncidentField):
    """Expansion in radiating wavefunctions H_|n|(k r) exp(i n theta)."""

    kind = BasisKind.RADIATING

    def evaluate_far_field(self, points) -> np.ndarray:
        """
        Far field in the directions points, referenced to the global origin.

        Args:
            points: Unit complex numbers exp(i theta)

        Returns:
            Complex far field amplitudes, same shape as points
        """
        val = sumcof(points, 0, self._kwave, self._coefficients, BasisKind.FARFIELD)
        if self._origin != 0:
            val = val * far_field_phase(points, self._origin, self._kwave)
        return val
