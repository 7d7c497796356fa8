"""
Regular and radiating circular wavefunctions.

A circular wavefunction of order n about origin x0 is

    Z_|n|(k r) exp(i n theta),    x - x0 = r exp(i theta)

with Z = J (regular, finite at the origin) or Z = H^(1) (radiating,
outgoing at infinity). Wavefunctions are immutable incident fields; their
values and gradients are computed by the series routines with a unit
coefficient vector.
"""

import logging
from typing import Optional

import numpy as np

from .exceptions import TranslationNotSupportedError
from .incident import IncidentField, RadiatingIncidentField, warn_incomplete
from .series import BasisKind, sumcof, gradsumcof, far_field_phase
from .utilities import check_order, check_wavenumber

logger = logging.getLogger(__name__)


class Wavefunction2D(IncidentField):
    """
    Base class for circular wavefunctions.

    Attributes:
        order: Integer order n (may be negative)
        kwave: Wavenumber k
        origin: Origin x0 as a complex number
    """

    kind: BasisKind = None

    def __init__(self, order: int, kwave: float, origin: complex = 0):
        if self.kind is None:
            raise TypeError(f"{type(self).__name__} has no basis kind; use RegularWavefunction2D or RadiatingWavefunction2D")
        self._order = check_order(order)
        self._kwave = check_wavenumber(kwave)
        self._origin = complex(origin)

    @property
    def order(self) -> int:
        return self._order

    @property
    def kwave(self) -> float:
        return self._kwave

    @property
    def origin(self) -> complex:
        return self._origin

    def unit_coefficients(self) -> np.ndarray:
        """Coefficient vector of length 2|n|+1 with a single 1 at this order."""
        nmax = abs(self._order)
        cof = np.zeros(2 * nmax + 1, dtype=complex)
        cof[self._order + nmax] = 1
        return cof

    def evaluate(self, points, mask: Optional[np.ndarray] = None) -> np.ndarray:
        return sumcof(points, self._origin, self._kwave, self.unit_coefficients(), self.kind, mask)

    def evaluate_gradient(self, points, mask: Optional[np.ndarray] = None):
        return gradsumcof(points, self._origin, self._kwave, self.unit_coefficients(), self.kind, mask)

    def get_coefficients(self, centre: complex, nmax: int) -> np.ndarray:
        """
        Coefficient vector of this wavefunction about centre.

        Only centre == origin is supported since other centres need the
        addition theorem. If |order| > nmax there is no entry for this
        order and the zero vector is returned with an
        IncompleteCoefficientsWarning.

        Args:
            centre: Expansion centre, must equal origin
            nmax: Truncation order

        Returns:
            Complex vector of length 2*nmax+1

        Raises:
            TranslationNotSupportedError: If centre differs from origin
            ValueError: If nmax is negative
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
        if abs(self._order) <= nmax:
            cof[self._order + nmax] = 1
        else:
            warn_incomplete(
                f"order {self._order} > nmax {nmax} so coefficient vector is incomplete."
            )
        return cof

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return (self._order, self._kwave, self._origin) == (other._order, other._kwave, other._origin)

    def __hash__(self):
        return hash((type(self).__name__, self._order, self._kwave, self._origin))

    def __repr__(self):
        return f"{type(self).__name__}(order={self._order}, kwave={self._kwave}, origin={self._origin})"


class RegularWavefunction2D(Wavefunction2D):
    """Regular wavefunction J_|n|(k r) exp(i n theta)."""

    kind = BasisKind.REGULAR


class RadiatingWavefunction2D(Wavefunction2D, RadiatingIncidentField):
    """Radiating wavefunction H^(1)_|n|(k r) exp(i n theta)."""

    kind = BasisKind.RADIATING

    def evaluate_far_field(self, points) -> np.ndarray:
        """
        Far field in the directions points, referenced to the global origin.

        Args:
            points: Unit complex numbers exp(i theta); the magnitude is not used

        Returns:
            Complex far field amplitudes, same shape as points
        """
        val = sumcof(points, 0, self._kwave, self.unit_coefficients(), BasisKind.FARFIELD)
        if self._origin != 0:
            val = val * far_field_phase(points, self._origin, self._kwave)
        return val
