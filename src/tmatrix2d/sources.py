"""
Plane wave and point source incident fields.
"""

import logging
from typing import Optional

import numpy as np

from .exceptions import SingularPointError
from .incident import IncidentField, RadiatingIncidentField
from .series import orders, select_points, scatter_values, far_field_factor, far_field_phase
from .special_functions import besselh
from .utilities import check_order, check_wavenumber

logger = logging.getLogger(__name__)


class PlaneWave(IncidentField):
    """
    Plane wave exp(i k d.x) travelling in direction d.

    Args:
        direction: Propagation direction as a complex number; it is
            normalised to unit length
        kwave: Wavenumber

    Raises:
        ValueError: If direction is zero or kwave is not positive
    """

    def __init__(self, direction: complex, kwave: float):
        direction = complex(direction)
        if direction == 0:
            raise ValueError("Plane wave direction must be non-zero")
        self._direction = direction / abs(direction)
        self._kwave = check_wavenumber(kwave)

    @property
    def direction(self) -> complex:
        return self._direction

    @property
    def kwave(self) -> float:
        return self._kwave

    def _phase(self, points):
        return np.exp(1j * self._kwave * np.real(np.conj(self._direction) * points))

    def evaluate(self, points, mask: Optional[np.ndarray] = None) -> np.ndarray:
        p, selected, shape = select_points(points, mask)
        return scatter_values(self._phase(p), selected, shape)

    def evaluate_gradient(self, points, mask: Optional[np.ndarray] = None):
        p, selected, shape = select_points(points, mask)
        u = 1j * self._kwave * self._phase(p)
        dx = scatter_values(np.real(self._direction) * u, selected, shape)
        dy = scatter_values(np.imag(self._direction) * u, selected, shape)
        return dx, dy

    def get_coefficients(self, centre: complex, nmax: int) -> np.ndarray:
        """
        Regular wavefunction coefficients from the Jacobi-Anger expansion,

            c_n = exp(i k d.c) i^|n| exp(-i n arg(d)).

        Valid about any centre; the vector is always complete.
        """
        nmax = check_order(nmax)
        if nmax < 0:
            raise ValueError(f"nmax must be non-negative, got {nmax}")
        n = orders(nmax)
        shift = np.exp(1j * self._kwave * np.real(np.conj(self._direction) * complex(centre)))
        return shift * (1j ** np.abs(n)) * np.exp(-1j * n * np.angle(self._direction))

    def __repr__(self):
        return f"PlaneWave(direction={self._direction}, kwave={self._kwave})"


class PointSource(RadiatingIncidentField):
    """
    Point source H^(1)_0(k |x - y|) located at y.

    Args:
        location: Source location y as a complex number
        kwave: Wavenumber
    """

    def __init__(self, location: complex, kwave: float):
        self._location = complex(location)
        self._kwave = check_wavenumber(kwave)

    @property
    def location(self) -> complex:
        return self._location

    @property
    def kwave(self) -> float:
        return self._kwave

    def evaluate(self, points, mask: Optional[np.ndarray] = None) -> np.ndarray:
        p, selected, shape = select_points(points, mask)
        val = besselh(0, self._kwave * np.abs(p - self._location))
        return scatter_values(val, selected, shape)

    def evaluate_gradient(self, points, mask: Optional[np.ndarray] = None):
        """
        Gradient -k H^(1)_1(k r) (x - y)/r.

        Raises:
            SingularPointError: If a point coincides with the source
        """
        p, selected, shape = select_points(points, mask)
        q = p - self._location
        r = np.abs(q)
        if np.any(r == 0):
            raise SingularPointError(f"Point source gradient is singular at its location {self._location}")
        g = -self._kwave * besselh(1, self._kwave * r) / r
        return scatter_values(g * np.real(q), selected, shape), scatter_values(g * np.imag(q), selected, shape)

    def get_coefficients(self, centre: complex, nmax: int) -> np.ndarray:
        """
        Regular wavefunction coefficients about centre from Graf's addition
        theorem, c_n = H_|n|(k |y - c|) exp(-i n arg(y - c)). The expansion
        converges for |x - c| < |y - c|.

        Raises:
            ValueError: If centre coincides with the source location
        """
        nmax = check_order(nmax)
        if nmax < 0:
            raise ValueError(f"nmax must be non-negative, got {nmax}")
        p = self._location - complex(centre)
        if p == 0:
            raise ValueError("Cannot expand a point source about its own location")
        n = orders(nmax)
        return besselh(np.abs(n), self._kwave * abs(p)) * np.exp(-1j * n * np.angle(p))

    def evaluate_far_field(self, points) -> np.ndarray:
        """Far field sqrt(2/(pi k)) exp(-i pi/4) exp(-i k d.y) in directions points."""
        points = np.asarray(points, dtype=complex)
        return far_field_factor(0, self._kwave) * far_field_phase(points, self._location, self._kwave)

    def __repr__(self):
        return f"PointSource(location={self._location}, kwave={self._kwave})"
