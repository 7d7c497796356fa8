"""
Analytic scattering solver for a circular disc.

The field scattered by a disc of radius a centred at c is known in closed
form: the incident regular wavefunction J_|n|(k r) exp(i n theta) about c
produces the scattered field t_n H_|n|(k r) exp(i n theta) with

    t_n = -J_|n|(k a) / H_|n|(k a)      (sound-soft, u = 0 on the boundary)
    t_n = -J'_|n|(k a) / H'_|n|(k a)    (sound-hard, du/dn = 0)

The solver is useful as a reference for T-matrix computations since its
exact T-matrix is diagonal.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from .exceptions import IncompatibleOperandsError
from .expansion import RadiatingWavefunctionExpansion
from .series import orders
from .solver import Solver
from .special_functions import besselj, besselh, besseljd, besselhd
from .tmatrix import TMatrix
from .utilities import check_wavenumber, suggested_order, unit_directions

logger = logging.getLogger(__name__)

BOUNDARY_CONDITIONS = ('sound-soft', 'sound-hard')


class DiscSolver(Solver):
    """
    Solver for scattering by a sound-soft or sound-hard disc.

    Incident fields are expanded about the disc centre. Wavefunctions and
    expansions centred elsewhere cannot be translated, so solve raises
    TranslationNotSupportedError for them; an off-centre disc is used with
    ghtmatrix(..., origin=solver.centre).

    Attributes:
        radius: Disc radius
        kwave: Wavenumber
        centre: Disc centre (complex)
        boundary: 'sound-soft' or 'sound-hard'
        nmax: Truncation order used to expand the incident fields
    """

    def __init__(self,
                 radius: float,
                 kwave: float,
                 centre: complex = 0,
                 boundary: str = 'sound-soft',
                 nmax: Optional[int] = None):
        super().__init__()
        if radius <= 0:
            raise ValueError(f"Disc radius must be positive, got {radius}")
        if boundary not in BOUNDARY_CONDITIONS:
            raise ValueError(f"boundary must be one of {BOUNDARY_CONDITIONS}, got {boundary!r}")

        self.radius = float(radius)
        self.kwave = check_wavenumber(kwave)
        self.centre = complex(centre)
        self.boundary = boundary
        self.nmax = suggested_order(self.kwave, self.radius) if nmax is None else int(nmax)
        self._coefficients = None

    def scattering_coefficients(self, nmax: Optional[int] = None) -> np.ndarray:
        """Diagonal T-matrix entries t_n for n = -nmax..nmax."""
        if nmax is None:
            nmax = self.nmax
        m = np.abs(orders(nmax))
        ka = self.kwave * self.radius
        if self.boundary == 'sound-soft':
            return -besselj(m, ka) / besselh(m, ka)
        return -besseljd(m, ka) / besselhd(m, ka)

    def solve(self) -> None:
        """
        Expand each incident field about the disc centre and apply t_n.

        Raises:
            RuntimeError: If no incident field has been set
            IncompatibleOperandsError: If an incident wavenumber differs
            TranslationNotSupportedError: If a wavefunction or expansion is
                centred away from the disc centre
        """
        if not self.incident_field:
            raise RuntimeError("No incident field set; call set_incident_field first")

        for i, field in enumerate(self.incident_field):
            if field.kwave != self.kwave:
                raise IncompatibleOperandsError(
                    f"Incident field {i} has wavenumber {field.kwave}, solver has {self.kwave}",
                    attribute='kwave'
                )

        logger.info(f"Solving {self.boundary} disc problem: radius={self.radius}, kwave={self.kwave}, "
                    f"nmax={self.nmax}, {len(self.incident_field)} incident field(s)")

        t = self.scattering_coefficients()
        incident = np.column_stack([
            field.get_coefficients(self.centre, self.nmax) for field in self.incident_field
        ])
        self._coefficients = t[:, np.newaxis] * incident

    def _check_solved(self) -> None:
        if self._coefficients is None:
            raise RuntimeError("Solver has not been run; call solve first")

    def scattered_field(self, index: int) -> RadiatingWavefunctionExpansion:
        """Scattered field for incident field index as a radiating expansion."""
        self._check_solved()
        return RadiatingWavefunctionExpansion(self.nmax, self.centre, self.kwave, self._coefficients[:, index])

    def get_scattered_field(self, points, index: int, mask: Optional[np.ndarray] = None) -> np.ndarray:
        """Scattered field values at points outside the disc."""
        return self.scattered_field(index).evaluate(points, mask)

    def get_far_field(self, angles: np.ndarray, indices: Sequence[int]) -> np.ndarray:
        """
        Far fields of the scattered fields, referenced to the global origin.

        Returns:
            Complex array of shape (len(angles), len(indices))
        """
        self._check_solved()
        directions = unit_directions(np.ravel(angles))
        columns = [self.scattered_field(i).evaluate_far_field(directions) for i in indices]
        if not columns:
            return np.zeros((directions.size, 0), dtype=complex)
        return np.stack(columns, axis=1)

    def tmatrix(self, order: Optional[int] = None) -> TMatrix:
        """Exact T-matrix of the disc about its centre."""
        if order is None:
            order = self.nmax
        comment = f"Exact {self.boundary} disc T-matrix, radius {self.radius}."
        return TMatrix(order, self.kwave, np.diag(self.scattering_coefficients(order)), self.centre, comment)
