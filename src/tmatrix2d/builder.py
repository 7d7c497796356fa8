"""
T-matrix computation from far field data using quadrature.

The T-matrix entry T[m, n] is the m-th radiating coefficient of the field
scattered by the regular wavefunction of order n. The radiating
coefficients are recovered from the far field of the scattered field by a
discrete Fourier projection over 2N+2 equally spaced angles, which is exact
for far fields band limited to order N.

References:
    Ganesh, M. and Hawkins, S.C., ANZIAM J. 51 (2010) C215-C230.

    Dufva, T.J. et al., Progress In Electromagnetics Research B 4 (2008)
    79-99, eq. (21) for the origin shift of the far field.
"""

import logging
from typing import Tuple

import numpy as np

from .series import orders
from .solver import Solver
from .tmatrix import TMatrix
from .utilities import FORMAT_VERSION, check_order, check_wavenumber
from .wavefunctions import RegularWavefunction2D

logger = logging.getLogger(__name__)


def quadrature_points(order: int) -> Tuple[np.ndarray, float]:
    """
    Equally spaced quadrature angles on [0, 2 pi) for a T-matrix of order N.

    Returns:
        Tuple (angles, weight) with angles j pi/(N+1), j = 0..2N+1, and the
        uniform weight pi/(N+1)
    """
    angles = np.pi * np.arange(2 * order + 2) / (order + 1)
    weight = np.pi / (order + 1)
    return angles, weight


def scaling(n: np.ndarray, kwave: float) -> np.ndarray:
    """
    Factor converting projected far field coefficients to radiating
    wavefunction coefficients, 0.25 (1+i) sqrt(k/pi) i^|n|.
    """
    n = np.asarray(n)
    return 0.25 * (1 + 1j) * np.sqrt(kwave / np.pi) * 1j ** np.abs(n)


def origin_shift(angles: np.ndarray, origin: complex, kwave: float) -> np.ndarray:
    """
    Factors exp(i k Re(conj(origin) exp(i angle))) that re-reference a far
    field from the global origin to origin.
    """
    return np.exp(1j * kwave * np.real(np.conj(origin) * np.exp(1j * angles)))


def ghtmatrix(order: int, kwave: float, solver: Solver, origin: complex = 0) -> TMatrix:
    """
    Compute a T-matrix from far field data using quadrature.

    The solver is given the regular wavefunctions of orders -N..N centred
    at origin as incident fields. Their scattered far fields, sampled at
    the quadrature angles and referenced to the global origin, are shifted
    to origin and projected onto the radiating wavefunctions.

    Args:
        order: Truncation order N of the T-matrix
        kwave: Wavenumber
        solver: Solver instance for the scatterer
        origin: Centre of the T-matrix (default 0)

    Returns:
        TMatrix of order N centred at origin

    Raises:
        TypeError: If solver is not a Solver
        ValueError: If order or kwave is invalid, or the solver returns
            far field data of the wrong shape

    Any exception raised by the solver is propagated unchanged.
    """
    order = check_order(order)
    if order < 0:
        raise ValueError(f"T-matrix order must be non-negative, got {order}")
    kwave = check_wavenumber(kwave)
    origin = complex(origin)

    if not isinstance(solver, Solver):
        raise TypeError(f"solver must be an instance of Solver, got {type(solver).__name__}")

    angles, weight = quadrature_points(order)
    n = orders(order)

    logger.info(f"Computing T-matrix: order={order}, kwave={kwave}, origin={origin}, "
                f"{angles.size} quadrature points, solver {type(solver).__name__}")

    incident = [RegularWavefunction2D(m, kwave, origin) for m in n]

    solver.set_incident_field(incident)
    solver.solve()
    farfield = np.asarray(solver.get_far_field(angles, list(range(2 * order + 1))), dtype=complex)

    expected_shape = (2 * order + 2, 2 * order + 1)
    if farfield.shape != expected_shape:
        raise ValueError(f"Solver far field shape mismatch: expected {expected_shape}, got {farfield.shape}")

    if origin != 0:
        farfield = origin_shift(angles, origin, kwave)[:, np.newaxis] * farfield

    logger.info(f"Far field samples: max |F| = {float(np.abs(farfield).max()):.6e}")

    projection = np.exp(1j * np.outer(angles, n)).conj().T
    matrix = weight * scaling(n, kwave)[:, np.newaxis] * (projection @ farfield)

    comment = f"Computed using ghtmatrix v{FORMAT_VERSION} with solver {type(solver).__name__}."
    return TMatrix(order, kwave, matrix, origin, comment)
