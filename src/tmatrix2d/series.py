"""
Evaluation of truncated circular wavefunction series.

A coefficient vector c of length 2*nmax+1 (index = n + nmax) defines the
series

    u(x) = sum_n c_n Z_|n|(k r) exp(i n theta),    x - x0 = r exp(i theta)

where Z is the Bessel function J (regular kind), the Hankel function H^(1)
(radiating kind) or, for the far field kind, the constant
sqrt(2/(pi k)) exp(-i pi/4) (-i)^|n| obtained from the large argument
asymptotics of H^(1)_|n|.

The module provides the values (sumcof), the polar partial derivatives
(dsumcof) and the Cartesian gradient (gradsumcof) of such a series at an
arbitrary array of points. Points are complex numbers x + iy.
"""

import logging
from collections import namedtuple
from enum import Enum
from typing import Optional, Tuple, Union

import numpy as np

from .exceptions import SingularPointError, UnsupportedKindError
from .special_functions import besselj, besselh, besseljd, besselhd
from .utilities import as_points

logger = logging.getLogger(__name__)


class BasisKind(Enum):
    """Radial behaviour of a circular wavefunction series."""
    REGULAR = 'J'
    RADIATING = 'H'
    FARFIELD = 'F'

    @classmethod
    def parse(cls, kind: Union['BasisKind', str]) -> 'BasisKind':
        """
        Accept either a BasisKind or one of the tags 'J', 'H', 'F'.

        Raises:
            ValueError: If the tag is not recognised
        """
        if isinstance(kind, cls):
            return kind
        try:
            return cls(str(kind).upper())
        except ValueError:
            raise ValueError(f"Unknown basis kind {kind!r}, expected one of 'J', 'H', 'F'") from None


PolarDerivatives = namedtuple('PolarDerivatives', ['dr', 'dtheta', 'er', 'etheta', 'rad'])


def orders(nmax: int) -> np.ndarray:
    """Return the integer orders -nmax..nmax."""
    return np.arange(-nmax, nmax + 1)


def nmax_from_length(length: int) -> int:
    """
    Truncation order implied by a coefficient vector length.

    Raises:
        ValueError: If the length is not odd
    """
    if length % 2 != 1:
        raise ValueError(f"Coefficient vector must have odd length 2*nmax+1, got {length}")
    return (length - 1) // 2


def far_field_factor(n: np.ndarray, kwave: float) -> np.ndarray:
    """Far field amplitude of H^(1)_|n|(k r) exp(i n theta) with exp(ikr)/sqrt(r) removed."""
    return np.sqrt(2.0 / (np.pi * kwave)) * np.exp(-0.25j * np.pi) * (-1j) ** np.abs(n)


def select_points(points, mask: Optional[np.ndarray] = None):
    """
    Flatten points and keep those where mask is True.

    Returns:
        Tuple (selected_points, selected, shape) where selected is the
        flattened boolean mask and shape the original shape of points

    Raises:
        ValueError: If mask and points have different shapes
    """
    points = as_points(points)
    shape = points.shape
    flat = points.ravel()
    if mask is None:
        selected = np.ones(flat.shape, dtype=bool)
    else:
        mask = np.asarray(mask, dtype=bool)
        if mask.shape != shape:
            raise ValueError(f"Mask shape {mask.shape} does not match points shape {shape}")
        selected = mask.ravel()
    return flat[selected], selected, shape


def scatter_values(values, selected, shape, dtype=complex):
    """Inverse of select_points: place values back, NaN where not selected."""
    fill = np.nan + 1j * np.nan if dtype is complex else np.nan
    out = np.full(selected.shape, fill, dtype=dtype)
    out[selected] = values
    return out.reshape(shape)


def _prepare(points, centre, cof, mask):
    cof = np.ravel(np.asarray(cof, dtype=complex))
    n = orders(nmax_from_length(cof.size))
    flat, selected, shape = select_points(points, mask)
    p = flat - complex(centre)
    return p, cof, n, selected, shape


def _radial(kind: BasisKind, n: np.ndarray, kwave: float, rad: np.ndarray) -> np.ndarray:
    if kind is BasisKind.FARFIELD:
        return np.broadcast_to(far_field_factor(n, kwave), (rad.size, n.size))
    nd, rd = np.meshgrid(np.abs(n), kwave * rad)
    if kind is BasisKind.REGULAR:
        return besselj(nd, rd)
    return besselh(nd, rd)


def _radial_derivative(kind: BasisKind, n: np.ndarray, kwave: float, rad: np.ndarray) -> np.ndarray:
    nd, rd = np.meshgrid(np.abs(n), kwave * rad)
    if kind is BasisKind.REGULAR:
        return kwave * besseljd(nd, rd)
    return kwave * besselhd(nd, rd)


def sumcof(
    points,
    centre: complex,
    kwave: float,
    cof: np.ndarray,
    kind: Union[BasisKind, str],
    mask: Optional[np.ndarray] = None
) -> np.ndarray:
    """
    Evaluate a circular wavefunction series.

    Args:
        points: Complex array of evaluation points (any shape)
        centre: Expansion centre
        kwave: Wavenumber
        cof: Coefficient vector of length 2*nmax+1, orders -nmax..nmax
        kind: BasisKind or tag 'J' (regular), 'H' (radiating), 'F' (far field).
            For the far field the points are directions relative to centre.
        mask: Optional boolean array, same shape as points. Points where the
            mask is False are not evaluated and are set to NaN.

    Returns:
        Complex array of values with the same shape as points
    """
    kind = BasisKind.parse(kind)
    p, cof, n, selected, shape = _prepare(points, centre, cof, mask)

    theta = np.angle(p)
    rad = np.abs(p)

    Y = np.exp(1j * np.outer(theta, n))
    values = (_radial(kind, n, kwave, rad) * Y) @ cof

    return scatter_values(values, selected, shape)


def dsumcof(
    points,
    centre: complex,
    kwave: float,
    cof: np.ndarray,
    kind: Union[BasisKind, str],
    mask: Optional[np.ndarray] = None
) -> PolarDerivatives:
    """
    Evaluate the polar partial derivatives of a circular wavefunction series.

    Args:
        points: Complex array of evaluation points (any shape)
        centre: Expansion centre
        kwave: Wavenumber
        cof: Coefficient vector of length 2*nmax+1
        kind: 'J' or 'H' (the far field kind has no radial dependence)
        mask: Optional boolean mask, see sumcof

    Returns:
        PolarDerivatives(dr, dtheta, er, etheta, rad) where dr and dtheta are
        the partial derivatives with respect to r and theta, er and etheta
        are the unit vectors (as complex numbers) associated with them and
        rad is the distance from the centre. er and etheta are NaN at the
        centre itself.

    Raises:
        UnsupportedKindError: If kind is the far field kind
    """
    kind = BasisKind.parse(kind)
    if kind is BasisKind.FARFIELD:
        raise UnsupportedKindError("Partial derivatives are not defined for the far field kind 'F'")

    p, cof, n, selected, shape = _prepare(points, centre, cof, mask)

    theta = np.angle(p)
    rad = np.abs(p)

    Y = np.exp(1j * np.outer(theta, n))
    Yd = Y * (1j * n)

    dr = (_radial_derivative(kind, n, kwave, rad) * Y) @ cof
    dtheta = (_radial(kind, n, kwave, rad) * Yd) @ cof

    with np.errstate(divide='ignore', invalid='ignore'):
        er = p / rad
    etheta = 1j * er

    return PolarDerivatives(
        dr=scatter_values(dr, selected, shape),
        dtheta=scatter_values(dtheta, selected, shape),
        er=scatter_values(er, selected, shape),
        etheta=scatter_values(etheta, selected, shape),
        rad=scatter_values(rad, selected, shape, dtype=float)
    )


def gradsumcof(
    points,
    centre: complex,
    kwave: float,
    cof: np.ndarray,
    kind: Union[BasisKind, str],
    mask: Optional[np.ndarray] = None
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Evaluate the Cartesian gradient of a circular wavefunction series.

    The gradient is assembled from the polar derivatives by the chain rule,

        dx = Re(er) du/dr + Re(etheta)/r du/dtheta
        dy = Im(er) du/dr + Im(etheta)/r du/dtheta

    Args:
        points: Complex array of evaluation points (any shape)
        centre: Expansion centre
        kwave: Wavenumber
        cof: Coefficient vector of length 2*nmax+1
        kind: 'J' or 'H'
        mask: Optional boolean mask, see sumcof. Use it to exclude the centre.

    Returns:
        Tuple (dx, dy) of complex arrays with the same shape as points

    Raises:
        UnsupportedKindError: If kind is the far field kind
        SingularPointError: If an evaluated point coincides with the centre
    """
    d = dsumcof(points, centre, kwave, cof, kind, mask)

    singular = d.rad == 0
    if np.any(singular):
        raise SingularPointError(
            f"Gradient is singular at the expansion centre {complex(centre)} "
            f"({np.count_nonzero(singular)} point(s)); mask these points out"
        )

    dx = np.real(d.er) * d.dr + np.real(d.etheta) / d.rad * d.dtheta
    dy = np.imag(d.er) * d.dr + np.imag(d.etheta) / d.rad * d.dtheta
    return dx, dy


def far_field_phase(directions, origin: complex, kwave: float) -> np.ndarray:
    """
    Phase factor exp(-i k d.origin) relating a far field referenced to
    origin to the same far field referenced to 0, for unit directions d.
    """
    directions = as_points(directions)
    directions = directions / np.abs(directions)
    return np.exp(-1j * kwave * np.real(np.conj(directions) * complex(origin)))
