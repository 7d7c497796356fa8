"""
Common utility functions and constants for 2-D T-matrix computations.

Points in the plane are represented by complex numbers (real part = x,
imaginary part = y) throughout the package.
"""
import numbers
import numpy as np
from typing import Tuple, Union, List

# File format revision written into saved T-matrices
FORMAT_VERSION = 2.2

# Type aliases
NumericArray = Union[np.ndarray, List[float], List[complex], Tuple[float, ...]]
PointArray = Union[complex, float, np.ndarray, List[complex]]


def as_points(points: PointArray) -> np.ndarray:
    """
    Convert planar points to a complex numpy array.

    Args:
        points: Scalar or array-like of complex points (x + iy)

    Returns:
        Complex ndarray with the same shape as the input
    """
    return np.asarray(points, dtype=complex)


def unit_directions(angles: NumericArray) -> np.ndarray:
    """
    Convert polar angles (radians) to unit direction vectors e^{i angle}.
    """
    return np.exp(1j * np.asarray(angles, dtype=float))


def is_scalar_number(value) -> bool:
    """
    Check whether a value is a plain numeric scalar (int, float, complex or
    a zero-dimensional numpy number). Booleans are not accepted.
    """
    if isinstance(value, (bool, np.bool_)):
        return False
    if isinstance(value, numbers.Number):
        return True
    return isinstance(value, np.ndarray) and value.ndim == 0 and np.issubdtype(value.dtype, np.number)


def interlace(*arrays: NumericArray) -> np.ndarray:
    """
    Interlace several arrays of equal length into a single vector.

    For n inputs of length m the result has length n*m and element k
    equals arrays[k % n][k // n].

    Args:
        *arrays: One or more array-like inputs of identical length

    Returns:
        1D ndarray containing the interlaced values

    Raises:
        ValueError: If no arrays are given or lengths differ
    """
    if len(arrays) == 0:
        raise ValueError("At least one array is required")

    flat = [np.ravel(np.asarray(a)) for a in arrays]
    m = flat[0].size
    for a in flat[1:]:
        if a.size != m:
            raise ValueError("input arrays must have same length")

    n = len(flat)
    result = np.zeros(n * m, dtype=np.result_type(*flat))
    for k, a in enumerate(flat):
        result[k::n] = a
    return result


def wavelength_to_wavenumber(wavelength: Union[float, np.ndarray]) -> np.ndarray:
    """
    Convert wavelength to wavenumber k = 2*pi/wavelength.

    Raises:
        ValueError: If wavelength is zero or negative
    """
    wavelength = np.asarray(wavelength, dtype=float)
    if np.any(wavelength <= 0):
        raise ValueError("Wavelength must be positive")
    return 2 * np.pi / wavelength


def wavenumber_to_wavelength(kwave: Union[float, np.ndarray]) -> np.ndarray:
    """
    Convert wavenumber to wavelength = 2*pi/k.

    Raises:
        ValueError: If wavenumber is zero or negative
    """
    kwave = np.asarray(kwave, dtype=float)
    if np.any(kwave <= 0):
        raise ValueError("Wavenumber must be positive")
    return 2 * np.pi / kwave


def suggested_order(kwave: float, radius: float) -> int:
    """
    Truncation order for a scatterer of given radius.

    Uses the Wiscombe rule N = kr + 4.05 (kr)^(1/3) + 2, which keeps the
    truncation error close to machine precision for smooth scatterers.

    Args:
        kwave: Wavenumber
        radius: Radius of the smallest circle enclosing the scatterer

    Returns:
        Truncation order N
    """
    kr = kwave * radius
    return int(np.ceil(kr + 4.05 * np.power(kr, 1.0 / 3.0) + 2))


def check_wavenumber(kwave) -> float:
    """
    Validate a wavenumber and return it as a float.

    Raises:
        ValueError: If kwave is not a finite positive real number
    """
    if not is_scalar_number(kwave) or np.iscomplexobj(kwave):
        raise ValueError(f"Wavenumber must be a real number, got {kwave!r}")
    kwave = float(kwave)
    if not np.isfinite(kwave) or kwave <= 0:
        raise ValueError(f"Wavenumber must be positive, got {kwave}")
    return kwave


def check_order(order) -> int:
    """
    Validate an integer order (may be negative) and return it as an int.

    Raises:
        ValueError: If order is not integral
    """
    if isinstance(order, (bool, np.bool_)) or not isinstance(order, (numbers.Integral, np.integer)):
        if is_scalar_number(order) and not np.iscomplexobj(order) and float(order).is_integer():
            return int(order)
        raise ValueError(f"Order must be an integer, got {order!r}")
    return int(order)
