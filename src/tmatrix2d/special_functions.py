"""
Cylindrical Bessel and Hankel functions used by the circular wavefunctions.

Thin wrappers around scipy.special. The order is expected to be a
non-negative integer (callers pass |n|); negative orders give NaN rather
than an exception, as do non-finite arguments.
"""

import numpy as np
from scipy.special import jv, hankel1, jvp, h1vp


def _valid_order(n):
    n = np.asarray(n)
    return n, n >= 0


def besselj(n, x):
    """Bessel function of the first kind J_n(x)."""
    n, ok = _valid_order(n)
    val = jv(np.where(ok, n, 0), x)
    return np.where(ok, val, np.nan)


def besselh(n, x):
    """Hankel function of the first kind H_n^(1)(x) = J_n(x) + i Y_n(x)."""
    n, ok = _valid_order(n)
    val = hankel1(np.where(ok, n, 0), x)
    return np.where(ok, val, np.nan + 1j * np.nan)


def besseljd(n, x):
    """Derivative of J_n with respect to its argument."""
    n, ok = _valid_order(n)
    val = jvp(np.where(ok, n, 0), x)
    return np.where(ok, val, np.nan)


def besselhd(n, x):
    """Derivative of H_n^(1) with respect to its argument."""
    n, ok = _valid_order(n)
    val = h1vp(np.where(ok, n, 0), x)
    return np.where(ok, val, np.nan + 1j * np.nan)
