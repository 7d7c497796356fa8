"""
Tests for the Bessel and Hankel function wrappers.
"""
import os
import sys

# Add the src directory to the path if not already installed
src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if src_path not in sys.path:
    sys.path.insert(0, src_path)

import numpy as np
from scipy.special import jv, yv

from tmatrix2d import besselj, besselh, besseljd, besselhd


def test_values_match_scipy():
    """J and H agree with scipy's jv and yv."""
    x = np.linspace(0.1, 20, 50)
    for n in [0, 1, 5, 12]:
        np.testing.assert_allclose(besselj(n, x), jv(n, x), rtol=1e-14)
        np.testing.assert_allclose(besselh(n, x), jv(n, x) + 1j * yv(n, x), rtol=1e-14)


def test_derivatives_order_zero():
    """J0' = -J1 and H0' = -H1."""
    x = np.linspace(0.5, 10, 20)
    np.testing.assert_allclose(besseljd(0, x), -besselj(1, x), rtol=1e-12, atol=1e-15)
    np.testing.assert_allclose(besselhd(0, x), -besselh(1, x), rtol=1e-12)


def test_wronskian():
    """J_n Y_n' - J_n' Y_n = 2/(pi x)."""
    x = np.array([0.7, 2.5, 9.0])
    for n in [0, 3, 8]:
        w = besselj(n, x) * np.imag(besselhd(n, x)) - besseljd(n, x) * np.imag(besselh(n, x))
        np.testing.assert_allclose(w, 2 / (np.pi * x), rtol=1e-10)


def test_large_order_is_finite():
    """High orders do not break down for moderate and large arguments."""
    assert np.isfinite(besselj(300, 1.0))
    assert np.isfinite(besselj(300, 500.0))
    assert np.isfinite(besselh(200, 300.0))
    assert np.isfinite(besselhd(200, 300.0))


def test_domain_errors_give_nan():
    """Negative orders and NaN arguments give NaN rather than raising."""
    assert np.isnan(besselj(-1, 1.0))
    assert np.isnan(besselh(-2, 1.0))
    assert np.isnan(besseljd(-1, 1.0))
    assert np.isnan(besselhd(-1, 1.0))
    assert np.isnan(besselj(1, np.nan))


def test_broadcasting():
    """Orders and arguments broadcast like numpy ufuncs."""
    n = np.array([[0, 1, 2]])
    x = np.array([[1.0], [2.0]])
    assert besselj(n, x).shape == (2, 3)
    assert besselh(n, x).shape == (2, 3)
