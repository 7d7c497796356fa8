"""
Tests for utility functions.
"""
import os
import sys

# Add the src directory to the path if not already installed
src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if src_path not in sys.path:
    sys.path.insert(0, src_path)

import numpy as np
import pytest

from tmatrix2d import interlace, wavelength_to_wavenumber, wavenumber_to_wavelength, suggested_order, unit_directions
from tmatrix2d.utilities import is_scalar_number, check_order, check_wavenumber


def test_interlace():
    """Element k of the result is arrays[k % n][k // n]."""
    a = np.array([1, 2, 3])
    b = np.array([10, 20, 30])
    c = np.array([100, 200, 300])
    result = interlace(a, b, c)
    np.testing.assert_array_equal(result, [1, 10, 100, 2, 20, 200, 3, 30, 300])
    arrays = (a, b, c)
    for k in range(result.size):
        assert result[k] == arrays[k % 3][k // 3]


def test_interlace_single_and_complex():
    """A single array is returned as is and complex values are kept."""
    np.testing.assert_array_equal(interlace([1, 2]), [1, 2])
    np.testing.assert_array_equal(interlace([1j], [2.0]), [1j, 2.0])


def test_interlace_errors():
    """Inputs must be given and have the same length."""
    with pytest.raises(ValueError, match='same length'):
        interlace([1, 2], [1, 2, 3])
    with pytest.raises(ValueError):
        interlace()


def test_wavelength_conversions():
    """Wavelength and wavenumber convert both ways."""
    assert wavelength_to_wavenumber(2 * np.pi) == pytest.approx(1.0)
    np.testing.assert_allclose(wavenumber_to_wavelength(wavelength_to_wavenumber([0.5, 3.0])), [0.5, 3.0])
    with pytest.raises(ValueError):
        wavelength_to_wavenumber(0)
    with pytest.raises(ValueError):
        wavenumber_to_wavelength(-1)


def test_suggested_order():
    """Truncation order grows with the electrical size."""
    assert suggested_order(1.0, 1.0) == 8
    assert suggested_order(10.0, 1.0) == 21
    assert suggested_order(1.0, 10.0) == suggested_order(10.0, 1.0)


def test_unit_directions():
    """Angles map to unit complex numbers."""
    np.testing.assert_allclose(unit_directions([0, np.pi / 2]), [1, 1j], atol=1e-15)


def test_is_scalar_number():
    """Numbers qualify, booleans and arrays do not."""
    assert is_scalar_number(1)
    assert is_scalar_number(2.5)
    assert is_scalar_number(1j)
    assert is_scalar_number(np.float32(1))
    assert is_scalar_number(np.array(3.0))
    assert not is_scalar_number(True)
    assert not is_scalar_number(np.ones(2))
    assert not is_scalar_number('1')


def test_checks():
    """Orders must be integral and wavenumbers real and positive."""
    assert check_order(np.int64(3)) == 3
    assert check_order(-2.0) == -2
    with pytest.raises(ValueError):
        check_order(0.5)
    with pytest.raises(ValueError):
        check_order(True)
    assert check_wavenumber(2) == 2.0
    with pytest.raises(ValueError):
        check_wavenumber(1 + 1j)
    with pytest.raises(ValueError):
        check_wavenumber(np.inf)
