"""
Tests for regular and radiating circular wavefunctions.
"""
import os
import sys

# Add the src directory to the path if not already installed
src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if src_path not in sys.path:
    sys.path.insert(0, src_path)

import numpy as np
import pytest
from scipy.special import jv, hankel1

from tmatrix2d import (
    RegularWavefunction2D, RadiatingWavefunction2D,
    TranslationNotSupportedError, IncompleteCoefficientsWarning, SingularPointError
)
from tmatrix2d.wavefunctions import Wavefunction2D


def test_properties():
    """Order, wavenumber and origin are stored and read-only."""
    w = RegularWavefunction2D(-3, 2.0, 1 + 1j)
    assert w.order == -3
    assert w.kwave == 2.0
    assert w.origin == 1 + 1j
    with pytest.raises(AttributeError):
        w.order = 4


def test_invalid_arguments():
    """Non-integer orders and non-positive wavenumbers are rejected."""
    with pytest.raises(ValueError):
        RegularWavefunction2D(1.5, 1.0)
    with pytest.raises(ValueError):
        RegularWavefunction2D(1, 0)
    with pytest.raises(ValueError):
        RadiatingWavefunction2D(1, -2.0)
    assert RegularWavefunction2D(2.0, 1.0).order == 2


def test_unit_coefficients():
    """Coefficients about the origin are the unit vector for the order."""
    for nmax in [3, 5]:
        for n in range(-3, 4):
            w = RegularWavefunction2D(n, 1.0, 0.5)
            cof = w.get_coefficients(0.5, nmax)
            expected = np.zeros(2 * nmax + 1, dtype=complex)
            expected[n + nmax] = 1
            np.testing.assert_array_equal(cof, expected)


def test_incomplete_coefficients_warn():
    """Orders above nmax give the zero vector with a warning."""
    w = RegularWavefunction2D(4, 1.0)
    with pytest.warns(IncompleteCoefficientsWarning):
        cof = w.get_coefficients(0, 2)
    np.testing.assert_array_equal(cof, np.zeros(5))


def test_translation_not_supported():
    """Coefficients about another centre are not available."""
    w = RegularWavefunction2D(1, 1.0)
    with pytest.raises(TranslationNotSupportedError):
        w.get_coefficients(1.0, 3)
    with pytest.raises(NotImplementedError):
        w.get_coefficients(1j, 3)


def test_regular_values():
    """Values are J_|n|(k r) exp(i n theta) about the origin."""
    k = 1.8
    origin = -0.4 + 0.3j
    points = np.array([1.0 + 0.0j, 0.2 + 1.5j, -2.0 - 0.5j])
    p = points - origin
    w = RegularWavefunction2D(-2, k, origin)
    expected = jv(2, k * np.abs(p)) * np.exp(-2j * np.angle(p))
    np.testing.assert_allclose(w.evaluate(points), expected, rtol=1e-12)


def test_radiating_values():
    """Values are H_|n|(k r) exp(i n theta) about the origin."""
    k = 0.9
    points = np.array([1.0 + 2.0j, -3.0 + 0.5j])
    w = RadiatingWavefunction2D(3, k)
    expected = hankel1(3, k * np.abs(points)) * np.exp(3j * np.angle(points))
    np.testing.assert_allclose(w.evaluate(points), expected, rtol=1e-12)


def test_gradient_matches_finite_differences():
    """Gradient agrees with central differences."""
    w = RadiatingWavefunction2D(1, 2.0, 0.5j)
    points = np.array([1.0 + 1.0j, -0.7 + 0.2j])
    h = 1e-6
    dx, dy = w.evaluate_gradient(points)
    np.testing.assert_allclose(dx, (w.evaluate(points + h) - w.evaluate(points - h)) / (2 * h), rtol=1e-6, atol=1e-8)
    np.testing.assert_allclose(dy, (w.evaluate(points + 1j * h) - w.evaluate(points - 1j * h)) / (2 * h), rtol=1e-6, atol=1e-8)


def test_gradient_at_origin():
    """The gradient at the origin is singular."""
    w = RegularWavefunction2D(0, 1.0)
    with pytest.raises(SingularPointError):
        w.evaluate_gradient(np.array([0.0, 1.0]))


@pytest.mark.parametrize("origin", [0, 0.5 + 0.2j])
def test_far_field_matches_asymptotics(origin):
    """The far field is referenced to the global origin."""
    k = 1.0
    w = RadiatingWavefunction2D(2, k, origin)
    directions = np.exp(1j * np.linspace(0, 2 * np.pi, 6, endpoint=False))
    R = 1e6
    near = w.evaluate(R * directions)
    np.testing.assert_allclose(near * np.sqrt(R) * np.exp(-1j * k * R), w.evaluate_far_field(directions), rtol=1e-3)


def test_equality():
    """Wavefunctions with equal parameters compare equal."""
    assert RegularWavefunction2D(1, 1.0) == RegularWavefunction2D(1, 1.0)
    assert RegularWavefunction2D(1, 1.0) != RegularWavefunction2D(-1, 1.0)
    assert RegularWavefunction2D(1, 1.0) != RadiatingWavefunction2D(1, 1.0)
    assert len({RegularWavefunction2D(1, 1.0), RegularWavefunction2D(1, 1.0)}) == 1


def test_base_class_needs_kind():
    """A wavefunction class without a basis kind cannot be instantiated."""
    class Unkinded(Wavefunction2D):
        pass

    with pytest.raises(TypeError):
        Unkinded(0, 1.0)
