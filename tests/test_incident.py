"""
Tests for the incident field algebra.
"""
import os
import sys
import warnings

# Add the src directory to the path if not already installed
src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if src_path not in sys.path:
    sys.path.insert(0, src_path)

import numpy as np
import pytest

from tmatrix2d import (
    RegularWavefunction2D, RadiatingWavefunction2D, PlaneWave, PointSource,
    IncidentField, RadiatingIncidentField, add, subtract, negate, scale,
    IncidentTypeError, InvalidOperandsError, IncompatibleOperandsError,
    IncompleteCoefficientsWarning, unit_directions
)


K = 1.3
POINTS = np.array([0.7 + 0.2j, -1.1 + 0.9j, 0.3 - 1.4j])


@pytest.fixture
def fields():
    """Three fields with the same wavenumber."""
    a = RegularWavefunction2D(1, K)
    b = RegularWavefunction2D(-2, K)
    c = PlaneWave(np.exp(0.4j), K)
    return a, b, c


def test_sum_and_difference(fields):
    """Sums and differences evaluate operand by operand."""
    a, b, _ = fields
    np.testing.assert_allclose((a + b).evaluate(POINTS), a.evaluate(POINTS) + b.evaluate(POINTS))
    np.testing.assert_allclose((a - b).evaluate(POINTS), a.evaluate(POINTS) - b.evaluate(POINTS))

    dx, dy = (a - b).evaluate_gradient(POINTS)
    adx, ady = a.evaluate_gradient(POINTS)
    bdx, bdy = b.evaluate_gradient(POINTS)
    np.testing.assert_allclose(dx, adx - bdx)
    np.testing.assert_allclose(dy, ady - bdy)


def test_negation_and_scaling(fields):
    """Negation and scaling act linearly on values and coefficients."""
    a, _, c = fields
    np.testing.assert_allclose((-a).evaluate(POINTS), -a.evaluate(POINTS))
    np.testing.assert_allclose((2.5j * c).evaluate(POINTS), 2.5j * c.evaluate(POINTS))
    np.testing.assert_allclose((c * 3).get_coefficients(0, 4), 3 * c.get_coefficients(0, 4))
    np.testing.assert_allclose(negate(c).get_coefficients(0, 4), -c.get_coefficients(0, 4))


def test_function_forms_match_operators(fields):
    """add, subtract, negate and scale agree with the operators."""
    a, b, _ = fields
    np.testing.assert_allclose(add(a, b).evaluate(POINTS), (a + b).evaluate(POINTS))
    np.testing.assert_allclose(subtract(a, b).evaluate(POINTS), (a - b).evaluate(POINTS))
    np.testing.assert_allclose(scale(2, a).evaluate(POINTS), scale(a, 2).evaluate(POINTS))


def test_deep_combination(fields):
    """Nested combinations evaluate like the equivalent arithmetic."""
    a, b, c = fields
    u = (a + b) - 2 * (-c)
    expected = a.evaluate(POINTS) + b.evaluate(POINTS) + 2 * c.evaluate(POINTS)
    np.testing.assert_allclose(u.evaluate(POINTS), expected)
    np.testing.assert_allclose(
        u.get_coefficients(0, 3),
        a.get_coefficients(0, 3) + b.get_coefficients(0, 3) + 2 * c.get_coefficients(0, 3)
    )


def test_numpy_scalars_multiply(fields):
    """Numpy scalars on the left produce scaled fields, not arrays."""
    a, _, _ = fields
    u = np.float64(2.0) * a
    assert isinstance(u, IncidentField)
    np.testing.assert_allclose(u.evaluate(POINTS), 2 * a.evaluate(POINTS))


def test_non_field_operands(fields):
    """Combining a field with a non-field is rejected."""
    a, _, _ = fields
    with pytest.raises(IncidentTypeError):
        a + 1
    with pytest.raises(IncidentTypeError):
        1 + a
    with pytest.raises(IncidentTypeError):
        a - 'field'
    with pytest.raises(IncidentTypeError):
        negate(3)
    with pytest.raises(TypeError):
        add(a, None)


def test_invalid_products(fields):
    """Products need exactly one field and one number."""
    a, b, _ = fields
    with pytest.raises(InvalidOperandsError):
        a * b
    with pytest.raises(InvalidOperandsError):
        scale(2, 3)
    with pytest.raises(InvalidOperandsError):
        a * 'x'
    with pytest.raises(InvalidOperandsError):
        True * a


def test_wavenumber_mismatch(fields):
    """Fields with different wavenumbers cannot be combined."""
    a, _, _ = fields
    other = RegularWavefunction2D(0, 2 * K)
    with pytest.raises(IncompatibleOperandsError) as excinfo:
        a + other
    assert excinfo.value.attribute == 'kwave'


def test_radiating_combinations():
    """Radiating operands give radiating results with a far field."""
    h = RadiatingWavefunction2D(2, K, 0.3j)
    p = PointSource(-0.5 + 0.1j, K)
    u = 2 * h - p
    assert isinstance(u, RadiatingIncidentField)

    d = unit_directions(np.linspace(0, 2 * np.pi, 5, endpoint=False))
    np.testing.assert_allclose(u.evaluate_far_field(d), 2 * h.evaluate_far_field(d) - p.evaluate_far_field(d))
    np.testing.assert_allclose((-h).evaluate_far_field(d), -h.evaluate_far_field(d))


def test_mixed_combination_is_not_radiating(fields):
    """A regular operand makes the combination non-radiating."""
    a, _, _ = fields
    u = a + RadiatingWavefunction2D(0, K)
    assert isinstance(u, IncidentField)
    assert not isinstance(u, RadiatingIncidentField)
    assert not hasattr(u, 'evaluate_far_field')


def test_coefficient_result_complete(fields):
    """A complete coefficient vector is flagged as such."""
    a, b, _ = fields
    result = (a + b).coefficient_result(0, 3)
    assert result.complete
    assert result.messages == ()
    np.testing.assert_allclose(result.values, (a + b).get_coefficients(0, 3))


def test_coefficient_result_incomplete(fields):
    """Missing orders are reported without raising a warning."""
    a, _, _ = fields
    high = RegularWavefunction2D(5, K)
    with warnings.catch_warnings():
        warnings.simplefilter('error', IncompleteCoefficientsWarning)
        result = (a + high).coefficient_result(0, 2)
    assert not result.complete
    assert len(result.messages) == 1
    assert '5' in result.messages[0]
    np.testing.assert_allclose(result.values, a.get_coefficients(0, 2))
