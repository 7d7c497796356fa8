#!/usr/bin/env python3
"""
Basic T-matrix Tutorial

This tutorial demonstrates the fundamental operations of the tmatrix2d
package:
- Building incident fields and combining them
- Computing a T-matrix from far field data with ghtmatrix
- Applying the T-matrix to an incident field
- Checking the result against the symmetry relation
- Plotting fields and T-matrices

The scatterer is a sound-soft disc, for which the exact T-matrix is known,
so every step can be checked.
"""

from tmatrix2d import (
    DiscSolver, PlaneWave, PointSource, RegularWavefunctionExpansion,
    ghtmatrix, suggested_order, plot_field, plot_far_field, plot_tmatrix
)
import matplotlib.pyplot as plt
import numpy as np
from pathlib import Path


def print_section_header(title):
    """Print a formatted section header."""
    print("\n" + "="*60)
    print(f"{title}")
    print("="*60)


# Get the directory where this script is located
script_dir = Path(__file__).parent

kwave = 2.0
radius = 1.0

# ============================================================================
print_section_header("STEP 1: CHOOSING THE TRUNCATION ORDER")
# ============================================================================
order = suggested_order(kwave, radius)
print(f"Wavenumber k = {kwave}, disc radius a = {radius}")
print(f"Suggested truncation order N = {order} ({2 * order + 1} wavefunctions)")

# ============================================================================
print_section_header("STEP 2: COMPUTING THE T-MATRIX")
# ============================================================================
solver = DiscSolver(radius, kwave, boundary='sound-soft', nmax=order + 5)
tmat = ghtmatrix(order, kwave, solver)
print(tmat)
print(f"Comments: {tmat.get_comments()}")
print(f"Symmetry error: {tmat.error():.3e}")

exact = solver.tmatrix(order)
print(f"Max difference from exact T-matrix: {np.max(np.abs(tmat.matrix - exact.matrix)):.3e}")

# ============================================================================
print_section_header("STEP 3: SCATTERING A COMBINED INCIDENT FIELD")
# ============================================================================
incident = PlaneWave(np.exp(0.25j * np.pi), kwave) + 0.5 * PointSource(5 + 5j, kwave)
expansion = RegularWavefunctionExpansion(order, 0, kwave, incident)
result = expansion.coefficient_result(0, order)
print(f"Incident coefficients complete: {result.complete}")

scattered = tmat @ expansion
print(f"Scattered field: {scattered}")

points = np.array([2.0, 2.0j, -2.0, -2.0j])
print("Scattered field on a circle of radius 2:")
for x, u in zip(points, scattered.evaluate(points)):
    print(f"  x = {x:+.1f}: u = {u:.6f}")

# ============================================================================
print_section_header("STEP 4: PLOTTING")
# ============================================================================
x = np.linspace(-4, 4, 161)
y = np.linspace(-4, 4, 161)
X, Y = np.meshgrid(x, y)
outside = np.abs(X + 1j * Y) > radius

fig, axes = plt.subplots(1, 2, figsize=(13, 5))
plot_field(scattered, x, y, part='real', mask=outside, ax=axes[0], title='Scattered field')
plot_field(incident + scattered, x, y, part='abs', mask=outside, ax=axes[1], title='|Total field|')
fig.tight_layout()
fig.savefig(script_dir / 'disc_fields.png', dpi=120)

plot_far_field(scattered, title='Far field of the scattered wave')
plot_tmatrix(tmat)
plt.show()
