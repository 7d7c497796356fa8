"""
Plotting functions for incident fields, scattered fields and T-matrices.
"""
import logging
from typing import Optional, Tuple, Literal

import numpy as np
import matplotlib.pyplot as plt

from .tmatrix import TMatrix
from .utilities import unit_directions

logger = logging.getLogger(__name__)

_PARTS = {
    'real': np.real,
    'imag': np.imag,
    'abs': np.abs,
}


def plot_field(
    field,
    x: np.ndarray,
    y: np.ndarray,
    part: Literal['real', 'imag', 'abs'] = 'real',
    mask: Optional[np.ndarray] = None,
    ax: Optional[plt.Axes] = None,
    fig_size: Tuple[float, float] = (7, 6),
    title: Optional[str] = None
) -> plt.Figure:
    """
    Plot a field on a rectangular grid.

    Args:
        field: Any object with an evaluate(points, mask) method, e.g. an
            incident field, an expansion or a combination of them
        x: 1D array of x coordinates
        y: 1D array of y coordinates
        part: Which part of the complex field to show
        mask: Optional boolean array of shape (len(y), len(x)); masked out
            points are left blank
        ax: Optional matplotlib axes to plot on
        fig_size: Figure size as (width, height) in inches
        title: Optional title for the plot

    Returns:
        matplotlib.Figure: The created figure object
    """
    if part not in _PARTS:
        raise ValueError(f"part must be one of {list(_PARTS)}, got {part!r}")

    if ax is None:
        fig, ax = plt.subplots(figsize=fig_size)
    else:
        fig = ax.figure

    X, Y = np.meshgrid(x, y)
    values = field.evaluate(X + 1j * Y, mask)

    mesh = ax.pcolormesh(X, Y, _PARTS[part](values), shading='auto', cmap='RdBu_r' if part != 'abs' else 'viridis')
    fig.colorbar(mesh, ax=ax)
    ax.set_aspect('equal')
    ax.set_xlabel('x')
    ax.set_ylabel('y')
    ax.set_title(title if title is not None else f"{part} part of {type(field).__name__}")
    return fig


def plot_far_field(
    field,
    n_angles: int = 360,
    ax: Optional[plt.Axes] = None,
    fig_size: Tuple[float, float] = (8, 5),
    title: Optional[str] = None
) -> plt.Figure:
    """
    Plot the far field magnitude of a radiating field against angle.

    Args:
        field: Object with an evaluate_far_field(points) method
        n_angles: Number of equally spaced observation angles
        ax: Optional matplotlib axes to plot on
        fig_size: Figure size as (width, height) in inches
        title: Optional title for the plot

    Returns:
        matplotlib.Figure: The created figure object
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=fig_size)
    else:
        fig = ax.figure

    angles = np.linspace(0, 2 * np.pi, n_angles, endpoint=False)
    values = field.evaluate_far_field(unit_directions(angles))

    ax.plot(np.degrees(angles), np.abs(values))
    ax.set_xlabel('Angle (degrees)')
    ax.set_ylabel('|Far field|')
    ax.set_xlim(0, 360)
    ax.grid(True, alpha=0.3)
    ax.set_title(title if title is not None else f"Far field of {type(field).__name__}")
    return fig


def plot_tmatrix(
    tmat: TMatrix,
    log_scale: bool = True,
    ax: Optional[plt.Axes] = None,
    fig_size: Tuple[float, float] = (6, 5),
    title: Optional[str] = None
) -> plt.Figure:
    """
    Plot the magnitude of the T-matrix entries.

    Args:
        tmat: TMatrix to plot
        log_scale: If True, show log10 of the magnitude
        ax: Optional matplotlib axes to plot on
        fig_size: Figure size as (width, height) in inches
        title: Optional title for the plot

    Returns:
        matplotlib.Figure: The created figure object
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=fig_size)
    else:
        fig = ax.figure

    values = np.abs(tmat.matrix)
    if log_scale:
        with np.errstate(divide='ignore'):
            values = np.log10(values)

    N = tmat.order
    image = ax.imshow(values, extent=(-N - 0.5, N + 0.5, N + 0.5, -N - 0.5), cmap='viridis')
    fig.colorbar(image, ax=ax, label='log10 |T|' if log_scale else '|T|')
    ax.set_xlabel('Incident order')
    ax.set_ylabel('Scattered order')
    ax.set_title(title if title is not None else f"T-matrix, order {N}, k = {tmat.kwave:g}")
    return fig
