"""
Core class for T-matrix representation and manipulation.
"""
import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
import xarray as xr

from .exceptions import IncidentTypeError, IncompatibleOperandsError
from .expansion import RegularWavefunctionExpansion, RadiatingWavefunctionExpansion
from .series import orders
from .utilities import check_order, check_wavenumber

# Configure logging
logger = logging.getLogger(__name__)


class TMatrix:
    """
    A class to represent the T-matrix of a 2-D scatterer.

    The T-matrix maps the regular wavefunction expansion coefficients of an
    incident field to the radiating wavefunction expansion coefficients of
    the scattered field, for a fixed wavenumber and origin.

    Attributes:
        order: Truncation order N; the matrix has side 2N+1
        kwave: Wavenumber
        origin: Expansion centre. This is a label only: changing it with
            set_origin does not transform the matrix.
        matrix: Read-only complex matrix, rows and columns ordered -N..N
        comments: Free text describing how the T-matrix was computed
    """

    __array_ufunc__ = None

    def __init__(self,
                 order: int,
                 kwave: float,
                 matrix: np.ndarray,
                 origin: complex = 0,
                 comments: str = ''):
        """
        Initialize a TMatrix.

        Args:
            order: Truncation order N
            kwave: Wavenumber, must be positive
            matrix: Square complex array of side 2N+1
            origin: Expansion centre (default 0)
            comments: Optional description

        Raises:
            ValueError: If the order, wavenumber or matrix shape is invalid
        """
        order = check_order(order)
        if order < 0:
            raise ValueError(f"T-matrix order must be non-negative, got {order}")

        matrix = np.array(matrix, dtype=complex)
        expected_shape = (2 * order + 1, 2 * order + 1)
        if matrix.shape != expected_shape:
            raise ValueError(f"matrix shape mismatch: expected {expected_shape}, got {matrix.shape}")
        matrix.setflags(write=False)

        self.order = order
        self.kwave = check_wavenumber(kwave)
        self.matrix = matrix
        self.origin = complex(0 if origin is None else origin)
        self.comments = '' if comments is None else str(comments)

    @property
    def data(self) -> xr.DataArray:
        """The matrix as an xarray DataArray labelled by wavefunction order."""
        n = orders(self.order)
        return xr.DataArray(
            self.matrix,
            dims=('n_scattered', 'n_incident'),
            coords={'n_scattered': n, 'n_incident': n},
            attrs={'kwave': self.kwave, 'origin': self.origin, 'comments': self.comments}
        )

    def copy(self) -> 'TMatrix':
        """Create a copy of this T-matrix."""
        return TMatrix(self.order, self.kwave, self.matrix, self.origin, self.comments)

    def apply(self, expansion: RegularWavefunctionExpansion) -> RadiatingWavefunctionExpansion:
        """
        Apply the T-matrix to a regular wavefunction expansion.

        Args:
            expansion: Regular expansion with the same wavenumber, origin
                and order as the T-matrix

        Returns:
            Radiating expansion of the scattered field

        Raises:
            IncidentTypeError: If expansion is not a RegularWavefunctionExpansion
            IncompatibleOperandsError: If kwave, origin or order differ
        """
        if not isinstance(expansion, RegularWavefunctionExpansion):
            raise IncidentTypeError(
                f"expansion must be a RegularWavefunctionExpansion, got {type(expansion).__name__}"
            )

        if self.kwave != expansion.kwave:
            raise IncompatibleOperandsError(
                f"T-matrix and expansion wavenumbers do not match ({self.kwave} != {expansion.kwave})",
                attribute='kwave'
            )
        if self.origin != expansion.origin:
            raise IncompatibleOperandsError(
                f"T-matrix and expansion centers do not match ({self.origin} != {expansion.origin})",
                attribute='origin'
            )
        if self.order != expansion.order:
            raise IncompatibleOperandsError(
                f"T-matrix and expansion orders do not match ({self.order} != {expansion.order})",
                attribute='order'
            )

        return RadiatingWavefunctionExpansion(
            self.order, self.origin, self.kwave, self.matrix @ expansion.coefficients
        )

    def __matmul__(self, expansion):
        return self.apply(expansion)

    def __mul__(self, expansion):
        return self.apply(expansion)

    def error(self, normalise: bool = False) -> float:
        """
        Measure how far the T-matrix is from satisfying the symmetry relation

            T + T^H + 2 T^H T = 0

        which holds for the exact T-matrix of a lossless scatterer
        (relation (17) in Ganesh and Hawkins, ANZIAM J. 51 (2010) C215-C230).

        Args:
            normalise: If True, divide by the largest entry of T

        Returns:
            Largest absolute entry of the residual. The normalised error of
            the zero matrix is 0.
        """
        T = self.matrix
        TH = T.conj().T
        val = np.max(np.abs(T + TH + 2 * TH @ T))
        if normalise:
            scale = np.max(np.abs(T))
            val = val / scale if scale > 0 else 0.0
        return float(val)

    def set_origin(self, origin: complex) -> None:
        """Set the origin label; the stored matrix is not transformed."""
        self.origin = complex(origin)

    def set_comments(self, comments: str) -> None:
        """Set the description text."""
        self.comments = str(comments)

    def get_comments(self) -> str:
        """Return the description text."""
        return self.comments

    def save(self, file_path: Union[str, Path], fmt: str = 'mat') -> None:
        """
        Save the T-matrix to a file.

        Args:
            file_path: Path to save the file to
            fmt: 'mat', 'tmatrom', 'raw' or 'npz'
        """
        from .tmatrix_io import save_tmatrix
        save_tmatrix(self, file_path, fmt)

    @staticmethod
    def load(file_path: Union[str, Path], fmt: str = 'mat') -> 'TMatrix':
        """
        Load a T-matrix from a file written by save.

        Args:
            file_path: Path to the file
            fmt: 'mat', 'tmatrom' or 'npz'

        Returns:
            TMatrix: The loaded T-matrix
        """
        from .tmatrix_io import load_tmatrix
        return load_tmatrix(file_path, fmt)

    def __repr__(self):
        return f"TMatrix(order={self.order}, kwave={self.kwave}, origin={self.origin})"
