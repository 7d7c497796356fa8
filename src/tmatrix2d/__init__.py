"""
tmatrix2d package - T-matrices for two dimensional wave scattering.

This package provides circular wavefunctions, incident fields and their
algebra, wavefunction expansions, the TMatrix class with file
input/output, and the quadrature method for computing a T-matrix from far
field data produced by a scattering solver.
"""

__version__ = '0.1.0'

# Import key classes and functions to make them available at the package level
from .exceptions import (
    TMatrixError,
    IncidentTypeError,
    InvalidOperandsError,
    TranslationNotSupportedError,
    UnsupportedKindError,
    SingularPointError,
    IncompatibleOperandsError,
    FormatError,
    IncompleteCoefficientsWarning
)
from .special_functions import besselj, besselh, besseljd, besselhd
from .series import BasisKind, sumcof, dsumcof, gradsumcof
from .incident import (
    IncidentField,
    RadiatingIncidentField,
    CoefficientResult,
    add,
    subtract,
    negate,
    scale
)
from .wavefunctions import RegularWavefunction2D, RadiatingWavefunction2D
from .sources import PlaneWave, PointSource
from .expansion import RegularWavefunctionExpansion, RadiatingWavefunctionExpansion
from .tmatrix import TMatrix
from .tmatrix_io import save_tmatrix, load_tmatrix, write_tmatrom, read_tmatrom
from .solver import Solver
from .disc_solver import DiscSolver
from .builder import ghtmatrix
from .utilities import (
    FORMAT_VERSION,
    interlace,
    unit_directions,
    wavelength_to_wavenumber,
    wavenumber_to_wavelength,
    suggested_order
)
from .plotting import plot_field, plot_far_field, plot_tmatrix

# Define what gets imported with "from tmatrix2d import *"
__all__ = [
    'TMatrixError',
    'IncidentTypeError',
    'InvalidOperandsError',
    'TranslationNotSupportedError',
    'UnsupportedKindError',
    'SingularPointError',
    'IncompatibleOperandsError',
    'FormatError',
    'IncompleteCoefficientsWarning',
    'besselj',
    'besselh',
    'besseljd',
    'besselhd',
    'BasisKind',
    'sumcof',
    'dsumcof',
    'gradsumcof',
    'IncidentField',
    'RadiatingIncidentField',
    'CoefficientResult',
    'add',
    'subtract',
    'negate',
    'scale',
    'RegularWavefunction2D',
    'RadiatingWavefunction2D',
    'PlaneWave',
    'PointSource',
    'RegularWavefunctionExpansion',
    'RadiatingWavefunctionExpansion',
    'TMatrix',
    'save_tmatrix',
    'load_tmatrix',
    'write_tmatrom',
    'read_tmatrom',
    'Solver',
    'DiscSolver',
    'ghtmatrix',
    'FORMAT_VERSION',
    'interlace',
    'unit_directions',
    'wavelength_to_wavenumber',
    'wavenumber_to_wavelength',
    'suggested_order',
    'plot_field',
    'plot_far_field',
    'plot_tmatrix'
]
