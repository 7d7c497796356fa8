"""
File input/output functions for T-matrices.

Supported formats:
    'mat'      MATLAB struct file with fields order, kwave, origin, matrix,
               version and comments (scipy.io)
    'tmatrom'  portable ASCII layout, one value per line
    'raw'      the real and imaginary parts of the matrix only, as plain
               whitespace delimited text (write only)
    'npz'      compressed numpy archive with JSON metadata
"""

import json
import logging
from pathlib import Path
from typing import Union

import numpy as np
from scipy.io import savemat, loadmat

from .exceptions import FormatError
from .tmatrix import TMatrix
from .utilities import FORMAT_VERSION

# Configure logging
logger = logging.getLogger(__name__)

DEFAULT_FORMAT = 'mat'

_FORMAT_ALIASES = {
    'mat': 'mat',
    'matlab': 'mat',
    'tmatrom': 'tmatrom',
    'raw': 'raw',
    'npz': 'npz',
}


def normalise_format(fmt: str) -> str:
    """
    Convert a format tag such as '-matlab' or 'TMATROM' to its canonical name.

    Raises:
        FormatError: If the tag is not recognised
    """
    key = str(fmt).strip().lstrip('-').lower()
    if key not in _FORMAT_ALIASES:
        raise FormatError(f"Filetype {fmt} not recognised")
    return _FORMAT_ALIASES[key]


def save_tmatrix(tmat: TMatrix, file_path: Union[str, Path], fmt: str = DEFAULT_FORMAT) -> None:
    """
    Save a T-matrix in the given format.

    Args:
        tmat: TMatrix object to save
        file_path: Path to save the file to
        fmt: 'mat', 'tmatrom', 'raw' or 'npz' (a leading '-' is allowed)

    Raises:
        FormatError: If fmt is not recognised
        OSError: If file cannot be written
    """
    fmt = normalise_format(fmt)
    if fmt == 'mat':
        save_tmatrix_mat(tmat, file_path)
    elif fmt == 'tmatrom':
        write_tmatrom(tmat, file_path)
    elif fmt == 'raw':
        write_raw(tmat, file_path)
    else:
        save_tmatrix_npz(tmat, file_path)


def load_tmatrix(file_path: Union[str, Path], fmt: str = DEFAULT_FORMAT) -> TMatrix:
    """
    Load a T-matrix saved in the given format.

    Args:
        file_path: Path to the file
        fmt: 'mat', 'tmatrom' or 'npz'

    Returns:
        TMatrix: The loaded T-matrix

    Raises:
        FormatError: If fmt is not recognised or cannot be read back
        FileNotFoundError: If file does not exist
    """
    fmt = normalise_format(fmt)
    if fmt == 'raw':
        raise FormatError("The raw format holds no metadata and cannot be loaded as a T-matrix")
    if fmt == 'mat':
        return load_tmatrix_mat(file_path)
    if fmt == 'tmatrom':
        return read_tmatrom(file_path)
    return load_tmatrix_npz(file_path)


def _check_exists(file_path: Path) -> None:
    if not file_path.exists():
        raise FileNotFoundError(f"T-matrix file not found: {file_path}")


# ============================================================================
# MATLAB STRUCT FORMAT
# ============================================================================

def save_tmatrix_mat(tmat: TMatrix, file_path: Union[str, Path]) -> None:
    """Save a T-matrix as a MATLAB struct file."""
    file_path = Path(file_path)
    data = {
        'order': float(tmat.order),
        'kwave': float(tmat.kwave),
        'origin': tmat.origin,
        'matrix': np.asarray(tmat.matrix),
        'version': float(FORMAT_VERSION),
        'comments': tmat.comments,
    }
    savemat(str(file_path), data, appendmat=False)
    logger.info(f"T-matrix saved to {file_path}")


def _mat_string(value) -> str:
    if isinstance(value, np.ndarray):
        return ''.join(str(v) for v in value.ravel()) if value.size else ''
    return str(value)


def load_tmatrix_mat(file_path: Union[str, Path]) -> TMatrix:
    """Load a T-matrix from a MATLAB struct file."""
    file_path = Path(file_path)
    _check_exists(file_path)

    data = loadmat(str(file_path), squeeze_me=True, appendmat=False)
    try:
        order = int(np.real(data['order']))
        kwave = float(np.real(data['kwave']))
        origin = complex(data['origin'])
        matrix = np.asarray(data['matrix'], dtype=complex).reshape(2 * order + 1, 2 * order + 1)
    except (KeyError, ValueError, TypeError) as e:
        raise FormatError(f"Invalid T-matrix file {file_path}: {e}") from e
    comments = _mat_string(data.get('comments', ''))

    logger.info(f"T-matrix loaded from {file_path}")
    return TMatrix(order, kwave, matrix, origin, comments)


# ============================================================================
# PORTABLE TEXT FORMAT
# ============================================================================

def write_tmatrom(tmat: TMatrix, file_path: Union[str, Path]) -> None:
    """
    Write a T-matrix in the portable ASCII layout.

    One value per line: order, kwave, real(origin), imag(origin), the real
    parts of the matrix in column-major order, the imaginary parts in the
    same order, the format version and finally the comments.
    """
    file_path = Path(file_path)
    flat = np.asarray(tmat.matrix).ravel(order='F')

    with open(file_path, 'w') as f:
        f.write(f"{tmat.order:d}\n")
        f.write(f"{tmat.kwave:.15e}\n")
        f.write(f"{tmat.origin.real:.15e}\n")
        f.write(f"{tmat.origin.imag:.15e}\n")
        for value in flat.real:
            f.write(f"{value:.15e}\n")
        for value in flat.imag:
            f.write(f"{value:.15e}\n")
        f.write(f"{FORMAT_VERSION:.15f}\n")
        f.write(f"{tmat.comments}\n")

    logger.info(f"T-matrix saved to {file_path}")


def read_tmatrom(file_path: Union[str, Path]) -> TMatrix:
    """
    Read a T-matrix written by write_tmatrom.

    Raises:
        FileNotFoundError: If the file does not exist
        FormatError: If the file is truncated or malformed
    """
    file_path = Path(file_path)
    _check_exists(file_path)

    with open(file_path, 'r') as reader:
        lines = reader.readlines()

    try:
        order = int(lines[0])
        size = (2 * order + 1) ** 2
        kwave = float(lines[1])
        origin = complex(float(lines[2]), float(lines[3]))

        start = 4
        real_part = np.array([float(v) for v in lines[start:start + size]])
        imag_part = np.array([float(v) for v in lines[start + size:start + 2 * size]])
        if real_part.size != size or imag_part.size != size:
            raise ValueError(f"expected {size} real and imaginary matrix entries")

        version = float(lines[start + 2 * size])
    except (IndexError, ValueError) as e:
        raise FormatError(f"Invalid tmatrom file {file_path}: {e}") from e

    matrix = (real_part + 1j * imag_part).reshape((2 * order + 1, 2 * order + 1), order='F')

    # the newline after the version line is already consumed; drop the
    # final newline written after the comments
    comments = ''.join(lines[start + 2 * size + 1:])
    if comments.endswith('\r\n'):
        comments = comments[:-2]
    elif comments.endswith('\n'):
        comments = comments[:-1]

    if version != FORMAT_VERSION:
        logger.info(f"Reading tmatrom file version {version} (current version {FORMAT_VERSION})")
    logger.info(f"T-matrix loaded from {file_path}")
    return TMatrix(order, kwave, matrix, origin, comments)


# ============================================================================
# RAW AND NPZ FORMATS
# ============================================================================

def write_raw(tmat: TMatrix, file_path: Union[str, Path]) -> None:
    """
    Write the real parts of the matrix followed by the imaginary parts as
    two blocks of 2N+1 whitespace delimited rows, for use by external tools.
    """
    file_path = Path(file_path)
    matrix = np.asarray(tmat.matrix)
    with open(file_path, 'w') as f:
        np.savetxt(f, matrix.real, fmt='%.16e')
        np.savetxt(f, matrix.imag, fmt='%.16e')
    logger.info(f"Raw T-matrix data saved to {file_path}")


def save_tmatrix_npz(tmat: TMatrix, file_path: Union[str, Path]) -> None:
    """Save a T-matrix to a compressed NPZ archive."""
    file_path = Path(file_path)

    # Ensure .npz extension
    if file_path.suffix.lower() != '.npz':
        file_path = file_path.with_suffix('.npz')

    meta_json = json.dumps({
        'version': FORMAT_VERSION,
        'format': 'tmatrix2d NPZ',
        'comments': tmat.comments,
    })
    np.savez_compressed(
        file_path,
        order=np.array(tmat.order),
        kwave=np.array(tmat.kwave),
        origin=np.array(tmat.origin),
        matrix=np.asarray(tmat.matrix),
        metadata=meta_json
    )
    logger.info(f"T-matrix saved to {file_path}")


def load_tmatrix_npz(file_path: Union[str, Path]) -> TMatrix:
    """Load a T-matrix from a compressed NPZ archive."""
    file_path = Path(file_path)
    _check_exists(file_path)

    with np.load(file_path, allow_pickle=False) as data:
        try:
            order = int(data['order'])
            kwave = float(data['kwave'])
            origin = complex(data['origin'])
            matrix = data['matrix']
            metadata = json.loads(str(data['metadata']))
        except KeyError as e:
            raise FormatError(f"Invalid T-matrix file {file_path}: missing {e}") from e

    logger.info(f"T-matrix loaded from {file_path}")
    return TMatrix(order, kwave, matrix, origin, metadata.get('comments', ''))
