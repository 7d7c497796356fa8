"""
Tests for T-matrix file input and output.
"""
import os
import sys

# Add the src directory to the path if not already installed
src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if src_path not in sys.path:
    sys.path.insert(0, src_path)

import numpy as np
import pytest
from scipy.io import loadmat

from tmatrix2d import TMatrix, FormatError, FORMAT_VERSION, save_tmatrix, load_tmatrix, write_tmatrom, read_tmatrom
from tmatrix2d.tmatrix_io import normalise_format


@pytest.fixture
def tmat():
    """A T-matrix with awkward values."""
    rng = np.random.default_rng(42)
    matrix = rng.standard_normal((5, 5)) + 1j * rng.standard_normal((5, 5))
    matrix[0, 0] = 1e-300 - 3e200j
    return TMatrix(2, 1.2345678901234, matrix, 0.3 - 0.7j, 'Test comment with spaces')


def assert_same(a, b):
    assert a.order == b.order
    assert a.kwave == pytest.approx(b.kwave, rel=1e-14)
    assert a.origin == pytest.approx(b.origin, rel=1e-14)
    np.testing.assert_allclose(a.matrix, b.matrix, rtol=1e-14)
    assert a.get_comments() == b.get_comments()


@pytest.mark.parametrize("fmt", ['mat', 'tmatrom', 'npz'])
def test_round_trip(tmp_path, tmat, fmt):
    """Saving and loading preserves every field."""
    path = tmp_path / f"tmat.{fmt}"
    save_tmatrix(tmat, path, fmt)
    assert_same(load_tmatrix(path, fmt), tmat)


def test_method_round_trip(tmp_path, tmat):
    """TMatrix.save and TMatrix.load use the default format."""
    path = tmp_path / 'tmat.mat'
    tmat.save(path)
    assert_same(TMatrix.load(path), tmat)


def test_mat_order_zero(tmp_path):
    """A 1x1 T-matrix survives MATLAB squeezing."""
    T = TMatrix(0, 2.0, [[0.25 - 0.5j]], 0, '')
    path = tmp_path / 't0.mat'
    save_tmatrix(T, path, 'mat')
    assert_same(load_tmatrix(path, 'mat'), T)


def test_mat_contents(tmp_path, tmat):
    """The MATLAB struct holds the version number."""
    path = tmp_path / 'tmat.mat'
    save_tmatrix(tmat, path, '-matlab')
    data = loadmat(str(path), squeeze_me=True)
    assert float(data['version']) == FORMAT_VERSION
    assert data['matrix'].shape == (5, 5)


def test_tmatrom_layout(tmp_path, tmat):
    """One value per line with the matrix in column-major order."""
    path = tmp_path / 'tmat.txt'
    write_tmatrom(tmat, path)
    lines = path.read_text().split('\n')

    assert lines[0] == '2'
    assert float(lines[1]) == pytest.approx(tmat.kwave, rel=1e-15)
    assert float(lines[2]) == pytest.approx(0.3)
    assert float(lines[3]) == pytest.approx(-0.7)
    assert float(lines[5]) == pytest.approx(tmat.matrix[1, 0].real, rel=1e-14)
    assert float(lines[4 + 25 + 5]) == pytest.approx(tmat.matrix[0, 1].imag, rel=1e-14)
    assert float(lines[4 + 50]) == pytest.approx(FORMAT_VERSION)
    assert lines[55] == 'Test comment with spaces'
    assert len(lines) == 57


def test_tmatrom_multiline_comments(tmp_path, tmat):
    """Comments spanning several lines are read back unchanged."""
    tmat.set_comments('first line\nsecond line')
    path = tmp_path / 'tmat.txt'
    write_tmatrom(tmat, path)
    assert read_tmatrom(path).get_comments() == 'first line\nsecond line'


def test_tmatrom_truncated(tmp_path, tmat):
    """A truncated file is a format error."""
    path = tmp_path / 'tmat.txt'
    write_tmatrom(tmat, path)
    lines = path.read_text().split('\n')
    path.write_text('\n'.join(lines[:20]))
    with pytest.raises(FormatError):
        read_tmatrom(path)


def test_raw(tmp_path, tmat):
    """Raw output is the real block followed by the imaginary block."""
    path = tmp_path / 'tmat.raw'
    save_tmatrix(tmat, path, 'raw')
    data = np.loadtxt(path)
    assert data.shape == (10, 5)
    np.testing.assert_allclose(data[:5], tmat.matrix.real, rtol=1e-15)
    np.testing.assert_allclose(data[5:], tmat.matrix.imag, rtol=1e-15)

    with pytest.raises(FormatError):
        load_tmatrix(path, 'raw')


def test_npz_suffix(tmp_path, tmat):
    """The npz writer adds the suffix if missing."""
    save_tmatrix(tmat, tmp_path / 'tmat', 'npz')
    assert (tmp_path / 'tmat.npz').exists()


def test_unknown_format(tmp_path, tmat):
    """Unknown format tags are rejected."""
    with pytest.raises(FormatError, match='not recognised'):
        save_tmatrix(tmat, tmp_path / 'x', 'foo')
    with pytest.raises(ValueError):
        load_tmatrix(tmp_path / 'x', 'foo')


def test_format_aliases():
    """Tags are case insensitive and may start with a dash."""
    assert normalise_format('-matlab') == 'mat'
    assert normalise_format('TMATROM') == 'tmatrom'
    assert normalise_format('-raw') == 'raw'


@pytest.mark.parametrize("fmt", ['mat', 'tmatrom', 'npz'])
def test_missing_file(tmp_path, fmt):
    """Loading a missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_tmatrix(tmp_path / 'missing.dat', fmt)
