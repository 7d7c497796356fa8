#!/usr/bin/env python3
"""
Saving and Loading T-matrices

Shows the supported file formats:
- 'mat'     MATLAB struct file (default)
- 'tmatrom' portable text file, one value per line
- 'npz'     compressed numpy archive
- 'raw'     real and imaginary parts only, for external tools (write only)
"""

from tmatrix2d import DiscSolver, TMatrix, ghtmatrix, FormatError
import numpy as np
from pathlib import Path
import tempfile

kwave = 1.5
centre = 0.5 + 0.25j

# T-matrix of a sound-hard disc about its own centre
solver = DiscSolver(0.8, kwave, centre=centre, boundary='sound-hard')
tmat = ghtmatrix(8, kwave, solver, origin=centre)
tmat.set_comments(f"Sound-hard disc, radius 0.8, centre {centre}\n{tmat.get_comments()}")

with tempfile.TemporaryDirectory() as tmp:
    tmp = Path(tmp)

    for fmt in ['mat', 'tmatrom', 'npz']:
        path = tmp / f"disc.{fmt}"
        tmat.save(path, fmt)
        loaded = TMatrix.load(path, fmt)
        diff = np.max(np.abs(loaded.matrix - tmat.matrix))
        print(f"{fmt:8s} {path.stat().st_size:8d} bytes, max difference {diff:.1e}, origin {loaded.origin}")

    tmat.save(tmp / 'disc.raw', 'raw')
    print(f"raw block shape: {np.loadtxt(tmp / 'disc.raw').shape}")

    try:
        TMatrix.load(tmp / 'disc.raw', 'raw')
    except FormatError as e:
        print(f"Expected error: {e}")

    print("Comments read back from the tmatrom file:")
    print(TMatrix.load(tmp / 'disc.tmatrom', 'tmatrom').get_comments())
