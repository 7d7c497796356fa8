"""
Test configuration file for pytest.
This file lets pytest find the package under src/ without installing it
and keeps matplotlib off any display.
"""
import os
import sys

import matplotlib

matplotlib.use('Agg')

src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), 'src'))
if src_path not in sys.path:
    sys.path.insert(0, src_path)
