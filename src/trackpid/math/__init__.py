"""Module with fast, Numba-accelerated, compiled math routines.

This includes:
- `base.py` includes basic statistics functions, as found in numpy
- `linalg.py` includes the angle routines used to measure track deflections
"""

# Expose submodules
from . import linalg

# Expose all base functions directly
from .base import *
