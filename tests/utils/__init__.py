"""
Contains utilities to compare the box filter implementations with direct computations.
"""

from tests.utils.utils_tests import TestUtils
