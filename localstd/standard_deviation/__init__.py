"""
Directory contains code to compute the sliding standard deviation of an array given a window
size, from two local moments combined into a clamped local variance.
"""

from localstd.standard_deviation.moments import LocalMoments
from localstd.standard_deviation.variance import LocalVariance
from localstd.standard_deviation.convention import ConventionType, ConventionScale
from localstd.standard_deviation.standard_deviation import SlidingStandardDeviation
