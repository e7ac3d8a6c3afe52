"""
Directory contains code to perform a sliding (local) standard deviation on numpy arrays using
separable box filters, whose cost does not depend on the window size.
"""

from localstd.errors import ConfigurationError
from localstd.convolution import BorderType, BoxFilter, Padding
from localstd.standard_deviation import (
    ConventionScale, ConventionType, LocalMoments, LocalVariance, SlidingStandardDeviation,
)
