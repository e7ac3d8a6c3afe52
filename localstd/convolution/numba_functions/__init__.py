"""
Directory contains numba optimized functions to compute sliding means in a time independent of the
window size.
"""

from localstd.convolution.numba_functions.sliding_sum import sliding_mean_last_axis
