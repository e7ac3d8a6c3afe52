"""
Directory contains code to do a separable sliding mean (box filter). Also contains the class
adding the border values needed by the sliding windows.
"""

from localstd.convolution.padding import Padding, BorderType
from localstd.convolution.box_filter import BoxFilter, check_kernel, check_threads
