"""
Code to compute the sliding (box) mean using separable running sums.
"""
from __future__ import annotations

# IMPORTs alias
import numpy as np

# IMPORTs sub
from numba import config, set_num_threads

# IMPORTs local
from localstd.errors import ConfigurationError
from localstd.convolution.padding import BorderType, Padding
from localstd.convolution.numba_functions import sliding_mean_last_axis

# TYPE ANNOTATIONs
import numpy.typing as npt
from typing import Any, cast

# API public
__all__ = ['BoxFilter', 'check_kernel', 'check_threads']



def check_kernel(kernel: int | tuple[int, ...], shape: tuple[int, ...]) -> tuple[int, ...]:
    """
    To check the window information and convert it to one size per data axis.

    Args:
        kernel (int | tuple[int, ...]): the window size. If an int, the same size is used for
            every axis.
        shape (tuple[int, ...]): the shape of the data the window slides over.

    Raises:
        TypeError: if the kernel is not an int or a tuple of ints.
        ConfigurationError: if a size is not a positive odd integer or if the tuple length does
            not match the data dimensions.

    Returns:
        tuple[int, ...]: the window size for each axis.
    """

    # bool is an int subclass
    if isinstance(kernel, bool):
        raise TypeError("The kernel must be an integer or a tuple of integers.")
    elif isinstance(kernel, (int, np.integer)):
        sizes = (int(kernel),) * len(shape)
    elif isinstance(kernel, tuple):
        if not all(
            isinstance(k, (int, np.integer)) and not isinstance(k, bool) for k in kernel
        ):
            raise TypeError("All elements of 'kernel' tuple must be of type int.")
        if len(kernel) != len(shape):
            raise ConfigurationError(
                "If 'kernel' is given as a tuple, it must have the same number of elements "
                "as 'data' has dimensions."
            )
        sizes = tuple(int(k) for k in kernel)
    else:
        raise TypeError("The kernel must be an integer or a tuple of integers.")

    if any(k <= 0 or k % 2 == 0 for k in sizes):
        raise ConfigurationError("All kernel dimensions must be positive odd integers.")
    return sizes

def check_threads(threads: int | None) -> int | None:
    """
    To check the number of threads and cap it to the number of threads numba was started with.

    Args:
        threads (int | None): the wanted number of threads. None keeps numba's setting.

    Raises:
        ConfigurationError: if threads is not a positive integer.

    Returns:
        int | None: the number of threads to give to numba.
    """

    if threads is None: return None
    if isinstance(threads, bool) or not isinstance(threads, (int, np.integer)) or threads < 1:
        raise ConfigurationError("'threads' must be a positive integer or None.")
    return min(int(threads), config.NUMBA_NUM_THREADS)


class BoxFilter[Data: npt.NDArray[np.floating[Any]]]:
    """
    To compute the sliding mean of a given ndarray and window size.
    The filter is separable: a 1D running sum is done along each axis in turn, so that the
    computation time does not depend on the window size.
    No NaN handling is done, NaN and inf values contaminate the windows that contain them.
    To access the result, use the `mean` property.
    """

    def __init__(
            self,
            data: Data,
            kernel: int | tuple[int, ...],
            borders: BorderType = 'reflect',
            cval: float = 0.,
            threads: int | None = 1,
        ) -> None:
        """
        Computes the sliding mean of the given data. Each output value is the arithmetic mean of
        the window centred on the corresponding input value, the values outside the data being
        given by the border type.
        All the checks are done before any computation.

        Args:
            data (Data): the input data. Integer data is converted to float64.
            kernel (int | tuple[int, ...]): the window size. If an int, the window has the same
                size along every axis. If a tuple, one positive odd size per axis.
            borders (BorderType, optional): the border type. Defaults to 'reflect'.
            cval (float, optional): the value used outside the data when borders is 'constant'.
                Defaults to 0.
            threads (int | None, optional): the number of threads to use for the computation.
                If None, doesn't change the default numba behaviour. Defaults to 1.
                ! numba.set_num_threads is process-wide: the setting persists after the call.
        """

        self._data = np.asarray(data)
        self._borders = borders
        self._cval = cval

        # CHECKs
        self._kernel = check_kernel(kernel, self._data.shape)
        for length, size in zip(self._data.shape, self._kernel):
            Padding.check(length, size, borders)
        self._threads = check_threads(threads)

        # COMPUTE
        if self._threads is not None: set_num_threads(self._threads)
        self._mean = self._box_mean()

    @property
    def mean(self) -> Data:
        """
        The sliding mean, with the same shape as the input data.

        Returns:
            Data: the sliding mean result.
        """
        return self._mean

    @property
    def kernel(self) -> tuple[int, ...]:
        """
        The window size along each axis.

        Returns:
            tuple[int, ...]: the window size.
        """
        return self._kernel

    def _box_mean(self) -> Data:
        """
        Does the 1D sliding mean along every axis, one after the other.

        Returns:
            Data: the sliding mean with the input dtype if floating, else float64.
        """

        output_dtype = (
            self._data.dtype if np.issubdtype(self._data.dtype, np.floating) else np.float64
        )
        result = self._data.astype(np.float64, copy=True)
        for axis, size in enumerate(self._kernel):
            if size == 1: continue
            result = self._axis_mean(result, axis, size)
        return cast(Data, result.astype(output_dtype, copy=False))

    def _axis_mean(self, data: np.ndarray, axis: int, size: int) -> np.ndarray:
        """
        To compute the 1D sliding mean along one axis.

        Args:
            data (np.ndarray): the float64 data.
            axis (int): the axis along which the window slides.
            size (int): the window length.

        Returns:
            np.ndarray: the 1D sliding mean, same shape as 'data'.
        """

        padded = Padding(
            data=data,
            size=size,
            axis=axis,
            borders=self._borders,
            cval=self._cval,
        ).padded

        # ROWS along the last axis
        moved = np.moveaxis(padded, axis, -1)
        rows = moved.reshape(-1, moved.shape[-1])

        # MEAN sliding
        means = sliding_mean_last_axis(rows, size)

        # SHAPE back
        means = means.reshape(moved.shape[:-1] + (data.shape[axis],))
        return np.moveaxis(means, -1, axis)
