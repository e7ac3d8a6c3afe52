"""
Code to compute the first and second local moments of an array with two box filters.
"""
from __future__ import annotations

# IMPORTs alias
import numpy as np

# IMPORTs local
from localstd.convolution import BorderType, BoxFilter

# TYPE ANNOTATIONs
import numpy.typing as npt
from typing import Any

# API public
__all__ = ['LocalMoments']



class LocalMoments[Data: npt.NDArray[np.floating[Any]]]:
    """
    To compute the sliding mean of the data and of the squared data.
    The input data is never modified.
    """

    def __init__(
            self,
            data: Data,
            kernel: int | tuple[int, ...],
            borders: BorderType = 'reflect',
            cval: float = 0.,
            offset: float = 0.,
            threads: int | None = 1,
        ) -> None:
        """
        Computes the first (c1 = mean(X)) and second (c2 = mean(X * X)) local moments.
        When an offset is given, the moments are the ones of X - offset and the 'constant'
        border value is shifted accordingly.
        To retrieve the moments, use the 'first' and 'second' properties.

        Args:
            data (Data): the data for which to compute the local moments.
            kernel (int | tuple[int, ...]): the window size.
            borders (BorderType, optional): the border type. Defaults to 'reflect'.
            cval (float, optional): the value outside the data for 'constant' borders.
                Defaults to 0.
            offset (float, optional): the value subtracted from the data before computing the
                moments. Defaults to 0.
            threads (int | None, optional): the number of threads to use for the computation.
                If None, doesn't change the default numba behaviour. Defaults to 1.
                ! numba.set_num_threads is process-wide: the setting persists after the call.
        """

        self._data = np.asarray(data)
        self._kernel = kernel
        self._borders = borders
        self._cval = cval
        self._offset = offset
        self._threads = threads

        # RUN
        self._first, self._second = self._moments()

    @property
    def first(self) -> np.ndarray:
        """
        The sliding mean of the (shifted) data, as float64.

        Returns:
            np.ndarray: the first local moment.
        """
        return self._first

    @property
    def second(self) -> np.ndarray:
        """
        The sliding mean of the squared (shifted) data, as float64.

        Returns:
            np.ndarray: the second local moment.
        """
        return self._second

    @property
    def offset(self) -> float:
        """
        The value subtracted from the data before computing the moments.

        Returns:
            float: the offset.
        """
        return self._offset

    def _moments(self) -> tuple[np.ndarray, np.ndarray]:
        """
        Runs the two box filters.

        Returns:
            tuple[np.ndarray, np.ndarray]: the first and second local moments.
        """

        shifted = self._data.astype(np.float64)
        if self._offset != 0.: shifted -= self._offset
        cval = self._cval - self._offset

        first = BoxFilter(
            data=shifted,
            kernel=self._kernel,
            borders=self._borders,
            cval=cval,
            threads=self._threads,
        ).mean
        second = BoxFilter(
            data=np.multiply(shifted, shifted),
            kernel=self._kernel,
            borders=self._borders,
            cval=cval * cval,
            threads=self._threads,
        ).mean
        return first, second
