"""
Code to compute the sliding standard deviation of an array with two separable box filters.
"""
from __future__ import annotations

# IMPORTs standard
import logging

# IMPORTs alias
import numpy as np

# IMPORTs local
from localstd.convolution import BorderType, Padding, check_kernel, check_threads
from localstd.standard_deviation.moments import LocalMoments
from localstd.standard_deviation.variance import LocalVariance
from localstd.standard_deviation.convention import ConventionType, ConventionScale

# TYPE ANNOTATIONs
import numpy.typing as npt
from typing import Any, cast

# API public
__all__ = ['SlidingStandardDeviation']

logger = logging.getLogger(__name__)



class SlidingStandardDeviation[Data: npt.NDArray[np.floating[Any]]]:
    """
    To compute the moving standard deviations using two box filters.
    The sliding mean is also computed at the same time as an intermediate step.
    """

    def __init__(
            self,
            data: Data,
            kernel: int | tuple[int, ...],
            borders: BorderType = 'reflect',
            convention: ConventionType = 'sample',
            cval: float = 0.,
            centred: bool = True,
            threads: int | None = 1,
        ) -> None:
        """
        Computes the moving standard deviations as sqrt(mean(X**2) - mean(X)**2), each mean being
        a separable box filter whose cost does not depend on the window size.
        Negative variances coming from floating-point cancellation are set to zero, so the
        result is never NaN for finite data. NaN and inf values only contaminate the windows
        that contain them.
        To retrieve the computed standard deviations, use the 'standard_deviation' property.
        To retrieve the computed sliding mean, use the 'mean' property.
        ! IMPORTANT: the kernel sizes must be odd.

        Args:
            data (Data): the data for which the moving standard deviations are computed.
            kernel (int | tuple[int, ...]): the window information. If an int, you have a
                'square' window. If a tuple, one size per data dimension.
            borders (BorderType, optional): the type of borders to use. 'reflect' mirrors the
                data without repeating the edge value. Defaults to 'reflect'.
            convention (ConventionType, optional): 'sample' divides by the window area N,
                'population' by N - 1. Defaults to 'sample'.
            cval (float, optional): the value outside the data when borders is 'constant'.
                Defaults to 0.
            centred (bool, optional): whether to subtract the median of the finite data values
                before computing the moments. Makes the moments smaller and hence the
                cancellation less severe. Defaults to True.
            threads (int | None, optional): the number of threads to use for the computation.
                If None, doesn't change the default numba behaviour. Defaults to 1.
                ! numba.set_num_threads is process-wide: the setting persists after the call.

        Raises:
            ConfigurationError: if the window, borders, convention or threads are invalid.
                Raised before any computation.
        """

        self._data = np.asarray(data)
        self._borders = borders
        self._convention = convention
        self._cval = cval
        self._centred = centred

        # CHECKs
        self._kernel = check_kernel(kernel, self._data.shape)
        for length, size in zip(self._data.shape, self._kernel):
            Padding.check(length, size, borders)
        self._window_area = int(np.prod(self._kernel))
        ConventionScale.check(self._window_area, convention)
        self._threads = check_threads(threads)

        # RUN
        self._mean, self._variance, self._sdev = self._standard_deviation()

    @property
    def standard_deviation(self) -> Data:
        """
        Returns the moving standard deviations in the chosen convention.

        Returns:
            Data: array of moving standard deviations, same shape as the input.
        """
        return self._sdev

    @property
    def variance(self) -> Data:
        """
        Returns the moving variances in the chosen convention.

        Returns:
            Data: array of moving variances, same shape as the input.
        """
        return self._variance

    @property
    def mean(self) -> Data:
        """
        Returns the moving means.

        Returns:
            Data: array of moving means, same shape as the input.
        """
        return self._mean

    @property
    def window_area(self) -> int:
        """
        The number of values inside each window.

        Returns:
            int: the window area N.
        """
        return self._window_area

    def _offset(self) -> float:
        """
        Gives the value subtracted from the data before computing the moments, i.e. the median
        of the finite values when 'centred' is True.

        Returns:
            float: the offset.
        """

        if not self._centred: return 0.

        finite = self._data[np.isfinite(self._data)]
        if finite.size == 0: return 0.
        return float(np.median(finite))

    def _standard_deviation(self) -> tuple[Data, Data, Data]:
        """
        Computes the sliding mean, variance and standard deviation.

        Returns:
            tuple[Data, Data, Data]: the sliding mean, variance and standard deviation.
        """

        output_dtype = (
            self._data.dtype if np.issubdtype(self._data.dtype, np.floating) else np.float64
        )
        offset = self._offset()
        logger.debug(
            "Sliding standard deviation: shape=%s, kernel=%s, borders=%s, convention=%s, "
            "offset=%s",
            self._data.shape, self._kernel, self._borders, self._convention, offset,
        )

        # MOMENTs
        moments = LocalMoments(
            data=self._data,
            kernel=self._kernel,
            borders=self._borders,
            cval=self._cval,
            offset=offset,
            threads=self._threads,
        )

        # VARIANCE clamped
        local = LocalVariance(moments.first, moments.second)

        # CONVENTION
        sdev = ConventionScale(
            data=local.standard_deviation,
            window_area=self._window_area,
            source='sample',
            target=self._convention,
        ).result
        variance = local.variance
        if self._convention == 'population':
            variance = variance * (self._window_area / (self._window_area - 1))

        mean = moments.first + offset
        return (
            cast(Data, mean.astype(output_dtype, copy=False)),
            cast(Data, variance.astype(output_dtype, copy=False)),
            cast(Data, sdev.astype(output_dtype, copy=False)),
        )
