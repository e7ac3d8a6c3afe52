"""
Code to combine the local moments into a local variance and standard deviation.
"""
from __future__ import annotations

# IMPORTs standard
import logging

# IMPORTs alias
import numpy as np

# IMPORTs local
from localstd.errors import ConfigurationError

# API public
__all__ = ['LocalVariance']

logger = logging.getLogger(__name__)



class LocalVariance:
    """
    To compute the local variance as c2 - c1**2 and the corresponding standard deviation.
    """

    def __init__(self, first: np.ndarray, second: np.ndarray) -> None:
        """
        Computes the local variance from the first and second local moments.
        As both moments are means of many values, c2 - c1**2 is a difference of two close
        numbers and can be a tiny negative value where the true variance is zero. These values
        are clamped to zero before the square root, hence the standard deviation is never NaN
        for finite moments.

        Args:
            first (np.ndarray): the first local moment (sliding mean of the data).
            second (np.ndarray): the second local moment (sliding mean of the squared data).

        Raises:
            ConfigurationError: if the two moments do not have the same shape.
        """

        if first.shape != second.shape:
            raise ConfigurationError(
                f"The local moments must have the same shape, got {first.shape} and "
                f"{second.shape}."
            )

        self._first = first
        self._second = second

        # RUN
        self._variance, self._clamped = self._clamped_variance()

    @property
    def variance(self) -> np.ndarray:
        """
        The local variance, never negative.

        Returns:
            np.ndarray: the local variance.
        """
        return self._variance

    @property
    def standard_deviation(self) -> np.ndarray:
        """
        The local standard deviation.

        Returns:
            np.ndarray: the square root of the local variance.
        """
        return np.sqrt(self._variance)

    @property
    def clamped(self) -> int:
        """
        The number of cells for which a negative variance was set to zero.

        Returns:
            int: the number of clamped cells.
        """
        return self._clamped

    def _clamped_variance(self) -> tuple[np.ndarray, int]:
        """
        Computes c2 - c1**2 and sets the negative values to zero.
        NaN values (from non-finite data) are left untouched.

        Returns:
            tuple[np.ndarray, int]: the variance and the number of clamped cells.
        """

        # inf - inf gives NaN for windows containing inf
        with np.errstate(invalid='ignore'):
            variance = self._second - np.square(self._first)

        negative = variance < 0
        clamped = int(np.count_nonzero(negative))
        if clamped:
            variance[negative] = 0.
            logger.debug("Clamped %d negative local variance value(s) to zero.", clamped)
        return variance, clamped
