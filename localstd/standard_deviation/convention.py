"""
Code to convert standard deviations between the 'sample' (divide by N) and 'population'
(divide by N - 1) conventions.
"""
from __future__ import annotations

# IMPORTs alias
import numpy as np

# IMPORTs local
from localstd.errors import ConfigurationError

# TYPE ANNOTATIONs
from typing import Literal
type ConventionType = Literal['sample', 'population']

# API public
__all__ = ['ConventionType', 'ConventionScale']



class ConventionScale:
    """
    To rescale standard deviations computed with one divisor convention to another.
    'sample' divides the sum of squared deviations by the window area N, 'population' by N - 1.
    """

    def __init__(
            self,
            data: np.ndarray,
            window_area: int,
            source: ConventionType = 'sample',
            target: ConventionType = 'population',
        ) -> None:
        """
        Rescales the given standard deviations. The factor is sqrt(N / (N - 1)) from 'sample' to
        'population' and its reciprocal the other way around. Nothing changes when both
        conventions are the same.
        To get the rescaled values, use the 'result' property.

        Args:
            data (np.ndarray): the standard deviations to rescale.
            window_area (int): the number of values in each window (N).
            source (ConventionType, optional): the convention 'data' was computed with.
                Defaults to 'sample'.
            target (ConventionType, optional): the wanted convention. Defaults to 'population'.

        Raises:
            ConfigurationError: if a convention is unknown or if the 'population' convention is
                used with a window area smaller than 2.
        """

        self.check(window_area, source)
        self.check(window_area, target)

        self._data = data
        self._window_area = window_area
        self._source = source
        self._target = target

        # RUN
        self._factor = self._get_factor()
        self._result = data * self._factor

    @property
    def result(self) -> np.ndarray:
        """
        The rescaled standard deviations (a new array).

        Returns:
            np.ndarray: the standard deviations in the target convention.
        """
        return self._result

    @property
    def factor(self) -> float:
        """
        The factor used for the rescaling.

        Returns:
            float: the scale factor.
        """
        return self._factor

    @staticmethod
    def check(window_area: int, convention: ConventionType) -> None:
        """
        To check that a convention can be used for a given window area.

        Args:
            window_area (int): the number of values in each window.
            convention (ConventionType): the convention to check.

        Raises:
            ConfigurationError: if the convention is unknown or if 'population' is used with a
                window area smaller than 2.
        """

        if convention not in ('sample', 'population'):
            raise ConfigurationError(
                f"Unknown convention: {convention!r}. Choose 'sample' or 'population'."
            )
        if convention == 'population' and window_area <= 1:
            raise ConfigurationError(
                "The 'population' convention needs a window area of at least 2 (division by "
                f"N - 1), got N = {window_area}."
            )

    def _get_factor(self) -> float:
        """
        Gives the factor between the source and target conventions.

        Returns:
            float: the scale factor.
        """

        if self._source == self._target: return 1.

        n = self._window_area
        factor = float(np.sqrt(n / (n - 1)))
        return factor if self._target == 'population' else 1. / factor
