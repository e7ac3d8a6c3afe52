"""
Code to add the border values needed by a sliding window along one axis of an array.
"""
from __future__ import annotations

# IMPORTs alias
import numpy as np

# IMPORTs local
from localstd.errors import ConfigurationError

# TYPE ANNOTATIONs
from typing import Literal, Any, cast
import numpy.typing as npt
type BorderType = Literal['reflect', 'nearest', 'replicate', 'constant', 'wrap']

# API public
__all__ = ['BorderType', 'Padding']



class Padding[Data: npt.NDArray[np.floating[Any]]]:
    """
    To add padding to data along one axis according to the border type.
    'reflect' mirrors the data without repeating the edge sample (i.e. index -1 gives index 1),
    'nearest' and 'replicate' repeat the edge sample, 'constant' uses a fixed value and 'wrap'
    is periodic.
    """

    NUMPY_MODES: dict[str, str] = {
        'reflect': 'reflect',
        'nearest': 'edge',
        'replicate': 'edge',
        'constant': 'constant',
        'wrap': 'wrap',
    }

    def __init__(
            self,
            data: Data,
            size: int,
            axis: int,
            borders: BorderType = 'reflect',
            cval: float = 0.,
        ) -> None:
        """
        Adds padding to the given data along 'axis' according to the border type.
        The padding width is size // 2 on each side so that a window of length 'size' can be
        centred on every sample. The padding is added using np.pad.
        To get the padded data, use the 'padded' property.

        Args:
            data (Data): the data to pad.
            size (int): the window length along 'axis'. Must be a positive odd integer.
            axis (int): the axis to pad.
            borders (BorderType, optional): the border type to use for padding.
                Defaults to 'reflect'.
            cval (float, optional): the padding value when borders is 'constant'.
                Defaults to 0.

        Raises:
            ConfigurationError: if the border type is unknown or if the window is too large for
                the border type.
        """

        self._data = data
        self._size = size
        self._axis = axis
        self._borders = borders
        self._cval = cval

        # CHECK
        self.check(data.shape[axis], size, borders)

        # RUN
        self._padded_data = self._add_padding()

    @property
    def padded(self) -> Data:
        """
        The padded data using np.pad and the borders choice.

        Returns:
            Data: the padded data.
        """
        return self._padded_data

    @property
    def width(self) -> int:
        """
        The number of samples added on each side of the padded axis.

        Returns:
            int: the padding width.
        """
        return self._size // 2

    @staticmethod
    def check(length: int, size: int, borders: BorderType) -> None:
        """
        To check that a window of length 'size' can be used on an axis of length 'length' with
        the given border type.
        'reflect' needs size <= 2 * length - 1 (the mirror cannot go past the opposite edge) and
        'wrap' needs size <= 2 * length + 1 (a halo of at most one period).

        Args:
            length (int): the length of the data axis.
            size (int): the window length.
            borders (BorderType): the border type.

        Raises:
            ConfigurationError: if the border type is unknown or if the window is too large.
        """

        if borders not in Padding.NUMPY_MODES:
            raise ConfigurationError(
                f"Unknown border type: {borders!r}. Choose one of "
                f"{', '.join(repr(name) for name in Padding.NUMPY_MODES)}."
            )
        if length < 1:
            raise ConfigurationError("Cannot slide a window over an empty axis.")

        half = size // 2
        if borders == 'reflect' and half > length - 1:
            raise ConfigurationError(
                f"A window of size {size} is too large for 'reflect' borders on an axis of "
                f"length {length} (maximum is {2 * length - 1})."
            )
        elif borders == 'wrap' and half > length:
            raise ConfigurationError(
                f"A window of size {size} is too large for 'wrap' borders on an axis of "
                f"length {length} (maximum is {2 * length + 1})."
            )

    def _add_padding(self) -> Data:
        """
        To add padding to the given data according to the border type.

        Returns:
            Data: the padded data.
        """

        # WIDTH padding
        pad = [(0, 0)] * self._data.ndim
        pad[self._axis] = (self.width, self.width)

        # MODE np.pad
        padding_mode = self.NUMPY_MODES[self._borders]

        if padding_mode == 'constant':
            padded = np.pad(
                array=self._data,
                pad_width=pad,
                mode='constant',
                constant_values=self._cval,
            )
        elif padding_mode == 'reflect':
            padded = np.pad(
                array=self._data,
                pad_width=pad,
                mode='reflect',
                reflect_type='even',
            )
        else:
            padded = np.pad(
                array=self._data,
                pad_width=pad,
                mode=cast(Literal['edge'], padding_mode),
            )
        return cast(Data, padded)
