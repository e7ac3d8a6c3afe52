"""
To test the implementations on data for which the expected results were computed by hand.
"""
from __future__ import annotations

# IMPORTs
import pytest

# IMPORTs alias
import numpy as np

# IMPORTs local
from localstd import BoxFilter, LocalMoments, SlidingStandardDeviation



class TestKnownArrays:
    """
    To test the sliding computations on arrays with known expected results.
    """

    @pytest.fixture(scope='class')
    def ramp(self) -> np.ndarray:
        """
        Provides the 4x4 grid with values 0 to 15 in row-major order.

        Returns:
            np.ndarray: the ramp data.
        """
        return np.arange(16, dtype=np.float64).reshape(4, 4)

    @pytest.fixture(scope='class')
    def flat_block(self) -> np.ndarray:
        """
        Provides a 4x4 grid where a 3x3 block shares the value 3. and the other values differ.

        Returns:
            np.ndarray: the data with a constant block.
        """

        data = np.array([
            [3., 3., 3., 10.],
            [3., 3., 3., 11.],
            [3., 3., 3., 12.],
            [13., 14., 15., 16.],
        ], dtype=np.float64)
        return data

    def _known_std_sample(self) -> np.ndarray:
        """
        Gives the expected sliding standard deviation of the ramp for a 3x3 window, 'reflect'
        borders and the 'sample' convention.

        Returns:
            np.ndarray: the expected standard deviations.
        """

        std = np.array([
            [1.9436, 2.0548, 2.0548, 1.9436],
            [3.2998, 3.3665, 3.3665, 3.2998],
            [3.2998, 3.3665, 3.3665, 3.2998],
            [1.9436, 2.0548, 2.0548, 1.9436],
        ], dtype=np.float64)
        return std

    def _known_std_population(self) -> np.ndarray:
        """
        Gives the expected sliding standard deviation of the ramp for a 3x3 window, 'reflect'
        borders and the 'population' convention.

        Returns:
            np.ndarray: the expected standard deviations.
        """

        std = np.array([
            [2.0616, 2.1794, 2.1794, 2.0616],
            [3.5000, 3.5707, 3.5707, 3.5000],
            [3.5000, 3.5707, 3.5707, 3.5000],
            [2.0616, 2.1794, 2.1794, 2.0616],
        ], dtype=np.float64)
        return std

    def _known_mean_reflect(self) -> np.ndarray:
        """
        Gives the expected sliding mean of the ramp for a 3x3 window and 'reflect' borders.
        Index -1 is mirrored to index 1, so the top left window is rows and columns [1, 0, 1].

        Returns:
            np.ndarray: the expected means.
        """

        mean = np.array([
            [30 / 9, 33 / 9, 42 / 9, 45 / 9],
            [42 / 9, 5., 6., 57 / 9],
            [78 / 9, 9., 10., 93 / 9],
            [90 / 9, 93 / 9, 102 / 9, 105 / 9],
        ], dtype=np.float64)
        return mean

    def test_reflect_mean_box(self, ramp: np.ndarray) -> None:
        """
        Tests the BoxFilter mean with 'reflect' borders.

        Args:
            ramp (np.ndarray): the data to test for.
        """

        result = BoxFilter(data=ramp, kernel=3, borders='reflect').mean
        np.testing.assert_allclose(result, self._known_mean_reflect(), rtol=0, atol=1e-12)

    def test_reflect_mean_std(self, ramp: np.ndarray) -> None:
        """
        Tests the mean of the SlidingStandardDeviation class with 'reflect' borders.

        Args:
            ramp (np.ndarray): the data to test for.
        """

        result = SlidingStandardDeviation(data=ramp, kernel=(3, 3)).mean
        np.testing.assert_allclose(result, self._known_mean_reflect(), rtol=0, atol=1e-12)

    def test_sample_std(self, ramp: np.ndarray) -> None:
        """
        Tests the sliding standard deviation with the 'sample' convention.

        Args:
            ramp (np.ndarray): the data to test for.
        """

        result = SlidingStandardDeviation(
            data=ramp,
            kernel=3,
            borders='reflect',
            convention='sample',
        ).standard_deviation

        np.testing.assert_allclose(result, self._known_std_sample(), rtol=0, atol=1e-4)

    def test_population_std(self, ramp: np.ndarray) -> None:
        """
        Tests the sliding standard deviation with the 'population' convention.

        Args:
            ramp (np.ndarray): the data to test for.
        """

        result = SlidingStandardDeviation(
            data=ramp,
            kernel=3,
            borders='reflect',
            convention='population',
        ).standard_deviation

        np.testing.assert_allclose(result, self._known_std_population(), rtol=0, atol=1e-4)

    def test_first_moments(self, ramp: np.ndarray) -> None:
        """
        Tests that the local moments are the sliding means of the data and squared data.

        Args:
            ramp (np.ndarray): the data to test for.
        """

        moments = LocalMoments(data=ramp, kernel=3)

        # top left window is rows and columns [1, 0, 1]
        window = ramp[np.ix_([1, 0, 1], [1, 0, 1])]
        assert moments.first[0, 0] == pytest.approx(window.mean())
        assert moments.second[0, 0] == pytest.approx((window ** 2).mean())
        np.testing.assert_array_equal(ramp, np.arange(16, dtype=np.float64).reshape(4, 4))

    @pytest.mark.parametrize('centred', [True, False])
    def test_flat_block_exact_zero(self, flat_block: np.ndarray, centred: bool) -> None:
        """
        Tests that the cell whose whole window is inside the constant block gives exactly 0.
        Regression test for the cancellation giving small negative variances (and NaNs).

        Args:
            flat_block (np.ndarray): the data to test for.
            centred (bool): whether to subtract the median before computing the moments.
        """

        result = SlidingStandardDeviation(
            data=flat_block,
            kernel=3,
            centred=centred,
        ).standard_deviation

        assert result[1, 1] == 0.
        assert not np.isnan(result).any()
        assert (result >= 0).all()

    @pytest.mark.parametrize('centred', [True, False])
    @pytest.mark.parametrize('block', [
        (slice(8, 11), slice(8, 11)),
        (slice(4, 9), slice(3, 8)),
        (slice(2, 10), slice(9, 12)),
    ])
    def test_flat_block_after_varying_data(
            self,
            block: tuple[slice, slice],
            centred: bool,
        ) -> None:
        """
        Tests that the cells whose whole window is inside a constant block give exactly 0 when the
        block comes after varying data, i.e. when the running sums reach the block carrying the
        rounding errors of the previous windows.

        Args:
            block (tuple[slice, slice]): the position of the constant block.
            centred (bool): whether to subtract the median before computing the moments.
        """

        rows, cols = block
        inside = (slice(rows.start + 1, rows.stop - 1), slice(cols.start + 1, cols.stop - 1))

        failures = []
        for seed in range(50):
            rng = np.random.default_rng(seed)
            data = rng.uniform(0, 1, size=(12, 12))
            data[block] = 0.7

            result = SlidingStandardDeviation(
                data=data,
                kernel=3,
                centred=centred,
            ).standard_deviation

            if not (result[inside] == 0.).all():
                failures.append(f"seed {seed}: max {result[inside].max()!r}")
        assert failures == []

    def test_flat_block_box_mean(self) -> None:
        """
        Tests that the box filter gives exactly the constant value inside a constant block placed
        after varying data, for the data and the squared data.
        """

        rng = np.random.default_rng(1)
        data = rng.uniform(0, 1, size=(15, 15)) * 1e3
        data[6:13, 7:14] = 0.3

        for values in (data, data * data):
            mean = BoxFilter(data=values, kernel=(5, 3)).mean
            np.testing.assert_array_equal(mean[8:11, 8:13], values[8, 8])
