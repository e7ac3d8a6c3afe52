"""
Contains numba-optimized functions to compute the sliding mean along the last axis of a 2D array
using a running sum, i.e. in a time that does not depend on the window size.
"""
from __future__ import annotations

# IMPORTs alias
import numpy as np

# IMPORTs sub
from numba import njit, prange

# API public
__all__ = ['sliding_mean_last_axis']



def sliding_mean_last_axis(padded: np.ndarray, size: int) -> np.ndarray:
    """
    To compute the sliding mean along the last axis of an already padded 2D array.
    Each row is independent: the first window is summed once, then each following window is
    obtained by adding the entering sample and removing the leaving one.
    A window made of identical samples gives exactly that sample, whatever the rounding errors
    accumulated by the running sum before reaching it.
    NaN and infinite values only contaminate the windows that contain them.

    Args:
        padded (np.ndarray): the 2D float64 array, padded by size // 2 on both sides of the last
            axis.
        size (int): the window length. Must be a positive odd integer.

    Returns:
        np.ndarray: the sliding means, with shape (rows, padded.shape[1] - size + 1).
    """

    return _running_mean_rows(np.ascontiguousarray(padded, dtype=np.float64), size)

@njit
def _direct_sum(line: np.ndarray, start: int, size: int) -> float:
    """
    To sum a window from scratch. Used for windows containing non-finite values, so that NaN and
    inf propagate following the usual floating-point rules, and to re-seed the running total.

    Args:
        line (np.ndarray): the padded row.
        start (int): the index of the first sample of the window.
        size (int): the window length.

    Returns:
        float: the sum of the window.
    """

    total = 0.
    for k in range(start, start + size): total += line[k]
    return total

@njit
def _next_run(line: np.ndarray, index: int, run: int) -> int:
    """
    To update the number of identical finite samples ending at 'index'.

    Args:
        line (np.ndarray): the padded row.
        index (int): the index of the new sample.
        run (int): the number of identical finite samples ending at index - 1.

    Returns:
        int: the number of identical finite samples ending at 'index'.
    """

    value = line[index]
    if not np.isfinite(value): return 0
    if index > 0 and run > 0 and value == line[index - 1]: return run + 1
    return 1

@njit(parallel=True)
def _running_mean_rows(padded: np.ndarray, size: int) -> np.ndarray:
    """
    To get the running mean of each row of a padded 2D array.
    Only finite samples enter the running total. A count of the non-finite samples inside the
    window is kept and, when not zero, the window is summed directly instead.
    The length of the run of identical samples is also kept: once it covers the window, the
    output is the sample itself and the total is summed again from scratch.

    Args:
        padded (np.ndarray): the padded float64 2D array.
        size (int): the window length.

    Returns:
        np.ndarray: the sliding means.
    """

    rows, padded_length = padded.shape
    length = padded_length - size + 1
    result = np.empty((rows, length), dtype=np.float64)

    for r in prange(rows):
        line = padded[r]

        # FIRST window
        total = 0.
        not_finite = 0
        run = 0
        for k in range(size):
            value = line[k]
            if np.isfinite(value):
                total += value
            else:
                not_finite += 1
            run = _next_run(line, k, run)

        if not_finite > 0:
            result[r, 0] = _direct_sum(line, 0, size) / size
        elif run >= size:
            result[r, 0] = line[size - 1]
        else:
            result[r, 0] = total / size

        # SLIDING
        for i in range(1, length):
            entering = line[i + size - 1]
            leaving = line[i - 1]

            # delta kept separate so that equal samples leave the total untouched
            delta = 0.
            if np.isfinite(entering):
                delta += entering
            else:
                not_finite += 1
            if np.isfinite(leaving):
                delta -= leaving
            else:
                not_finite -= 1
            total += delta
            run = _next_run(line, i + size - 1, run)

            if not_finite > 0:
                result[r, i] = _direct_sum(line, i, size) / size
            elif run >= size:
                # once per constant stretch, drops the error carried in from earlier windows
                if run == size: total = _direct_sum(line, i, size)
                result[r, i] = entering
            else:
                result[r, i] = total / size
    return result
