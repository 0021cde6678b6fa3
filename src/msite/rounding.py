"""Numeric policy for methylation levels and read counts."""

from typing import Union

# Third party modules
import numpy as np

# Decimal digits kept when writing a methylation level
METH_DECIMALS = 6
UINT64_MAX = int(np.iinfo(np.uint64).max)


def round_half_away(value: float) -> float:
    """Round to the nearest integer, with ties going away from zero.

    Python's round() and numpy.round() both round ties to even, which does
    not match existing site files (e.g. 2.5 must become 3, not 2).

    Args
    ----------
    value : float
        The value to round.

    Returns
    -------
    float
        The rounded value, still as a float.
    """
    magnitude = float(np.floor(abs(value) + 0.5))
    return magnitude if value >= 0 else -magnitude


def quantize_meth(meth: float, decimals: int = METH_DECIMALS) -> float:
    """Quantize a methylation level to a fixed number of decimal digits.

    Args
    ----------
    meth : float
        The methylation level, e.g. 0.123456789
    decimals : int, optional
        Decimal digits to keep (default = 6).

    Returns
    -------
    float
        The quantized level, e.g. 0.123457
    """
    scale = 10**decimals
    return round_half_away(meth * scale) / scale


def format_meth(meth: Union[float, np.floating]) -> str:
    """Render a methylation level for the text record.

    The level is quantized first, then written in its shortest positional
    form: no exponent, no trailing zeros, no bare decimal point.
    e.g. 0.0 -> "0", 0.5 -> "0.5", 2/3 -> "0.666667"
    """
    return np.format_float_positional(quantize_meth(float(meth)), trim="-")


def scaled_count(n_reads: int, meth: float) -> int:
    """Number of reads implied by a level over n_reads, e.g. (10, 0.25) -> 3."""
    count = int(round_half_away(n_reads * meth))
    # Saturate like an unsigned 64-bit cast; float(2**64 - 1) rounds up to 2**64
    return min(max(count, 0), UINT64_MAX)
