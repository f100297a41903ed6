"""Reshaping, pooling and channel downmix for per-frame feature matrices."""

from decimal import ROUND_CEILING, Decimal
from typing import Optional, Sequence

import numpy as np

from spectral_features.errors import InvalidInputError

_QUANTUM = Decimal("0.00001")


def flatten(mfcc: np.ndarray) -> np.ndarray:
    """Flatten ``(n_mfcc, n_frames)`` frame-major: all coefficients of frame 0 first."""
    mfcc = np.asarray(mfcc)
    if mfcc.ndim != 2:
        raise InvalidInputError(f"expected a 2-D matrix, got shape {mfcc.shape}")
    return mfcc.T.astype(np.float32).ravel()


def unflatten(flat: np.ndarray, n_mfcc: int) -> np.ndarray:
    """Inverse of :func:`flatten`: back to ``(n_mfcc, n_frames)`` float64."""
    flat = np.asarray(flat)
    if flat.ndim != 1:
        raise InvalidInputError(f"expected a 1-D vector, got shape {flat.shape}")
    if n_mfcc <= 0 or len(flat) % n_mfcc:
        raise InvalidInputError(
            f"vector of length {len(flat)} is not a whole number of {n_mfcc}-coefficient frames"
        )
    return flat.astype(np.float64).reshape(-1, n_mfcc).T.copy()


def mean_mfcc(
    mfcc: np.ndarray,
    n_mfcc: Optional[int] = None,
    n_frames: Optional[int] = None,
) -> np.ndarray:
    """Mean of each coefficient row across frames, as float32.

    Args:
        mfcc: MFCC matrix, shape (n_mfcc, n_frames).
        n_mfcc: Rows to average (default: all).
        n_frames: Leading frames to average over (default: all).

    Returns:
        Vector of length ``n_mfcc``, independent of input duration.
    """
    mfcc = np.asarray(mfcc, dtype=np.float64)
    if mfcc.ndim != 2:
        raise InvalidInputError(f"expected a 2-D matrix, got shape {mfcc.shape}")
    rows, cols = mfcc.shape
    n_mfcc = rows if n_mfcc is None else n_mfcc
    n_frames = cols if n_frames is None else n_frames
    if not 0 < n_mfcc <= rows or not 0 < n_frames <= cols:
        raise InvalidInputError(
            f"cannot average {n_mfcc} x {n_frames} from a matrix of shape {mfcc.shape}"
        )
    totals = mfcc[:n_mfcc, :n_frames].sum(axis=1)
    return (totals / n_frames).astype(np.float32)


def _ceil5(value: float) -> float:
    # repr gives the shortest decimal string that round-trips the double
    return float(Decimal(repr(float(value))).quantize(_QUANTUM, rounding=ROUND_CEILING))


def pool_to_mono(channels: Sequence[Sequence[float]]) -> np.ndarray:
    """Average channels sample-wise, rounding each mean up at the 5th decimal.

    Args:
        channels: Shape (n_channels, n_samples); all channels equally long.

    Returns:
        Mono waveform, shape (n_samples,), float64.
    """
    try:
        samples = np.asarray(channels, dtype=np.float64)
    except ValueError as e:
        raise InvalidInputError(f"channels must be equally long: {e}") from e
    if samples.ndim == 1:
        samples = samples[np.newaxis, :]
    if samples.ndim != 2 or samples.shape[0] == 0:
        raise InvalidInputError(f"expected (n_channels, n_samples), got shape {samples.shape}")
    if not np.all(np.isfinite(samples)):
        raise InvalidInputError("waveform contains non-finite samples")

    mean = samples.sum(axis=0) / samples.shape[0]
    return np.fromiter((_ceil5(v) for v in mean), dtype=np.float64, count=len(mean))
