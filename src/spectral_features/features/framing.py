"""Centering (reflect padding) and frame slicing."""

import numpy as np

from spectral_features.errors import InvalidInputError


def as_mono(y) -> np.ndarray:
    """Validate a mono waveform and return it as a float64 array."""
    y = np.asarray(y, dtype=np.float64)
    if y.ndim != 1:
        raise InvalidInputError(f"expected a mono (1-D) waveform, got shape {y.shape}")
    if not np.all(np.isfinite(y)):
        raise InvalidInputError("waveform contains non-finite samples")
    return y


def reflect_pad(y: np.ndarray, n_fft: int) -> np.ndarray:
    """Pad ``n_fft // 2`` samples on each edge by mirroring the waveform.

    The mirror excludes the edge sample itself: [a b c d ...] is padded on
    the left as [... c b | a b c d ...], and likewise on the right.
    """
    y = as_mono(y)
    pad = n_fft // 2
    if len(y) < pad + 1:
        raise InvalidInputError(
            f"waveform of {len(y)} samples is too short to reflect-pad by {pad}; "
            f"need at least {pad + 1}"
        )
    return np.pad(y, pad, mode="reflect")


def num_frames(padded_length: int, n_fft: int, hop_length: int) -> int:
    """Frames obtained from a padded waveform: ``1 + (padded - n_fft) // hop``."""
    if padded_length < n_fft:
        raise InvalidInputError(
            f"padded waveform of {padded_length} samples is shorter than n_fft={n_fft}"
        )
    return 1 + (padded_length - n_fft) // hop_length


def frame(padded: np.ndarray, n_fft: int, hop_length: int) -> np.ndarray:
    """Slice a padded waveform into an ``(n_fft, n_frames)`` matrix.

    Column ``k`` holds ``padded[k*hop : k*hop + n_fft]``. The result is a
    read-only strided view of ``padded``.
    """
    n = num_frames(len(padded), n_fft, hop_length)
    windows = np.lib.stride_tricks.sliding_window_view(padded, n_fft)
    return windows[: (n - 1) * hop_length + 1 : hop_length].T
