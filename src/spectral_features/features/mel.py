"""Mel scale conversions and the triangular mel filterbank.

Two mel scales are supported:

- default: linear below 1 kHz (200/3 Hz per mel), logarithmic above with
  a step of ln(6.4)/27 per mel (Slaney's Auditory Toolbox layout).
- ``htk=True``: ``2595 * log10(1 + f / 700)``.
"""

import functools
import logging
from typing import Optional

import numpy as np

from spectral_features.audio.config import FeatureConfig
from spectral_features.errors import InvalidInputError

logger = logging.getLogger(__name__)

_F_MIN = 0.0
_F_SP = 200.0 / 3
_MIN_LOG_HZ = 1000.0
_MIN_LOG_MEL = (_MIN_LOG_HZ - _F_MIN) / _F_SP
_LOGSTEP = np.log(6.4) / 27.0


def _scalar_or_array(values: np.ndarray, like) -> np.ndarray:
    return values.item() if np.ndim(like) == 0 else values


def hz_to_mel(frequencies, htk: bool = False):
    """Convert Hz to mels (scalar or array)."""
    f = np.asarray(frequencies, dtype=np.float64)
    if htk:
        return _scalar_or_array(2595.0 * np.log10(1.0 + f / 700.0), frequencies)

    mels = np.atleast_1d((f - _F_MIN) / _F_SP)
    f = np.atleast_1d(f)
    log_t = f >= _MIN_LOG_HZ
    mels[log_t] = _MIN_LOG_MEL + np.log(f[log_t] / _MIN_LOG_HZ) / _LOGSTEP
    return _scalar_or_array(mels.reshape(np.shape(frequencies)), frequencies)


def mel_to_hz(mels, htk: bool = False):
    """Convert mels to Hz (scalar or array)."""
    m = np.asarray(mels, dtype=np.float64)
    if htk:
        return _scalar_or_array(700.0 * (10.0 ** (m / 2595.0) - 1.0), mels)

    freqs = np.atleast_1d(_F_MIN + _F_SP * m)
    m = np.atleast_1d(m)
    log_t = m >= _MIN_LOG_MEL
    freqs[log_t] = _MIN_LOG_HZ * np.exp(_LOGSTEP * (m[log_t] - _MIN_LOG_MEL))
    return _scalar_or_array(freqs.reshape(np.shape(mels)), mels)


def fft_frequencies(sample_rate: float, n_fft: int) -> np.ndarray:
    """Center frequency of each retained FFT bin, ``i * (sr/2) / (n_fft/2)``."""
    return (sample_rate / 2) / (n_fft // 2) * np.arange(1 + n_fft // 2, dtype=np.float64)


def mel_frequencies(n_mels: int, fmin: float, fmax: float, htk: bool = False) -> np.ndarray:
    """``n_mels`` frequencies (Hz) uniformly spaced on the mel scale, ends included."""
    low = hz_to_mel(fmin, htk=htk)
    high = hz_to_mel(fmax, htk=htk)
    mels = low + (high - low) / (n_mels - 1) * np.arange(n_mels, dtype=np.float64)
    return mel_to_hz(mels, htk=htk)


def _triangle_weights(lower: np.ndarray, upper: np.ndarray) -> np.ndarray:
    """Smaller of the two ramps where it is positive, else 0.

    An exact tie between the ramps stays 0.
    """
    weights = np.zeros(lower.shape, dtype=np.float64)
    take_upper = (lower > upper) & (upper > 0)
    take_lower = (lower < upper) & (lower > 0)
    weights[take_upper] = upper[take_upper]
    weights[take_lower] = lower[take_lower]
    return weights


@functools.lru_cache(maxsize=32)
def _filterbank(
    sample_rate: float,
    n_fft: int,
    n_mels: int,
    fmin: float,
    fmax: float,
    htk: bool,
) -> np.ndarray:
    fft_freqs = fft_frequencies(sample_rate, n_fft)
    mel_f = mel_frequencies(n_mels + 2, fmin, fmax, htk=htk)

    fdiff = np.diff(mel_f)
    ramps = mel_f[:, np.newaxis] - fft_freqs[np.newaxis, :]

    lower = -ramps[:-2] / fdiff[:-1, np.newaxis]
    upper = ramps[2:] / fdiff[1:, np.newaxis]

    weights = _triangle_weights(lower, upper)

    # Slaney-style area normalization
    enorm = 2.0 / (mel_f[2 : n_mels + 2] - mel_f[:n_mels])
    weights *= enorm[:, np.newaxis]

    empty = np.flatnonzero(~weights.any(axis=1))
    if len(empty):
        logger.warning(
            "mel filterbank has %d empty band(s) (first: %d); n_mels=%d may be too high "
            "for n_fft=%d",
            len(empty),
            empty[0],
            n_mels,
            n_fft,
        )
    logger.debug(
        "built mel filterbank: sr=%s n_fft=%d n_mels=%d fmin=%s fmax=%s htk=%s",
        sample_rate,
        n_fft,
        n_mels,
        fmin,
        fmax,
        htk,
    )
    weights.setflags(write=False)
    return weights


def mel_filterbank(config: Optional[FeatureConfig] = None) -> np.ndarray:
    """Filterbank matrix combining FFT bins into mel bands.

    Returns:
        Read-only array, shape (n_mels, 1 + n_fft/2). Row ``i`` is a
        triangle rising from mel center ``i`` to ``i+1`` and falling to
        ``i+2``, scaled by ``2 / (f[i+2] - f[i])``. Cached per parameter set.
    """
    config = config or FeatureConfig()
    return _filterbank(
        float(config.sample_rate),
        config.n_fft,
        config.n_mels,
        float(config.fmin),
        float(config.mel_fmax),
        config.htk,
    )


def mel_project(spectrogram: np.ndarray, filterbank: np.ndarray) -> np.ndarray:
    """Apply a filterbank: ``(n_mels, n_bins) @ (n_bins, n_frames)``."""
    spectrogram = np.asarray(spectrogram, dtype=np.float64)
    if spectrogram.ndim != 2 or spectrogram.shape[0] != filterbank.shape[1]:
        raise InvalidInputError(
            f"spectrogram of shape {spectrogram.shape} does not match filterbank "
            f"with {filterbank.shape[1]} bins"
        )
    return filterbank @ spectrogram
