"""Short-time Fourier transform."""

import logging
from typing import Optional

import numpy as np
import scipy.fft

from spectral_features.audio.config import FeatureConfig
from spectral_features.features.framing import frame, reflect_pad
from spectral_features.features.window import hann_window

logger = logging.getLogger(__name__)


def stft(
    y: np.ndarray,
    config: Optional[FeatureConfig] = None,
    workers: Optional[int] = None,
) -> np.ndarray:
    """Compute the STFT spectrogram of a mono waveform.

    The waveform is centered with reflect padding, cut into ``n_fft``
    frames every ``hop_length`` samples, windowed with a periodic Hann
    window and transformed with an unscaled forward FFT. Bins
    ``0 .. n_fft/2`` are kept.

    With ``config.spectrum == "real"`` (default) each bin holds the real
    part of the FFT output, which is what the reference front end feeds to
    the mel stage. ``"magnitude"`` keeps the complex modulus instead.

    Args:
        y: Mono waveform, shape (n_samples,).
        config: Extraction parameters (defaults if None).
        workers: Threads for the FFT across frames (scipy.fft); frames are
                 independent so results do not depend on this value.

    Returns:
        Spectrogram, shape (1 + n_fft/2, n_frames), float64.
    """
    config = config or FeatureConfig()
    padded = reflect_pad(y, config.n_fft)
    frames = frame(padded, config.n_fft, config.hop_length)
    window = hann_window(config.n_fft)

    spectrum = scipy.fft.rfft(frames * window[:, np.newaxis], axis=0, workers=workers)
    if config.spectrum == "magnitude":
        out = np.abs(spectrum)
    else:
        out = np.ascontiguousarray(spectrum.real)
    logger.debug(
        "stft: %d samples -> %d bins x %d frames (%s)",
        len(padded) - 2 * config.pad,
        out.shape[0],
        out.shape[1],
        config.spectrum,
    )
    return out
