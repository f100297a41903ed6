"""Analysis window for the STFT."""

import numbers

import numpy as np

from spectral_features.errors import ConfigurationError


def hann_window(n_fft: int) -> np.ndarray:
    """Periodic Hann window of length ``n_fft``.

    ``w[i] = 0.5 - 0.5 * cos(2*pi*i / n_fft)``; ends touch zero at i=0 and
    the sequence is symmetric about n_fft/2.
    """
    if isinstance(n_fft, bool) or not isinstance(n_fft, numbers.Integral) or n_fft <= 0:
        raise ConfigurationError(f"n_fft must be a positive integer, got {n_fft!r}")
    if n_fft % 2:
        raise ConfigurationError(f"n_fft must be even, got {n_fft}")
    i = np.arange(n_fft, dtype=np.float64)
    return 0.5 - 0.5 * np.cos(2.0 * np.pi * i / n_fft)
