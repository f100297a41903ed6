"""DCT basis and projection of dB mel spectrograms into MFCC space."""

import functools
import logging

import numpy as np

from spectral_features.errors import ConfigurationError, InvalidInputError

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=32)
def _dct_basis(n_filters: int, n_input: int) -> np.ndarray:
    samples = (1 + 2 * np.arange(n_input, dtype=np.float64)) * np.pi / (2.0 * n_input)
    basis = np.empty((n_filters, n_input), dtype=np.float64)
    basis[0, :] = 1.0 / np.sqrt(n_input)
    for i in range(1, n_filters):
        basis[i, :] = np.cos(i * samples) * np.sqrt(2.0 / n_input)
    logger.debug("built DCT basis %d x %d", n_filters, n_input)
    basis.setflags(write=False)
    return basis


def dct_basis(n_mfcc: int, n_mels: int) -> np.ndarray:
    """Orthonormal DCT-III basis, shape (n_mfcc, n_mels), read-only.

    Row 0 is the constant ``1/sqrt(n_mels)``; row ``i`` samples
    ``cos(i * (2j + 1) * pi / (2 n_mels)) * sqrt(2 / n_mels)``.
    """
    if n_mfcc <= 0 or n_mels <= 0:
        raise ConfigurationError(
            f"n_mfcc and n_mels must be positive, got n_mfcc={n_mfcc}, n_mels={n_mels}"
        )
    return _dct_basis(int(n_mfcc), int(n_mels))


def dct_project(db_spectrogram: np.ndarray, n_mfcc: int) -> np.ndarray:
    """MFCC matrix ``(n_mfcc, n_frames)`` from a dB mel spectrogram ``(n_mels, n_frames)``."""
    db_spectrogram = np.asarray(db_spectrogram, dtype=np.float64)
    if db_spectrogram.ndim != 2:
        raise InvalidInputError(
            f"expected a 2-D (n_mels, n_frames) spectrogram, got shape {db_spectrogram.shape}"
        )
    basis = dct_basis(n_mfcc, db_spectrogram.shape[0])
    return basis @ db_spectrogram
