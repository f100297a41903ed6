"""Power-to-decibel conversion."""

import numpy as np

from spectral_features.errors import ConfigurationError, InvalidInputError

AMIN = 1e-10
FLOOR_DB = -100.0


def power_to_db(S: np.ndarray, top_db: float = 80.0) -> np.ndarray:
    """Convert a power spectrogram to dB, clipped to ``top_db`` below its peak.

    Values with ``|S| > 1e-10`` map to ``10*log10(|S|)``, the rest to -100 dB.
    The floor ``max - top_db`` uses the maximum over the whole matrix, after
    every element has been converted.
    """
    S = np.asarray(S, dtype=np.float64)
    if S.size == 0:
        raise InvalidInputError("cannot convert an empty spectrogram to dB")
    if top_db < 0:
        raise ConfigurationError(f"top_db must be non-negative, got {top_db}")

    magnitude = np.abs(S)
    log_spec = np.where(
        magnitude > AMIN,
        10.0 * np.log10(np.maximum(magnitude, AMIN)),
        FLOOR_DB,
    )
    return np.maximum(log_spec, log_spec.max() - top_db)
