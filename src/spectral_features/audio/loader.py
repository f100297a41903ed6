"""WAV loading into per-channel float samples."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import numpy as np
import scipy.io.wavfile as wavfile

from spectral_features.errors import InvalidInputError
from spectral_features.features.aggregate import pool_to_mono

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Waveform:
    """Decoded audio: ``samples`` is (n_channels, n_frames) float64."""

    samples: np.ndarray
    sample_rate: float

    def __post_init__(self) -> None:
        if self.samples.ndim != 2:
            raise InvalidInputError(
                f"samples must be (n_channels, n_frames), got shape {self.samples.shape}"
            )
        if not self.sample_rate > 0:
            raise InvalidInputError(f"sample_rate must be positive, got {self.sample_rate!r}")

    @property
    def n_channels(self) -> int:
        return self.samples.shape[0]

    @property
    def n_frames(self) -> int:
        return self.samples.shape[1]

    @property
    def duration(self) -> float:
        """Length in seconds at the labelled sample rate."""
        return self.n_frames / self.sample_rate

    def to_mono(self) -> np.ndarray:
        """Channel average rounded up at the 5th decimal (see ``pool_to_mono``)."""
        return pool_to_mono(self.samples)


def _to_float(data: np.ndarray) -> np.ndarray:
    """Scale PCM to [-1, 1); float data is kept as is."""
    if data.dtype == np.uint8:
        return (data.astype(np.float64) - 128.0) / 128.0
    if np.issubdtype(data.dtype, np.integer):
        return data.astype(np.float64) / float(2 ** (8 * data.dtype.itemsize - 1))
    return data.astype(np.float64)


def load_wav(
    path: Union[str, Path],
    sample_rate: Optional[float] = None,
    duration: Optional[float] = None,
) -> Waveform:
    """Read a WAV file.

    Args:
        path: WAV file path.
        sample_rate: Replaces the file's rate as a label for later feature
                     extraction. Samples are not resampled.
        duration: Seconds to read; overrides the file's frame count. Shorter
                  files are zero-padded to that length.

    Returns:
        Waveform with shape (n_channels, n_frames).

    Raises:
        FileNotFoundError, ValueError: from the WAV reader, unchanged.
    """
    file_rate, data = wavfile.read(str(path))
    samples = _to_float(data)
    samples = samples[np.newaxis, :] if samples.ndim == 1 else samples.T

    if duration is not None:
        n_frames = int(duration * file_rate)
        if n_frames <= 0:
            raise InvalidInputError(f"duration must cover at least one frame, got {duration}")
        if n_frames > samples.shape[1]:
            logger.warning(
                "%s: requested %.3fs but file has %.3fs; zero-padding",
                path,
                duration,
                samples.shape[1] / file_rate,
            )
            samples = np.pad(samples, ((0, 0), (0, n_frames - samples.shape[1])))
        else:
            samples = samples[:, :n_frames]

    rate = float(file_rate if sample_rate is None else sample_rate)
    logger.debug(
        "loaded %s: %d channel(s), %d frames, rate label %s Hz (file %d Hz)",
        path,
        samples.shape[0],
        samples.shape[1],
        rate,
        file_rate,
    )
    return Waveform(samples=np.ascontiguousarray(samples), sample_rate=rate)
