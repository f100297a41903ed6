"""End-to-end STFT / MFCC extraction for model input."""

import logging
from typing import Optional

import numpy as np

from spectral_features.audio.config import FeatureConfig
from spectral_features.audio.loader import Waveform
from spectral_features.features.aggregate import flatten, mean_mfcc, pool_to_mono
from spectral_features.features.db import power_to_db
from spectral_features.features.mel import mel_filterbank, mel_project
from spectral_features.features.mfcc import dct_project
from spectral_features.features.spectral import stft

logger = logging.getLogger(__name__)


class FeatureExtractor:
    """Compute STFT, mel, dB and MFCC features from mono audio.

    The extractor only holds an immutable ``FeatureConfig``; every method is
    a pure function of its arguments, so one instance can be shared across
    threads, and extractors with different configurations never interfere.
    """

    def __init__(self, config: Optional[FeatureConfig] = None, workers: Optional[int] = None):
        self.config = config or FeatureConfig()
        self.workers = workers

    @classmethod
    def for_waveform(cls, waveform: Waveform, n_mfcc: Optional[int] = None, **overrides):
        """Extractor labelled with the waveform's sample rate."""
        if n_mfcc is not None:
            overrides["n_mfcc"] = n_mfcc
        return cls(FeatureConfig(sample_rate=waveform.sample_rate, **overrides))

    def _config(self, n_mfcc: Optional[int]) -> FeatureConfig:
        if n_mfcc is None or n_mfcc == self.config.n_mfcc:
            return self.config
        return self.config.with_overrides(n_mfcc=n_mfcc)

    @staticmethod
    def pool_to_mono(channels) -> np.ndarray:
        """Average channels into one, rounding up at the 5th decimal."""
        return pool_to_mono(channels)

    def stft(self, y: np.ndarray) -> np.ndarray:
        """STFT spectrogram, shape (1 + n_fft/2, n_frames)."""
        return stft(y, self.config, workers=self.workers)

    def mel_spectrogram(self, y: np.ndarray) -> np.ndarray:
        """Mel spectrogram, shape (n_mels, n_frames)."""
        return mel_project(self.stft(y), mel_filterbank(self.config))

    def mfcc(self, y: np.ndarray, n_mfcc: Optional[int] = None) -> np.ndarray:
        """MFCC matrix, shape (n_mfcc, n_frames).

        Args:
            y: Mono waveform.
            n_mfcc: Coefficient count for this call (default: config.n_mfcc).
        """
        config = self._config(n_mfcc)
        mel = mel_project(stft(y, config, workers=self.workers), mel_filterbank(config))
        db = power_to_db(mel, top_db=config.top_db)
        out = dct_project(db, config.n_mfcc)
        logger.debug("mfcc: %d coefficients x %d frames", out.shape[0], out.shape[1])
        return out

    def extract_mfcc_features(self, y: np.ndarray, n_mfcc: Optional[int] = None) -> np.ndarray:
        """MFCCs flattened frame-major into a float32 vector."""
        return flatten(self.mfcc(y, n_mfcc))

    def mean_mfcc(
        self,
        mfcc: np.ndarray,
        n_mfcc: Optional[int] = None,
        n_frames: Optional[int] = None,
    ) -> np.ndarray:
        """Per-coefficient mean over frames, float32 (n_mfcc,)."""
        return mean_mfcc(mfcc, n_mfcc, n_frames)

    def extract(self, y: np.ndarray, n_mfcc: Optional[int] = None) -> np.ndarray:
        """Mean MFCC vector of a mono waveform (primary model input).

        The mean is taken over the single-precision MFCC values, the same
        values ``extract_mfcc_features`` emits.
        """
        mfcc = self.mfcc(y, n_mfcc)
        return mean_mfcc(mfcc.astype(np.float32).astype(np.float64))

    def extract_waveform(self, waveform: Waveform) -> np.ndarray:
        """Mean MFCC vector of a (possibly multi-channel) waveform."""
        return self.extract(waveform.to_mono())
