"""Feature extraction configuration.

Defaults reproduce the reference MFCC front end:
- STFT: Hann window, FFT 2048, hop 512, centered with reflect padding
- Mel: 128 bands between 0 Hz and Nyquist, Slaney-style piecewise scale
- dB: 10*log10 with an 80 dB floor below the global maximum
- MFCC: 40 coefficients from an orthonormal DCT basis

One value is passed to every call; nothing is held in module state.
"""

import numbers
from dataclasses import dataclass, replace
from typing import Optional

from spectral_features.errors import ConfigurationError

SPECTRUM_MODES = ("real", "magnitude")


@dataclass(frozen=True)
class FeatureConfig:
    """STFT / mel / MFCC parameters."""

    # Label only; samples are never resampled
    sample_rate: float = 44_100.0
    n_mfcc: int = 40

    # STFT
    n_fft: int = 2048
    hop_length: int = 512

    # Mel filterbanks
    n_mels: int = 128
    fmin: float = 0.0
    fmax: Optional[float] = None  # None -> sample_rate / 2
    htk: bool = False

    # dB floor below the spectrogram maximum
    top_db: float = 80.0

    # "real" keeps the real part of each FFT bin, "magnitude" the modulus
    spectrum: str = "real"

    def __post_init__(self) -> None:
        for name in ("n_mfcc", "n_fft", "hop_length", "n_mels"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        if self.n_fft % 2:
            raise ConfigurationError(f"n_fft must be even, got {self.n_fft}")
        if not self.sample_rate > 0:
            raise ConfigurationError(f"sample_rate must be positive, got {self.sample_rate!r}")
        if self.n_mfcc > self.n_mels:
            raise ConfigurationError(
                f"n_mfcc ({self.n_mfcc}) cannot exceed n_mels ({self.n_mels})"
            )
        nyquist = self.sample_rate / 2
        if self.fmin < 0 or not self.fmin < self.mel_fmax <= nyquist:
            raise ConfigurationError(
                f"need 0 <= fmin < fmax <= {nyquist}, got fmin={self.fmin}, fmax={self.mel_fmax}"
            )
        if self.top_db < 0:
            raise ConfigurationError(f"top_db must be non-negative, got {self.top_db}")
        if self.spectrum not in SPECTRUM_MODES:
            raise ConfigurationError(
                f"spectrum must be one of {SPECTRUM_MODES}, got {self.spectrum!r}"
            )

    @property
    def n_bins(self) -> int:
        """Retained FFT bins per frame (0 .. n_fft/2 inclusive)."""
        return 1 + self.n_fft // 2

    @property
    def pad(self) -> int:
        """Reflect padding applied to each edge of the waveform."""
        return self.n_fft // 2

    @property
    def mel_fmax(self) -> float:
        """Upper mel edge in Hz, resolved against the sample rate."""
        if self.fmax is None:
            return self.sample_rate / 2
        return self.fmax

    def with_overrides(self, **changes) -> "FeatureConfig":
        """Return a copy with some fields replaced (validated again)."""
        return replace(self, **changes)
