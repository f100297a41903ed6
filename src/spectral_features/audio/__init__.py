"""Configuration and waveform loading."""

from spectral_features.audio.config import FeatureConfig
from spectral_features.audio.loader import Waveform, load_wav

__all__ = [
    "FeatureConfig",
    "Waveform",
    "load_wav",
]
