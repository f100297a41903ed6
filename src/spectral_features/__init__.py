"""Spectral features - STFT spectrograms and MFCCs for model input."""

from spectral_features.audio import FeatureConfig, Waveform, load_wav
from spectral_features.errors import (
    ConfigurationError,
    FeatureExtractionError,
    InvalidInputError,
)
from spectral_features.extractor import FeatureExtractor
from spectral_features.features import mean_mfcc, pool_to_mono, stft

__all__ = [
    "ConfigurationError",
    "FeatureConfig",
    "FeatureExtractionError",
    "FeatureExtractor",
    "InvalidInputError",
    "Waveform",
    "load_wav",
    "mean_mfcc",
    "pool_to_mono",
    "stft",
]
