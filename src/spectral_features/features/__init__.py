"""STFT, mel, dB and MFCC stages of the feature pipeline."""

from spectral_features.features.aggregate import flatten, mean_mfcc, pool_to_mono, unflatten
from spectral_features.features.db import power_to_db
from spectral_features.features.framing import frame, num_frames, reflect_pad
from spectral_features.features.mel import (
    fft_frequencies,
    hz_to_mel,
    mel_filterbank,
    mel_frequencies,
    mel_project,
    mel_to_hz,
)
from spectral_features.features.mfcc import dct_basis, dct_project
from spectral_features.features.spectral import stft
from spectral_features.features.window import hann_window

__all__ = [
    "dct_basis",
    "dct_project",
    "fft_frequencies",
    "flatten",
    "frame",
    "hann_window",
    "hz_to_mel",
    "mean_mfcc",
    "mel_filterbank",
    "mel_frequencies",
    "mel_project",
    "mel_to_hz",
    "num_frames",
    "pool_to_mono",
    "power_to_db",
    "reflect_pad",
    "stft",
    "unflatten",
]
