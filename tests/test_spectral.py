"""Unit tests for the STFT spectral engine."""

from __future__ import annotations

import unittest

import numpy as np

from spectral_features import FeatureConfig, InvalidInputError
from spectral_features.features import frame, hann_window, reflect_pad, stft


def _sine(freq: float, sample_rate: int, seconds: float) -> np.ndarray:
    t = np.arange(int(sample_rate * seconds)) / sample_rate
    return 0.5 * np.sin(2 * np.pi * freq * t)


class TestSTFT(unittest.TestCase):
    """Tests for stft."""

    def setUp(self) -> None:
        self.config = FeatureConfig(sample_rate=16_000)
        self.y = _sine(440.0, 16_000, 1.0)

    def test_shape(self) -> None:
        S = stft(self.y, self.config)
        self.assertEqual(S.shape, (1025, 1 + 16_000 // 512))
        self.assertEqual(S.dtype, np.float64)

    def test_real_part_of_unscaled_fft(self) -> None:
        """Default spectrum keeps Re(FFT) of each windowed frame, bins 0..n_fft/2."""
        S = stft(self.y, self.config)
        frames = frame(reflect_pad(self.y, 2048), 2048, 512)
        win = hann_window(2048)
        for k in (0, 5, frames.shape[1] - 1):
            expected = np.fft.fft(frames[:, k] * win)[:1025].real
            np.testing.assert_allclose(S[:, k], expected, rtol=1e-9, atol=1e-9)

    def test_real_part_can_be_negative(self) -> None:
        self.assertLess(stft(self.y, self.config).min(), 0.0)

    def test_magnitude_mode(self) -> None:
        config = self.config.with_overrides(spectrum="magnitude")
        S = stft(self.y, config)
        self.assertGreaterEqual(S.min(), 0.0)
        frames = frame(reflect_pad(self.y, 2048), 2048, 512)
        expected = np.abs(np.fft.fft(frames[:, 3] * hann_window(2048))[:1025])
        np.testing.assert_allclose(S[:, 3], expected, rtol=1e-9, atol=1e-9)

    def test_constant_signal_dc(self) -> None:
        """A constant signal puts sum(window) in the DC bin of every frame."""
        S = stft(np.ones(4096), self.config)
        np.testing.assert_allclose(S[0], 1024.0, rtol=1e-12)
        self.assertLess(np.abs(S[2:]).max(), 1e-9)

    def test_peak_bin_at_sine_frequency(self) -> None:
        S = stft(self.y, self.config.with_overrides(spectrum="magnitude"))
        peak = int(np.argmax(S[:, S.shape[1] // 2]))
        bin_hz = 16_000 / 2048
        self.assertLessEqual(abs(peak * bin_hz - 440.0), bin_hz)

    def test_workers_do_not_change_result(self) -> None:
        np.testing.assert_array_equal(
            stft(self.y, self.config, workers=1), stft(self.y, self.config, workers=2)
        )

    def test_too_short(self) -> None:
        with self.assertRaises(InvalidInputError):
            stft(np.zeros(1024), self.config)


if __name__ == "__main__":
    unittest.main()
