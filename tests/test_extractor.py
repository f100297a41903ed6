"""End-to-end tests for FeatureExtractor."""

from __future__ import annotations

import unittest
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from spectral_features import FeatureConfig, FeatureExtractor, InvalidInputError, Waveform
from spectral_features.features import (
    dct_basis,
    mel_filterbank,
    power_to_db,
    stft,
    unflatten,
)

SR = 16_000
N_MFCC = 13


def _sine(freq: float = 440.0, seconds: float = 1.0, sample_rate: int = SR) -> np.ndarray:
    t = np.arange(int(sample_rate * seconds)) / sample_rate
    return 0.5 * np.sin(2 * np.pi * freq * t)


class TestFeatureExtractor(unittest.TestCase):
    """Tests for FeatureExtractor."""

    def setUp(self) -> None:
        self.config = FeatureConfig(sample_rate=SR, n_mfcc=N_MFCC)
        self.extractor = FeatureExtractor(self.config)
        self.y = _sine()

    def test_shapes(self) -> None:
        n_frames = 1 + len(self.y) // 512
        self.assertEqual(self.extractor.stft(self.y).shape, (1025, n_frames))
        self.assertEqual(self.extractor.mel_spectrogram(self.y).shape, (128, n_frames))
        self.assertEqual(self.extractor.mfcc(self.y).shape, (N_MFCC, n_frames))
        self.assertEqual(self.extractor.extract_mfcc_features(self.y).shape, (N_MFCC * n_frames,))
        self.assertEqual(self.extractor.extract(self.y).shape, (N_MFCC,))

    def test_pipeline_composition(self) -> None:
        """mfcc == DCT @ dB(filterbank @ STFT)."""
        expected = dct_basis(N_MFCC, 128) @ power_to_db(
            mel_filterbank(self.config) @ stft(self.y, self.config)
        )
        np.testing.assert_allclose(self.extractor.mfcc(self.y), expected, rtol=1e-12, atol=1e-9)

    def test_deterministic(self) -> None:
        """Two independent runs give bit-identical mean vectors."""
        first = FeatureExtractor(FeatureConfig(sample_rate=SR, n_mfcc=N_MFCC)).extract(_sine())
        second = FeatureExtractor(FeatureConfig(sample_rate=SR, n_mfcc=N_MFCC)).extract(_sine())
        self.assertEqual(first.dtype, np.float32)
        self.assertTrue(np.all(np.isfinite(first)))
        self.assertEqual(first.tobytes(), second.tobytes())

    def test_flat_matches_matrix(self) -> None:
        mfcc = self.extractor.mfcc(self.y)
        flat = self.extractor.extract_mfcc_features(self.y)
        np.testing.assert_array_equal(unflatten(flat, N_MFCC), mfcc.astype(np.float32))

    def test_mean_of_matrix(self) -> None:
        mfcc = self.extractor.mfcc(self.y)
        mean = self.extractor.mean_mfcc(mfcc, N_MFCC, mfcc.shape[1])
        np.testing.assert_allclose(mean, mfcc.mean(axis=1), rtol=1e-5, atol=1e-4)

    def test_mean_over_single_precision_values(self) -> None:
        """extract() averages the float32-rounded MFCCs, then casts to float32."""
        rng = np.random.default_rng(7)
        for _ in range(5):
            y = rng.standard_normal(SR) * 0.1
            mfcc = self.extractor.mfcc(y)
            rounded = mfcc.astype(np.float32).astype(np.float64)
            expected = (rounded.sum(axis=1) / mfcc.shape[1]).astype(np.float32)
            np.testing.assert_array_equal(self.extractor.extract(y), expected)
            flat = self.extractor.extract_mfcc_features(y)
            np.testing.assert_array_equal(
                self.extractor.extract(y), self.extractor.mean_mfcc(unflatten(flat, N_MFCC))
            )

    def test_per_call_coefficient_count(self) -> None:
        mfcc_20 = self.extractor.mfcc(self.y, n_mfcc=20)
        self.assertEqual(mfcc_20.shape[0], 20)
        np.testing.assert_allclose(mfcc_20[:N_MFCC], self.extractor.mfcc(self.y), atol=1e-9)
        self.assertEqual(self.extractor.config.n_mfcc, N_MFCC)

    def test_concurrent_configurations_do_not_interfere(self) -> None:
        configs = [
            FeatureConfig(sample_rate=SR, n_mfcc=N_MFCC),
            FeatureConfig(sample_rate=22_050, n_mfcc=20),
            FeatureConfig(sample_rate=44_100, n_mfcc=40),
        ]
        serial = [FeatureExtractor(c).extract(self.y) for c in configs]
        with ThreadPoolExecutor(max_workers=3) as pool:
            jobs = [pool.submit(FeatureExtractor(c).extract, self.y) for c in configs * 3]
            results = [j.result() for j in jobs]
        for i, result in enumerate(results):
            np.testing.assert_allclose(result, serial[i % 3], rtol=1e-6, atol=1e-6)

    def test_sample_rate_label_changes_features(self) -> None:
        other = FeatureExtractor(self.config.with_overrides(sample_rate=8_000))
        self.assertFalse(np.array_equal(other.extract(self.y), self.extractor.extract(self.y)))

    def test_silence(self) -> None:
        """All-zero input floors every mel value at -100 dB."""
        mfcc = self.extractor.mfcc(np.zeros(4096))
        np.testing.assert_allclose(mfcc[0], -100.0 * np.sqrt(128), rtol=1e-12)
        np.testing.assert_allclose(mfcc[1:], 0.0, atol=1e-9)

    def test_waveform_input(self) -> None:
        stereo = np.vstack([self.y, self.y])
        waveform = Waveform(samples=stereo, sample_rate=SR)
        extractor = FeatureExtractor.for_waveform(waveform, n_mfcc=N_MFCC)
        self.assertEqual(extractor.config, self.config)
        mono = FeatureExtractor.pool_to_mono(stereo)
        np.testing.assert_array_equal(extractor.extract_waveform(waveform), extractor.extract(mono))

    def test_too_short(self) -> None:
        with self.assertRaises(InvalidInputError):
            self.extractor.extract(np.zeros(1024))
        self.assertEqual(self.extractor.extract(np.zeros(1025) + 0.1).shape, (N_MFCC,))


if __name__ == "__main__":
    unittest.main()
