"""CLI for extracting features from a WAV file."""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from spectral_features.audio import load_wav
from spectral_features.errors import FeatureExtractionError
from spectral_features.extractor import FeatureExtractor

MODES = ("mean", "mfcc", "flat", "stft")


def main() -> None:
    parser = argparse.ArgumentParser(description="Extract STFT / MFCC features from a WAV file")
    parser.add_argument("input", type=Path, help="Input WAV file path")
    parser.add_argument(
        "--sample-rate",
        type=float,
        default=None,
        help="Sample rate label for the mel filterbank (default: the file's rate; no resampling)",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=None,
        help="Seconds of audio to read (default: whole file)",
    )
    parser.add_argument(
        "--n-mfcc",
        type=int,
        default=40,
        help="Number of MFCC coefficients (default: 40)",
    )
    parser.add_argument(
        "--mode",
        choices=MODES,
        default="mean",
        help="Output: mean MFCC vector, MFCC matrix, flattened MFCCs or STFT (default: mean)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Save the array to this .npy file instead of printing it",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    try:
        waveform = load_wav(args.input, sample_rate=args.sample_rate, duration=args.duration)
        extractor = FeatureExtractor.for_waveform(waveform, n_mfcc=args.n_mfcc)
        y = waveform.to_mono()
        if args.mode == "stft":
            features = extractor.stft(y)
        elif args.mode == "mfcc":
            features = extractor.mfcc(y)
        elif args.mode == "flat":
            features = extractor.extract_mfcc_features(y)
        else:
            features = extractor.extract(y)
    except FeatureExtractionError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)

    print(
        f"{args.input}: {waveform.n_channels} channel(s), {waveform.n_frames} frames "
        f"@ {waveform.sample_rate:g} Hz -> {args.mode} {features.shape}",
        file=sys.stderr,
    )
    if args.output is not None:
        np.save(args.output, features)
        print(f"Saved: {args.output}", file=sys.stderr)
    else:
        np.set_printoptions(precision=6, suppress=True)
        print(features)


if __name__ == "__main__":
    main()
