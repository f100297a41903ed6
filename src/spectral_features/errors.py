"""Exceptions raised by the feature extraction pipeline.

Every failure here is structural: re-running with the same inputs fails the
same way, so nothing in the package retries.
"""


class FeatureExtractionError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(FeatureExtractionError, ValueError):
    """Invalid or inconsistent extraction parameters."""


class InvalidInputError(FeatureExtractionError, ValueError):
    """Waveform or matrix the pipeline cannot process (too short, wrong shape)."""
