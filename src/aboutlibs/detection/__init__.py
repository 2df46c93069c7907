"""Detection — auto-detect installed libraries and cache the result per version.

Pure Python. No third-party dependency.
"""

from aboutlibs.detection.cache import (
    UNSET_VERSION,
    DetectionCache,
    InMemoryDetectionCache,
    JsonFileDetectionCache,
    default_cache_path,
)
from aboutlibs.detection.detector import Detector, ImportDetector

__all__ = [
    "Detector",
    "ImportDetector",
    "DetectionCache",
    "InMemoryDetectionCache",
    "JsonFileDetectionCache",
    "UNSET_VERSION",
    "default_cache_path",
]
