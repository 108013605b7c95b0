"""
Scout - deterministic signal from tip text and images

Extracts identifiers from free-form tips, masks PII before the tip travels
further, and fingerprints images for duplicate detection.
"""

__version__ = "0.1.0"

import sys

if sys.version_info < (3, 10):
    raise RuntimeError("Scout requires Python 3.10 or higher")

from .config import ScoutSettings, load_settings
from .core.scout import Scout, scan
from .errors import DecodeError, InputError, ScoutError, UnsupportedSourceError
from .imaging import compute_phash, fingerprint_image, hamming_distance
from .parsers import extract_entities
from .privacy import PIIRedactor, redact_content
from .schemas import (
    EntitySet,
    PerceptualHash,
    RedactionMode,
    RedactionResult,
    ScanResult,
)

__all__ = [
    "__version__",
    # Main API
    "scan",
    "Scout",
    # Engines
    "extract_entities",
    "redact_content",
    "PIIRedactor",
    "compute_phash",
    "fingerprint_image",
    "hamming_distance",
    # Result types
    "EntitySet",
    "PerceptualHash",
    "RedactionMode",
    "RedactionResult",
    "ScanResult",
    # Config
    "ScoutSettings",
    "load_settings",
    # Errors
    "ScoutError",
    "InputError",
    "DecodeError",
    "UnsupportedSourceError",
]
