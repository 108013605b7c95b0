"""Data models for Scout."""

from .base import (
    ENTITY_CATEGORIES,
    PHASH_ALGO,
    PHASH_BITS,
    EntitySet,
    PerceptualHash,
    RedactionMode,
    RedactionResult,
    ScanResult,
)

__all__ = [
    "ENTITY_CATEGORIES",
    "PHASH_ALGO",
    "PHASH_BITS",
    "EntitySet",
    "PerceptualHash",
    "RedactionMode",
    "RedactionResult",
    "ScanResult",
]
