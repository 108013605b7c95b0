"""
Main Scout class for tip triage.

This is the primary public API: it wires the extraction, redaction and
hashing engines together. The engines themselves stay pure; logging lives
here and only ever records counts, never extracted values.
"""

import logging
from typing import Any, Optional, Union

from ..config import ScoutSettings
from ..imaging.loader import Fetcher, ImageSource, describe_source, fingerprint_image
from ..parsers.entity_parser import extract_entities
from ..privacy.redactor import PIIRedactor
from ..schemas.base import (
    ENTITY_CATEGORIES,
    EntitySet,
    PerceptualHash,
    RedactionMode,
    RedactionResult,
    ScanResult,
)

logger = logging.getLogger(__name__)


def _counts(entities: EntitySet) -> str:
    return ", ".join(f"{key}={len(getattr(entities, key))}" for key in ENTITY_CATEGORIES)


class Scout:
    """
    Tip triage facade.

    Features:
    - Entity extraction (emails, phones, handles, name candidates)
    - Partial-mask PII redaction in normal or strict mode
    - DCT perceptual hashing of images for duplicate detection
    """

    def __init__(
        self,
        settings: Optional[ScoutSettings] = None,
        fetcher: Optional[Fetcher] = None,
    ):
        """
        Initialize Scout.

        Args:
            settings: Runtime settings (defaults are used if not provided)
            fetcher: Optional callable(url) -> bytes for http(s) image references
        """
        self.settings = settings or ScoutSettings()
        self.fetcher = fetcher

    def _mode(self, mode: Union[RedactionMode, str, None]) -> RedactionMode:
        if mode is None:
            return self.settings.redaction_mode
        return RedactionMode.parse(mode)

    def extract(self, text: Any) -> EntitySet:
        entities = extract_entities(text)
        logger.debug("Extracted entities: %s", _counts(entities))
        return entities

    def redact(
        self,
        text: Any = "",
        entities: Any = None,
        mode: Union[RedactionMode, str, None] = None,
    ) -> RedactionResult:
        resolved = self._mode(mode)
        result = PIIRedactor(mode=resolved).redact(text, entities)
        logger.debug("Redacted text in %s mode", resolved.value)
        return result

    def scan_text(
        self,
        text: Any,
        mode: Union[RedactionMode, str, None] = None,
    ) -> ScanResult:
        """
        Extract entities from a tip, then redact the tip with them.

        Args:
            text: Tip text
            mode: Redaction mode (settings default if not provided)

        Returns:
            ScanResult with raw entities, safe text and safe entities
        """
        resolved = self._mode(mode)
        entities = self.extract(text)
        redacted = self.redact(text, entities, resolved)
        return ScanResult(
            mode=resolved,
            entities=entities,
            safe_text=redacted.safe_text,
            safe_entities=redacted.safe_entities,
        )

    def fingerprint(self, source: ImageSource) -> PerceptualHash:
        """
        Perceptual hash of an image reference.

        Raises:
            InputError, DecodeError, UnsupportedSourceError
        """
        phash = fingerprint_image(
            source,
            fetcher=self.fetcher,
            max_pixels=self.settings.max_image_pixels,
        )
        logger.debug("Fingerprinted %s", describe_source(source))
        return phash


def scan(
    text: Any,
    mode: Union[RedactionMode, str, None] = None,
    settings: Optional[ScoutSettings] = None,
) -> ScanResult:
    """
    One-liner function for quick tip scanning.

    Examples:
        ```python
        from scout import scan

        result = scan("Call +1 212-555-1234, ask for Jane Doe")
        print(result.safe_text)
        # Call [REDACTED_PHONE:••34], ask for J*** D***
        ```
    """
    return Scout(settings=settings).scan_text(text, mode=mode)
