"""Partial-mask PII redaction for tip text and entity sets."""

from scout.privacy.redactor import PII_PATTERNS, PIIRedactor, mask_name, redact_content

__all__ = ["PIIRedactor", "PII_PATTERNS", "mask_name", "redact_content"]
