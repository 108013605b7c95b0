"""Regex-based PII masking for tip text and extracted entity sets.

Masks are partial where a fragment helps triage (first two characters of an
email local part, last two phone digits, first handle character, name
initials) and generic everywhere else. Originals are never stored.
"""

from __future__ import annotations

import re
from typing import Any, Iterable

from ..core.normalize import only_digits, unique
from ..schemas.base import EntitySet, RedactionMode, RedactionResult

MASK_CHAR = "*"
URL_PLACEHOLDER = "[REDACTED_URL]"
EMAIL_PLACEHOLDER = "[REDACTED_EMAIL]"
PHONE_PLACEHOLDER = "[REDACTED_PHONE]"
HANDLE_PLACEHOLDER = "@***"
NAME_PLACEHOLDER = "[REDACTED_NAME]"

# Applied to free text in this order, URLs first. No placeholder matches a later rule.
PII_PATTERNS: dict[str, re.Pattern] = {
    "URL": re.compile(
        r"https?://[\w.\-]+(?:/[\w\-._~:/?#\[\]@!$&'()*+,;=%]*)?",
        re.IGNORECASE | re.ASCII,
    ),
    "EMAIL": re.compile(
        r"([a-z0-9._%+\-]+)@([a-z0-9.\-]+\.[a-z]{2,})",
        re.IGNORECASE | re.ASCII,
    ),
    "PHONE": re.compile(
        r"(?:(?:\+|00)\d{1,3}[\s\-.]*)?(?:\(\d{2,4}\)[\s\-.]*)?\d{2,4}(?:[\s\-.]?\d){5,10}",
        re.ASCII,
    ),
    "HANDLE": re.compile(r"(^|\s)@([A-Za-z0-9_.\-]{3,30})\b", re.ASCII),
}

_HANDLE_VALUE = re.compile(r"^@?([A-Za-z0-9_.\-]{1,64})$", re.ASCII)


def _keep_prefix(value: str, keep: int) -> str:
    kept = min(keep, len(value))
    return value[:kept] + MASK_CHAR * (len(value) - kept)


def mask_email(local: str, domain: str) -> str:
    """jane.doe@example.com -> ja******@example.com"""
    return f"{_keep_prefix(local, 2)}@{domain}"


def mask_phone(raw: str) -> str:
    digits = only_digits(raw)
    if not digits:
        return PHONE_PLACEHOLDER
    return f"[REDACTED_PHONE:••{digits[-2:]}]"


def mask_handle(user: str) -> str:
    return "@" + _keep_prefix(user, 1)


def mask_name(name: str) -> str:
    """Jane Doe -> J*** D***"""
    parts = str(name).split()
    if not parts:
        return NAME_PLACEHOLDER
    return " ".join(part[0] + MASK_CHAR * 3 for part in parts)


class PIIRedactor:
    """Partial-mask PII redactor for tips.

    Free text is masked rule by rule (URLs, emails, phones, handles). In
    strict mode each supplied name is also masked wherever it occurs as a
    whole word, case-insensitively. Names that do not occur are ignored.

    The entity set is masked value by value with the same transforms, so
    either output can be handed on without leaking an original value.

    Example:
        redactor = PIIRedactor(mode="strict")
        result = redactor.redact(
            "Jane Doe wrote from jane@example.com",
            {"names": ["Jane Doe"], "emails": ["jane@example.com"]},
        )
        # result.safe_text == "J*** D*** wrote from ja**@example.com"
    """

    def __init__(self, mode: RedactionMode | str | None = None):
        self.mode = RedactionMode.parse(mode)

    @property
    def strict(self) -> bool:
        return self.mode is RedactionMode.STRICT

    def redact(self, text: Any = "", entities: Any = None) -> RedactionResult:
        """Mask free text and the entity set that came with it.

        Args:
            text: Tip text. None is treated as empty.
            entities: EntitySet or mapping with optional emails/phones/handles/names.

        Returns:
            RedactionResult with safe_text and safe_entities
        """
        entity_set = EntitySet.from_any(entities)
        return RedactionResult(
            safe_text=self.redact_text(text, names=entity_set.names),
            safe_entities=self.redact_entities(entity_set),
        )

    def redact_text(self, text: Any, names: Iterable[str] = ()) -> str:
        if not text:
            return ""
        out = str(text)

        out = PII_PATTERNS["URL"].sub(URL_PLACEHOLDER, out)
        out = PII_PATTERNS["EMAIL"].sub(lambda m: mask_email(m.group(1), m.group(2)), out)
        out = PII_PATTERNS["PHONE"].sub(lambda m: mask_phone(m.group(0)), out)
        out = PII_PATTERNS["HANDLE"].sub(lambda m: m.group(1) + mask_handle(m.group(2)), out)

        if self.strict:
            # Longer names are masked before names they contain
            for name in sorted(unique(str(n) for n in names if n), key=len, reverse=True):
                out = self._redact_name(out, name)

        return out

    @staticmethod
    def _redact_name(text: str, name: str) -> str:
        if not name.strip():
            return text
        # Never match the initial of an existing mask such as "J***"
        pattern = re.compile(
            rf"\b{re.escape(name)}\b(?!{re.escape(MASK_CHAR)})", re.IGNORECASE
        )
        masked = mask_name(name)
        return pattern.sub(lambda _m: masked, text)

    def redact_entities(self, entities: Any) -> EntitySet:
        entity_set = EntitySet.from_any(entities)
        return EntitySet(
            emails=[self._redact_email_value(e) for e in entity_set.emails],
            phones=[mask_phone(p) for p in entity_set.phones],
            handles=[self._redact_handle_value(h) for h in entity_set.handles],
            # Names are only kept, masked, in strict mode
            names=[mask_name(n) for n in entity_set.names] if self.strict else [],
        )

    @staticmethod
    def _redact_email_value(value: str) -> str:
        pattern = PII_PATTERNS["EMAIL"]
        if not pattern.search(value):
            return EMAIL_PLACEHOLDER
        return pattern.sub(lambda m: mask_email(m.group(1), m.group(2)), value)

    @staticmethod
    def _redact_handle_value(value: str) -> str:
        match = _HANDLE_VALUE.match(value.strip())
        if not match:
            return HANDLE_PLACEHOLDER
        return mask_handle(match.group(1))


def redact_content(
    text: Any = "",
    entities: Any = None,
    mode: RedactionMode | str | None = None,
) -> RedactionResult:
    """One-liner: mask text and entities with a fresh PIIRedactor."""
    return PIIRedactor(mode=mode).redact(text, entities)
