"""
Deterministic entity extraction for tip text.

Pulls emails, phone numbers, social handles and conservative person-name
candidates out of free text. Every category is computed independently and
returned normalized and de-duplicated.
"""

import re
from typing import List, Optional

from ..core.normalize import only_digits, unique
from ..schemas.base import EntitySet

EMAIL_PATTERN = re.compile(
    r"\b([a-z0-9._%+\-]+)@([a-z0-9\-]+(?:\.[a-z0-9\-]+)+)\b",
    re.IGNORECASE | re.ASCII,
)

# E.164 or common formats: +1 212-555-1234, (212) 555 1234, 0044 20 7946 0321
PHONE_PATTERN = re.compile(
    r"(?:(?:\+|00)\d{1,3}[\s\-.]*)?(?:\(\d{2,4}\)[\s\-.]*)?\d{2,4}(?:[\s\-.]?\d){5,10}",
    re.ASCII,
)

HANDLE_PATTERN = re.compile(r"(^|\s)@([A-Za-z0-9_.\-]{3,30})\b", re.ASCII)

# A letter, then letters, apostrophes or hyphens, then an optional dot
WORD_PATTERN = re.compile(r"[^\W\d_](?:[^\W\d_]|['\-])*\.?")

_SKIP_LINE_PATTERN = re.compile(r"https?://|@\w", re.IGNORECASE)

NAME_STOP_WORDS = frozenset(
    {
        "and",
        "or",
        "the",
        "of",
        "for",
        "in",
        "on",
        "to",
        "from",
        "with",
        "by",
        "de",
        "da",
        "von",
        "van",
        "bin",
        "al",
    }
)

MIN_PHONE_DIGITS = 7
MAX_PHONE_DIGITS = 16
MIN_HANDLE_LENGTH = 3
MAX_NAME_LINES = 500
MAX_NAME_CANDIDATES = 20


def normalize_email(local: str, domain: str) -> str:
    return f"{local.lower()}@{domain.lower()}"


def normalize_phone(raw: str) -> Optional[str]:
    """
    Return digits (with a leading '+' if the raw match had one) or None.

    Runs with fewer than 7 or more than 16 digits are rejected.
    """
    digits = only_digits(raw)
    if not MIN_PHONE_DIGITS <= len(digits) <= MAX_PHONE_DIGITS:
        return None
    prefix = "+" if raw.lstrip().startswith("+") else ""
    return prefix + digits


def normalize_handle(user: str) -> Optional[str]:
    user = (user or "").rstrip(".")
    if len(user) < MIN_HANDLE_LENGTH:
        return None
    return "@" + user


def _is_capitalized(word: str) -> bool:
    return (
        len(word) >= 2
        and word[0].isupper()
        and all(ch.isalpha() or ch in "'-" for ch in word[1:])
    )


def _is_name_token(word: str) -> bool:
    return bool(word) and _is_capitalized(word) and word.lower() not in NAME_STOP_WORDS


def extract_name_candidates(text: str, max_candidates: int = MAX_NAME_CANDIDATES) -> List[str]:
    """
    Conservative person-name candidates.

    Looks for runs of two (and, when a third follows, three) capitalized
    words, skipping lines that carry links or @-tokens. This is a heuristic,
    not a parser: "Jane Doe" is found, a lone "Jane" is not.
    """
    out: List[str] = []
    if not text:
        return out

    for line in re.split(r"\n|\r", text)[:MAX_NAME_LINES]:
        trimmed = line.strip()
        if not trimmed or _SKIP_LINE_PATTERN.search(trimmed):
            continue

        words = WORD_PATTERN.findall(trimmed)
        i = 0
        while i < len(words) - 1:
            first, second = words[i], words[i + 1]
            if _is_name_token(first) and _is_name_token(second):
                candidate = f"{first} {second}"
                out.append(candidate)
                if i + 2 < len(words) and _is_name_token(words[i + 2]):
                    out.append(f"{candidate} {words[i + 2]}")
                i += 2
            else:
                i += 1

        if len(out) >= max_candidates:
            break

    return unique(out)[:max_candidates]


def extract_emails(text: str) -> List[str]:
    return unique(normalize_email(m.group(1), m.group(2)) for m in EMAIL_PATTERN.finditer(text))


def extract_phones(text: str) -> List[str]:
    return unique(normalize_phone(m.group(0)) for m in PHONE_PATTERN.finditer(text))


def extract_handles(text: str) -> List[str]:
    # Blank out emails first so a local part is never read as a handle
    without_emails = EMAIL_PATTERN.sub(" ", text)
    return unique(normalize_handle(m.group(2)) for m in HANDLE_PATTERN.finditer(without_emails))


def extract_entities(text) -> EntitySet:
    """
    Extract emails, phones, handles and name candidates from raw text.

    Never raises on text content: None and empty input yield an empty set,
    other non-string input is stringified.

    Example:
        entities = extract_entities("Contact Jane at jane.doe@example.com or @janed")
        # entities.emails == ("jane.doe@example.com",)
        # entities.handles == ("@janed",)
    """
    raw = "" if text is None else str(text)
    if not raw:
        return EntitySet()

    return EntitySet(
        emails=extract_emails(raw),
        phones=extract_phones(raw),
        handles=extract_handles(raw),
        names=extract_name_candidates(raw),
    )
