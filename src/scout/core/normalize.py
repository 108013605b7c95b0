"""Small normalization helpers shared by the extraction and redaction engines."""

import re
from typing import Iterable, List, Optional

_NON_DIGITS = re.compile(r"\D+", re.ASCII)


def only_digits(value: Optional[str]) -> str:
    """Strip everything that is not an ASCII digit."""
    return _NON_DIGITS.sub("", value or "")


def unique(values: Optional[Iterable[str]]) -> List[str]:
    """Drop empty values and duplicates, keeping first-seen order."""
    return list(dict.fromkeys(v for v in (values or ()) if v))
