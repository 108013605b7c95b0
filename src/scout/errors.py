"""Error taxonomy for Scout.

Extraction and redaction never raise on text content. Image fingerprinting
fails fast with one of the errors below.
"""


class ScoutError(Exception):
    """Base class for all Scout errors."""


class InputError(ScoutError, ValueError):
    """A required input is missing or has the wrong type."""


class DecodeError(ScoutError, ValueError):
    """Bytes could not be interpreted as a supported image."""


class UnsupportedSourceError(InputError):
    """Image reference is neither an embedded data URI nor an http(s) URL."""


__all__ = ["ScoutError", "InputError", "DecodeError", "UnsupportedSourceError"]
