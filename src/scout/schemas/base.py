"""
Pydantic models shared by the Scout engines.

Every model is frozen: an engine builds a fresh instance per call and never
mutates its inputs.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.normalize import unique
from ..errors import InputError

ENTITY_CATEGORIES = ("emails", "phones", "handles", "names")

PHASH_ALGO = "phash-dct-8x8"
PHASH_BITS = 64
PHASH_HEX_LENGTH = PHASH_BITS // 4


class RedactionMode(str, Enum):
    """How aggressively free text is masked."""

    NORMAL = "normal"
    STRICT = "strict"

    @classmethod
    def parse(cls, value: Union["RedactionMode", str, None]) -> "RedactionMode":
        """
        Resolve a mode from an enum member or a case-insensitive string.

        None resolves to STRICT. Unknown values raise InputError.
        """
        if value is None:
            return cls.STRICT
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        allowed = ", ".join(m.value for m in cls)
        raise InputError(f"Unknown redaction mode: {value!r}. Expected one of: {allowed}")


class EntitySet(BaseModel):
    """Identifiers extracted from a tip, grouped by category."""

    model_config = ConfigDict(frozen=True)

    emails: Tuple[str, ...] = ()
    phones: Tuple[str, ...] = ()
    handles: Tuple[str, ...] = ()
    names: Tuple[str, ...] = ()

    @field_validator(*ENTITY_CATEGORIES, mode="before")
    @classmethod
    def _coerce_category(cls, value: Any) -> Tuple[str, ...]:
        # Anything that is not a list of values counts as an empty category.
        if not isinstance(value, (list, tuple)):
            return ()
        return tuple(unique(str(v) for v in value if v))

    @classmethod
    def from_any(cls, value: Any) -> "EntitySet":
        """Build an EntitySet from None, an EntitySet or a loose mapping."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, dict):
            return cls()
        return cls(**{key: value.get(key) for key in ENTITY_CATEGORIES if key in value})

    @property
    def is_empty(self) -> bool:
        return not any(getattr(self, key) for key in ENTITY_CATEGORIES)

    def to_dict(self) -> Dict[str, List[str]]:
        return {key: list(getattr(self, key)) for key in ENTITY_CATEGORIES}


class RedactionResult(BaseModel):
    """Masked free text together with the masked entity set."""

    model_config = ConfigDict(frozen=True)

    safe_text: str = ""
    safe_entities: EntitySet = Field(default_factory=EntitySet)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "safe_text": self.safe_text,
            "safe_entities": self.safe_entities.to_dict(),
        }


class PerceptualHash(BaseModel):
    """64-bit DCT fingerprint of an image, serialized as 16 lowercase hex chars."""

    model_config = ConfigDict(frozen=True)

    hash: str = Field(pattern=r"^[0-9a-f]{16}$")
    algo: Literal["phash-dct-8x8"] = PHASH_ALGO
    size: Literal[64] = PHASH_BITS

    @property
    def bits(self) -> str:
        return format(int(self.hash, 16), f"0{PHASH_BITS}b")

    def distance(self, other: Union["PerceptualHash", str]) -> int:
        """Hamming distance to another fingerprint (hash object or hex string)."""
        other_hex = other.hash if isinstance(other, PerceptualHash) else str(other)
        try:
            other_value = int(other_hex, 16)
        except ValueError:
            raise InputError(f"Not a hex fingerprint: {other_hex!r}")
        return bin(int(self.hash, 16) ^ other_value).count("1")

    def to_dict(self) -> Dict[str, Any]:
        return {"hash": self.hash, "algo": self.algo, "size": self.size}


class ScanResult(BaseModel):
    """Extraction followed by redaction of a single tip."""

    model_config = ConfigDict(frozen=True)

    mode: RedactionMode
    entities: EntitySet
    safe_text: str
    safe_entities: EntitySet

    def to_dict(self, include_entities: bool = False) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "mode": self.mode.value,
            "safe_text": self.safe_text,
            "safe_entities": self.safe_entities.to_dict(),
        }
        if include_entities:
            data["entities"] = self.entities.to_dict()
        return data
