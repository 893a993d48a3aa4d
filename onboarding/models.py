"""Data model for the contact onboarding pipeline."""

import re
from dataclasses import dataclass
from enum import Enum

# Returned by name resolution when no source yields a name.
UNKNOWN_NAME = "unknown"

_NON_PHONE_CHARS = re.compile(r"[^\d+]")


class NameSource(str, Enum):
    """Places a display name can be read from, in lookup order."""

    HEADER = "header"
    CONTACT_INFO = "contact_info"


DEFAULT_NAME_LOOKUP_ORDER: tuple[NameSource, ...] = (
    NameSource.HEADER,
    NameSource.CONTACT_INFO,
)


@dataclass(frozen=True)
class Identifier:
    """A phone number exactly as it appeared in the input list."""

    raw: str

    @property
    def normalized(self) -> str:
        """
        Digits with an optional leading "+" country-code marker.

        "+1 (555) 010-2030" -> "+15550102030". A "+" anywhere but the
        first position is dropped.
        """
        stripped = _NON_PHONE_CHARS.sub("", self.raw)
        if not stripped:
            return ""
        head, tail = stripped[0], stripped[1:].replace("+", "")
        return head + tail if head == "+" else stripped.replace("+", "")

    @property
    def is_well_formed(self) -> bool:
        return any(ch.isdigit() for ch in self.normalized)

    def __str__(self) -> str:
        return self.raw


@dataclass
class LookupResult:
    """Outcome of running the pipeline for one identifier."""

    phone: str
    name: str | None = None
    present: bool = False
    enrolled: bool = False

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "phone": self.phone,
            "present": self.present,
            "enrolled": self.enrolled,
        }
