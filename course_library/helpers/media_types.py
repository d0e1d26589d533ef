"""Parsing of Accept and Content-Type header values."""

import re
from dataclasses import dataclass
from typing import Optional

_TOKEN = r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+"
_MEDIA_TYPE_RE = re.compile(rf"^\s*({_TOKEN})/({_TOKEN})\s*(;.*)?$")

HATEOAS_MARKER = "hateoas"


@dataclass(frozen=True)
class MediaType:
    type: str
    subtype: str

    @property
    def subtype_without_suffix(self) -> str:
        """``vnd.marvin.author.full+json`` -> ``vnd.marvin.author.full``."""
        return self.subtype.split("+", 1)[0]

    @property
    def essence(self) -> str:
        return f"{self.type}/{self.subtype}"

    @property
    def includes_links(self) -> bool:
        return self.subtype_without_suffix.endswith(HATEOAS_MARKER)

    @property
    def primary_subtype(self) -> str:
        """Subtype without suffix and without a trailing ``.hateoas`` marker."""
        subtype = self.subtype_without_suffix
        if self.includes_links:
            subtype = subtype[: -len(HATEOAS_MARKER)].rstrip(".")
        return subtype


def parse_media_type(value: Optional[str]) -> Optional[MediaType]:
    """Parse a single media type, ignoring parameters. ``None`` if malformed."""
    if value is None:
        return None
    match = _MEDIA_TYPE_RE.match(value)
    if match is None:
        return None
    return MediaType(match.group(1).lower(), match.group(2).lower())
