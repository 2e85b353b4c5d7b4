"""
Reforger Server - Identifier Codec

Parses and formats the string identifiers used in server configuration:

- Mission resource references: ``{ECC61978EDCC2B5A}Missions/23_Campaign.conf``
- Workshop mod references: a bare 16-hex mod id or a workshop URL
  (``https://reforger.armaplatform.com/workshop/5965550F24A0C152-WhereAmI``)
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, field_validator

from reforger.config.constants import MOD_ID_LENGTH, RESOURCE_ID_LENGTH

_RESOURCE_ID_PATTERN = re.compile(rf"^[0-9A-Fa-f]{{{RESOURCE_ID_LENGTH}}}$")
_MOD_ID_PATTERN = re.compile(rf"^[0-9A-Fa-f]{{{MOD_ID_LENGTH}}}$")
_REFERENCE_PATTERN = re.compile(r"^\{([^{}]*)\}(.*)$", re.DOTALL)


class MalformedIdentifier(ValueError):
    """Raised when an identifier string does not match its canonical format."""

    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Malformed identifier {value!r}: {reason}")


# =============================================================================
# Mission Resource References
# =============================================================================


class MissionResourceReference(BaseModel):
    """Immutable ``{resourceId}path`` pair identifying a mission resource."""

    model_config = ConfigDict(frozen=True)

    resourceId: str
    path: str

    @field_validator("resourceId")
    @classmethod
    def _canonical_resource_id(cls, v: str) -> str:
        if not _RESOURCE_ID_PATTERN.match(v):
            raise ValueError(
                f"Resource id must be exactly {RESOURCE_ID_LENGTH} hexadecimal characters"
            )
        return v.upper()

    @field_validator("path")
    @classmethod
    def _non_empty_path(cls, v: str) -> str:
        if not v:
            raise ValueError("Resource path cannot be empty")
        return v

    def __str__(self) -> str:
        return format_resource_reference(self)

    @classmethod
    def from_string(cls, text: str) -> MissionResourceReference:
        ref = parse_resource_reference(text)
        return cls(resourceId=ref.resourceId, path=ref.path)


class ScenarioId(MissionResourceReference):
    """Resource reference pointing at a scenario (.conf) file."""

    def is_valid_scenario_path(self) -> bool:
        """Check whether the path looks like a mission/scenario path"""
        lower_path = self.path.lower()
        return "mission" in lower_path or lower_path.endswith(".conf")


def parse_resource_reference(text: str) -> MissionResourceReference:
    """
    Parse a ``{RESOURCEID}path`` string.

    The hex id is matched case-insensitively and canonicalized to upper-case;
    the path is kept as written.

    Raises:
        MalformedIdentifier: braces missing, id not 16 hex chars, or empty path

    Examples:
        >>> parse_resource_reference("{ecc61978edcc2b5a}Missions/23_Campaign.conf").resourceId
        'ECC61978EDCC2B5A'
    """
    if not isinstance(text, str):
        raise MalformedIdentifier(repr(text), "expected a string")

    match = _REFERENCE_PATTERN.match(text)
    if not match:
        raise MalformedIdentifier(text, "expected format {RESOURCE_ID}path")

    resource_id, path = match.groups()
    if not _RESOURCE_ID_PATTERN.match(resource_id):
        raise MalformedIdentifier(
            text, f"resource id must be exactly {RESOURCE_ID_LENGTH} hexadecimal characters"
        )
    if not path:
        raise MalformedIdentifier(text, "resource path cannot be empty")

    return MissionResourceReference(resourceId=resource_id, path=path)


def format_resource_reference(ref: MissionResourceReference) -> str:
    """Render a reference in canonical ``{RESOURCEID}path`` form."""
    return f"{{{ref.resourceId}}}{ref.path}"


def is_valid_resource_reference(text: str) -> bool:
    try:
        parse_resource_reference(text)
    except MalformedIdentifier:
        return False
    return True


# =============================================================================
# Workshop Mod References
# =============================================================================


def is_valid_mod_id(mod_id: str) -> bool:
    """
    Check that a mod id is exactly 16 hexadecimal characters.

    Examples:
        >>> is_valid_mod_id("5965550F24A0C152")
        True
        >>> is_valid_mod_id("1234")
        False
    """
    return isinstance(mod_id, str) and bool(_MOD_ID_PATTERN.match(mod_id))


def parse_mod_reference(text: str) -> str | None:
    """
    Extract a mod id from a bare token or a workshop URL.

    Accepts a bare 16-hex token, or a URL whose final path segment is
    ``{modId}`` or ``{modId}-{anything}``. The suffix is discarded unchecked.

    Returns:
        Upper-case mod id, or None for any other shape

    Examples:
        >>> parse_mod_reference("https://reforger.armaplatform.com/workshop/5965550F24A0C152-WhereAmI")
        '5965550F24A0C152'
        >>> parse_mod_reference("1234") is None
        True
    """
    if not isinstance(text, str):
        return None

    candidate = text.strip()
    if not candidate:
        return None

    if "/" in candidate:
        path = urlsplit(candidate).path if "://" in candidate else candidate
        segment = path.rstrip("/").rsplit("/", 1)[-1]
        token = segment.split("-", 1)[0]
    else:
        token = candidate

    return token.upper() if is_valid_mod_id(token) else None


def mod_reference_suffix(text: str) -> str | None:
    """Return the ``-suffix`` part of a workshop URL's final segment, if any."""
    if not isinstance(text, str) or "/" not in text:
        return None
    path = urlsplit(text.strip()).path if "://" in text else text.strip()
    segment = path.rstrip("/").rsplit("/", 1)[-1]
    if "-" not in segment:
        return None
    return segment.split("-", 1)[1] or None
