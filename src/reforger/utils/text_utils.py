"""
Text processing utilities for Reforger server configuration.

Common text operations like secret masking and workshop URL building.
"""

import re

from reforger.config.constants import URL_NAME_MAX_LENGTH, WORKSHOP_BASE_URL


def mask_secret(secret: str) -> str:
    """
    Mask a secret for display (show first and last char only).

    Args:
        secret: Password or token to mask

    Returns:
        Masked secret (e.g., "a***e" for "alice")

    Examples:
        >>> mask_secret("alice")
        'a***e'
        >>> mask_secret("ab")
        '**'
        >>> mask_secret("")
        ''
    """
    if len(secret) > 2:
        return secret[0] + "*" * (len(secret) - 2) + secret[-1]
    return "*" * len(secret)


def sanitize_url_name(name: str) -> str:
    """
    Reduce a mod name to the characters allowed in a workshop URL slug.

    Examples:
        >>> sanitize_url_name("Where Am I?!")
        'WhereAmI'
    """
    cleaned = re.sub(r"[^a-zA-Z0-9\s]", "", name)
    cleaned = re.sub(r"\s+", "", cleaned)
    return cleaned[:URL_NAME_MAX_LENGTH]


def build_workshop_url(mod_id: str, name: str | None = None) -> str:
    """
    Build Reforger Workshop URL for a mod ID.

    Only the id before the dash is significant; the slug is cosmetic.

    Args:
        mod_id: Workshop mod ID
        name: Optional mod name used for the URL slug

    Returns:
        Full Reforger Workshop URL

    Examples:
        >>> build_workshop_url("5965550F24A0C152", "Where Am I")
        'https://reforger.armaplatform.com/workshop/5965550F24A0C152-WhereAmI'
    """
    slug = sanitize_url_name(name) if name else ""
    return f"{WORKSHOP_BASE_URL}/{mod_id}-{slug or 'mod'}"
