"""
Reforger Server - Mod References

Builds mod entries from workshop URLs and converts between the plain and
URL-carrying mod views.
"""

import logging
from collections.abc import Iterable

from reforger.config.models import Mod, ModExtended
from reforger.core.identifiers import mod_reference_suffix, parse_mod_reference
from reforger.utils.text_utils import build_workshop_url as _build_url

logger = logging.getLogger(__name__)


def effective_mod_name(mod: Mod) -> str:
    """Display name for messages: the mod name, or its id when unnamed"""
    return mod.name or mod.modId


def build_workshop_url(mod: Mod) -> str:
    """Workshop URL for a mod entry"""
    return _build_url(mod.modId, mod.name)


def create_extended_mod(mod: Mod) -> ModExtended:
    """Wrap a mod entry with its derived workshop URL"""
    if isinstance(mod, ModExtended):
        return mod
    return ModExtended.model_validate(mod.model_dump(exclude_none=True))


def to_base_mod(mod: Mod) -> Mod:
    """Strip derived fields, keeping only the stored mod attributes"""
    return Mod.model_validate(mod.model_dump(exclude={"url"}, exclude_none=True))


def mod_from_url(url: str) -> ModExtended | None:
    """
    Create a mod entry from a workshop URL or bare mod id.

    The URL suffix after the id becomes the mod name.

    Returns:
        ModExtended, or None when the reference is not recognised
    """
    mod_id = parse_mod_reference(url)
    if mod_id is None:
        return None
    return ModExtended(modId=mod_id, name=mod_reference_suffix(url))


def extended_mod_list_from_urls(urls: Iterable[str]) -> list[ModExtended]:
    """Bulk import: unrecognised references are skipped, order is preserved"""
    mods: list[ModExtended] = []
    skipped = 0

    for url in urls or []:
        if mod := mod_from_url(url):
            mods.append(mod)
        else:
            skipped += 1

    if skipped:
        logger.info("Skipped %d unrecognised mod reference(s)", skipped)
    return mods


def mod_list_from_urls(urls: Iterable[str]) -> list[Mod]:
    """Same as extended_mod_list_from_urls, returning plain mod entries"""
    return [to_base_mod(mod) for mod in extended_mod_list_from_urls(urls)]
