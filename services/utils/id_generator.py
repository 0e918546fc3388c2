"""ID generation utilities."""

from __future__ import annotations
import re
from typing import Iterable

_TR_FOLD = str.maketrans("çğıöşüÇĞİÖŞÜ", "cgiosuCGIOSU")


def slugify(text: str) -> str:
    """
    Convert text to an ID-safe slug.

    Turkish letters are folded to ASCII first so that
    'Kaşarlı Tost' -> 'kasarli_tost'.

    Examples:
        'Tavuk Dürüm' -> 'tavuk_durum'
        'store 12.5' -> 'store_12_5'
    """
    text = (text or "").strip().translate(_TR_FOLD).lower()
    text = re.sub(r"[^a-z0-9]+", "_", text)
    text = re.sub(r"_+", "_", text).strip("_")
    return text or "item"


def generate_unique_id(base: str, existing_ids: Iterable[str]) -> str:
    """
    Generate unique ID from base string.

    Args:
        base: Base string to slugify
        existing_ids: IDs already present in the document

    Returns:
        Unique slug (may have _2, _3 suffix if needed)
    """
    existing = set(existing_ids)
    slug = slugify(base)

    if slug not in existing:
        return slug

    counter = 2
    while f"{slug}_{counter}" in existing:
        counter += 1

    return f"{slug}_{counter}"
