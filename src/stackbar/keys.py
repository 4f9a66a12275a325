# stackbar/keys.py
"""Join keys shared by chart segments and legend entries."""
from __future__ import annotations

import re
from typing import Dict, Iterable

_WHITESPACE = re.compile(r"\s")


class KeyCollisionError(ValueError):
    """Two distinct subcategories normalize to the same key."""


def normalize_key(raw) -> str:
    """
    Canonical identity for a subcategory.

    Rules: strip leading/trailing whitespace, then remove every remaining
    whitespace character. Case and punctuation are kept, so keys only match
    on exact equality of the stripped form.

    >>> normalize_key("  Kein Objekttyp ")
    'KeinObjekttyp'
    """
    return _WHITESPACE.sub("", str(raw).strip())


def build_key_map(subcategories: Iterable[str]) -> Dict[str, str]:
    """Map each raw subcategory to its key, refusing collisions."""
    key_map: Dict[str, str] = {}
    owners: Dict[str, str] = {}
    for raw in subcategories:
        key = normalize_key(raw)
        owner = owners.get(key)
        if owner is not None and owner != raw:
            raise KeyCollisionError(
                f"Subcategories '{owner}' and '{raw}' both normalize to '{key}'."
            )
        owners[key] = raw
        key_map[raw] = key
    return key_map
