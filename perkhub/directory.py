"""
Filtering helpers behind the "All Perks" directory page.

The page fetches the public perk list once and narrows it in memory with a
name query and a merchant select. Perks are plain dicts as returned by
``GET /api/perks/all``; only ``title`` and ``merchant`` are inspected.
"""
from typing import Dict, Iterable, List, Optional

ALL_MERCHANTS = "All Merchants"


def merchant_options(perks: Iterable[Dict]) -> List[str]:
    """Values for the merchant select, "All Merchants" first."""
    merchants = {perk.get("merchant") for perk in perks if perk.get("merchant")}
    return [ALL_MERCHANTS] + sorted(merchants, key=lambda name: (name.lower(), name))


def matches_name(perk: Dict, name_query: Optional[str]) -> bool:
    query = (name_query or "").strip().lower()
    if not query:
        return True
    return query in (perk.get("title") or "").lower()


def matches_merchant(perk: Dict, merchant: Optional[str]) -> bool:
    if not merchant or merchant == ALL_MERCHANTS:
        return True
    return perk.get("merchant") == merchant


def filter_perks(
    perks: Iterable[Dict],
    name_query: Optional[str] = "",
    merchant: Optional[str] = ALL_MERCHANTS,
) -> List[Dict]:
    """Perks matching both filters, in their original order."""
    return [
        perk for perk in perks
        if matches_name(perk, name_query) and matches_merchant(perk, merchant)
    ]


def summary_text(visible: int, total: int) -> str:
    noun = "perk" if total == 1 else "perks"
    return f"Showing {visible} of {total} {noun}"
