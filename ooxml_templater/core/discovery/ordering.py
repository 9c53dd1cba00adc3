from __future__ import annotations

"""Processing order of classified XML parts.

Primary content is handled before charts and embedded objects so that
cross-references resolve against already-populated host content.  The
category priority is data: a sequence of tiers, each tier a group of
categories sharing one rank.  The default can be replaced through the
``processing_order`` config section without touching the sort itself.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_CATEGORY_ORDER",
    "build_priority_map",
    "priority_map_from_config",
    "sort_xml_files",
]

R = TypeVar("R")

# headerFooter, notes and drawing have no observed relative order; they share
# a tier just above "other".
DEFAULT_CATEGORY_ORDER: Sequence[Sequence[str]] = (
    ("content",),
    ("chart",),
    ("comments",),
    ("relationships",),
    ("headerFooter", "notes", "drawing"),
    ("other",),
)


def build_priority_map(tiers: Iterable[Iterable[str] | str]) -> Dict[str, int]:
    """Turn ordered tiers into a ``category -> rank`` mapping (0 sorts first).

    A bare string counts as a single-category tier.  A category listed twice
    keeps its first rank.
    """
    priority: Dict[str, int] = {}
    for rank, tier in enumerate(tiers):
        categories = (tier,) if isinstance(tier, str) else tier
        for category in categories:
            priority.setdefault(str(category), rank)
    return priority


DEFAULT_PRIORITY: Dict[str, int] = build_priority_map(DEFAULT_CATEGORY_ORDER)


def priority_map_from_config(section: Optional[Mapping[str, Any]]) -> Dict[str, int]:
    """Build the priority map from a ``processing_order`` config section.

    Falls back to :data:`DEFAULT_CATEGORY_ORDER` when ``category_order`` is
    missing or not a list.
    """
    tiers = (section or {}).get("category_order")
    if not isinstance(tiers, (list, tuple)) or not tiers:
        return dict(DEFAULT_PRIORITY)
    try:
        return build_priority_map(tiers)
    except TypeError:
        logger.warning("Invalid category_order in config, using defaults: %r", tiers)
        return dict(DEFAULT_PRIORITY)


def _field(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def sort_xml_files(records: Iterable[R], priority: Optional[Mapping[str, int]] = None) -> List[R]:
    """Return *records* in processing order.

    Sort key is ``(category rank, embedded)``: non-embedded parts come before
    embedded ones of the same category.  The sort is stable, so ties keep
    their input order, and categories missing from *priority* go last.
    The input is not modified.
    """
    ranks = DEFAULT_PRIORITY if priority is None else priority
    unknown_rank = max(ranks.values(), default=-1) + 1

    def sort_key(record: Any) -> tuple[int, int]:
        rank = ranks.get(_field(record, "category"), unknown_rank)
        return rank, 1 if _field(record, "is_embedded", False) else 0

    return sorted(records, key=sort_key)
