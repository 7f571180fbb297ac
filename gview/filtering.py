"""File-list filtering in partial, fuzzy, and regular-expression modes.

``filter_items`` is pure; the sentinels below travel through the normal
path list so the file list can show "nothing matched" and "bad pattern"
without a second channel.
"""

from __future__ import annotations

import re
from enum import Enum

NOT_FOUND_SENTINEL = "not found"
REGEX_ERROR_SENTINEL = "error"


class FilterMode(Enum):
    PARTIAL = "partial"
    FUZZY = "fuzzy"
    REGEX = "regex"

    def next(self) -> FilterMode:
        return _MODE_CYCLE[(_MODE_CYCLE.index(self) + 1) % len(_MODE_CYCLE)]

    def previous(self) -> FilterMode:
        return _MODE_CYCLE[(_MODE_CYCLE.index(self) - 1) % len(_MODE_CYCLE)]

    @property
    def title(self) -> str:
        return _MODE_TITLES[self]


_MODE_CYCLE: tuple[FilterMode, ...] = (FilterMode.PARTIAL, FilterMode.FUZZY, FilterMode.REGEX)
_MODE_TITLES: dict[FilterMode, str] = {
    FilterMode.PARTIAL: "Partial Match",
    FilterMode.FUZZY: "Fuzzy Search",
    FilterMode.REGEX: "Regular Search",
}


def fuzzy_score(query: str, candidate: str) -> int | None:
    """Score ``candidate`` as a case-insensitive subsequence match of ``query``.

    Contiguous runs and matches at path/word boundaries score higher, gaps
    cost points, and longer candidates lose a little. Returns ``None`` when
    ``query`` is not a subsequence of ``candidate``.
    """
    if not query:
        return 0
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()

    score = 0
    prev_idx = -1
    run = 0
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate_folded[idx - 1] in "/_- .":
            score += 35
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return score


def pattern_error(query: str) -> str | None:
    """Return why ``query`` is not a valid regular expression, or ``None``."""
    try:
        re.compile(query)
    except re.error as exc:
        return str(exc)
    return None


def filter_items(items: list[str], query: str, mode: FilterMode) -> list[str]:
    """Return the items matching ``query`` under ``mode``.

    An empty query matches everything in every mode. An invalid regular
    expression yields ``[REGEX_ERROR_SENTINEL]``.
    """
    if mode is FilterMode.PARTIAL:
        return [item for item in items if not query or query in item]

    if mode is FilterMode.FUZZY:
        scored: list[tuple[int, str]] = []
        for item in items:
            score = fuzzy_score(query, item)
            if score is not None:
                scored.append((score, item))
        # sorted() is stable, so equal scores keep input order.
        scored = sorted(scored, key=lambda pair: -pair[0])
        return [item for _score, item in scored]

    try:
        pattern = re.compile(query)
    except re.error:
        return [REGEX_ERROR_SENTINEL]
    return [item for item in items if pattern.search(item) is not None]
