"""
Search ranking over cached items.

Scores are additive, case-insensitive substring matches:

    title contains query     +10   (+5 more if the title starts with it)
    each URL containing it    +3
    each field value          +2
    each field label          +1
    notes                     +1

Items scoring 0 are dropped; ties keep their input order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from oplauncher.op.models import Item


@dataclass
class SearchResult:
    item: Item
    score: int | None = None
    matched_fields: list[str] = field(default_factory=list)


def score_item(item: Item, needle: str) -> tuple[int, list[str]]:
    """Score one item against an already lower-cased query."""
    score = 0
    matched: list[str] = []

    title = item.title.lower()
    if needle in title:
        matched.append("title")
        score += 10
        if title.startswith(needle):
            score += 5

    for url in item.urls:
        if needle in url.href.lower():
            matched.append("url")
            score += 3

    for f in item.fields:
        if f.value and needle in f.value.lower():
            matched.append(f.label)
            score += 2
        if needle in f.label.lower():
            matched.append(f.label)
            score += 1

    notes = item.notes_plain
    if notes and needle in notes.lower():
        matched.append("notes")
        score += 1

    # dict keeps first-seen order
    return score, list(dict.fromkeys(matched))


def rank(items: Iterable[Item], query: str) -> list[SearchResult]:
    """Rank items against a free-text query, best first."""
    if not query.strip():
        return [SearchResult(item=item) for item in items]

    needle = query.lower()
    results = []
    for item in items:
        score, matched = score_item(item, needle)
        if score > 0:
            results.append(SearchResult(item=item, score=score, matched_fields=matched))

    # sorted() is stable, so equal scores keep input order
    return sorted(results, key=lambda r: -(r.score or 0))
