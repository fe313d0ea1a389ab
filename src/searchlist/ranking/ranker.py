"""Rank item texts against a live search term.

Two strategies share one contract: every target appears in the result at
most once, matches come first, and targets that matched nothing follow in
their original order with no matched positions (unless the policy asks for
matches only). Positions are 0-based offsets into the target text.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from rapidfuzz import fuzz, process
from rapidfuzz.distance import LCSseq

from .policy import RankMode, SearchPolicy


@dataclass(frozen=True)
class RankedItem:
    """An original item position and the characters that matched in it."""

    index: int
    matched_positions: Tuple[int, ...] = ()

    @property
    def matched(self) -> bool:
        return bool(self.matched_positions)

    def display_positions(self, shift: int) -> Tuple[int, ...]:
        """Positions moved right by ``shift`` columns of prepended prefix."""
        return tuple(pos + shift for pos in self.matched_positions)


def _fold(text: str) -> str:
    """Lower-case ``text`` without changing its length.

    Characters whose lower-case form is longer than one code point are kept
    as-is, so offsets into the folded text are offsets into the original.
    """
    folded = []
    for ch in text:
        lower = ch.lower()
        folded.append(lower if len(lower) == 1 else ch)
    return "".join(folded)


def _unmatched(count: int, seen: set[int]) -> List[RankedItem]:
    return [RankedItem(index=i) for i in range(count) if i not in seen]


def substring_rank(term: str, targets: Sequence[str], policy: SearchPolicy) -> List[RankedItem]:
    """Rank by first occurrence of each whitespace-separated sub-term.

    A target matches when at least one sub-term occurs in it; every offset
    spanned by each found occurrence is reported.
    """
    if not policy.case_sensitive:
        term = _fold(term)
    terms = term.split()

    matches: List[RankedItem] = []
    for idx, target in enumerate(targets):
        haystack = target if policy.case_sensitive else _fold(target)
        positions: set[int] = set()
        for sub in terms:
            start = haystack.find(sub)
            if start != -1:
                positions.update(range(start, start + len(sub)))
        if positions:
            matches.append(RankedItem(index=idx, matched_positions=tuple(sorted(positions))))

    if policy.sort_by_match_count:
        # list.sort is stable, ties keep their original relative order
        matches.sort(key=lambda r: len(r.matched_positions), reverse=policy.reverse_sort)

    if policy.matches_only:
        return matches
    return matches + _unmatched(len(targets), {r.index for r in matches})


def _aligned_positions(query: str, choice: str) -> Tuple[int, ...]:
    positions: List[int] = []
    for op in LCSseq.opcodes(query, choice):
        if op.tag == "equal":
            positions.extend(range(op.dest_start, op.dest_end))
    return tuple(positions)


def fuzzy_rank(term: str, targets: Sequence[str], policy: SearchPolicy) -> List[RankedItem]:
    """Rank with rapidfuzz's weighted ratio, best score first.

    A target matches only when every query character appears in it in
    order; matched positions are the target characters aligned with the
    query by the longest common subsequence. Score order is kept as-is; the
    match-count sort switches only apply to substring ranking.
    """
    if policy.case_sensitive:
        query, choices = term, list(targets)
    else:
        query, choices = _fold(term), [_fold(t) for t in targets]

    matches: List[RankedItem] = []
    if query.strip():
        hits = process.extract(
            query,
            choices,
            scorer=fuzz.WRatio,
            limit=None,
            score_cutoff=policy.fuzzy_score_cutoff,
        )
        # hits is a list of (choice, score, index)
        for _, _, idx in hits:
            positions = _aligned_positions(query, choices[idx])
            if len(positions) == len(query):
                matches.append(RankedItem(index=idx, matched_positions=positions))

    if policy.matches_only:
        return matches
    return matches + _unmatched(len(targets), {r.index for r in matches})


def rank(term: str, targets: Sequence[str], policy: SearchPolicy) -> List[RankedItem]:
    """Rank ``targets`` against ``term`` using the strategy ``policy`` selects."""
    if policy.mode == RankMode.FUZZY:
        return fuzzy_rank(term, targets, policy)
    return substring_rank(term, targets, policy)
