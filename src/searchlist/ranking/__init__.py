"""Match ranking for the search list."""

from .policy import RankMode, SearchPolicy
from .ranker import RankedItem, fuzzy_rank, rank, substring_rank

__all__ = [
    "RankMode",
    "RankedItem",
    "SearchPolicy",
    "fuzzy_rank",
    "rank",
    "substring_rank",
]
