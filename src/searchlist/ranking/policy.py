"""Search policy: which ranking strategy runs and how it orders results."""

from dataclasses import dataclass
from enum import Enum


class RankMode(str, Enum):
    """Ranking strategy."""

    SUBSTRING = "substring"
    FUZZY = "fuzzy"


@dataclass(frozen=True)
class SearchPolicy:
    """Switches consulted by ``rank``.

    Attributes:
        mode: Substring-all-terms or library fuzzy matching
        case_sensitive: Compare without case folding
        matches_only: Drop targets that matched nothing
        sort_by_match_count: Stable-sort matches by matched character count
        reverse_sort: Sort descending instead of ascending
        fuzzy_score_cutoff: Minimum fuzzy score (0-100) for a fuzzy match
    """

    mode: RankMode = RankMode.SUBSTRING
    case_sensitive: bool = False
    matches_only: bool = False
    sort_by_match_count: bool = False
    reverse_sort: bool = False
    fuzzy_score_cutoff: float = 50.0
