"""searchlist - filterable multi-select list for Textual apps."""

__version__ = "0.1.0"

from .core.config import SearchListConfig, load_config
from .ranking import RankedItem, RankMode, SearchPolicy, rank

__all__ = [
    "__version__",
    "RankMode",
    "RankedItem",
    "SearchListConfig",
    "SearchPolicy",
    "load_config",
    "rank",
]
