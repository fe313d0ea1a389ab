"""Search list configuration: Pydantic model and JSON file loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import commentjson
from pydantic import BaseModel, ConfigDict, Field, PositiveInt, ValidationError

from ..errors import ConfigError
from ..ranking.policy import RankMode, SearchPolicy
from ..util.log import Log
from .global_paths import GlobalPath

log = Log.create({"service": "core.config"})


class SearchListConfig(BaseModel):
    """Construction-time settings for a search list.

    ``multi_select`` is reserved: selection is tracked regardless.
    """

    width: PositiveInt = 80
    height: PositiveInt = 20
    multi_select: bool = False
    sort_by_match_count: bool = Field(False, alias="sortByMatchCount")
    reverse_sort: bool = Field(False, alias="reverseSort")
    case_sensitive: bool = Field(False, alias="caseSensitive")
    matches_only: bool = Field(False, alias="matchesOnly")
    fuzzy: bool = False
    fuzzy_score_cutoff: float = Field(50.0, ge=0, le=100, alias="fuzzyScoreCutoff")
    show_description: bool = Field(True, alias="showDescription")
    prompt: str = "🔍: "

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    def policy(self) -> SearchPolicy:
        """Build the ranking policy these settings describe."""
        return SearchPolicy(
            mode=RankMode.FUZZY if self.fuzzy else RankMode.SUBSTRING,
            case_sensitive=self.case_sensitive,
            matches_only=self.matches_only,
            sort_by_match_count=self.sort_by_match_count,
            reverse_sort=self.reverse_sort,
            fuzzy_score_cutoff=self.fuzzy_score_cutoff,
        )


def _format_validation_error(error: ValidationError) -> str:
    lines = []
    for item in error.errors():
        where = ".".join(str(part) for part in item.get("loc", ())) or "<root>"
        lines.append(f"{where}: {item.get('msg', 'invalid value')}")
    return "\n".join(lines)


def parse_config(data: Any, source: str = "<config>") -> SearchListConfig:
    """Validate a mapping into a config, raising ConfigError on failure."""
    if not isinstance(data, dict):
        raise ConfigError(source, "expected a JSON object")
    try:
        return SearchListConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(source, _format_validation_error(e)) from e


def load_config(path: Optional[Path] = None, **overrides: Any) -> SearchListConfig:
    """Load settings from a JSON file (comments allowed) and apply keyword overrides.

    Without ``path`` the user config file is read when it exists; a missing
    default file yields the built-in defaults. An explicitly given file must
    exist.
    """
    explicit = path is not None
    target = Path(path) if explicit else GlobalPath.config_file()

    data: dict[str, Any] = {}
    if target.exists():
        try:
            data = commentjson.loads(target.read_text(encoding="utf-8"))
        except (OSError, ValueError, commentjson.JSONLibraryException) as e:
            raise ConfigError(str(target), str(e)) from e
        log.debug("config loaded", {"path": str(target)})
    elif explicit:
        raise ConfigError(str(target), "file not found")

    config = parse_config(data, str(target))
    if not overrides:
        return config
    merged = {**config.model_dump(), **overrides}
    return parse_config(merged, str(target))
