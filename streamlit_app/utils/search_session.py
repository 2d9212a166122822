"""
State of the home screen and its current AI search.

SearchSession replaces loose per-screen variables with explicit transitions:
- start(query): begin a search; a different query drops earlier exclusions and results
- exclude(names): append rejected recipe names to the exclusion set
- clear(): back to favorites mode; in-flight requests become stale
- begin_request() / is_current(token): only the latest request may apply its result
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class SearchSession:
    """
    One search context: the query, its exclusion set and the suggestions shown.

    Attributes:
        query: Current free-text request ("" when not searching)
        excluded: Ordered, cumulative list of rejected recipe names
        suggestions: Client-side suggested recipes (see favorites_sync.to_client_recipe)
        generation: Incremented by every request and by clear()
    """
    query: str = ""
    excluded: List[str] = field(default_factory=list)
    suggestions: List[Dict[str, Any]] = field(default_factory=list)
    generation: int = 0

    @property
    def active(self) -> bool:
        return bool(self.query.strip())

    def start(self, query: str) -> None:
        if query != self.query:
            self.excluded = []
            self.suggestions = []
        self.query = query

    def exclude(self, names: List[str]) -> None:
        self.excluded.extend(names)

    def clear(self) -> None:
        self.query = ""
        self.excluded = []
        self.suggestions = []
        self.generation += 1

    def begin_request(self) -> int:
        self.generation += 1
        return self.generation

    def is_current(self, token: int) -> bool:
        return token == self.generation


@dataclass
class HomeState:
    """Everything the home screen renders."""
    favorites: List[Dict[str, Any]] = field(default_factory=list)
    search: SearchSession = field(default_factory=SearchSession)
    error: str = ""
    loading: bool = False
    searching: bool = False
