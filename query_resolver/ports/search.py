"""Search port - Ranked entity search backend.

The backend executes lexical or embedding similarity search. The
resolution core only decides what to look up and with which ranking
strategy; it never ranks anything itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import Entity, RankParams, Scores, SearchParams


class EntitySearcherPort(Protocol):
    """Port for ranked entity search.

    Implementation: adapters/search/memory_searcher.py

    Both operations may return an empty Scores; callers must handle it.
    Failures of the backend itself are raised as BackendUnavailable.
    """

    def instance_search(self, params: SearchParams, rank: RankParams) -> Scores:
        """Search instance entities matching a term.

        Args:
            params: Database and term to search for.
            rank: Ranking strategy and threshold.

        Returns:
            Candidates ordered by score, highest first.
        """
        ...

    def pivoted_search(
        self,
        pivot: Optional[Entity],
        params: SearchParams,
        rank: RankParams,
    ) -> Scores:
        """Search class and property entities in the neighbourhood of a pivot.

        Args:
            pivot: Context entity. None requests an unscoped search over
                every class and property entity.
            params: Database and term to search for.
            rank: Ranking strategy and threshold.

        Returns:
            Candidates ordered by score, highest first.
        """
        ...
