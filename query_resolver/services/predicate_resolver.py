"""Predicate resolver - Resolves classes and properties around a pivot."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..domain.errors import BackendUnavailable, QueryResolverError, ResolutionFailure
from ..domain.models import Binding, Entity, RankParams, Scores, SearchParams
from ..ports.builder import QueryBuilderPort
from ..ports.search import EntitySearcherPort


@dataclass
class PredicateResolver:
    """Resolves a Class or Property binding, scoped by a pivot entity.

    Uses the semantic (word2vec) ranking strategy so that a term such as
    "director" lands on the property that fits the pivot's neighbourhood.

    Attributes:
        searcher: Ranked entity search backend
        db_id: Database to search in
        threshold: Semantic score floor (None = backend default)
        limit: Maximum candidates requested per search
        allow_pivotless_search: Whether a missing pivot falls back to an
            unscoped search (True) or fails the pass (False)
    """

    searcher: EntitySearcherPort
    db_id: str = "default"
    threshold: Optional[float] = None
    limit: int = 10
    allow_pivotless_search: bool = True

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def resolve(
        self,
        pivot: Optional[Entity],
        binding: Binding,
        builder: QueryBuilderPort,
    ) -> None:
        """Resolve and memoize the binding; no-op when nothing to search.

        Raises:
            ResolutionFailure: If the search returns no candidate, or the
                pivot is missing and pivotless search is disabled.
            BackendUnavailable: If the search backend fails.
        """
        if not binding.kind.is_predicate or builder.is_resolved(binding):
            return

        rank = RankParams.word2vec(self.threshold)
        params = SearchParams(db_id=self.db_id, term=binding.term, limit=self.limit)

        if pivot is None:
            if not self.allow_pivotless_search:
                raise ResolutionFailure(
                    f"No pivot available to resolve '{binding.term}'",
                    placeholder=binding.placeholder,
                    term=binding.term,
                    strategy=rank.strategy.value,
                )
            self._logger.warning(
                "Pivotless predicate search",
                extra={"placeholder": binding.placeholder, "term": binding.term},
            )

        scores = self._search(pivot, params, rank)
        top = scores.top()
        if top is None:
            raise ResolutionFailure(
                f"No {binding.kind.name.lower()} found for '{binding.term}'",
                placeholder=binding.placeholder,
                term=binding.term,
                strategy=rank.strategy.value,
            )

        builder.add(binding, top.entity)
        self._logger.info(
            "Predicate resolved",
            extra={
                "placeholder": binding.placeholder,
                "term": binding.term,
                "pivot": pivot.id if pivot else None,
                "entity": top.entity.id,
                "score": top.score,
            },
        )

    def _search(
        self, pivot: Optional[Entity], params: SearchParams, rank: RankParams
    ) -> Scores:
        try:
            return self.searcher.pivoted_search(pivot, params, rank)
        except QueryResolverError:
            raise
        except Exception as e:
            raise BackendUnavailable(
                "Pivoted search failed", operation="pivoted_search", cause=e
            ) from e
