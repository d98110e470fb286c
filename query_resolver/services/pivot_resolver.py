"""Pivot resolver - Resolves instance bindings used as search context."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..domain.errors import BackendUnavailable, QueryResolverError, ResolutionFailure
from ..domain.models import Binding, BindingKind, Entity, RankParams, SearchParams
from ..ports.builder import QueryBuilderPort
from ..ports.search import EntitySearcherPort


@dataclass
class PivotResolver:
    """Resolves an Instance binding to the entity used as pivot.

    Memoized resolutions are returned without searching. Otherwise a
    lexical (Levenshtein) instance search runs and its top candidate is
    memoized against the binding.

    Attributes:
        searcher: Ranked entity search backend
        db_id: Database to search in
        threshold: Lexical score floor (None = backend's automatic threshold)
        limit: Maximum candidates requested per search
    """

    searcher: EntitySearcherPort
    db_id: str = "default"
    threshold: Optional[float] = None
    limit: int = 10

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def resolve(
        self, binding: Binding, builder: QueryBuilderPort
    ) -> Optional[Entity]:
        """Return a pivot for the binding, or None if it cannot be one.

        Raises:
            ResolutionFailure: If the instance search returns no candidate.
            BackendUnavailable: If the search backend fails.
        """
        solutions = builder.get_solutions(binding)
        if solutions:
            self._logger.debug(
                "Pivot memoized",
                extra={"placeholder": binding.placeholder, "entity": solutions[0].id},
            )
            return solutions[0]

        if binding.kind != BindingKind.INSTANCE:
            return None

        rank = RankParams.levenshtein(self.threshold)
        params = SearchParams(db_id=self.db_id, term=binding.term, limit=self.limit)
        try:
            scores = self.searcher.instance_search(params, rank)
        except QueryResolverError:
            raise
        except Exception as e:
            raise BackendUnavailable(
                "Instance search failed", operation="instance_search", cause=e
            ) from e

        top = scores.top()
        if top is None:
            raise ResolutionFailure(
                f"No instance found for '{binding.term}'",
                placeholder=binding.placeholder,
                term=binding.term,
                strategy=rank.strategy.value,
            )

        builder.add(binding, top.entity)
        self._logger.info(
            "Pivot resolved",
            extra={
                "placeholder": binding.placeholder,
                "term": binding.term,
                "entity": top.entity.id,
                "score": top.score,
            },
        )
        return top.entity
