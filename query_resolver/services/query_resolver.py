"""Query resolver service - Main orchestrator.

Drives one resolution pass over a query plan: every triple pattern is
mapped to bindings, a pivot is resolved from its subject (or object),
and the predicate is resolved around that pivot. Memoized resolutions
in the query builder are the only channel between patterns, so patterns
are processed strictly in plan order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..config import SearchConfig
from ..domain.errors import QueryPlanError, QueryResolverError, UnmappedPlaceholderError
from ..domain.models import (
    QueryPlan,
    ResolutionOutcome,
    ResolvedQuery,
    Triple,
)
from ..ports.builder import QueryBuilderPort
from ..ports.planner import QueryPlannerPort
from ..ports.search import EntitySearcherPort
from .binding_mapper import BindingMapper
from .pivot_resolver import PivotResolver
from .predicate_resolver import PredicateResolver

BuilderFactory = Callable[[], QueryBuilderPort]


@dataclass
class QueryResolverService:
    """Main service for resolving query plans.

    Attributes:
        pivot_resolver: Resolves subject/object instances
        predicate_resolver: Resolves classes and properties
        builder_factory: Creates a fresh query builder for every pass
        planner: Optional question-to-plan collaborator used by answer()
    """

    pivot_resolver: PivotResolver
    predicate_resolver: PredicateResolver
    builder_factory: BuilderFactory
    planner: Optional[QueryPlannerPort] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_searcher(
        cls,
        searcher: EntitySearcherPort,
        builder_factory: BuilderFactory,
        config: Optional[SearchConfig] = None,
        planner: Optional[QueryPlannerPort] = None,
    ) -> QueryResolverService:
        """Wire both resolvers on the same search backend."""
        config = config or SearchConfig()
        return cls(
            pivot_resolver=PivotResolver(
                searcher,
                db_id=config.db_id,
                threshold=config.lexical_threshold,
                limit=config.max_results,
            ),
            predicate_resolver=PredicateResolver(
                searcher,
                db_id=config.db_id,
                threshold=config.semantic_threshold,
                limit=config.max_results,
                allow_pivotless_search=config.allow_pivotless_search,
            ),
            builder_factory=builder_factory,
            planner=planner,
        )

    def run(self, plan: QueryPlan, builder: QueryBuilderPort) -> ResolutionOutcome:
        """Run one resolution pass, stopping at the first failure.

        Args:
            plan: Ordered triple patterns and their bindings.
            builder: Resolution state for this pass.

        Returns:
            ResolutionOutcome with the built query, or the error that
            stopped the pass. A failed pass never carries a query.
        """
        self._logger.info(
            "Starting query resolution",
            extra={"patterns": len(plan.patterns), "bindings": len(plan.bindings)},
        )
        mapper = BindingMapper(plan.bindings)
        triples: List[Triple] = []

        for index, pattern in enumerate(plan.patterns):
            self._logger.debug("Resolving pattern", extra={"pattern": str(pattern)})

            mapped = mapper.to_triple(pattern)
            if isinstance(mapped, UnmappedPlaceholderError):
                return self._failed(mapped, index)

            try:
                self._resolve_triple(mapped, builder)
            except QueryResolverError as e:
                return self._failed(e, index)
            triples.append(mapped)

        try:
            query = builder.build(triples)
        except QueryResolverError as e:
            return self._failed(e, len(triples))

        self._logger.info(
            "Query resolved",
            extra={"triples": len(query.triples), "solutions": len(query.solutions)},
        )
        return ResolutionOutcome(query=query, patterns_processed=len(triples))

    def resolve(self, plan: QueryPlan) -> ResolvedQuery:
        """Resolve a plan with a fresh builder.

        Raises:
            UnmappedPlaceholderError: If a pattern uses an unknown placeholder.
            ResolutionFailure: If a required search returns nothing.
            BackendUnavailable: If the search backend fails.
        """
        return self.run(plan, self.builder_factory()).unwrap()

    def resolve_safe(
        self, plan: QueryPlan
    ) -> tuple[Optional[ResolvedQuery], Optional[str]]:
        """Resolve a plan, returning an error message instead of raising.

        Returns:
            Tuple of (ResolvedQuery or None, error message or None).
        """
        outcome = self.run(plan, self.builder_factory())
        if outcome.error is not None:
            return None, f"Error: {outcome.error}"
        return outcome.query, None

    def answer(self, question: str) -> ResolvedQuery:
        """Plan a question with the planner collaborator, then resolve it.

        Raises:
            QueryPlanError: If no planner is configured or it cannot plan.
        """
        if self.planner is None:
            raise QueryPlanError("No query planner configured", question=question)
        plan = self.planner.plan(question)
        return self.resolve(plan)

    def _resolve_triple(self, triple: Triple, builder: QueryBuilderPort) -> None:
        pivot = self.pivot_resolver.resolve(triple.subject, builder)
        if pivot is None:
            pivot = self.pivot_resolver.resolve(triple.object, builder)
        self.predicate_resolver.resolve(pivot, triple.predicate, builder)

    def _failed(self, error: QueryResolverError, index: int) -> ResolutionOutcome:
        self._logger.warning(
            "Query resolution aborted",
            extra={"error": str(error), "patterns_processed": index},
        )
        return ResolutionOutcome(error=error, patterns_processed=index)
