"""In-memory query builder.

Holds the resolution state of a single pass. A new builder is created
for every pass and discarded afterwards; nothing persists across
queries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ...domain.errors import ResolutionStateError
from ...domain.models import Binding, Entity, ResolvedQuery, Triple


@dataclass
class InMemoryQueryBuilder:
    """Query builder keeping one resolution per binding.

    This adapter implements QueryBuilderPort. It is not thread-safe:
    a pass is single-threaded and owns its builder.
    """

    _solutions: Dict[Binding, List[Entity]] = field(default_factory=dict, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def is_resolved(self, binding: Binding) -> bool:
        return binding in self._solutions

    def get_solutions(self, binding: Binding) -> Optional[Sequence[Entity]]:
        solutions = self._solutions.get(binding)
        return list(solutions) if solutions is not None else None

    def add(self, binding: Binding, entity: Entity) -> None:
        """Record the entity chosen for a binding.

        Raises:
            ResolutionStateError: If the binding is already resolved.
        """
        if binding in self._solutions:
            raise ResolutionStateError(
                f"Binding '{binding.placeholder}' is already resolved",
                placeholder=binding.placeholder,
            )
        self._solutions[binding] = [entity]
        self._logger.debug(
            "Solution recorded",
            extra={"placeholder": binding.placeholder, "entity": entity.id},
        )

    def build(self, triples: Sequence[Triple]) -> ResolvedQuery:
        return ResolvedQuery(
            triples=tuple(triples),
            solutions={b: entities[0] for b, entities in self._solutions.items()},
        )

    def __len__(self) -> int:
        return len(self._solutions)
