"""Query builder port - Owner of the resolution state.

The builder records which entity every binding resolved to during one
pass and assembles the final query once all patterns are processed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Binding, Entity, ResolvedQuery, Triple


class QueryBuilderPort(Protocol):
    """Port for the query builder collaborator.

    Implementation: adapters/builder/memory_builder.py

    A builder holds at most one resolution per binding and lives for a
    single resolution pass.
    """

    def is_resolved(self, binding: Binding) -> bool:
        """Check whether the binding already has a resolution."""
        ...

    def get_solutions(self, binding: Binding) -> Optional[Sequence[Entity]]:
        """Return prior resolutions of the binding, best first, or None."""
        ...

    def add(self, binding: Binding, entity: Entity) -> None:
        """Record the entity chosen for a binding."""
        ...

    def build(self, triples: Sequence[Triple]) -> ResolvedQuery:
        """Finalize the query from the resolved triples."""
        ...
