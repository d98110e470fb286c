"""Planner port - Natural-language analysis boundary.

Turning a question into triple patterns and bindings happens upstream;
this port is the only place the resolver touches it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import QueryPlan


class QueryPlannerPort(Protocol):
    """Port for query planning.

    Implementation: adapters/planner/json_planner.py
    """

    def plan(self, question: str) -> QueryPlan:
        """Produce the query plan for a question.

        Raises:
            QueryPlanError: If the question cannot be planned.
        """
        ...
