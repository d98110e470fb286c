"""JSON query planner adapter.

Serves query plans prepared upstream and stored as JSON, keyed by the
question they answer:

    {
      "Who directed Inception?": {
        "patterns": ["I1 P1 ?VAR1"],
        "bindings": [
          {"kind": "instance", "placeholder": "I1", "term": "Inception"},
          {"kind": "property", "placeholder": "P1", "term": "director"}
        ]
      }
    }

Questions are matched case-insensitively, ignoring surrounding spaces.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from ...config import PlannerConfig, get_config
from ...domain.errors import InvalidTriplePatternError, QueryPlanError
from ...domain.models import QueryPlan


def _normalize(question: str) -> str:
    return " ".join(question.split()).casefold()


@dataclass
class JsonQueryPlanner:
    """Query planner reading plans from a JSON file.

    This adapter implements QueryPlannerPort.

    Attributes:
        config: Planner configuration (plan file location)
    """

    config: PlannerConfig = field(default_factory=lambda: get_config().planner)
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _plans: Optional[Dict[str, Dict[str, Any]]] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_path(cls, path: Path) -> JsonQueryPlanner:
        return cls(PlannerConfig(plans_file=path))

    def plan(self, question: str) -> QueryPlan:
        """Look up and parse the plan for a question.

        Raises:
            QueryPlanError: If the file cannot be read, the question is
                unknown, or its plan is malformed.
        """
        raw = self._load().get(_normalize(question))
        if raw is None:
            raise QueryPlanError(f"No plan for question '{question}'", question=question)

        try:
            plan = QueryPlan.from_dict(raw)
        except (KeyError, TypeError, InvalidTriplePatternError) as e:
            raise QueryPlanError(
                f"Malformed plan for question '{question}'", question=question, cause=e
            )

        self._logger.debug(
            "Plan loaded",
            extra={"question": question, "patterns": len(plan.patterns)},
        )
        return plan

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if self._plans is not None:
            return self._plans

        path = self.config.plans_file
        try:
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise QueryPlanError(f"Failed to read plans from {path}", cause=e)

        if not isinstance(data, dict):
            raise QueryPlanError(f"Plan file {path} must hold a JSON object")

        self._plans = {_normalize(q): p for q, p in data.items()}
        self._logger.info("Plans loaded", extra={"plans": len(self._plans)})
        return self._plans
