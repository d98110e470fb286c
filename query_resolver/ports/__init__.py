"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the resolution core and its
collaborators. They enable dependency injection and make the
resolution algorithm testable against fakes.

This module follows the Hexagonal Architecture pattern:
- Input ports: How the application is driven (services)
- Output ports: How the application drives external systems (adapters)
"""

from .builder import QueryBuilderPort
from .planner import QueryPlannerPort
from .search import EntitySearcherPort

__all__ = [
    # Search
    "EntitySearcherPort",
    # Query building
    "QueryBuilderPort",
    # Planning
    "QueryPlannerPort",
]
