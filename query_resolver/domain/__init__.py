"""Domain layer - Core resolution models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    BackendUnavailable,
    ConfigurationError,
    InvalidTriplePatternError,
    KnowledgeBaseError,
    QueryPlanError,
    QueryResolverError,
    ResolutionFailure,
    ResolutionStateError,
    UnmappedPlaceholderError,
)
from .models import (
    Binding,
    BindingKind,
    Entity,
    EntityKind,
    MappingResult,
    QueryPlan,
    RankedCandidate,
    RankParams,
    RankStrategy,
    ResolutionOutcome,
    ResolvedQuery,
    Scores,
    SearchParams,
    Triple,
    TriplePattern,
)

__all__ = [
    # Models
    "BindingKind",
    "Binding",
    "TriplePattern",
    "Triple",
    "EntityKind",
    "Entity",
    "RankedCandidate",
    "Scores",
    "RankStrategy",
    "RankParams",
    "SearchParams",
    "QueryPlan",
    "MappingResult",
    "ResolvedQuery",
    "ResolutionOutcome",
    # Errors
    "QueryResolverError",
    "UnmappedPlaceholderError",
    "InvalidTriplePatternError",
    "ResolutionFailure",
    "BackendUnavailable",
    "ResolutionStateError",
    "KnowledgeBaseError",
    "QueryPlanError",
    "ConfigurationError",
]
