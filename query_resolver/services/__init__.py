"""Services layer - Resolution components and orchestration.

Available services:
- QueryResolverService: Drives a resolution pass over a query plan
- BindingMapper: Maps placeholder tokens to typed bindings
- PivotResolver: Resolves instance bindings used as context
- PredicateResolver: Resolves classes and properties around a pivot
"""

from .binding_mapper import BindingMapper
from .pivot_resolver import PivotResolver
from .predicate_resolver import PredicateResolver
from .query_resolver import QueryResolverService

__all__ = [
    "QueryResolverService",
    "BindingMapper",
    "PivotResolver",
    "PredicateResolver",
]
