"""Query builder adapters - Implementations of the QueryBuilderPort."""

from .memory_builder import InMemoryQueryBuilder

__all__ = ["InMemoryQueryBuilder"]
