"""Top-level package for the Query Resolver project.

This package turns an abstract query plan (placeholder triple patterns
plus typed bindings) into a concrete graph query by looking every
unresolved placeholder up in a ranked entity-search backend, threading
resolved entities as pivots into the lookups that follow.
"""

__version__ = "0.1.0"
