"""Typed domain errors for the Query Resolver.

Every error aborts the resolution pass that raised it: the caller gets
either a fully resolved query or one of these errors, never a partial
result.

All errors inherit from QueryResolverError and can optionally
wrap a root cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class QueryResolverError(Exception):
    """Base error for the query resolver domain.

    All domain-specific errors inherit from this class.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class UnmappedPlaceholderError(QueryResolverError):
    """A triple pattern references a placeholder missing from the bindings.

    The query plan and its binding list disagree. Never retried.

    Attributes:
        placeholder: The offending token
    """

    placeholder: str = ""


@dataclass
class InvalidTriplePatternError(QueryResolverError):
    """A triple-pattern string is not exactly three tokens.

    Attributes:
        pattern: The raw pattern text
    """

    pattern: str = ""


@dataclass
class ResolutionFailure(QueryResolverError):
    """A search that had to produce a candidate produced none.

    Attributes:
        placeholder: Placeholder of the binding being resolved
        term: The term that was searched for
        strategy: Name of the ranking strategy used
    """

    placeholder: str = ""
    term: str = ""
    strategy: str = ""


@dataclass
class BackendUnavailable(QueryResolverError):
    """The search backend itself failed.

    Propagated as-is; retry policy belongs to the backend.

    Attributes:
        operation: The backend operation that failed
    """

    operation: str = ""


@dataclass
class ResolutionStateError(QueryResolverError):
    """A binding was recorded twice in the same resolution pass.

    Attributes:
        placeholder: Placeholder of the binding
    """

    placeholder: str = ""


@dataclass
class KnowledgeBaseError(QueryResolverError):
    """Knowledge base loading or data integrity error.

    Attributes:
        file_path: Path to the data file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class QueryPlanError(QueryResolverError):
    """No usable query plan for a question.

    Attributes:
        question: The question that could not be planned
    """

    question: str = ""


@dataclass
class ConfigurationError(QueryResolverError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
