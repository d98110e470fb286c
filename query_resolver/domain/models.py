"""Immutable domain models for the Query Resolver.

All models are frozen dataclasses with slots. These models have no
external dependencies and represent the core concepts of query
resolution: placeholders and their bindings, triple patterns, ranked
search results and the finalized query.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Iterable, Mapping, Optional, Sequence

from .errors import InvalidTriplePatternError, QueryResolverError


class BindingKind(Enum):
    """Structural role of a placeholder in a query plan.

    Determines whether and how the placeholder is resolved.
    """

    VARIABLE = auto()
    TYPE = auto()
    INSTANCE = auto()
    CLASS = auto()
    PROPERTY = auto()

    @property
    def is_predicate(self) -> bool:
        """Classes and properties are resolved against a pivot."""
        return self in (BindingKind.CLASS, BindingKind.PROPERTY)


@dataclass(frozen=True, slots=True)
class Binding:
    """A typed placeholder from a query plan.

    Attributes:
        kind: Structural role of the placeholder
        placeholder: Identifier used in the triple-pattern strings
        term: Source text to search for
    """

    kind: BindingKind
    placeholder: str
    term: str

    def __str__(self) -> str:
        return f"{self.placeholder}<{self.kind.name}:{self.term}>"


@dataclass(frozen=True, slots=True)
class TriplePattern:
    """An ordered (subject, predicate, object) triple of placeholder tokens."""

    subject: str
    predicate: str
    object: str

    @classmethod
    def parse(cls, text: str) -> TriplePattern:
        """Parse a whitespace-separated "subject predicate object" string.

        Raises:
            InvalidTriplePatternError: If the text is not exactly three tokens.
        """
        tokens = text.split()
        if len(tokens) != 3:
            raise InvalidTriplePatternError(
                f"Expected 3 tokens in triple pattern, got {len(tokens)}",
                pattern=text,
            )
        return cls(*tokens)

    @property
    def tokens(self) -> tuple[str, str, str]:
        return (self.subject, self.predicate, self.object)

    def __str__(self) -> str:
        return " ".join(self.tokens)


@dataclass(frozen=True, slots=True)
class Triple:
    """A triple pattern with every token substituted by its Binding."""

    subject: Binding
    predicate: Binding
    object: Binding

    @property
    def bindings(self) -> tuple[Binding, Binding, Binding]:
        return (self.subject, self.predicate, self.object)


class EntityKind(Enum):
    """Kind of entity stored in the knowledge base."""

    INSTANCE = auto()
    CLASS = auto()
    PROPERTY = auto()


@dataclass(frozen=True, slots=True)
class Entity:
    """A concrete knowledge-base entity.

    Attributes:
        id: Unique entity identifier (e.g., 'dbr:Inception')
        label: Human-readable label used for matching
        kind: Instance, class or property
    """

    id: str
    label: str
    kind: EntityKind = EntityKind.INSTANCE


@dataclass(frozen=True, slots=True)
class RankedCandidate:
    """A search hit with its ranking score (higher is better)."""

    entity: Entity
    score: float


@dataclass(frozen=True, slots=True)
class Scores:
    """Search result, ordered by score, highest first.

    Ties keep the order the backend produced them in.
    """

    candidates: tuple[RankedCandidate, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.candidates, key=lambda c: c.score, reverse=True))
        object.__setattr__(self, "candidates", ordered)

    @classmethod
    def of(cls, candidates: Iterable[RankedCandidate]) -> Scores:
        return cls(tuple(candidates))

    def top(self) -> Optional[RankedCandidate]:
        """Return the rank-0 candidate, or None when nothing matched."""
        return self.candidates[0] if self.candidates else None

    def entities(self) -> list[Entity]:
        return [c.entity for c in self.candidates]

    def __len__(self) -> int:
        return len(self.candidates)

    def __bool__(self) -> bool:
        return bool(self.candidates)


class RankStrategy(Enum):
    """Ranking strategy requested from the search backend."""

    LEVENSHTEIN = "levenshtein"
    WORD2VEC = "word2vec"


@dataclass(frozen=True, slots=True)
class RankParams:
    """Ranking parameters for a search call.

    Attributes:
        strategy: Lexical or semantic ranking
        threshold: Minimum score to keep a candidate (None = automatic)
    """

    strategy: RankStrategy
    threshold: Optional[float] = None

    @property
    def is_auto_threshold(self) -> bool:
        return self.threshold is None

    @classmethod
    def levenshtein(cls, threshold: Optional[float] = None) -> RankParams:
        return cls(RankStrategy.LEVENSHTEIN, threshold)

    @classmethod
    def word2vec(cls, threshold: Optional[float] = None) -> RankParams:
        return cls(RankStrategy.WORD2VEC, threshold)


@dataclass(frozen=True, slots=True)
class SearchParams:
    """What to search for and where."""

    db_id: str
    term: str
    limit: int = 10


@dataclass(frozen=True, slots=True)
class QueryPlan:
    """Ordered triple patterns plus the bindings they reference.

    Pattern order is significant: later patterns may rely on bindings
    resolved by earlier ones.
    """

    patterns: tuple[TriplePattern, ...]
    bindings: tuple[Binding, ...] = field(default_factory=tuple)

    @classmethod
    def from_strings(
        cls, patterns: Sequence[str], bindings: Sequence[Binding] = ()
    ) -> QueryPlan:
        return cls(
            patterns=tuple(TriplePattern.parse(p) for p in patterns),
            bindings=tuple(bindings),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QueryPlan:
        """Build a plan from its JSON form.

        Example:
            {"patterns": ["?VAR1 P1 ?VAR2"],
             "bindings": [{"kind": "property", "placeholder": "P1",
                           "term": "director"}]}

        Raises:
            TypeError: If the plan, a binding or a pattern has the wrong shape.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"Plan must be a JSON object, got {type(data).__name__}")
        patterns = data.get("patterns", [])
        raw_bindings = data.get("bindings", [])
        if not all(isinstance(p, str) for p in patterns):
            raise TypeError("Plan patterns must be strings")
        if not all(isinstance(b, Mapping) for b in raw_bindings):
            raise TypeError("Plan bindings must be JSON objects")

        bindings = [
            Binding(
                kind=BindingKind[str(b["kind"]).upper()],
                placeholder=b["placeholder"],
                term=b["term"],
            )
            for b in raw_bindings
        ]
        return cls.from_strings(patterns, bindings)


@dataclass(frozen=True, slots=True)
class MappingResult:
    """Result of mapping a placeholder token to a Binding.

    Exactly one of binding or error is set.
    """

    binding: Optional[Binding] = None
    error: Optional[QueryResolverError] = None

    @property
    def is_success(self) -> bool:
        return self.error is None and self.binding is not None


@dataclass(frozen=True)
class ResolvedQuery:
    """The finalized query produced at the end of a resolution pass.

    Attributes:
        triples: Resolved triples, in plan order
        solutions: Entity chosen for every searched binding
    """

    triples: tuple[Triple, ...]
    solutions: Mapping[Binding, Entity] = field(default_factory=dict)

    def entity_for(self, binding: Binding) -> Optional[Entity]:
        return self.solutions.get(binding)

    def render(self) -> str:
        """Render one line per triple.

        Resolved bindings are shown by entity id, structural placeholders
        as-is.
        """
        lines = []
        for triple in self.triples:
            terms = []
            for binding in triple.bindings:
                entity = self.solutions.get(binding)
                terms.append(entity.id if entity else binding.placeholder)
            lines.append(" ".join(terms) + " .")
        return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class ResolutionOutcome:
    """Outcome of one resolution pass: a query or the error that stopped it.

    Attributes:
        query: The finalized query on success
        error: The first error encountered
        patterns_processed: Number of patterns fully resolved before stopping
    """

    query: Optional[ResolvedQuery] = None
    error: Optional[QueryResolverError] = None
    patterns_processed: int = 0

    @property
    def is_success(self) -> bool:
        return self.error is None and self.query is not None

    def unwrap(self) -> ResolvedQuery:
        """Return the query, or raise the error that aborted the pass."""
        if self.error is not None:
            raise self.error
        assert self.query is not None
        return self.query
