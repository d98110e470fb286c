"""Shared fixtures: a recording fake search backend and sample entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import pytest

from query_resolver.adapters.builder import InMemoryQueryBuilder
from query_resolver.adapters.search import KnowledgeBase
from query_resolver.config import SearchConfig
from query_resolver.domain.models import (
    Entity,
    EntityKind,
    RankedCandidate,
    RankParams,
    Scores,
    SearchParams,
)
from query_resolver.services import QueryResolverService

INCEPTION = Entity("dbr:Inception", "Inception")
NOLAN = Entity("dbr:Christopher_Nolan", "Christopher Nolan")
DIRECTOR = Entity("dbo:director", "director", EntityKind.PROPERTY)
COMPOSER = Entity("dbo:musicComposer", "music composer", EntityKind.PROPERTY)
BIRTH_PLACE = Entity("dbo:birthPlace", "birth place", EntityKind.PROPERTY)
FILM = Entity("dbo:Film", "film", EntityKind.CLASS)


def _scores(entities: List[Entity]) -> Scores:
    return Scores.of(
        RankedCandidate(e, 1.0 - i * 0.1) for i, e in enumerate(entities)
    )


@dataclass
class RecordingSearcher:
    """Fake EntitySearcherPort returning canned results and recording calls.

    instance_results: term -> entities, best first
    pivoted_results: (pivot id or None, term) -> entities, best first
    """

    instance_results: Dict[str, List[Entity]] = field(default_factory=dict)
    pivoted_results: Dict[Tuple[Optional[str], str], List[Entity]] = field(
        default_factory=dict
    )
    calls: List[tuple] = field(default_factory=list)

    def instance_search(self, params: SearchParams, rank: RankParams) -> Scores:
        self.calls.append(("instance", params.term, rank))
        return _scores(self.instance_results.get(params.term, []))

    def pivoted_search(
        self, pivot: Optional[Entity], params: SearchParams, rank: RankParams
    ) -> Scores:
        pivot_id = pivot.id if pivot else None
        self.calls.append(("pivoted", pivot_id, params.term, rank))
        return _scores(self.pivoted_results.get((pivot_id, params.term), []))

    def terms(self) -> List[str]:
        return [call[-2] for call in self.calls]


@pytest.fixture
def searcher() -> RecordingSearcher:
    return RecordingSearcher(
        instance_results={
            "Inception": [INCEPTION],
            "Christopher Nolan": [NOLAN],
        },
        pivoted_results={
            ("dbr:Inception", "director"): [DIRECTOR, COMPOSER],
            ("dbr:Christopher_Nolan", "director"): [DIRECTOR],
            ("dbr:Christopher_Nolan", "birth place"): [BIRTH_PLACE],
            (None, "director"): [DIRECTOR],
            (None, "film"): [FILM],
        },
    )


@pytest.fixture
def builder() -> InMemoryQueryBuilder:
    return InMemoryQueryBuilder()


@pytest.fixture
def service(searcher: RecordingSearcher) -> QueryResolverService:
    return QueryResolverService.from_searcher(searcher, InMemoryQueryBuilder)


@pytest.fixture
def movie_kb() -> KnowledgeBase:
    london = Entity("dbr:London", "London")
    type_ = Entity("rdf:type", "type", EntityKind.PROPERTY)
    person = Entity("dbo:Person", "person", EntityKind.CLASS)
    return KnowledgeBase.of(
        [INCEPTION, NOLAN, london, DIRECTOR, COMPOSER, BIRTH_PLACE, FILM, type_, person],
        [
            ("dbr:Inception", "dbo:director", "dbr:Christopher_Nolan"),
            ("dbr:Inception", "rdf:type", "dbo:Film"),
            ("dbr:Christopher_Nolan", "dbo:birthPlace", "dbr:London"),
            ("dbr:Christopher_Nolan", "rdf:type", "dbo:Person"),
        ],
    )


@pytest.fixture
def search_config() -> SearchConfig:
    return SearchConfig(db_id="movies")
