"""In-memory entity searcher.

Ranks knowledge-base entities without an external search engine:
- Levenshtein strategy: rapidfuzz normalized edit-distance similarity
- Word2vec strategy: cosine similarity of an injected embedding function,
  or rapidfuzz token-set similarity when no embedding is configured

Scores are in (0, 1] for both strategies. A candidate with no similarity
to the term is never returned, so an unrelated term yields empty Scores.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np
from rapidfuzz import fuzz, process, utils
from rapidfuzz.distance import Levenshtein

from ...config import SearchConfig
from ...domain.errors import BackendUnavailable
from ...domain.models import (
    Entity,
    RankedCandidate,
    RankParams,
    RankStrategy,
    Scores,
    SearchParams,
)
from .knowledge_base import KnowledgeBase

Embedder = Callable[[str], Sequence[float]]


@dataclass
class InMemoryEntitySearcher:
    """Entity searcher over a loaded KnowledgeBase.

    This adapter implements EntitySearcherPort.

    Attributes:
        knowledge_base: Entities and triples to search
        config: Search configuration (database id, automatic threshold)
        embed: Optional text embedding function for the word2vec strategy

    Example:
        searcher = InMemoryEntitySearcher(kb, SearchConfig(db_id="movies"))
        scores = searcher.instance_search(
            SearchParams("movies", "Inceptoin"), RankParams.levenshtein()
        )
    """

    knowledge_base: KnowledgeBase
    config: SearchConfig = field(default_factory=SearchConfig)
    embed: Optional[Embedder] = None

    _vectors: Dict[str, np.ndarray] = field(default_factory=dict, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def instance_search(self, params: SearchParams, rank: RankParams) -> Scores:
        self._check_db(params, "instance_search")
        return self._rank(self.knowledge_base.instances(), params, rank)

    def pivoted_search(
        self,
        pivot: Optional[Entity],
        params: SearchParams,
        rank: RankParams,
    ) -> Scores:
        self._check_db(params, "pivoted_search")
        if pivot is None:
            candidates = self.knowledge_base.predicates()
        else:
            candidates = self.knowledge_base.neighbourhood(pivot)
        self._logger.debug(
            "Pivoted search",
            extra={
                "pivot": pivot.id if pivot else None,
                "term": params.term,
                "scope": len(candidates),
            },
        )
        return self._rank(candidates, params, rank)

    def _check_db(self, params: SearchParams, operation: str) -> None:
        if params.db_id != self.config.db_id:
            raise BackendUnavailable(
                f"Unknown database '{params.db_id}'", operation=operation
            )

    def _rank(
        self, candidates: List[Entity], params: SearchParams, rank: RankParams
    ) -> Scores:
        if not candidates:
            return Scores()

        if rank.strategy == RankStrategy.LEVENSHTEIN:
            threshold = (
                self.config.auto_threshold if rank.is_auto_threshold else rank.threshold
            )
            ranked = self._fuzzy(
                candidates, params, Levenshtein.normalized_similarity, 1.0, threshold
            )
        elif self.embed is None:
            ranked = self._fuzzy(
                candidates, params, fuzz.token_set_ratio, 100.0, rank.threshold
            )
        else:
            ranked = self._cosine(candidates, params, rank.threshold)

        self._logger.debug(
            "Candidates ranked",
            extra={
                "term": params.term,
                "strategy": rank.strategy.value,
                "hits": len(ranked),
            },
        )
        return Scores.of(ranked)

    def _fuzzy(
        self,
        candidates: List[Entity],
        params: SearchParams,
        scorer: Callable[..., float],
        scale: float,
        threshold: Optional[float],
    ) -> List[RankedCandidate]:
        choices = {e.id: e.label for e in candidates}
        matches = process.extract(
            params.term,
            choices,
            scorer=scorer,
            processor=utils.default_process,
            limit=params.limit,
            score_cutoff=threshold * scale if threshold is not None else None,
        )
        by_id = {e.id: e for e in candidates}
        return [
            RankedCandidate(by_id[key], float(score) / scale)
            for _label, score, key in matches
            if score > 0
        ]

    def _cosine(
        self,
        candidates: List[Entity],
        params: SearchParams,
        threshold: Optional[float],
    ) -> List[RankedCandidate]:
        query = self._embed(params.term)
        matrix = np.stack([self._vector_for(e) for e in candidates])
        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
        with np.errstate(divide="ignore", invalid="ignore"):
            sims = np.where(norms > 0, matrix @ query / norms, 0.0)

        order = np.argsort(-sims, kind="stable")[: params.limit]
        return [
            RankedCandidate(candidates[i], float(sims[i]))
            for i in order
            if sims[i] > 0 and (threshold is None or sims[i] >= threshold)
        ]

    def _vector_for(self, entity: Entity) -> np.ndarray:
        vector = self._vectors.get(entity.id)
        if vector is None:
            vector = self._embed(entity.label)
            self._vectors[entity.id] = vector
        return vector

    def _embed(self, text: str) -> np.ndarray:
        assert self.embed is not None
        try:
            return np.asarray(self.embed(text), dtype=float)
        except Exception as e:
            raise BackendUnavailable(
                "Embedding failed", operation="embed", cause=e
            ) from e
