"""Knowledge base model and CSV repository.

The knowledge base is the entity store behind the in-memory searcher:
entities (instances, classes, properties) and the triples linking them.
Triples define the neighbourhood of a pivot for scoped searches.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ...config import KnowledgeBaseConfig, get_config
from ...domain.errors import KnowledgeBaseError
from ...domain.models import Entity, EntityKind

# (subject_id, predicate_id, object_id)
KBTriple = Tuple[str, str, str]


@dataclass
class KnowledgeBase:
    """Entities indexed by id plus the triples between them."""

    entities: Dict[str, Entity] = field(default_factory=dict)
    triples: List[KBTriple] = field(default_factory=list)

    @classmethod
    def of(
        cls, entities: Iterable[Entity], triples: Iterable[KBTriple] = ()
    ) -> KnowledgeBase:
        return cls({e.id: e for e in entities}, list(triples))

    def get(self, entity_id: str) -> Optional[Entity]:
        return self.entities.get(entity_id)

    def instances(self) -> List[Entity]:
        return [e for e in self.entities.values() if e.kind == EntityKind.INSTANCE]

    def predicates(self) -> List[Entity]:
        """Every class and property entity."""
        return [e for e in self.entities.values() if e.kind != EntityKind.INSTANCE]

    def neighbourhood(self, pivot: Entity) -> List[Entity]:
        """Classes and properties linked to the pivot, in first-seen order.

        Properties come from the predicate position of every triple that
        touches the pivot; classes from the other end of those triples.
        """
        seen: Dict[str, Entity] = {}
        for s, p, o in self.triples:
            if pivot.id not in (s, o):
                continue
            other = o if s == pivot.id else s
            for entity_id in (p, other):
                entity = self.entities.get(entity_id)
                if entity is not None and entity.kind != EntityKind.INSTANCE:
                    seen.setdefault(entity.id, entity)
        return list(seen.values())


@dataclass
class CSVKnowledgeBaseRepository:
    """Loads a KnowledgeBase from CSV files.

    Files:
        entities.csv: entity_id,label,kind (kind = instance|class|property)
        triples.csv: subject_id,predicate_id,object_id

    Attributes:
        config: Knowledge base configuration (paths, file names)
    """

    config: KnowledgeBaseConfig = field(
        default_factory=lambda: get_config().knowledge_base
    )
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _kb: Optional[KnowledgeBase] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load(self) -> KnowledgeBase:
        """Load the knowledge base from CSV files.

        Raises:
            KnowledgeBaseError: If a file is missing or malformed.
        """
        if self._kb is not None:
            return self._kb

        self._logger.debug(
            "Loading knowledge base",
            extra={
                "entities_path": str(self.config.entities_path),
                "triples_path": str(self.config.triples_path),
            },
        )

        try:
            entities = self._load_entities()
        except (OSError, KeyError, ValueError) as e:
            raise KnowledgeBaseError(
                f"Failed to load entities: {e}",
                file_path=str(self.config.entities_path),
                cause=e,
            )

        try:
            triples = self._load_triples(entities)
        except (OSError, KeyError, ValueError) as e:
            raise KnowledgeBaseError(
                f"Failed to load triples: {e}",
                file_path=str(self.config.triples_path),
                cause=e,
            )

        self._kb = KnowledgeBase(entities, triples)
        self._logger.info(
            "Knowledge base loaded",
            extra={"entities": len(entities), "triples": len(triples)},
        )
        return self._kb

    def _load_entities(self) -> Dict[str, Entity]:
        entities: Dict[str, Entity] = {}
        with self.config.entities_path.open(encoding="utf-8") as f:
            reader = csv.DictReader(f)
            for row in reader:
                entity_id = (row.get("entity_id") or "").strip()
                if not entity_id:
                    continue
                label = (row.get("label") or "").strip() or entity_id
                kind = (row.get("kind") or "instance").strip().upper()
                try:
                    entity_kind = EntityKind[kind]
                except KeyError:
                    raise ValueError(f"Unknown entity kind {kind!r} for {entity_id}")
                entities[entity_id] = Entity(entity_id, label, entity_kind)
        return entities

    def _load_triples(self, entities: Dict[str, Entity]) -> List[KBTriple]:
        if not self.config.triples_path.exists():
            self._logger.warning(
                "No triples file, pivoted searches will find nothing",
                extra={"triples_path": str(self.config.triples_path)},
            )
            return []

        triples: List[KBTriple] = []
        with self.config.triples_path.open(encoding="utf-8") as f:
            reader = csv.DictReader(f)
            for row in reader:
                triple = (
                    (row.get("subject_id") or "").strip(),
                    (row.get("predicate_id") or "").strip(),
                    (row.get("object_id") or "").strip(),
                )
                if not all(triple):
                    continue
                missing = [t for t in triple if t not in entities]
                if missing:
                    raise ValueError(f"Triple references unknown entities {missing}")
                triples.append(triple)
        return triples

    def clear_cache(self) -> None:
        """Clear the cached knowledge base."""
        self._kb = None
        self._logger.debug("Knowledge base cache cleared")
