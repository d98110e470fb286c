"""Search adapters - Implementations of the EntitySearcherPort.

Available implementations:
- CSVKnowledgeBaseRepository: Loads a KnowledgeBase from CSV files
- InMemoryEntitySearcher: Ranks knowledge-base entities in memory
"""

from .knowledge_base import CSVKnowledgeBaseRepository, KnowledgeBase
from .memory_searcher import InMemoryEntitySearcher

__all__ = ["KnowledgeBase", "CSVKnowledgeBaseRepository", "InMemoryEntitySearcher"]
