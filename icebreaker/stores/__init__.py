"""Data stores for persistence and caching.

Stores handle:
- Record storage: memory or PostgreSQL adapters behind RecordStore
- Redis: caching of derived aggregates

No business logic in stores (validation, ordering, averages) - that belongs in services.
"""

from icebreaker.stores.base import QuestionRecord, RatingRecord, RecordStore
from icebreaker.stores.memory import MemoryStore

__all__ = ["MemoryStore", "QuestionRecord", "RatingRecord", "RecordStore"]
