from skillquest.learning_core.repository.key_value_store import InMemoryKeyValueStore, KeyValueStore
from skillquest.learning_core.repository.roadmap_repository import RoadmapRepository
from skillquest.learning_core.repository.token_ledger import InMemoryTokenLedger, TokenLedger

__all__ = [
    "InMemoryKeyValueStore",
    "InMemoryTokenLedger",
    "KeyValueStore",
    "RoadmapRepository",
    "TokenLedger",
]
