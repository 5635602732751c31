from .dynamodb_transit_store import build_dynamodb_store, ensure_tables
from .memory_transit_store import build_memory_store

__all__ = [
    "build_dynamodb_store",
    "build_memory_store",
    "ensure_tables",
]
