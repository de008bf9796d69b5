from .cache import ThingCache
from .transaction import (
    ChangeKind,
    ThingTransaction,
    TransactionContext,
    TransactionStager,
    checkout,
    resolve_context,
)
from .store import JsonFileSession, Session, SnapshotError, SnapshotSession

__all__ = [
    "ThingCache",
    "ChangeKind",
    "ThingTransaction",
    "TransactionContext",
    "TransactionStager",
    "checkout",
    "resolve_context",
    "JsonFileSession",
    "Session",
    "SnapshotError",
    "SnapshotSession",
]
