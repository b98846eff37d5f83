# services/stores.py
"""
Per-conversation state holders.

Each holder wraps a `KeyValueStore`, so persistence, sharding or TTL
eviction can be added by swapping the store without touching the router.
"""

from abc import ABC, abstractmethod
from typing import Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from core.events import ConversationId
from core.state import IDLE, ConversationState
from models.expense import ExpenseEntry

V = TypeVar("V")


class KeyValueStore(ABC, Generic[V]):
    """
    Base contract for conversation-keyed storage.
    """

    @abstractmethod
    def get(self, key: ConversationId) -> Optional[V]:
        pass

    @abstractmethod
    def set(self, key: ConversationId, value: V) -> None:
        pass

    @abstractmethod
    def delete(self, key: ConversationId) -> None:
        pass

    @abstractmethod
    def items(self) -> Iterator[Tuple[ConversationId, V]]:
        pass


class InMemoryStore(KeyValueStore[V]):
    """Process-lifetime dict storage."""

    def __init__(self) -> None:
        self._data: Dict[ConversationId, V] = {}

    def get(self, key: ConversationId) -> Optional[V]:
        return self._data.get(key)

    def set(self, key: ConversationId, value: V) -> None:
        self._data[key] = value

    def delete(self, key: ConversationId) -> None:
        self._data.pop(key, None)

    def items(self) -> Iterator[Tuple[ConversationId, V]]:
        # Snapshot so callers may mutate while iterating
        return iter(list(self._data.items()))


# ---------------------------------------------------------------------
# Session Store
# ---------------------------------------------------------------------
class SessionStore:
    def __init__(self, store: Optional[KeyValueStore[ConversationState]] = None) -> None:
        self._store = store or InMemoryStore()

    def get(self, conversation_id: ConversationId) -> ConversationState:
        state = self._store.get(conversation_id)
        return IDLE if state is None else state

    def set(self, conversation_id: ConversationId, state: ConversationState) -> None:
        self._store.set(conversation_id, state)


# ---------------------------------------------------------------------
# Expense Ledger
# ---------------------------------------------------------------------
class ExpenseLedger:
    """
    Ordered expense entries per conversation (insertion order = chronological).
    """

    def __init__(self, store: Optional[KeyValueStore[Tuple[ExpenseEntry, ...]]] = None) -> None:
        self._store = store or InMemoryStore()

    def entries(self, conversation_id: ConversationId) -> List[ExpenseEntry]:
        return list(self._store.get(conversation_id) or ())

    def append(self, conversation_id: ConversationId, entry: ExpenseEntry) -> None:
        current = self._store.get(conversation_id) or ()
        self._store.set(conversation_id, current + (entry,))

    def clear(self, conversation_id: ConversationId) -> int:
        """Delete every entry for the conversation. Returns how many were removed."""
        removed = len(self._store.get(conversation_id) or ())
        if removed:
            self._store.delete(conversation_id)
        return removed


# ---------------------------------------------------------------------
# Goal Record
# ---------------------------------------------------------------------
class GoalRecord:
    """Latest-write-wins free-text goal per conversation."""

    def __init__(self, store: Optional[KeyValueStore[str]] = None) -> None:
        self._store = store or InMemoryStore()

    def get(self, conversation_id: ConversationId) -> Optional[str]:
        return self._store.get(conversation_id)

    def set(self, conversation_id: ConversationId, goal: str) -> None:
        self._store.set(conversation_id, goal)

    def items(self) -> Iterator[Tuple[ConversationId, str]]:
        return ((cid, goal) for cid, goal in self._store.items() if goal)
