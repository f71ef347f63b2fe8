"""Translation history storage."""

from .store import HistoryEntry, HistoryStore, SQLHistoryStore, now_ms

__all__ = ["HistoryEntry", "HistoryStore", "SQLHistoryStore", "now_ms"]
