# Role: Explicitly owned per-process context. Holds the exchange-rate cache and the bounded conversation
# history that the router passes to the LLM; dropping the context discards both.
# The API serves sync routes from a threadpool against one context, so history reads/writes take a lock.

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional

import smart_converter.config as config
from smart_converter.core.rate_cache import RateCache
from smart_converter.models.message import Message


class SessionContext:
    def __init__(
        self,
        max_history_exchanges: Optional[int] = None,
        rate_cache: Optional[RateCache] = None,
    ) -> None:
        exchanges = max_history_exchanges if max_history_exchanges is not None else config.history_max_exchanges()
        # One exchange = user query + model answer.
        self._max_history_messages = max(0, exchanges) * 2
        self.rate_cache = rate_cache or RateCache(ttl_minutes=config.rate_cache_ttl_minutes())
        self.history: List[Message] = []
        self.created_at = datetime.now(timezone.utc)
        self.updated_at = self.created_at
        self._lock = threading.Lock()

    def add_exchange(self, query: str, answer: str) -> None:
        # 1) Append user + model messages (as one unit, so pairs never interleave)
        # 2) Update last-seen timestamp
        # 3) Trim to the most recent N entries (keeps prompts small + bounded memory)
        with self._lock:
            self.history.append(Message(role="user", content=query))
            self.history.append(Message(role="model", content=answer))
            self.updated_at = datetime.now(timezone.utc)

            if len(self.history) > self._max_history_messages:
                self.history = self.history[-self._max_history_messages :] if self._max_history_messages else []

    def recent_messages(self) -> List[Dict[str, str]]:
        # Role: compact history format for prompts.
        with self._lock:
            return [{"role": m.role, "content": m.content} for m in self.history]

    def snapshot(self) -> List[Message]:
        with self._lock:
            return list(self.history)

    def clear_history(self) -> None:
        with self._lock:
            self.history = []
            self.updated_at = datetime.now(timezone.utc)
