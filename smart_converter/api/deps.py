# Role: Process-wide singletons for the HTTP layer. One QueryRouter (and so one SessionContext: rate cache +
# history) lives for the app's lifetime; routes receive it through a FastAPI dependency.

from __future__ import annotations

from functools import lru_cache

from smart_converter.core.router import QueryRouter


@lru_cache(maxsize=1)
def get_query_router() -> QueryRouter:
    return QueryRouter()
