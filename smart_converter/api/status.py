# Role: Read-mostly transparency endpoints for the UI: agent status and conversation history.
# The only write is clearing history; no flow logic lives here.

from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from smart_converter.api.deps import get_query_router
from smart_converter.core.router import QueryRouter
from smart_converter.models.message import Message

router = APIRouter(tags=["status"])


class ToolsLoaded(BaseModel):
    unit_converter: bool
    currency_converter: bool
    datetime_helper: bool


class StatusSnapshot(BaseModel):
    is_configured: bool
    has_api_key: bool
    configuration_error: str | None
    model_name: str
    history_length: int
    tools_loaded: ToolsLoaded


class HistorySnapshot(BaseModel):
    messages: List[Message]


@router.get("/status", response_model=StatusSnapshot)
def get_status(query_router: QueryRouter = Depends(get_query_router)) -> StatusSnapshot:
    return StatusSnapshot(**query_router.get_status())


@router.get("/history", response_model=HistorySnapshot)
def get_history(query_router: QueryRouter = Depends(get_query_router)) -> HistorySnapshot:
    return HistorySnapshot(messages=query_router.context.snapshot())


@router.post("/history/clear", response_model=HistorySnapshot)
def clear_history(query_router: QueryRouter = Depends(get_query_router)) -> HistorySnapshot:
    query_router.clear_history()
    return HistorySnapshot(messages=[])
