# Role: Thin HTTP adapter for the query endpoint. Validates request/response shapes and delegates the entire
# pipeline to QueryRouter (business logic lives in core, not in the API layer).

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from smart_converter.api.deps import get_query_router
from smart_converter.core.router import QueryRouter
from smart_converter.models.analysis import ProcessResult

router = APIRouter(tags=["query"])


class QueryRequest(BaseModel):
    query: str = Field(..., min_length=1)


@router.post("/query", response_model=ProcessResult)
def run_query(req: QueryRequest, query_router: QueryRouter = Depends(get_query_router)) -> ProcessResult:
    # 1) Forward the raw query to the orchestrator
    # 2) Return the full result bag (analysis, tool results, answer, step log)
    return query_router.process(req.query)


@router.get("/examples")
def examples(query_router: QueryRouter = Depends(get_query_router)) -> dict:
    return query_router.get_examples()
