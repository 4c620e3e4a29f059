# Role: Output contracts of the router: which tools a query needs, the per-tool results, the step log,
# and the final result bag returned to the presentation layer.

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from smart_converter.models.intent import Tool


class QueryAnalysis(BaseModel):
    needs_unit: bool = False
    needs_currency: bool = False
    needs_datetime: bool = False
    reasoning: str = ""

    def requested_tools(self) -> List[Tool]:
        # Key line: fixed execution order (unit, currency, datetime).
        flags = (
            (Tool.UNIT, self.needs_unit),
            (Tool.CURRENCY, self.needs_currency),
            (Tool.DATETIME, self.needs_datetime),
        )
        return [tool for tool, needed in flags if needed]


class ToolCallResult(BaseModel):
    tool: Tool
    result: Dict[str, Any]


class LogEntry(BaseModel):
    type: str
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ProcessResult(BaseModel):
    success: bool
    query: str
    analysis: Optional[QueryAnalysis] = None
    tool_results: List[ToolCallResult] = Field(default_factory=list)
    final_response: str
    error: Optional[str] = None
    steps: List[LogEntry] = Field(default_factory=list)
