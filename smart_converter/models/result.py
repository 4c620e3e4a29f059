# Role: Calculator output contract. Every calculator returns a ConversionResult instead of raising, so the
# router always gets a value: success + JSON-safe domain fields + formatted line, or failure + error + inputs.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ConversionResult:
    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    formatted: Optional[str] = None
    error: Optional[str] = None
    # Key line: matched=False means "the query is not this tool's domain" (extraction miss), not a failure.
    matched: bool = True

    @classmethod
    def ok(cls, formatted: str, **data: Any) -> "ConversionResult":
        return cls(success=True, data=data, formatted=formatted)

    @classmethod
    def fail(cls, error: str, **inputs: Any) -> "ConversionResult":
        return cls(success=False, data=inputs, error=error)

    @classmethod
    def no_match(cls, error: str, query: str) -> "ConversionResult":
        return cls(success=False, data={"query": query}, error=error, matched=False)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"success": self.success, **self.data}
        if self.success:
            out["formatted"] = self.formatted
        else:
            out["error"] = self.error
        return out
