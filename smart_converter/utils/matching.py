# Role: Shared "narrow, then match" machinery for the extractors. Each extractor declares an ordered tuple of
# portion patterns plus an ordered tuple of (pattern, builder) rules; evaluation stops at the first success.

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Optional, Sequence, Tuple, TypeVar

import smart_converter.config as config

T = TypeVar("T")

# Numbers like "5", "2.5", "1,000", "10,000.50".
NUMBER = r"\d+(?:[,.]\d+)*"


@dataclass(frozen=True)
class MatchRule(Generic[T]):
    name: str
    pattern: "re.Pattern[str]"
    build: Callable[["re.Match[str]"], Optional[T]]


def compile_all(patterns: Iterable[str]) -> Tuple["re.Pattern[str]", ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


def parse_number(raw: str) -> float:
    # Key line: grouping separators are stripped before parsing ("1,000" -> 1000).
    return float(raw.replace(",", ""))


def narrow(query: str, portion_patterns: Sequence["re.Pattern[str]"]) -> str:
    """
    Isolate the part of a mixed query that belongs to one domain.
    The first portion pattern found in the query wins; with no hit the query is returned unchanged.
    """
    for pattern in portion_patterns:
        m = pattern.search(query)
        if m:
            return m.group(0)
    return query


def first_match(
    texts: Sequence[str],
    rules: Sequence[MatchRule[T]],
    label: str = "",
) -> Optional[T]:
    # 1) For each candidate text (narrowed first, then original)
    # 2) Try each rule in declared order, over every occurrence in the text
    # 3) Return the first non-None build result
    for text in texts:
        for rule in rules:
            for m in rule.pattern.finditer(text):
                built = rule.build(m)
                if built is not None:
                    if config.DEBUG:
                        print(f"[{label or 'extractor'}] matched rule '{rule.name}' on: {text!r} -> {built}")
                    return built
    return None


def narrow_then_match(
    query: str,
    portion_patterns: Sequence["re.Pattern[str]"],
    rules: Sequence[MatchRule[T]],
    label: str = "",
) -> Optional[T]:
    if not query or not query.strip():
        return None
    narrowed = narrow(query, portion_patterns)
    texts = [narrowed] if narrowed == query else [narrowed, query]
    return first_match(texts, rules, label=label)
