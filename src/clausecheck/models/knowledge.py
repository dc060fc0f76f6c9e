"""
Knowledge models: violation patterns, fair-practice baselines and statute sections.

Everything here is read-only during an analysis run. Keyword payloads are
validated once, at construction, so the matching loop only ever sees a
clean tuple of lower-case strings.
"""

import json
from enum import Enum
from typing import Any, Literal

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = structlog.get_logger(__name__)

DEFAULT_SOURCE_URL = "https://www.indiacode.nic.in/bitstream/123456789/2187/2/A187209.pdf"


class RiskLevel(str, Enum):
    """Severity attached to a violation pattern."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


def normalize_keywords(value: Any) -> tuple[str, ...]:
    """
    Coerce a raw keyword payload into an ordered set of lower-case strings.

    Accepts a list/tuple of strings or a JSON-encoded list of strings.
    Anything else yields an empty tuple, which makes the pattern inert.
    """
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            logger.warning("pattern_keywords_unparseable", payload=value[:80])
            return ()

    if not isinstance(value, (list, tuple)):
        logger.warning("pattern_keywords_invalid", payload_type=type(value).__name__)
        return ()

    if not all(isinstance(kw, str) for kw in value):
        logger.warning("pattern_keywords_non_string")
        return ()

    keywords: list[str] = []
    for kw in value:
        kw = kw.strip().lower()
        if kw and kw not in keywords:
            keywords.append(kw)
    return tuple(keywords)


class Pattern(BaseModel):
    """A named rule linking keyword evidence to a statutory violation."""

    model_config = ConfigDict(frozen=True)

    violation_type: str
    keywords: tuple[str, ...] = ()
    risk_level: RiskLevel
    risk_score: int = Field(..., gt=0)
    section_number: str
    section_title: str
    section_full_text: str
    description: str
    source_url: str = DEFAULT_SOURCE_URL

    @field_validator("keywords", mode="before")
    @classmethod
    def parse_keywords(cls, v: Any) -> tuple[str, ...]:
        return normalize_keywords(v)


class PatternSet(BaseModel):
    """A versioned, immutable collection of patterns in evaluation order."""

    model_config = ConfigDict(frozen=True)

    version: str
    patterns: tuple[Pattern, ...]


class FairBaseline(BaseModel):
    """What "normal" looks like for one deviation category."""

    model_config = ConfigDict(frozen=True)

    category: str
    fair_standard: str


class KnowledgeSnapshot(BaseModel):
    """
    The pattern and baseline tables bound to a single analysis run.

    Exactly one pattern source is active: either the external store or the
    built-in default set, never a merge of both.
    """

    model_config = ConfigDict(frozen=True)

    patterns: tuple[Pattern, ...]
    baselines: tuple[FairBaseline, ...] = ()
    source: Literal["database", "default"] = "default"
    version: str = ""


class ActSection(BaseModel):
    """A parsed section of the Indian Contract Act."""

    model_config = ConfigDict(frozen=True)

    section_number: str
    section_title: str
    full_text: str
    summary: str
    page_number: int
    chapter: str | None = None
