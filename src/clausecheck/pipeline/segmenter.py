"""
Clause Segmenter

Splits raw contract text into an ordered sequence of clauses. Structured
signals are trusted first: numbered clauses, then all-caps section
headers, then blank-line paragraphs. Only one strategy's output is used.
"""

import re

import structlog

from clausecheck.models.clause import Clause

logger = structlog.get_logger(__name__)

# "1. ..." or "1.2. ..." up to the next numbered line; whitespace matching
# stays within a line so blank-line runs are scanned once
NUMBERED_CLAUSE = re.compile(
    r"^[ \t]*(\d+\.(?:\d+\.?)?)\s+([^\n]+(?:\n(?![ \t]*\d+\.)[^\n]*)*)",
    re.MULTILINE,
)

# "PAYMENT TERMS: ..." up to the next header line
SECTION_HEADER = re.compile(
    r"^[ \t]*([A-Z][A-Z \t]{3,}:)\s+([^\n]+(?:\n(?![A-Z][A-Z \t]{3,}:)[^\n]*)*)",
    re.MULTILINE,
)

PARAGRAPH_BREAK = re.compile(r"\n\n+")

MIN_STRATEGY_MATCHES = 4
MIN_PARAGRAPH_LENGTH = 50


class ClauseSegmenter:
    """Precision-first clause segmentation."""

    def segment(self, text: str) -> list[Clause]:
        """Split text into clauses with sequential ids and positions."""
        if not text:
            return []

        text = text.replace("\r\n", "\n")

        strategy = "numbered"
        fragments = self._match_all(NUMBERED_CLAUSE, text)

        if len(fragments) < MIN_STRATEGY_MATCHES:
            strategy = "headers"
            fragments = self._match_all(SECTION_HEADER, text)

        if len(fragments) < MIN_STRATEGY_MATCHES:
            strategy = "paragraphs"
            fragments = self._split_paragraphs(text)

        clauses = [
            Clause(id=position + 1, text=fragment, position=position)
            for position, fragment in enumerate(fragments)
        ]

        logger.debug("text_segmented", strategy=strategy, clauses=len(clauses))
        return clauses

    def _match_all(self, pattern: re.Pattern[str], text: str) -> list[str]:
        fragments = []
        for match in pattern.finditer(text):
            fragment = match.group(0).strip()
            if fragment:
                fragments.append(fragment)
        return fragments

    def _split_paragraphs(self, text: str) -> list[str]:
        return [
            p.strip()
            for p in PARAGRAPH_BREAK.split(text)
            if len(p.strip()) >= MIN_PARAGRAPH_LENGTH
        ]


def segment(text: str) -> list[Clause]:
    """Module-level convenience wrapper."""
    return ClauseSegmenter().segment(text)
