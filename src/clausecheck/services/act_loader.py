"""
Loader for the Indian Contract Act, 1872.

Parses a local copy of the Act (PDF or text) into sections and stores them
in the knowledge database, where they back the statute reference listing.
"""

import re
from functools import lru_cache
from pathlib import Path

import structlog

from clausecheck.models.knowledge import ActSection
from clausecheck.services.contract_loader import ContractLoader, get_contract_loader
from clausecheck.storage.knowledge_db import KnowledgeDatabase, get_knowledge_database

logger = structlog.get_logger(__name__)

# "Section 27. Agreement in restraint of trade void", dot or dash separated
SECTION_HEADING = re.compile(r"Section\s+(\d+[A-Za-z]?)\s*[.\u2014]\s*([^\n]+)", re.IGNORECASE)

CHARS_PER_PAGE = 2000
SUMMARY_LENGTH = 200


def summarize(text: str) -> str:
    """Leading excerpt of a section, flattened to one line."""
    return text[:SUMMARY_LENGTH].replace("\n", " ").strip() + "..."


def extract_sections(text: str) -> list[ActSection]:
    """Split the Act's text into sections at each "Section N." heading."""
    matches = list(SECTION_HEADING.finditer(text))
    sections = []

    for i, match in enumerate(matches):
        start = match.start()
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        section_text = text[start:end].strip()

        sections.append(
            ActSection(
                section_number=f"Section {match.group(1).strip()}",
                section_title=match.group(2).strip(),
                full_text=section_text,
                summary=summarize(section_text),
                page_number=start // CHARS_PER_PAGE + 1,
            )
        )

    return sections


class ActLoader:
    """Parses the Act and writes its sections to the knowledge store."""

    def __init__(
        self,
        loader: ContractLoader | None = None,
        database: KnowledgeDatabase | None = None,
    ):
        self.loader = loader or get_contract_loader()
        self.database = database or get_knowledge_database()

    def load(self, path: Path | str) -> int:
        """Parse the Act at path and store its sections. Returns the count stored."""
        document = self.loader.load_file(path)
        sections = extract_sections(document.text)

        logger.info(
            "act_parsed",
            file=str(path),
            pages=document.metadata.page_count,
            characters=document.metadata.character_count,
            sections=len(sections),
        )

        if not sections:
            return 0
        return self.database.upsert_act_sections(sections)


@lru_cache()
def get_act_loader() -> ActLoader:
    """Get cached act loader instance."""
    return ActLoader()
