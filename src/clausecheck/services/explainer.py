"""
Explanation service.

Turns structured violations into plain-language prose using the LLM
service. The analysis core never depends on this: if a provider is
missing or a response cannot be parsed, the caller substitutes the
violation's own description and a generic impact statement.
"""

from functools import lru_cache
from typing import Sequence

import structlog

from clausecheck.config import get_settings
from clausecheck.models.analysis import Violation
from clausecheck.models.api import Explanation, ExplanationRequest
from clausecheck.services.llm_service import LLMService, get_llm_service

logger = structlog.get_logger(__name__)

FALLBACK_SIMPLE = "This clause matches a pattern that conflicts with the Indian Contract Act."

FALLBACK_IMPACT = (
    "This clause may put you at a significant disadvantage. "
    "Consider negotiating better terms."
)

LANGUAGE_NAMES = {"en": "English", "hi": "Hindi"}

SYSTEM_PROMPT = """You explain freelance contract clauses to people without legal training.

CONTEXT:
- The Indian Contract Act, 1872 applies, not US or UK law.
- Example: non-compete clauses are void in India under Section 27.

RULES:
- Use everyday language, no legal jargon.
- Be specific about the practical impact on the freelancer's income and freedom.
- Cite the section of the Act.
- Keep each field to 2-3 sentences.

Return ONLY a JSON object with the keys "simpleExplanation" and "realLifeImpact"."""


def fallback_explanation(violation: Violation) -> Explanation:
    """Explanation used whenever the collaborator cannot produce one."""
    simple = (
        violation.explanation.strip()
        or f"{violation.section_number} {violation.section_title}".strip()
        or FALLBACK_SIMPLE
    )
    return Explanation(
        simple_explanation=simple,
        real_life_impact=FALLBACK_IMPACT,
        generated_by="fallback",
    )


def build_request(violation: Violation, language: str = "en") -> ExplanationRequest:
    """Expose only what the explanation collaborator is allowed to see."""
    return ExplanationRequest(
        clause_text=violation.clause_text,
        violation_type=violation.violation_type,
        section_full_text=violation.section_full_text,
        language=language,
    )


class ExplanationService:
    """LLM-backed explanation collaborator."""

    def __init__(self, llm: LLMService | None = None):
        self._llm = llm
        self.settings = get_settings()

    @property
    def llm(self) -> LLMService:
        if self._llm is None:
            self._llm = get_llm_service()
        return self._llm

    @property
    def enabled(self) -> bool:
        return self.settings.explanations_enabled and self.llm.available

    def explain(self, request: ExplanationRequest) -> Explanation:
        """
        Explain one violation.

        Raises on any failure; callers are expected to fall back.
        """
        user_prompt = f"""CLAUSE FROM CONTRACT ({request.violation_type}):
"{request.clause_text[:1500]}"

RELEVANT SECTION OF THE ACT:
{request.section_full_text[:800]}

Write the explanation in {LANGUAGE_NAMES[request.language]}.

Return JSON:
{{"simpleExplanation": "...", "realLifeImpact": "..."}}"""

        response, model = self.llm.generate(SYSTEM_PROMPT, user_prompt)
        data = self.llm.parse_json(response)
        if not isinstance(data, dict):
            raise ValueError("Explanation response did not contain a JSON object")

        explanation = Explanation(
            simple_explanation=str(data.get("simpleExplanation", "")).strip(),
            real_life_impact=str(data.get("realLifeImpact", "")).strip(),
            generated_by=model,
        )
        logger.debug("explanation_generated", violation_type=request.violation_type, model=model)
        return explanation

    def explain_violations(
        self,
        violations: Sequence[Violation],
        language: str | None = None,
    ) -> list[Explanation]:
        """
        One explanation per violation, in order, with mandatory fallback.

        Without a language, the configured default_language is used.
        """
        language = language or self.settings.default_language
        if not self.enabled:
            logger.info("explanations_disabled", violations=len(violations))
            return [fallback_explanation(v) for v in violations]

        explanations = []
        for violation in violations:
            try:
                explanations.append(self.explain(build_request(violation, language)))
            except Exception as e:
                logger.warning(
                    "explanation_failed",
                    clause_id=violation.clause_id,
                    violation_type=violation.violation_type,
                    error=str(e),
                )
                explanations.append(fallback_explanation(violation))
        return explanations


@lru_cache()
def get_explanation_service() -> ExplanationService:
    """Get cached explanation service instance."""
    return ExplanationService()
