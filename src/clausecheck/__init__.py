"""
clausecheck: deterministic risk analysis for freelance contracts

Segments contract text into clauses, matches them against statutory
violation patterns from the Indian Contract Act, 1872, flags departures
from fair-practice baselines and rolls the findings into a 0-100 score.
"""

__version__ = "0.1.0"

from clausecheck.config import get_settings

__all__ = ["get_settings", "__version__"]
