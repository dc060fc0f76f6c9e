"""
API route modules.
"""

from clausecheck.api.routes import analysis, knowledge, system

__all__ = ["analysis", "knowledge", "system"]
