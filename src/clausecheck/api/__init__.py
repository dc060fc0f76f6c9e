"""
HTTP API for clausecheck.
"""
