"""Free-text query classification.

Turns DPQL-style query text into one of the closed set of discovery
operations. The engine only ever sees the resulting ``Operation``.
"""

from .classifier import RULES, classify_query, normalize_query_text

__all__ = [
    "RULES",
    "classify_query",
    "normalize_query_text",
]
