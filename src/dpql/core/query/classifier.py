from __future__ import annotations

from typing import Callable, Tuple
import re
import unicodedata

from dpql.core.enums import Operation
from dpql.core.errors import InputError
from dpql.core.models import ParsedQuery


_WS_RE = re.compile(r"\s+", flags=re.UNICODE)
_UCC_RE = re.compile(r"\bucc\s*\(")
_IND_RE = re.compile(r"\bind\s*\(")
_FD_RE = re.compile(r"\bfd\s*\(")


def normalize_query_text(text: str) -> str:
    """Lightweight normalizer for query text.

    - Unicode NFKC normalization
    - Lowercase
    - Collapse whitespace runs to a single space
    - Trim spaces
    """
    if text is None:
        return ""
    t = unicodedata.normalize("NFKC", str(text)).lower()
    return _WS_RE.sub(" ", t).strip()


def _is_foreign_key_query(q: str) -> bool:
    return bool(_IND_RE.search(q)) and bool(_UCC_RE.search(q))


def _is_unique_key_query(q: str) -> bool:
    return bool(_UCC_RE.search(q)) and not _IND_RE.search(q)


def _is_dependency_query(q: str) -> bool:
    return bool(_FD_RE.search(q))


# Evaluated in order; first match wins, Operation.default() otherwise.
RULES: Tuple[Tuple[Operation, Callable[[str], bool]], ...] = (
    (Operation.FIND_FOREIGN_KEYS, _is_foreign_key_query),
    (Operation.FIND_UNIQUE_KEYS, _is_unique_key_query),
    (Operation.FIND_DEPENDENCIES, _is_dependency_query),
)


def classify_query(text: str) -> ParsedQuery:
    """Map free-form query text to exactly one discovery operation.

    Recognized predicates are ``UCC(...)`` (unique column combination),
    ``IND(...)`` (inclusion dependency) and ``FD(...)`` (functional
    dependency), case-insensitive:

    - IND and UCC together -> foreign keys
    - UCC without IND -> unique keys
    - FD -> functional dependencies
    - anything else -> foreign keys

    Raises:
        InputError: If ``text`` is empty or whitespace only.

    Examples:
        >>> classify_query("SELECT X FROM UCC(Customers) AS X").operation
        <Operation.FIND_UNIQUE_KEYS: 'find_unique_keys'>
        >>> classify_query("show me something").operation
        <Operation.FIND_FOREIGN_KEYS: 'find_foreign_keys'>
    """
    q = normalize_query_text(text)
    if not q:
        raise InputError("Query is required")
    for operation, predicate in RULES:
        if predicate(q):
            return ParsedQuery.for_operation(operation)
    return ParsedQuery.for_operation(Operation.default())
