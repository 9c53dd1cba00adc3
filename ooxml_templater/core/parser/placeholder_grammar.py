from __future__ import annotations

"""Lexical rules for template placeholder tokens.

A placeholder is a substring delimited by triple parentheses and comes in
three shapes::

    (((customer.name)))             plain reference
    (((123456=sales.q1)))           numeric-indexed directive
    (((DeletePageIfEmpty=notes)))   named directive

Any other body between the delimiters, such as ``(((x-y=z)))``, is still a
placeholder token; it just has none of the three shapes.  This module only
answers membership questions; extracting the parts of a token is done by
:mod:`ooxml_templater.core.parser.placeholder_parser`.
"""

import re
from typing import Optional, Pattern, Tuple

__all__ = [
    "PLAIN_REFERENCE",
    "NUMERIC_DIRECTIVE",
    "NAMED_DIRECTIVE",
    "ANY_PLACEHOLDER",
    "has_placeholder_patterns",
    "classify_placeholder",
]

# Token bodies never contain parentheses, so nested or unbalanced runs
# such as "(((outer (((inner)))" resolve to the innermost complete token.
PLAIN_REFERENCE: Pattern[str] = re.compile(r"\(\(\((?=[^()=]*[^()=\s])[^()=]+\)\)\)")
NUMERIC_DIRECTIVE: Pattern[str] = re.compile(r"\(\(\((\d+)=([^()]+)\)\)\)")
NAMED_DIRECTIVE: Pattern[str] = re.compile(r"\(\(\(([A-Za-z_][A-Za-z0-9_]*)=([^()]+)\)\)\)")
ANY_PLACEHOLDER: Pattern[str] = re.compile(r"\(\(\([^()]+\)\)\)")

_SHAPES: Tuple[Tuple[str, Pattern[str]], ...] = (
    ("numeric", NUMERIC_DIRECTIVE),
    ("named", NAMED_DIRECTIVE),
    ("plain", PLAIN_REFERENCE),
)


def has_placeholder_patterns(text: Optional[str]) -> bool:
    """Return True if *text* contains at least one triple-parenthesis token.

    Tokens of any shape count, matching what
    :func:`~ooxml_templater.core.parser.placeholder_parser.find_all_placeholders`
    reports.  ``None`` and the empty string are valid inputs and yield False.
    """
    if not text or not isinstance(text, str):
        return False
    return ANY_PLACEHOLDER.search(text) is not None


def classify_placeholder(token: str) -> Optional[str]:
    """Return ``"numeric"``, ``"named"`` or ``"plain"`` for a whole token.

    *token* must be exactly one placeholder including its delimiters;
    anything else yields None.
    """
    if not token or not isinstance(token, str):
        return None
    for shape, pattern in _SHAPES:
        if pattern.fullmatch(token):
            return shape
    return None
