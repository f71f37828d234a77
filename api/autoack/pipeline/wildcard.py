"""
Wildcard pattern compiler and matcher.

Rule lists accept a single wildcard character, `*`, which stands for zero or
more characters of any kind (dots and `@` included). Every other character is
literal. Patterns are compiled once into anchored, case-insensitive regular
expressions and cached, so domain rules (`*.example.com`) and full-address
rules (`noreply@*`) share one code path.
"""

import re
from functools import lru_cache

WILDCARD = "*"


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> re.Pattern:
    """
    Translate a wildcard pattern into an anchored regular expression.

    Literal segments between wildcards are escaped; each `*` becomes `.*`.
    An empty pattern only matches the empty string.
    """
    segments = pattern.lower().split(WILDCARD)
    body = ".*".join(re.escape(s) for s in segments)
    return re.compile(body, re.DOTALL)


def matches(candidate: str, pattern: str) -> bool:
    """Return True if the whole candidate matches the wildcard pattern."""
    if candidate is None or pattern is None:
        return False
    return compile_pattern(pattern).fullmatch(candidate.lower()) is not None
