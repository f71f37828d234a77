"""
Rule list input cleanup.

Rule lists are typed by users one entry per line. This module splits and trims
that text, validates each entry for the list it belongs to and reports what
was dropped, with a hint when an entry clearly belongs in another list
(`*@example.com` typed as an address is a domain rule).
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List

# ============================================================================
# Formats
# ============================================================================

DEFAULT_EXCLUSION_PATTERNS = [
    "noreply@*",
    "no-reply@*",
    "postmaster@*",
    "mailer-daemon@*",
]

_EMAIL_FORMAT_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_WILDCARD_TLD_RE = re.compile(r"^\*\.[a-zA-Z]{2,}$")
_DOMAIN_RE = re.compile(
    r"^(\*\.)?[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(\.[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+$"
)
_PATTERN_FORMAT_RE = re.compile(r"^[^\s@*]+@(\*|\*\.[a-zA-Z0-9.-]+|[a-zA-Z0-9.-]+)$")


class ListKind(str, Enum):
    EMAIL = "email"
    DOMAIN = "domain"
    PATTERN = "pattern"


@dataclass
class CleanedList:
    valid: List[str] = field(default_factory=list)
    invalid: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)

    @property
    def removed_count(self) -> int:
        return len(self.invalid)


# ============================================================================
# Validators
# ============================================================================


def is_valid_email_format(value: str) -> bool:
    """Simple `local@host.tld` check used for form fields."""
    return bool(_EMAIL_FORMAT_RE.match(value.strip()))


def is_valid_domain(value: str) -> bool:
    """Domain rule check: `*`, `*.*`, `*.tld` or a dotted name with optional `*.` prefix."""
    if value in ("*", "*.*"):
        return True
    if _WILDCARD_TLD_RE.match(value):
        return True
    return bool(_DOMAIN_RE.match(value))


def is_valid_pattern_format(value: str) -> bool:
    """Pattern rules wildcard the domain only: `noreply@*`, `info@*.example.com`."""
    return bool(_PATTERN_FORMAT_RE.match(value.strip()))


# ============================================================================
# Cleanup
# ============================================================================


def text_to_list(text: str) -> List[str]:
    """Split multi-line input into trimmed, non-empty entries."""
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def list_to_text(items: Iterable[str]) -> str:
    return "\n".join(items)


def _domain_list_hint(domain: str) -> str:
    return f'Use the "Domains" list for {domain}'


def clean_rule_list(text: str, kind: ListKind) -> CleanedList:
    """Keep the entries valid for `kind`; collect the rest with suggestions."""
    kind = ListKind(kind)
    result = CleanedList()

    for entry in text_to_list(text):
        suggestion = ""
        if kind is ListKind.EMAIL:
            is_valid = is_valid_email_format(entry)
            if not is_valid and entry.startswith("*@"):
                suggestion = _domain_list_hint(entry[2:])
        elif kind is ListKind.DOMAIN:
            is_valid = is_valid_domain(entry)
        else:
            is_valid = is_valid_pattern_format(entry)
            if not is_valid and entry.startswith("*@") and is_valid_domain(entry[2:]):
                suggestion = _domain_list_hint(entry[2:])

        if is_valid:
            result.valid.append(entry)
        else:
            result.invalid.append(entry)
            if suggestion:
                result.suggestions.append(suggestion)

    return result


def add_default_patterns(existing: Iterable[str]) -> List[str]:
    """Merge the automatic-sender patterns into `existing`, keeping order and no duplicates."""
    merged: List[str] = []
    for pattern in list(existing) + DEFAULT_EXCLUSION_PATTERNS:
        if pattern not in merged:
            merged.append(pattern)
    return merged
