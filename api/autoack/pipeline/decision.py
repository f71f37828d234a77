"""
Acknowledgement decision engine.

Given one address and a rule set, decide whether an automatic acknowledgement
is sent. Rules are resolved with a fixed precedence:

1. Forced inclusion (addresses, then domains) always wins.
2. Exclusion (domains, then addresses, then full-address patterns).
3. Organizational domain: internal addresses get no acknowledgement.
4. Default: external addresses that are not excluded get one.

The engine is pure: no I/O, no logging, no state shared between calls. Every
verdict carries the literal rule that produced it so callers can audit the
decision or explain it to a user.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .wildcard import matches

# ============================================================================
# Errors
# ============================================================================


class InvalidAddress(ValueError):
    """Raised at the boundary for an address that is not `local@domain`."""


# ============================================================================
# Verdict Types
# ============================================================================


class ReasonCode(str, Enum):
    FORCED_INCLUSION = "ForcedInclusion"
    EXCLUDED = "Excluded"
    INTERNAL = "Internal"
    EXTERNAL_DEFAULT = "ExternalDefault"


class RuleKind(str, Enum):
    INCLUDED_ADDRESS = "included_address"
    INCLUDED_DOMAIN = "included_domain"
    EXCLUDED_DOMAIN = "excluded_domain"
    EXCLUDED_ADDRESS = "excluded_address"
    EXCLUDED_PATTERN = "excluded_pattern"
    INTERNAL_DOMAIN = "internal_domain"


RULE_LABELS: Dict[RuleKind, str] = {
    RuleKind.INCLUDED_ADDRESS: "Included address",
    RuleKind.INCLUDED_DOMAIN: "Included domain",
    RuleKind.EXCLUDED_DOMAIN: "Excluded domain",
    RuleKind.EXCLUDED_ADDRESS: "Excluded address",
    RuleKind.EXCLUDED_PATTERN: "Excluded pattern",
    RuleKind.INTERNAL_DOMAIN: "Internal domain",
}


@dataclass(frozen=True)
class MatchedRule:
    """The rule that decided a verdict, as it was written in the rule set."""

    kind: RuleKind
    value: str

    def describe(self) -> str:
        return f"{RULE_LABELS[self.kind]}: {self.value}"


@dataclass(frozen=True)
class Verdict:
    """
    Outcome of one evaluation.

    Build verdicts through the per-reason constructors below; each one fixes
    `allowed` for its reason code and carries its own matched rule.
    """

    allowed: bool
    reason_code: ReasonCode
    matched_rule: Optional[MatchedRule] = None

    @classmethod
    def forced_inclusion(cls, rule: MatchedRule) -> "Verdict":
        return cls(allowed=True, reason_code=ReasonCode.FORCED_INCLUSION, matched_rule=rule)

    @classmethod
    def excluded(cls, rule: MatchedRule) -> "Verdict":
        return cls(allowed=False, reason_code=ReasonCode.EXCLUDED, matched_rule=rule)

    @classmethod
    def internal(cls, organizational_domain: str) -> "Verdict":
        rule = MatchedRule(RuleKind.INTERNAL_DOMAIN, organizational_domain)
        return cls(allowed=False, reason_code=ReasonCode.INTERNAL, matched_rule=rule)

    @classmethod
    def external_default(cls) -> "Verdict":
        return cls(allowed=True, reason_code=ReasonCode.EXTERNAL_DEFAULT)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "allowed": self.allowed,
            "reason_code": self.reason_code.value,
            "matched_rule": self.matched_rule.describe() if self.matched_rule else None,
        }


# ============================================================================
# Rule Set
# ============================================================================


def _as_tuple(values: Any, name: str) -> Tuple[str, ...]:
    if values is None:
        return ()
    if not isinstance(values, (list, tuple)):
        raise TypeError(f"{name} must be a list of strings, not {type(values).__name__}")
    for v in values:
        if v is not None and not isinstance(v, str):
            raise TypeError(f"{name} entries must be strings, not {type(v).__name__}")
    return tuple(v for v in values if v is not None)


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _section(data: Mapping[str, Any], *keys: str) -> Mapping[str, Any]:
    section = _pick(data, *keys)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise TypeError(f"{keys[0]} must be an object, not {type(section).__name__}")
    return section


@dataclass(frozen=True)
class RuleSet:
    """Read-only snapshot of a user's acknowledgement rules."""

    organizational_domain: str = ""
    excluded_domains: Tuple[str, ...] = field(default_factory=tuple)
    excluded_addresses: Tuple[str, ...] = field(default_factory=tuple)
    excluded_patterns: Tuple[str, ...] = field(default_factory=tuple)
    included_addresses: Tuple[str, ...] = field(default_factory=tuple)
    included_domains: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "RuleSet":
        """
        Build a rule set from exported JSON or form state.

        Accepts the exported keys (`internalDomain`, `exclusion`, `inclusion`)
        as well as `organizationalDomain`, `exclusions` and `inclusions`.
        Missing or null lists are treated as empty.

        Raises:
            TypeError: if a section is not an object or a list is not a list of strings
        """
        data = data or {}
        if not isinstance(data, Mapping):
            raise TypeError(f"Rule set must be an object, not {type(data).__name__}")
        exclusions = _section(data, "exclusion", "exclusions")
        inclusions = _section(data, "inclusion", "inclusions")
        organizational_domain = _pick(data, "internalDomain", "organizationalDomain") or ""
        if not isinstance(organizational_domain, str):
            raise TypeError(f"internalDomain must be a string, not {type(organizational_domain).__name__}")
        return cls(
            organizational_domain=organizational_domain.strip(),
            excluded_domains=_as_tuple(exclusions.get("domains"), "exclusion.domains"),
            excluded_addresses=_as_tuple(exclusions.get("addresses"), "exclusion.addresses"),
            excluded_patterns=_as_tuple(exclusions.get("patterns"), "exclusion.patterns"),
            included_addresses=_as_tuple(inclusions.get("addresses"), "inclusion.addresses"),
            included_domains=_as_tuple(inclusions.get("domains"), "inclusion.domains"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the key names and order of exported configurations."""
        return {
            "internalDomain": self.organizational_domain,
            "exclusion": {
                "domains": list(self.excluded_domains),
                "addresses": list(self.excluded_addresses),
                "patterns": list(self.excluded_patterns),
            },
            "inclusion": {
                "addresses": list(self.included_addresses),
                "domains": list(self.included_domains),
            },
        }


# ============================================================================
# Address Helpers
# ============================================================================


def normalize_address(address: str) -> str:
    """Canonical form used for every comparison: trimmed and lowercased."""
    return (address or "").strip().lower()


def extract_domain(address: str) -> Optional[str]:
    """Return the lowercased domain part, or None if it cannot be extracted."""
    parts = normalize_address(address).split("@")
    if len(parts) != 2 or not parts[1].strip():
        return None
    return parts[1]


def validate_address(address: str) -> str:
    """
    Return the normalized address or raise InvalidAddress.

    An address is valid when it splits into exactly two non-empty parts
    around a single `@`.
    """
    normalized = normalize_address(address)
    parts = normalized.split("@")
    if len(parts) != 2:
        raise InvalidAddress(f"Address must contain exactly one '@': {address!r}")
    local, domain = parts
    if not local:
        raise InvalidAddress(f"Address has an empty local part: {address!r}")
    if not domain:
        raise InvalidAddress(f"Address has an empty domain: {address!r}")
    return normalized


def is_internal(domain: Optional[str], organizational_domain: Optional[str]) -> bool:
    """
    Check organizational-domain membership.

    Exact (case-insensitive) equality is internal. A `*.base` organizational
    domain also covers `base` itself and any domain ending in `.base`. Other
    wildcard forms are compared literally.
    """
    org = (organizational_domain or "").strip().lower()
    if not org or not domain:
        return False
    domain = domain.lower()
    if domain == org:
        return True
    if org.startswith("*."):
        base = org[2:]
        if base and (domain == base or domain.endswith("." + base)):
            return True
    return False


# ============================================================================
# Evaluation
# ============================================================================


def _match_inclusion(address: str, domain: Optional[str], rules: RuleSet) -> Optional[MatchedRule]:
    for rule in rules.included_addresses:
        if normalize_address(rule) == address:
            return MatchedRule(RuleKind.INCLUDED_ADDRESS, rule)
    if domain:
        for rule in rules.included_domains:
            if matches(domain, rule.strip()):
                return MatchedRule(RuleKind.INCLUDED_DOMAIN, rule)
    return None


def _match_exclusion(address: str, domain: Optional[str], rules: RuleSet) -> Optional[MatchedRule]:
    if domain:
        for rule in rules.excluded_domains:
            if matches(domain, rule.strip()):
                return MatchedRule(RuleKind.EXCLUDED_DOMAIN, rule)
    for rule in rules.excluded_addresses:
        if normalize_address(rule) == address:
            return MatchedRule(RuleKind.EXCLUDED_ADDRESS, rule)
    for rule in rules.excluded_patterns:
        if matches(address, rule.strip()):
            return MatchedRule(RuleKind.EXCLUDED_PATTERN, rule)
    return None


def evaluate(address: str, rules: RuleSet) -> Verdict:
    """
    Decide whether `address` receives an automatic acknowledgement.

    Malformed addresses are not rejected here: without an extractable domain,
    domain rules cannot match and the address counts as external. Use
    `validate_address` first for strict handling.
    """
    normalized = normalize_address(address)
    domain = extract_domain(normalized)

    included = _match_inclusion(normalized, domain, rules)
    if included is not None:
        return Verdict.forced_inclusion(included)

    excluded = _match_exclusion(normalized, domain, rules)
    if excluded is not None:
        return Verdict.excluded(excluded)

    if is_internal(domain, rules.organizational_domain):
        return Verdict.internal(rules.organizational_domain)

    return Verdict.external_default()


def evaluate_many(addresses: Iterable[str], rules: RuleSet) -> List[Verdict]:
    """Evaluate a batch of addresses against one rule set snapshot."""
    return [evaluate(a, rules) for a in addresses]
