"""
Natural-language explanations for acknowledgement verdicts.

The text is meant for non-technical users: it names the rule category that
decided, states the outcome and says how to override it. Output is light HTML
(`<strong>`, `<code>`, `<em>`); every interpolated value is escaped.
"""

from html import escape
from typing import Callable, Dict

from .decision import ReasonCode, RuleKind, RuleSet, Verdict

# ============================================================================
# Pattern Rationales
# ============================================================================

KNOWN_PATTERN_RATIONALES: Dict[str, str] = {
    "noreply@*": "This pattern blocks every address starting with 'noreply@' (standard do-not-reply senders).",
    "no-reply@*": "This pattern blocks every address starting with 'no-reply@' (hyphenated variant).",
    "postmaster@*": "This pattern blocks every 'postmaster@' address (mail server administrators).",
    "mailer-daemon@*": "This pattern blocks every 'mailer-daemon@' address (automatic delivery error reports).",
}

GENERIC_PATTERN_RATIONALE = "This pattern automatically blocks a family of addresses."

_OVERRIDE_WITH_INCLUSION = (
    "If you still want this address to get an acknowledgement, add it to the "
    "<strong>INCLUSIONS</strong> list, which takes absolute priority"
)


def pattern_rationale(pattern: str) -> str:
    return KNOWN_PATTERN_RATIONALES.get(pattern.strip().lower(), GENERIC_PATTERN_RATIONALE)


# ============================================================================
# Templates
# ============================================================================


def _explain_inclusion(verdict: Verdict, rules: RuleSet) -> str:
    text = (
        "This address <strong>WILL RECEIVE an acknowledgement</strong> because it is explicitly "
        "covered by your <strong>INCLUSIONS</strong> list. "
        "Inclusions take <strong>absolute priority</strong> over every other rule "
        "(exclusions, organizational domain, automatic patterns). "
        "It is an exception you created on purpose; to stop forcing acknowledgements here, "
        "remove the entry from the inclusions. "
    )
    if verdict.matched_rule:
        text += f"Rule applied: <em>{escape(verdict.matched_rule.describe())}</em>."
    return text.rstrip()


def _explain_excluded_domain(verdict: Verdict, rules: RuleSet) -> str:
    domain = escape(verdict.matched_rule.value)
    return (
        f"This address <strong>WILL NOT RECEIVE</strong> an acknowledgement because its domain "
        f"(<code>{domain}</code>) is in your <strong>EXCLUSIONS</strong> list. "
        "Domain exclusions apply to every address of that domain "
        "(and to its subdomains when you use the <code>*.</code> wildcard). "
        f"{_OVERRIDE_WITH_INCLUSION} over exclusions."
    )


def _explain_excluded_address(verdict: Verdict, rules: RuleSet) -> str:
    return (
        "This address <strong>WILL NOT RECEIVE</strong> an acknowledgement because it is "
        "<strong>explicitly</strong> in your exclusions list. "
        "It is a targeted exclusion that only concerns this exact address. "
        "You can remove it from the exclusions, or "
        "add it to the <strong>INCLUSIONS</strong> list, which cancels the exclusion (absolute priority)."
    )


def _explain_excluded_pattern(verdict: Verdict, rules: RuleSet) -> str:
    pattern = verdict.matched_rule.value
    return (
        f"This address <strong>WILL NOT RECEIVE</strong> an acknowledgement because it matches "
        f"the automatic pattern <code>{escape(pattern)}</code>. "
        f"{escape(pattern_rationale(pattern))} "
        "These patterns block robots and automatic senders, which usually do not need an acknowledgement. "
        f"{_OVERRIDE_WITH_INCLUSION} over patterns."
    )


def _explain_internal(verdict: Verdict, rules: RuleSet) -> str:
    domain = escape(verdict.matched_rule.value if verdict.matched_rule else rules.organizational_domain)
    return (
        "This address <strong>WILL NOT RECEIVE</strong> an acknowledgement because it belongs to your "
        f"<strong>organizational domain</strong> (<code>{domain}</code>). "
        "Internal addresses (colleagues in your organization) get no automatic acknowledgement, "
        "which keeps them for external contacts. "
        f"{_OVERRIDE_WITH_INCLUSION}, even for internal addresses."
    )


def _explain_external_default(verdict: Verdict, rules: RuleSet) -> str:
    text = "This address <strong>WILL RECEIVE an acknowledgement</strong> because it is <strong>EXTERNAL</strong> "
    if rules.organizational_domain.strip():
        text += f"(outside your organizational domain <code>{escape(rules.organizational_domain)}</code>) "
    text += (
        "and is in <strong>NO</strong> exclusion list. "
        "By default every external address that is not excluded receives a deferred acknowledgement. "
        "To stop acknowledgements for it, add the address or its whole domain to the exclusions; "
        "entries in the <strong>INCLUSIONS</strong> list always receive one regardless."
    )
    return text


_EXCLUSION_TEMPLATES: Dict[RuleKind, Callable[[Verdict, RuleSet], str]] = {
    RuleKind.EXCLUDED_DOMAIN: _explain_excluded_domain,
    RuleKind.EXCLUDED_ADDRESS: _explain_excluded_address,
    RuleKind.EXCLUDED_PATTERN: _explain_excluded_pattern,
}


def _explain_exclusion(verdict: Verdict, rules: RuleSet) -> str:
    return _EXCLUSION_TEMPLATES[verdict.matched_rule.kind](verdict, rules)


_TEMPLATES: Dict[ReasonCode, Callable[[Verdict, RuleSet], str]] = {
    ReasonCode.FORCED_INCLUSION: _explain_inclusion,
    ReasonCode.EXCLUDED: _explain_exclusion,
    ReasonCode.INTERNAL: _explain_internal,
    ReasonCode.EXTERNAL_DEFAULT: _explain_external_default,
}


# ============================================================================
# Public API
# ============================================================================


def explain(address: str, verdict: Verdict, rules: RuleSet) -> str:
    """Render the justification for `verdict` as escaped, lightly marked-up text."""
    return _TEMPLATES[verdict.reason_code](verdict, rules)


_SUMMARIES: Dict[ReasonCode, str] = {
    ReasonCode.FORCED_INCLUSION: "Acknowledgement sent (forced inclusion)",
    ReasonCode.EXTERNAL_DEFAULT: "Acknowledgement sent (external address)",
    ReasonCode.EXCLUDED: "Acknowledgement blocked (exclusion)",
    ReasonCode.INTERNAL: "Acknowledgement blocked (organizational domain)",
}


def short_summary(verdict: Verdict) -> str:
    """One-phrase summary for logs and notifications."""
    return _SUMMARIES[verdict.reason_code]
