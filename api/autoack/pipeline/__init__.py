from .decision import (
    InvalidAddress,
    MatchedRule,
    ReasonCode,
    RuleKind,
    RuleSet,
    Verdict,
    evaluate,
    evaluate_many,
    validate_address,
)
from .explain import explain, short_summary
from .wildcard import compile_pattern, matches

__all__ = [
    "InvalidAddress",
    "MatchedRule",
    "ReasonCode",
    "RuleKind",
    "RuleSet",
    "Verdict",
    "compile_pattern",
    "evaluate",
    "evaluate_many",
    "explain",
    "matches",
    "short_summary",
    "validate_address",
]
