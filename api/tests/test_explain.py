from autoack.pipeline.decision import MatchedRule, RuleKind, RuleSet, Verdict, evaluate
from autoack.pipeline.explain import (
    GENERIC_PATTERN_RATIONALE,
    KNOWN_PATTERN_RATIONALES,
    explain,
    pattern_rationale,
    short_summary,
)


def test_forced_inclusion_names_the_rule(full_rules):
    v = evaluate("vip@acme.com", full_rules)
    text = explain("vip@acme.com", v, full_rules)
    assert "WILL RECEIVE" in text
    assert "INCLUSIONS" in text
    assert "Rule applied: <em>Included address: vip@acme.com</em>." in text


def test_excluded_domain_template(full_rules):
    v = evaluate("ann@spam.com", full_rules)
    text = explain("ann@spam.com", v, full_rules)
    assert "WILL NOT RECEIVE" in text
    assert "its domain (<code>spam.com</code>)" in text
    assert "INCLUSIONS" in text


def test_excluded_address_template(full_rules):
    v = evaluate("boss@partner.org", full_rules)
    text = explain("boss@partner.org", v, full_rules)
    assert "<strong>explicitly</strong> in your exclusions list" in text
    assert "INCLUSIONS" in text


def test_excluded_pattern_known_rationale(full_rules):
    v = evaluate("mailer-daemon@host.net", full_rules)
    text = explain("mailer-daemon@host.net", v, full_rules)
    assert "<code>mailer-daemon@*</code>" in text
    assert "delivery error reports" in text
    assert "INCLUSIONS" in text


def test_excluded_pattern_generic_rationale():
    rules = RuleSet.from_dict({"exclusion": {"patterns": ["alerts@*"]}})
    v = evaluate("alerts@monitoring.io", rules)
    text = explain("alerts@monitoring.io", v, rules)
    assert GENERIC_PATTERN_RATIONALE in text


def test_pattern_rationale_lookup():
    for pattern, rationale in KNOWN_PATTERN_RATIONALES.items():
        assert pattern_rationale(pattern) == rationale
    assert pattern_rationale(" NoReply@* ") == KNOWN_PATTERN_RATIONALES["noreply@*"]
    assert pattern_rationale("team@*") == GENERIC_PATTERN_RATIONALE


def test_internal_template(full_rules):
    v = evaluate("bob@acme.com", full_rules)
    text = explain("bob@acme.com", v, full_rules)
    assert "<strong>organizational domain</strong> (<code>*.acme.com</code>)" in text
    assert "INCLUSIONS" in text


def test_external_default_mentions_organizational_domain_only_when_set(full_rules):
    v = evaluate("ann@other.org", full_rules)
    assert "outside your organizational domain <code>*.acme.com</code>" in explain("ann@other.org", v, full_rules)

    empty = RuleSet()
    text = explain("ann@other.org", evaluate("ann@other.org", empty), empty)
    assert "EXTERNAL" in text
    assert "organizational domain" not in text


def test_interpolated_values_are_escaped():
    rules = RuleSet.from_dict({
        "internalDomain": "<script>alert(1)</script>",
        "exclusion": {"patterns": ['x"<b>@*']},
    })
    v = evaluate('x"<b>@evil.com', rules)
    text = explain('x"<b>@evil.com', v, rules)
    assert "<b>@" not in text
    assert "x&quot;&lt;b&gt;@*" in text

    internal = Verdict.internal("<script>alert(1)</script>")
    text = explain("a@b.com", internal, rules)
    assert "<script>" not in text
    assert "&lt;script&gt;" in text


def test_every_denial_points_to_inclusions():
    rules = RuleSet()
    denials = [
        Verdict.excluded(MatchedRule(RuleKind.EXCLUDED_DOMAIN, "d.com")),
        Verdict.excluded(MatchedRule(RuleKind.EXCLUDED_ADDRESS, "a@d.com")),
        Verdict.excluded(MatchedRule(RuleKind.EXCLUDED_PATTERN, "p@*")),
        Verdict.internal("d.com"),
    ]
    for v in denials:
        assert "add it to the <strong>INCLUSIONS</strong> list" in explain("a@d.com", v, rules)


def test_explain_is_deterministic(full_rules):
    v = evaluate("noreply@x.com", full_rules)
    assert explain("noreply@x.com", v, full_rules) == explain("noreply@x.com", v, full_rules)


def test_short_summary():
    assert short_summary(Verdict.external_default()) == "Acknowledgement sent (external address)"
    assert short_summary(Verdict.internal("x.com")) == "Acknowledgement blocked (organizational domain)"
    rule = MatchedRule(RuleKind.EXCLUDED_PATTERN, "p@*")
    assert short_summary(Verdict.excluded(rule)) == "Acknowledgement blocked (exclusion)"
