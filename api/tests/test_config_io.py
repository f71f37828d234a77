import json
from datetime import date, datetime, timezone

import pytest

from autoack.config_io import (
    ConfigImportError,
    export_config,
    export_filename,
    format_clipboard_text,
    import_config,
)
from autoack.pipeline.decision import RuleSet
from autoack.schemas import RuleSetIn


def test_export_envelope_and_key_order(full_rules):
    text = export_config(full_rules, exported_at=datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc))
    data = json.loads(text)

    assert list(data) == ["extension", "version", "exportedAt", "partialConfig", "settings"]
    assert data["extension"] == "Go2Econtact"
    assert data["version"] == "1.0"
    assert data["exportedAt"] == "2025-03-01T12:00:00Z"
    assert data["partialConfig"] is True
    assert data["settings"] == full_rules.to_dict()
    # Wizard output is indented by two spaces
    assert text.startswith('{\n  "extension"')


def test_import_reads_export(full_rules):
    assert import_config(export_config(full_rules)) == full_rules


def test_import_accepts_bare_rule_set_with_descriptive_keys():
    rules = import_config(json.dumps({
        "organizationalDomain": " corp.fr ",
        "exclusions": {"patterns": ["noreply@*"]},
        "inclusions": {"addresses": ["boss@corp.fr"]},
    }))
    assert rules.organizational_domain == "corp.fr"
    assert rules.excluded_patterns == ("noreply@*",)
    assert rules.included_addresses == ("boss@corp.fr",)
    assert rules.excluded_domains == ()


def test_import_tolerates_nulls():
    rules = import_config('{"internalDomain": null, "exclusion": null, "inclusion": {"domains": null}}')
    assert rules == RuleSet()


@pytest.mark.parametrize("text", ["not json", "[1, 2]", '{"exclusion": {"domains": "spam.com"}}', ""])
def test_import_rejects_unreadable_configuration(text):
    with pytest.raises(ConfigImportError):
        import_config(text)


def test_export_filename():
    assert export_filename(date(2025, 3, 1)) == "Go2Econtact-wizard-config-2025-03-01.json"


def test_rule_set_model_serializes_with_export_keys(full_rules):
    model = RuleSetIn.from_rule_set(full_rules)
    assert model.model_dump(by_alias=True) == full_rules.to_dict()
    assert model.to_rule_set() == full_rules


def test_clipboard_text_sections():
    rules = RuleSet.from_dict({"internalDomain": "corp.fr", "exclusion": {"patterns": ["noreply@*", "postmaster@*"]}})
    text = format_clipboard_text(rules)

    assert text.startswith("=== ORGANIZATIONAL DOMAIN ===\ncorp.fr\n\n")
    assert "=== EXCLUSIONS - PATTERNS ===\nnoreply@*\npostmaster@*\n\n" in text
    assert "=== EXCLUSIONS - DOMAINS ===\n(none)\n\n" in text
    assert text.count("(none)") == 4
    assert text.rstrip().endswith("(General tab)")


@pytest.mark.parametrize("value", [5, ["acme.com"], {"name": "acme.com"}, True])
def test_import_rejects_non_string_organizational_domain(value):
    with pytest.raises(ConfigImportError):
        import_config(json.dumps({"internalDomain": value}))


def test_rule_set_model_strips_string_domain_only():
    assert RuleSetIn.model_validate({"internalDomain": "  corp.fr "}).organizational_domain == "corp.fr"
    assert RuleSetIn.model_validate({"internalDomain": None}).organizational_domain == ""
