"""
Configuration export and import.

Exports use the envelope written by the configuration wizard so that files can
be loaded by the mail client extension, and imports accept either that
envelope or a bare rule set. A plain-text rendering is provided for pasting
each list into the extension's settings by hand.
"""

import json
import logging
from datetime import date, datetime, timezone
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from .pipeline.decision import RuleSet
from .schemas import ConfigExportOut, RuleSetIn

logger = logging.getLogger(__name__)

EXPORT_EXTENSION = "Go2Econtact"
EXPORT_VERSION = "1.0"


class ConfigImportError(ValueError):
    """Raised when an imported configuration cannot be read."""


# ============================================================================
# JSON Export / Import
# ============================================================================


def build_export(rules: RuleSet, exported_at: Optional[datetime] = None) -> ConfigExportOut:
    exported_at = exported_at or datetime.now(timezone.utc)
    return ConfigExportOut(
        extension=EXPORT_EXTENSION,
        version=EXPORT_VERSION,
        exported_at=exported_at.isoformat().replace("+00:00", "Z"),
        partial_config=True,
        settings=RuleSetIn.from_rule_set(rules),
    )


def export_config(rules: RuleSet, exported_at: Optional[datetime] = None) -> str:
    """Serialize `rules` inside the export envelope, indented like the wizard output."""
    envelope = build_export(rules, exported_at)
    return json.dumps(envelope.model_dump(by_alias=True), indent=2, ensure_ascii=False)


def export_filename(day: Optional[date] = None) -> str:
    day = day or datetime.now(timezone.utc).date()
    return f"{EXPORT_EXTENSION}-wizard-config-{day.isoformat()}.json"


def import_config(text: str) -> RuleSet:
    """
    Read an exported file or a bare rule set.

    Raises:
        ConfigImportError: on invalid JSON or an unexpected shape
    """
    try:
        data = json.loads(text)
    except (TypeError, json.JSONDecodeError) as e:
        logger.warning(f"Rejected configuration import: invalid JSON ({e})")
        raise ConfigImportError(f"Configuration is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        logger.warning(f"Rejected configuration import: top-level {type(data).__name__}")
        raise ConfigImportError("Configuration must be a JSON object")

    settings: Any = data["settings"] if "settings" in data else data
    if "extension" in data and data["extension"] != EXPORT_EXTENSION:
        logger.info(f"Importing configuration exported by {data['extension']!r}")

    try:
        model = RuleSetIn.model_validate(settings)
    except ValidationError as e:
        logger.warning(f"Rejected configuration import: {e.error_count()} validation error(s)")
        raise ConfigImportError(f"Configuration has an unexpected shape: {e}") from e

    rules = model.to_rule_set()
    logger.info(
        f"Imported configuration: {len(rules.excluded_domains) + len(rules.excluded_addresses) + len(rules.excluded_patterns)} "
        f"exclusion(s), {len(rules.included_addresses) + len(rules.included_domains)} inclusion(s)"
    )
    return rules


# ============================================================================
# Clipboard Text
# ============================================================================


def _sections(rules: RuleSet) -> List[Tuple[str, List[str]]]:
    return [
        ("ORGANIZATIONAL DOMAIN", [rules.organizational_domain] if rules.organizational_domain else []),
        ("EXCLUSIONS - DOMAINS", list(rules.excluded_domains)),
        ("EXCLUSIONS - ADDRESSES", list(rules.excluded_addresses)),
        ("EXCLUSIONS - PATTERNS", list(rules.excluded_patterns)),
        ("INCLUSIONS - ADDRESSES (will ALWAYS receive an acknowledgement)", list(rules.included_addresses)),
        ("INCLUSIONS - DOMAINS (will ALWAYS receive an acknowledgement)", list(rules.included_domains)),
    ]


def format_clipboard_text(rules: RuleSet) -> str:
    """Render each list under a titled section, ready to paste field by field."""
    text = ""
    for title, items in _sections(rules):
        text += f"=== {title} ===\n"
        text += ("\n".join(items) if items else "(none)") + "\n\n"
    text += "---\n"
    text += "Instructions: copy each section into the matching field of the mail client extension (General tab)\n"
    return text
