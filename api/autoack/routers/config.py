from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.responses import PlainTextResponse

from ..config_io import ConfigImportError, build_export, export_filename, format_clipboard_text, import_config
from ..pipeline.rules_input import add_default_patterns, clean_rule_list, list_to_text
from ..schemas import CleanedListOut, CleanListIn, ConfigExportOut, RuleSetIn

router = APIRouter()


@router.post("/export", response_model=ConfigExportOut)
def export(payload: RuleSetIn, response: Response) -> ConfigExportOut:
    """Wrap a rule set in the export envelope read by the mail client extension."""
    response.headers["Content-Disposition"] = f'attachment; filename="{export_filename()}"'
    return build_export(payload.to_rule_set())


@router.post("/import", response_model=RuleSetIn)
async def import_(request: Request) -> RuleSetIn:
    """Read an exported file (or a bare rule set) and return the normalized rules."""
    body = await request.body()
    try:
        rules = import_config(body.decode("utf-8", "replace"))
    except ConfigImportError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RuleSetIn.from_rule_set(rules)


@router.post("/clipboard", response_class=PlainTextResponse)
def clipboard(payload: RuleSetIn) -> str:
    """Plain-text sections to paste into the extension settings."""
    return format_clipboard_text(payload.to_rule_set())


@router.post("/clean", response_model=CleanedListOut)
def clean(payload: CleanListIn) -> CleanedListOut:
    """Drop entries that are not valid for the given list kind."""
    cleaned = clean_rule_list(payload.text, payload.kind)
    return CleanedListOut(
        valid=cleaned.valid,
        invalid=cleaned.invalid,
        suggestions=cleaned.suggestions,
        removed_count=cleaned.removed_count,
        text=list_to_text(cleaned.valid),
    )


@router.post("/default-patterns", response_model=RuleSetIn)
def default_patterns(payload: RuleSetIn) -> RuleSetIn:
    """Add the automatic-sender patterns to the exclusion patterns."""
    payload.exclusions.patterns = add_default_patterns(payload.exclusions.patterns)
    return payload
