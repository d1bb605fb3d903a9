from __future__ import annotations

from sheet_browser.config.model import SOURCE_KINDS, SourceConfig
from sheet_browser.validation.errors import ValidationError, ValidationIssue


def validate_source(cfg: SourceConfig) -> None:
    issues: list[ValidationIssue] = []

    if not cfg.raw.get("name"):
        issues.append(ValidationIssue("SOURCE_NAME", "Missing 'name'."))

    kind = cfg.kind
    if kind not in SOURCE_KINDS:
        issues.append(
            ValidationIssue(
                "SOURCE_KIND",
                f"Unknown kind '{kind}'; expected one of {', '.join(SOURCE_KINDS)}.",
            )
        )
    elif kind == "sheet":
        if not cfg.sheet_id:
            issues.append(ValidationIssue("SOURCE_SHEET_ID", "Sheet sources need a 'sheet_id'."))
    elif cfg.file is None:
        issues.append(ValidationIssue("SOURCE_FILE", f"{kind} sources need a 'file'."))

    filters = cfg.raw.get("filters")
    if filters is not None and not isinstance(filters, dict):
        issues.append(ValidationIssue("SOURCE_FILTERS", "'filters' must be an object of column -> value."))

    if issues:
        raise ValidationError(issues)
