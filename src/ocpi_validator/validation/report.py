"""Batch validation report.

This module aggregates per-payload outcomes:
- PayloadResult: Outcome of validating one payload (usually one file)
- ValidationReport: Aggregated results with console, Markdown, JSON and
  DataFrame renderings
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import List

import pandas as pd

from ocpi_validator.core.enums import ObjectType
from .models import ValidationResult

DATAFRAME_COLUMNS = ["source", "object_type", "is_valid", "kind", "field", "detail", "message"]


@dataclass(frozen=True)
class PayloadResult:
    """Validation outcome of one payload.

    Attributes:
        source: Where the payload came from (file name or label).
        object_type: Object kind it was validated as.
        result: The validation result.
    """

    source: str
    object_type: ObjectType
    result: ValidationResult

    @property
    def is_valid(self) -> bool:
        return self.result.is_valid


@dataclass
class ValidationReport:
    """Aggregated validation results for a batch of payloads.

    Attributes:
        results: One PayloadResult per validated payload, in input order.

    Examples:
        >>> report = ValidationReport(results=[ok, broken])
        >>> report.has_errors()
        True
        >>> report.get_error_count()
        2
    """

    results: List[PayloadResult]

    def has_errors(self) -> bool:
        """Check if any payload failed validation."""
        return any(not r.is_valid for r in self.results)

    def get_error_count(self) -> int:
        """Count validation errors across all payloads."""
        return sum(r.result.error_count for r in self.results)

    def get_failed(self) -> List[PayloadResult]:
        """Get payloads that failed validation, in input order."""
        return [r for r in self.results if not r.is_valid]

    def summary(self) -> str:
        """Generate a concise text summary of validation results.

        Examples:
            >>> print(report.summary())
            Validation Summary:
              Payloads: 3 validated (2 valid, 1 invalid)
              Errors: 4
        """
        total = len(self.results)
        failed = len(self.get_failed())
        return (
            f"Validation Summary:\n"
            f"  Payloads: {total} validated ({total - failed} valid, {failed} invalid)\n"
            f"  Errors: {self.get_error_count()}"
        )

    def to_console_summary(self) -> str:
        """Generate a concise summary for console output.

        Returns:
            The overall summary plus each failed payload with its first error.
        """
        lines = [self.summary(), ""]

        failed = self.get_failed()
        if not failed:
            lines.append("✅ All payloads are valid!")
        else:
            lines.append("Failed Payloads:")
            for item in failed:
                lines.append(
                    f"❌ {item.source} ({item.object_type.value}): "
                    f"{item.result.error_count} errors"
                )
                lines.append(f"   - {item.result.errors[0].message}")

        return "\n".join(lines)

    def to_markdown(self) -> str:
        """Generate a detailed Markdown validation report.

        Returns:
            Markdown with a summary section, the list of valid payloads and
            every error of each invalid payload.
        """
        total = len(self.results)
        failed = self.get_failed()
        passed = [r for r in self.results if r.is_valid]
        errors = self.get_error_count()

        lines = [
            "# OCPI Validation Report",
            "",
            f"**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            "",
            "## Summary",
            "",
            f"- **Payloads:** {total}",
            f"- **Valid:** {len(passed)} ✅",
            f"- **Invalid:** {len(failed)} ❌" if failed else f"- **Invalid:** {len(failed)}",
            f"- **Errors:** {errors} ❌" if errors > 0 else f"- **Errors:** {errors}",
            "",
        ]

        if passed:
            lines.append("## ✅ Valid Payloads")
            lines.append("")
            for item in passed:
                lines.append(f"- **{item.source}** ({item.object_type.value})")
            lines.append("")

        if not failed:
            lines.append("## ✅ All Payloads Valid")
            lines.append("")
            lines.append("No validation issues found.")
            lines.append("")
        else:
            lines.append("## ❌ Errors")
            lines.append("")
            for item in failed:
                lines.append(
                    f"### ❌ {item.source} ({item.object_type.value}, "
                    f"{item.result.error_count} errors)"
                )
                lines.append("")
                for error in item.result.errors:
                    lines.append(f"- {error.message}")
                lines.append("")

        return "\n".join(lines)

    def to_json(self) -> str:
        """Generate a detailed JSON validation report."""
        failed = self.get_failed()
        report_data = {
            "metadata": {
                "generated_at": datetime.now().isoformat(),
            },
            "summary": {
                "payloads": len(self.results),
                "valid": len(self.results) - len(failed),
                "invalid": len(failed),
                "errors": self.get_error_count(),
            },
            "results": [
                {
                    "source": r.source,
                    "object_type": r.object_type.value,
                    "is_valid": r.is_valid,
                    "errors": [e.to_dict() for e in r.result.errors],
                }
                for r in self.results
            ],
        }
        return json.dumps(report_data, indent=2, ensure_ascii=False)

    def to_dataframe(self) -> pd.DataFrame:
        """Flatten the report into a DataFrame.

        One row per error; a valid payload contributes a single row with
        empty error columns.
        """
        rows = []
        for r in self.results:
            base = {"source": r.source, "object_type": r.object_type.value, "is_valid": r.is_valid}
            if r.is_valid:
                rows.append({**base, "kind": None, "field": None, "detail": None, "message": None})
                continue
            for error in r.result.errors:
                rows.append(
                    {
                        **base,
                        "kind": error.kind.value,
                        "field": error.field,
                        "detail": error.detail,
                        "message": error.message,
                    }
                )
        return pd.DataFrame(rows, columns=DATAFRAME_COLUMNS)


__all__ = ["PayloadResult", "ValidationReport", "DATAFRAME_COLUMNS"]
