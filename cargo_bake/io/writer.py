"""
Writer — serialize the comparison report to JSON.
"""
import json
from pathlib import Path

from cargo_bake.io.schema import ComparisonReport


def write_report(report: ComparisonReport, report_path: Path) -> Path:
    """
    Write *report* to *report_path*, creating parent directories.

    Returns the path written.
    """
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(
        json.dumps(
            report.model_dump(mode="json"),
            indent=2,
            sort_keys=True,
        )
        + "\n"
    )
    return report_path
