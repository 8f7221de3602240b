# utils.py
"""
Utility helpers: CSV conversion, report writing, and console output.

- Flattens inspector2 findings into fixed 15-column CSV rows.
- Uses Rich for the colourful summary table printed after a report is written.
"""

import csv
import io
import logging
import os
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from config import MISSING_VALUE, REPORT_FILENAME_TEMPLATE
from models import FindingScenario

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "AWS Account ID", "Severity", "CVE ID", "CWEs", "EPSS Score",
    "Exploit Available", "Remediation",
    "Resource Type", "Resource ID", "Registry", "Repository Name",
    "Image ID", "Image OS", "Image Tags", "Pushed At",
]


def _or_missing(value: Any) -> str:
    return str(value) if value else MISSING_VALUE


def _dig(data: Any, *keys: str) -> Any:
    """
    Walk nested dicts, returning None as soon as a level is missing.
    """
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def finding_to_row(finding: Dict[str, Any]) -> List[str]:
    """
    Project one inspector2 finding onto the CSV columns. Missing values become "-".
    """
    vulnerability = finding.get("packageVulnerabilityDetails") or {}
    details = vulnerability.get("vulnerabilityDetails") or {}
    resources = finding.get("resources") or []
    resource = resources[0] if resources else {}

    cwes = _dig(details, "cvss", "cweIds") or []
    cwe_text = ", ".join(str(c) for c in cwes) if cwes else MISSING_VALUE

    remediation = _dig(finding, "remediation", "recommendation", "text")
    # Commas are swapped before quoting so remediation cells stay unquoted
    remediation_text = remediation.replace(",", ";") if remediation else MISSING_VALUE

    image = _dig(resource, "details", "awsEcrContainerImage")
    registry = repository = image_id = image_os = image_tags = pushed_at = MISSING_VALUE
    if image:
        registry = _or_missing(image.get("registry"))
        repository = _or_missing(image.get("repositoryName"))
        image_id = _or_missing(image.get("imageId"))
        image_os = _or_missing(image.get("imageOs"))
        image_tags = _or_missing("; ".join(image.get("imageTags") or []))
        pushed_at = _or_missing(image.get("pushedAt"))

    return [
        _or_missing(finding.get("awsAccountId")),
        _or_missing(finding.get("severity")),
        _or_missing(vulnerability.get("vulnerabilityId")),
        cwe_text,
        _or_missing(_dig(details, "epss", "score")),
        _or_missing(finding.get("exploitAvailable")),
        remediation_text,
        _or_missing(resource.get("type")),
        _or_missing(resource.get("id")),
        registry,
        repository,
        image_id,
        image_os,
        image_tags,
        pushed_at,
    ]


def _csv_line(row: List[str]) -> str:
    # The default "\r\n" terminator makes QUOTE_MINIMAL quote both CR and LF
    buf = io.StringIO()
    csv.writer(buf).writerow(row)
    return buf.getvalue()[:-2]


def findings_to_csv(findings: List[Dict[str, Any]]) -> Optional[str]:
    """
    Render findings as CSV text with a header row. Returns None for an empty list.

    The csv module handles quoting: cells with a comma, quote or line break are
    wrapped in double quotes and embedded quotes are doubled. None becomes "".
    """
    if not findings:
        return None
    rows = [CSV_HEADERS] + [finding_to_row(f) for f in findings]
    return "\n".join(_csv_line(row) for row in rows)


def report_filename(scenario: FindingScenario, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    timestamp = now.replace(microsecond=0).strftime("%Y-%m-%dT%H:%M:%S").replace(":", "-")
    return REPORT_FILENAME_TEMPLATE.format(label=scenario.label, timestamp=timestamp)


def save_csv_report(csv_text: str, scenario: FindingScenario, out_dir: str = ".",
                    now: Optional[datetime] = None) -> Optional[str]:
    """
    Write the CSV report and return its path, or None if the file could not be written.
    An existing file with the same name is overwritten.
    """
    path = os.path.join(out_dir, report_filename(scenario, now))
    try:
        os.makedirs(out_dir, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as fh:
            fh.write(csv_text)
    except OSError as e:
        logger.error("Error writing CSV file: %s", e)
        return None
    return path


# --- Console printing with color ---

def _rich_severity_text(severity: str) -> Text:
    if severity == "CRITICAL":
        return Text(severity, style="bold red")
    if severity == "HIGH":
        return Text(severity, style="bold yellow")
    return Text(severity, style="green")


def print_summary_and_report_path(console: Console, findings: List[Dict[str, Any]],
                                  report_path: Optional[str]) -> None:
    """
    Print per-severity counts, the total, and where the report went.
    """
    counts = Counter(f.get("severity") or MISSING_VALUE for f in findings)
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Severity")
    table.add_column("Findings", justify="right")
    for severity, count in sorted(counts.items()):
        table.add_row(_rich_severity_text(severity), str(count))
    console.print(table)
    console.print(f"Total findings: {len(findings)}")
    if report_path:
        console.print(f"\nReport generated successfully: {report_path}")
