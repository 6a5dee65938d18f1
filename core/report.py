"""Line-based formatting of the narrative face-reading report."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from prompts.templates import DISCLAIMER_MARKER, FACIAL_REGIONS, REPORT_SECTIONS


class LineKind(str, Enum):
    HEADING = "heading"
    SUBHEADING = "subheading"
    BULLET = "bullet"
    DISCLAIMER = "disclaimer"
    PARAGRAPH = "paragraph"


@dataclass
class ReportLine:
    kind: LineKind
    text: str


def classify_line(line: str) -> ReportLine:
    if line.startswith("**") and line.endswith("**") and len(line) > 4:
        return ReportLine(LineKind.HEADING, line.replace("**", ""))
    if line.startswith("* **") and line.endswith("**"):
        return ReportLine(LineKind.SUBHEADING, line[4:-2])
    if line.strip().startswith("*"):
        return ReportLine(LineKind.BULLET, line.replace("*", "•", 1))
    if DISCLAIMER_MARKER in line:
        return ReportLine(LineKind.DISCLAIMER, line)
    return ReportLine(LineKind.PARAGRAPH, line)


def format_report(text: str) -> list[ReportLine]:
    """Split the report into typed lines for rendering."""
    return [classify_line(line) for line in text.split("\n")]


def missing_markers(text: str) -> list[str]:
    """Section headers, facial regions and the disclaimer absent from ``text``.

    The report structure is requested in the prompt but never enforced; this
    is used for logging and tests only.
    """
    missing = [f"**{section}**" for section in REPORT_SECTIONS if f"**{section}**" not in text]
    missing += [region for region in FACIAL_REGIONS if region.split(" (")[0] not in text]
    if DISCLAIMER_MARKER not in text:
        missing.append(DISCLAIMER_MARKER)
    return missing
