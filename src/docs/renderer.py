# src/docs/renderer.py — v1
"""Render an AI analysis payload into a documentation section.

The payload is the JSON object a batch worker gets back from its
provider (``testTitle``, ``summary``, ``tags``, ``functionalitiesCovered``,
``dataUsed``, ``stepsAndVerifications``). Missing values render as
``{data not found}`` so the section layout never changes shape.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from autodocumentator.docs.models import DocumentationEntry

NOT_FOUND = "{data not found}"

_DATA_ROWS = (
    ("Users", "users"),
    ("Applications", "applications"),
    ("Sessions", "sessions"),
    ("API Payloads", "apiPayloads"),
    ("Other Data", "otherData"),
)


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _bullets(items: list[Any]) -> str:
    if not items:
        return f"- {NOT_FOUND}"
    return "\n".join(f"- {item}" for item in items)


def _inline_code(items: list[Any]) -> str:
    if not items:
        return NOT_FOUND
    return " ".join(f"`{item}`" for item in items)


def _steps_table(steps: list[Any]) -> str:
    rows = []
    for step in steps:
        if not isinstance(step, dict):
            continue
        rows.append(
            f"| **{step.get('step', NOT_FOUND)}** "
            f"| {step.get('action') or NOT_FOUND} "
            f"| {step.get('verification') or NOT_FOUND} |"
        )
    if not rows:
        return f"| {NOT_FOUND} | {NOT_FOUND} | {NOT_FOUND} |"
    return "\n".join(rows)


def render_section(file_name: str, analysis: dict[str, Any]) -> str:
    """Render one ``## 🧪`` section for ``file_name``."""
    data_used = analysis.get("dataUsed") or {}
    if not isinstance(data_used, dict):
        data_used = {}
    data_rows = "\n".join(
        f"| **{label}** | {', '.join(map(str, _as_list(data_used.get(key)))) or NOT_FOUND} |"
        for label, key in _DATA_ROWS
    )

    return (
        f"## 🧪 `{file_name}` → `{analysis.get('testTitle') or NOT_FOUND}`\n\n"
        f"**Summary:** {analysis.get('summary') or NOT_FOUND}\n\n"
        f"**Tags:** {_inline_code(_as_list(analysis.get('tags')))}\n\n"
        "**Functionalities Covered:**\n"
        f"{_bullets(_as_list(analysis.get('functionalitiesCovered')))}\n\n"
        "**Test Data Used:**\n\n"
        "| Data Type | Details |\n"
        "|-----------|---------|\n"
        f"{data_rows}\n\n"
        "**Steps & Verifications:**\n\n"
        "| Step | Action | Verification |\n"
        "|------|--------|--------------|\n"
        f"{_steps_table(_as_list(analysis.get('stepsAndVerifications')))}\n\n"
        "---"
    )


def score_analysis(analysis: dict[str, Any]) -> int:
    """Completeness score (0-100) of an analysis payload."""
    data_used = analysis.get("dataUsed") or {}
    if not isinstance(data_used, dict):
        data_used = {}

    score = 0
    summary = analysis.get("summary")
    if isinstance(summary, str) and len(summary) > 50:
        score += 20
    if _as_list(analysis.get("functionalitiesCovered")):
        score += 15
    if _as_list(analysis.get("stepsAndVerifications")):
        score += 25
    if _as_list(data_used.get("users")):
        score += 10
    if _as_list(data_used.get("applications")):
        score += 10
    if _as_list(data_used.get("otherData")):
        score += 10
    if _as_list(analysis.get("tags")):
        score += 10
    return score


def build_entry(file_path: str, analysis: dict[str, Any]) -> DocumentationEntry:
    """Build the batch entry a worker writes for one analysed file."""
    file_name = Path(file_path).name
    return DocumentationEntry(
        file_name=file_name,
        file_path=file_path,
        markdown=render_section(file_name, analysis),
        testName=analysis.get("testTitle"),
        tags=_as_list(analysis.get("tags")),
        score=score_analysis(analysis),
        aiResult=analysis,
    )
