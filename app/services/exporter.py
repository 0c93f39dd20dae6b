"""Spreadsheet export of extracted resume data."""

import io
import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

import pandas as pd
from openpyxl.styles import Alignment, Font, PatternFill

logger = logging.getLogger(__name__)

SHEET_NAME = "Resume Data"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# (header, column width)
COLUMNS: tuple[tuple[str, int], ...] = (
    ("File Name", 30),
    ("Name", 25),
    ("Email", 30),
    ("Phone", 20),
    ("Location", 25),
    ("Skills", 50),
    ("Education", 50),
    ("Experience", 50),
    ("Upload Date", 20),
)

_HEADER_FONT = Font(bold=True, color="FFFFFFFF")
_HEADER_FILL = PatternFill(fill_type="solid", fgColor="FF4B5563")
_HEADER_ALIGNMENT = Alignment(horizontal="center", vertical="center")
_CELL_ALIGNMENT = Alignment(wrap_text=True, vertical="top")


def _format_date(value: Any) -> str:
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d")
    return str(value) if value else ""


def _to_row(resume: Mapping[str, Any]) -> list[str]:
    data = resume.get("extracted_data") or {}
    return [
        resume.get("file_name", ""),
        data.get("name") or "",
        data.get("email") or "",
        data.get("phone") or "",
        data.get("location") or "",
        ", ".join(data.get("skills") or ()),
        "; ".join(data.get("education") or ()),
        "; ".join(data.get("experience") or ()),
        _format_date(resume.get("uploaded_at")),
    ]


def export_to_excel(resumes: Mapping[str, Any] | Iterable[Mapping[str, Any]]) -> bytes:
    """Render one or more stored resumes as an ``.xlsx`` workbook.

    Each resume is a mapping shaped like a stored ResumeDocument
    (``file_name``, ``uploaded_at`` and an ``extracted_data`` mapping).
    Skills are joined with ", ", education and experience with "; ".

    Returns:
        The workbook bytes.
    """
    if isinstance(resumes, Mapping):
        resumes = [resumes]

    rows = [_to_row(resume) for resume in resumes]
    frame = pd.DataFrame(rows, columns=[header for header, _ in COLUMNS])

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        frame.to_excel(writer, sheet_name=SHEET_NAME, index=False)
        worksheet = writer.sheets[SHEET_NAME]

        for index, (_, width) in enumerate(COLUMNS, start=1):
            letter = worksheet.cell(row=1, column=index).column_letter
            worksheet.column_dimensions[letter].width = width

        for cell in worksheet[1]:
            cell.font = _HEADER_FONT
            cell.fill = _HEADER_FILL
            cell.alignment = _HEADER_ALIGNMENT

        for row in worksheet.iter_rows(min_row=2):
            for cell in row:
                cell.alignment = _CELL_ALIGNMENT

    logger.info("Exported %d resume(s) to Excel", len(rows))
    return buffer.getvalue()
