from __future__ import annotations

import io
import logging
import zipfile
from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

import pandas as pd
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from werkzeug.utils import secure_filename

from ..common.datetime_utils import format_time_of_day, minute_of_day
from ..core.constants import EXPORT_COLUMN_WIDTHS, EXPORT_SHEET_NAME, NOT_RECORDED
from ..core.enums import Shift
from ..core.exceptions import NothingToExportError
from ..shifts.registry import ShiftRegistry
from .model import AggregatedDayRecord

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
ZIP_MIMETYPE = "application/zip"

LATE_FILL = PatternFill(start_color="F8CBAD", end_color="F8CBAD", fill_type="solid")
LATE_FONT = Font(bold=True, color="9C0006")
HEADER_FONT = Font(bold=True)

# Sheet columns holding the check-in times (1-based).
MORNING_IN_COL = 3
AFTERNOON_IN_COL = 5


@dataclass(frozen=True)
class ExportRow:
    employee: str
    work_date: date
    morning_in: str
    morning_out: str
    afternoon_in: str
    afternoon_out: str
    morning_late: bool = False
    afternoon_late: bool = False


@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    content: bytes
    mimetype: str = XLSX_MIMETYPE


def _columns(by_day: bool) -> list[str]:
    return [
        "Employee",
        "Day" if by_day else "Date",
        "Morning Check-in",
        "Morning Check-out",
        "Afternoon Check-in",
        "Afternoon Check-out",
    ]


class ReportExporter:
    """Turn aggregated rows into an "Attendance" spreadsheet.

    Late check-ins are highlighted on the sheet; empty rows are left out.
    """

    def __init__(self, shifts: ShiftRegistry):
        self._shifts = shifts

    def is_late(self, shift: Shift, check_in: Optional[datetime]) -> bool:
        if check_in is None:
            return False
        return minute_of_day(check_in) > minute_of_day(self._shifts.rule_for(shift).late_after)

    def build_rows(
        self,
        rows: Sequence[AggregatedDayRecord],
        *,
        employee_id: Optional[int] = None,
    ) -> list[ExportRow]:
        selected = [
            r for r in rows
            if r.has_attendance and (employee_id is None or r.user_id == employee_id)
        ]
        out = []
        for r in selected:
            m_in = r.morning.check_in_time if r.morning else None
            a_in = r.afternoon.check_in_time if r.afternoon else None
            out.append(
                ExportRow(
                    employee=r.full_name,
                    work_date=r.work_date,
                    morning_in=format_time_of_day(m_in, NOT_RECORDED),
                    morning_out=format_time_of_day(r.morning.check_out_time if r.morning else None, NOT_RECORDED),
                    afternoon_in=format_time_of_day(a_in, NOT_RECORDED),
                    afternoon_out=format_time_of_day(r.afternoon.check_out_time if r.afternoon else None, NOT_RECORDED),
                    morning_late=self.is_late(Shift.MORNING, m_in),
                    afternoon_late=self.is_late(Shift.AFTERNOON, a_in),
                )
            )
        out.sort(key=lambda x: (x.employee, x.work_date))
        return out

    def export(
        self,
        rows: Sequence[AggregatedDayRecord],
        *,
        period_label: str,
        employee_id: Optional[int] = None,
        by_day: bool = False,
        tag_with_id: bool = False,
    ) -> ExportArtifact:
        export_rows = self.build_rows(rows, employee_id=employee_id)
        if not export_rows:
            raise NothingToExportError("There are no attendance records to export for this selection")

        if employee_id is None:
            who = "All"
        else:
            who = secure_filename(export_rows[0].employee) or f"employee_{employee_id}"
            if tag_with_id:
                who = f"{who}_{employee_id}"
        filename = secure_filename(f"Attendance_{who}_{period_label}.xlsx")

        content = self._write_workbook(export_rows, by_day=by_day)
        logger.info("exported %s rows to %s", len(export_rows), filename)
        return ExportArtifact(filename=filename, content=content)

    def export_individually(
        self,
        rows: Sequence[AggregatedDayRecord],
        *,
        period_label: str,
        by_day: bool = False,
    ) -> list[ExportArtifact]:
        """One workbook per employee with attendance in the period.

        Employees whose names reduce to the same file name get their id
        appended, so every workbook keeps its own name inside the bundle.
        """
        names = {r.user_id: r.full_name for r in rows if r.has_attendance}
        if not names:
            raise NothingToExportError("There are no attendance records to export for this selection")

        employee_ids = sorted(names, key=lambda uid: (names[uid], uid))
        name_counts = Counter(secure_filename(names[uid]) for uid in employee_ids)
        return [
            self.export(
                rows,
                period_label=period_label,
                employee_id=uid,
                by_day=by_day,
                tag_with_id=name_counts[secure_filename(names[uid])] > 1,
            )
            for uid in employee_ids
        ]

    @staticmethod
    def bundle(artifacts: Sequence[ExportArtifact], *, filename: str) -> ExportArtifact:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for a in artifacts:
                zf.writestr(a.filename, a.content)
        return ExportArtifact(filename=secure_filename(filename), content=buf.getvalue(), mimetype=ZIP_MIMETYPE)

    def _write_workbook(self, export_rows: Sequence[ExportRow], *, by_day: bool) -> bytes:
        df = pd.DataFrame(
            [
                [
                    r.employee,
                    r.work_date.day if by_day else r.work_date.isoformat(),
                    r.morning_in,
                    r.morning_out,
                    r.afternoon_in,
                    r.afternoon_out,
                ]
                for r in export_rows
            ],
            columns=_columns(by_day),
        )

        out = io.BytesIO()
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=EXPORT_SHEET_NAME, index=False)
            ws = writer.sheets[EXPORT_SHEET_NAME]

            for idx, width in enumerate(EXPORT_COLUMN_WIDTHS, start=1):
                ws.column_dimensions[get_column_letter(idx)].width = width
            for cell in ws[1]:
                cell.font = HEADER_FONT

            # Row 1 is the header.
            for sheet_row, r in enumerate(export_rows, start=2):
                for col, late in ((MORNING_IN_COL, r.morning_late), (AFTERNOON_IN_COL, r.afternoon_late)):
                    if late:
                        cell = ws.cell(row=sheet_row, column=col)
                        cell.fill = LATE_FILL
                        cell.font = LATE_FONT
        return out.getvalue()
