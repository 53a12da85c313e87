"""Attendance report export (CSV / Excel) via pandas."""
import io
from typing import Iterable

import pandas as pd

REPORT_COLUMNS = ["Date", "Student ID", "Student Name", "Status", "Remarks"]

CSV_MEDIA_TYPE = "text/csv"
EXCEL_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def report_frame(records: Iterable, students: Iterable) -> pd.DataFrame:
    """One row per attendance record, ordered by date then student name."""
    names = {str(s.id): s.name for s in students}
    codes = {str(s.id): s.student_code for s in students}
    data = [
        {
            "Date": r.date.isoformat(),
            "Student ID": codes.get(r.student_id, r.student_id),
            "Student Name": names.get(r.student_id, "Unknown"),
            "Status": getattr(r.status, "value", r.status),
            "Remarks": r.remarks or "",
        }
        for r in records
    ]
    df = pd.DataFrame(data, columns=REPORT_COLUMNS)
    return df.sort_values(["Date", "Student Name"], kind="stable").reset_index(drop=True)


def render_report(df: pd.DataFrame, format: str) -> tuple[bytes, str, str]:
    """Serialized report, media type and file extension."""
    if format == "csv":
        stream = io.StringIO()
        df.to_csv(stream, index=False)
        return stream.getvalue().encode("utf-8"), CSV_MEDIA_TYPE, "csv"
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Attendance")
    return output.getvalue(), EXCEL_MEDIA_TYPE, "xlsx"
