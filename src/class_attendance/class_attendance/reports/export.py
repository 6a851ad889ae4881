from __future__ import annotations

import csv
import io
from datetime import date

from .aggregator import GroupRow, ReportData

OVERALL_HEADER = ["Total Records", "Present", "Late", "Absent", "Attendance Rate"]
STUDENT_HEADER = ["Name", "Student ID", "Course", "Total", "Present", "Late", "Absent", "Attendance Rate"]
SUBJECT_HEADER = ["Subject", "Code", "Total", "Present", "Late", "Absent", "Attendance Rate"]


def format_rate(rate: float) -> str:
    return f"{rate:.2f}%"


def report_filename(start: date, end: date) -> str:
    return f"attendance-report-{start:%Y-%m-%d}-to-{end:%Y-%m-%d}.csv"


def _counts(g: GroupRow) -> list:
    return [g.total, g.present, g.late, g.absent, format_rate(g.rate)]


def render_csv(report: ReportData, *, start: date, end: date) -> str:
    """Render the three report blocks as CSV text, one blank line between blocks."""

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")

    writer.writerow(["Attendance Report"])
    writer.writerow([f"Period: {start:%Y-%m-%d} to {end:%Y-%m-%d}"])
    writer.writerow([])

    o = report.overall
    writer.writerow(["Overall Statistics"])
    writer.writerow(OVERALL_HEADER)
    writer.writerow([o.total, o.present, o.late, o.absent, format_rate(o.rate)])
    writer.writerow([])

    writer.writerow(["Student Attendance Report"])
    writer.writerow(STUDENT_HEADER)
    for g in report.by_student:
        writer.writerow([g.name or "Unknown", g.code or "N/A", g.course or "N/A", *_counts(g)])
    writer.writerow([])

    writer.writerow(["Subject Attendance Report"])
    writer.writerow(SUBJECT_HEADER)
    for g in report.by_subject:
        writer.writerow([g.name or "Unknown", g.code or "N/A", *_counts(g)])

    return out.getvalue()
