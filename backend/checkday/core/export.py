"""
CSV export of recap rows
"""
import csv
import io
from typing import Sequence

from ..models.checklist import RecapRow
from .dates import day_key

CSV_HEADER = ("date", "done", "total", "percent", "fullDone")


def recap_to_csv(rows: Sequence[RecapRow]) -> str:
    """Render rows as CSV, quoting fields that hold a comma, quote or newline"""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(CSV_HEADER)
    for row in rows:
        writer.writerow([
            day_key(row.date),
            row.done,
            row.total,
            row.percent,
            "yes" if row.full_done else "no",
        ])
    return buf.getvalue().rstrip("\n")


def recap_filename(days: int, today_key: str) -> str:
    return f"recap_{days}days_{today_key}.csv"
