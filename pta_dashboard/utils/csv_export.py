# pta_dashboard/utils/csv_export.py
import pandas as pd
from typing import Iterable

from ..models.student import Student

STUDENT_EXPORT_HEADERS = ["Name", "Class", "Parent Name", "Payment Status", "Payment Date"]


def students_to_csv(students: Iterable[Student]) -> str:
    """Render the student payment sheet. Parents must already be loaded."""
    rows = [
        [
            student.name,
            student.class_name,
            student.parent.name if student.parent else "N/A",
            "Paid" if student.payment_status else "Unpaid",
            student.payment_date.isoformat() if student.payment_date else "N/A",
        ]
        for student in students
    ]

    df = pd.DataFrame(rows, columns=STUDENT_EXPORT_HEADERS)
    return df.to_csv(index=False, lineterminator="\n")
