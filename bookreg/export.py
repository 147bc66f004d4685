# bookreg/export.py
from datetime import date
from io import BytesIO
from typing import List, Optional

import pandas as pd

from .models import LABELS, Submission

SHEET_NAME = "도서등록"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def to_dataframe(submissions: List[Submission]) -> pd.DataFrame:
    headers = Submission.headers()
    df = pd.DataFrame([s.to_row() for s in submissions], columns=headers)
    return df.fillna("").rename(columns=LABELS)


def to_xlsx_bytes(submissions: List[Submission]) -> bytes:
    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        to_dataframe(submissions).to_excel(writer, sheet_name=SHEET_NAME, index=False)
    return buffer.getvalue()


def export_filename(today: Optional[date] = None) -> str:
    return f"도서등록_{(today or date.today()).isoformat()}.xlsx"
