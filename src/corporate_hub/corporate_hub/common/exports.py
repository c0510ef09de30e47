"""Tabular downloads (CSV / Excel) built with pandas."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Sequence

import pandas as pd

from ..core.exceptions import ValidationError

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_MIMETYPE = "text/csv"


@dataclass(frozen=True)
class ExportFile:
    filename: str
    mimetype: str
    content: bytes


def build_export(rows: Sequence[dict], *, columns: Sequence[str], basename: str, fmt: str, sheet_name: str) -> ExportFile:
    fmt = (fmt or "csv").strip().lower()
    df = pd.DataFrame(list(rows), columns=list(columns))

    if fmt == "csv":
        # utf-8-sig so Excel opens it with the right encoding
        content = df.to_csv(index=False).encode("utf-8-sig")
        return ExportFile(filename=f"{basename}.csv", mimetype=CSV_MIMETYPE, content=content)

    if fmt == "xlsx":
        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=sheet_name)
        return ExportFile(filename=f"{basename}.xlsx", mimetype=XLSX_MIMETYPE, content=output.getvalue())

    raise ValidationError("Export format must be csv or xlsx")
