from __future__ import annotations

import csv
import io
from typing import Protocol, Sequence

import pandas as pd

from ..core.constants import EXPORT_COLUMNS, EXPORT_SHEET_NAME
from .model import ExportFile


class ExportSink(Protocol):
    def write(self, rows: Sequence[dict], destination_name: str) -> ExportFile:
        raise NotImplementedError


class ExcelExportSink(ExportSink):
    mimetype = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

    def write(self, rows: Sequence[dict], destination_name: str) -> ExportFile:
        df = pd.DataFrame(list(rows), columns=list(EXPORT_COLUMNS))
        out = io.BytesIO()
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=EXPORT_SHEET_NAME)
        return ExportFile(filename=f"{destination_name}.xlsx", mimetype=self.mimetype, content=out.getvalue())


class CsvExportSink(ExportSink):
    mimetype = "text/csv"

    def write(self, rows: Sequence[dict], destination_name: str) -> ExportFile:
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=list(EXPORT_COLUMNS))
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
        return ExportFile(
            filename=f"{destination_name}.csv",
            mimetype=self.mimetype,
            content=out.getvalue().encode("utf-8-sig"),
        )
