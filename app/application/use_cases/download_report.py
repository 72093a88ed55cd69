from __future__ import annotations

import re

from app.application.ports.sheets_backend_port import SheetsBackendPort
from app.domain.entities.report import Report


_REPORT_TYPE_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


class DownloadReportUseCase:
    def __init__(self, *, sheets_port: SheetsBackendPort):
        self._sheets_port = sheets_port

    def execute(self, *, report_type: str) -> Report:
        if not _REPORT_TYPE_RE.match(report_type):
            raise ValueError("Invalid report type.")
        return self._sheets_port.download_report(report_type=report_type)
