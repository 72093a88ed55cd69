from __future__ import annotations

import logging

from app.application.ports.sheets_backend_port import SheetsBackendPort
from app.domain.exceptions import UpstreamUnavailableError


logger = logging.getLogger(__name__)


class GetLogoUseCase:
    def __init__(self, *, sheets_port: SheetsBackendPort):
        self._sheets_port = sheets_port

    def execute(self) -> str:
        try:
            return self._sheets_port.get_logo_image()
        except UpstreamUnavailableError as exc:
            logger.warning("get_logo: upstream_failed detail=%s", exc)
            return ""
