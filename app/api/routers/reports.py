from __future__ import annotations

import base64
import binascii
import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from app.api.deps import get_download_report_use_case, require_subscription
from app.application.use_cases.download_report import DownloadReportUseCase
from app.domain.entities.user import UserSession
from app.domain.exceptions import UpstreamUnavailableError


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/reports/{report_type}")
def download_report(
    report_type: str,
    session: UserSession = Depends(require_subscription()),
    use_case: DownloadReportUseCase = Depends(get_download_report_use_case),
):
    try:
        report = use_case.execute(report_type=report_type)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except UpstreamUnavailableError as exc:
        logger.warning(
            "reports_router: download_failed user=%s report_type=%s detail=%s",
            session.user_id,
            report_type,
            exc,
        )
        raise HTTPException(status_code=500, detail="Failed to download report") from exc

    try:
        content = base64.b64decode(report.content, validate=True)
    except (binascii.Error, ValueError) as exc:
        logger.warning("reports_router: invalid_content report_type=%s", report_type)
        raise HTTPException(status_code=500, detail="Failed to download report") from exc

    return Response(
        content=content,
        media_type=report.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{_safe_filename(report.filename)}"'},
    )


def _safe_filename(filename: str) -> str:
    return filename.replace('"', "").replace("\r", "").replace("\n", "") or "report"
