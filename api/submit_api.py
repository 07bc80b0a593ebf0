"""
Submit API endpoint
Nhận bài làm, chấm điểm, tạo báo cáo và gửi lên Telegram
"""

from datetime import datetime, timezone
from typing import Optional, Tuple
import logging
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from api.schemas import (
    ErrorResponse,
    SubmissionResponse,
    SubmissionResultData,
)
from api.shared import get_notifier, get_report_service
from models.submission import Submission
from services.report_service import ReportService
from services.scoring_service import ScoringService
from services.submission_parser_service import (
    SubmissionParserService,
    SubmissionValidationError,
)
from services.telegram_service import TelegramNotifier, TelegramDeliveryError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Submission"])
SUBMIT_PATH = "/api/submit"

ALLOWED_METHODS = "POST, OPTIONS"
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ALLOWED_METHODS,
    "Access-Control-Allow-Headers": "Content-Type",
}


def error_response(status_code: int, error: str, details=None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=CORS_HEADERS,
    )


def deliver_report(report: str, notifier: TelegramNotifier) -> Tuple[bool, Optional[str]]:
    """
    Gửi báo cáo lên Telegram, lỗi không làm hỏng request

    Returns:
        (telegram_sent, telegram_error)
    """
    if not notifier.is_configured:
        logger.info("Telegram not configured, skipping delivery")
        logger.debug("Report that would be sent to Telegram:\n%s", report)
        return False, None

    try:
        parts = notifier.send_report(report)
    except TelegramDeliveryError as e:
        logger.warning("Telegram delivery failed: %s", e)
        return False, str(e)

    logger.info("Telegram notification sent (%d message(s))", parts)
    return True, None


def process_submission(submission: Submission,
                       notifier: TelegramNotifier,
                       report_service: ReportService,
                       submitted_at: Optional[datetime] = None) -> SubmissionResponse:
    """
    Chấm điểm -> tạo báo cáo -> gửi Telegram -> dựng response
    """
    submitted_at = submitted_at or datetime.now(timezone.utc)

    summary = ScoringService.calculate_score(submission)
    reason = ScoringService.classify_reason(submission)
    report = report_service.render_report(submission, summary, reason, submitted_at)

    telegram_sent, telegram_error = deliver_report(report, notifier)

    logger.info(
        "Test submitted by %s: %s (%d%%), reason=%s, telegram_sent=%s",
        submission.student_name, summary.score, summary.percentage,
        reason.value, telegram_sent,
    )

    return SubmissionResponse(
        data=SubmissionResultData(
            studentName=submission.student_name,
            score=summary.score,
            percentage=summary.percentage,
            telegramSent=telegram_sent,
            telegramError=telegram_error,
        )
    )


@router.api_route(
    "/submit",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    response_model=SubmissionResponse,
    responses={400: {"model": ErrorResponse}, 405: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Nộp bài kiểm tra",
)
async def submit_test(
    request: Request,
    notifier: TelegramNotifier = Depends(get_notifier),
    report_service: ReportService = Depends(get_report_service),
):
    """
    Nộp bài kiểm tra đã hoàn thành

    - OPTIONS: preflight, luôn trả 200 không có body
    - POST: chấm điểm và gửi báo cáo
    - Method khác: 405
    """
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)

    if request.method != "POST":
        logger.warning("Method not allowed: %s", request.method)
        return error_response(405, "Method not allowed")

    try:
        body = await request.body()
        submission = SubmissionParserService.parse(body)
        logger.info(
            "Received submission from %s (%d questions)",
            submission.student_name, len(submission.questions),
        )

        result = await run_in_threadpool(process_submission, submission, notifier, report_service)
        return JSONResponse(status_code=200, content=result.model_dump(), headers=CORS_HEADERS)

    except SubmissionValidationError as e:
        logger.warning("Rejected submission: %s", e.error)
        return error_response(e.status_code, e.error, e.details)
    except Exception as e:
        logger.exception("Unexpected error while processing submission")
        return error_response(500, "Internal server error", str(e))
