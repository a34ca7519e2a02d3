"""Report endpoints for parsing, PDF upload, bureau detection and review records."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from starlette.concurrency import run_in_threadpool

from credit_reports.core.exceptions import ReportProcessingError
from credit_reports.schemas.internal import ParseResult
from credit_reports.schemas.report import (
    DetectResponse,
    ErrorResponse,
    ParseReportRequest,
    ReviewAccountRecord,
)
from credit_reports.services.report import CreditReportService

router = APIRouter(prefix="/reports", tags=["reports"])

PDF_MAGIC_BYTES = b"%PDF-"

ERROR_RESPONSES = {
    400: {"description": "Bad request (invalid file, wrong password, etc.)", "model": ErrorResponse},
    413: {"description": "Report too large", "model": ErrorResponse},
    422: {"description": "Validation error", "model": ErrorResponse},
}


def get_report_service(request: Request) -> CreditReportService:
    """Service bound to the registry built at startup."""
    return CreditReportService(request.app.state.registry, settings=request.app.state.settings)


ReportService = Annotated[CreditReportService, Depends(get_report_service)]


@router.post(
    "/parse",
    response_model=ParseResult,
    summary="Parse credit report text",
    responses=ERROR_RESPONSES,
)
def parse_report(body: ParseReportRequest, service: ReportService) -> ParseResult:
    """
    Parse the text of a CIBIL, Experian, CRIF or Equifax report.

    Unrecognized layouts still go through the generic extractor, so the
    response is always a ParseResult; problems are listed in
    ``summary.errors``.
    """
    return service.parse_text(body.text)


@router.post(
    "/upload",
    response_model=ParseResult,
    summary="Upload a credit report PDF",
    description="""
    Upload a bureau report PDF and parse it.

    ## Error Codes
    - PDF_001: PDF could not be read
    - PDF_002: PDF requires password - retry with password
    - PDF_003: Incorrect password - verify and retry
    - REPORT_002: PDF has no extractable text
    - API_001: Invalid file type
    - API_002: File too large
    """,
    responses=ERROR_RESPONSES,
)
async def upload_report(
    service: ReportService,
    file: Annotated[UploadFile, File(description="Report PDF")],
    password: Annotated[str | None, Form(description="Optional PDF password")] = None,
) -> ParseResult:
    pdf_bytes = await file.read()

    if len(pdf_bytes) > service.settings.pdf_max_size_mb * 1024 * 1024:
        raise ReportProcessingError(
            "API_002",
            details={"size": len(pdf_bytes)},
            http_status=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        )
    if not pdf_bytes.startswith(PDF_MAGIC_BYTES):
        raise ReportProcessingError(
            "API_001",
            details={"content_type": file.content_type},
            http_status=status.HTTP_400_BAD_REQUEST,
        )

    return await run_in_threadpool(service.parse_pdf, pdf_bytes, password)


@router.post(
    "/review-records",
    response_model=list[ReviewAccountRecord],
    summary="Parse report text into review records",
    responses=ERROR_RESPONSES,
)
def review_records(body: ParseReportRequest, service: ReportService) -> list[ReviewAccountRecord]:
    """Simplified per-account records; low-confidence ones are flagged ``needs_review``."""
    return service.to_review_records(service.parse_text(body.text))


@router.post("/detect", response_model=DetectResponse, summary="Detect the issuing bureau")
def detect_bureau(body: ParseReportRequest, service: ReportService) -> DetectResponse:
    return DetectResponse(bureau=service.detect(body.text))
