"""Pydantic schemas for the report API.

This module defines request/response models for the report service and
API endpoints. Parse results themselves are returned as
:class:`credit_reports.schemas.internal.ParseResult`.
"""

from pydantic import BaseModel, Field

from credit_reports.schemas.internal import RAW_DATA_MAX_CHARS, BureauKind


# Request schemas


class ParseReportRequest(BaseModel):
    """Plain report text, as produced by PDF text extraction."""

    text: str = Field(..., description="Full text of the bureau report")


# Response schemas


class DetectResponse(BaseModel):
    bureau: BureauKind | None = Field(
        None, description="Detected bureau, or null when no bureau was recognized"
    )


class ReviewAccountRecord(BaseModel):
    """Simplified account record handed to the review workflow.

    Records below the confidence threshold are flagged for manual review
    before anything is written to the user's ledger.
    """

    bank_name: str
    account_type: str
    account_number_partial: str = Field(description="Last 4 characters of the account number")
    balance: float | None = None
    credit_limit: float | None = None
    open_date: str | None = Field(None, description="ISO YYYY-MM-DD")
    confidence_score: float = Field(ge=0.0, le=1.0)
    raw_data: str = Field(default="", max_length=RAW_DATA_MAX_CHARS)
    needs_review: bool
    discovered_account_name: str = Field(description='"<bank> - <account type>"')


class ErrorResponse(BaseModel):
    """Body returned for every handled error."""

    error_code: str = Field(description="Error code (e.g., PDF_002)")
    message: str = Field(description="Technical error message")
    user_message: str = Field(description="User-friendly error message")
    suggestion: str = Field(description="Actionable suggestion for user")
    retry_allowed: bool = Field(description="Whether retry is allowed")
