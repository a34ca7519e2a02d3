"""Error codes and user-friendly messages.

This module defines the error catalog for credit report processing.
Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

ERROR_CATALOG: dict[str, dict] = {
    "REPORT_001": {
        "code": "REPORT_001",
        "message": "Report text exceeds the configured size ceiling",
        "user_message": "This report is too large to process.",
        "suggestion": "Upload a single bureau report rather than a merged document.",
        "retry_allowed": False,
    },
    "REPORT_002": {
        "code": "REPORT_002",
        "message": "Report text is empty",
        "user_message": "We couldn't find any text in this report.",
        "suggestion": "If the PDF is a scanned image, run it through OCR first.",
        "retry_allowed": False,
    },
    "PDF_001": {
        "code": "PDF_001",
        "message": "PDF text extraction failed: corrupted or invalid file",
        "user_message": "This PDF appears to be corrupted or damaged.",
        "suggestion": "Try downloading the report again from the bureau's website.",
        "retry_allowed": True,
    },
    "PDF_002": {
        "code": "PDF_002",
        "message": "PDF is password-protected",
        "user_message": "This report requires a password.",
        "suggestion": "Please provide the PDF password and try again.",
        "retry_allowed": True,
    },
    "PDF_003": {
        "code": "PDF_003",
        "message": "Incorrect password provided for encrypted PDF",
        "user_message": "The password you provided is incorrect.",
        "suggestion": "Bureau reports are usually protected with your date of birth or PAN. Check and try again.",
        "retry_allowed": True,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request data failed validation",
        "user_message": "The request data appears to be incomplete or invalid.",
        "suggestion": "Please check your input and try again.",
        "retry_allowed": True,
    },
    "API_001": {
        "code": "API_001",
        "message": "Invalid file type uploaded",
        "user_message": "Only PDF files are supported.",
        "suggestion": "Please upload the report PDF exactly as downloaded from the bureau.",
        "retry_allowed": False,
    },
    "API_002": {
        "code": "API_002",
        "message": "File size exceeds maximum limit",
        "user_message": "The file is too large.",
        "suggestion": "Please upload a smaller report file.",
        "retry_allowed": False,
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Internal server error",
        "user_message": "Something went wrong on our side while reading this report.",
        "suggestion": "Please try again later or contact support.",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Unknown codes resolve to a generic, retryable definition.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_user_message(error_code: str) -> str:
    return get_error(error_code)["user_message"]


def is_retryable(error_code: str) -> bool:
    return get_error(error_code)["retry_allowed"]
