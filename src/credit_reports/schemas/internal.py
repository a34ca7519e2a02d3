"""Internal data schemas for parsed credit bureau reports.

These models are the output of the parsing engine. Every instance is
created and discarded within a single ``parse_report`` call.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

RAW_DATA_MAX_CHARS = 500


class BureauKind(str, Enum):
    """Credit bureau that issued a report."""

    CIBIL = "CIBIL"
    EXPERIAN = "Experian"
    EQUIFAX = "Equifax"
    CRIF = "CRIF"
    UNKNOWN = "Unknown"


class AccountType(str, Enum):
    CREDIT_CARD = "credit_card"
    LOAN = "loan"
    SAVINGS = "savings"
    CURRENT = "current"
    INVESTMENT = "investment"
    OVERDRAFT = "overdraft"
    UNKNOWN = "unknown"


class AccountSubType(str, Enum):
    """Loan flavours plus the secured/unsecured split for cards."""

    PERSONAL_LOAN = "personal_loan"
    HOME_LOAN = "home_loan"
    AUTO_LOAN = "auto_loan"
    BUSINESS_LOAN = "business_loan"
    EDUCATION_LOAN = "education_loan"
    GOLD_LOAN = "gold_loan"
    SECURED_CARD = "secured_card"
    UNSECURED_CARD = "unsecured_card"


class AccountStatus(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"
    SETTLED = "settled"
    WRITTEN_OFF = "written_off"
    DORMANT = "dormant"
    UNKNOWN = "unknown"


class PaymentHistory(BaseModel):
    """Repayment track record as printed for one account."""

    total_months_reported: int | None = Field(None, ge=0)
    delayed_payments: int | None = Field(None, ge=0)
    on_time_payments: int | None = Field(None, ge=0)
    highest_delay_days: int | None = Field(None, ge=0)


class CreditAccount(BaseModel):
    """A single credit account extracted from a bureau report.

    All money fields are in rupees as printed on the report (not minor
    units). Dates are ISO ``YYYY-MM-DD`` strings.
    """

    account_id: str = Field(..., description="Unique within one parse call")
    account_type: AccountType = Field(default=AccountType.UNKNOWN)
    account_sub_type: AccountSubType | None = None
    bank_name: str = Field(..., description="Normalized lender name")
    account_number: str = Field(..., description="Masked/partial account number")
    account_status: AccountStatus = Field(default=AccountStatus.UNKNOWN)

    # Financial details
    credit_limit: float | None = Field(None, ge=0)
    current_balance: float | None = Field(None, ge=0)
    outstanding_amount: float | None = Field(None, ge=0)
    available_credit: float | None = Field(None, ge=0)
    minimum_amount_due: float | None = Field(None, ge=0)
    overdue_amount: float | None = Field(None, ge=0)

    # Interest and charges
    interest_rate: float | None = Field(None, ge=0, description="Percent")
    annual_fee: float | None = Field(None, ge=0)
    late_payment_charges: float | None = Field(None, ge=0)

    # Dates
    account_open_date: str | None = None
    last_payment_date: str | None = None
    next_due_date: str | None = None
    last_reported_date: str | None = None

    payment_history: PaymentHistory | None = None

    # Loan details
    tenure: int | None = Field(None, ge=0, description="Months")
    emi_amount: float | None = Field(None, ge=0)
    collateral: str | None = None
    guarantor: str | None = None

    # Metadata
    confidence_score: float = Field(default=0.0, ge=0.0, le=1.0)
    raw_data: str = Field(default="", description="Source excerpt")
    extracted_fields: list[str] = Field(default_factory=list)

    @field_validator("raw_data")
    @classmethod
    def truncate_raw_data(cls, v: str) -> str:
        """Keep only the leading excerpt of the source text."""
        return v[:RAW_DATA_MAX_CHARS]


class CreditReportSummary(BaseModel):
    """Report-level metadata plus counts derived from the final account list."""

    report_date: str | None = None
    report_number: str | None = None
    credit_score: int | None = Field(None, ge=300, le=900)
    score_provider: str | None = None

    total_accounts: int = 0
    active_accounts: int = 0
    closed_accounts: int = 0
    credit_cards: int = 0
    loans: int = 0

    total_credit_limit: float | None = None
    total_outstanding: float | None = None
    total_available_credit: float | None = None

    recent_inquiries: int | None = None

    errors: list[str] = Field(default_factory=list)


class ParseResult(BaseModel):
    """Complete output of one parse call."""

    bureau: BureauKind = BureauKind.UNKNOWN
    summary: CreditReportSummary = Field(default_factory=CreditReportSummary)
    accounts: list[CreditAccount] = Field(default_factory=list)
