"""Build a CreditAccount from one account-sized span of report text."""

from credit_reports.parsers import fields
from credit_reports.schemas.internal import AccountStatus, AccountType, CreditAccount


def extract_account_from_section(
    section: str,
    account_id: str,
    default_status: AccountStatus = AccountStatus.ACTIVE,
    focus: str | None = None,
) -> CreditAccount | None:
    """Run every field extractor over ``section``.

    Returns None unless both a bank name and an account number are found.
    The returned account is scored but not yet validated; callers pass it
    through :func:`credit_reports.parsers.validation.is_valid_account`.

    Args:
        section: Text believed to describe a single account
        account_id: Identifier to assign (unique within the parse call)
        default_status: Status used when the text does not state one
        focus: Line inside ``section`` that anchors the account. Each field
            is read from it first and from the whole section only when the
            line does not carry it.
    """
    extracted_fields: list[str] = []

    def found(name: str, value):
        if value is not None:
            extracted_fields.append(name)
        return value

    def read(name: str, extractor):
        value = extractor(focus) if focus else None
        if value is None:
            value = extractor(section)
        return found(name, value)

    bank_name = read("bank_name", fields.extract_bank_name)
    account_number = read("account_number", fields.extract_account_number)
    if not bank_name or not account_number:
        return None

    account_type, account_sub_type = fields.determine_account_type(focus or "")
    if account_type == AccountType.UNKNOWN:
        account_type, account_sub_type = fields.determine_account_type(section)
    if account_type != AccountType.UNKNOWN:
        extracted_fields.append("account_type")
    account_status = read("account_status", fields.extract_account_status)

    credit_limit = read("credit_limit", fields.extract_credit_limit)
    current_balance = read("current_balance", fields.extract_current_balance)
    outstanding_amount = read("outstanding_amount", fields.extract_outstanding_amount)
    overdue_amount = read("overdue_amount", fields.extract_overdue_amount)
    minimum_amount_due = read("minimum_amount_due", fields.extract_minimum_amount_due)

    interest_rate = read("interest_rate", fields.extract_interest_rate)
    annual_fee = read("annual_fee", fields.extract_annual_fee)
    late_payment_charges = read("late_payment_charges", fields.extract_late_payment_charges)

    account_open_date = read("account_open_date", fields.extract_account_open_date)
    last_payment_date = read("last_payment_date", fields.extract_last_payment_date)
    next_due_date = read("next_due_date", fields.extract_next_due_date)
    last_reported_date = read("last_reported_date", fields.extract_last_reported_date)

    tenure = read("tenure", fields.extract_tenure)
    emi_amount = read("emi_amount", fields.extract_emi_amount)
    collateral = read("collateral", fields.extract_collateral)
    guarantor = read("guarantor", fields.extract_guarantor)
    payment_history = read("payment_history", fields.extract_payment_history)

    available_credit = None
    if credit_limit is not None and outstanding_amount is not None:
        available_credit = max(0.0, credit_limit - outstanding_amount)

    account = CreditAccount(
        account_id=account_id,
        account_type=account_type,
        account_sub_type=account_sub_type,
        bank_name=fields.normalize_bank_name(bank_name),
        account_number=account_number,
        account_status=account_status or default_status,
        credit_limit=credit_limit,
        current_balance=current_balance,
        outstanding_amount=outstanding_amount,
        available_credit=available_credit,
        minimum_amount_due=minimum_amount_due,
        overdue_amount=overdue_amount,
        interest_rate=interest_rate,
        annual_fee=annual_fee,
        late_payment_charges=late_payment_charges,
        account_open_date=account_open_date,
        last_payment_date=last_payment_date,
        next_due_date=next_due_date,
        last_reported_date=last_reported_date,
        payment_history=payment_history,
        tenure=tenure,
        emi_amount=emi_amount,
        collateral=collateral,
        guarantor=guarantor,
        raw_data=section.strip(),
        extracted_fields=extracted_fields,
    )
    account.confidence_score = fields.calculate_confidence_score(account)
    return account
