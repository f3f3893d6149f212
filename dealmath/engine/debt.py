"""Loan payment and amortization schedule computation.

Pure functions: Decimal in, dataclass out. No I/O.
Rates are whole-number percents (7 means 7%).
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from dealmath.models.deal import LoanTerms, LoanType

TWO_PLACES = Decimal("0.01")
WHOLE = Decimal("1")

DEFAULT_TERM_YEARS: dict[LoanType, int] = {
    LoanType.CONVENTIONAL: 30,
    LoanType.HARD_MONEY: 1,
}


@dataclass(frozen=True)
class AmortizationPayment:
    period: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal


@dataclass(frozen=True)
class AmortizationSchedule:
    payments: list[AmortizationPayment]
    monthly_payment: Decimal
    total_interest: Decimal
    total_principal: Decimal


def _monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    return Decimal(annual_rate_percent) / 100 / 12


def _amortizing_payment(principal: Decimal, annual_rate_percent: Decimal, term_years) -> Decimal:
    n = max(int(Decimal(term_years) * 12), 1)
    r = _monthly_rate(annual_rate_percent)
    if r <= 0:
        return principal / n
    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** n
    return principal * (r * factor) / (factor - 1)


def monthly_payment(principal: Decimal, annual_rate_percent: Decimal, term_years: int) -> Decimal:
    """Fixed monthly payment of a fully amortizing loan, to the cent."""
    if principal <= 0:
        return Decimal("0")
    return _amortizing_payment(principal, annual_rate_percent, term_years).quantize(
        TWO_PLACES, ROUND_HALF_UP
    )


def calculate_monthly_mortgage(
    principal: Decimal,
    annual_rate_percent: Decimal,
    term_years,
    loan_type: LoanType = LoanType.CONVENTIONAL,
    rehab_amount: Decimal = Decimal("0"),
) -> Decimal:
    """Monthly payment rounded to the whole currency unit.

    Conventional loans amortize over the term. Hard money loans are
    interest-only on principal plus the rehab draw, which is treated as fully
    drawn for the whole term. A non-positive term falls back to the loan
    type's default term.
    """
    if Decimal(term_years) <= 0:
        term_years = DEFAULT_TERM_YEARS[loan_type]

    if loan_type == LoanType.HARD_MONEY:
        balance = principal + max(rehab_amount, Decimal("0"))
        if balance <= 0:
            return Decimal("0")
        return (balance * _monthly_rate(annual_rate_percent)).quantize(WHOLE, ROUND_HALF_UP)

    if principal <= 0:
        return Decimal("0")
    return _amortizing_payment(principal, annual_rate_percent, term_years).quantize(
        WHOLE, ROUND_HALF_UP
    )


def payment_for_terms(
    principal: Decimal, terms: LoanTerms, rehab_amount: Decimal = Decimal("0")
) -> Decimal:
    """Whole-unit monthly payment for a loan described by LoanTerms."""
    return calculate_monthly_mortgage(
        principal, terms.interest_rate, terms.term_years, terms.loan_type, rehab_amount
    )


def amortization_schedule(
    principal: Decimal,
    annual_rate_percent: Decimal,
    term_years: int,
    hold_years: int | None = None,
) -> AmortizationSchedule:
    """Generate full or partial amortization schedule.

    Args:
        principal: Loan amount
        annual_rate_percent: Annual interest rate (e.g. 7 for 7%)
        term_years: Loan term in years
        hold_years: If provided, only generate schedule for this many years
    """
    pmt = monthly_payment(principal, annual_rate_percent, term_years)
    r = _monthly_rate(annual_rate_percent)
    n_periods = min(hold_years or term_years, term_years) * 12

    payments: list[AmortizationPayment] = []
    balance = principal
    total_interest = Decimal("0")
    total_principal = Decimal("0")

    for period in range(1, n_periods + 1):
        interest = (balance * r).quantize(TWO_PLACES, ROUND_HALF_UP)
        principal_paid = pmt - interest

        # Final payment adjustment
        if principal_paid > balance:
            principal_paid = balance
            actual_payment = interest + principal_paid
        else:
            actual_payment = pmt

        balance -= principal_paid
        total_interest += interest
        total_principal += principal_paid

        payments.append(AmortizationPayment(
            period=period,
            payment=actual_payment,
            principal=principal_paid,
            interest=interest,
            balance=balance.quantize(TWO_PLACES, ROUND_HALF_UP),
        ))

    return AmortizationSchedule(
        payments=payments,
        monthly_payment=pmt,
        total_interest=total_interest,
        total_principal=total_principal,
    )


def yearly_debt_summary(schedule: AmortizationSchedule) -> list[dict[str, Decimal]]:
    """Aggregate amortization schedule by year.

    Returns list of dicts with keys: year, principal, interest, debt_service, ending_balance
    """
    yearly: list[dict[str, Decimal]] = []
    year_principal = Decimal("0")
    year_interest = Decimal("0")
    year_debt_service = Decimal("0")

    for p in schedule.payments:
        year_principal += p.principal
        year_interest += p.interest
        year_debt_service += p.payment

        if p.period % 12 == 0 or p.period == len(schedule.payments):
            year_num = (p.period - 1) // 12 + 1
            yearly.append({
                "year": Decimal(str(year_num)),
                "principal": year_principal,
                "interest": year_interest,
                "debt_service": year_debt_service,
                "ending_balance": p.balance,
            })
            year_principal = Decimal("0")
            year_interest = Decimal("0")
            year_debt_service = Decimal("0")

    return yearly
