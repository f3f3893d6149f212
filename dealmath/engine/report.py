"""Text rendering of calculator results.

Used by the CLI and by anything embedding results in plain text. All money
is shown with thousands separators and no cents.
"""

from decimal import Decimal

from dealmath.models.arv import ARVResult
from dealmath.models.rehab import RehabEstimate
from dealmath.models.results import BRRRRResult, CashOnCash, FlipResult, RentalResult


def format_currency(value) -> str:
    amount = Decimal(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.0f}"


def format_percentage(value, places: int = 1) -> str:
    return f"{Decimal(value):.{places}f}%"


def format_cash_on_cash(coc: CashOnCash) -> str:
    if coc.direction == "positive":
        return "INFINITE"
    if coc.direction == "negative":
        return "N/A"
    return format_percentage(coc.value)


def format_rehab_cost(estimate: RehabEstimate) -> str:
    if estimate.average <= 0:
        return "No renovation needed"
    return (
        f"{format_currency(estimate.average)} "
        f"(range {format_currency(estimate.low)} - {format_currency(estimate.high)}, "
        f"{estimate.level.value})"
    )


def format_arv_details(result: ARVResult) -> str:
    return (
        f"ARV {format_currency(result.value)} "
        f"[{result.method.value}, {result.confidence.value} confidence] {result.details}"
    )


def flip_lines(result: FlipResult) -> list[tuple[str, str]]:
    lines = [
        ("Down Payment", format_currency(result.down_payment)),
        ("Acquisition Loan", format_currency(result.acquisition_loan)),
    ]
    if result.rehab_holdback is not None:
        lines.append(("Rehab Holdback", format_currency(result.rehab_holdback)))
    lines += [
        ("Closing Costs", format_currency(result.closing_costs.total)),
        ("Holding Costs", format_currency(result.holding_costs)),
        ("Selling Costs", format_currency(result.selling_costs)),
        ("Cash Required", format_currency(result.cash_required)),
        ("Total Project Cost", format_currency(result.total_project_cost)),
        ("Net Profit", format_currency(result.net_profit)),
        ("ROI (on cash)", format_percentage(result.roi)),
        ("Profit Margin", format_percentage(result.profit_margin)),
    ]
    return lines


def brrrr_phase_lines(result: BRRRRResult) -> dict[str, list[tuple[str, str]]]:
    p1, p2, p3 = result.phase1, result.phase2, result.phase3
    ltv_pct = Decimal(p2.refinance_ltv) * 100
    return {
        "Phase 1 - Buy & Rehab": [
            ("Purchase Price", format_currency(p1.purchase_price)),
            ("Down Payment", format_currency(p1.down_payment)),
            ("Renovation Budget", format_currency(p1.renovation_costs)),
            ("Monthly Holding Costs", format_currency(p1.monthly_holding_costs)),
            ("Total Cash Invested", format_currency(p1.total_cash_invested)),
        ],
        "Phase 2 - Refinance": [
            ("After Repair Value", format_currency(p2.arv)),
            (f"Refinance Amount ({ltv_pct.normalize():f}% LTV)", format_currency(p2.refinance_amount)),
            ("Cash Returned", format_currency(p2.cash_returned)),
            ("Cash Left in Deal", format_currency(p2.cash_left_in_deal)),
            ("Capital Recovery", format_percentage(p2.capital_recovery_percent)),
        ],
        "Phase 3 - Rent": [
            ("Monthly Rent", format_currency(p3.monthly_rent)),
            ("New Loan Payment", format_currency(p3.new_loan_payment)),
            ("Operating Expenses", format_currency(p3.monthly_operating_expenses)),
            ("Monthly Cash Flow", format_currency(p3.monthly_cash_flow)),
            ("Annual Cash Flow", format_currency(p3.annual_cash_flow)),
        ],
    }


def brrrr_key_metrics(result: BRRRRResult) -> list[tuple[str, str]]:
    return [
        ("Cash-on-Cash Return", format_cash_on_cash(result.phase3.cash_on_cash_return)),
        ("Capital Recovery", format_percentage(result.phase2.capital_recovery_percent)),
        ("5-Year Total ROI", format_percentage(result.summary.total_roi)),
        ("BRRRR Rating", result.summary.rating.upper()),
    ]


def rental_lines(result: RentalResult) -> list[tuple[str, str]]:
    lines = [
        ("Loan Amount", format_currency(result.loan_amount)),
        ("Down Payment", format_currency(result.down_payment)),
        ("Monthly Mortgage", format_currency(result.monthly_mortgage)),
        ("Monthly Rent", format_currency(result.total_monthly_rent)),
        ("Monthly Expenses", format_currency(result.monthly_expenses)),
        ("Monthly Cash Flow", format_currency(result.monthly_cash_flow)),
        ("Annual NOI", format_currency(result.annual_noi)),
        ("Cap Rate", format_percentage(result.cap_rate)),
        ("Cash-on-Cash", format_cash_on_cash(result.cash_on_cash_return)),
        ("Total Investment", format_currency(result.total_investment)),
    ]
    if result.effective_mortgage is not None:
        lines.append(("Effective Mortgage", format_currency(result.effective_mortgage)))
    return lines
