from decimal import Decimal

from dealmath.engine.brrrr import calculate_brrrr
from dealmath.engine.flip import calculate_flip_returns
from dealmath.engine.rehab import calculate_rehab_costs
from dealmath.engine.report import (
    brrrr_key_metrics,
    brrrr_phase_lines,
    flip_lines,
    format_cash_on_cash,
    format_currency,
    format_percentage,
    format_rehab_cost,
)
from dealmath.models.rehab import RenovationLevel
from dealmath.models.results import CashOnCash


class TestFormatting:
    def test_currency_thousands(self):
        assert format_currency(Decimal("1234567.4")) == "$1,234,567"

    def test_negative_currency(self):
        assert format_currency(Decimal("-7500")) == "-$7,500"

    def test_percentage(self):
        assert format_percentage(Decimal("61.15")) == "61.2%"
        assert format_percentage(Decimal("5.3"), places=2) == "5.30%"

    def test_cash_on_cash(self):
        assert format_cash_on_cash(CashOnCash.positive_infinity()) == "INFINITE"
        assert format_cash_on_cash(CashOnCash.negative_infinity()) == "N/A"
        assert format_cash_on_cash(CashOnCash(Decimal("16.38"))) == "16.4%"

    def test_rehab_cost(self):
        assert format_rehab_cost(calculate_rehab_costs(0, RenovationLevel.NONE)) == "No renovation needed"
        text = format_rehab_cost(calculate_rehab_costs(1500, RenovationLevel.MEDIUM))
        assert text == "$71,250 (range $52,500 - $90,000, medium)"


class TestResultLines:
    def test_flip_lines(self, canonical_flip, assumptions):
        lines = dict(flip_lines(calculate_flip_returns(canonical_flip, assumptions)))
        assert lines["Net Profit"] == "$15,900"
        assert lines["Rehab Holdback"] == "$40,000"

    def test_brrrr_lines(self, canonical_brrrr, assumptions):
        result = calculate_brrrr(canonical_brrrr, assumptions)
        phases = brrrr_phase_lines(result)
        refinance = dict(phases["Phase 2 - Refinance"])
        assert refinance["Refinance Amount (75% LTV)"] == "$172,500"
        metrics = dict(brrrr_key_metrics(result))
        assert metrics["BRRRR Rating"] == "GOOD"
