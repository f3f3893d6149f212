from dataclasses import replace
from decimal import Decimal

import pytest

from dealmath.engine.brrrr import calculate_brrrr, cash_on_cash, rate_deal
from dealmath.models.results import CashOnCash
from dealmath.models.units import WholePercent


class TestPhases:
    """Scenario C. Hard money carry at 10.45% on $120K is 1045/mo; with
    193.75 tax and insurance and 350 utilities and upkeep that is 1589/mo."""

    def test_phase1(self, canonical_brrrr, assumptions):
        p1 = calculate_brrrr(canonical_brrrr, assumptions).phase1
        assert p1.down_payment == Decimal("30000")
        assert p1.initial_loan_amount == Decimal("120000")
        assert p1.closing_costs == Decimal("4500")
        assert p1.renovation_months == 6
        assert p1.monthly_holding_costs == Decimal("1589")
        assert p1.total_holding_costs == Decimal("9534")
        assert p1.total_cash_invested == Decimal("74034")

    def test_phase2(self, canonical_brrrr, assumptions):
        p2 = calculate_brrrr(canonical_brrrr, assumptions).phase2
        assert p2.refinance_amount == Decimal("172500")
        assert p2.initial_loan_payoff == Decimal("120000")
        assert p2.cash_returned == Decimal("52500")
        assert p2.cash_left_in_deal == Decimal("21534")
        assert p2.capital_recovery_percent == Decimal("70.91")

    def test_phase3(self, canonical_brrrr, assumptions):
        p3 = calculate_brrrr(canonical_brrrr, assumptions).phase3
        assert p3.new_loan_payment == Decimal("1206")
        assert p3.monthly_operating_expenses == Decimal("700")
        assert p3.monthly_cash_flow == Decimal("294")
        assert p3.annual_cash_flow == Decimal("3528")
        assert p3.annual_noi == Decimal("18000")
        assert p3.cap_rate == Decimal("7.83")
        assert p3.cash_on_cash_return == CashOnCash(value=Decimal("16.38"))

    def test_summary(self, canonical_brrrr, assumptions):
        summary = calculate_brrrr(canonical_brrrr, assumptions).summary
        assert summary.total_roi == Decimal("94.74")
        assert summary.rating == "good"
        assert not summary.is_infinite_return
        assert summary.recommendation.startswith("Good BRRRR candidate")

    def test_ltv_as_percent_is_converted(self, canonical_brrrr, assumptions):
        r = calculate_brrrr(replace(canonical_brrrr, refinance_ltv=WholePercent("75")), assumptions)
        assert r.phase2.refinance_amount == Decimal("172500")

    def test_defaults(self, canonical_brrrr, assumptions):
        r = calculate_brrrr(replace(canonical_brrrr, refinance_ltv=None), assumptions)
        assert r.phase2.refinance_ltv == Decimal("0.75")


class TestCashOnCashSentinel:
    def test_full_recovery_is_positive_infinity(self, canonical_brrrr, assumptions):
        r = calculate_brrrr(
            replace(canonical_brrrr, arv=Decimal("300000"), monthly_rent=Decimal("3000")),
            assumptions,
        )
        assert r.phase2.cash_returned >= r.phase1.total_cash_invested
        assert r.phase3.annual_cash_flow >= 0
        assert r.phase2.cash_left_in_deal <= 0
        assert r.phase3.cash_on_cash_return.value == Decimal("Infinity")
        assert r.phase3.cash_on_cash_return.is_infinite
        assert r.summary.is_infinite_return
        assert r.summary.rating == "excellent"

    def test_full_recovery_negative_flow_is_negative_infinity(self, canonical_brrrr, assumptions):
        r = calculate_brrrr(replace(canonical_brrrr, arv=Decimal("300000")), assumptions)
        assert r.phase3.annual_cash_flow < 0
        assert r.phase3.cash_on_cash_return.value == Decimal("-Infinity")
        assert r.phase3.cash_on_cash_return.direction == "negative"
        assert not r.summary.is_infinite_return

    def test_zero_cash_flow_counts_as_positive(self):
        assert cash_on_cash(Decimal("0"), Decimal("0")) == CashOnCash.positive_infinity()

    def test_finite(self):
        coc = cash_on_cash(Decimal("1200"), Decimal("10000"))
        assert coc.value == Decimal("12.00")
        assert coc.finite_value == Decimal("12.00")
        assert coc.direction is None


class TestRating:
    @pytest.mark.parametrize("recovery, rating", [
        (Decimal("120"), "excellent"),
        (Decimal("80"), "excellent"),
        (Decimal("65"), "good"),
        (Decimal("40"), "marginal"),
        (Decimal("39.99"), "poor"),
        (Decimal("-10"), "poor"),
    ])
    def test_thresholds(self, recovery, rating):
        assert rate_deal(recovery)[0] == rating


class TestTimeline:
    def test_five_years_after_initial(self, canonical_brrrr, assumptions):
        timeline = calculate_brrrr(canonical_brrrr, assumptions).timeline
        assert [t.year for t in timeline] == [0, 1, 2, 3, 4, 5]
        assert timeline[0].cash_flow == Decimal("-74034")
        assert all(t.description for t in timeline)

    def test_cumulative_is_running_sum(self, canonical_brrrr, assumptions):
        timeline = calculate_brrrr(canonical_brrrr, assumptions).timeline
        running = Decimal("0")
        for entry in timeline:
            running += entry.cash_flow
            assert entry.cumulative_return == running

    def test_year_one_includes_cash_out(self, canonical_brrrr, assumptions):
        timeline = calculate_brrrr(canonical_brrrr, assumptions).timeline
        assert timeline[1].cash_flow > Decimal("52500")

    def test_rent_growth(self, canonical_brrrr, assumptions):
        flows = [t.cash_flow for t in calculate_brrrr(canonical_brrrr, assumptions).timeline[2:]]
        assert flows == sorted(flows)
        assert flows[0] < flows[-1]


class TestBRRRRValidation:
    def test_negative_cash_returned_is_warning(self, canonical_brrrr, assumptions):
        r = calculate_brrrr(replace(canonical_brrrr, arv=Decimal("150000")), assumptions)
        assert r.phase2.cash_returned == Decimal("-7500")
        assert r.validation.is_valid
        assert any("does not fully pay off" in w for w in r.validation.warnings)

    def test_ltv_above_lender_ceiling_warns_not_clamped(self, canonical_brrrr, assumptions):
        r = calculate_brrrr(replace(canonical_brrrr, refinance_ltv="0.85"), assumptions)
        assert r.phase2.refinance_amount == Decimal("195500")
        assert r.validation.is_valid
        assert any("lender ceiling" in w for w in r.validation.warnings)

    def test_ltv_above_one_is_error(self, canonical_brrrr, assumptions):
        r = calculate_brrrr(replace(canonical_brrrr, refinance_ltv=Decimal("1.2")), assumptions)
        assert not r.validation.is_valid

    def test_down_payment_above_100_is_error(self, canonical_brrrr, assumptions):
        r = calculate_brrrr(replace(canonical_brrrr, down_payment_percent=150), assumptions)
        assert r.phase1.initial_loan_amount == Decimal("-75000")
        assert not r.validation.is_valid
        assert any("Down payment" in e for e in r.validation.errors)

    def test_zero_price_is_error(self, canonical_brrrr, assumptions):
        r = calculate_brrrr(replace(canonical_brrrr, purchase_price=None), assumptions)
        assert not r.validation.is_valid

    def test_idempotent(self, canonical_brrrr, assumptions):
        assert calculate_brrrr(canonical_brrrr, assumptions) == calculate_brrrr(
            canonical_brrrr, assumptions
        )
