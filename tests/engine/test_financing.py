from decimal import Decimal

import pytest

from dealmath.engine.financing import (
    calculate_closing_costs,
    get_brrrr_financing_defaults,
    get_closing_costs_for_financing_type,
    get_simple_financing_defaults,
    get_strategy_interest_rate,
    validate_financing_params,
)
from dealmath.engine.normalize import InputContractError
from dealmath.models.deal import FinancingType, LoanType, Strategy


class TestSimpleFinancingDefaults:
    def test_flip_is_hard_money(self):
        d = get_simple_financing_defaults(Strategy.FLIP)
        assert d.financing_type == FinancingType.HARD_MONEY
        assert d.loan_type == LoanType.HARD_MONEY
        assert d.down_payment_percent == Decimal("10")
        assert d.interest_rate == Decimal("10.45")
        assert d.loan_term_years == 1
        assert d.lender_points_percent == Decimal("2.5")
        assert d.total_closing_costs_percent == Decimal("3")

    def test_rental_is_conventional(self):
        d = get_simple_financing_defaults("Buy & Hold")
        assert d.financing_type == FinancingType.CONVENTIONAL
        assert d.down_payment_percent == Decimal("25")
        assert d.loan_term_years == 30

    def test_house_hack_is_fha(self):
        d = get_simple_financing_defaults(Strategy.HOUSE_HACK)
        assert d.financing_type == FinancingType.FHA
        assert d.down_payment_percent == Decimal("3.5")
        assert d.mortgage_insurance

    def test_commercial(self):
        d = get_simple_financing_defaults(Strategy.COMMERCIAL)
        assert d.financing_type == FinancingType.PORTFOLIO
        assert d.loan_term_years == 25

    def test_every_strategy_has_a_row(self):
        for strategy in Strategy:
            assert get_simple_financing_defaults(strategy).loan_term_years > 0

    def test_unknown_strategy_raises(self):
        with pytest.raises(InputContractError):
            get_simple_financing_defaults("timeshare")

    def test_brrrr_refinance_terms(self):
        d = get_brrrr_financing_defaults()
        assert d.acquisition.financing_type == FinancingType.HARD_MONEY
        assert d.refinance.ltv == Decimal("0.75")
        assert d.refinance.interest_rate == Decimal("7.5")
        assert d.refinance.loan_term_years == 30


class TestStrategyInterestRate:
    @pytest.mark.parametrize("label", [s.value for s in Strategy] + ["Fix & Flip", "unknown"])
    def test_default_within_band(self, label):
        band = get_strategy_interest_rate(label)
        assert band.min <= band.default <= band.max

    def test_five_units_is_commercial(self):
        band = get_strategy_interest_rate("rental", units=5)
        assert band.default == Decimal("8.0")

    def test_commercial_property_type(self):
        band = get_strategy_interest_rate("buy-and-hold", property_type="Commercial Retail")
        assert band.default == Decimal("8.0")

    def test_small_multifamily(self):
        band = get_strategy_interest_rate("rental", property_type="Duplex")
        assert band.min == Decimal("7.25")
        assert get_strategy_interest_rate("rental", units=3).min == Decimal("7.25")

    def test_flip_on_duplex_keeps_flip_band(self):
        band = get_strategy_interest_rate("flip", units=2)
        assert band.default == Decimal("11.0")

    def test_string_unit_count(self):
        assert get_strategy_interest_rate("rental", units="6").default == Decimal("8.0")
        assert get_strategy_interest_rate("rental", units="3 units").min == Decimal("7.25")
        assert get_strategy_interest_rate("rental", units="n/a").default == Decimal("7.5")

    def test_unknown_label_gets_generic_band(self):
        band = get_strategy_interest_rate("timeshare")
        assert band.default == Decimal("7.75")
        assert band.max == Decimal("8.5")


class TestClosingCosts:
    def test_breakdown(self):
        c = calculate_closing_costs(Decimal("200000"), Decimal("2.5"), Decimal("0.5"))
        assert c.lender_points == Decimal("5000")
        assert c.other_costs == Decimal("1000")
        assert c.total == Decimal("6000")
        assert c.total_percent == Decimal("3")

    def test_total_is_sum(self):
        c = calculate_closing_costs("$333,333", "1.25%", "2.1")
        # Components are rounded separately
        assert abs(c.total - (c.lender_points + c.other_costs)) <= 1
        assert c.total == Decimal("11167")

    def test_by_financing_type(self):
        c = get_closing_costs_for_financing_type(Decimal("100000"), FinancingType.FHA)
        assert c.lender_points == Decimal("1000")
        assert c.other_costs == Decimal("4000")

    def test_points_override(self):
        c = get_closing_costs_for_financing_type(
            Decimal("100000"), FinancingType.CONVENTIONAL, points_override=Decimal("0")
        )
        assert c.lender_points == Decimal("0")
        assert c.other_costs == Decimal("2000")


class TestValidateFinancingParams:
    def test_fha_minimum(self):
        warnings = validate_financing_params(Strategy.HOUSE_HACK, 3, 6.5, 30)
        assert any("3.5%" in w for w in warnings)

    def test_high_rate(self):
        warnings = validate_financing_params(Strategy.RENTAL, 25, 16, 30)
        assert any("unusually high" in w for w in warnings)

    def test_long_flip_term(self):
        warnings = validate_financing_params(Strategy.FLIP, 10, 10.45, 5)
        assert any("6-18 months" in w for w in warnings)

    def test_clean(self):
        assert validate_financing_params(Strategy.RENTAL, 25, 7.5, 30) == []
