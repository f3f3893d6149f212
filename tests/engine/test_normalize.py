from decimal import Decimal

import pytest

from dealmath.engine.normalize import (
    InputContractError,
    parse_fraction,
    parse_integer,
    parse_loan_type,
    parse_percentage,
    parse_price,
    parse_renovation_level,
    parse_strategy,
)
from dealmath.models.deal import LoanType, Strategy
from dealmath.models.rehab import RenovationLevel
from dealmath.models.units import UnitFraction, WholePercent


class TestParsePrice:
    def test_currency_text(self):
        assert parse_price("$1,250,000") == Decimal("1250000")

    def test_float(self):
        assert parse_price(249999.995) == Decimal("250000.00")

    @pytest.mark.parametrize("value", [None, "", "abc", -5, "-$100", float("nan"), float("inf"), True])
    def test_unusable_is_zero(self, value):
        assert parse_price(value) == Decimal("0")


class TestParsePercentage:
    def test_trailing_percent_sign(self):
        assert parse_percentage("7.5%") == Decimal("7.5")

    def test_bare_small_number_stays_percent(self):
        """0.5 is half a percent, never 50%."""
        assert parse_percentage(0.5) == Decimal("0.5")

    def test_returns_whole_percent(self):
        assert isinstance(parse_percentage("7"), WholePercent)

    def test_fraction_converted(self):
        assert parse_percentage(UnitFraction("0.075")) == Decimal("7.5")

    def test_malformed_is_zero(self):
        assert parse_percentage("n/a") == Decimal("0")


class TestParseFraction:
    def test_plain(self):
        value = parse_fraction("0.75")
        assert isinstance(value, UnitFraction)
        assert value == Decimal("0.75")

    def test_percent_converted(self):
        assert parse_fraction(WholePercent("75")) == Decimal("0.75")


class TestUnitTypes:
    def test_cannot_build_percent_from_fraction(self):
        with pytest.raises(TypeError):
            WholePercent(UnitFraction("0.5"))

    def test_cannot_build_fraction_from_percent(self):
        with pytest.raises(TypeError):
            UnitFraction(WholePercent("50"))

    def test_round_trip(self):
        assert WholePercent("80").to_fraction().to_percent() == Decimal("80")

    def test_of(self):
        assert WholePercent("8").of(Decimal("1000")) == Decimal("80")


class TestParseInteger:
    def test_truncates(self):
        assert parse_integer("6.9") == 6

    def test_negative_uses_fallback(self):
        assert parse_integer(-3, fallback=1) == 1

    def test_malformed_default_zero(self):
        assert parse_integer("six") == 0


class TestLabels:
    @pytest.mark.parametrize("label, expected", [
        ("Fix & Flip", Strategy.FLIP),
        ("flip", Strategy.FLIP),
        ("BRRRR", Strategy.BRRRR),
        ("buy-and-hold", Strategy.BUY_AND_HOLD),
        ("Buy & Hold", Strategy.BUY_AND_HOLD),
        ("House Hack", Strategy.HOUSE_HACK),
        ("airbnb", Strategy.SHORT_TERM_RENTAL),
        (Strategy.COMMERCIAL, Strategy.COMMERCIAL),
    ])
    def test_strategy_labels(self, label, expected):
        assert parse_strategy(label) == expected

    def test_loan_type_camel_case(self):
        assert parse_loan_type("hardMoney") == LoanType.HARD_MONEY
        assert parse_loan_type("hard_money") == LoanType.HARD_MONEY

    def test_renovation_aliases(self):
        assert parse_renovation_level("cosmetic") == RenovationLevel.LIGHT
        assert parse_renovation_level("full_gut") == RenovationLevel.GUT

    def test_unknown_label_names_field(self):
        with pytest.raises(InputContractError) as exc:
            parse_strategy("timeshare")
        assert exc.value.field == "strategy"

    def test_contract_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_loan_type(42)
