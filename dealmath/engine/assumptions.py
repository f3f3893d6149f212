"""Immutable snapshot of the configurable cost proxies used by the calculators."""

from dataclasses import dataclass
from decimal import Decimal

from dealmath.config import Settings, settings
from dealmath.models.units import UnitFraction, WholePercent


@dataclass(frozen=True)
class CostAssumptions:
    property_tax_rate: WholePercent = WholePercent("1.2")
    insurance_rate: WholePercent = WholePercent("0.35")
    maintenance_pct: WholePercent = WholePercent("10")
    management_pct: WholePercent = WholePercent("8")
    vacancy_pct: WholePercent = WholePercent("5")
    selling_costs_pct: WholePercent = WholePercent("8")
    brrrr_closing_costs_pct: WholePercent = WholePercent("3")
    total_closing_costs_pct: WholePercent = WholePercent("3")
    min_other_closing_costs_pct: WholePercent = WholePercent("0.5")
    monthly_utilities: Decimal = Decimal("200")
    monthly_upkeep: Decimal = Decimal("150")
    annual_rent_growth: WholePercent = WholePercent("3")
    annual_appreciation: WholePercent = WholePercent("3")
    max_refinance_ltv: UnitFraction = UnitFraction("0.80")

    @classmethod
    def from_settings(cls, source: Settings = settings) -> "CostAssumptions":
        return cls(
            property_tax_rate=WholePercent(source.property_tax_rate_pct),
            insurance_rate=WholePercent(source.insurance_rate_pct),
            maintenance_pct=WholePercent(source.maintenance_pct),
            management_pct=WholePercent(source.management_pct),
            vacancy_pct=WholePercent(source.vacancy_pct),
            selling_costs_pct=WholePercent(source.selling_costs_pct),
            brrrr_closing_costs_pct=WholePercent(source.brrrr_closing_costs_pct),
            total_closing_costs_pct=WholePercent(source.total_closing_costs_pct),
            min_other_closing_costs_pct=WholePercent(source.min_other_closing_costs_pct),
            monthly_utilities=source.monthly_utilities,
            monthly_upkeep=source.monthly_upkeep,
            annual_rent_growth=WholePercent(source.annual_rent_growth_pct),
            annual_appreciation=WholePercent(source.annual_appreciation_pct),
            max_refinance_ltv=UnitFraction(source.max_refinance_ltv),
        )

    def monthly_tax_and_insurance(self, property_value: Decimal) -> Decimal:
        """Property tax plus insurance proxies, per month."""
        annual = self.property_tax_rate.of(property_value) + self.insurance_rate.of(property_value)
        return annual / 12

    def percent_of_rent_expenses(self, monthly_rent: Decimal) -> Decimal:
        """Maintenance, management and vacancy allowances, per month."""
        return (
            self.maintenance_pct.of(monthly_rent)
            + self.management_pct.of(monthly_rent)
            + self.vacancy_pct.of(monthly_rent)
        )


DEFAULT_ASSUMPTIONS = CostAssumptions.from_settings()
